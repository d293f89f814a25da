"""
Goal-driven actuator handler for GrADyS-SIM NG.

Every registered node is treated as an actuator with three independently
controlled degrees of freedom (x, y, z). Protocols give it a goal position
and target speeds; on every tick the handler asks the rate controller for
the next velocity of each axis and integrates the node position.

Author: Laércio Lucchesi
Date: October 18, 2026
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np
from gradysim.simulator.event import EventLoop
from gradysim.simulator.node import Node
from gradysim.simulator.handler.interface import INodeHandler
from gradysim.protocol.messages.telemetry import Telemetry

from .config import ActuatorMotionConfiguration, MotionParams
from .conversions import IDENTITY_QUATERNION, TupleMathBackend, convert_pose
from .core import compute_desired_rate_of_change, integrate_position, move_toward
from .entity import EntityHandle, EntityName, SimEntity
from .messages import ResultStatus, make_response
from .naming import sanitize_node_name

_logger = logging.getLogger(__name__)


@dataclass
class ActuatorGoal:
    """Goal currently pursued by one actuator."""
    position: Tuple[float, float, float]
    speed_target_now: float
    speed_target_dest: float = 0.0
    request_guid: str = ""
    completed: bool = False


class ActuatorMotionHandler(INodeHandler):
    """
    Goal-driven actuator handler for GrADyS-SIM NG.

    Usage:
        config = ActuatorMotionConfiguration(update_rate=0.1)
        handler = ActuatorMotionHandler(config)

        # In your protocol:
        handler.set_goal(EntityHandle(node_id), (5.0, 0.0, 0.0), speed_target_now=0.2)

    Results (acknowledged, completed, aborted) are delivered to the node's
    protocol as JSON packets built with `make_response`.
    """

    def __init__(self, config: ActuatorMotionConfiguration):
        self._config = config
        self._loop: EventLoop = None
        self._nodes: Dict[int, Node] = {}
        self._math = TupleMathBackend()

        self._names: Dict[int, str] = {}
        self._ids_by_name: Dict[str, int] = {}
        self._motion: Dict[int, MotionParams] = {}
        self._current_velocity: Dict[int, Tuple[float, float, float]] = {}
        self._goals: Dict[int, ActuatorGoal] = {}

        self._update_counter: Dict[int, int] = {}

    def get_label(self) -> str:
        return "ActuatorMotionHandler"

    def register_node(self, node: Node):
        node_id = node.id
        name = sanitize_node_name(self._config.node_name_format.format(id=node_id))
        if name in self._ids_by_name and self._ids_by_name[name] != node_id:
            raise ValueError(f"Node name {name!r} is already used by node {self._ids_by_name[name]}")

        self._nodes[node_id] = node
        self._names[node_id] = name
        self._ids_by_name[name] = node_id
        self._motion[node_id] = self._config.motion
        self._current_velocity[node_id] = (0.0, 0.0, 0.0)
        self._update_counter[node_id] = 0
        _logger.debug("Registered actuator %s as %r", node_id, name)

    def inject(self, event_loop: EventLoop):
        self._loop = event_loop

    def initialize(self):
        if self._nodes:
            self._loop.schedule_event(
                self._loop.current_time + self._config.update_rate,
                self._mobility_update,
            )

    def after_simulation_step(self, iteration: int, time: float):
        pass

    def finalize(self):
        pending = [node_id for node_id, goal in self._goals.items() if not goal.completed]
        if pending:
            _logger.info("Simulation finished with unfinished goals on actuators %s", pending)

    def resolve(self, entity: SimEntity) -> int:
        """Return the node id addressed by `entity`.

        Handles are node ids; names must equal a registered (already
        sanitized) node name exactly. Raises KeyError for unknown actuators.
        """
        if isinstance(entity, EntityHandle):
            node_id = entity.as_handle()
        elif isinstance(entity, EntityName):
            node_id = self._ids_by_name.get(entity.as_name())
        else:
            raise TypeError(f"Expected EntityHandle or EntityName, got {entity!r}")

        if node_id not in self._nodes:
            raise KeyError(f"Unknown actuator {entity!r}")
        return node_id

    def set_motion_params(self, entity: SimEntity, params: MotionParams) -> None:
        if not isinstance(params, MotionParams):
            raise ValueError("params must be a MotionParams instance")
        self._motion[self.resolve(entity)] = params

    def get_motion_params(self, node_id: int) -> Optional[MotionParams]:
        return self._motion.get(node_id)

    def set_goal(
        self,
        entity: SimEntity,
        goal_position: Tuple[float, float, float],
        speed_target_now: float,
        speed_target_dest: float = 0.0,
        request_guid: str = "",
    ) -> None:
        """
        Command an actuator toward `goal_position`.

        A previous unfinished goal is aborted. The new goal is acknowledged
        immediately and reported as completed once every axis sits inside
        the deadband (and, for a stop goal, the actuator is at rest).
        A completed pass-through goal (``speed_target_dest > 0``) is no
        longer steered toward: the actuator brakes to rest at a_max past the
        goal unless a new goal is set.

        Args:
            entity: Actuator to command.
            goal_position: Goal as (x, y, z).
            speed_target_now: Cruise speed while en route (>= 0).
            speed_target_dest: Speed to hold at the goal (>= 0, 0 to stop).
            request_guid: Identifier echoed back in the result messages.
        """
        node_id = self.resolve(entity)
        position = tuple(float(c) for c in goal_position)
        if len(position) != 3 or not all(math.isfinite(c) for c in position):
            raise ValueError(f"goal_position must be three finite numbers, got {goal_position!r}")
        for name, speed in (("speed_target_now", speed_target_now), ("speed_target_dest", speed_target_dest)):
            if not math.isfinite(speed) or speed < 0:
                raise ValueError(f"{name} must be finite and >= 0, got {speed!r}")

        previous = self._goals.get(node_id)
        if previous is not None and not previous.completed:
            self._emit_result(self._nodes[node_id], previous.request_guid, ResultStatus.ABORTED)

        self._goals[node_id] = ActuatorGoal(
            position=position,
            speed_target_now=float(speed_target_now),
            speed_target_dest=float(speed_target_dest),
            request_guid=request_guid,
        )
        _logger.debug(
            "Actuator %s: goal %s (now=%.3f, dest=%.3f, request=%r)",
            node_id, position, speed_target_now, speed_target_dest, request_guid,
        )
        self._emit_result(self._nodes[node_id], request_guid, ResultStatus.ACKNOWLEDGED)

    def clear_goal(self, entity: SimEntity) -> None:
        """Drop the current goal; the actuator brakes to rest at a_max."""
        node_id = self.resolve(entity)
        goal = self._goals.pop(node_id, None)
        if goal is not None and not goal.completed:
            self._emit_result(self._nodes[node_id], goal.request_guid, ResultStatus.ABORTED)

    def get_goal(self, node_id: int) -> Optional[ActuatorGoal]:
        return self._goals.get(node_id)

    def get_node_name(self, node_id: int) -> Optional[str]:
        return self._names.get(node_id)

    def get_node_velocity(self, node_id: int) -> Tuple[float, float, float] | None:
        return self._current_velocity.get(node_id)

    def get_node_position(self, node_id: int) -> Tuple[float, float, float] | None:
        node = self._nodes.get(node_id)
        return node.position if node is not None else None

    def get_node_transform(self, node_id: int) -> Optional[np.ndarray]:
        """Node pose as a (4, 4) rigid transform (nodes carry no rotation)."""
        node = self._nodes.get(node_id)
        if node is None:
            return None
        return convert_pose((node.position, IDENTITY_QUATERNION), self._math)

    def _mobility_update(self):
        """
        Perform one controller tick for all nodes.

        For each node, every axis gets its next velocity from the rate
        controller (or brakes to rest when there is no goal or a pass-through
        goal was already crossed), the position is
        integrated with that velocity, completion is checked and telemetry
        may be emitted. The next tick is scheduled at the end.
        """
        dt = self._config.update_rate

        for node_id, node in self._nodes.items():
            v_current = self._current_velocity[node_id]
            params = self._motion[node_id]
            goal = self._goals.get(node_id)

            if goal is None or (goal.completed and goal.speed_target_dest > 0):
                v_new = tuple(move_toward(v, 0.0, params.a_max * dt) for v in v_current)
            else:
                v_new = tuple(
                    compute_desired_rate_of_change(
                        target - current,
                        v,
                        goal.speed_target_now,
                        goal.speed_target_dest,
                        params,
                        dt,
                    )
                    for target, current, v in zip(goal.position, node.position, v_current)
                )

            # x_{k+1} = x_k + v_{k+1} * dt
            node.position = integrate_position(node.position, v_new, dt)
            self._current_velocity[node_id] = v_new

            if goal is not None and not goal.completed and self._goal_reached(node, v_new, goal, params):
                goal.completed = True
                _logger.debug("Actuator %s reached goal %s", node_id, goal.position)
                self._emit_result(node, goal.request_guid, ResultStatus.COMPLETED)

            self._update_counter[node_id] += 1
            if self._should_emit_telemetry(node_id):
                self._emit_telemetry(node)

        self._loop.schedule_event(
            self._loop.current_time + self._config.update_rate,
            self._mobility_update,
        )

    @staticmethod
    def _goal_reached(
        node: Node,
        velocity: Tuple[float, float, float],
        goal: ActuatorGoal,
        params: MotionParams,
    ) -> bool:
        for target, current in zip(goal.position, node.position):
            remaining = abs(target - current)
            if remaining != 0 and remaining >= params.dx_min:
                return False
        if goal.speed_target_dest > 0:
            return True
        return all(v == 0.0 for v in velocity)

    def _should_emit_telemetry(self, node_id: int) -> bool:
        if not self._config.send_telemetry:
            return False

        count = self._update_counter[node_id]
        return (count % self._config.telemetry_decimation) == 0

    def _emit_telemetry(self, node: Node):
        telemetry = Telemetry(current_position=node.position)

        def send_telemetry():
            node.protocol_encapsulator.handle_telemetry(telemetry)

        self._loop.schedule_event(
            self._loop.current_time,
            send_telemetry,
            f"Node {node.id} handle_telemetry",
        )

    def _emit_result(self, node: Node, request_guid: str, status: ResultStatus):
        response = make_response(
            int(status),
            self._loop.current_time,
            request_guid,
            self._names[node.id],
        )
        payload = response.to_json()

        def send_result():
            node.protocol_encapsulator.handle_packet(payload)

        self._loop.schedule_event(
            self._loop.current_time,
            send_result,
            f"Node {node.id} handle_packet",
        )
