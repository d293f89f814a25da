"""
Protocol that walks an actuator through a list of goals using
ActuatorMotionHandler.

Each goal is sent with `set_goal`; the next one is issued when the handler
reports the current goal as completed. Telemetry (time, position, velocity)
is kept in a DataFrame and written to CSV when the simulation ends.
"""

import logging
import os

import pandas as pd

from gradysim.protocol.interface import IProtocol
from gradysim.protocol.messages.telemetry import Telemetry

from actuator_motion import EntityHandle, ResultMessage, ResultStatus
from config_param import GOAL_CRUISE_SPEED, GOAL_WAYPOINTS, TELEMETRY_CSV


class ActuatorProtocol(IProtocol):
    """Protocol that commands goals through ActuatorMotionHandler."""

    def __init__(self):
        super().__init__()
        self._logger = logging.getLogger()
        self.node_id = None
        self.entity = None
        self.actuator_handler = None
        self.df = None
        self._goal_index = 0
        self._results = []

    def initialize(self):
        self.node_id = self.provider.get_id()
        self.entity = EntityHandle(self.node_id)

        handlers = getattr(self.provider, "handlers", {}) or {}
        self.actuator_handler = handlers.get("ActuatorMotionHandler")
        if self.actuator_handler is None:
            self._logger.warning("Node %s: ActuatorMotionHandler not available", self.node_id)
            return

        self.df = pd.DataFrame(columns=["node_id", "t", "x", "y", "z", "vx", "vy", "vz", "goal_index"])
        self._record()
        self._send_goal(0)

    def _send_goal(self, index: int):
        self._goal_index = index
        position, speed_dest = GOAL_WAYPOINTS[index]
        name = self.actuator_handler.get_node_name(self.node_id)
        self.actuator_handler.set_goal(
            self.entity,
            position,
            speed_target_now=GOAL_CRUISE_SPEED,
            speed_target_dest=speed_dest,
            request_guid=f"{name}-goal-{index}",
        )
        print(f"Node {self.node_id}: goal {index} -> {position} (dest speed {speed_dest:.2f} m/s)")

    def _record(self):
        pos = self.actuator_handler.get_node_position(self.node_id)
        vel = self.actuator_handler.get_node_velocity(self.node_id)
        if pos is None or vel is None:
            return
        t = self.provider.current_time()
        self.df.loc[len(self.df)] = [self.node_id, t, *pos, *vel, self._goal_index]

    def handle_timer(self, timer: str):
        pass

    def handle_packet(self, message: str):
        try:
            result = ResultMessage.from_json(message)
        except (ValueError, KeyError) as exc:
            self._logger.warning("Node %s: failed to decode result (%s): %r", self.node_id, exc, message)
            return

        self._results.append(result)
        self._logger.debug(
            "Node %s: status %s for %s at t=%.2f",
            self.node_id, result.status, result.request_guid, result.time.to_seconds(),
        )
        if result.status != ResultStatus.COMPLETED:
            return

        print(f"Node {self.node_id}: goal {self._goal_index} completed at t={result.time.to_seconds():.2f} s")
        if self._goal_index + 1 < len(GOAL_WAYPOINTS):
            self._send_goal(self._goal_index + 1)

    def handle_telemetry(self, telemetry: Telemetry) -> None:
        if self.actuator_handler is None or self.df is None:
            return
        self._record()

    def finish(self):
        if self.df is None or self.df.empty:
            return

        completed = sum(1 for r in self._results if r.status == ResultStatus.COMPLETED)
        final = self.df.iloc[-1]

        print()
        print("=" * 60)
        print("SIMULATION RESULTS")
        print("=" * 60)
        print(f"Node {self.node_id}")
        print(f"  Goals completed:  {completed}/{len(GOAL_WAYPOINTS)}")
        print(f"  Final position:   ({final['x']:.3f}, {final['y']:.3f}, {final['z']:.3f})")
        print(f"  Final velocity:   ({final['vx']:.3f}, {final['vy']:.3f}, {final['vz']:.3f})")
        print("=" * 60)

        script_dir = os.path.dirname(os.path.abspath(__file__))
        csv_path = os.path.join(script_dir, TELEMETRY_CSV)
        self.df.to_csv(csv_path, index=False)
        print(f"Telemetry saved: {csv_path}")
