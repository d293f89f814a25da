"""
Configuration dataclasses for actuator motion.

`MotionParams` carries the kinematic limits consumed by the rate controller.
`ActuatorMotionConfiguration` configures the simulation handler that drives
nodes with it.

Author: Laércio Lucchesi
Date: October 18, 2026
"""

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MotionParams:
    """
    Kinematic limits of one actuator.

    Attributes:
        v_max: Maximum speed magnitude (m/s or rad/s). Must be > 0.
        a_max: Hard acceleration limit (m/s²). Used for braking. Must be > 0.
        a_nom: Preferred, smooth acceleration (m/s²). 0 < a_nom <= a_max.
        dx_min: Stopping deadband (m). Below this remaining displacement the
            goal is considered reached. Must be >= 0.
    """
    v_max: float = 0.2
    a_max: float = 0.1
    a_nom: float = 0.08
    dx_min: float = 0.01

    def __post_init__(self):
        for name in ("v_max", "a_max", "a_nom", "dx_min"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value!r}")
        if self.v_max <= 0:
            raise ValueError("v_max must be > 0")
        if self.a_max <= 0:
            raise ValueError("a_max must be > 0")
        if self.a_nom <= 0:
            raise ValueError("a_nom must be > 0")
        if self.a_nom > self.a_max:
            raise ValueError("a_nom must be <= a_max")
        if self.dx_min < 0:
            raise ValueError("dx_min must be >= 0")


@dataclass
class ActuatorMotionConfiguration:
    """
    Configuration parameters for the ActuatorMotionHandler.

    Attributes:
        update_rate: Time interval (in seconds) between controller ticks.
            Typical: 0.01–0.1 s.
        motion: Default limits for every registered actuator. Individual
            nodes can be overridden with `set_motion_params`.
        send_telemetry: If True, emit Telemetry messages after position updates.
        telemetry_decimation: Emit telemetry every N updates (default: 1).
        node_name_format: Format string used to name nodes; `{id}` is the
            node id. The result is passed through `sanitize_node_name`.
    """
    update_rate: float
    motion: MotionParams = field(default_factory=MotionParams)
    send_telemetry: bool = True
    telemetry_decimation: int = 1
    node_name_format: str = "actuator_{id}"

    def __post_init__(self):
        if not math.isfinite(self.update_rate) or self.update_rate <= 0:
            raise ValueError("update_rate must be a finite number > 0")
        if not isinstance(self.motion, MotionParams):
            raise ValueError("motion must be a MotionParams instance")
        if self.telemetry_decimation < 1:
            raise ValueError("telemetry_decimation must be >= 1")
