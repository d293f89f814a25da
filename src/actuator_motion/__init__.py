"""Actuator motion building blocks.

This package contains the pure rate-of-change controller for simulated
actuators (bases, lifts, doors), the identity and message types used to
address and report on them, and a GrADyS-SIM NG handler that drives nodes
with the controller.

Author: Laércio Lucchesi
Date: October 18, 2026
"""

from .config import ActuatorMotionConfiguration, MotionParams
from .core import (
    compute_desired_rate_of_change,
    integrate_position,
    max_safe_speed,
    move_toward,
)
from .entity import (
    EntityHandle,
    EntityName,
    SimEntity,
    Simulator,
    WrongEntityVariantError,
)
from .messages import ResultMessage, ResultStatus, SimTime, make_response, simulation_now
from .naming import sanitize_node_name
from .handler import ActuatorGoal, ActuatorMotionHandler

__version__ = "0.1.0"

__all__ = [
    "ActuatorGoal",
    "ActuatorMotionConfiguration",
    "ActuatorMotionHandler",
    "EntityHandle",
    "EntityName",
    "MotionParams",
    "ResultMessage",
    "ResultStatus",
    "SimEntity",
    "SimTime",
    "Simulator",
    "WrongEntityVariantError",
    "compute_desired_rate_of_change",
    "integrate_position",
    "make_response",
    "max_safe_speed",
    "move_toward",
    "sanitize_node_name",
    "simulation_now",
]
