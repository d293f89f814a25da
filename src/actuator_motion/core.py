"""Pure rate-of-change controller for simulated actuators.

This module contains stateless mathematical operations for:
- Rate-limited velocity updates
- Braking lookahead (largest speed that still stops in time)
- Per-tick velocity command toward a goal (trapezoidal profile)
- Position integration

All functions operate on plain floats and tuples, making them easy to test
and reuse independently of the simulation framework. Every decision
(accelerate, cruise, brake, deadband) is recomputed from the arguments on
each call, so nothing has to be carried between ticks.

Author: Laércio Lucchesi
Date: October 18, 2026
"""

import math
from typing import Tuple

from .config import MotionParams


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")


def move_toward(value: float, target: float, max_delta: float) -> float:
    """Move `value` toward `target` by at most `max_delta`.

    Returns `target` exactly when it is within reach, so repeated calls settle
    on the target without residual drift.
    """
    delta = target - value
    if abs(delta) <= max_delta:
        return target
    return value + math.copysign(max_delta, delta)


def max_safe_speed(
    dist: float,
    speed_target_dest: float,
    a_max: float,
    dt: float,
) -> float:
    """Largest speed from which the goal can still be met at `speed_target_dest`.

    Discrete-time braking model: the speed returned now is travelled for one
    tick, then reduced by ``a_max * dt`` per tick until it would drop below
    `speed_target_dest`. The result is the largest starting speed whose total
    travel fits inside `dist`.

    Writing the speed as ``v = v_dest + m*delta + r`` (``delta = a_max*dt``,
    ``0 <= r <= delta``) the travel is ``dt*(m+1)*(v_dest + r + m*delta/2)``,
    which gives a closed form for ``m`` and ``r``.

    Args:
        dist: Remaining distance to the goal (>= 0).
        speed_target_dest: Speed to hold at the goal (>= 0).
        a_max: Braking deceleration (> 0).
        dt: Tick duration in seconds (> 0).

    Returns:
        The largest safe speed, never below `speed_target_dest`.
    """
    if dist <= 0:
        return speed_target_dest

    delta = a_max * dt
    c = speed_target_dest + 0.5 * delta
    disc = c * c - 2.0 * delta * (speed_target_dest - dist / dt)
    m = math.floor((-c + math.sqrt(max(disc, 0.0))) / delta)
    if m < 0:
        # Even one tick at the destination speed covers more than `dist`.
        return speed_target_dest

    r = dist / (dt * (m + 1)) - speed_target_dest - 0.5 * m * delta
    r = min(max(r, 0.0), delta)
    return speed_target_dest + m * delta + r


def compute_desired_rate_of_change(
    s_target: float,
    v_actual: float,
    speed_target_now: float,
    speed_target_dest: float,
    motion_params: MotionParams,
    dt: float,
) -> float:
    """Compute the velocity an actuator should adopt on this tick.

    Trapezoidal profile with braking lookahead:
    - Deadband (``|s_target| < dx_min`` or ``s_target == 0``): move toward
      ``dir * speed_target_dest`` at `a_max`.
    - Moving away from the goal: reverse toward ``dir * speed_target_now``
      at `a_max`.
    - Otherwise accelerate/cruise toward ``dir * speed_target_now`` at
      `a_nom`.
    - In both of the last two cases a velocity toward the goal above
      `max_safe_speed` is brought onto the safe speed at `a_max`.

    The change is bounded by ``a_max * dt`` and the result by `v_max`.

    Args:
        s_target: Signed remaining displacement to the goal.
        v_actual: Signed current velocity along the same axis.
        speed_target_now: Cruise speed magnitude while en route (>= 0).
        speed_target_dest: Speed magnitude to hold at the goal (>= 0).
        motion_params: Kinematic limits of the actuator.
        dt: Time elapsed since the previous tick in seconds (> 0).

    Returns:
        The new signed velocity.

    Raises:
        ValueError: On non-finite inputs, ``dt <= 0`` or negative target speeds.
    """
    if not isinstance(motion_params, MotionParams):
        raise ValueError("motion_params must be a MotionParams instance")
    _require_finite(
        s_target=s_target,
        v_actual=v_actual,
        speed_target_now=speed_target_now,
        speed_target_dest=speed_target_dest,
        dt=dt,
    )
    if dt <= 0:
        raise ValueError("dt must be > 0")
    if speed_target_now < 0 or speed_target_dest < 0:
        raise ValueError("target speeds must be >= 0")

    v_max = motion_params.v_max
    a_max = motion_params.a_max
    speed_now = min(speed_target_now, v_max)
    speed_dest = min(speed_target_dest, v_max)

    direction = 0.0 if s_target == 0 else math.copysign(1.0, s_target)
    dist = abs(s_target)
    max_dv = a_max * dt

    if dist < motion_params.dx_min or direction == 0.0:
        v_new = move_toward(v_actual, direction * speed_dest, max_dv)
    else:
        if v_actual * direction < 0:
            v_new = move_toward(v_actual, direction * speed_now, max_dv)
        else:
            v_new = move_toward(v_actual, direction * speed_now, motion_params.a_nom * dt)
        # A reversal that already points at the goal is capped as well.
        v_safe = max_safe_speed(dist, speed_dest, a_max, dt)
        if v_new * direction > v_safe:
            v_new = move_toward(v_actual, direction * v_safe, max_dv)

    # + 0.0 folds -0.0 into 0.0
    return max(-v_max, min(v_max, v_new)) + 0.0


def integrate_position(
    position: Tuple[float, float, float],
    velocity: Tuple[float, float, float],
    dt: float,
) -> Tuple[float, float, float]:
    """Update position using simple Euler integration."""
    x, y, z = position
    vx, vy, vz = velocity

    return (
        x + vx * dt,
        y + vy * dt,
        z + vz * dt,
    )
