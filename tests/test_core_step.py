"""
Tests for the per-tick rate-of-change controller.

Covers the concrete approach scenarios, the velocity and acceleration
bounds, deadband convergence, braking without overshoot and argument
validation.
"""

import math

import numpy as np
import pytest

from actuator_motion.config import MotionParams
from actuator_motion.core import compute_desired_rate_of_change

PARAMS = MotionParams(v_max=0.2, a_max=0.1, a_nom=0.08, dx_min=0.01)
EPS = 1e-12


def step(s_target, v_actual, speed_now=0.2, speed_dest=0.0, params=PARAMS, dt=0.1):
    return compute_desired_rate_of_change(s_target, v_actual, speed_now, speed_dest, params, dt)


def simulate(s0, v0, speed_now, speed_dest, params, dt, max_steps=20000):
    """Drive one axis until it rests inside the deadband; yield (s, v) per tick."""
    s, v = s0, v0
    for _ in range(max_steps):
        v = step(s, v, speed_now, speed_dest, params, dt)
        s -= v * dt
        yield s, v
        if v == 0.0 and abs(s) < params.dx_min:
            return


class TestScenarios:
    """Concrete ticks with v_max=0.2, a_max=0.1, a_nom=0.08, dx_min=0.01."""

    def test_start_from_rest_far_from_goal(self):
        """Far from the goal the actuator accelerates at a_nom."""
        v_new = step(5.0, 0.0)
        assert 0.0 < v_new <= 0.008 + EPS
        assert v_new == pytest.approx(0.008)

    def test_deadband_brakes_at_a_max(self):
        """Inside the deadband the speed drops by a_max*dt toward zero."""
        v_new = step(0.005, 0.15)
        assert v_new == pytest.approx(0.14)

    def test_at_goal_and_at_rest_is_exactly_zero(self):
        """At the goal with no residual speed the result is exactly 0."""
        assert step(0.0, 0.0) == 0.0

    def test_moving_away_from_goal_reverses_at_a_max(self):
        """Velocity opposing the goal direction is reversed with hard braking."""
        v_new = step(-3.0, 0.1)
        assert v_new == pytest.approx(0.09)
        assert abs(v_new - 0.1) <= PARAMS.a_max * 0.1 + EPS

    def test_cruise_holds_target_speed(self):
        """At cruise speed far from the goal the velocity is unchanged."""
        assert step(10.0, 0.2) == pytest.approx(0.2)

    def test_negative_direction_mirrors_positive(self):
        """The profile is symmetric in the sign of the displacement."""
        assert step(-5.0, 0.0) == pytest.approx(-step(5.0, 0.0))
        assert step(-0.5, -0.15) == pytest.approx(-step(0.5, 0.15))

    def test_cruise_target_above_v_max_is_clipped(self):
        """Requested cruise speeds above v_max never push past v_max."""
        assert step(10.0, 0.2, speed_now=5.0) == pytest.approx(0.2)

    def test_lower_cruise_target_decelerates_at_a_nom(self):
        """Slowing down to a lower cruise speed is a smooth (a_nom) change."""
        assert step(10.0, 0.2, speed_now=0.1) == pytest.approx(0.192)

    def test_brakes_when_close_to_goal(self):
        """Near the goal at full speed the braking regime is active."""
        v_new = step(0.1, 0.2)
        assert v_new < 0.2
        assert 0.2 - v_new <= PARAMS.a_max * 0.1 + EPS


class TestBounds:
    """Velocity and acceleration limits over many random ticks."""

    @pytest.fixture(scope="class")
    def samples(self):
        rng = np.random.default_rng(1234)
        n = 4000
        s = rng.uniform(-5.0, 5.0, n)
        s[: n // 4] *= 0.005  # plenty of samples near and inside the deadband
        v = rng.uniform(-PARAMS.v_max, PARAMS.v_max, n)
        now = rng.uniform(0.0, 0.3, n)
        dest = rng.uniform(0.0, 0.3, n)
        dt = rng.uniform(0.001, 0.5, n)
        return list(zip(s.tolist(), v.tolist(), now.tolist(), dest.tolist(), dt.tolist()))

    def test_velocity_bound(self, samples):
        for s, v, now, dest, dt in samples:
            assert abs(step(s, v, now, dest, dt=dt)) <= PARAMS.v_max + EPS

    def test_acceleration_bound(self, samples):
        for s, v, now, dest, dt in samples:
            v_new = step(s, v, now, dest, dt=dt)
            assert abs(v_new - v) <= PARAMS.a_max * dt + EPS

    def test_idempotent(self, samples):
        """Identical arguments give identical results."""
        for s, v, now, dest, dt in samples[:200]:
            assert step(s, v, now, dest, dt=dt) == step(s, v, now, dest, dt=dt)


class TestDeadband:
    """Convergence once the goal is considered reached."""

    @pytest.mark.parametrize("v_actual", [-0.2, -0.05, 0.0, 0.03, 0.2])
    def test_moves_toward_destination_speed(self, v_actual):
        target = 0.05
        v_new = step(0.004, v_actual, speed_dest=target)
        assert abs(v_new - target) <= abs(v_actual - target)

    def test_snaps_exactly_onto_destination_speed(self):
        """A residual within one tick of braking lands exactly on the target."""
        assert step(0.004, 0.0501, speed_dest=0.05) == 0.05
        assert step(-0.004, -0.0499, speed_dest=0.05) == -0.05

    @pytest.mark.parametrize("v_actual", [1e-9, -1e-9, 0.004, -0.004])
    def test_no_residual_drift_at_goal(self, v_actual):
        assert step(0.0, v_actual) == 0.0

    def test_zero_deadband_still_stops_at_goal(self):
        params = MotionParams(v_max=0.2, a_max=0.1, a_nom=0.08, dx_min=0.0)
        assert step(0.0, 0.005, params=params) == 0.0
        assert step(0.0, -0.15, params=params) == pytest.approx(-0.14)

    def test_repeated_ticks_settle_at_goal(self):
        v = 0.15
        for _ in range(20):
            v = step(0.0, v)
        assert v == 0.0


class TestNoOvershoot:
    """Stop goals are reached without passing the goal."""

    @pytest.mark.parametrize("v0", [0.0, 0.05, 0.1, 0.2])
    @pytest.mark.parametrize("a_max", [0.1, 0.5, 2.0])
    @pytest.mark.parametrize("dt", [0.1, 0.03])
    @pytest.mark.parametrize("extra", [0.0, 0.0137, 0.9])
    def test_stops_before_goal(self, v0, a_max, dt, extra):
        params = MotionParams(v_max=0.2, a_max=a_max, a_nom=0.8 * a_max, dx_min=0.01)
        # Smallest start distance from which v0 can still be stopped.
        s0 = v0 * v0 / (2.0 * a_max) + v0 * dt + extra

        trace = list(simulate(s0, v0, 0.2, 0.0, params, dt))
        for s, v in trace:
            assert s >= -1e-9
            assert v >= 0.0

        s_final, v_final = trace[-1]
        assert v_final == 0.0
        assert abs(s_final) < params.dx_min

    def test_stays_at_rest_after_arrival(self):
        trace = list(simulate(1.0, 0.0, 0.2, 0.0, PARAMS, 0.1))
        s, v = trace[-1]
        for _ in range(50):
            v = step(s, v)
            s -= v * 0.1
            assert v == 0.0

    @pytest.mark.parametrize(
        "params, dt, s0, v0",
        [
            (PARAMS, 0.5, 0.012, -0.001),
            (MotionParams(v_max=0.2, a_max=0.1, a_nom=0.08, dx_min=0.0), 0.1, 1e-4, -1e-4),
        ],
    )
    def test_reversal_near_goal_does_not_pass_it(self, params, dt, s0, v0):
        """Turning around just outside the deadband is capped by the braking lookahead."""
        s, v = s0, v0
        for _ in range(200):
            v_new = step(s, v, params=params, dt=dt)
            assert abs(v_new - v) <= params.a_max * dt + EPS
            v = v_new
            s -= v * dt
            assert s >= -1e-9

    def test_reversal_is_capped_at_safe_speed(self):
        """With a_max*dt**2 above dx_min a full a_max reversal would jump past the goal."""
        v_new = step(0.012, -0.001, dt=0.5)
        assert v_new == pytest.approx(0.024)

    def test_no_oscillation_on_approach(self):
        """Speed rises, cruises, then falls: it never increases after braking starts."""
        speeds = [v for _, v in simulate(2.0, 0.0, 0.2, 0.0, PARAMS, 0.1)]
        peak = speeds.index(max(speeds))
        falling = speeds[peak:]
        assert all(b <= a + EPS for a, b in zip(falling, falling[1:]))

    def test_pass_through_crosses_goal_at_destination_speed(self):
        """With a nonzero destination speed the goal is crossed at that speed."""
        dest = 0.05
        s, v = 2.0, 0.0
        for _ in range(5000):
            v = step(s, v, speed_dest=dest)
            s -= v * 0.1
            if s < -1e-9:
                break
        assert s < 0
        assert v <= dest + 1e-9
        assert v > 0.0


class TestValidation:
    """Caller errors fail loudly instead of being clamped."""

    @pytest.mark.parametrize("dt", [0.0, -0.1, math.inf, math.nan])
    def test_invalid_dt(self, dt):
        with pytest.raises(ValueError):
            step(1.0, 0.0, dt=dt)

    @pytest.mark.parametrize(
        "args",
        [
            (math.nan, 0.0, 0.2, 0.0),
            (math.inf, 0.0, 0.2, 0.0),
            (1.0, math.nan, 0.2, 0.0),
            (1.0, 0.0, math.inf, 0.0),
            (1.0, 0.0, 0.2, math.nan),
        ],
    )
    def test_non_finite_inputs(self, args):
        with pytest.raises(ValueError):
            step(*args)

    def test_negative_target_speeds(self):
        with pytest.raises(ValueError):
            step(1.0, 0.0, speed_now=-0.1)
        with pytest.raises(ValueError):
            step(1.0, 0.0, speed_dest=-0.1)

    def test_params_must_be_motion_params(self):
        with pytest.raises(ValueError):
            compute_desired_rate_of_change(1.0, 0.0, 0.2, 0.0, {"v_max": 0.2}, 0.1)
