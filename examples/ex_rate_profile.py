"""Core-only example (no GrADyS-SIM runtime required).

This script demonstrates the *pure* functions exposed by
`actuator_motion.core`: a single lift axis is driven from rest to a goal
5 m away with the rate controller, integrating the position here in the
caller.

For the full integration example (handler + protocol), use `main.py` and
`protocol.py` at the repository root.

Usage:
    python examples/ex_rate_profile.py
"""

from actuator_motion import MotionParams, compute_desired_rate_of_change


def simulate_lift_approach():
    """
    Simulate a lift moving 5 m up and stopping at the floor.
    """
    print("Core-only demo: rate controller + caller-side Euler integration")

    params = MotionParams(v_max=0.3, a_max=0.25, a_nom=0.15, dx_min=0.005)
    dt = 0.1
    goal = 5.0
    speed_now = 0.3     # cruise speed en route
    speed_dest = 0.0    # stop at the floor

    position = 0.0
    velocity = 0.0

    print(f"Goal: {goal} m, dt: {dt} s, limits: {params}")
    print("-" * 44)
    print(f"{'t (s)':>6} | {'pos (m)':>10} | {'vel (m/s)':>10} | {'s (m)':>8}")
    print("-" * 44)

    duration = 30.0
    num_steps = int(duration / dt)

    for step in range(num_steps + 1):
        time = step * dt
        s_target = goal - position

        if step % int(round(1.0 / dt)) == 0:
            print(f"{time:>6.1f} | {position:>10.4f} | {velocity:>10.4f} | {s_target:>8.4f}")

        velocity = compute_desired_rate_of_change(s_target, velocity, speed_now, speed_dest, params, dt)
        position += velocity * dt

    print("-" * 44)
    print(f"Final position: {position:.4f} m (goal {goal} m)")
    print(f"Final velocity: {velocity:.4f} m/s")


if __name__ == "__main__":
    simulate_lift_approach()
