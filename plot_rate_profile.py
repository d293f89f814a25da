"""Plot the single-axis approach produced by the rate controller.

For a few (speed_target_now, speed_target_dest) pairs we integrate one axis
from rest toward a goal and plot:
    - remaining displacement s(t)
    - velocity v(t), with the braking lookahead max_safe_speed(s) as reference
"""

from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt

from actuator_motion import MotionParams, compute_desired_rate_of_change, max_safe_speed


def approach(s0: float, speed_now: float, speed_dest: float, params: MotionParams, dt: float, duration: float):
    n = int(duration / dt)
    t = np.arange(n + 1) * dt
    s = np.empty(n + 1)
    v = np.empty(n + 1)
    s[0], v[0] = s0, 0.0
    for k in range(n):
        v[k + 1] = compute_desired_rate_of_change(s[k], v[k], speed_now, speed_dest, params, dt)
        s[k + 1] = s[k] - v[k + 1] * dt
    return t, s, v


def main() -> None:
    params = MotionParams(v_max=0.2, a_max=0.1, a_nom=0.08, dx_min=0.01)
    dt = 0.1

    fig, (ax_s, ax_v) = plt.subplots(2, 1, sharex=True, figsize=(8.5, 6.5))

    for speed_now, speed_dest in ((0.2, 0.0), (0.1, 0.0), (0.2, 0.05)):
        t, s, v = approach(1.5, speed_now, speed_dest, params, dt, duration=15.0)
        label = f"now={speed_now}, dest={speed_dest}"
        line = ax_s.plot(t, s, linewidth=2, label=label)[0]
        ax_v.plot(t, v, linewidth=2, color=line.get_color(), label=label)
        v_safe = [max_safe_speed(max(sk, 0.0), speed_dest, params.a_max, dt) for sk in s]
        ax_v.plot(t, np.minimum(v_safe, params.v_max), linestyle="--", linewidth=1, color=line.get_color())

    ax_s.axhline(params.dx_min, color="0.6", linestyle=":", linewidth=1, label="dx_min")
    ax_s.axhline(0.0, color="0.85", linewidth=1)
    ax_s.set_ylabel("s (m)")
    ax_s.grid(True, alpha=0.25)
    ax_s.legend(loc="best")

    ax_v.axhline(params.v_max, color="0.6", linestyle=":", linewidth=1, label="v_max")
    ax_v.set_xlabel("t (s)")
    ax_v.set_ylabel("v (m/s)")
    ax_v.grid(True, alpha=0.25)
    ax_v.legend(loc="best")

    fig.suptitle("Rate controller approach (dashed: braking lookahead)")
    plt.tight_layout()

    out = "rate_profile.png"
    plt.savefig(out, dpi=160)
    print(f"Saved: {out}")


if __name__ == "__main__":
    main()
