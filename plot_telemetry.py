"""Plot actuator telemetry from actuator_telemetry.csv.

Creates one figure per node_id with:
- x, y, z position vs t
- vx, vy, vz velocity vs t (goal switches marked)

Run:
    python plot_telemetry.py

By default, reads ./actuator_telemetry.csv (same directory as this script).
"""

from __future__ import annotations

import os

import pandas as pd
import matplotlib.pyplot as plt

from config_param import TELEMETRY_CSV

AXES = ("x", "y", "z")


def main() -> int:
    script_dir = os.path.dirname(os.path.abspath(__file__))
    csv_path = os.path.join(script_dir, TELEMETRY_CSV)

    if not os.path.exists(csv_path):
        print(f"CSV not found: {csv_path}")
        return 1

    df = pd.read_csv(csv_path)

    required_cols = {"node_id", "t", "goal_index", *AXES, *(f"v{a}" for a in AXES)}
    missing = required_cols - set(df.columns)
    if missing:
        print(f"Missing columns in CSV: {sorted(missing)}")
        return 1

    if df.empty:
        print("CSV is empty.")
        return 0

    df = df.copy()
    for col in required_cols:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df = df.dropna(subset=sorted(required_cols)).sort_values("t")

    node_ids = sorted(df["node_id"].unique())
    if len(node_ids) == 0:
        print("No valid rows to plot.")
        return 0

    for node_id in node_ids:
        df_node = df[df["node_id"] == node_id]
        switches = df_node["t"][df_node["goal_index"].diff().fillna(0) != 0]

        fig, (ax_pos, ax_vel) = plt.subplots(2, 1, sharex=True, figsize=(10, 7))
        fig.suptitle(f"Actuator telemetry - node_id={int(node_id)}")

        for axis in AXES:
            ax_pos.plot(df_node["t"], df_node[axis], linewidth=1.2, label=axis)
            ax_vel.plot(df_node["t"], df_node[f"v{axis}"], linewidth=1.2, label=f"v{axis}")

        for t_switch in switches:
            ax_pos.axvline(t_switch, color="0.6", linestyle=":", linewidth=1)
            ax_vel.axvline(t_switch, color="0.6", linestyle=":", linewidth=1)

        ax_pos.set_ylabel("position (m)")
        ax_pos.grid(True, alpha=0.3)
        ax_pos.legend(loc="best")

        ax_vel.axhline(0.0, color="k", linewidth=0.8, alpha=0.4)
        ax_vel.set_ylabel("velocity (m/s)")
        ax_vel.set_xlabel("t (s)")
        ax_vel.grid(True, alpha=0.3)
        ax_vel.legend(loc="best")

        fig.tight_layout()

    plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
