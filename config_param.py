"""Centralized parameter/config constants for the actuator demo.

This module is the single source of truth for the parameters shared by
`main.py`, `protocol.py` and the plotting scripts.
"""

# --------------------------------------------------------------------------------------
# 1) Simulation framework
# --------------------------------------------------------------------------------------

SIM_DURATION: float = 180           # Simulation duration (seconds)
SIM_REAL_TIME: bool = False         # Run in real time
SIM_DEBUG: bool = False             # Enable simulator debug mode

# --------------------------------------------------------------------------------------
# 2) Communication + visualization
# --------------------------------------------------------------------------------------

COMMUNICATION_TRANSMISSION_RANGE: float = 200  # Communication range (meters)
COMMUNICATION_DELAY: float = 0.0               # Communication delay (seconds)
COMMUNICATION_FAILURE_RATE: float = 0.0        # Packet loss probability [0.0, 1.0]

VIS_ENABLE: bool = False            # Attach the browser visualization
VIS_OPEN_BROWSER: bool = True       # Open the visualization in a browser
VIS_UPDATE_RATE: float = 0.1        # Visualization update period (seconds)

# --------------------------------------------------------------------------------------
# 3) Actuator handler
# --------------------------------------------------------------------------------------

ACTUATOR_UPDATE_RATE: float = 0.05      # Controller tick (seconds)
ACTUATOR_TELEMETRY_DECIMATION: int = 2  # Telemetry every N ticks
ACTUATOR_NODE_NAME_FORMAT: str = "actuator_{id}"

# Motion profile used by main.py (see MOTION_PRESETS there)
MOTION_PROFILE: str = "Lift"

# --------------------------------------------------------------------------------------
# 4) Demo mission
# --------------------------------------------------------------------------------------

# Goals visited in order: (goal position (x, y, z), speed at destination).
# A nonzero destination speed passes through the goal without stopping.
GOAL_WAYPOINTS = [
    ((0.0, 0.0, 3.0), 0.0),
    ((2.0, 0.0, 3.0), 0.05),
    ((2.0, 2.0, 3.0), 0.0),
    ((0.0, 0.0, 0.0), 0.0),
]
GOAL_CRUISE_SPEED: float = 0.3      # En-route target speed (m/s)

# Telemetry CSV written by the protocol at the end of the simulation
TELEMETRY_CSV: str = "actuator_telemetry.csv"
