"""Goal-driven actuator example.

This script builds a GrADyS-SIM simulation with a single actuator node driven
by ActuatorMotionHandler. ActuatorProtocol walks it through the goals listed
in config_param.GOAL_WAYPOINTS, moving on whenever the handler reports a
goal as completed.

Run:
    python main.py
"""

import logging

# Suppress websockets handshake warnings
logging.getLogger('websockets').setLevel(logging.CRITICAL)

from gradysim.simulator.handler.communication import CommunicationHandler, CommunicationMedium
from gradysim.simulator.handler.timer import TimerHandler
from gradysim.simulator.handler.visualization import VisualizationHandler, VisualizationConfiguration
from gradysim.simulator.simulation import SimulationBuilder, SimulationConfiguration

from actuator_motion import ActuatorMotionConfiguration, ActuatorMotionHandler, MotionParams
from config_param import (
    ACTUATOR_NODE_NAME_FORMAT,
    ACTUATOR_TELEMETRY_DECIMATION,
    ACTUATOR_UPDATE_RATE,
    COMMUNICATION_DELAY,
    COMMUNICATION_FAILURE_RATE,
    COMMUNICATION_TRANSMISSION_RANGE,
    MOTION_PROFILE,
    SIM_DEBUG,
    SIM_DURATION,
    SIM_REAL_TIME,
    VIS_ENABLE,
    VIS_OPEN_BROWSER,
    VIS_UPDATE_RATE,
)
from protocol import ActuatorProtocol


# ============================================================
# Motion presets (choose with config_param.MOTION_PROFILE)
#
# Profiles: Base, Lift, Door, Custom
# ============================================================

CUSTOM_MOTION_PARAMS = MotionParams(
    v_max=0.2,      # Max speed: 0.2 m/s
    a_max=0.1,      # Hard (braking) acceleration: 0.1 m/s²
    a_nom=0.08,     # Smooth acceleration: 0.08 m/s²
    dx_min=0.01,    # Stopping deadband: 1 cm
)


MOTION_PRESETS: dict[str, MotionParams] = {
    "Base": MotionParams(v_max=0.7, a_max=0.5, a_nom=0.3, dx_min=0.05),
    "Lift": MotionParams(v_max=0.3, a_max=0.25, a_nom=0.15, dx_min=0.005),
    "Door": MotionParams(v_max=0.25, a_max=0.2, a_nom=0.1, dx_min=0.01),
    "Custom": CUSTOM_MOTION_PARAMS,
}


def main():
    """Execute the actuator simulation."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    builder = SimulationBuilder(
        SimulationConfiguration(
            duration=SIM_DURATION,
            debug=SIM_DEBUG,
            real_time=SIM_REAL_TIME,
        )
    )

    medium = CommunicationMedium(
        transmission_range=COMMUNICATION_TRANSMISSION_RANGE,
        delay=COMMUNICATION_DELAY,
        failure_rate=COMMUNICATION_FAILURE_RATE,
    )
    builder.add_handler(CommunicationHandler(medium))
    builder.add_handler(TimerHandler())

    profile = (MOTION_PROFILE or "").strip()
    motion = MOTION_PRESETS.get(profile)
    if motion is None:
        valid = ", ".join(sorted(MOTION_PRESETS.keys()))
        raise ValueError(f"Unknown MOTION_PROFILE={MOTION_PROFILE!r}. Valid options: {valid}")

    print(
        "Motion preset: "
        f"{profile} "
        f"(v_max={motion.v_max}, a_max={motion.a_max}, a_nom={motion.a_nom}, dx_min={motion.dx_min}, "
        f"update_rate={ACTUATOR_UPDATE_RATE})"
    )
    actuator_config = ActuatorMotionConfiguration(
        update_rate=ACTUATOR_UPDATE_RATE,
        motion=motion,
        telemetry_decimation=ACTUATOR_TELEMETRY_DECIMATION,
        node_name_format=ACTUATOR_NODE_NAME_FORMAT,
    )
    builder.add_handler(ActuatorMotionHandler(actuator_config))

    if VIS_ENABLE:
        vis_config = VisualizationConfiguration(
            open_browser=VIS_OPEN_BROWSER,
            update_rate=VIS_UPDATE_RATE,
        )
        builder.add_handler(VisualizationHandler(vis_config))

    builder.add_node(ActuatorProtocol, (0, 0, 0))

    simulation = builder.build()
    print("=" * 60)
    print("Starting actuator simulation")
    print("=" * 60)
    try:
        simulation.start_simulation()
    except (BrokenPipeError, EOFError) as e:
        logging.getLogger(__name__).debug(f"Ignored visualization shutdown error: {e}")
    finally:
        print("=" * 60)
        print("Simulation completed!")
        print("=" * 60)


if __name__ == "__main__":
    main()
