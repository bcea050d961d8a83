"""Example script for running a PA10 controller without a simulator.

This script demonstrates how to drive a controller with the TickLoop and
report the commanded joint targets.
"""

import argparse
import logging
from pathlib import Path

import numpy as np

from pa10_control.control.robot_controller import (
    JointAngleController,
    JointTrajectoryController,
    RandomPatternController,
)
from pa10_control.errors import ConfigurationError
from pa10_control.hardware.joint_body import Body
from pa10_control.simulation.tick_loop import TickLoop
from pa10_control.utils.config_loader import ControllerConfig, load_controller_config
from pa10_control.utils.logging_config import setup_logging

setup_logging(log_level=logging.INFO)
logger = logging.getLogger(__name__)

CONTROLLERS = {
    "trajectory": JointTrajectoryController,
    "angle": JointAngleController,
    "random": RandomPatternController,
}


def main() -> None:
    """Main function for the controller demo."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--mode", choices=sorted(CONTROLLERS), default="trajectory")
    parser.add_argument("--config", type=Path, default=Path("configs/pa10_controller.yaml"))
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=12000,
        help="Tick limit for pattern modes, which never finish on their own",
    )
    args = parser.parse_args()

    if args.config.exists():
        config = load_controller_config(args.config)
    else:
        logger.warning(f"Config file not found: {args.config}. Using PA10 defaults.")
        config = ControllerConfig()

    try:
        controller = CONTROLLERS[args.mode](config)
        body = Body(config.joint_names)
        max_ticks = None if args.mode == "trajectory" else args.max_ticks
        loop = TickLoop(controller, body, max_ticks=max_ticks)
        loop.initialize()
        result = loop.run(record=True)
    except ConfigurationError as e:
        logger.error(f"Invalid controller configuration: {e}")
        return

    targets = result.targets_array()
    logger.info(
        f"Ran {result.ticks} ticks in '{args.mode}' mode, "
        f"final time {result.final_time:.3f}s, completed={result.completed}"
    )
    logger.info(f"Peak |target| per joint: {np.round(np.abs(targets).max(axis=0), 4)}")
    logger.info(f"Final targets: {np.round(body.get_targets(), 4)}")


if __name__ == "__main__":
    main()
