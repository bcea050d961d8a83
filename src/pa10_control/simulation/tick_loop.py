"""Fixed-rate simulation loop for tick-driven controllers.

This module plays the role of the host runtime: it prepares the body,
configures the controller and then steps it once per tick, forwarding the
targets to the body until the controller reports completion.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from pa10_control.control.robot_controller import RobotController
from pa10_control.hardware.joint_body import Body

logger = logging.getLogger(__name__)


@dataclass
class TickLoopResult:
    """Summary of a simulation run.

    Attributes:
        ticks: Number of control ticks executed
        final_time: Controller clock time after the last tick (seconds)
        completed: True if the controller signalled completion
        times: Query time of each recorded tick (when recording)
        targets: Joint targets of each recorded tick (when recording)
    """

    ticks: int
    final_time: float
    completed: bool
    times: List[float] = field(default_factory=list)
    targets: List[np.ndarray] = field(default_factory=list)

    def targets_array(self) -> np.ndarray:
        if not self.targets:
            return np.zeros((0, 0), dtype=float)
        return np.stack(self.targets)


class TickLoop:
    """Drive a controller against a body at a fixed time step."""

    def __init__(
        self,
        controller: RobotController,
        body: Body,
        time_step: Optional[float] = None,
        max_ticks: Optional[int] = None,
    ):
        """Initialize the loop.

        Args:
            controller: Controller to step
            body: Body receiving joint targets
            time_step: Control period (controller config value when omitted)
            max_ticks: Stop after this many ticks even if the controller
                keeps going (required for controllers that never finish)
        """
        if body.num_joints != controller.joint_count:
            raise ValueError(
                f"Body has {body.num_joints} joints but controller expects "
                f"{controller.joint_count}"
            )
        self.controller = controller
        self.body = body
        self.time_step = time_step
        self.max_ticks = max_ticks
        self.is_initialized = False

    def initialize(self) -> None:
        """Enable joint IO, configure the controller and write initial targets."""
        self.body.enable_position_control()
        initial_targets = self.controller.configure(self.time_step)
        self.body.apply_targets(initial_targets)
        self.is_initialized = True
        logger.info(f"Tick loop initialized with {self.body.num_joints} joints")

    def run(self, record: bool = False) -> TickLoopResult:
        """Step the controller until it finishes or ``max_ticks`` is reached.

        Args:
            record: Keep every tick's query time and targets in the result

        Returns:
            Summary of the run

        Raises:
            RuntimeError: If ``initialize`` was not called, or the controller
                never finishes and no tick limit was set
        """
        if not self.is_initialized:
            raise RuntimeError("Tick loop not initialized. Call initialize() first.")
        if self.max_ticks is None and not self.controller.finishes:
            raise RuntimeError(
                f"{type(self.controller).__name__} never finishes; set max_ticks"
            )

        result = TickLoopResult(ticks=0, final_time=self.controller.clock.time, completed=False)
        continuing = True
        while continuing:
            if self.max_ticks is not None and result.ticks >= self.max_ticks:
                logger.info(f"Reached max ticks limit: {self.max_ticks}")
                break

            query_time = self.controller.clock.time
            targets, continuing = self.controller.step()
            self.body.apply_targets(targets)
            result.ticks += 1

            if record:
                result.times.append(query_time)
                result.targets.append(targets)

        result.final_time = self.controller.clock.time
        result.completed = not continuing
        logger.info(
            f"Tick loop stopped after {result.ticks} ticks at t={result.final_time:.6f}s "
            f"(completed={result.completed})"
        )
        return result
