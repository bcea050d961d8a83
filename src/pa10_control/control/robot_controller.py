"""Tick-driven joint controllers.

Each controller is configured once and then stepped once per control tick.
A step returns the joint targets (radians) for the current time and whether
the host should keep simulating.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from pa10_control.control.pattern_selector import PatternWindowSelector
from pa10_control.control.random_patterns import generate_random_patterns, make_rng
from pa10_control.control.trajectory_planner import TrajectoryInterpolator
from pa10_control.control.waypoints import WaypointSet
from pa10_control.errors import ConfigurationError
from pa10_control.utils.angles import deg2rad
from pa10_control.utils.config_loader import ControllerConfig

logger = logging.getLogger(__name__)

StepResult = Tuple[np.ndarray, bool]


class ControlClock:
    """Elapsed simulation time, advanced by fixed steps and never decreased.

    The time is ``origin + n * step``, where ``n`` counts the steps taken
    since the step size last changed.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.time = 0.0
        self.ticks = 0
        self._origin = 0.0
        self._step: Optional[float] = None
        self._steps_since_origin = 0

    def advance(self, dt: float) -> float:
        """Advance the clock by ``dt`` seconds and return the new time.

        Raises:
            ValueError: If ``dt`` is negative or not finite
        """
        if not np.isfinite(dt) or dt < 0:
            raise ValueError(f"Time step must be finite and non-negative, got {dt}")
        dt = float(dt)
        if dt != self._step:
            self._origin = self.time
            self._step = dt
            self._steps_since_origin = 0
        self._steps_since_origin += 1
        self.time = self._origin + self._steps_since_origin * dt
        self.ticks += 1
        return self.time


class RobotController:
    """Base class for controllers driven by a fixed-rate tick.

    Subclasses implement ``_configure`` and ``targets_at``. Controllers that
    report completion through ``is_continuing`` set ``finishes`` to True.
    """

    finishes = False

    def __init__(self, config: Optional[ControllerConfig] = None):
        """Initialize robot controller.

        Args:
            config: Controller configuration (PA10 defaults when omitted)
        """
        self.config = config if config is not None else ControllerConfig()
        self.clock = ControlClock()
        self.time_step: Optional[float] = None
        self.is_configured = False

    @property
    def joint_count(self) -> int:
        return self.config.joint_count

    def configure(self, time_step: Optional[float] = None) -> np.ndarray:
        """Prepare the controller for a run starting at time zero.

        Args:
            time_step: Control period in seconds (config value when omitted)

        Returns:
            Initial joint targets (radians)

        Raises:
            ConfigurationError: If the time step or controller data is invalid
        """
        self.is_configured = False
        if time_step is None:
            time_step = self.config.time_step
        if not np.isfinite(time_step) or time_step <= 0:
            raise ConfigurationError(f"time_step must be positive, got {time_step}")

        self.time_step = float(time_step)
        self.clock.reset()
        self._configure()
        self.is_configured = True

        logger.info(
            f"{type(self).__name__} configured for {self.joint_count} joints "
            f"with time step {self.time_step}s"
        )
        return self.targets_at(self.clock.time)

    def _configure(self) -> None:
        raise NotImplementedError

    def targets_at(self, t: float) -> np.ndarray:
        """Return the joint targets (radians) at time ``t``."""
        raise NotImplementedError

    def is_continuing(self) -> bool:
        """Return False once the controller has nothing left to command."""
        return True

    def step(self, dt: Optional[float] = None) -> StepResult:
        """Run one control tick.

        Args:
            dt: Time to advance after computing targets (configured time
                step when omitted)

        Returns:
            Tuple of (joint targets in radians, continue simulating)

        Raises:
            RuntimeError: If the controller has not been configured
        """
        if not self.is_configured:
            raise RuntimeError("Controller not configured. Call configure() first.")

        targets = self.targets_at(self.clock.time)
        self.clock.advance(self.time_step if dt is None else dt)
        continuing = self.is_continuing()

        logger.debug(f"Tick {self.clock.ticks}: t={self.clock.time:.6f}s, continuing={continuing}")
        if not continuing:
            logger.info(f"{type(self).__name__} finished at t={self.clock.time:.6f}s")
        return targets, continuing


class JointTrajectoryController(RobotController):
    """Follow an interpolated trajectory through the configured waypoints."""

    finishes = True

    def __init__(self, config: Optional[ControllerConfig] = None):
        super().__init__(config)
        self.waypoints = WaypointSet(self.joint_count)
        self.interpolator = TrajectoryInterpolator(self.waypoints, method=self.config.interpolation)

    def _configure(self) -> None:
        self.waypoints.clear()
        for time, values in self.config.waypoint_table():
            self.waypoints.append_sample(time, values)
        self.interpolator.build()

    def targets_at(self, t: float) -> np.ndarray:
        return self.interpolator.evaluate(t)

    def is_continuing(self) -> bool:
        return self.clock.time <= self.interpolator.domain_upper()


class JointAngleController(RobotController):
    """Hold one of several static joint-angle patterns per time window."""

    def __init__(self, config: Optional[ControllerConfig] = None):
        super().__init__(config)
        self.selector = PatternWindowSelector.from_starts(
            self.config.window_starts,
            self.config.window_patterns,
        )
        self.patterns = np.zeros((0, self.joint_count), dtype=float)

    def _configure(self) -> None:
        self.patterns = self._build_patterns()
        self._check_pattern_indices()

    def _build_patterns(self) -> np.ndarray:
        return self.config.patterns_array()

    def _check_pattern_indices(self) -> None:
        indices = [w.pattern_index for w in self.selector.windows]
        indices.append(self.selector.fallback_index)
        for index in indices:
            if not 0 <= index < len(self.patterns):
                raise ConfigurationError(
                    f"Window selects pattern {index} but only {len(self.patterns)} patterns exist"
                )

    def targets_at(self, t: float) -> np.ndarray:
        return self.patterns[self.selector.select(t)].copy()


class RandomPatternController(JointAngleController):
    """Hold randomly drawn joint-angle patterns per time window.

    Patterns are drawn once per ``configure`` call, in degrees within each
    joint's limit, and converted to radians before use.
    """

    def __init__(
        self,
        config: Optional[ControllerConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        super().__init__(config)
        self.rng = rng if rng is not None else make_rng(self.config.seed)
        self.patterns_deg = np.zeros((0, self.joint_count), dtype=float)

    def _build_patterns(self) -> np.ndarray:
        self.patterns_deg = generate_random_patterns(
            self.config.joint_limits_deg,
            self.config.pattern_count,
            self.rng,
        )
        return deg2rad(self.patterns_deg)
