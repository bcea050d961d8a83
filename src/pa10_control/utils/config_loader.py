"""Configuration loading for PA10 controllers.

Controller settings (joint limits, angle patterns, waypoint tables, timing)
live in YAML files and are converted into an immutable ``ControllerConfig``
that is handed to a controller at construction.
"""

import logging
import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np
import yaml

from pa10_control.control.trajectory_planner import INTERPOLATION_METHODS
from pa10_control.errors import ConfigurationError

logger = logging.getLogger(__name__)

PA10_JOINT_NAMES: Tuple[str, ...] = (
    "S1",
    "S2",
    "S3",
    "E1",
    "E2",
    "W1",
    "W2",
    "HAND_L",
    "HAND_R",
)

# Revolute limits in degrees; the two finger entries are the gripper stroke.
PA10_JOINT_LIMITS_DEG: Tuple[float, ...] = (
    177.0,
    94.0,
    174.0,
    137.0,
    255.0,
    165.0,
    255.0,
    0.030,
    0.030,
)

_SIXTH = math.pi / 6
_THIRD = math.pi / 3

PA10_ANGLE_PATTERNS: Tuple[Tuple[float, ...], ...] = (
    (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
    (_SIXTH, _SIXTH, _SIXTH, _SIXTH, _SIXTH, _SIXTH, _SIXTH, 0.015, 0.015),
    (-_SIXTH, -_SIXTH, -_SIXTH, -_SIXTH, -_SIXTH, -_SIXTH, -_SIXTH, -0.015, -0.015),
    (_SIXTH, -_SIXTH, _THIRD, -_THIRD, _SIXTH, -_SIXTH, _THIRD, 0.015, -0.015),
)

DEFAULT_WAYPOINT_TIMES: Tuple[float, ...] = (0.0, 2.5, 5.0, 7.5, 10.0)
DEFAULT_WAYPOINT_PATTERNS: Tuple[int, ...] = (0, 1, 2, 3, 0)
DEFAULT_WINDOW_STARTS: Tuple[float, ...] = (0.0, 2.5, 5.0, 7.5, 10.0)
DEFAULT_WINDOW_PATTERNS: Tuple[int, ...] = (0, 1, 2, 3, 0)
DEFAULT_TIME_STEP = 0.001
DEFAULT_PATTERN_COUNT = 4


@dataclass(frozen=True)
class ControllerConfig:
    """Immutable controller configuration.

    Attributes:
        joint_names: Name of each controlled joint, in actuation order
        joint_limits_deg: Symmetric joint limit per joint (degrees)
        angle_patterns: Static joint-angle patterns (radians)
        waypoint_times: Waypoint timestamps for trajectory control (seconds)
        waypoint_patterns: Index into ``angle_patterns`` for each waypoint
        window_starts: Start time of each pattern window (seconds)
        window_patterns: Index of the pattern selected in each window
        interpolation: Trajectory basis, ``"linear"`` or ``"cubic"``
        time_step: Control period (seconds)
        pattern_count: Number of random patterns to draw
        seed: Optional seed for random pattern generation
    """

    joint_names: Tuple[str, ...] = PA10_JOINT_NAMES
    joint_limits_deg: Tuple[float, ...] = PA10_JOINT_LIMITS_DEG
    angle_patterns: Tuple[Tuple[float, ...], ...] = PA10_ANGLE_PATTERNS
    waypoint_times: Tuple[float, ...] = DEFAULT_WAYPOINT_TIMES
    waypoint_patterns: Tuple[int, ...] = DEFAULT_WAYPOINT_PATTERNS
    window_starts: Tuple[float, ...] = DEFAULT_WINDOW_STARTS
    window_patterns: Tuple[int, ...] = DEFAULT_WINDOW_PATTERNS
    interpolation: str = "linear"
    time_step: float = DEFAULT_TIME_STEP
    pattern_count: int = DEFAULT_PATTERN_COUNT
    seed: Optional[int] = field(default=None)

    def __post_init__(self) -> None:
        joint_count = len(self.joint_names)
        if joint_count == 0:
            raise ConfigurationError("At least one joint must be configured")

        if len(self.joint_limits_deg) != joint_count:
            raise ConfigurationError(
                f"Expected {joint_count} joint limits, got {len(self.joint_limits_deg)}"
            )
        if any(limit < 0 for limit in self.joint_limits_deg):
            raise ConfigurationError("Joint limits must be non-negative")

        for index, pattern in enumerate(self.angle_patterns):
            if len(pattern) != joint_count:
                raise ConfigurationError(
                    f"Angle pattern {index} has {len(pattern)} values, expected {joint_count}"
                )

        if len(self.waypoint_times) != len(self.waypoint_patterns):
            raise ConfigurationError(
                "waypoint_times and waypoint_patterns must have the same length"
            )
        if len(self.window_starts) != len(self.window_patterns):
            raise ConfigurationError(
                "window_starts and window_patterns must have the same length"
            )
        for index in self.waypoint_patterns:
            if not 0 <= index < len(self.angle_patterns):
                raise ConfigurationError(
                    f"Waypoint pattern index {index} out of range [0, {len(self.angle_patterns)})"
                )
        for index in self.window_patterns:
            if not 0 <= index < self.pattern_slots:
                raise ConfigurationError(
                    f"Pattern index {index} out of range [0, {self.pattern_slots})"
                )

        if self.interpolation not in INTERPOLATION_METHODS:
            raise ConfigurationError(
                f"Unknown interpolation '{self.interpolation}', "
                f"expected one of {INTERPOLATION_METHODS}"
            )
        if not self.time_step > 0:
            raise ConfigurationError(f"time_step must be positive, got {self.time_step}")
        if self.pattern_count < 1:
            raise ConfigurationError("pattern_count must be at least 1")

    @property
    def joint_count(self) -> int:
        return len(self.joint_names)

    @property
    def pattern_slots(self) -> int:
        """Number of patterns that indices may refer to."""
        return max(len(self.angle_patterns), self.pattern_count)

    def patterns_array(self) -> np.ndarray:
        """Return the static angle patterns as a (patterns, joints) array."""
        return np.array(self.angle_patterns, dtype=float).reshape(-1, self.joint_count)

    def limits_array(self) -> np.ndarray:
        return np.array(self.joint_limits_deg, dtype=float)

    def waypoint_table(self) -> list[Tuple[float, np.ndarray]]:
        """Return the waypoint table as (time, joint vector) rows."""
        patterns = self.patterns_array()
        return [
            (float(time), patterns[index])
            for time, index in zip(self.waypoint_times, self.waypoint_patterns)
        ]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ControllerConfig":
        """Build a config from a plain dictionary, using defaults for missing keys.

        Raises:
            ConfigurationError: If unknown keys are present or values are invalid
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Controller config must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown controller config keys: {sorted(unknown)}")

        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key == "angle_patterns":
                kwargs[key] = tuple(tuple(float(v) for v in row) for row in value)
            elif key == "joint_names":
                kwargs[key] = tuple(str(v) for v in value)
            elif key in ("joint_limits_deg", "waypoint_times", "window_starts"):
                kwargs[key] = tuple(float(v) for v in value)
            elif key in ("waypoint_patterns", "window_patterns"):
                kwargs[key] = tuple(int(v) for v in value)
            elif key == "time_step":
                kwargs[key] = float(value)
            elif key == "pattern_count":
                kwargs[key] = int(value)
            elif key == "seed":
                kwargs[key] = None if value is None else int(value)
            else:
                kwargs[key] = value

        return cls(**kwargs)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML configuration file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Parsed configuration dictionary (empty if the file is empty)

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open() as config_file:
            data = yaml.safe_load(config_file)
    except yaml.YAMLError as error:
        raise ConfigurationError(f"Failed to parse YAML file: {config_path}") from error

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Top level of {config_path} must be a mapping")

    logger.debug(f"Loaded config from {config_path}")
    return data


def load_controller_config(
    config_path: Union[str, Path],
    section: str = "controller",
) -> ControllerConfig:
    """Load a ``ControllerConfig`` from a section of a YAML file.

    Args:
        config_path: Path to the YAML file
        section: Top-level key holding controller settings

    Returns:
        Validated controller configuration
    """
    config = load_config(config_path)
    return ControllerConfig.from_dict(config.get(section, {}))
