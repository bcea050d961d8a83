"""Timestamped joint-angle waypoints.

A ``WaypointSet`` is the ordered table of control points that a
``TrajectoryInterpolator`` turns into a continuous trajectory. Samples must
be appended in strictly increasing time order; anything else is rejected
immediately instead of being sorted.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np

from pa10_control.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Waypoint:
    """A joint vector anchored at a point in time.

    Attributes:
        time: Timestamp in seconds
        values: Joint values, one per controlled joint (read-only array)
    """

    time: float
    values: np.ndarray


class WaypointSet:
    """Ordered set of waypoints sharing a fixed joint count."""

    def __init__(self, joint_count: int):
        """Initialize an empty waypoint set.

        Args:
            joint_count: Length every appended joint vector must have
        """
        if joint_count < 1:
            raise ConfigurationError(f"joint_count must be positive, got {joint_count}")
        self.joint_count = joint_count
        self._waypoints: list[Waypoint] = []
        self.revision = 0

    @classmethod
    def from_table(
        cls,
        rows: Iterable[Tuple[float, Sequence[float]]],
        joint_count: int,
    ) -> "WaypointSet":
        """Create a waypoint set from a literal (time, values) table."""
        waypoint_set = cls(joint_count)
        for time, values in rows:
            waypoint_set.append_sample(time, values)
        return waypoint_set

    def clear(self) -> None:
        """Discard all waypoints."""
        self._waypoints.clear()
        self.revision += 1

    def append_sample(self, time: float, values: Sequence[float]) -> None:
        """Append a waypoint after the current last one.

        Args:
            time: Timestamp (seconds), strictly greater than the last one
            values: Joint vector of length ``joint_count``

        Raises:
            ConfigurationError: If the time is not finite, negative, or not
                after the last waypoint, or if the vector is malformed
        """
        time = float(time)
        if not np.isfinite(time) or time < 0.0:
            raise ConfigurationError(f"Waypoint time must be finite and non-negative, got {time}")

        if self._waypoints and time <= self._waypoints[-1].time:
            raise ConfigurationError(
                f"Waypoint time {time} must be greater than last time "
                f"{self._waypoints[-1].time}"
            )

        vector = np.array(values, dtype=float)
        if vector.ndim != 1 or vector.shape[0] != self.joint_count:
            raise ConfigurationError(
                f"Waypoint at t={time} has shape {vector.shape}, "
                f"expected ({self.joint_count},)"
            )
        if not np.all(np.isfinite(vector)):
            raise ConfigurationError(f"Waypoint at t={time} contains non-finite values")

        vector.setflags(write=False)
        self._waypoints.append(Waypoint(time=time, values=vector))
        self.revision += 1

    def __len__(self) -> int:
        return len(self._waypoints)

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(self._waypoints)

    def __getitem__(self, index: int) -> Waypoint:
        return self._waypoints[index]

    @property
    def times(self) -> np.ndarray:
        """Waypoint timestamps as a 1-D array."""
        return np.array([wp.time for wp in self._waypoints], dtype=float)

    @property
    def values(self) -> np.ndarray:
        """Waypoint joint vectors stacked into a (waypoints, joints) array."""
        if not self._waypoints:
            return np.zeros((0, self.joint_count), dtype=float)
        return np.stack([wp.values for wp in self._waypoints])

    def domain_lower(self) -> float:
        if not self._waypoints:
            raise ConfigurationError("Waypoint set is empty")
        return self._waypoints[0].time

    def domain_upper(self) -> float:
        if not self._waypoints:
            raise ConfigurationError("Waypoint set is empty")
        return self._waypoints[-1].time
