"""Joint trajectory interpolation.

This module turns a ``WaypointSet`` into a continuous function of time.
Queries before the first waypoint return the first waypoint's value and
queries after the last waypoint are clamped to the last waypoint's value.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.interpolate import CubicSpline

from pa10_control.control.waypoints import WaypointSet
from pa10_control.errors import ConfigurationError

logger = logging.getLogger(__name__)

INTERPOLATION_METHODS = ("linear", "cubic")


@dataclass
class TrajectoryState:
    """Piecewise trajectory built from a waypoint set.

    Attributes:
        times: Knot times, strictly increasing
        values: Joint vector at each knot, shape (knots, joints)
        deltas: Value change across each segment, shape (knots - 1, joints)
        durations: Length of each segment in seconds
        spline: Cubic spline through all knots (cubic method only)
        revision: Waypoint set revision this state was built from
    """

    times: np.ndarray
    values: np.ndarray
    deltas: np.ndarray
    durations: np.ndarray
    spline: Optional[CubicSpline]
    revision: int


class TrajectoryInterpolator:
    """Evaluate joint targets along a waypoint trajectory.

    Example:
        >>> waypoints = WaypointSet(joint_count=2)
        >>> waypoints.append_sample(0.0, [0.0, 0.0])
        >>> waypoints.append_sample(1.0, [1.0, -1.0])
        >>> interpolator = TrajectoryInterpolator(waypoints)
        >>> interpolator.build()
        >>> interpolator.evaluate(0.5)
        array([ 0.5, -0.5])
    """

    def __init__(self, waypoints: WaypointSet, method: str = "linear"):
        """Initialize the interpolator.

        Args:
            waypoints: Waypoint set to interpolate; read on every build
            method: ``"linear"`` or ``"cubic"`` (clamped cubic spline with
                zero velocity at both ends)

        Raises:
            ConfigurationError: If the method is unknown
        """
        if method not in INTERPOLATION_METHODS:
            raise ConfigurationError(
                f"Unknown interpolation method '{method}', expected one of {INTERPOLATION_METHODS}"
            )
        self.waypoints = waypoints
        self.method = method
        self._state: Optional[TrajectoryState] = None

    @property
    def is_built(self) -> bool:
        """True if a trajectory exists for the current waypoint set."""
        return self._state is not None and self._state.revision == self.waypoints.revision

    def build(self) -> None:
        """Rebuild the trajectory from the current waypoints.

        Raises:
            ConfigurationError: If fewer than two waypoints are present
        """
        if len(self.waypoints) < 2:
            self._state = None
            raise ConfigurationError(
                f"At least two waypoints are required, got {len(self.waypoints)}"
            )

        times = self.waypoints.times
        values = self.waypoints.values
        spline = None
        if self.method == "cubic":
            spline = CubicSpline(times, values, axis=0, bc_type="clamped")

        self._state = TrajectoryState(
            times=times,
            values=values,
            deltas=np.diff(values, axis=0),
            durations=np.diff(times),
            spline=spline,
            revision=self.waypoints.revision,
        )
        logger.info(
            f"Built {self.method} trajectory with {len(times)} waypoints "
            f"over [{times[0]}, {times[-1]}]s"
        )

    update = build

    def _require_state(self) -> TrajectoryState:
        if self._state is None:
            raise RuntimeError("Trajectory not built. Call build() first.")
        if self._state.revision != self.waypoints.revision:
            raise RuntimeError("Waypoints changed since last build. Call build() again.")
        return self._state

    def evaluate(self, t: float) -> np.ndarray:
        """Evaluate the joint vector at time ``t``.

        Args:
            t: Query time (seconds); any value is accepted

        Returns:
            Joint vector of length ``joint_count``

        Raises:
            RuntimeError: If the trajectory has not been built for the
                current waypoints
        """
        state = self._require_state()
        t = float(t)

        # NaN compares false and is clamped to the start like early times.
        if not t >= state.times[0]:
            return state.values[0].copy()
        if t >= state.times[-1]:
            return state.values[-1].copy()

        index = int(np.searchsorted(state.times, t, side="right")) - 1
        if t == state.times[index]:
            return state.values[index].copy()

        if state.spline is not None:
            return np.asarray(state.spline(t), dtype=float)

        fraction = (t - state.times[index]) / state.durations[index]
        return state.values[index] + state.deltas[index] * fraction

    interpolate = evaluate

    def sample(self, times: np.ndarray) -> np.ndarray:
        """Evaluate the trajectory at several times.

        Returns:
            Array of shape (len(times), joint_count)
        """
        return np.stack([self.evaluate(t) for t in np.asarray(times, dtype=float).ravel()])

    def domain_lower(self) -> float:
        return float(self._require_state().times[0])

    def domain_upper(self) -> float:
        return float(self._require_state().times[-1])

    def is_exhausted(self, t: float) -> bool:
        """Return True if ``t`` lies past the end of the trajectory."""
        return float(t) > self.domain_upper()
