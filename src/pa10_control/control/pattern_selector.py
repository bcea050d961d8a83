"""Time-windowed selection of discrete joint-angle patterns.

Each window starts at a fixed time and runs until the next window starts.
The last window never ends, so this selector has no notion of completion.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from pa10_control.errors import ConfigurationError


@dataclass(frozen=True)
class PatternWindow:
    """A half-open time window selecting one pattern.

    Attributes:
        start: Window start time in seconds (inclusive)
        pattern_index: Index of the pattern active in this window
    """

    start: float
    pattern_index: int


class PatternWindowSelector:
    """Select a pattern index by which window contains the current time."""

    def __init__(
        self,
        windows: Sequence[PatternWindow],
        fallback_index: int = 0,
    ):
        """Initialize the selector.

        Args:
            windows: Windows ordered by strictly increasing start time
            fallback_index: Pattern used before the first window starts

        Raises:
            ConfigurationError: If no windows are given or starts are not
                strictly increasing
        """
        if not windows:
            raise ConfigurationError("At least one pattern window is required")

        starts = np.array([w.start for w in windows], dtype=float)
        if not np.all(np.isfinite(starts)):
            raise ConfigurationError("Window start times must be finite")
        if np.any(np.diff(starts) <= 0):
            raise ConfigurationError(f"Window starts must be strictly increasing, got {starts.tolist()}")

        self.windows = tuple(windows)
        self.fallback_index = fallback_index
        self._starts = starts

    @classmethod
    def from_starts(
        cls,
        starts: Sequence[float],
        pattern_indices: Sequence[int],
        fallback_index: int = 0,
    ) -> "PatternWindowSelector":
        if len(starts) != len(pattern_indices):
            raise ConfigurationError("starts and pattern_indices must have the same length")
        windows = [
            PatternWindow(start=float(start), pattern_index=int(index))
            for start, index in zip(starts, pattern_indices)
        ]
        return cls(windows, fallback_index=fallback_index)

    def window_index(self, t: float) -> int:
        """Return the index of the window containing ``t``, or -1 if none does."""
        t = float(t)
        if not t >= self._starts[0]:
            return -1
        return int(np.searchsorted(self._starts, t, side="right")) - 1

    def select(self, t: float) -> int:
        """Return the pattern index active at time ``t``."""
        window = self.window_index(t)
        if window < 0:
            return self.fallback_index
        return self.windows[window].pattern_index


def patrol_windows() -> PatternWindowSelector:
    """Four patterns, 2.5 s each, holding the last pattern indefinitely."""
    return PatternWindowSelector.from_starts((0.0, 2.5, 5.0, 7.5), (0, 1, 2, 3))


def cyclic_patrol_windows() -> PatternWindowSelector:
    """Four patterns, 2.5 s each, then back to the first pattern from 10 s on."""
    return PatternWindowSelector.from_starts((0.0, 2.5, 5.0, 7.5, 10.0), (0, 1, 2, 3, 0))
