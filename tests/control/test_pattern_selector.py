"""Tests for time-window pattern selection."""

import pytest

from pa10_control.control.pattern_selector import (
    PatternWindow,
    PatternWindowSelector,
    cyclic_patrol_windows,
    patrol_windows,
)
from pa10_control.errors import ConfigurationError


@pytest.mark.parametrize(
    "t, expected",
    [
        (0.0, 0),
        (2.4999, 0),
        (2.5, 1),
        (4.9, 1),
        (5.0, 2),
        (7.5, 3),
        (10.0, 3),
        (1e9, 3),
        (-0.001, 0),
        (float("nan"), 0),
    ],
)
def test_patrol_windows_boundaries(t, expected):
    """Test boundaries belong to the later window and time runs on forever."""
    assert patrol_windows().select(t) == expected


def test_cyclic_patrol_returns_home():
    """Test the cyclic layout goes back to the first pattern at 10 s."""
    selector = cyclic_patrol_windows()

    assert selector.select(9.999) == 3
    assert selector.select(10.0) == 0
    assert selector.select(25.0) == 0


def test_fallback_before_first_window():
    """Test times before the first window use the fallback pattern."""
    selector = PatternWindowSelector(
        [PatternWindow(start=1.0, pattern_index=2), PatternWindow(start=3.0, pattern_index=1)],
        fallback_index=0,
    )

    assert selector.window_index(0.5) == -1
    assert selector.select(0.5) == 0
    assert selector.select(1.0) == 2
    assert selector.select(3.0) == 1


def test_invalid_windows():
    """Test empty and unordered windows are rejected."""
    with pytest.raises(ConfigurationError):
        PatternWindowSelector([])

    with pytest.raises(ConfigurationError):
        PatternWindowSelector.from_starts([0.0, 2.5, 2.5], [0, 1, 2])

    with pytest.raises(ConfigurationError):
        PatternWindowSelector.from_starts([0.0, 2.5], [0])
