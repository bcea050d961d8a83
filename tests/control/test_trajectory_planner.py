"""Tests for trajectory interpolation."""

import numpy as np
import pytest

from pa10_control.control.trajectory_planner import TrajectoryInterpolator
from pa10_control.control.waypoints import WaypointSet
from pa10_control.errors import ConfigurationError


@pytest.fixture
def built_interpolator(patrol_waypoints):
    interpolator = TrajectoryInterpolator(patrol_waypoints)
    interpolator.build()
    return interpolator


@pytest.mark.parametrize("method", ["linear", "cubic"])
def test_passes_through_waypoints(patrol_waypoints, method):
    """Test the trajectory equals each waypoint at its own time."""
    interpolator = TrajectoryInterpolator(patrol_waypoints, method=method)
    interpolator.build()

    for waypoint in patrol_waypoints:
        np.testing.assert_array_equal(interpolator.evaluate(waypoint.time), waypoint.values)


def test_linear_midpoint():
    """Test linear interpolation between two waypoints."""
    waypoints = WaypointSet.from_table(
        [(0.0, [0.0, 2.0]), (2.0, [1.0, -2.0])],
        joint_count=2,
    )
    interpolator = TrajectoryInterpolator(waypoints)
    interpolator.build()

    np.testing.assert_array_almost_equal(interpolator.evaluate(1.0), [0.5, 0.0])
    np.testing.assert_array_almost_equal(interpolator.evaluate(0.5), [0.25, 1.0])


def test_linear_stays_between_neighbours(built_interpolator, patrol_waypoints):
    """Test linear values never overshoot the bracketing waypoints."""
    for first, second in zip(patrol_waypoints, list(patrol_waypoints)[1:]):
        low = np.minimum(first.values, second.values)
        high = np.maximum(first.values, second.values)
        for t in np.linspace(first.time, second.time, 23)[1:-1]:
            value = built_interpolator.evaluate(t)
            assert np.all(value >= low - 1e-12)
            assert np.all(value <= high + 1e-12)


def test_clamps_outside_domain(built_interpolator, patrol_waypoints):
    """Test queries before and after the domain return the end waypoints."""
    first = patrol_waypoints[0].values
    last = patrol_waypoints[-1].values

    np.testing.assert_array_equal(built_interpolator.evaluate(-3.0), first)
    np.testing.assert_array_equal(built_interpolator.evaluate(10.001), last)
    np.testing.assert_array_equal(built_interpolator.evaluate(1e6), last)
    np.testing.assert_array_equal(built_interpolator.evaluate(float("nan")), first)


def test_evaluate_is_idempotent(built_interpolator):
    """Test repeated evaluation returns identical results."""
    first = built_interpolator.evaluate(3.3)
    second = built_interpolator.evaluate(3.3)

    np.testing.assert_array_equal(first, second)

    # Mutating a result must not leak into the trajectory
    first[:] = 42.0
    np.testing.assert_array_equal(built_interpolator.evaluate(3.3), second)


def test_domain_bounds(built_interpolator):
    """Test domain bounds and exhaustion."""
    assert built_interpolator.domain_lower() == 0.0
    assert built_interpolator.domain_upper() == 10.0
    assert not built_interpolator.is_exhausted(10.0)
    assert built_interpolator.is_exhausted(10.0 + 1e-9)


def test_build_requires_two_waypoints():
    """Test build fails with fewer than two waypoints."""
    waypoints = WaypointSet(joint_count=2)
    interpolator = TrajectoryInterpolator(waypoints)

    with pytest.raises(ConfigurationError):
        interpolator.build()

    waypoints.append_sample(0.0, [0.0, 0.0])
    with pytest.raises(ConfigurationError):
        interpolator.update()

    assert not interpolator.is_built


def test_evaluate_before_build_raises(patrol_waypoints):
    """Test querying an unbuilt trajectory raises."""
    interpolator = TrajectoryInterpolator(patrol_waypoints)

    with pytest.raises(RuntimeError):
        interpolator.evaluate(0.0)


def test_waypoint_change_requires_rebuild(built_interpolator, patrol_waypoints):
    """Test clearing waypoints invalidates the built trajectory."""
    assert built_interpolator.is_built

    patrol_waypoints.clear()
    assert not built_interpolator.is_built
    with pytest.raises(RuntimeError):
        built_interpolator.evaluate(1.0)

    patrol_waypoints.append_sample(0.0, np.ones(9))
    patrol_waypoints.append_sample(4.0, np.full(9, 3.0))
    built_interpolator.build()

    np.testing.assert_array_almost_equal(built_interpolator.evaluate(2.0), np.full(9, 2.0))
    assert built_interpolator.domain_upper() == 4.0


def test_cubic_is_smooth_at_ends(patrol_waypoints):
    """Test the clamped cubic starts and ends at rest."""
    interpolator = TrajectoryInterpolator(patrol_waypoints, method="cubic")
    interpolator.build()

    dt = 1e-4
    start_rate = (interpolator.evaluate(dt) - interpolator.evaluate(0.0)) / dt
    end_rate = (interpolator.evaluate(10.0) - interpolator.evaluate(10.0 - dt)) / dt

    np.testing.assert_allclose(start_rate, 0.0, atol=1e-2)
    np.testing.assert_allclose(end_rate, 0.0, atol=1e-2)


def test_sample_shape(built_interpolator):
    """Test sampling several times at once."""
    samples = built_interpolator.sample(np.linspace(0.0, 10.0, 41))

    assert samples.shape == (41, 9)


def test_unknown_method(patrol_waypoints):
    """Test unknown interpolation methods are rejected."""
    with pytest.raises(ConfigurationError):
        TrajectoryInterpolator(patrol_waypoints, method="quintic")
