"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from pa10_control.control.waypoints import WaypointSet
from pa10_control.utils.config_loader import ControllerConfig


@pytest.fixture
def pa10_config():
    """Fixture providing the default PA10 controller configuration."""
    return ControllerConfig()


@pytest.fixture
def pa10_patterns(pa10_config):
    """Fixture providing the four PA10 angle patterns (radians)."""
    return pa10_config.patterns_array()


@pytest.fixture
def patrol_waypoints(pa10_config):
    """Fixture providing the P0, P1, P2, P3, P0 waypoint set at 2.5 s spacing."""
    return WaypointSet.from_table(pa10_config.waypoint_table(), joint_count=9)


@pytest.fixture
def rng():
    """Fixture providing a seeded random generator."""
    return np.random.default_rng(1234)
