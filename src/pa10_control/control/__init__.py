"""Control module for waypoint trajectories and pattern-based joint targets.

This module contains the tick-driven core:
- Waypoint tables
- Trajectory interpolation
- Time-window pattern selection
- Random pattern generation
"""

from pa10_control.control.pattern_selector import PatternWindow, PatternWindowSelector
from pa10_control.control.random_patterns import generate_random_float, generate_random_patterns
from pa10_control.control.trajectory_planner import TrajectoryInterpolator
from pa10_control.control.waypoints import Waypoint, WaypointSet

__all__ = [
    "PatternWindow",
    "PatternWindowSelector",
    "TrajectoryInterpolator",
    "Waypoint",
    "WaypointSet",
    "generate_random_float",
    "generate_random_patterns",
]
