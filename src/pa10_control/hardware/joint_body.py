"""Joint actuation interface.

This module provides a minimal stand-in for the host's articulated body:
a list of joints that accept position targets once IO is enabled.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

import numpy as np


class ActuationMode(Enum):
    """How a joint interprets its command."""

    NO_ACTUATION = "no_actuation"
    JOINT_ANGLE = "joint_angle"


@dataclass
class Joint:
    """Single controlled joint.

    Attributes:
        name: Joint name
        actuation_mode: Current actuation mode
        io_enabled: Whether the host exchanges data with this joint
        q_target: Commanded position (radians, or metres for prismatic joints)
    """

    name: str
    actuation_mode: ActuationMode = ActuationMode.NO_ACTUATION
    io_enabled: bool = False
    q_target: float = 0.0


class Body:
    """Articulated body made of position-controlled joints."""

    def __init__(self, joint_names: Sequence[str]):
        """Initialize body.

        Args:
            joint_names: Joint names in actuation order
        """
        self.joints: List[Joint] = [Joint(name=name) for name in joint_names]

    @property
    def num_joints(self) -> int:
        return len(self.joints)

    def joint(self, index: int) -> Joint:
        return self.joints[index]

    def enable_position_control(self) -> None:
        """Switch every joint to angle actuation and enable its IO."""
        for joint in self.joints:
            joint.actuation_mode = ActuationMode.JOINT_ANGLE
            joint.io_enabled = True

    def apply_targets(self, targets: np.ndarray) -> None:
        """Write one target per joint.

        Raises:
            ValueError: If the target count does not match the joint count
            RuntimeError: If a joint has not been enabled for IO
        """
        targets = np.asarray(targets, dtype=float)
        if targets.shape != (self.num_joints,):
            raise ValueError(
                f"Expected {self.num_joints} joint targets, got shape {targets.shape}"
            )
        for joint, target in zip(self.joints, targets):
            if not joint.io_enabled:
                raise RuntimeError(f"Joint '{joint.name}' IO not enabled")
            joint.q_target = float(target)

    def get_targets(self) -> np.ndarray:
        return np.array([joint.q_target for joint in self.joints], dtype=float)
