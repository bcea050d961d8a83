"""Tests for the joint actuation interface."""

import numpy as np
import pytest

from pa10_control.hardware.joint_body import ActuationMode, Body


def test_apply_targets():
    """Test targets are written to each enabled joint."""
    body = Body(["a", "b", "c"])
    body.enable_position_control()

    body.apply_targets(np.array([0.1, -0.2, 0.3]))

    assert body.num_joints == 3
    assert body.joint(1).q_target == pytest.approx(-0.2)
    assert body.joint(2).actuation_mode == ActuationMode.JOINT_ANGLE
    np.testing.assert_array_almost_equal(body.get_targets(), [0.1, -0.2, 0.3])


def test_apply_targets_requires_io():
    """Test writing to joints without IO enabled raises."""
    body = Body(["a"])

    with pytest.raises(RuntimeError):
        body.apply_targets([1.0])


def test_apply_targets_wrong_length():
    """Test target count must match the joint count."""
    body = Body(["a", "b"])
    body.enable_position_control()

    with pytest.raises(ValueError):
        body.apply_targets([1.0, 2.0, 3.0])
