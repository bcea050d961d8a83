"""Angle unit conversions.

Joint patterns are often authored in degrees while the actuation layer
expects radians.
"""

from typing import Sequence, Union

import numpy as np

AngleInput = Union[float, Sequence[float], np.ndarray]
AngleOutput = Union[float, np.ndarray]


def deg2rad(deg: AngleInput) -> AngleOutput:
    """Convert an angle from degrees to radians.

    Args:
        deg: Angle in degrees (scalar, sequence or array)

    Returns:
        Angle in radians; a float for scalar input, otherwise an array of
        the same shape
    """
    if np.isscalar(deg):
        return float(deg) * np.pi / 180.0
    return np.asarray(deg, dtype=float) * np.pi / 180.0


def rad2deg(rad: AngleInput) -> AngleOutput:
    """Convert an angle from radians to degrees.

    Args:
        rad: Angle in radians (scalar, sequence or array)

    Returns:
        Angle in degrees; a float for scalar input, otherwise an array of
        the same shape
    """
    if np.isscalar(rad):
        return float(rad) * 180.0 / np.pi
    return np.asarray(rad, dtype=float) * 180.0 / np.pi
