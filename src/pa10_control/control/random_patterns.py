"""Random joint-angle pattern generation.

Patterns are drawn uniformly within each joint's symmetric limit. The
random source is always injected so runs can be reproduced from a seed.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from pa10_control.errors import ConfigurationError

logger = logging.getLogger(__name__)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a random generator, seeded when ``seed`` is given."""
    return np.random.default_rng(seed)


def generate_random_float(
    rng: np.random.Generator,
    low: float,
    high: float,
) -> float:
    """Draw a value uniformly from ``[low, high]``.

    Args:
        rng: Random source
        low: Lower bound
        high: Upper bound

    Returns:
        Drawn value; exactly ``low`` when ``low == high``

    Raises:
        ConfigurationError: If ``low > high``
    """
    if low > high:
        raise ConfigurationError(f"min must be less than or equal to max, got [{low}, {high}]")
    if low == high:
        return float(low)
    # uniform() excludes its upper bound; widen by one ulp so high is reachable.
    value = float(rng.uniform(low, np.nextafter(high, np.inf)))
    return min(value, float(high))


def generate_random_patterns(
    joint_limits_deg: Sequence[float],
    pattern_count: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Generate random joint-angle patterns within symmetric joint limits.

    Args:
        joint_limits_deg: Limit per joint; each joint is drawn from
            ``[-limit, +limit]`` (degrees)
        pattern_count: Number of patterns to generate
        rng: Random source

    Returns:
        Array of shape (pattern_count, joint_count), in degrees

    Raises:
        ConfigurationError: If a limit is negative or pattern_count < 1
    """
    if pattern_count < 1:
        raise ConfigurationError(f"pattern_count must be at least 1, got {pattern_count}")

    limits = [float(limit) for limit in joint_limits_deg]
    patterns = np.empty((pattern_count, len(limits)), dtype=float)
    for pattern_id in range(pattern_count):
        for joint_id, limit in enumerate(limits):
            patterns[pattern_id, joint_id] = generate_random_float(rng, -limit, limit)

    logger.debug(f"Generated {pattern_count} random patterns for {len(limits)} joints")
    return patterns
