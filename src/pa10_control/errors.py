"""Exceptions raised by the PA10 control package."""


class ConfigurationError(ValueError):
    """Raised when controller setup receives invalid authoring data.

    Examples are an inverted random range, waypoints appended out of time
    order, a joint vector of the wrong length, or too few waypoints to
    build a trajectory.
    """
