"""Joint trajectory and angle-pattern control for the PA10 manipulator."""

from pa10_control.errors import ConfigurationError

__version__ = "0.1.0"

__all__ = ["ConfigurationError", "__version__"]
