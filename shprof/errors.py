"""Exception hierarchy."""

from __future__ import annotations


class ShprofError(Exception):
    """Base class for profiler errors."""


class InvalidNameError(ShprofError, ValueError):
    """Function name or state directory cannot form a state-file path."""


class ConfigError(ShprofError):
    """Configuration file or override could not be applied."""


__all__ = ["ShprofError", "InvalidNameError", "ConfigError"]
