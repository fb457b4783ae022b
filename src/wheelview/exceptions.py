"""
Error Types
===========
All errors raised by the wheel engine derive from WheelViewError.

Out-of-range item positions are NOT errors: they are the "empty" positions of a
non-repeatable wheel and are handled by the selection/cache layer.
"""


class WheelViewError(Exception):
    """Base class for every error raised by wheelview."""


class ConfigurationError(WheelViewError, ValueError):
    """Invalid configuration value (radius, item count, transformer, ...)."""


class NoAdapterError(WheelViewError, RuntimeError):
    """An operation needs adapter items but none are available."""
