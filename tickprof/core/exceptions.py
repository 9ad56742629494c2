"""Custom exception types used across the profiler."""


class TickProfError(Exception):
    """Base exception for the project."""


class DoubleWrapError(TickProfError):
    """Raised when a callable that is already profiled is wrapped again."""


class InvalidTargetError(TickProfError):
    """Raised when a non-object value is registered for profiling."""


class MissingNameError(TickProfError):
    """Raised when no display name can be derived for a callable."""


class RegistryError(TickProfError):
    """Raised when a registry lookup fails."""


class ConfigurationError(TickProfError):
    """Raised when configuration or session arguments are invalid."""
