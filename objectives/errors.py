"""Exceptions raised by optimization objectives."""


class ObjectiveError(Exception):
    """Base class for objective tracking failures."""


class InvalidArgumentError(ObjectiveError, ValueError):
    """Caller passed an empty document, an empty path, or an unusable setting."""


class ParseError(ObjectiveError, ValueError):
    """A located field could not be normalized into an exact decimal."""


class ConfigError(ObjectiveError):
    """Raised when a targets file is malformed or missing required fields."""
