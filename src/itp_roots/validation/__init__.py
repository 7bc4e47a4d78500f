from .exceptions import BracketingError, ConfigurationError, IntervalDefinitionError

__all__ = [
    "BracketingError",
    "ConfigurationError",
    "IntervalDefinitionError",
]
