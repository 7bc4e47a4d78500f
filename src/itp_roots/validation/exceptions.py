class ConfigurationError(Exception):
    """
    Raised when an ITP algorithm configuration is constructed with tuning
      constants outside of their admissible ranges.
    """


class IntervalDefinitionError(ValueError):
    """
    Raised when an interval problem is defined with a degenerate or non-finite
      interval, or with a negative iteration cap.
    """


class BracketingError(ValueError):
    """
    Raised when the function values at the two interval endpoints do not have
      strictly opposite signs, so the interval is not known to contain a root.
    """
