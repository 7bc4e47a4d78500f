from itp_roots.core import (
    AlgorithmConfig,
    IntervalProblem,
    ReturnCode,
    Solution,
)
from itp_roots.solve import solve
from itp_roots.validation.exceptions import (
    BracketingError,
    ConfigurationError,
    IntervalDefinitionError,
)

__all__ = [
    "AlgorithmConfig",
    "BracketingError",
    "ConfigurationError",
    "IntervalDefinitionError",
    "IntervalProblem",
    "ReturnCode",
    "Solution",
    "solve",
]
