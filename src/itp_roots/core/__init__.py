from .config import AlgorithmConfig, K2_UPPER_BOUND
from .itp import solve_itp
from .problem import DEFAULT_MAXITERS, IntervalProblem, Solution
from .return_code import ReturnCode

__all__ = [
    "AlgorithmConfig",
    "DEFAULT_MAXITERS",
    "IntervalProblem",
    "K2_UPPER_BOUND",
    "ReturnCode",
    "Solution",
    "solve_itp",
]
