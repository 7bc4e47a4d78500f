"""Public entry point for bracketed scalar root finding."""
from __future__ import annotations

from itp_roots.core.config import AlgorithmConfig
from itp_roots.core.itp import solve_itp
from itp_roots.core.problem import IntervalProblem, Solution
from itp_roots.differentiation.dual import is_dual, solve_dual


def solve(
    problem: IntervalProblem,
    alg: AlgorithmConfig | None = None,
    *,
    maxiters: int | None = None,
) -> Solution:
    """
    Find a root of ``problem.f(x, problem.p)`` inside ``problem.tspan``.

    :param problem: the function, parameter and sign-changing interval
    :type problem: IntervalProblem
    :param alg: ITP tuning constants, defaults to ``AlgorithmConfig()``
    :type alg: AlgorithmConfig | None
    :param maxiters: overrides ``problem.maxiters`` when given
    :type maxiters: int | None
    :return: the root estimate, residual, final bracket and return code
    :rtype: Solution
    """
    alg = AlgorithmConfig() if alg is None else alg
    if is_dual((problem.p, problem.tspan)):
        return solve_dual(problem, alg, maxiters)
    return solve_itp(problem, alg, maxiters)


__all__ = ["solve"]
