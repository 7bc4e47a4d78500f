"""Interpolate-Truncate-Project bracketing root finder.

The method keeps a sign-changing bracket and, each iteration, replaces one of
its endpoints with a trial point that starts at the regula falsi estimate, is
truncated toward the midpoint, and is finally projected into a neighbourhood
of the midpoint whose radius halves every step. The projection bounds the
iteration count by the bisection count plus ``n0``, while the interpolation
gives superlinear convergence on well-behaved functions.

Reference: Oliveira & Takahashi, "An Enhancement of the Bisection Method
Average Performance Preserving Minmax Optimality", ACM TOMS 47(1), 2020.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import Any

import numpy as np

from itp_roots.core.bracket import BracketState, half_width, nextfloat_tdir, prevfloat_tdir
from itp_roots.core.config import AlgorithmConfig
from itp_roots.core.problem import IntervalProblem, Solution
from itp_roots.core.return_code import ReturnCode
from itp_roots.utils.promotion import machine_eps, to_working, working_dtype
from itp_roots.validation.exceptions import BracketingError, IntervalDefinitionError

logger = logging.getLogger(__name__)


def _build_solution(
    problem: IntervalProblem,
    alg: AlgorithmConfig,
    x: Any,
    residual: Any,
    left: Any,
    right: Any,
    status: ReturnCode,
    iterations: int,
) -> Solution:
    logger.debug(
        "ITP solve finished with %s after %d iteration(s): x=%r, bracket=(%r, %r)",
        status.name,
        iterations,
        x,
        left,
        right,
    )
    return Solution(
        x=x,
        residual=residual,
        left=left,
        right=right,
        status=status,
        iterations=iterations,
        problem=problem,
        alg=alg,
    )


def _check_bracket(problem: IntervalProblem, f_a: float, f_b: float) -> None:
    if not (np.sign(f_a) * np.sign(f_b) < 0):
        raise BracketingError(
            f"f(a)={f_a!r} and f(b)={f_b!r} on tspan={problem.tspan!r} do not have "
            "opposite signs; the interval is not known to contain a root."
        )


def _trial_point(state: BracketState, alg: AlgorithmConfig, initial_half_span: Any) -> Any:
    half_span = state.half_span
    state.radius = state.eps_scaled - half_span
    state.delta = alg.truncation(half_span, initial_half_span)

    ## Interpolation ##
    # left + (right - left) * ratio, taken in halves so no intermediate overflows
    f_left, f_right = state.f_left / 2, state.f_right / 2
    half_step = (state.right / 2 - state.left / 2) * (f_left / (f_left - f_right))
    state.x_interp = state.left + half_step + half_step

    ## Truncation ##
    state.sign_term = np.sign(state.mid - state.x_interp)
    if state.delta <= abs(state.mid - state.x_interp):
        x_t = state.x_interp + state.sign_term * state.delta
    else:
        x_t = state.mid

    ## Projection ##
    if abs(x_t - state.mid) <= state.radius:
        return x_t
    return state.mid - state.sign_term * state.radius


def solve_itp(
    problem: IntervalProblem,
    alg: AlgorithmConfig,
    maxiters: int | None = None,
) -> Solution:
    """Solve ``problem`` on plain (untagged) numbers.

    Raises BracketingError when neither endpoint is an exact root and the
    endpoint values do not have opposite signs. Every other outcome is
    reported through ``Solution.status``.
    """
    maxiters = problem.maxiters if maxiters is None else maxiters
    if maxiters < 0:
        raise IntervalDefinitionError("maxiters must be non-negative")

    dtype = working_dtype(*problem.tspan)
    a, b = (to_working(t, dtype) for t in problem.tspan)
    p = problem.p
    fn: Callable[[Any, Any], Any] = problem.f

    def f(x: Any) -> float:
        return float(fn(x, p))

    f_a, f_b = f(a), f(b)
    if f_a == 0:
        return _build_solution(problem, alg, a, f_a, a, b, ReturnCode.ExactSolutionLeft, 0)
    if f_b == 0:
        return _build_solution(problem, alg, b, f_b, a, b, ReturnCode.ExactSolutionRight, 0)
    _check_bracket(problem, f_a, f_b)

    eps = machine_eps(dtype)
    initial_half_span = half_width(a, b)
    # zero only for an interval of two adjacent subnormals
    n_half = math.ceil(math.log2(initial_half_span) - math.log2(eps)) if initial_half_span else 0
    state = BracketState(
        left=a,
        right=b,
        f_left=f_a,
        f_right=f_b,
        eps=float(eps),
        budget=n_half + alg.n0,
    )

    while state.iteration < maxiters:
        x_p = to_working(_trial_point(state, alg, initial_half_span), dtype)

        ## Update ##
        lower, upper = state.bounds()
        if x_p >= upper:
            x_p = prevfloat_tdir(upper, lower, upper)
        if x_p <= lower:
            x_p = nextfloat_tdir(lower, lower, upper)
        y_p = f(x_p)
        y_ps = y_p * np.sign(state.f_right)
        if y_ps > 0:
            state.replace_right(x_p, y_p)
        elif y_ps < 0:
            state.replace_left(x_p, y_p)
        else:
            left = prevfloat_tdir(x_p, a, b)
            state.replace_right(x_p, y_p)
            state.replace_left(left, f(left))
            return _build_solution(
                problem,
                alg,
                state.left,
                state.f_left,
                state.left,
                state.right,
                ReturnCode.Success,
                state.iteration + 1,
            )
        state.advance()

        if nextfloat_tdir(state.left, a, b) == state.right:
            return _build_solution(
                problem,
                alg,
                state.left,
                state.f_left,
                state.left,
                state.right,
                ReturnCode.FloatingPointLimit,
                state.iteration,
            )

    return _build_solution(
        problem,
        alg,
        state.left,
        state.f_left,
        state.left,
        state.right,
        ReturnCode.MaxIters,
        state.iteration,
    )


__all__ = ["solve_itp"]
