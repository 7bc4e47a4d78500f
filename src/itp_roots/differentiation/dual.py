"""Forward-mode sensitivities of a bracketed root.

When the parameter of an interval problem is a JAX tracer (the value seen
inside ``jax.jvp``, ``jax.jacfwd`` or ``jax.grad``), the root is not
differentiated through the ITP iteration. Instead the primal problem is
solved once and the tangent of the root follows from the implicit function
theorem:

    dx/dp = -(df/dp) / (df/dx)    evaluated at (x*, p)

and, for a tangent ``p_dot`` of the parameter, ``x_dot = sum_i dx/dp_i * p_dot_i``.
The same tangent is attached to the reported bracket ends, which agree with
the root to floating point resolution at convergence. The residual carries a
zero tangent, its total derivative along the root manifold.

``f`` must be written with ``jax.numpy`` on this path, and the path is eager:
the primal solve needs concrete values, so it cannot run under ``jax.jit``.
"""
from __future__ import annotations

import logging
from typing import Any

import jax
import jax.numpy as jnp

from itp_roots.core.config import AlgorithmConfig
from itp_roots.core.itp import solve_itp
from itp_roots.core.problem import IntervalProblem, Solution

logger = logging.getLogger(__name__)


def is_dual(x: Any) -> bool:
    """True if any leaf of ``x`` carries forward-mode derivative information."""
    return any(isinstance(leaf, jax.core.Tracer) for leaf in jax.tree_util.tree_leaves(x))


def root_sensitivity(f: Any, x: Any, p: Any) -> Any:
    """dx/dp at a root ``x`` of ``f(., p)``, shaped like ``p``."""
    f_x = jax.grad(lambda u: f(u, p))(jnp.asarray(x))
    f_p = jax.grad(lambda q: f(x, q))(p)
    return jax.tree_util.tree_map(lambda g: g / -f_x, f_p)


def _contract(sensitivity: Any, p_dot: Any) -> Any:
    terms = jax.tree_util.tree_map(lambda s, t: jnp.sum(s * t), sensitivity, p_dot)
    return sum(jax.tree_util.tree_leaves(terms))


def _solve_layer(problem: IntervalProblem, alg: AlgorithmConfig, maxiters: int | None) -> Solution:
    # one tag layer is peeled per custom_jvp rule; outer layers are solved recursively
    if is_dual((problem.p, problem.tspan)):
        return solve_dual(problem, alg, maxiters)
    return solve_itp(problem, alg, maxiters)


def solve_dual(
    problem: IntervalProblem,
    alg: AlgorithmConfig,
    maxiters: int | None = None,
) -> Solution:
    """Solve a problem whose parameter (or interval) is dual-tagged.

    The returned Solution holds JAX values for ``x``, ``residual``, ``left``
    and ``right``; status and iteration count come from the primal solve.
    Nested transforms (``jax.hessian``, ``jax.jvp`` of ``jax.jvp``) solve the
    next layer down through the same adapter, once per differentiation order.
    An untagged interval is closed over, so the primal solve keeps its
    Python-float precision.
    """
    primal_solutions: list[Solution] = []

    def primal_solve(p: Any, tspan: tuple[Any, ...]) -> Solution:
        remade = problem.remake(p=p, tspan=tspan if tspan else problem.tspan)
        solution = _solve_layer(remade, alg, maxiters)
        primal_solutions.append(solution)
        return solution

    @jax.custom_jvp
    def tagged_root(p, *tspan):
        solution = primal_solve(p, tspan)
        return (
            jnp.asarray(solution.x),
            jnp.asarray(solution.residual),
            jnp.asarray(solution.left),
            jnp.asarray(solution.right),
        )

    @tagged_root.defjvp
    def tagged_root_jvp(primals, tangents):
        p, *tspan = primals
        p_dot = tangents[0]
        solution = primal_solve(p, tuple(tspan))
        x = jnp.asarray(solution.x)
        sensitivity = root_sensitivity(problem.f, x, p)
        logger.debug("Root sensitivity at x=%r: dx/dp=%r", solution.x, sensitivity)
        x_dot = jnp.asarray(_contract(sensitivity, p_dot), dtype=x.dtype)
        residual = jnp.asarray(solution.residual)
        left = jnp.asarray(solution.left)
        right = jnp.asarray(solution.right)
        return (x, residual, left, right), (
            x_dot,
            jnp.zeros_like(residual),
            x_dot.astype(left.dtype),
            x_dot.astype(right.dtype),
        )

    if is_dual(problem.tspan):
        outputs = tagged_root(problem.p, *problem.tspan)
    else:
        outputs = tagged_root(problem.p)
    x, residual, left, right = outputs
    primal = primal_solutions[-1]
    return Solution(
        x=x,
        residual=residual,
        left=left,
        right=right,
        status=primal.status,
        iterations=primal.iterations,
        problem=problem,
        alg=alg,
    )


__all__ = ["is_dual", "root_sensitivity", "solve_dual"]
