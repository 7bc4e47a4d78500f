import jax
import jax.numpy as jnp
import numpy as np
import pytest

import itp_roots.differentiation.dual as dual
from itp_roots import IntervalProblem, ReturnCode, solve
from itp_roots.differentiation import is_dual, root_sensitivity


def _square_root_problem(p) -> IntervalProblem:
    return IntervalProblem(lambda x, p: x**2 - p, (0.0, 10.0), p=p)


def test_plain_values_are_not_dual():
    assert not is_dual(4.0)
    assert not is_dual((np.array([1.0, 2.0]), (0.0, 1.0)))
    assert not is_dual(jnp.asarray(4.0))


def test_traced_values_are_dual():
    seen = []

    def record(p):
        seen.append(is_dual((p, (0.0, 1.0))))
        return p * 2.0

    jax.jvp(record, (4.0,), (1.0,))
    assert seen == [True]


def test_root_sensitivity_matches_implicit_function_theorem():
    sensitivity = root_sensitivity(lambda x, p: x**2 - p, 2.0, 4.0)
    assert float(sensitivity) == pytest.approx(0.25)


def test_jvp_of_root_matches_analytic_derivative():
    statuses = []

    def root(p):
        sol = solve(_square_root_problem(p))
        statuses.append(sol.status)
        return sol.x

    x, x_dot = jax.jvp(root, (4.0,), (1.0,))

    assert float(x) == pytest.approx(2.0, abs=1e-14)
    assert float(x_dot) == pytest.approx(1.0 / (2.0 * np.sqrt(4.0)))
    assert statuses[0].successful


def test_tangent_scales_with_direction():
    _, x_dot = jax.jvp(lambda p: solve(_square_root_problem(p)).x, (9.0,), (3.0,))
    assert float(x_dot) == pytest.approx(3.0 / 6.0)


def test_bracket_carries_root_tangent_and_residual_is_stationary():
    def outputs(p):
        sol = solve(_square_root_problem(p))
        return sol.left, sol.right, sol.residual

    (left, right, residual), (left_dot, right_dot, residual_dot) = jax.jvp(
        outputs, (4.0,), (1.0,)
    )

    assert float(left) == pytest.approx(2.0, abs=1e-14)
    assert float(right) == pytest.approx(2.0, abs=1e-14)
    assert abs(float(residual)) < 1e-14
    assert float(left_dot) == pytest.approx(0.25)
    assert float(right_dot) == pytest.approx(0.25)
    assert float(residual_dot) == 0.0


def test_grad_of_root():
    grad = jax.grad(lambda p: solve(_square_root_problem(p)).x)(4.0)
    assert float(grad) == pytest.approx(0.25)


def test_vector_parameter_sums_partials():
    # p[0] * x - p[1] = 0  ->  x = p[1] / p[0]
    def root(p):
        problem = IntervalProblem(lambda x, p: p[0] * x - p[1], (0.0, 10.0), p=p)
        return solve(problem).x

    p = jnp.array([2.0, 3.0])
    _, x_dot = jax.jvp(root, (p,), (jnp.array([1.0, 1.0]),))
    # dx/dp0 = -p1 / p0**2 = -0.75, dx/dp1 = 1 / p0 = 0.5
    assert float(x_dot) == pytest.approx(-0.75 + 0.5)

    gradient = jax.grad(root)(p)
    np.testing.assert_allclose(np.asarray(gradient), [-0.75, 0.5], rtol=1e-12)


def test_forward_jacobian_over_vector_parameter():
    def root(p):
        problem = IntervalProblem(lambda x, p: p[0] * x - p[1], (0.0, 10.0), p=p)
        return solve(problem).x

    jacobian = jax.jacfwd(root)(jnp.array([2.0, 3.0]))
    np.testing.assert_allclose(np.asarray(jacobian), [-0.75, 0.5], rtol=1e-12)


def test_interval_tangents_do_not_move_the_root():
    def root(b):
        return solve(IntervalProblem(lambda x, p: x**2 - p, (0.0, b), p=4.0)).x

    x, x_dot = jax.jvp(root, (10.0,), (1.0,))
    assert float(x) == pytest.approx(2.0, abs=1e-14)
    assert float(x_dot) == 0.0


def test_primal_problem_is_solved_once(monkeypatch):
    calls = []
    original = dual.solve_itp

    def counting_solve(problem, alg, maxiters=None):
        calls.append(problem)
        return original(problem, alg, maxiters)

    monkeypatch.setattr(dual, "solve_itp", counting_solve)
    jax.jvp(lambda p: solve(_square_root_problem(p)).x, (4.0,), (1.0,))

    assert len(calls) == 1
    assert not is_dual(calls[0].p)


def test_status_and_iterations_come_from_the_primal_solve():
    captured = []

    def root(p):
        sol = solve(_square_root_problem(p), maxiters=3)
        captured.append(sol)
        return sol.x

    x, _ = jax.jvp(root, (4.0,), (1.0,))
    primal = solve(_square_root_problem(4.0), maxiters=3)

    assert captured[0].status is ReturnCode.MaxIters
    assert captured[0].iterations == primal.iterations == 3
    assert float(x) == pytest.approx(primal.x)


def _sqrt_root(p):
    return solve(_square_root_problem(p)).x


def test_second_derivative_of_root():
    # x = sqrt(p)  ->  x'' = -p ** -1.5 / 4 = -1/32 at p = 4
    assert float(jax.grad(jax.grad(_sqrt_root))(4.0)) == pytest.approx(-1.0 / 32.0)
    assert float(jax.hessian(_sqrt_root)(4.0)) == pytest.approx(-1.0 / 32.0)


def test_nested_jvp_of_root():
    def first_derivative(p):
        return jax.jvp(_sqrt_root, (p,), (1.0,))[1]

    x_dot, x_ddot = jax.jvp(first_derivative, (4.0,), (1.0,))
    assert float(x_dot) == pytest.approx(0.25)
    assert float(x_ddot) == pytest.approx(-1.0 / 32.0)


def test_hessian_over_vector_parameter():
    # x = p1 / p0
    def root(p):
        problem = IntervalProblem(lambda x, p: p[0] * x - p[1], (0.0, 10.0), p=p)
        return solve(problem).x

    hessian = jax.hessian(root)(jnp.array([2.0, 3.0]))
    np.testing.assert_allclose(
        np.asarray(hessian), [[0.75, -0.25], [-0.25, 0.0]], rtol=1e-10, atol=1e-12
    )


def test_untagged_interval_keeps_its_python_floats(monkeypatch):
    calls = []
    original = dual.solve_itp

    def counting_solve(problem, alg, maxiters=None):
        calls.append(problem)
        return original(problem, alg, maxiters)

    monkeypatch.setattr(dual, "solve_itp", counting_solve)
    x, _ = jax.jvp(_sqrt_root, (4.0,), (1.0,))

    assert calls[0].tspan == (0.0, 10.0)
    assert all(type(t) is float for t in calls[0].tspan)
    assert float(x) == pytest.approx(2.0, abs=1e-14)
