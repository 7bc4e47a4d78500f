from collections.abc import Callable

import jax
import pytest

from itp_roots import AlgorithmConfig, IntervalProblem

jax.config.update("jax_enable_x64", True)


class CountingFunction:
    """Wraps f(x, p) and records every point it is evaluated at."""

    def __init__(self, f: Callable):
        self.f = f
        self.points: list[float] = []

    def __call__(self, x, p):
        self.points.append(float(x))
        return self.f(x, p)

    @property
    def calls(self) -> int:
        return len(self.points)


def step(threshold: float) -> Callable:
    """A sign change with no exact zero; ITP degrades to plain bisection on it."""

    def f(x, p):
        return -1.0 if x < threshold else 1.0

    return f


@pytest.fixture()
def default_alg() -> AlgorithmConfig:
    return AlgorithmConfig()


@pytest.fixture()
def linear_problem() -> IntervalProblem:
    return IntervalProblem(lambda x, p: x - 0.5, (0.0, 1.0))


@pytest.fixture()
def step_function() -> CountingFunction:
    return CountingFunction(step(0.3))


@pytest.fixture()
def step_problem(step_function) -> IntervalProblem:
    return IntervalProblem(step_function, (0.0, 1.0))


@pytest.fixture()
def counting() -> type[CountingFunction]:
    return CountingFunction


@pytest.fixture()
def make_step() -> Callable[[float], Callable]:
    return step
