from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


def nextfloat_tdir(x: np.floating, a: np.floating, b: np.floating) -> np.floating:
    """The representable float after ``x`` moving from ``a`` toward ``b``."""
    toward = np.inf if b > a else -np.inf
    return np.nextafter(x, x.dtype.type(toward))


def prevfloat_tdir(x: np.floating, a: np.floating, b: np.floating) -> np.floating:
    """The representable float before ``x`` moving from ``a`` toward ``b``."""
    toward = -np.inf if b > a else np.inf
    return np.nextafter(x, x.dtype.type(toward))


def half_width(x: np.floating, y: np.floating) -> np.floating:
    """Half of |y - x|, also when |y - x| itself overflows."""
    with np.errstate(over="ignore"):
        width = abs(y - x)
    if np.isfinite(width):
        return width / 2
    return abs(y / 2 - x / 2)


@dataclass
class BracketState:
    """Iteration state of a single ITP solve.

    ``left`` and ``right`` keep the caller's orientation; ``f_left`` and
    ``f_right`` are always the function values at the current endpoints.
    """

    left: np.floating
    right: np.floating
    f_left: float
    f_right: float
    eps: float
    budget: int
    mid: np.floating = field(init=False)
    iteration: int = 0

    # per-step scalars, kept for inspection of the last step
    x_interp: float = 0.0
    radius: float = 0.0
    delta: float = 0.0
    sign_term: float = 0.0

    def __post_init__(self) -> None:
        self.mid = self.left / 2 + self.right / 2

    @property
    def eps_scaled(self) -> float:
        """eps * 2 ** (budget - iteration); infinite while that exceeds the float range."""
        try:
            return math.ldexp(self.eps, self.budget - self.iteration)
        except OverflowError:
            return math.inf

    @property
    def half_span(self) -> np.floating:
        return half_width(self.left, self.right)

    def bounds(self) -> tuple[np.floating, np.floating]:
        """The current bracket as (lower, upper)."""
        return min(self.left, self.right), max(self.left, self.right)

    def replace_right(self, x: np.floating, fx: float) -> None:
        self.right = x
        self.f_right = fx

    def replace_left(self, x: np.floating, fx: float) -> None:
        self.left = x
        self.f_left = fx

    def advance(self) -> None:
        """Close out an iteration: count it and re-centre. The radius budget halves with it."""
        self.iteration += 1
        self.mid = self.left / 2 + self.right / 2


__all__ = ["BracketState", "half_width", "nextfloat_tdir", "prevfloat_tdir"]
