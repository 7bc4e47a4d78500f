from __future__ import annotations

import dataclasses
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from itp_roots.core.return_code import ReturnCode
from itp_roots.validation.exceptions import IntervalDefinitionError

if TYPE_CHECKING:
    from itp_roots.core.config import AlgorithmConfig

DEFAULT_MAXITERS = 1000


def _is_finite(endpoint: Any) -> bool:
    try:
        return math.isfinite(endpoint)
    except TypeError:
        # tagged endpoints are checked on their primal values by the solver
        return True


@dataclass(frozen=True)
class IntervalProblem:
    """A scalar root-finding problem ``f(x, p) = 0`` on the interval ``tspan``.

    The order of ``tspan`` is significant: directional float stepping moves
    from ``tspan[0]`` toward ``tspan[1]``, so a reversed interval is allowed.
    """

    f: Callable[[Any, Any], Any]
    tspan: tuple[Any, Any]
    p: Any = None
    maxiters: int = DEFAULT_MAXITERS

    def __post_init__(self) -> None:
        if len(self.tspan) != 2:
            raise IntervalDefinitionError(
                f"tspan must be a pair (a, b), got {len(self.tspan)} values"
            )
        object.__setattr__(self, "tspan", tuple(self.tspan))
        a, b = self.tspan
        if not (_is_finite(a) and _is_finite(b)):
            raise IntervalDefinitionError(f"tspan endpoints must be finite, got {self.tspan!r}")
        try:
            degenerate = bool(a == b)
        except TypeError:
            degenerate = False
        if degenerate:
            raise IntervalDefinitionError(f"tspan endpoints must differ, got {self.tspan!r}")
        if self.maxiters < 0:
            raise IntervalDefinitionError("maxiters must be non-negative")

    def remake(self, **changes: Any) -> "IntervalProblem":
        """Copy of this problem with the given fields replaced."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class Solution:
    x: Any
    residual: Any
    left: Any
    right: Any
    status: ReturnCode
    iterations: int
    problem: IntervalProblem | None = None
    alg: "AlgorithmConfig | None" = None

    def __post_init__(self) -> None:
        # accept stored or serialised codes (int or name) as well as members
        object.__setattr__(self, "status", ReturnCode.from_value(self.status))

    @property
    def successful(self) -> bool:
        """True unless the iteration cap was hit before convergence."""
        return self.status.successful


__all__ = ["DEFAULT_MAXITERS", "IntervalProblem", "Solution"]
