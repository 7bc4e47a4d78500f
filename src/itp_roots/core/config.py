from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from itp_roots.validation.exceptions import ConfigurationError

# 1 + golden ratio; the upper bound on k2 that keeps the worst case bisection-grade
K2_UPPER_BOUND = 2.618033988749895


class AlgorithmConfig(BaseModel):
    """Tuning constants of the ITP method.

    Built once and shared read-only between solves.
    """

    scaled_k1: float = Field(
        default=0.2,
        description=(
            "Truncation constant relative to the initial interval width. "
            "The effective k1 is scaled_k1 * |b - a| ** (1 - k2)."
        ),
    )
    k2: float = Field(
        default=2.0,
        description="Truncation exponent, in (1, 1 + golden ratio].",
    )
    n0: int = Field(
        default=0,
        description="Slack on the number of bisection steps allowed by the projection radius.",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")  # pyright: ignore[reportUnannotatedClassAttribute]

    @model_validator(mode="after")
    def _validate_constants(self) -> "AlgorithmConfig":
        if not (1.0 < self.k2 <= K2_UPPER_BOUND):
            raise ConfigurationError(
                f"Invalid value of k2={self.k2}. k2 must lie in (1, {K2_UPPER_BOUND}]."
            )
        if not (self.scaled_k1 > 0.0):
            raise ConfigurationError(
                f"Invalid value of k1={self.scaled_k1}. scaled_k1 must be positive."
            )
        if self.n0 < 0:
            raise ConfigurationError(
                f"Invalid value of n0={self.n0}. n0 must be non-negative."
            )
        return self

    @property
    def is_fast_path(self) -> bool:
        """k2 == 2 lets the truncation term use a product instead of a power."""
        return self.k2 == 2.0

    def truncation(self, half_span: float, initial_half_span: float) -> float:
        """delta = k1 * span ** k2, with k1 = scaled_k1 * span0 ** (1 - k2).

        Evaluated from half widths and their ratio,
        ``2 * scaled_k1 * h0 * (h / h0) ** k2``, so that neither the width of
        a near full-range interval nor its k2-th power overflows.
        """
        ratio = half_span / initial_half_span
        if self.is_fast_path:
            shrink = ratio * ratio
        else:
            shrink = ratio**self.k2
        return (2.0 * self.scaled_k1) * (initial_half_span * shrink)


__all__ = ["AlgorithmConfig", "K2_UPPER_BOUND"]
