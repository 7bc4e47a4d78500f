"""Numeric type helpers shared by the primal and the dual solve paths."""
from __future__ import annotations

from typing import Any

import numpy as np


def _promotion_operand(value: Any) -> Any:
    if isinstance(value, (bool, int, float)):
        return value
    return np.asarray(value).dtype


def working_dtype(*values: Any) -> np.dtype:
    """Common floating type of the interval endpoints.

    Integer and boolean endpoints promote to float64, as does anything numpy
    cannot place in a floating type.
    Python scalars are weakly typed, so ``(np.float32(0), 1.0)`` stays float32.
    """
    dtype = np.result_type(*(_promotion_operand(value) for value in values))
    if not np.issubdtype(dtype, np.floating):
        return np.dtype(np.float64)
    return dtype


def machine_eps(dtype: np.dtype) -> float:
    return np.finfo(dtype).eps


def to_working(value: Any, dtype: np.dtype) -> np.floating:
    return dtype.type(value)


__all__ = ["machine_eps", "to_working", "working_dtype"]
