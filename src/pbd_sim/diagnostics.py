# MIT License (see LICENSE)
"""
Residual reporting for constraint sets.

Used to check convergence and debug stability: a fully satisfied set of
equality constraints has all residuals at zero. One-sided collision
constraints report positive values while the particle is clear of the
plane, so callers usually look at the negative part for those.
"""
from __future__ import annotations
from collections.abc import Sequence

import numpy as np

from .constraints.base import Constraint


def constraint_residuals(constraints: Sequence[Constraint]) -> np.ndarray:
    """
    Current violation of each constraint.

    Args:
        constraints: Constraints to evaluate.

    Returns:
        Array of calculate_value() results, same order as constraints.
    """
    return np.array([c.calculate_value() for c in constraints], dtype=np.float64)


def max_residual(constraints: Sequence[Constraint]) -> float:
    """Largest absolute violation, or 0.0 for an empty sequence."""
    if len(constraints) == 0:
        return 0.0
    return float(np.max(np.abs(constraint_residuals(constraints))))
