# MIT License (see LICENSE)
"""
Utility functions for 3D vector math and numeric operations.

Small helpers used by every constraint: array conversion, guarded
normalization, cotangent of the angle between two edges, and the
random generator used when a direction is undefined.
All vector functions operate on numpy arrays of shape (3,).
"""
from __future__ import annotations
import os

import numpy as np

from .constants import NORMALIZE_EPS, SEED_ENV_VAR


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Always copies, so particles never alias caller-owned buffers.
    """
    return np.array(x, dtype=np.float64)


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 3D vector."""
    return float(np.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2]))


def unit(v: np.ndarray, eps: float = NORMALIZE_EPS) -> np.ndarray | None:
    """
    Return a unit vector in the same direction as v.

    Returns None if |v| < eps; callers decide how to treat the
    undefined direction.
    """
    n = norm(v)
    if n < eps:
        return None
    return v / n


def cot_theta(a: np.ndarray, b: np.ndarray) -> float:
    """
    Cotangent of the angle between a and b: (a·b) / |a × b|.

    Raises ValueError for parallel vectors, where the cotangent is unbounded.
    """
    sin_part = norm(np.cross(a, b))
    if sin_part < NORMALIZE_EPS:
        raise ValueError("Cotangent undefined for parallel edges")
    return float(np.dot(a, b)) / sin_part


def random_unit(rng: np.random.Generator) -> np.ndarray:
    """Uniformly distributed direction on the unit sphere."""
    while True:
        v = unit(rng.normal(size=3))
        if v is not None:
            return v


def default_rng() -> np.random.Generator:
    """
    Generator used by constraints that were not given one explicitly.

    Seeded from the PBD_SIM_SEED environment variable when it is set,
    otherwise from fresh OS entropy.
    """
    seed = os.environ.get(SEED_ENV_VAR)
    if seed is None or seed == "":
        return np.random.default_rng()
    return np.random.default_rng(int(seed))
