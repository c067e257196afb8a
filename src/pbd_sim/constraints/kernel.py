# MIT License (see LICENSE)
"""
Shared position-correction step for every constraint type.

Given a violation C, its gradient ∇C (one 3-block per particle) and the
per-axis inverse masses w, the correction is

    s    = C / (∇Cᵀ · diag(w) · ∇C)
    Δx_i = -s · w_i · ∇C_i
    x_i += stiffness · Δx_i

which is the smallest mass-weighted move that zeroes the linearized
constraint. The kernel works for any arity; constraints use 1, 2 or 4.
"""
from __future__ import annotations
import logging
from collections.abc import Sequence

import numpy as np

from ..constants import GRAD_EPS
from ..types import Particle

logger = logging.getLogger(__name__)


def inverse_mass_vector(particles: Sequence[Particle]) -> np.ndarray:
    """
    Per-axis inverse masses, shape (3 * len(particles),).

    Each particle's inverse mass is repeated for x, y and z so the vector
    lines up with a stacked gradient.
    """
    w = np.array([p.inv_mass for p in particles], dtype=np.float64)
    return np.repeat(w, 3)


def project_positions(
    C: float,
    grad_C: np.ndarray,
    inv_m: np.ndarray,
    stiffness: float,
    particles: Sequence[Particle],
) -> None:
    """
    Apply the mass-weighted correction to the particles' predicted positions.

    Args:
        C: Constraint violation.
        grad_C: Gradient, shape (3N,), ordered like particles.
        inv_m: Per-axis inverse masses, shape (3N,).
        stiffness: Fraction of the full correction to apply, in [0, 1].
        particles: The N particles, corrected in place.

    Note:
        A numerically zero gradient means moving these particles cannot
        change C; the update is skipped. The same holds when every
        particle is pinned (the mass-weighted gradient vanishes).
    """
    if float(np.linalg.norm(grad_C)) <= GRAD_EPS:
        logger.debug("Zero gradient, skipping projection (C=%g)", C)
        return

    weighted = inv_m * grad_C
    if float(np.linalg.norm(weighted)) <= GRAD_EPS:
        logger.debug("All particles pinned, skipping projection (C=%g)", C)
        return

    s = C / float(np.dot(grad_C, weighted))
    delta_x = -s * weighted

    for j, p in enumerate(particles):
        p.position += stiffness * delta_x[3 * j:3 * j + 3]
