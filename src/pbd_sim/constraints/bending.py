# MIT License (see LICENSE)
"""
Bending constraints over two triangles sharing an edge.

Particle layout for both constraints:

        x2
       /  \\
     x0 -- x1        (x0, x1) is the shared edge,
       \\  /          x2 and x3 are the opposite vertices.
        x3

BendingConstraint drives the dihedral angle between the two triangle
normals toward its rest value:

    p_k = x_k - x0,  n0 = p1×p2 / |p1×p2|,  n1 = p1×p3 / |p1×p3|
    C   = acos(clamp(n0·n1, -1, 1)) - θ_rest

The gradient goes through the derivative of a normalized cross product.
For n = (a×b)/|a×b| and a fixed vector v:

    ∂(n·v)/∂a = b × (v - n(n·v)) / |a×b|
    ∂(n·v)/∂b = (v - n(n·v)) × a / |a×b|

IsometricBendingConstraint uses the quadratic bending energy of
Bergou et al. (2006): C = ½ Σ Q_ij x_i·x_j, with Q built once from
cotangent weights of the rest shape. Its gradient is linear in x.
"""
from __future__ import annotations
import logging
import math
from collections.abc import Sequence

import numpy as np

from ..constants import DIHEDRAL_EPS, NORMALIZE_EPS
from ..types import Particle
from ..util import cot_theta, norm
from .base import Constraint

logger = logging.getLogger(__name__)


def _hinge(x0: np.ndarray, x1: np.ndarray, x2: np.ndarray, x3: np.ndarray):
    """
    Edge vectors, unnormalized normals and their lengths for a hinge.

    Returns (p1, p2, p3, c0, c1, l0, l1) with c0 = p1×p2, c1 = p1×p3.
    """
    p1 = x1 - x0
    p2 = x2 - x0
    p3 = x3 - x0
    c0 = np.cross(p1, p2)
    c1 = np.cross(p1, p3)
    return p1, p2, p3, c0, c1, norm(c0), norm(c1)


def dihedral_angle(x0: np.ndarray, x1: np.ndarray, x2: np.ndarray, x3: np.ndarray) -> float | None:
    """
    Angle in [0, π] between the normals of triangles (x0,x1,x2) and (x0,x1,x3).

    With this orientation a flat, unfolded pair of triangles measures π and
    a fully folded pair measures 0. Returns None if either triangle is
    collinear, since its normal is then undefined.
    """
    _, _, _, c0, c1, l0, l1 = _hinge(x0, x1, x2, x3)
    if l0 < NORMALIZE_EPS or l1 < NORMALIZE_EPS:
        return None
    d = float(np.dot(c0 / l0, c1 / l1))
    return math.acos(min(1.0, max(-1.0, d)))


class BendingConstraint(Constraint):
    """
    Dihedral-angle bending constraint.

    Args:
        particles: [x0, x1, x2, x3], with (x0, x1) the shared edge.
        stiffness: Relaxation fraction in [0, 1].
        dihedral_angle: Rest angle in radians. Defaults to the angle of the
                        particles' rest positions.

    Raises:
        ValueError: If the rest angle is not given and a rest triangle is
                    degenerate.
    """
    ARITY = 4

    def __init__(
        self,
        particles: Sequence[Particle],
        stiffness: float = 1.0,
        dihedral_angle: float | None = None,
    ) -> None:
        super().__init__(particles, stiffness)
        if dihedral_angle is None:
            dihedral_angle = _rest_angle(self.particles)
        self.dihedral_angle = float(dihedral_angle)
        logger.debug("BendingConstraint rest angle=%g stiffness=%g", self.dihedral_angle, self.stiffness)

    def calculate_value(self) -> float:
        angle = dihedral_angle(*self._positions())
        if angle is None:
            # Collinear triangle: no meaningful angle, report as satisfied
            return 0.0
        return angle - self.dihedral_angle

    def calculate_grad(self) -> np.ndarray:
        grad_C = np.zeros(12, dtype=np.float64)

        p1, p2, p3, c0, c1, l0, l1 = _hinge(*self._positions())
        if l0 < NORMALIZE_EPS or l1 < NORMALIZE_EPS:
            logger.debug("Collinear bending triangle, zero gradient")
            return grad_C

        n0 = c0 / l0
        n1 = c1 / l1
        d = float(np.dot(n0, n1))

        # acos' is unbounded at ±1: flat or fully folded hinge
        if 1.0 - abs(d) < DIHEDRAL_EPS:
            logger.debug("Degenerate dihedral (n0·n1=%g), zero gradient", d)
            return grad_C

        coeff = -1.0 / math.sqrt(1.0 - d * d)
        w0 = n1 - d * n0
        w1 = n0 - d * n1

        g1 = coeff * (np.cross(p2, w0) / l0 + np.cross(p3, w1) / l1)
        g2 = coeff * np.cross(w0, p1) / l0
        g3 = coeff * np.cross(w1, p1) / l1

        grad_C[0:3] = -(g1 + g2 + g3)
        grad_C[3:6] = g1
        grad_C[6:9] = g2
        grad_C[9:12] = g3
        return grad_C


def _rest_angle(particles: Sequence[Particle]) -> float:
    angle = dihedral_angle(*(p.rest_position for p in particles))
    if angle is None:
        raise ValueError("Rest dihedral angle undefined: a rest triangle is degenerate")
    return angle


def isometric_bending_matrix(
    x0: np.ndarray, x1: np.ndarray, x2: np.ndarray, x3: np.ndarray
) -> np.ndarray:
    """
    4×4 bending matrix Q for a hinge in its rest shape.

    K holds the cotangent Laplacian weights of the four vertices and
    Q = 3 / (A0 + A1) · K Kᵀ, where A0 and A1 are the two triangle areas.
    K sums to zero, so Q ignores rigid translations.

    Raises:
        ValueError: If either triangle is degenerate.
    """
    e0 = x1 - x0
    e1 = x2 - x1
    e2 = x0 - x2
    e3 = x3 - x0
    e4 = x1 - x3

    a0 = 0.5 * norm(np.cross(e0, e1))
    a1 = 0.5 * norm(np.cross(e0, e3))
    if a0 < NORMALIZE_EPS or a1 < NORMALIZE_EPS:
        raise ValueError("Isometric bending needs two non-degenerate rest triangles")

    cot_01 = cot_theta(e0, -e1)
    cot_02 = cot_theta(e0, -e2)
    cot_03 = cot_theta(e0, e3)
    cot_04 = cot_theta(e0, e4)

    K = np.array(
        [cot_01 + cot_04, cot_02 + cot_03, -cot_01 - cot_02, -cot_03 - cot_04],
        dtype=np.float64,
    )
    return (3.0 / (a0 + a1)) * np.outer(K, K)


class IsometricBendingConstraint(Constraint):
    """
    Quadratic (isometric) bending constraint.

    Q is computed from the rest positions at construction and never
    recomputed. C = ½ xᵀQx over the stacked positions; ∇C_i = Σ_j Q_ij x_j.

    Args:
        particles: [x0, x1, x2, x3], with (x0, x1) the shared edge.
        stiffness: Relaxation fraction in [0, 1].
    """
    ARITY = 4

    def __init__(self, particles: Sequence[Particle], stiffness: float = 1.0) -> None:
        super().__init__(particles, stiffness)
        self._Q = isometric_bending_matrix(*(p.rest_position for p in self.particles))
        logger.debug("IsometricBendingConstraint stiffness=%g", self.stiffness)

    @property
    def Q(self) -> np.ndarray:
        """The 4×4 bending matrix (copy)."""
        return self._Q.copy()

    def calculate_value(self) -> float:
        X = np.stack(self._positions())
        return 0.5 * float(np.sum(self._Q * (X @ X.T)))

    def calculate_grad(self) -> np.ndarray:
        X = np.stack(self._positions())
        return (self._Q @ X).ravel()
