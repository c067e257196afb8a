# MIT License (see LICENSE)
"""
Single-particle constraints: pin to a point and keep above a plane.

FixedPointConstraint:
    C  = |x - point|        (always ≥ 0)
    ∇C = (x - point) / |x - point|, zero when x == point

EnvironmentalCollisionConstraint (one-sided):
    C  = n·x - d,  projected only while C < 0
    ∇C = n
"""
from __future__ import annotations
import logging
from collections.abc import Sequence

import numpy as np

from ..constants import NORMALIZE_EPS
from ..types import Particle
from ..util import f64, norm, unit
from .base import Constraint
from .kernel import project_positions

logger = logging.getLogger(__name__)


class FixedPointConstraint(Constraint):
    """
    Pulls a particle onto an anchor point.

    Args:
        particles: [p].
        point: Anchor [x, y, z]. Defaults to the particle's rest position.
        stiffness: Relaxation fraction in [0, 1].
    """
    ARITY = 1

    def __init__(
        self,
        particles: Sequence[Particle],
        point: np.ndarray | tuple[float, float, float] | None = None,
        stiffness: float = 1.0,
    ) -> None:
        super().__init__(particles, stiffness)
        if point is None:
            point = self.particles[0].rest_position
        self.point = f64(point)
        logger.debug("FixedPointConstraint point=%s stiffness=%g", self.point, self.stiffness)

    def calculate_value(self) -> float:
        return norm(self.particles[0].position - self.point)

    def calculate_grad(self) -> np.ndarray:
        n = unit(self.particles[0].position - self.point)
        if n is None:
            # Already on the anchor; the kernel skips a zero gradient
            return np.zeros(3, dtype=np.float64)
        return n


class EnvironmentalCollisionConstraint(Constraint):
    """
    Keeps a particle in the half-space n·x - d ≥ 0 (floor, wall).

    Args:
        particles: [p].
        normal: Plane normal; normalized here, with offset scaled to match
                so the half-space itself is unchanged.
        offset: Plane offset d.
        stiffness: Relaxation fraction in [0, 1].
    """
    ARITY = 1

    def __init__(
        self,
        particles: Sequence[Particle],
        normal: np.ndarray | tuple[float, float, float],
        offset: float = 0.0,
        stiffness: float = 1.0,
    ) -> None:
        super().__init__(particles, stiffness)
        n = f64(normal)
        length = norm(n)
        if length < NORMALIZE_EPS:
            raise ValueError("Collision plane normal must be non-zero")

        self.normal = n / length
        self.offset = float(offset) / length
        logger.debug(
            "EnvironmentalCollisionConstraint n=%s d=%g stiffness=%g",
            self.normal, self.offset, self.stiffness,
        )

    def calculate_value(self) -> float:
        return float(np.dot(self.normal, self.particles[0].position)) - self.offset

    def calculate_grad(self) -> np.ndarray:
        return self.normal.copy()

    def project_particles(self) -> None:
        """Push the particle back onto the plane if it has penetrated."""
        C = self.calculate_value()
        if C >= 0.0:
            return
        project_positions(C, self.calculate_grad(), self._inv_m, self.stiffness, self.particles)
