# MIT License (see LICENSE)
"""
Distance constraint between two particles (cloth edges, ropes, struts).

    C  = |x0 - x1| - d
    ∇C = [ n, -n ],  n = (x0 - x1) / |x0 - x1|

When the two particles coincide n is undefined; a random unit direction
is used instead so the projection can still push them apart.
"""
from __future__ import annotations
import logging
from collections.abc import Sequence

import numpy as np

from ..types import Particle
from ..util import default_rng, norm, random_unit, unit
from .base import Constraint

logger = logging.getLogger(__name__)


class DistanceConstraint(Constraint):
    """
    Keeps two particles at a fixed distance.

    Args:
        particles: [p0, p1].
        distance: Target distance d ≥ 0. Defaults to the distance between
                  the particles' rest positions.
        stiffness: Relaxation fraction in [0, 1].
        rng: Generator for the coincident-point fallback direction.
             Defaults to util.default_rng().
    """
    ARITY = 2

    def __init__(
        self,
        particles: Sequence[Particle],
        distance: float | None = None,
        stiffness: float = 1.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(particles, stiffness)
        if distance is None:
            p0, p1 = self.particles
            distance = norm(p0.rest_position - p1.rest_position)
        if distance < 0.0:
            raise ValueError(f"Target distance must be non-negative, got {distance}")

        self.distance = float(distance)
        self._rng = rng if rng is not None else default_rng()
        logger.debug("DistanceConstraint d=%g stiffness=%g", self.distance, self.stiffness)

    def calculate_value(self) -> float:
        x0, x1 = self._positions()
        return norm(x0 - x1) - self.distance

    def calculate_grad(self) -> np.ndarray:
        """
        Gradient [n, -n]. Particle positions are never modified.

        For coincident particles each call draws a new direction from the
        constraint's generator, so repeated calls return different vectors.
        """
        x0, x1 = self._positions()
        n = unit(x0 - x1)
        if n is None:
            logger.debug("Coincident particles, using a random separation direction")
            n = random_unit(self._rng)
        return np.concatenate([n, -n])
