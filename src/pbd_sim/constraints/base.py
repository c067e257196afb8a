# MIT License (see LICENSE)
"""
Abstract constraint shared by all position-based constraint types.

A constraint spans a fixed number of particles (its arity), carries a
stiffness in [0, 1] and exposes three operations:

- calculate_value(): the scalar violation C (0 when satisfied).
- calculate_grad(): ∇C stacked per particle, shape (3 * arity,).
- project_particles(): the only mutating call; corrects positions.

Particle order is meaningful: gradient block i belongs to particle i.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

from ..types import Particle
from .kernel import inverse_mass_vector, project_positions

logger = logging.getLogger(__name__)


class Constraint(ABC):
    """
    Base class for constraints over 1-4 particles.

    Subclasses set ARITY and implement calculate_value / calculate_grad.
    The inverse mass vector is cached at construction; later changes to a
    particle's inv_mass are not seen by existing constraints.

    Attributes:
        particles: The constrained particles, in gradient order.
        stiffness: Per-iteration relaxation fraction (1.0 = full correction).
    """
    ARITY: int = 0

    def __init__(self, particles: Sequence[Particle], stiffness: float = 1.0) -> None:
        particles = tuple(particles)
        if len(particles) != self.ARITY:
            raise ValueError(
                f"{type(self).__name__} needs {self.ARITY} particle(s), got {len(particles)}"
            )
        if not 0.0 <= stiffness <= 1.0:
            raise ValueError(f"Stiffness must be in [0, 1], got {stiffness}")

        self.particles = particles
        self.stiffness = float(stiffness)
        self._inv_m = inverse_mass_vector(particles)

    @property
    def arity(self) -> int:
        return self.ARITY

    @property
    def inv_m(self) -> np.ndarray:
        """Cached per-axis inverse masses (copy)."""
        return self._inv_m.copy()

    @abstractmethod
    def calculate_value(self) -> float:
        """Current violation C. Does not modify any particle."""

    @abstractmethod
    def calculate_grad(self) -> np.ndarray:
        """Current gradient ∇C, shape (3 * arity,). Does not modify any particle."""

    def project_particles(self) -> None:
        """Correct the particles' predicted positions toward C = 0."""
        C = self.calculate_value()
        grad_C = self.calculate_grad()
        project_positions(C, grad_C, self._inv_m, self.stiffness, self.particles)

    def _positions(self) -> list[np.ndarray]:
        return [p.position for p in self.particles]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(arity={self.ARITY}, stiffness={self.stiffness})"
