# MIT License (see LICENSE)
"""
Core type definitions for position-based dynamics.

Defines the Particle: the point mass whose predicted position the
constraints read and correct. Particles belong to the owning engine;
constraints keep references to them but never create or destroy them.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .util import f64


@dataclass(eq=False)
class Particle:
    """
    A point mass as seen by the constraint solver.

    Attributes:
        position: Predicted position [x, y, z]. Corrected in place by
                  constraint projections, so every constraint sharing this
                  particle observes the same array.
        rest_position: Reference geometry [x, y, z]. Only read when a
                       constraint is constructed (rest lengths, rest angles,
                       bending matrices). Defaults to a copy of position.
        inv_mass: Inverse mass 1/m. Zero marks an immovable particle.

    Note:
        Equality is identity: two particles at the same place are still
        different particles.
    """
    position: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    rest_position: np.ndarray | tuple[float, float, float] | None = None
    inv_mass: float = 1.0

    def __post_init__(self) -> None:
        """Convert positions to float64 arrays and check the inverse mass."""
        self.position = f64(self.position)
        if self.position.shape != (3,):
            raise ValueError(f"Particle position must have 3 components, got shape {self.position.shape}")
        if self.rest_position is None:
            self.rest_position = self.position.copy()
        else:
            self.rest_position = f64(self.rest_position)
            if self.rest_position.shape != (3,):
                raise ValueError(
                    f"Particle rest position must have 3 components, got shape {self.rest_position.shape}"
                )
        self.inv_mass = float(self.inv_mass)
        if self.inv_mass < 0.0:
            raise ValueError(f"Inverse mass must be non-negative, got {self.inv_mass}")

    @classmethod
    def from_mass(
        cls,
        position: np.ndarray | tuple[float, float, float],
        mass: float,
        rest_position: np.ndarray | tuple[float, float, float] | None = None,
    ) -> Particle:
        """Build a particle from its mass. Use mass ≤ 0 for a pinned particle."""
        inv_mass = 0.0 if mass <= 0 else 1.0 / mass
        return cls(position=position, rest_position=rest_position, inv_mass=inv_mass)

    @property
    def mass(self) -> float:
        """Mass m. Returns inf for pinned particles (inv_mass == 0)."""
        return float("inf") if self.inv_mass == 0.0 else 1.0 / self.inv_mass

    @property
    def is_pinned(self) -> bool:
        return self.inv_mass == 0.0
