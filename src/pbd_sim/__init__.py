# MIT License (see LICENSE)
"""
pbd_sim - Constraint projection for Position-Based Dynamics.

This package provides the constraint side of a PBD solver: geometric
constraints over point masses, each with a violation, a gradient and a
projection that corrects predicted positions weighted by inverse mass.
Time integration, collision detection and the outer iteration loop
belong to the owning engine.

Main entry points:
    - Particle: predicted position, rest position and inverse mass.
    - DistanceConstraint, FixedPointConstraint,
      EnvironmentalCollisionConstraint, BendingConstraint,
      IsometricBendingConstraint: the constraint types.
    - project_constraints: one or more Gauss-Seidel passes.

Submodules:
    - constraints: Constraint types and the projection kernel.
    - diagnostics: Residual reporting.
    - profiler: Section timing.

Example:
    from pbd_sim import Particle, DistanceConstraint

    a = Particle(position=(0, 0, 0))
    b = Particle(position=(2, 0, 0))
    c = DistanceConstraint([a, b], distance=1.0)
    c.project_particles()
"""
import logging

from .types import Particle
from .constraints import (
    Constraint,
    DistanceConstraint,
    FixedPointConstraint,
    EnvironmentalCollisionConstraint,
    BendingConstraint,
    IsometricBendingConstraint,
    project_constraints,
)
from .diagnostics import constraint_residuals, max_residual
from .profiler import Profiler

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Particle",
    # Constraints
    "Constraint",
    "DistanceConstraint",
    "FixedPointConstraint",
    "EnvironmentalCollisionConstraint",
    "BendingConstraint",
    "IsometricBendingConstraint",
    # Relaxation and reporting
    "project_constraints",
    "constraint_residuals",
    "max_residual",
    "Profiler",
]
