# MIT License (see LICENSE)
"""
Position-based constraint types and the shared projection kernel.

This subpackage provides:
    - Constraint: abstract base (calculate_value / calculate_grad / project_particles).
    - DistanceConstraint: fixed distance between two particles.
    - FixedPointConstraint: pin a particle to an anchor point.
    - EnvironmentalCollisionConstraint: keep a particle above a plane.
    - BendingConstraint: dihedral-angle bending over two triangles.
    - IsometricBendingConstraint: quadratic cotangent-weighted bending.
    - project_positions: the mass-weighted correction used by all of them.
    - project_constraints: Gauss-Seidel passes over a constraint list.

Typical usage:
    from pbd_sim.constraints import DistanceConstraint, project_constraints

    c = DistanceConstraint([p0, p1], distance=1.0, stiffness=0.9)
    project_constraints([c], iters=10)
"""
from .base import Constraint
from .bending import (
    BendingConstraint,
    IsometricBendingConstraint,
    dihedral_angle,
    isometric_bending_matrix,
)
from .distance import DistanceConstraint
from .kernel import inverse_mass_vector, project_positions
from .point import EnvironmentalCollisionConstraint, FixedPointConstraint
from .solver import project_constraints

__all__ = [
    "Constraint",
    # Constraint types
    "DistanceConstraint",
    "FixedPointConstraint",
    "EnvironmentalCollisionConstraint",
    "BendingConstraint",
    "IsometricBendingConstraint",
    # Kernel
    "project_positions",
    "inverse_mass_vector",
    # Geometry helpers
    "dihedral_angle",
    "isometric_bending_matrix",
    # Relaxation
    "project_constraints",
]
