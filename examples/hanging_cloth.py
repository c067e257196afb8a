"""
A cloth patch pinned at two corners, falling under gravity onto a floor.

The integration loop below stands in for the owning engine: it predicts
positions, hands them to the constraints, then derives velocities.
"""
import numpy as np

from pbd_sim import (
    DistanceConstraint,
    EnvironmentalCollisionConstraint,
    FixedPointConstraint,
    IsometricBendingConstraint,
    max_residual,
    project_constraints,
)
from cloth_grid import make_cloth

n = 12
particles, constraints = make_cloth(n, size=1.0, isometric=True)
for p in particles:
    p.position[1] += 0.5
    p.rest_position = p.position.copy()

pins = [FixedPointConstraint([particles[0]]), FixedPointConstraint([particles[n - 1]])]
floor = [EnvironmentalCollisionConstraint([p], normal=(0, 1, 0), offset=0.0) for p in particles]
all_constraints = constraints + pins + floor

g = np.array([0.0, -9.81, 0.0])
dt = 1 / 60
velocities = np.zeros((len(particles), 3))

for frame in range(120):
    x_prev = np.array([p.position for p in particles])
    for i, p in enumerate(particles):
        velocities[i] += dt * g * (p.inv_mass > 0)
        p.position += dt * velocities[i]

    project_constraints(all_constraints, iters=10)

    x_new = np.array([p.position for p in particles])
    velocities[:] = (x_new - x_prev) / dt

distance_constraints = [c for c in constraints if isinstance(c, DistanceConstraint)]
bending_constraints = [c for c in constraints if isinstance(c, IsometricBendingConstraint)]

print("lowest y:", float(min(p.position[1] for p in particles)))
print("max distance/pin residual:", max_residual(distance_constraints + pins))
print("max bending energy:", max_residual(bending_constraints))
