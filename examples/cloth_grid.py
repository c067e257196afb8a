"""
Helpers shared by the example and benchmark: a square cloth patch.

Builds an n×n grid of particles in the y=0 plane with structural
distance constraints and one bending constraint per interior edge.
"""
from pbd_sim import Particle, DistanceConstraint, BendingConstraint, IsometricBendingConstraint


def make_cloth(n: int, size: float = 1.0, isometric: bool = False, stiffness: float = 1.0, bend_stiffness: float = 0.1):
    h = size / (n - 1)
    particles = [
        Particle(position=(ix * h - 0.5 * size, 0.0, iz * h - 0.5 * size))
        for iz in range(n) for ix in range(n)
    ]

    def idx(ix, iz):
        return iz * n + ix

    # Triangles: each quad split along its (ix,iz)-(ix+1,iz+1) diagonal
    triangles = []
    for iz in range(n - 1):
        for ix in range(n - 1):
            a, b, c, d = idx(ix, iz), idx(ix + 1, iz), idx(ix + 1, iz + 1), idx(ix, iz + 1)
            triangles.append((a, b, c))
            triangles.append((a, c, d))

    # Edge -> opposite vertices
    edges: dict[tuple[int, int], list[int]] = {}
    for tri in triangles:
        for k in range(3):
            i, j, o = tri[k], tri[(k + 1) % 3], tri[(k + 2) % 3]
            edges.setdefault((min(i, j), max(i, j)), []).append(o)

    constraints = []
    for (i, j) in edges:
        constraints.append(DistanceConstraint([particles[i], particles[j]], stiffness=stiffness))

    bend_type = IsometricBendingConstraint if isometric else BendingConstraint
    for (i, j), opposite in edges.items():
        if len(opposite) == 2:
            hinge = [particles[i], particles[j], particles[opposite[0]], particles[opposite[1]]]
            constraints.append(bend_type(hinge, stiffness=bend_stiffness))

    return particles, constraints
