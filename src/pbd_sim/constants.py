# MIT License (see LICENSE)
"""
Numerical tolerances shared by the constraint kernels.

All values are absolute and assume positions expressed in scene units
of order one (meters for typical cloth scenes).
"""
from __future__ import annotations

# Gradients with a Euclidean norm at or below this value are treated as zero.
# The projection kernel skips the update instead of dividing by ~0.
GRAD_EPS: float = 1e-12

# Bending gradient is undefined when |n0·n1| is this close to 1
# (flat or fully folded hinge). Matches double precision machine epsilon scale.
DIHEDRAL_EPS: float = 1e-12

# Vectors shorter than this are not normalized (coincident points,
# collinear triangle edges).
NORMALIZE_EPS: float = 1e-12

# Environment variable holding an integer seed for the random-direction
# fallback used by coincident distance constraints.
SEED_ENV_VAR: str = "PBD_SIM_SEED"
