# MIT License (see LICENSE)
"""
Sequential (Gauss-Seidel) relaxation over a list of constraints.

Constraints are projected one after another in the order given, each
writing its correction before the next one reads positions. The order is
part of the result: later constraints see earlier corrections.

The caller chooses the number of passes; nothing here checks convergence.
Use diagnostics.max_residual for that.
"""
from __future__ import annotations
from collections.abc import Sequence

from ..profiler import Profiler
from .base import Constraint


def project_constraints(
    constraints: Sequence[Constraint],
    iters: int = 1,
    profiler: Profiler | None = None,
) -> None:
    """
    Project every constraint in order, iters times.

    Args:
        constraints: Constraints to relax, in visiting order.
        iters: Number of full passes. 0 is allowed and does nothing.
        profiler: Optional profiler; each projection is timed under the
                  constraint's class name.

    Note:
        Modifies particle positions in place.
    """
    if iters < 0:
        raise ValueError(f"Iteration count must be non-negative, got {iters}")

    for _ in range(iters):
        if profiler is None:
            for c in constraints:
                c.project_particles()
        else:
            for c in constraints:
                with profiler.section(type(c).__name__):
                    c.project_particles()
