"""
Microbenchmark: time per Gauss-Seidel pass vs cloth resolution.
Run:
  python benchmarks/bench_projection.py
"""
import sys
import time
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "examples"))

from pbd_sim import Profiler, project_constraints
from cloth_grid import make_cloth


def run(n: int, passes: int = 20, isometric: bool = False):
    prof = Profiler()
    particles, constraints = make_cloth(n, isometric=isometric)

    rng = np.random.default_rng(12345)  # determinism
    for p in particles:
        p.position += 0.01 * rng.normal(size=3)

    # warmup
    project_constraints(constraints, iters=2)

    t0 = time.perf_counter()
    project_constraints(constraints, iters=passes, profiler=prof)
    t1 = time.perf_counter()

    per_pass = (t1 - t0) / passes
    return per_pass, len(constraints), prof.stats.summary()


if __name__ == "__main__":
    for isometric in (False, True):
        print("isometric bending" if isometric else "dihedral bending")
        for n in [8, 16, 32]:
            per_pass, count, summary = run(n, isometric=isometric)
            print(f"  N={n:3d}  constraints={count:6d}  pass={1e3*per_pass:8.3f} ms")
            for name, stats in summary.items():
                print("   ", name, f"mean={stats['mean_ms'] * 1e3:.2f} us", f"total={stats['total_ms']:.1f} ms")
        print()
