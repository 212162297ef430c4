"""Benchmark approximate projections onto ellipsoids."""

import time
from typing import Dict

import numpy as np

from inexactvi import Ellipsoid, IterationCounter, approximate_projection, duality_gap_stopping


def benchmark_ellipsoid_projection(dim: int, tol: float = 1e-6, repeats: int = 50) -> Dict[str, float]:
    """Time approximate projections of random points onto an axis-aligned ellipsoid.

    Args:
        dim: Ambient dimension.
        tol: Duality gap tolerance.
        repeats: Number of projections.

    Returns:
        Dictionary with timing and inner-step statistics.
    """
    rng = np.random.default_rng(0)
    ellipsoid = Ellipsoid(np.zeros(dim), np.diag(np.linspace(0.5, 4.0, dim)))
    points = 3.0 * rng.standard_normal((repeats, dim))
    counter = IterationCounter()
    stopping = duality_gap_stopping(tol)

    start = time.perf_counter()
    for y in points:
        approximate_projection(ellipsoid, y, stopping=stopping, counter=counter)
    total_time = time.perf_counter() - start

    return {
        "dim": dim,
        "total_time_sec": total_time,
        "time_per_projection_sec": total_time / repeats,
        "inner_steps_per_projection": counter.value / repeats,
    }


if __name__ == "__main__":
    print("Benchmarking approximate ellipsoid projections...")
    for dim in (2, 10, 100):
        stats = benchmark_ellipsoid_projection(dim)
        print(
            f"dim={stats['dim']:5d}  "
            f"time/proj={stats['time_per_projection_sec'] * 1e3:8.3f} ms  "
            f"steps/proj={stats['inner_steps_per_projection']:8.1f}"
        )
