"""Parameter sweeps over VIP experiments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from ..convex.core import Status
from .runner import VIPExperiment


@dataclass(frozen=True)
class SweepResult:
    """
    Result container for a 1D parameter sweep.

    Attributes:
        points: Parameter values, shape (n_points,).
        residuals: Natural residual of the last iterate per point (NaN when
            no iterate was produced).
        iterations: Outer iterates produced per point.
        inner_steps: Conditional gradient steps spent per point.
        statuses: Exit status per point.
        metadata: Free-form metadata (e.g., parameter name).
    """

    points: np.ndarray
    residuals: np.ndarray
    iterations: np.ndarray
    inner_steps: np.ndarray
    statuses: List[Status]
    metadata: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        n = self.points.shape[0]
        for name in ("residuals", "iterations", "inner_steps"):
            arr = getattr(self, name)
            if arr.shape != (n,):
                raise ValueError(f"{name} must have shape ({n},), got {arr.shape}")
        if len(self.statuses) != n:
            raise ValueError(
                f"statuses must have length {n}, got {len(self.statuses)}"
            )
        object.__setattr__(self, "metadata", dict(self.metadata))


def run_parameter_sweep(
    build: Callable[[float], VIPExperiment],
    points: Sequence[float],
    max_steps: int = 1000,
    metadata: Optional[Dict[str, str]] = None,
) -> SweepResult:
    """
    Run one experiment per parameter value.

    Args:
        build: Maps a parameter value to a fresh experiment.
        points: Parameter values to sweep; must be non-empty and 1D.
        max_steps: Outer iteration budget per experiment.
        metadata: Optional metadata stored on the result.

    Raises:
        ValueError: If ``points`` is empty or not one-dimensional.

    Example:
        >>> def build(alpha):
        ...     return VIPExperiment.from_config(vip, ExtragradientConfig(gamma=0.05, alpha=alpha))
        >>> result = run_parameter_sweep(build, [0.05, 0.1, 0.2], max_steps=200)
    """
    values = np.asarray(points, dtype=float)
    if values.ndim != 1:
        raise ValueError(f"points must be 1D, got shape {values.shape}")
    if values.size == 0:
        raise ValueError("points must be non-empty")

    n_points = values.shape[0]
    residuals = np.full(n_points, np.nan)
    iterations = np.zeros(n_points, dtype=int)
    inner_steps = np.zeros(n_points, dtype=int)
    statuses: List[Status] = []

    for i, value in enumerate(values):
        result = build(float(value)).run(max_steps=max_steps)
        if result.residual is not None:
            residuals[i] = result.residual
        iterations[i] = result.nit
        inner_steps[i] = result.inner_steps
        statuses.append(result.status)

    return SweepResult(
        points=values,
        residuals=residuals,
        iterations=iterations,
        inner_steps=inner_steps,
        statuses=statuses,
        metadata=metadata or {},
    )


__all__ = ["SweepResult", "run_parameter_sweep"]
