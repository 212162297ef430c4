"""
Status and result containers shared by the VIP solvers.

Every outer run reports through :class:`SolveResult`, whichever way it
ended: convergence, an exhausted step budget, or one of the failures in
:mod:`inexactvi.exceptions`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np


class Status(Enum):
    """Exit status of an outer VIP run."""

    CONVERGED = "converged"
    MAX_ITER = "max_iter"
    DEGENERATE = "degenerate"
    INFEASIBLE = "infeasible"
    FAILED = "failed"


@dataclass
class SolveResult:
    """
    Outcome of running an outer iterator.

    Attributes:
        x: Last iterate produced (or ``None`` if no iterate was produced).
        status: Enumeration describing how the run ended.
        message: Human-readable explanation of the status.
        nit: Number of outer iterates produced.
        inner_steps: Conditional-gradient steps spent in projections.
        residual: Natural-map residual at ``x`` when computed.
        trajectory: Iterates in production order when recorded.
    """

    x: Optional[np.ndarray]
    status: Status
    message: str
    nit: int
    inner_steps: int = 0
    residual: Optional[float] = None
    trajectory: List[np.ndarray] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is Status.CONVERGED


__all__ = ["Status", "SolveResult"]
