"""Experiment harness running a VIP iterator to a :class:`SolveResult`."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple, TypeVar

import numpy as np

from ..convex.core import SolveResult, Status
from ..diagnostics.residuals import natural_residual
from ..exceptions import (
    DegenerateOperatorValue,
    InfeasibleStart,
    MaxIterationsExceeded,
)
from ..logging import get_logger
from ..vi.base import VIMethod
from ..vi.factory import MethodConfig, create_method
from ..vi.problem import VIP

logger = get_logger(__name__)

T = TypeVar("T")


def take(iterable: Iterable[T], n: int) -> Iterator[T]:
    """Lazily yield at most the first ``n`` items of ``iterable``."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return itertools.islice(iterable, n)


def enumerate_iterates(iterable: Iterable[T], start: int = 1) -> Iterator[Tuple[int, T]]:
    """Lazily pair items with their 1-based iteration index."""
    return enumerate(iterable, start)


@dataclass(frozen=True)
class VIPExperiment:
    """
    A problem paired with the method that solves it.

    Example:
        >>> vip = VIP(Ball(np.zeros(2), 1.0), lambda x: x - np.array([2.0, 0.0]))
        >>> experiment = VIPExperiment.from_config(vip, ExtragradientConfig(gamma=0.05, alpha=0.1))
        >>> result = experiment.run(max_steps=100)
        >>> result.status
        <Status.CONVERGED: 'converged'>
    """

    problem: VIP
    method: VIMethod

    def __post_init__(self) -> None:
        if self.method.vip is not self.problem:
            raise ValueError("method was built for a different problem")

    @classmethod
    def from_config(cls, problem: VIP, config: MethodConfig) -> "VIPExperiment":
        return cls(problem=problem, method=create_method(config, problem))

    def iterates(self, n: Optional[int] = None) -> Iterator[np.ndarray]:
        """Iterate the method, optionally limited to ``n`` iterates."""
        return iter(self.method) if n is None else take(self.method, n)

    def run(
        self,
        max_steps: int = 1000,
        record_trajectory: bool = False,
        compute_residual: bool = True,
    ) -> SolveResult:
        """
        Pull at most ``max_steps`` iterates and summarize the run.

        Solver failures are reported through the result status rather than
        raised: ``DEGENERATE`` when F vanished (``x`` is that point),
        ``INFEASIBLE`` when no starting point exists, ``FAILED`` when an
        inner solver or line search exhausted its cap.
        """
        if max_steps < 1:
            raise ValueError(f"max_steps must be positive, got {max_steps}")

        x: Optional[np.ndarray] = None
        nit = 0
        trajectory = []
        status = Status.CONVERGED
        message = "Method converged"
        try:
            for nit, x in enumerate_iterates(self.method):
                if record_trajectory:
                    trajectory.append(x)
                if nit == max_steps:
                    status = Status.MAX_ITER
                    message = f"Method hit iteration limit of {max_steps}"
                    break
        except DegenerateOperatorValue as exc:
            x = exc.point
            status = Status.DEGENERATE
            message = str(exc)
        except InfeasibleStart as exc:
            status = Status.INFEASIBLE
            message = str(exc)
        except MaxIterationsExceeded as exc:
            status = Status.FAILED
            message = str(exc)

        if status in (Status.FAILED, Status.DEGENERATE):
            logger.warning("run stopped after %d iterates: %s", nit, message)

        residual = None
        if compute_residual and x is not None:
            residual = natural_residual(self.problem, x)
        logger.info(
            "%s finished: status=%s nit=%d inner_steps=%d",
            type(self.method).__name__,
            status.value,
            nit,
            self.method.counter.value,
        )
        return SolveResult(
            x=x,
            status=status,
            message=message,
            nit=nit,
            inner_steps=self.method.counter.value,
            residual=residual,
            trajectory=trajectory,
        )


__all__ = ["take", "enumerate_iterates", "VIPExperiment"]
