"""Shared iteration protocol for the outer VIP methods."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import numpy as np

from ..convex.projection import DEFAULT_MAX_INNER_ITER, inexact_projection
from ..convex.utils import as_vector
from ..diagnostics.counter import IterationCounter
from ..exceptions import InfeasibleStart
from .problem import VIP


@dataclass(frozen=True)
class IterationStep:
    """Result of one outer step: the next state and the iterate it produced."""

    state: Any
    point: np.ndarray


class VIMethod(ABC):
    """
    Lazy outer iteration over a VIP.

    Subclasses implement :meth:`initial_state` and :meth:`step`. ``step``
    returns ``None`` once the method has converged; iterating the method
    yields ``x_1, x_2, ...`` and computes nothing beyond the requested
    iterate, so a consumer may stop pulling at any time.
    """

    def __init__(
        self,
        vip: VIP,
        *,
        x0: Optional[np.ndarray] = None,
        counter: Optional[IterationCounter] = None,
        max_inner_iter: int = DEFAULT_MAX_INNER_ITER,
    ) -> None:
        if max_inner_iter < 1:
            raise ValueError(f"max_inner_iter must be positive, got {max_inner_iter}")
        self.vip = vip
        self.x0 = None if x0 is None else as_vector(x0)
        self.counter = counter if counter is not None else IterationCounter()
        self.max_inner_iter = int(max_inner_iter)

    def _start(self) -> np.ndarray:
        if self.x0 is None:
            return as_vector(self.vip.C.an_element())
        if not self.vip.C.contains(self.x0):
            raise InfeasibleStart(
                f"Starting point {self.x0.tolist()} is not in {self.vip.C!r}"
            )
        return self.x0.copy()

    def _project(self, u: np.ndarray, v: np.ndarray, gamma: float) -> np.ndarray:
        return inexact_projection(
            self.vip.C, u, v, gamma, self.counter, max_iter=self.max_inner_iter
        )

    @abstractmethod
    def initial_state(self) -> Any:
        """Reset telemetry and return the state holding ``x_1``."""

    @abstractmethod
    def step(self, state: Any) -> Optional[IterationStep]:
        """Advance one outer iteration, or return ``None`` when converged."""

    def __iter__(self) -> Iterator[np.ndarray]:
        state = self.initial_state()
        yield state.x
        while True:
            result = self.step(state)
            if result is None:
                return
            state = result.state
            yield result.point


__all__ = ["IterationStep", "VIMethod"]
