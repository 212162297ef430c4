"""
Extragradient method with feasible inexact projections.

Each step performs two inexact projections with a fixed step ``alpha``:

    y       = P_C^{gamma_k}(x_k, x_k - alpha F(x_k))
    x_{k+1} = P_C^{gamma_k}(x_k, y - alpha F(x_k))

where ``gamma_k = min(alpha_k / ||F(x_k)||^2, gamma)`` and
``alpha_k = (k + 1)^{-2.1}`` is summable, which keeps the accumulated
projection error bounded. The method stops when ``y`` is numerically equal to
``x_k``.

If ``F`` is pseudomonotone and Lipschitz with constant ``L`` and
``alpha < sqrt(1 - 2 gamma) / L`` the iterates converge to a solution.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..convex.utils import approx_equal
from ..exceptions import DegenerateOperatorValue
from ..logging import get_logger
from .base import IterationStep, VIMethod
from .problem import VIP

logger = get_logger(__name__)

SCHEDULE_EXPONENT = 2.1


@dataclass(frozen=True)
class ExtragradientState:
    """Iterate ``x`` at outer iteration ``k`` (starting at 1)."""

    x: np.ndarray
    k: int


class Extragradient(VIMethod):
    """
    Extragradient iterator.

    Args:
        vip: Problem to solve.
        alpha: Fixed step size, ``alpha > 0``.
        gamma: Upper bound on the projection tolerance, ``0 < gamma < 1/2``.
        x0: Feasible starting point; defaults to ``vip.C.an_element()``.
        counter: Telemetry counter for inner steps, reset at start.
        max_inner_iter: Cap on conditional gradient steps per projection.

    Example:
        >>> from itertools import islice
        >>> import numpy as np
        >>> from inexactvi import VIP, Ball, Extragradient
        >>> vip = VIP(Ball(np.zeros(2), 1.0), lambda x: x, L=1.0)
        >>> method = Extragradient(vip, alpha=0.1, gamma=0.05, x0=np.array([1.0, 0.0]))
        >>> iterates = list(islice(method, 10))
    """

    def __init__(
        self,
        vip: VIP,
        alpha: float,
        gamma: float,
        **kwargs,
    ) -> None:
        if alpha <= 0.0:
            raise ValueError(f"alpha must be positive, got {alpha}")
        if not 0.0 < gamma < 0.5:
            raise ValueError(f"gamma must lie in (0, 1/2), got {gamma}")
        super().__init__(vip, **kwargs)
        self.alpha = float(alpha)
        self.gamma = float(gamma)

    @classmethod
    def default_step(cls, vip: VIP, gamma: float, **kwargs) -> "Extragradient":
        """Use ``alpha = sqrt(1 - 2 gamma) / (2 L)``, half the admissible bound."""
        if not math.isfinite(vip.L):
            raise ValueError("A finite Lipschitz constant is required for the default step")
        if not 0.0 < gamma < 0.5:
            raise ValueError(f"gamma must lie in (0, 1/2), got {gamma}")
        alpha = 0.5 * math.sqrt(1.0 - 2.0 * gamma) / vip.L
        return cls(vip, alpha, gamma, **kwargs)

    def initial_state(self) -> ExtragradientState:
        self.counter.reset()
        return ExtragradientState(x=self._start(), k=1)

    def tolerance(self, k: int, fx: np.ndarray) -> float:
        """Projection tolerance ``gamma_k`` for iteration ``k``."""
        norm_sq = float(fx @ fx)
        alpha_k = (k + 1) ** (-SCHEDULE_EXPONENT)
        return min(alpha_k / norm_sq, self.gamma)

    def step(self, state: ExtragradientState) -> Optional[IterationStep]:
        x, k = state.x, state.k
        fx = self.vip.operator(x)
        if float(fx @ fx) == 0.0:
            raise DegenerateOperatorValue(
                f"F vanishes at iterate {k}; the projection tolerance is undefined",
                point=x,
            )
        gamma_k = self.tolerance(k, fx)

        y = self._project(x, x - self.alpha * fx, gamma_k)
        if approx_equal(y, x):
            logger.debug("extragradient converged at k=%d", k)
            return None

        x_next = self._project(x, y - self.alpha * fx, gamma_k)
        logger.debug(
            "extragradient k=%d gamma_k=%.3e inner_steps=%d",
            k,
            gamma_k,
            self.counter.value,
        )
        return IterationStep(ExtragradientState(x=x_next, k=k + 1), x_next)


__all__ = ["ExtragradientState", "Extragradient"]
