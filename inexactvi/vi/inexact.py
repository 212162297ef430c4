"""
Inexact extragradient method with an Armijo-type line search.

Step ``k`` from the iterate ``x``:

1. ``y = P_C^gamma(x, x - beta F(x))``; stop if ``y == x``.
2. Backtracking: smallest ``i >= 0`` with
   ``<F(x + sigma alpha^i (y - x)), y - x> <= rho <F(x), y - x>``, and
   ``z = x + sigma alpha^i (y - x)``.
3. ``lambda = -<F(z), z - x> / ||F(z)||^2``.
4. ``x <- P_C^gamma(x, x - lambda F(z))``.

The projection tolerance is fixed at ``gamma = 0.9 min(1 - rho, 2 - sqrt(3))``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..convex.utils import approx_equal
from ..exceptions import DegenerateOperatorValue, MaxIterationsExceeded
from ..logging import get_logger
from .base import IterationStep, VIMethod
from .problem import VIP, Operator

logger = get_logger(__name__)

DEFAULT_MAX_BACKTRACKS = 60


def armijo_search(
    operator: Operator,
    x: np.ndarray,
    y: np.ndarray,
    sigma: float,
    alpha: float,
    rho: float,
    fx: Optional[np.ndarray] = None,
    max_backtracks: int = DEFAULT_MAX_BACKTRACKS,
) -> tuple[np.ndarray, int]:
    """
    Backtrack along ``y - x`` until the operator decrease condition holds.

    Returns:
        ``(z, i)`` with ``z = x + sigma * alpha**i * (y - x)`` for the
        smallest accepted ``i`` in ``0..max_backtracks``.

    Raises:
        MaxIterationsExceeded: If no ``i <= max_backtracks`` is accepted.
    """
    direction = y - x
    if fx is None:
        fx = operator(x)
    threshold = rho * float(fx @ direction)
    for i in range(max_backtracks + 1):
        z = x + (sigma * alpha**i) * direction
        if float(operator(z) @ direction) <= threshold:
            return z, i
    logger.warning("line search rejected %d trial points", max_backtracks + 1)
    raise MaxIterationsExceeded(
        f"Backtracking found no acceptable step within {max_backtracks} reductions",
        limit=max_backtracks,
        point=x,
    )


@dataclass(frozen=True)
class InexactExtragradientState:
    """Iterate ``x`` at iteration ``k`` and the backtracks spent reaching it."""

    x: np.ndarray
    k: int
    backtracks: int = 0


class InexactExtragradient(VIMethod):
    """
    Inexact extragradient iterator with adaptive step length.

    Args:
        vip: Problem to solve.
        beta: Step used for the trial projection, ``beta > 0``.
        sigma: Initial line search step, ``0 < sigma <= 1``.
        rho: Line search acceptance ratio, ``0 < rho < 1``.
        alpha: Line search reduction factor, ``0 < alpha < 1``.
        x0: Feasible starting point; defaults to ``vip.C.an_element()``.
        counter: Telemetry counter for inner steps, reset at start.
        max_backtracks: Cap on line search reductions per step.
        max_inner_iter: Cap on conditional gradient steps per projection.
        convergence_tol: Relative tolerance of the stopping test ``y == x``.
            Zero (the default) requires exact equality.
    """

    def __init__(
        self,
        vip: VIP,
        beta: float,
        sigma: float,
        rho: float,
        alpha: float,
        *,
        max_backtracks: int = DEFAULT_MAX_BACKTRACKS,
        convergence_tol: float = 0.0,
        **kwargs,
    ) -> None:
        if beta <= 0.0:
            raise ValueError(f"beta must be positive, got {beta}")
        if not 0.0 < sigma <= 1.0:
            raise ValueError(f"sigma must lie in (0, 1], got {sigma}")
        if not 0.0 < rho < 1.0:
            raise ValueError(f"rho must lie in (0, 1), got {rho}")
        if not 0.0 < alpha < 1.0:
            raise ValueError(f"alpha must lie in (0, 1), got {alpha}")
        if max_backtracks < 0:
            raise ValueError(f"max_backtracks must be non-negative, got {max_backtracks}")
        if convergence_tol < 0.0:
            raise ValueError(f"convergence_tol must be non-negative, got {convergence_tol}")
        super().__init__(vip, **kwargs)
        self.beta = float(beta)
        self.sigma = float(sigma)
        self.rho = float(rho)
        self.alpha = float(alpha)
        self.max_backtracks = int(max_backtracks)
        self.convergence_tol = float(convergence_tol)
        self.gamma = 0.9 * min(1.0 - self.rho, 2.0 - math.sqrt(3.0))

    def initial_state(self) -> InexactExtragradientState:
        self.counter.reset()
        return InexactExtragradientState(x=self._start(), k=1)

    def _converged(self, y: np.ndarray, x: np.ndarray) -> bool:
        if self.convergence_tol == 0.0:
            return bool(np.array_equal(y, x))
        return approx_equal(y, x, rtol=self.convergence_tol)

    def step(self, state: InexactExtragradientState) -> Optional[IterationStep]:
        x, k = state.x, state.k
        fx = self.vip.operator(x)
        y = self._project(x, x - self.beta * fx, self.gamma)
        if self._converged(y, x):
            logger.debug("inexact extragradient converged at k=%d", k)
            return None

        z, backtracks = armijo_search(
            self.vip.operator,
            x,
            y,
            self.sigma,
            self.alpha,
            self.rho,
            fx=fx,
            max_backtracks=self.max_backtracks,
        )
        fz = self.vip.operator(z)
        norm_sq = float(fz @ fz)
        if norm_sq == 0.0:
            raise DegenerateOperatorValue(
                f"F vanishes at the line search point of iterate {k}", point=z
            )
        lam = -float(fz @ (z - x)) / norm_sq

        x_next = self._project(x, x - lam * fz, self.gamma)
        logger.debug(
            "inexact extragradient k=%d backtracks=%d lambda=%.3e inner_steps=%d",
            k,
            backtracks,
            lam,
            self.counter.value,
        )
        next_state = InexactExtragradientState(x=x_next, k=k + 1, backtracks=backtracks)
        return IterationStep(next_state, x_next)


__all__ = [
    "DEFAULT_MAX_BACKTRACKS",
    "armijo_search",
    "InexactExtragradientState",
    "InexactExtragradient",
]
