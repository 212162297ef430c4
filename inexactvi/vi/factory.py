"""Factory for creating VIP iterators from configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from ..convex.projection import DEFAULT_MAX_INNER_ITER
from ..diagnostics.counter import IterationCounter
from .base import VIMethod
from .extragradient import Extragradient
from .inexact import DEFAULT_MAX_BACKTRACKS, InexactExtragradient
from .problem import VIP


@dataclass(frozen=True)
class ExtragradientConfig:
    """
    Configuration for :class:`~inexactvi.vi.extragradient.Extragradient`.

    Args:
        alpha: Fixed step size. If None, ``sqrt(1 - 2 gamma) / (2 L)`` is
            derived from the problem's Lipschitz constant.
        gamma: Upper bound on the projection tolerance, in ``(0, 1/2)``.
        x0: Optional feasible starting point.
        max_inner_iter: Cap on conditional gradient steps per projection.
    """

    gamma: float
    alpha: Optional[float] = None
    x0: Optional[np.ndarray] = None
    max_inner_iter: int = DEFAULT_MAX_INNER_ITER


@dataclass(frozen=True)
class InexactExtragradientConfig:
    """
    Configuration for :class:`~inexactvi.vi.inexact.InexactExtragradient`.

    Args:
        beta: Trial projection step.
        sigma: Initial line search step in ``(0, 1]``.
        rho: Line search acceptance ratio in ``(0, 1)``.
        alpha: Line search reduction factor in ``(0, 1)``.
        x0: Optional feasible starting point.
        max_backtracks: Cap on line search reductions per step.
        max_inner_iter: Cap on conditional gradient steps per projection.
        convergence_tol: Relative tolerance of the stopping test; zero
            requires exact equality.
    """

    beta: float
    sigma: float = 1.0
    rho: float = 0.5
    alpha: float = 0.5
    x0: Optional[np.ndarray] = None
    max_backtracks: int = DEFAULT_MAX_BACKTRACKS
    max_inner_iter: int = DEFAULT_MAX_INNER_ITER
    convergence_tol: float = 0.0


MethodConfig = Union[ExtragradientConfig, InexactExtragradientConfig]


def create_method(
    config: MethodConfig,
    vip: VIP,
    counter: Optional[IterationCounter] = None,
) -> VIMethod:
    """
    Create an outer iterator for ``vip`` from a configuration.

    Args:
        config: Method configuration.
        vip: Problem to solve.
        counter: Optional telemetry counter shared with the caller.

    Returns:
        A configured, not yet started iterator.

    Raises:
        ValueError: If the configuration type is not supported or its
            parameters are invalid.
    """
    if isinstance(config, ExtragradientConfig):
        kwargs = dict(x0=config.x0, counter=counter, max_inner_iter=config.max_inner_iter)
        if config.alpha is None:
            return Extragradient.default_step(vip, config.gamma, **kwargs)
        return Extragradient(vip, config.alpha, config.gamma, **kwargs)
    elif isinstance(config, InexactExtragradientConfig):
        return InexactExtragradient(
            vip,
            config.beta,
            config.sigma,
            config.rho,
            config.alpha,
            x0=config.x0,
            counter=counter,
            max_backtracks=config.max_backtracks,
            max_inner_iter=config.max_inner_iter,
            convergence_tol=config.convergence_tol,
        )
    else:
        supported = ["ExtragradientConfig", "InexactExtragradientConfig"]
        raise ValueError(
            f"Unsupported method configuration {type(config).__name__!r}. "
            f"Supported configurations: {supported}"
        )


__all__ = [
    "ExtragradientConfig",
    "InexactExtragradientConfig",
    "MethodConfig",
    "create_method",
]
