"""Optimality and feasibility diagnostics for VIP iterates.

These helpers only rely on the convex-set protocol (``contains``,
``support``, ``project``) so they can be used on any set implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ..exceptions import MaxIterationsExceeded
from ..logging import get_logger

if TYPE_CHECKING:
    from ..convex.sets import ConvexSet
    from ..vi.problem import VIP

logger = get_logger(__name__)


def is_feasible(convex_set: "ConvexSet", x: np.ndarray, atol: float = 1e-9) -> bool:
    """Return True if ``x`` lies in ``convex_set`` up to ``atol``."""
    return bool(convex_set.contains(np.asarray(x, dtype=float), atol=atol))


def assert_feasible(convex_set: "ConvexSet", x: np.ndarray, atol: float = 1e-9) -> None:
    """
    Raise if ``x`` is not feasible.

    Raises
    ------
    ValueError
        If ``x`` does not belong to ``convex_set`` within ``atol``.
    """
    if not is_feasible(convex_set, x, atol=atol):
        raise ValueError(
            f"Point {np.asarray(x).tolist()} is not feasible for {convex_set!r} "
            f"within tolerance {atol}."
        )


def frank_wolfe_gap(convex_set: "ConvexSet", y: np.ndarray, x: np.ndarray) -> float:
    """
    Frank-Wolfe duality gap of ``x`` for projecting ``y`` onto the set.

    Equals ``max_s <y - x, s - x>`` over the set; it is non-negative for
    feasible ``x`` and vanishes exactly at the projection of ``y``.
    """
    y = np.asarray(y, dtype=float)
    x = np.asarray(x, dtype=float)
    direction = y - x
    s = convex_set.support(direction)
    return float(direction @ (s - x))


def natural_residual(
    vip: "VIP", x: np.ndarray, tol: float = 1e-10, max_iter: int = 10_000
) -> float:
    """
    Norm of the natural map ``x - P_C(x - F(x))``.

    The residual is zero exactly at solutions of the VIP. Sets with a closed
    form projection use it. Other sets are projected with the conditional
    gradient engine down to a duality gap of ``tol``; if ``max_iter`` steps
    do not reach it, the last inner iterate stands in for the projection.
    """
    x = np.asarray(x, dtype=float)
    target = x - vip.operator(x)
    projected = vip.C.exact_projection(target)
    if projected is None:
        try:
            projected = vip.C.project(
                target,
                stopping=lambda xi, g, s, i: float(g @ (s - xi)) < tol,
                max_iter=max_iter,
            )
        except MaxIterationsExceeded as exc:
            logger.debug("residual projection capped at %d steps", exc.limit)
            projected = exc.point
    return float(np.linalg.norm(x - projected))


__all__ = ["is_feasible", "assert_feasible", "frank_wolfe_gap", "natural_residual"]
