"""
Approximate and inexact projections onto convex sets.

The approximate projection of ``y`` onto ``C`` minimizes
``0.5 * ||x - y||^2`` over ``C`` with the conditional gradient method, using
the exact line search of the quadratic, and stops at the first iterate that
satisfies a caller-supplied predicate. Every intermediate iterate is feasible,
so stopping early still returns a point of ``C``.

The inexact projection oracle ``P(C, u, v, gamma)`` stops as soon as the
duality gap drops below ``gamma * ||u - x||^2``. This tolerance moves with the
inner iterate ``x`` and yields a point of

    P_C^gamma(u, v) = {x in C : <v - x, s - x> <= gamma ||x - u||^2 for all s in C}.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

import numpy as np

from ..diagnostics.counter import IterationCounter
from ..diagnostics.debug_mode import feasibility_tolerance, is_debug_enabled
from ..diagnostics.residuals import assert_feasible
from ..exceptions import MaxIterationsExceeded
from ..logging import get_logger
from .frank_wolfe import (
    CGState,
    ConditionalGradient,
    duality_gap,
    exact_line_search,
    linear_optimizer,
)
from .utils import as_vector

if TYPE_CHECKING:
    from .sets import ConvexSet

logger = get_logger(__name__)

# stopping(x, g, s, i) -> True once the iterate x is accurate enough.
Stopping = Callable[[np.ndarray, np.ndarray, np.ndarray, int], bool]

DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_INNER_ITER = 100_000
_GAP_ROUNDING = 4.0 * float(np.finfo(float).eps)


def duality_gap_stopping(eps: float = DEFAULT_TOLERANCE) -> Stopping:
    """Predicate ``<g, s - x> < eps``."""

    def stop(x: np.ndarray, g: np.ndarray, s: np.ndarray, i: int) -> bool:  # noqa: ARG001
        return duality_gap(x, g, s) < eps

    return stop


def _is_done(stopping: Stopping, state: CGState) -> bool:
    # A gap at rounding level certifies an exact minimizer, even for a zero tolerance.
    scale = float(np.linalg.norm(state.g)) * (
        float(np.linalg.norm(state.x)) + float(np.linalg.norm(state.s))
    )
    if state.gap <= _GAP_ROUNDING * scale:
        return True
    return stopping(state.x, state.g, state.s, state.i)


def approximate_projection(
    convex_set: "ConvexSet",
    y: np.ndarray,
    *,
    x0: Optional[np.ndarray] = None,
    stopping: Optional[Stopping] = None,
    counter: Optional[IterationCounter] = None,
    max_iter: int = DEFAULT_MAX_INNER_ITER,
) -> np.ndarray:
    """
    Approximately project ``y`` onto ``convex_set`` with Frank-Wolfe.

    Args:
        convex_set: Compact convex set exposing ``contains``, ``support`` and
            ``an_element``.
        y: Point to project.
        x0: Feasible starting point. Defaults to ``convex_set.an_element()``.
        stopping: Predicate on ``(x, g, s, i)``; defaults to a duality gap
            below ``1e-6``.
        counter: Telemetry counter receiving one increment per inner step.
        max_iter: Cap on the number of inner steps.

    Returns:
        ``y`` itself when it already belongs to the set, otherwise the first
        Frank-Wolfe iterate accepted by ``stopping``.

    Raises:
        MaxIterationsExceeded: If ``stopping`` is not met within ``max_iter``
            steps.
    """
    y = as_vector(y)
    if convex_set.contains(y):
        return y

    if stopping is None:
        stopping = duality_gap_stopping(DEFAULT_TOLERANCE)
    start = convex_set.an_element() if x0 is None else as_vector(x0)

    solver = ConditionalGradient(
        None,
        start,
        linear_optimizer(convex_set),
        gradient=lambda x: x - y,
        step_rule=exact_line_search(y),
        counter=counter,
    )
    state = solver.initial_state()
    for _ in range(max_iter):
        if _is_done(stopping, state):
            logger.debug(
                "projection accepted after %d steps (gap=%.3e)", state.i - 1, state.gap
            )
            return state.x
        state = solver.step(state)
    if _is_done(stopping, state):
        return state.x

    logger.warning(
        "approximate projection stopped after %d steps with gap %.3e", max_iter, state.gap
    )
    raise MaxIterationsExceeded(
        f"Approximate projection did not meet its stopping rule within {max_iter} steps",
        limit=max_iter,
        point=state.x,
    )


def inexact_projection(
    convex_set: "ConvexSet",
    u: np.ndarray,
    v: np.ndarray,
    gamma: float,
    counter: Optional[IterationCounter] = None,
    *,
    x0: Optional[np.ndarray] = None,
    max_iter: int = DEFAULT_MAX_INNER_ITER,
) -> np.ndarray:
    """
    Feasible inexact projection ``P_C^gamma(u, v)``.

    Projects ``v`` onto ``convex_set`` and accepts the first inner iterate
    ``x`` whose duality gap is below ``gamma * ||u - x||^2``. Shapes with a
    closed form projection return it directly.

    Args:
        convex_set: Feasible set ``C``.
        u: Anchor point, usually the current outer iterate.
        v: Point to project.
        gamma: Relative error tolerance, ``gamma >= 0``.
        counter: Telemetry counter shared with the outer run.
        x0: Inner starting point, defaults to ``convex_set.an_element()``.
        max_iter: Cap on inner steps.
    """
    if gamma < 0.0:
        raise ValueError(f"gamma must be non-negative, got {gamma}")
    anchor = as_vector(u)

    def stopping(x: np.ndarray, g: np.ndarray, s: np.ndarray, i: int) -> bool:  # noqa: ARG001
        offset = anchor - x
        return duality_gap(x, g, s) < gamma * float(offset @ offset)

    result = convex_set.project(
        v, x0=x0, stopping=stopping, counter=counter, max_iter=max_iter
    )
    if is_debug_enabled():
        assert_feasible(convex_set, result, atol=feasibility_tolerance())
    return result


__all__ = [
    "Stopping",
    "DEFAULT_TOLERANCE",
    "DEFAULT_MAX_INNER_ITER",
    "duality_gap_stopping",
    "approximate_projection",
    "inexact_projection",
]
