"""
Conditional gradient (Frank-Wolfe) method over a compact convex set.

Solves ``min f(x)`` subject to ``x in X`` with a linear minimization oracle
for ``X``. Starting from a feasible ``x_1``, each step forms

    g_i = -grad f(x_i),   s_i = argmax_{s in X} <g_i, s>,
    x_{i+1} = x_i + lambda_i (s_i - x_i),

with ``lambda_i`` in ``[0, 1]`` supplied by a step rule. Every iterate is a
convex combination of feasible points and therefore stays feasible.

The solver never terminates on its own: iterating it yields an unbounded
sequence of iterates and the consumer decides when to stop, typically with
the duality gap ``<g_i, s_i - x_i>`` which bounds the suboptimality of
``x_i`` for convex ``f``.

References:
    - Frank & Wolfe, "An algorithm for quadratic programming" (1956)
    - Jaggi, "Revisiting Frank-Wolfe: Projection-Free Sparse Convex
      Optimization", ICML 2013
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, Optional

import numpy as np

from ..diagnostics.counter import IterationCounter
from .utils import as_vector, finite_difference_gradient

if TYPE_CHECKING:
    from .sets import ConvexSet

Objective = Callable[[np.ndarray], float]
Gradient = Callable[[np.ndarray], np.ndarray]
LinearOracle = Callable[[np.ndarray], np.ndarray]
# step_rule(x, s, i) -> lambda, with i the 1-based iteration index.
StepRule = Callable[[np.ndarray, np.ndarray, int], float]


def diminishing_step(x: np.ndarray, s: np.ndarray, i: int) -> float:  # noqa: ARG001
    """Open-loop step ``2 / (i + 1)``; equals 1 on the first step."""
    return 2.0 / float(i + 1)


def exact_line_search(y: np.ndarray) -> StepRule:
    """
    Exact line search for ``0.5 * ||x - y||^2`` along the segment ``[x, s]``.

    The minimizer of the quadratic on the line is
    ``<y - x, s - x> / ||s - x||^2``; it is clipped to ``[0, 1]`` so the
    step stays on the segment. A degenerate segment gives a zero step.
    """
    target = as_vector(y)

    def search(x: np.ndarray, s: np.ndarray, i: int) -> float:  # noqa: ARG001
        direction = s - x
        denom = float(direction @ direction)
        if denom == 0.0:
            return 0.0
        lam = float((target - x) @ direction) / denom
        return min(1.0, max(0.0, lam))

    return search


def linear_optimizer(convex_set: "ConvexSet") -> LinearOracle:
    """
    Linear oracle for ``convex_set`` built from its support function.

    ``oracle(g)`` returns a point of the set maximizing ``<g, .>``; calling it
    with ``g = -grad f(x)`` solves the Frank-Wolfe linear subproblem. Ties
    between maximizers are resolved by the set implementation.
    """

    def oracle(direction: np.ndarray) -> np.ndarray:
        return as_vector(convex_set.support(as_vector(direction)))

    return oracle


@dataclass(frozen=True)
class CGState:
    """
    Conditional gradient state at iteration ``i``.

    Attributes:
        x: Current (feasible) iterate.
        g: Negative gradient at ``x``.
        s: Linear oracle answer for ``g``.
        i: Iteration index, starting at 1.
    """

    x: np.ndarray
    g: np.ndarray
    s: np.ndarray
    i: int

    @property
    def gap(self) -> float:
        """Frank-Wolfe duality gap ``<g, s - x>``."""
        return duality_gap(self.x, self.g, self.s)


def duality_gap(x: np.ndarray, g: np.ndarray, s: np.ndarray) -> float:
    """Return ``<g, s - x>``, non-negative at any feasible ``x``."""
    return float(g @ (s - x))


class ConditionalGradient:
    """
    Lazily evaluated Frank-Wolfe iteration.

    Args:
        f: Objective. Only used to build a finite-difference gradient when
            ``gradient`` is omitted.
        x0: Feasible starting point.
        oracle: Linear oracle, see :func:`linear_optimizer`.
        gradient: Gradient of ``f``. Defaults to central differences with
            step ``1e-10``.
        step_rule: Step size rule ``(x, s, i) -> lambda``.
        counter: Telemetry counter incremented once per step.

    Example:
        >>> from itertools import islice
        >>> from inexactvi.convex.sets import Ball
        >>> ball = Ball(np.zeros(2), 1.0)
        >>> cg = ConditionalGradient.from_set(
        ...     lambda x: float(x @ x), np.array([1.0, 0.0]), ball,
        ...     gradient=lambda x: 2 * x)
        >>> iterates = list(islice(cg, 5))
    """

    def __init__(
        self,
        f: Optional[Objective],
        x0: np.ndarray,
        oracle: LinearOracle,
        gradient: Optional[Gradient] = None,
        step_rule: StepRule = diminishing_step,
        counter: Optional[IterationCounter] = None,
    ) -> None:
        if gradient is None:
            if f is None:
                raise ValueError("Either an objective or its gradient is required")
            gradient = finite_difference_gradient(f)
        self.f = f
        self.x0 = as_vector(x0)
        self.oracle = oracle
        self.gradient = gradient
        self.step_rule = step_rule
        self.counter = counter if counter is not None else IterationCounter()

    @classmethod
    def from_set(
        cls,
        f: Optional[Objective],
        x0: np.ndarray,
        convex_set: "ConvexSet",
        **kwargs,
    ) -> "ConditionalGradient":
        """Build the solver with the linear oracle of ``convex_set``."""
        return cls(f, x0, linear_optimizer(convex_set), **kwargs)

    def _direction(self, x: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        g = -as_vector(self.gradient(x))
        return g, self.oracle(g)

    def initial_state(self) -> CGState:
        g, s = self._direction(self.x0)
        return CGState(x=self.x0, g=g, s=s, i=1)

    def step(self, state: CGState) -> CGState:
        """Advance one Frank-Wolfe step and record it on the counter."""
        lam = float(self.step_rule(state.x, state.s, state.i))
        if not 0.0 <= lam <= 1.0:
            raise ValueError(f"step_rule returned lambda={lam}, expected in [0, 1]")
        x = state.x + lam * (state.s - state.x)
        g, s = self._direction(x)
        self.counter.increment()
        return CGState(x=x, g=g, s=s, i=state.i + 1)

    def states(self) -> Iterator[CGState]:
        """Yield the unbounded sequence of solver states."""
        state = self.initial_state()
        while True:
            yield state
            state = self.step(state)

    def __iter__(self) -> Iterator[np.ndarray]:
        for state in self.states():
            yield state.x


__all__ = [
    "CGState",
    "ConditionalGradient",
    "diminishing_step",
    "exact_line_search",
    "linear_optimizer",
    "duality_gap",
]
