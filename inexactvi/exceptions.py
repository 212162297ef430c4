"""Exceptions raised by the projection engine and the VIP iterators."""

from __future__ import annotations

from typing import Optional

import numpy as np


class InexactVIError(RuntimeError):
    """Base exception for inexactvi solver failures."""


class MaxIterationsExceeded(InexactVIError):
    """An inner solver or a backtracking search hit its step cap.

    Attributes:
        limit: The cap that was exhausted.
        point: Last iterate reached before giving up, if available.
    """

    def __init__(self, message: str, limit: int, point: Optional[np.ndarray] = None) -> None:
        super().__init__(message)
        self.limit = limit
        self.point = point


class DegenerateOperatorValue(InexactVIError):
    """The operator vanished at a point where its squared norm is a divisor.

    A zero of F inside the feasible set solves the VIP, so ``point`` is
    returned to the caller rather than discarded.
    """

    def __init__(self, message: str, point: np.ndarray) -> None:
        super().__init__(message)
        self.point = point


class InfeasibleStart(InexactVIError):
    """No feasible starting point is available for the feasible set."""


__all__ = [
    "InexactVIError",
    "MaxIterationsExceeded",
    "DegenerateOperatorValue",
    "InfeasibleStart",
]
