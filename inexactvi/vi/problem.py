"""Variational inequality problem descriptor."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from ..convex.sets import ConvexSet
from ..convex.utils import as_vector

Operator = Callable[[np.ndarray], np.ndarray]


@dataclass(frozen=True)
class VIP:
    """
    Variational inequality ``VIP(F, C)``: find ``x* in C`` with
    ``<F(x*), x - x*> >= 0`` for every ``x in C``.

    Attributes:
        C: Nonempty closed convex feasible set.
        F: Operator ``R^n -> R^n``.
        L: Lipschitz constant of ``F``. Only used to derive default step
            sizes and never checked at runtime; ``inf`` when unknown.
    """

    C: ConvexSet
    F: Operator
    L: float = math.inf

    def __post_init__(self) -> None:
        if not self.L > 0.0:
            raise ValueError(f"Lipschitz constant must be positive, got {self.L}")
        if not callable(self.F):
            raise ValueError("operator F must be callable")

    @property
    def dim(self) -> int:
        return self.C.dim

    def operator(self, x: np.ndarray) -> np.ndarray:
        """Evaluate ``F(x)`` as a flat float array of the set's dimension."""
        value = as_vector(self.F(x))
        if value.shape[0] != self.dim:
            raise ValueError(
                f"operator returned a vector of dimension {value.shape[0]}, "
                f"expected {self.dim}"
            )
        return value


__all__ = ["VIP", "Operator"]
