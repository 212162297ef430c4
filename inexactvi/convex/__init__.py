"""
Projection-free building blocks for variational inequality solvers.

This subpackage provides the conditional gradient (Frank-Wolfe) method, the
approximate projection engine built on it, the feasible inexact projection
oracle used by the extragradient iterators, and the convex sets they operate
on. Everything is NumPy-first; SciPy is only used for the linear programs
behind :class:`~inexactvi.convex.sets.HPolytope` and
:class:`~inexactvi.convex.sets.VPolytope` membership.
"""

from . import core, frank_wolfe, projection, sets, utils
from .core import SolveResult, Status
from .frank_wolfe import (
    CGState,
    ConditionalGradient,
    diminishing_step,
    duality_gap,
    exact_line_search,
    linear_optimizer,
)
from .projection import (
    approximate_projection,
    duality_gap_stopping,
    inexact_projection,
)
from .sets import (
    Ball,
    Box,
    ConvexSet,
    Ellipsoid,
    Halfspace,
    HPolytope,
    Hyperplane,
    VPolytope,
)
from .utils import approx_equal, finite_difference_gradient

__all__ = [
    "core",
    "frank_wolfe",
    "projection",
    "sets",
    "utils",
    # Core types
    "Status",
    "SolveResult",
    # Conditional gradient
    "CGState",
    "ConditionalGradient",
    "diminishing_step",
    "exact_line_search",
    "linear_optimizer",
    "duality_gap",
    # Projections
    "approximate_projection",
    "duality_gap_stopping",
    "inexact_projection",
    # Sets
    "ConvexSet",
    "Ball",
    "Box",
    "Ellipsoid",
    "VPolytope",
    "HPolytope",
    "Halfspace",
    "Hyperplane",
    # Helpers
    "approx_equal",
    "finite_difference_gradient",
]
