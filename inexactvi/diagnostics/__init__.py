"""Diagnostics for inexactvi: step telemetry, residuals and debug mode."""

from .counter import IterationCounter
from .debug_mode import (
    debug_context,
    feasibility_tolerance,
    is_debug_enabled,
    set_debug_enabled,
)
from .residuals import (
    assert_feasible,
    frank_wolfe_gap,
    is_feasible,
    natural_residual,
)

__all__ = [
    "IterationCounter",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "feasibility_tolerance",
    "is_feasible",
    "assert_feasible",
    "frank_wolfe_gap",
    "natural_residual",
]
