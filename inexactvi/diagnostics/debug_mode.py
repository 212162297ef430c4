"""Debug mode management for inexactvi.

When enabled, the inexact projection oracle checks that every point it
returns lies in the feasible set, up to :func:`feasibility_tolerance`.
The ``INEXACTVI_DEBUG`` environment variable sets the initial state.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

_DEBUG_ENV_VAR = "INEXACTVI_DEBUG"
_TRUTHY = ("1", "true", "yes", "on")

_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").strip().lower() in _TRUTHY
_feasibility_atol: float = 1e-8


def is_debug_enabled() -> bool:
    """Return whether projected points are checked for feasibility."""
    return _debug_enabled


def set_debug_enabled(enabled: bool, atol: Optional[float] = None) -> None:
    """
    Globally enable or disable feasibility checks.

    Parameters
    ----------
    enabled:
        Whether to check projected points.
    atol:
        Optional new membership tolerance for the checks.
    """
    global _debug_enabled, _feasibility_atol
    if atol is not None:
        if atol < 0.0:
            raise ValueError(f"atol must be non-negative, got {atol}")
        _feasibility_atol = float(atol)
    _debug_enabled = bool(enabled)


def feasibility_tolerance() -> float:
    """Membership tolerance applied by the debug feasibility checks."""
    return _feasibility_atol


@contextmanager
def debug_context(enabled: bool = True, atol: Optional[float] = None) -> Iterator[None]:
    """
    Temporarily switch feasibility checks, restoring the previous settings.

    Example
    -------
    >>> with debug_context(True, atol=1e-10):
    ...     inexact_projection(C, u, v, 0.1)
    """
    saved = (_debug_enabled, _feasibility_atol)
    set_debug_enabled(enabled, atol)
    try:
        yield
    finally:
        set_debug_enabled(saved[0], saved[1])


__all__ = [
    "is_debug_enabled",
    "set_debug_enabled",
    "feasibility_tolerance",
    "debug_context",
]
