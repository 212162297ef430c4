"""
Numerical helpers for the conditional-gradient and projection routines.

NumPy only; every vector is handled as a flat ``float64`` array.
"""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

_SQRT_EPS = float(np.sqrt(np.finfo(float).eps))


def as_vector(x: np.ndarray) -> np.ndarray:
    """Return ``x`` as a flat float array (copying only when needed)."""
    return np.asarray(x, dtype=float).reshape(-1)


def finite_difference_gradient(
    f: Callable[[np.ndarray], float], eps: float = 1e-10
) -> Callable[[np.ndarray], np.ndarray]:
    """
    Build a central-difference approximation of ``grad f``.

    Component ``j`` is ``(f(x + eps e_j) - f(x - eps e_j)) / (2 eps)``.
    The default step suits smooth, cheaply evaluated objectives; pass a
    larger ``eps`` (around ``1e-6``) for objectives with sizeable rounding
    error.
    """
    if eps <= 0.0:
        raise ValueError(f"eps must be positive, got {eps}")

    def gradient(x: np.ndarray) -> np.ndarray:
        x = as_vector(x)
        grad = np.empty_like(x)
        for j in range(x.shape[0]):
            step = np.zeros_like(x)
            step[j] = eps
            grad[j] = (f(x + step) - f(x - step)) / (2.0 * eps)
        return grad

    return gradient


def approx_equal(
    x: np.ndarray, y: np.ndarray, rtol: float = _SQRT_EPS, atol: float = 0.0
) -> bool:
    """
    Norm-wise approximate equality.

    True when ``||x - y|| <= max(atol, rtol * max(||x||, ||y||))``. With the
    defaults two exactly-zero vectors compare equal and any other pair must
    agree to about half the float mantissa.
    """
    x = as_vector(x)
    y = as_vector(y)
    if x.shape != y.shape:
        return False
    diff = float(np.linalg.norm(x - y))
    scale = max(float(np.linalg.norm(x)), float(np.linalg.norm(y)))
    return diff <= max(atol, rtol * scale)


def clip_to_box(
    x: np.ndarray, lb: Optional[np.ndarray], ub: Optional[np.ndarray]
) -> np.ndarray:
    """
    Project ``x`` onto the box defined by ``lb`` and ``ub``.

    Bounds may be ``None`` (interpreted as ``-inf``/``+inf``).
    """
    projected = np.array(x, dtype=float, copy=True)
    if lb is not None:
        projected = np.maximum(projected, lb)
    if ub is not None:
        projected = np.minimum(projected, ub)
    return projected


__all__ = ["as_vector", "finite_difference_gradient", "approx_equal", "clip_to_box"]
