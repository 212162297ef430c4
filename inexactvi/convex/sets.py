"""
Convex sets consumed by the projection engine.

Each set exposes the primitives the conditional gradient method needs:

- ``contains(x)``: membership test, with an absolute tolerance.
- ``support(d)``: a point of the set maximizing ``<d, .>``.
- ``an_element()``: some feasible point, used as a starting iterate.
- ``project(y, ...)``: projection capability. The default runs the
  approximate projection engine; :class:`Halfspace` and :class:`Hyperplane`
  override it with their closed form.

Bounded shapes (:class:`Ball`, :class:`Box`, :class:`Ellipsoid`,
:class:`VPolytope`, :class:`HPolytope`) satisfy the compactness the
Frank-Wolfe method relies on. Halfspaces and hyperplanes are unbounded;
their support is only defined along their normal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
from scipy.optimize import linprog

from ..diagnostics.counter import IterationCounter
from ..exceptions import InfeasibleStart
from .projection import DEFAULT_MAX_INNER_ITER, Stopping, approximate_projection
from .utils import as_vector, clip_to_box

DEFAULT_ATOL = 1e-9
# Primal feasibility tolerance of the HiGHS solver.
_LP_ATOL = 1e-7


class ConvexSet(ABC):
    """Abstract closed convex subset of R^n."""

    @property
    @abstractmethod
    def dim(self) -> int:
        """Ambient dimension ``n``."""

    @abstractmethod
    def contains(self, x: np.ndarray, atol: float = DEFAULT_ATOL) -> bool:
        """Return True if ``x`` belongs to the set up to ``atol``."""

    @abstractmethod
    def support(self, direction: np.ndarray) -> np.ndarray:
        """Return a point maximizing ``<direction, .>`` over the set."""

    @abstractmethod
    def an_element(self) -> np.ndarray:
        """Return an arbitrary feasible point."""

    def exact_projection(self, y: np.ndarray) -> Optional[np.ndarray]:
        """Closed form Euclidean projection, or ``None`` if the shape has none."""
        return None

    def project(
        self,
        y: np.ndarray,
        *,
        x0: Optional[np.ndarray] = None,
        stopping: Optional[Stopping] = None,
        counter: Optional[IterationCounter] = None,
        max_iter: int = DEFAULT_MAX_INNER_ITER,
    ) -> np.ndarray:
        """Project ``y`` with the conditional gradient engine."""
        return approximate_projection(
            self, y, x0=x0, stopping=stopping, counter=counter, max_iter=max_iter
        )

    def __contains__(self, x: np.ndarray) -> bool:
        return self.contains(x)

    def _check_dim(self, x: np.ndarray, name: str = "point") -> np.ndarray:
        x = as_vector(x)
        if x.shape[0] != self.dim:
            raise ValueError(
                f"{name} has dimension {x.shape[0]}, expected {self.dim}"
            )
        return x


class Ball(ConvexSet):
    """Euclidean ball ``{x : ||x - center|| <= radius}``."""

    def __init__(self, center: np.ndarray, radius: float = 1.0) -> None:
        if radius < 0.0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        self.center = as_vector(center)
        self.radius = float(radius)

    @property
    def dim(self) -> int:
        return self.center.shape[0]

    def contains(self, x: np.ndarray, atol: float = DEFAULT_ATOL) -> bool:
        x = self._check_dim(x)
        return float(np.linalg.norm(x - self.center)) <= self.radius + atol

    def support(self, direction: np.ndarray) -> np.ndarray:
        d = self._check_dim(direction, "direction")
        norm = float(np.linalg.norm(d))
        if norm == 0.0:
            return self.center.copy()
        return self.center + (self.radius / norm) * d

    def an_element(self) -> np.ndarray:
        return self.center.copy()

    def exact_projection(self, y: np.ndarray) -> np.ndarray:
        y = self._check_dim(y)
        offset = y - self.center
        dist = float(np.linalg.norm(offset))
        if dist <= self.radius:
            return y
        return self.center + (self.radius / dist) * offset

    def __repr__(self) -> str:
        return f"Ball(center={self.center.tolist()}, radius={self.radius})"


class Box(ConvexSet):
    """Axis-aligned box ``{x : lb <= x <= ub}`` with finite bounds."""

    def __init__(self, lb: np.ndarray, ub: np.ndarray) -> None:
        lb = as_vector(lb)
        ub = as_vector(ub)
        if lb.shape != ub.shape:
            raise ValueError("lb and ub dimension mismatch")
        if not (np.all(np.isfinite(lb)) and np.all(np.isfinite(ub))):
            raise ValueError("Box bounds must be finite")
        if np.any(lb > ub):
            raise ValueError("Box requires lb <= ub componentwise")
        self.lb = lb
        self.ub = ub

    @property
    def dim(self) -> int:
        return self.lb.shape[0]

    def contains(self, x: np.ndarray, atol: float = DEFAULT_ATOL) -> bool:
        x = self._check_dim(x)
        return bool(np.all(x >= self.lb - atol) and np.all(x <= self.ub + atol))

    def support(self, direction: np.ndarray) -> np.ndarray:
        d = self._check_dim(direction, "direction")
        return np.where(d > 0.0, self.ub, self.lb)

    def an_element(self) -> np.ndarray:
        return 0.5 * (self.lb + self.ub)

    def exact_projection(self, y: np.ndarray) -> np.ndarray:
        return clip_to_box(self._check_dim(y), self.lb, self.ub)

    def __repr__(self) -> str:
        return f"Box(lb={self.lb.tolist()}, ub={self.ub.tolist()})"


class Ellipsoid(ConvexSet):
    """
    Ellipsoid ``{x : (x - c)^T Q^{-1} (x - c) <= 1}``.

    ``Q`` must be symmetric positive definite; its support point in
    direction ``d`` is ``c + Q d / sqrt(d^T Q d)``.
    """

    def __init__(self, center: np.ndarray, shape_matrix: np.ndarray) -> None:
        self.center = as_vector(center)
        q = np.asarray(shape_matrix, dtype=float)
        n = self.center.shape[0]
        if q.shape != (n, n):
            raise ValueError(f"shape_matrix must have shape {(n, n)}, got {q.shape}")
        if not np.allclose(q, q.T):
            raise ValueError("shape_matrix must be symmetric")
        try:
            np.linalg.cholesky(q)
        except np.linalg.LinAlgError as exc:
            raise ValueError("shape_matrix must be positive definite") from exc
        self.shape_matrix = 0.5 * (q + q.T)

    @property
    def dim(self) -> int:
        return self.center.shape[0]

    def contains(self, x: np.ndarray, atol: float = DEFAULT_ATOL) -> bool:
        offset = self._check_dim(x) - self.center
        value = float(offset @ np.linalg.solve(self.shape_matrix, offset))
        return value <= 1.0 + atol

    def support(self, direction: np.ndarray) -> np.ndarray:
        d = self._check_dim(direction, "direction")
        qd = self.shape_matrix @ d
        scale = float(d @ qd)
        if scale <= 0.0:
            return self.center.copy()
        return self.center + qd / np.sqrt(scale)

    def an_element(self) -> np.ndarray:
        return self.center.copy()

    def __repr__(self) -> str:
        return (
            f"Ellipsoid(center={self.center.tolist()}, "
            f"shape_matrix={self.shape_matrix.tolist()})"
        )


class VPolytope(ConvexSet):
    """Convex hull of a finite list of vertices (rows of ``vertices``)."""

    def __init__(self, vertices: np.ndarray) -> None:
        verts = np.asarray(vertices, dtype=float)
        if verts.ndim != 2 or verts.shape[0] == 0:
            raise ValueError("vertices must be a non-empty 2D array")
        self.vertices = verts

    @classmethod
    def unit_simplex(cls, dim: int) -> "VPolytope":
        """Probability simplex ``{x >= 0, sum(x) = 1}`` in R^dim."""
        if dim < 1:
            raise ValueError(f"dim must be positive, got {dim}")
        return cls(np.eye(dim))

    @property
    def dim(self) -> int:
        return self.vertices.shape[1]

    def contains(self, x: np.ndarray, atol: float = DEFAULT_ATOL) -> bool:
        x = self._check_dim(x)
        m = self.vertices.shape[0]
        # Feasibility LP over convex weights: V^T w = x, sum(w) = 1, w >= 0.
        a_eq = np.vstack([self.vertices.T, np.ones((1, m))])
        b_eq = np.concatenate([x, [1.0]])
        res = linprog(np.zeros(m), A_eq=a_eq, b_eq=b_eq, bounds=(0.0, None), method="highs")
        if res.status != 0:
            return False
        return bool(np.linalg.norm(self.vertices.T @ res.x - x) <= max(atol, _LP_ATOL))

    def support(self, direction: np.ndarray) -> np.ndarray:
        d = self._check_dim(direction, "direction")
        # argmax keeps the lowest vertex index among ties.
        return self.vertices[int(np.argmax(self.vertices @ d))].copy()

    def an_element(self) -> np.ndarray:
        return self.vertices[0].copy()

    def __repr__(self) -> str:
        return f"VPolytope(vertices={self.vertices.tolist()})"


class HPolytope(ConvexSet):
    """
    Polyhedron ``{x : A x <= b}`` queried through linear programs.

    Support points and the arbitrary element are computed with
    ``scipy.optimize.linprog`` (HiGHS). The polyhedron must be bounded in
    every direction the solver queries.
    """

    def __init__(self, a_mat: np.ndarray, b_vec: np.ndarray) -> None:
        a_mat = np.asarray(a_mat, dtype=float)
        b_vec = as_vector(b_vec)
        if a_mat.ndim != 2:
            raise ValueError("A must be a 2D array")
        if a_mat.shape[0] != b_vec.shape[0]:
            raise ValueError("A and b row mismatch")
        self.a_mat = a_mat
        self.b_vec = b_vec

    @property
    def dim(self) -> int:
        return self.a_mat.shape[1]

    def contains(self, x: np.ndarray, atol: float = DEFAULT_ATOL) -> bool:
        x = self._check_dim(x)
        return bool(np.all(self.a_mat @ x <= self.b_vec + atol))

    def _solve(self, cost: np.ndarray) -> np.ndarray:
        res = linprog(
            cost,
            A_ub=self.a_mat,
            b_ub=self.b_vec,
            bounds=(None, None),
            method="highs",
        )
        if res.status == 2:
            raise InfeasibleStart(f"{self!r} is empty")
        if res.status == 3:
            raise ValueError(f"{self!r} is unbounded in the requested direction")
        if res.status != 0 or res.x is None:
            raise RuntimeError(f"Linear program failed: {res.message}")
        return np.asarray(res.x, dtype=float)

    def support(self, direction: np.ndarray) -> np.ndarray:
        d = self._check_dim(direction, "direction")
        return self._solve(-d)

    def an_element(self) -> np.ndarray:
        return self._solve(np.zeros(self.dim))

    def __repr__(self) -> str:
        return f"HPolytope(A={self.a_mat.tolist()}, b={self.b_vec.tolist()})"


class _AffineShape(ConvexSet):
    """Shared data for sets described by one normal ``a`` and offset ``b``."""

    def __init__(self, a: np.ndarray, b: float) -> None:
        a = as_vector(a)
        norm_sq = float(a @ a)
        if norm_sq == 0.0:
            raise ValueError("normal vector a must be non-zero")
        self.a = a
        self.b = float(b)
        self._norm_sq = norm_sq

    @property
    def dim(self) -> int:
        return self.a.shape[0]

    def an_element(self) -> np.ndarray:
        return (self.b / self._norm_sq) * self.a

    def _along_normal(self, d: np.ndarray) -> float:
        """Return t with d = t * a, or NaN if d is not parallel to a."""
        t = float(d @ self.a) / self._norm_sq
        residual = float(np.linalg.norm(d - t * self.a))
        if residual > 1e-12 * max(1.0, float(np.linalg.norm(d))):
            return float("nan")
        return t

    def _shift(self, y: np.ndarray) -> np.ndarray:
        return y + ((self.b - float(self.a @ y)) / self._norm_sq) * self.a

    def project(
        self,
        y: np.ndarray,
        *,
        x0: Optional[np.ndarray] = None,
        stopping: Optional[Stopping] = None,
        counter: Optional[IterationCounter] = None,
        max_iter: int = DEFAULT_MAX_INNER_ITER,
    ) -> np.ndarray:
        """Closed form projection; the iterative options are ignored."""
        return self.exact_projection(y)


class Halfspace(_AffineShape):
    """Halfspace ``{x : <a, x> <= b}``."""

    def contains(self, x: np.ndarray, atol: float = DEFAULT_ATOL) -> bool:
        x = self._check_dim(x)
        return float(self.a @ x) <= self.b + atol

    def support(self, direction: np.ndarray) -> np.ndarray:
        d = self._check_dim(direction, "direction")
        t = self._along_normal(d)
        if not t >= 0.0:
            raise ValueError(f"{self!r} is unbounded in direction {d.tolist()}")
        return self.an_element()

    def exact_projection(self, y: np.ndarray) -> np.ndarray:
        y = self._check_dim(y)
        if float(self.a @ y) <= self.b:
            return y
        return self._shift(y)

    def __repr__(self) -> str:
        return f"Halfspace(a={self.a.tolist()}, b={self.b})"


class Hyperplane(_AffineShape):
    """Hyperplane ``{x : <a, x> = b}``."""

    def contains(self, x: np.ndarray, atol: float = DEFAULT_ATOL) -> bool:
        x = self._check_dim(x)
        return abs(float(self.a @ x) - self.b) <= atol

    def support(self, direction: np.ndarray) -> np.ndarray:
        d = self._check_dim(direction, "direction")
        if np.isnan(self._along_normal(d)):
            raise ValueError(f"{self!r} is unbounded in direction {d.tolist()}")
        return self.an_element()

    def exact_projection(self, y: np.ndarray) -> np.ndarray:
        return self._shift(self._check_dim(y))

    def __repr__(self) -> str:
        return f"Hyperplane(a={self.a.tolist()}, b={self.b})"


__all__ = [
    "ConvexSet",
    "Ball",
    "Box",
    "Ellipsoid",
    "VPolytope",
    "HPolytope",
    "Halfspace",
    "Hyperplane",
]
