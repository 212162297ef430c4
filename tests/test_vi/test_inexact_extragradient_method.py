"""Tests for the inexact extragradient iterator and its Armijo line search."""

import math
from itertools import islice

import numpy as np
import pytest

import inexactvi.vi.inexact as inexact_module
from inexactvi import (
    VIP,
    Ball,
    DegenerateOperatorValue,
    Ellipsoid,
    InexactExtragradient,
    MaxIterationsExceeded,
    armijo_search,
    natural_residual,
)
from inexactvi.vi.inexact import InexactExtragradientState


def interior_problem():
    """F(x) = x - (0.5, 0) on the unit ball; the solution is (0.5, 0)."""
    p = np.array([0.5, 0.0])
    return VIP(Ball(np.zeros(2), 1.0), lambda x: x - p, L=1.0)


def test_armijo_accepts_first_trial_when_condition_holds():
    x = np.array([1.0, 0.0])
    y = np.array([0.5, 0.0])
    z, i = armijo_search(lambda w: w, x, y, sigma=0.1, alpha=0.5, rho=0.9)
    assert i == 0
    assert np.allclose(z, [0.95, 0.0])


def test_armijo_backtracks_until_accepted():
    """With rho = 0.99 the step must shrink to sigma * alpha**5."""
    x = np.array([1.0, 0.0])
    y = np.array([0.5, 0.0])
    z, i = armijo_search(lambda w: w, x, y, sigma=0.5, alpha=0.5, rho=0.99)
    assert i == 5
    assert np.array_equal(z, [0.9921875, 0.0])


def test_armijo_gives_up_after_backtrack_cap():
    # A constant operator ascending along y - x never satisfies the condition.
    with pytest.raises(MaxIterationsExceeded) as excinfo:
        armijo_search(
            lambda w: np.array([1.0, 0.0]),
            np.zeros(2),
            np.array([1.0, 0.0]),
            sigma=1.0,
            alpha=0.5,
            rho=0.5,
            max_backtracks=3,
        )
    assert excinfo.value.limit == 3


def test_projection_tolerance_from_rho():
    vip = interior_problem()
    method = InexactExtragradient(vip, beta=0.5, sigma=1.0, rho=0.5, alpha=0.5)
    assert method.gamma == pytest.approx(0.9 * (2.0 - math.sqrt(3.0)))
    method = InexactExtragradient(vip, beta=0.5, sigma=1.0, rho=0.9, alpha=0.5)
    assert method.gamma == pytest.approx(0.09)


def test_single_step_values():
    vip = interior_problem()
    method = InexactExtragradient(
        vip, beta=0.5, sigma=1.0, rho=0.4, alpha=0.5, x0=np.array([-0.5, 0.0])
    )
    state = method.initial_state()
    result = method.step(state)

    assert result is not None
    assert isinstance(result.state, InexactExtragradientState)
    assert result.state.k == 2
    assert result.state.backtracks == 0
    assert np.allclose(result.point, [0.0, 0.0])


def test_converges_to_interior_solution():
    vip = interior_problem()
    method = InexactExtragradient(
        vip,
        beta=0.5,
        sigma=1.0,
        rho=0.4,
        alpha=0.5,
        x0=np.array([-0.5, 0.0]),
        convergence_tol=1e-12,
    )
    iterates = list(islice(method, 200))
    assert len(iterates) < 200
    assert np.allclose(iterates[-1], [0.5, 0.0], atol=1e-10)


def test_converges_on_ellipsoid_with_inner_solver():
    ell = Ellipsoid(np.zeros(2), np.diag([4.0, 1.0]))
    p = np.array([3.0, 3.0])
    vip = VIP(ell, lambda x: x - p, L=1.0)
    method = InexactExtragradient(
        vip, beta=0.5, sigma=1.0, rho=0.5, alpha=0.5, convergence_tol=1e-9
    )
    iterates = list(islice(method, 300))

    assert all(ell.contains(x, atol=1e-8) for x in iterates)
    assert natural_residual(vip, iterates[-1]) < 1e-3
    assert method.counter.value > 0


def test_exact_equality_is_the_default_stopping_test():
    vip = interior_problem()
    method = InexactExtragradient(vip, beta=0.5, sigma=1.0, rho=0.5, alpha=0.5)
    x = np.array([0.5, 0.0])
    assert method.step(InexactExtragradientState(x=x, k=3)) is None


def test_vanishing_operator_at_line_search_point(monkeypatch):
    vip = interior_problem()
    solution = np.array([0.5, 0.0])
    monkeypatch.setattr(inexact_module, "armijo_search", lambda *args, **kwargs: (solution, 0))
    method = InexactExtragradient(
        vip, beta=0.5, sigma=1.0, rho=0.5, alpha=0.5, x0=np.array([-0.5, 0.0])
    )
    with pytest.raises(DegenerateOperatorValue) as excinfo:
        method.step(method.initial_state())
    assert np.array_equal(excinfo.value.point, solution)


def test_line_search_failure_propagates():
    vip = interior_problem()
    method = InexactExtragradient(
        vip,
        beta=0.5,
        sigma=1.0,
        rho=0.6,
        alpha=0.5,
        x0=np.array([-0.5, 0.0]),
        max_backtracks=0,
    )
    with pytest.raises(MaxIterationsExceeded):
        list(method)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(beta=0.0),
        dict(sigma=0.0),
        dict(sigma=1.5),
        dict(rho=1.0),
        dict(alpha=1.0),
        dict(max_backtracks=-1),
        dict(convergence_tol=-1e-3),
    ],
)
def test_invalid_parameters(kwargs):
    params = dict(beta=0.5, sigma=1.0, rho=0.5, alpha=0.5)
    params.update(kwargs)
    with pytest.raises(ValueError):
        InexactExtragradient(interior_problem(), **params)
