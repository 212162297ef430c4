"""Tests for telemetry, feasibility checks and residuals."""

import numpy as np
import pytest

from inexactvi import VIP, Ball, Ellipsoid
from inexactvi.diagnostics import (
    IterationCounter,
    assert_feasible,
    debug_context,
    feasibility_tolerance,
    frank_wolfe_gap,
    is_debug_enabled,
    is_feasible,
    natural_residual,
    set_debug_enabled,
)


def test_counter_increment_and_reset():
    counter = IterationCounter()
    assert counter.value == 0
    counter.increment()
    counter.increment()
    assert counter.value == 2
    assert repr(counter) == "IterationCounter(value=2)"
    counter.reset()
    assert counter.value == 0


def test_counter_value_is_read_only():
    counter = IterationCounter(3)
    with pytest.raises(AttributeError):
        counter.value = 5


def test_counter_rejects_negative_start():
    with pytest.raises(ValueError):
        IterationCounter(-1)


def test_feasibility_checks():
    ball = Ball(np.zeros(2), 1.0)
    assert is_feasible(ball, np.array([0.6, 0.8]))
    assert not is_feasible(ball, np.array([1.0, 1.0]))
    assert_feasible(ball, np.zeros(2))
    with pytest.raises(ValueError, match="not feasible"):
        assert_feasible(ball, np.array([2.0, 0.0]))


def test_frank_wolfe_gap_vanishes_at_projection():
    ball = Ball(np.zeros(2), 1.0)
    y = np.array([2.0, 0.0])
    assert frank_wolfe_gap(ball, y, np.array([1.0, 0.0])) == pytest.approx(0.0, abs=1e-12)
    assert frank_wolfe_gap(ball, y, np.zeros(2)) == pytest.approx(2.0)


def test_natural_residual_on_ball():
    vip = VIP(Ball(np.zeros(2), 1.0), lambda x: x - np.array([2.0, 0.0]))
    assert natural_residual(vip, np.array([1.0, 0.0])) == pytest.approx(0.0, abs=1e-12)
    assert natural_residual(vip, np.zeros(2)) == pytest.approx(1.0)


def test_natural_residual_without_closed_form_projection():
    ell = Ellipsoid(np.zeros(2), np.diag([4.0, 1.0]))
    p = np.array([0.5, 0.0])
    vip = VIP(ell, lambda x: x - p)
    # F vanishes at an interior point, so the projection is the point itself.
    assert natural_residual(vip, p) == 0.0
    assert natural_residual(vip, np.zeros(2)) == pytest.approx(0.5)


def test_debug_context_restores_previous_value():
    set_debug_enabled(False)
    with debug_context(True):
        assert is_debug_enabled()
        with debug_context(False):
            assert not is_debug_enabled()
        assert is_debug_enabled()
    assert not is_debug_enabled()


def test_debug_context_sets_feasibility_tolerance():
    default = feasibility_tolerance()
    with debug_context(True, atol=1e-3):
        assert feasibility_tolerance() == 1e-3
    assert feasibility_tolerance() == default


def test_debug_tolerance_must_be_non_negative():
    with pytest.raises(ValueError):
        set_debug_enabled(True, atol=-1.0)
    assert not is_debug_enabled()
