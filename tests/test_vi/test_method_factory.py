"""Tests for building outer iterators from configuration objects."""

import numpy as np
import pytest

from inexactvi import (
    VIP,
    Ball,
    Extragradient,
    ExtragradientConfig,
    InexactExtragradient,
    InexactExtragradientConfig,
    IterationCounter,
    create_method,
)


@pytest.fixture
def vip():
    return VIP(Ball(np.zeros(2), 1.0), lambda x: x - np.array([2.0, 0.0]), L=1.0)


def test_create_extragradient(vip):
    counter = IterationCounter()
    method = create_method(ExtragradientConfig(gamma=0.1, alpha=0.2), vip, counter)
    assert isinstance(method, Extragradient)
    assert method.alpha == 0.2
    assert method.gamma == 0.1
    assert method.counter is counter


def test_create_extragradient_with_default_step(vip):
    method = create_method(ExtragradientConfig(gamma=0.1), vip)
    assert method.alpha == pytest.approx(0.5 * np.sqrt(0.8))


def test_create_inexact_extragradient(vip):
    config = InexactExtragradientConfig(
        beta=0.3, rho=0.7, max_backtracks=10, convergence_tol=1e-8, x0=np.array([0.5, 0.0])
    )
    method = create_method(config, vip)
    assert isinstance(method, InexactExtragradient)
    assert method.beta == 0.3
    assert method.sigma == 1.0
    assert method.max_backtracks == 10
    assert method.convergence_tol == 1e-8
    assert np.array_equal(method.x0, [0.5, 0.0])


def test_invalid_parameters_surface_from_config(vip):
    with pytest.raises(ValueError):
        create_method(ExtragradientConfig(gamma=0.6, alpha=0.1), vip)


def test_unknown_config_rejected(vip):
    with pytest.raises(ValueError, match="Unsupported method configuration"):
        create_method({"method": "extragradient"}, vip)
