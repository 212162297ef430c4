"""Tests for the torch autograd bridges."""

from itertools import islice

import numpy as np
import pytest
import torch

from inexactvi import (
    VIP,
    Box,
    ConditionalGradient,
    InexactExtragradientConfig,
    VIPExperiment,
)
from inexactvi.torch import (
    as_float_tensor,
    autograd_gradient,
    game_operator,
    torch_operator,
)


def test_as_float_tensor_flattens_to_float64():
    t = as_float_tensor(np.array([[1, 2], [3, 4]]))
    assert t.dtype == torch.float64
    assert t.shape == (4,)
    assert not t.requires_grad


def test_autograd_gradient_matches_analytic():
    gradient = autograd_gradient(lambda x: (x**2).sum())
    x = np.array([1.0, -2.0, 0.5])
    g = gradient(x)
    assert isinstance(g, np.ndarray)
    assert np.allclose(g, 2.0 * x)


def test_autograd_gradient_requires_scalar_output():
    gradient = autograd_gradient(lambda x: x * 2.0)
    with pytest.raises(ValueError, match="scalar"):
        gradient(np.ones(2))


def test_torch_operator_wraps_vector_field():
    operator = torch_operator(lambda x: torch.stack([x[1], -x[0]]))
    assert np.allclose(operator(np.array([1.0, 2.0])), [2.0, -1.0])


def test_game_operator_for_bilinear_game():
    """F(u, w) = (dL/du, -dL/dw) for L(u, w) = u * w."""
    operator = game_operator(lambda u, w: (u * w).sum(), split=1)
    assert np.allclose(operator(np.array([1.0, 2.0])), [2.0, -1.0])


def test_game_operator_rejects_bad_split():
    with pytest.raises(ValueError):
        game_operator(lambda u, w: (u * w).sum(), split=0)
    operator = game_operator(lambda u, w: (u * w).sum(), split=2)
    with pytest.raises(ValueError):
        operator(np.array([1.0, 2.0]))


def test_autograd_gradient_drives_conditional_gradient():
    target = np.array([0.3, 2.0])
    target_t = torch.as_tensor(target)
    box = Box(np.zeros(2), np.ones(2))

    analytic = ConditionalGradient.from_set(None, box.an_element(), box, gradient=lambda x: x - target)
    autograd = ConditionalGradient.from_set(
        None,
        box.an_element(),
        box,
        gradient=autograd_gradient(lambda x: 0.5 * ((x - target_t) ** 2).sum()),
    )
    for a, b in zip(islice(analytic, 10), islice(autograd, 10)):
        assert np.allclose(a, b)


def test_regularized_game_converges_to_saddle_point():
    """L(u, w) = u^2/2 - w^2/2 + u w has its saddle point at the origin."""
    loss = lambda u, w: (0.5 * u**2 - 0.5 * w**2 + u * w).sum()  # noqa: E731
    vip = VIP(Box(-np.ones(2), np.ones(2)), game_operator(loss, split=1), L=2.0)
    config = InexactExtragradientConfig(beta=0.5, x0=np.array([1.0, 1.0]))
    result = VIPExperiment.from_config(vip, config).run(max_steps=100)

    assert np.linalg.norm(result.x) < 1e-8
