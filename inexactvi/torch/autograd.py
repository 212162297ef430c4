"""PyTorch autograd bridges for objectives and VIP operators.

The solvers work on NumPy arrays; these helpers wrap functions written with
torch so that gradients come from autograd instead of finite differences.
"""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np
import torch

TorchScalarFn = Callable[[torch.Tensor], torch.Tensor]
TorchGameFn = Callable[[torch.Tensor, torch.Tensor], torch.Tensor]


def as_float_tensor(
    x: np.ndarray, device: Optional[torch.device] = None, requires_grad: bool = False
) -> torch.Tensor:
    """
    Convert a NumPy vector to a float64 tensor.

    Parameters
    ----------
    x:
        Input array; flattened to 1D.
    device:
        Optional device. Defaults to CPU.
    requires_grad:
        Whether autograd should track the tensor.
    """
    target = device if device is not None else torch.device("cpu")
    tensor = torch.as_tensor(np.asarray(x, dtype=np.float64).reshape(-1), device=target)
    return tensor.clone().requires_grad_(requires_grad)


def _to_numpy(t: torch.Tensor) -> np.ndarray:
    return t.detach().cpu().numpy().astype(np.float64).reshape(-1)


def autograd_gradient(
    f: TorchScalarFn, device: Optional[torch.device] = None
) -> Callable[[np.ndarray], np.ndarray]:
    """
    Gradient of a scalar torch function, evaluated on NumPy input.

    The result can be passed as ``gradient=`` to
    :class:`~inexactvi.convex.frank_wolfe.ConditionalGradient`.

    Raises
    ------
    ValueError
        If ``f`` does not return a scalar tensor.
    """

    def gradient(x: np.ndarray) -> np.ndarray:
        xt = as_float_tensor(x, device=device, requires_grad=True)
        value = f(xt)
        if value.ndim != 0:
            raise ValueError(
                f"objective must return a scalar tensor, got shape {tuple(value.shape)}"
            )
        (grad,) = torch.autograd.grad(value, xt)
        return _to_numpy(grad)

    return gradient


def torch_operator(
    fn: Callable[[torch.Tensor], torch.Tensor], device: Optional[torch.device] = None
) -> Callable[[np.ndarray], np.ndarray]:
    """Wrap a torch vector field ``R^n -> R^n`` as a NumPy VIP operator."""

    def operator(x: np.ndarray) -> np.ndarray:
        with torch.no_grad():
            return _to_numpy(fn(as_float_tensor(x, device=device)))

    return operator


def game_operator(
    loss: TorchGameFn, split: int, device: Optional[torch.device] = None
) -> Callable[[np.ndarray], np.ndarray]:
    """
    VIP operator of the saddle point problem ``min_u max_w loss(u, w)``.

    The joint variable is ``z = (u, w)`` with ``u = z[:split]``; the operator
    is ``F(z) = (grad_u loss, -grad_w loss)``, monotone whenever ``loss`` is
    convex in ``u`` and concave in ``w``.
    """
    if split < 1:
        raise ValueError(f"split must be positive, got {split}")

    def operator(z: np.ndarray) -> np.ndarray:
        zt = as_float_tensor(z, device=device)
        if split >= zt.shape[0]:
            raise ValueError(
                f"split={split} leaves no maximization variables in a vector of length {zt.shape[0]}"
            )
        u = zt[:split].clone().requires_grad_(True)
        w = zt[split:].clone().requires_grad_(True)
        value = loss(u, w)
        if value.ndim != 0:
            raise ValueError(
                f"loss must return a scalar tensor, got shape {tuple(value.shape)}"
            )
        grad_u, grad_w = torch.autograd.grad(value, (u, w))
        return _to_numpy(torch.cat([grad_u, -grad_w]))

    return operator


__all__ = ["as_float_tensor", "autograd_gradient", "torch_operator", "game_operator"]
