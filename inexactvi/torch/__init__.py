"""PyTorch integration for inexactvi.

Build VIP operators and conditional gradient objectives from torch code:

Example:
    >>> import torch
    >>> from inexactvi.torch import game_operator
    >>> F = game_operator(lambda u, w: (u * w).sum(), split=1)
    >>> F(np.array([1.0, 2.0]))
    array([ 2., -1.])
"""

from inexactvi.torch.autograd import (
    as_float_tensor,
    autograd_gradient,
    game_operator,
    torch_operator,
)

__all__ = [
    "as_float_tensor",
    "autograd_gradient",
    "torch_operator",
    "game_operator",
]
