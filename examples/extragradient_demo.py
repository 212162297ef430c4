"""
Example: Extragradient methods with inexact projections.

Solves small variational inequalities over sets without a cheap exact
projection. The projections are computed by the conditional gradient method
and stopped as soon as the iterate-dependent tolerance is met.
"""

import numpy as np

from inexactvi import (
    VIP,
    Ball,
    Ellipsoid,
    ExtragradientConfig,
    InexactExtragradientConfig,
    VPolytope,
    VIPExperiment,
    configure_logging,
)
from inexactvi.torch import game_operator


def example_ball_extragradient():
    """Example: affine monotone operator over the unit ball."""
    print("=" * 60)
    print("Example 1: Extragradient over the unit ball")
    print("=" * 60)

    target = np.array([2.0, 1.0])
    vip = VIP(Ball(np.zeros(2), 1.0), lambda x: x - target, L=1.0)
    experiment = VIPExperiment.from_config(vip, ExtragradientConfig(gamma=0.05, alpha=0.3))
    result = experiment.run(max_steps=500)
    print(f"Status: {result.status}")
    print(f"Solution: {result.x}  (expected {target / np.linalg.norm(target)})")
    print(f"Outer iterations: {result.nit}, inner steps: {result.inner_steps}")
    print(f"Natural residual: {result.residual:.2e}")
    print()


def example_ellipsoid_inexact():
    """Example: rotation-plus-pull operator over an ellipsoid."""
    print("=" * 60)
    print("Example 2: Inexact extragradient over an ellipsoid")
    print("=" * 60)

    rotation = np.array([[0.5, 1.0], [-1.0, 0.5]])
    shift = np.array([-1.0, 2.0])
    ellipsoid = Ellipsoid(np.zeros(2), np.diag([4.0, 1.0]))
    vip = VIP(ellipsoid, lambda x: rotation @ x + shift)
    config = InexactExtragradientConfig(beta=0.5, sigma=1.0, rho=0.5, alpha=0.5, convergence_tol=1e-10)
    result = VIPExperiment.from_config(vip, config).run(max_steps=300)
    print(f"Status: {result.status}")
    print(f"Last iterate: {result.x}")
    print(f"Natural residual: {result.residual:.2e}")
    print()


def example_matrix_game():
    """Example: bilinear matrix game on two probability simplices."""
    print("=" * 60)
    print("Example 3: Matching pennies as a VIP")
    print("=" * 60)

    import torch

    payoff = torch.tensor([[1.0, -1.0], [-1.0, 1.0]], dtype=torch.float64)
    strategies = VPolytope(
        np.array([[1.0, 0.0, 1.0, 0.0], [1.0, 0.0, 0.0, 1.0], [0.0, 1.0, 1.0, 0.0], [0.0, 1.0, 0.0, 1.0]])
    )
    operator = game_operator(lambda u, w: u @ payoff @ w, split=2)
    vip = VIP(strategies, operator, L=2.0)
    config = InexactExtragradientConfig(beta=0.5, convergence_tol=1e-10)
    result = VIPExperiment.from_config(vip, config).run(max_steps=400)
    print(f"Status: {result.status}")
    print(f"Strategies: {result.x}  (equilibrium [0.5, 0.5, 0.5, 0.5])")
    print()


if __name__ == "__main__":
    configure_logging(level="INFO")
    example_ball_extragradient()
    example_ellipsoid_inexact()
    example_matrix_game()
