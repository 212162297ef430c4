"""Pytest configuration and shared fixtures for inexactvi tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Debug-mode isolation so feasibility checks never leak between tests
"""

import os

import numpy as np
import pytest
import torch

from inexactvi.diagnostics import set_debug_enabled


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator()
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds(rng: np.random.Generator, torch_rng: torch.Generator) -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture(autouse=True)
def reset_debug_mode():
    """Run every test with debug checks off and restore the default afterwards."""
    set_debug_enabled(False)
    yield
    set_debug_enabled(False)
