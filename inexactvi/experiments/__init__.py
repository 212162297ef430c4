"""Experiment harness and parameter sweeps for VIP solvers."""

from .runner import VIPExperiment, enumerate_iterates, take
from .sweep import SweepResult, run_parameter_sweep

__all__ = [
    "VIPExperiment",
    "take",
    "enumerate_iterates",
    "SweepResult",
    "run_parameter_sweep",
]
