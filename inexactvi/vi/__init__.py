"""Extragradient-type solvers for variational inequality problems."""

from .base import IterationStep, VIMethod
from .extragradient import Extragradient, ExtragradientState
from .factory import (
    ExtragradientConfig,
    InexactExtragradientConfig,
    create_method,
)
from .inexact import InexactExtragradient, InexactExtragradientState, armijo_search
from .problem import VIP

__all__ = [
    "VIP",
    "VIMethod",
    "IterationStep",
    "Extragradient",
    "ExtragradientState",
    "InexactExtragradient",
    "InexactExtragradientState",
    "armijo_search",
    "ExtragradientConfig",
    "InexactExtragradientConfig",
    "create_method",
]
