"""inexactvi - extragradient solvers for variational inequalities with
feasible inexact projections computed by the conditional gradient method."""

__version__ = "0.1.0"

# Convex sets and projections
from .convex import (
    Ball,
    Box,
    CGState,
    ConditionalGradient,
    ConvexSet,
    Ellipsoid,
    Halfspace,
    HPolytope,
    Hyperplane,
    SolveResult,
    Status,
    VPolytope,
    approximate_projection,
    duality_gap_stopping,
    exact_line_search,
    finite_difference_gradient,
    inexact_projection,
    linear_optimizer,
)

# Diagnostics
from .diagnostics import (
    IterationCounter,
    assert_feasible,
    debug_context,
    frank_wolfe_gap,
    is_debug_enabled,
    is_feasible,
    natural_residual,
    set_debug_enabled,
)

# Errors
from .exceptions import (
    DegenerateOperatorValue,
    InexactVIError,
    InfeasibleStart,
    MaxIterationsExceeded,
)

# Experiments
from .experiments import (
    SweepResult,
    VIPExperiment,
    enumerate_iterates,
    run_parameter_sweep,
    take,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Solvers
from .vi import (
    VIP,
    Extragradient,
    ExtragradientConfig,
    InexactExtragradient,
    InexactExtragradientConfig,
    armijo_search,
    create_method,
)

__all__ = [
    "__version__",
    # Sets and projections
    "ConvexSet",
    "Ball",
    "Box",
    "Ellipsoid",
    "VPolytope",
    "HPolytope",
    "Halfspace",
    "Hyperplane",
    "CGState",
    "ConditionalGradient",
    "exact_line_search",
    "linear_optimizer",
    "finite_difference_gradient",
    "approximate_projection",
    "duality_gap_stopping",
    "inexact_projection",
    "Status",
    "SolveResult",
    # Diagnostics
    "IterationCounter",
    "is_feasible",
    "assert_feasible",
    "frank_wolfe_gap",
    "natural_residual",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Errors
    "InexactVIError",
    "MaxIterationsExceeded",
    "DegenerateOperatorValue",
    "InfeasibleStart",
    # Experiments
    "VIPExperiment",
    "take",
    "enumerate_iterates",
    "SweepResult",
    "run_parameter_sweep",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Solvers
    "VIP",
    "Extragradient",
    "InexactExtragradient",
    "armijo_search",
    "ExtragradientConfig",
    "InexactExtragradientConfig",
    "create_method",
]
