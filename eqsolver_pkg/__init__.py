"""eqsolver package: iterative and closed-form equation solving."""

from .equation import Equation
from .iterative import Algorithm
from .polynomial import Polynomial
from .poly_solvers import Cubic, PolyAlgorithm, PolyEquation, Quadratic, Quartic
from .types import (
    EvaluationError,
    InvalidCoefficients,
    InvalidParameter,
    InvalidParameterCount,
    IterationResult,
    ParseError,
    PolyResult,
    SolverError,
    UnknownAlgorithm,
    ValidationError,
    ZeroDenominator,
    ZeroDerivative,
)

__all__ = [
    "config",
    "parser",
    "polynomial",
    "iterative",
    "equation",
    "poly_solvers",
    "types",
    "api",
    "cli",
    "logging_config",
    "Algorithm",
    "Cubic",
    "Equation",
    "EvaluationError",
    "InvalidCoefficients",
    "InvalidParameter",
    "InvalidParameterCount",
    "IterationResult",
    "ParseError",
    "PolyAlgorithm",
    "PolyEquation",
    "PolyResult",
    "Polynomial",
    "Quadratic",
    "Quartic",
    "SolverError",
    "UnknownAlgorithm",
    "ValidationError",
    "ZeroDenominator",
    "ZeroDerivative",
]

# Public API exports

__api_exports__ = [
    "find_root",
    "polynomial_roots",
    "derivative_at",
    "validate_expression",
]
