"""Centralized configuration for eqsolver.

This module defines:
- Numerical defaults for the iterative solvers (step, tolerance, iterations)
- Tolerances used by the closed-form polynomial solvers
- Input validation limits and cache sizes for expression parsing
- Allowed SymPy functions and parser transformations

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with EQSOLVER_)
"""

import os
import re

import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    standard_transformations,
)

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("eqsolver")
except importlib.metadata.PackageNotFoundError:
    VERSION = "1.0.0"

# Iterative solver configuration
DERIVATIVE_STEP = float(
    os.getenv("EQSOLVER_DERIVATIVE_STEP", "1e-13")
)  # forward-difference step h
DEFAULT_TOLERANCE = float(os.getenv("EQSOLVER_DEFAULT_TOLERANCE", "1e-10"))
DEFAULT_MAX_ITERATIONS = int(os.getenv("EQSOLVER_DEFAULT_MAX_ITERATIONS", "20"))
DEFAULT_VARIABLE = os.getenv("EQSOLVER_DEFAULT_VARIABLE", "x")

# Polynomial solver configuration
QUARTIC_BRANCH_TOLERANCE = float(
    os.getenv("EQSOLVER_QUARTIC_BRANCH_TOLERANCE", "1e-6")
)  # below this |Q7| the other cube-root branches are tried
DEFAULT_POLY_METHOD = os.getenv("EQSOLVER_DEFAULT_POLY_METHOD", "laguerre")

# Output
OUTPUT_PRECISION = int(os.getenv("EQSOLVER_OUTPUT_PRECISION", "10"))

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("EQSOLVER_MAX_INPUT_LENGTH", "10000"))  # characters

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("EQSOLVER_CACHE_SIZE_PARSE", "256"))

ALLOWED_SYMPY_NAMES = {
    "pi": sp.pi,
    "E": sp.E,
    "e": sp.E,
    "sqrt": sp.sqrt,
    "cbrt": sp.cbrt,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
    "log": sp.log,
    "ln": sp.log,
    "exp": sp.exp,
    "Abs": sp.Abs,
    "abs": sp.Abs,  # lowercase alias for convenience
}

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
