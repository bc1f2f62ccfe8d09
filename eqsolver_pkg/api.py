"""Public API for eqsolver - returns structured objects instead of raising."""

from __future__ import annotations

from typing import Sequence

from .config import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_POLY_METHOD,
    DEFAULT_TOLERANCE,
    DEFAULT_VARIABLE,
)
from .equation import Equation
from .iterative import Algorithm
from .logging_config import get_logger
from .parser import ScalarFunction
from .poly_solvers import Cubic, PolyBase, PolyEquation, Quadratic, Quartic
from .types import (
    EvalResult,
    InvalidCoefficients,
    InvalidParameterCount,
    ParseError,
    PolyRootsResult,
    RootResult,
    SolverError,
    ValidationError,
)

logger = get_logger("api")

_CLOSED_FORMS: dict[int, type[PolyBase]] = {2: Quadratic, 3: Cubic, 4: Quartic}


def find_root(
    expression: str,
    algorithm: Algorithm | str = Algorithm.NEWTON,
    parameters: Sequence[float] | None = None,
    record_guesses: bool = False,
    variable: str = DEFAULT_VARIABLE,
) -> RootResult:
    """Find a root of ``expression = 0`` with an iterative algorithm.

    Args:
        expression: Expression string in one variable (e.g., "x^2 - 2")
        algorithm: "newton", "newton_multiplicity" or "secant"
        parameters: Algorithm parameter list; for Newton ``None`` means
            ``(0, DEFAULT_TOLERANCE, DEFAULT_MAX_ITERATIONS)``
        record_guesses: Include every iterate in the result
        variable: Name of the free variable

    Returns:
        RootResult with root, residual and timing, or error and code

    Example:
        >>> from eqsolver_pkg.api import find_root
        >>> result = find_root("x^2 - 2", "newton", [1, 1e-10, 20])
        >>> round(result.root, 6)
        1.414214
    """
    name = algorithm.value if isinstance(algorithm, Algorithm) else str(algorithm)
    try:
        resolved = Algorithm.from_name(algorithm)
        name = resolved.value
        if parameters is None:
            if resolved is not Algorithm.NEWTON:
                raise InvalidParameterCount(
                    f"Algorithm {resolved.value!r} needs an explicit parameter list"
                )
            parameters = [0.0, DEFAULT_TOLERANCE, DEFAULT_MAX_ITERATIONS]
        equation = Equation(expression, variable)
        root, residual, guesses = equation.solve_equation(
            resolved, parameters, record_guesses
        )
    except (ValidationError, ParseError, SolverError) as e:
        logger.debug("find_root(%r, %s) failed: %s", expression, name, e)
        return RootResult(ok=False, algorithm=name, error=str(e), code=e.code)
    return RootResult(
        ok=True,
        algorithm=name,
        root=root,
        residual=residual,
        guesses=guesses if record_guesses else None,
        elapsed_ms=equation.elapsed_milliseconds(),
    )


def build_poly_solver(
    coefficients: Sequence[float], method: str | None = None
) -> PolyBase:
    """Choose the solver for descending ``coefficients``.

    Degrees 2-4 use the closed forms unless ``method`` names a generic
    algorithm; other degrees go to ``PolyEquation``.

    Raises:
        InvalidCoefficients: If the polynomial is constant or the leading coefficient is zero
        UnknownAlgorithm: If ``method`` is not a known polynomial algorithm
    """
    coeffs = [float(c) for c in coefficients]
    degree = len(coeffs) - 1
    if degree < 1:
        raise InvalidCoefficients("A polynomial of degree at least 1 is required")
    if method is None and degree in _CLOSED_FORMS:
        return _CLOSED_FORMS[degree](*coeffs)
    return PolyEquation(coeffs, method or DEFAULT_POLY_METHOD)


def polynomial_roots(
    coefficients: Sequence[float], method: str | None = None
) -> PolyRootsResult:
    """Roots of a polynomial given by descending coefficients.

    Args:
        coefficients: ``[a, b, c, ...]`` for ``a*x**n + b*x**(n-1) + ...``
        method: Generic algorithm name ("laguerre", "bairstow"); ``None``
            selects the closed form for degrees 2-4

    Returns:
        PolyRootsResult with complex roots (and the discriminant for closed forms)

    Example:
        >>> from eqsolver_pkg.api import polynomial_roots
        >>> polynomial_roots([1, -3, 2]).roots
        [(2+0j), (1+0j)]
    """
    try:
        solver = build_poly_solver(coefficients, method)
        roots = solver.get_solutions()
    except SolverError as e:
        return PolyRootsResult(ok=False, method=method, error=str(e), code=e.code)

    if isinstance(solver, PolyEquation):
        return PolyRootsResult(
            ok=True, method=solver.method.value, degree=solver.degree, roots=roots
        )
    return PolyRootsResult(
        ok=True,
        method="closed_form",
        degree=solver.degree,
        roots=roots,
        discriminant=solver.get_discriminant(),
    )


def derivative_at(
    expression: str, x: float, variable: str = DEFAULT_VARIABLE
) -> EvalResult:
    """Forward-difference derivative of ``expression`` at ``x``."""
    try:
        value = Equation(expression, variable).evaluate_derivative(x)
    except (ValidationError, ParseError, SolverError) as e:
        return EvalResult(ok=False, error=str(e), code=e.code)
    return EvalResult(ok=True, result=value)


def validate_expression(
    expression: str, variable: str = DEFAULT_VARIABLE
) -> tuple[bool, str | None]:
    """Validate an expression without solving it.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from eqsolver_pkg.api import validate_expression
        >>> validate_expression("sin(x) - x/2")
        (True, None)
        >>> validate_expression("import os")
        (False, 'Input contains forbidden token: import')
    """
    try:
        ScalarFunction(expression, variable)
        return True, None
    except (ValidationError, ParseError) as e:
        return False, str(e)
