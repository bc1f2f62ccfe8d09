"""Iterative root-finding algorithms for real functions of one variable.

Each algorithm is a pure function

    algorithm(evaluate, differentiate, parameters, record_guesses) -> IterationResult

where ``evaluate`` is f, ``differentiate`` approximates f' and
``parameters`` is the algorithm-specific list documented on each function.
Algorithms are looked up by ``Algorithm`` member in ``ALGORITHMS``.

Loops run while the last step magnitude is at least the tolerance and the
iteration cap has not been reached; the cap is the only way to stop a run.
"""

from __future__ import annotations

import math
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from .logging_config import get_logger, solve_context
from .types import (
    InvalidParameter,
    InvalidParameterCount,
    IterationResult,
    UnknownAlgorithm,
    ZeroDenominator,
    ZeroDerivative,
)

logger = get_logger("iterative")

RealFunction = Callable[[float], float]
AlgorithmCode = Callable[[RealFunction, RealFunction, Sequence[float], bool], IterationResult]


class Algorithm(str, Enum):
    NEWTON = "newton"
    NEWTON_WITH_MULTIPLICITY = "newton_multiplicity"
    SECANT = "secant"

    @classmethod
    def from_name(cls, name: Algorithm | str) -> Algorithm:
        """Resolve an ``Algorithm`` from a member or its (case-insensitive) value."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise UnknownAlgorithm(
                f"Unknown algorithm {name!r}; expected one of: {choices}"
            ) from None


def forward_difference(function: RealFunction, x: float, h: float) -> float:
    """Approximate f'(x) with ``(f(x + h) - f(x)) / h``."""
    return (function(x + h) - function(x)) / h


def _check_parameters(
    parameters: Sequence[float], expected: int, description: str
) -> list[float]:
    """Check arity, then return the parameters as finite floats."""
    if len(parameters) != expected:
        raise InvalidParameterCount(
            f"The parameter list must contain {expected} values: {description} "
            f"(got {len(parameters)})"
        )
    try:
        values = [float(p) for p in parameters]
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"Parameters must be numbers: {e}") from e
    for value in values:
        if not math.isfinite(value):
            raise InvalidParameter(f"Parameters must be finite (got {value!r})")
    return values


def _warn_if_not_converged(name: str, diff: float, tolerance: float, n_max: int) -> None:
    if diff >= tolerance:
        logger.warning(
            "%s stopped after %d iterations without reaching tolerance %g (last step %g)",
            name,
            n_max,
            tolerance,
            diff,
            extra=solve_context(algorithm=name.lower()),
        )


def _newton_iterate(
    evaluate: RealFunction,
    differentiate: RealFunction,
    x0: float,
    tolerance: float,
    n_max: int,
    multiplicity: int,
    record_guesses: bool,
) -> IterationResult:
    diff = tolerance + 1
    n = 0
    guesses: list[float] = [x0] if record_guesses else []

    while diff >= tolerance and n < n_max:
        der = differentiate(x0)
        if der == 0:
            raise ZeroDerivative(f"Found f'(x) = 0 at x = {x0!r}")

        step = -multiplicity * (evaluate(x0) / der)
        x0 = x0 + step
        if record_guesses:
            guesses.append(x0)

        diff = abs(step)
        n += 1
        logger.debug(
            "step %d: x=%r |dx|=%g", n, x0, diff,
            extra=solve_context(algorithm="newton", iteration=n),
        )

    if n >= n_max:
        _warn_if_not_converged("Newton", diff, tolerance, n_max)
    return IterationResult(x0, evaluate(x0), guesses)


def newton(
    evaluate: RealFunction,
    differentiate: RealFunction,
    parameters: Sequence[float],
    record_guesses: bool = False,
) -> IterationResult:
    """Newton's method.

    Args:
        evaluate: f
        differentiate: approximation of f'
        parameters: ``(x0, tolerance, max_iterations)``
        record_guesses: keep the starting point and every iterate

    Raises:
        InvalidParameterCount: If ``parameters`` does not hold 3 values
        InvalidParameter: If a parameter is not a finite number
        ZeroDerivative: If f'(x) is exactly zero at an iterate
    """
    x0, tolerance, n_max = _check_parameters(
        parameters, 3, "the initial guess, the tolerance and the max. number of iterations"
    )
    return _newton_iterate(
        evaluate, differentiate, x0, tolerance, int(n_max), 1, record_guesses
    )


def newton_with_multiplicity(
    evaluate: RealFunction,
    differentiate: RealFunction,
    parameters: Sequence[float],
    record_guesses: bool = False,
) -> IterationResult:
    """Newton's method scaled by a known root multiplicity ``r``.

    The step ``-r * f(x)/f'(x)`` restores quadratic convergence at a root of
    multiplicity ``r``.

    Args:
        parameters: ``(x0, tolerance, max_iterations, r)``
    """
    x0, tolerance, n_max, r = _check_parameters(
        parameters,
        4,
        "the initial guess, the tolerance, the max. number of iterations and the multiplicity",
    )
    return _newton_iterate(
        evaluate, differentiate, x0, tolerance, int(n_max), int(r), record_guesses
    )


def secant(
    evaluate: RealFunction,
    differentiate: RealFunction,
    parameters: Sequence[float],
    record_guesses: bool = False,
) -> IterationResult:
    """Secant method from two starting points.

    The iteration counter starts at 1, so at most ``max_iterations - 1``
    steps are taken. The residual returned is f evaluated at the previous
    accepted point, not at the returned root.

    Args:
        differentiate: unused, accepted for a uniform algorithm signature
        parameters: ``(x_prev, x0, tolerance, max_iterations)``

    Raises:
        InvalidParameterCount: If ``parameters`` does not hold 4 values
        InvalidParameter: If a parameter is not a finite number
        ZeroDenominator: If two consecutive function values are equal
    """
    xold, x0, tolerance, max_iterations = _check_parameters(
        parameters,
        4,
        "the first guess, the second guess, the tolerance and the max. number of iterations",
    )
    n = 1
    n_max = int(max_iterations)
    guesses: list[float] = [x0] if record_guesses else []

    fold = evaluate(xold)
    fnew = evaluate(x0)
    diff = tolerance + 1

    while diff >= tolerance and n < n_max:
        den = fnew - fold
        if den == 0:
            raise ZeroDenominator(f"Denominator is zero at x = {x0!r}")

        step = -(fnew * (x0 - xold)) / den
        xold = x0
        fold = fnew
        x0 = x0 + step
        diff = abs(step)
        n += 1

        if record_guesses:
            guesses.append(x0)
        fnew = evaluate(x0)
        logger.debug(
            "step %d: x=%r |dx|=%g", n - 1, x0, diff,
            extra=solve_context(algorithm="secant", iteration=n - 1),
        )

    if n >= n_max:
        _warn_if_not_converged("Secant", diff, tolerance, n_max)
    return IterationResult(x0, evaluate(xold), guesses)


ALGORITHMS: Mapping[Algorithm, AlgorithmCode] = MappingProxyType(
    {
        Algorithm.NEWTON: newton,
        Algorithm.NEWTON_WITH_MULTIPLICITY: newton_with_multiplicity,
        Algorithm.SECANT: secant,
    }
)
