"""Equation: an expression bound to the iterative root-finding algorithms."""

from __future__ import annotations

import time
from typing import Sequence

from .config import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    DEFAULT_VARIABLE,
    DERIVATIVE_STEP,
)
from .iterative import ALGORITHMS, Algorithm, forward_difference
from .logging_config import get_logger, solve_context
from .parser import ScalarFunction
from .types import IterationResult

logger = get_logger("equation")


class Equation:
    """Solve ``f(x) = 0`` for an expression ``f``.

    The expression is parsed once at construction; the instance can then be
    solved any number of times with any registered algorithm. Derivatives
    are forward differences with a fixed step ``h``.

    Example:
        >>> eq = Equation("x^2 - 2")
        >>> root, residual, _ = eq.solve(1.0)
    """

    def __init__(
        self,
        expression: str = "0",
        variable: str = DEFAULT_VARIABLE,
        step: float = DERIVATIVE_STEP,
    ):
        self.function = ScalarFunction(expression, variable)
        self.h = step
        self.time = 0.0

    @property
    def expression(self) -> str:
        return self.function.expression

    def evaluate_on(self, x: float) -> float:
        return self.function.evaluate(x)

    def evaluate_derivative(self, x: float) -> float:
        """Forward-difference derivative ``(f(x + h) - f(x)) / h``."""
        return forward_difference(self.function.evaluate, x, self.h)

    def elapsed_milliseconds(self) -> float:
        """Wall-clock duration of the most recent ``solve_equation`` call."""
        return self.time

    def solve_equation(
        self,
        algorithm: Algorithm | str,
        parameters: Sequence[float],
        record_guesses: bool = False,
    ) -> IterationResult:
        """Run ``algorithm`` with its parameter list.

        Args:
            algorithm: ``Algorithm`` member or its name ("newton",
                "newton_multiplicity", "secant")
            parameters: algorithm-specific values, see ``eqsolver_pkg.iterative``
            record_guesses: return every iterate in ``IterationResult.guesses``

        Returns:
            IterationResult(root, residual, guesses)

        Raises:
            UnknownAlgorithm, InvalidParameterCount, ZeroDerivative,
            ZeroDenominator, EvaluationError
        """
        algorithm = Algorithm.from_name(algorithm)
        code = ALGORITHMS[algorithm]

        t1 = time.perf_counter()
        try:
            result = code(
                self.function.evaluate,
                self.evaluate_derivative,
                list(parameters),
                record_guesses,
            )
        finally:
            self.time = (time.perf_counter() - t1) * 1000.0

        logger.info(
            "solved: root=%r residual=%g (%.3f ms)",
            result.root,
            result.residual,
            self.time,
            extra=solve_context(algorithm=algorithm.value, expression=self.expression),
        )
        return result

    def solve(self, guess: float) -> IterationResult:
        """Newton from ``guess`` with the default tolerance and iteration cap."""
        return self.solve_equation(
            Algorithm.NEWTON, [guess, DEFAULT_TOLERANCE, DEFAULT_MAX_ITERATIONS], False
        )

    def __repr__(self) -> str:
        return f"Equation({self.expression!r})"
