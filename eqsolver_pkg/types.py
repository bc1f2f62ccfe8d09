"""Type definitions, result dataclasses and the error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple

# Closed-form solvers return one complex value per root (multiplicity by repetition)
PolyResult = list[complex]


class IterationResult(NamedTuple):
    """Outcome of an iterative solve: estimate, f(estimate) and optional guesses."""

    root: float
    residual: float
    guesses: list[float]


@dataclass
class EvalResult:
    """Result of evaluating an expression (or its derivative) at a point."""

    ok: bool
    result: float | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.error is not None:
            result_dict["error"] = self.error
            result_dict["code"] = self.code
        return result_dict


@dataclass
class RootResult:
    """Result of an iterative root search."""

    ok: bool
    algorithm: str
    root: float | None = None
    residual: float | None = None
    guesses: list[float] | None = None
    elapsed_ms: float | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "algorithm": self.algorithm}
        if self.error is not None:
            result_dict["error"] = self.error
            result_dict["code"] = self.code
            return result_dict
        result_dict["root"] = self.root
        result_dict["residual"] = self.residual
        if self.guesses:
            result_dict["guesses"] = self.guesses
        if self.elapsed_ms is not None:
            result_dict["elapsed_ms"] = self.elapsed_ms
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"RootResult(ok=False, algorithm={self.algorithm!r}, code={self.code!r}, error={self.error!r})"
        parts = [
            f"ok={self.ok}",
            f"algorithm={self.algorithm!r}",
            f"root={self.root!r}",
            f"residual={self.residual!r}",
        ]
        if self.guesses:
            parts.append(f"guesses=[{len(self.guesses)} values]")
        return f"RootResult({', '.join(parts)})"


@dataclass
class PolyRootsResult:
    """Result of a polynomial root extraction."""

    ok: bool
    method: str | None = None
    degree: int | None = None
    roots: PolyResult | None = None
    discriminant: float | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Complex roots are emitted as ``[real, imag]`` pairs.
        """
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.method is not None:
            result_dict["method"] = self.method
        if self.degree is not None:
            result_dict["degree"] = self.degree
        if self.error is not None:
            result_dict["error"] = self.error
            result_dict["code"] = self.code
            return result_dict
        result_dict["roots"] = [[z.real, z.imag] for z in (self.roots or [])]
        if self.discriminant is not None:
            result_dict["discriminant"] = self.discriminant
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"PolyRootsResult(ok=False, code={self.code!r}, error={self.error!r})"
        return (
            f"PolyRootsResult(ok=True, method={self.method!r}, degree={self.degree}, "
            f"roots={self.roots!r})"
        )


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(Exception):
    """Raised when an expression cannot be parsed into a function."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class SolverError(Exception):
    """Base class for failures raised while building or running a solver."""

    default_code = "SOLVER_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidCoefficients(SolverError):
    """Raised when the highest-degree coefficient of a polynomial is zero."""

    default_code = "INVALID_COEFFICIENTS"


class InvalidParameterCount(SolverError):
    """Raised when an algorithm receives the wrong number of parameters."""

    default_code = "INVALID_PARAMETER_COUNT"


class InvalidParameter(SolverError):
    """Raised when an algorithm parameter is NaN, infinite or not a number."""

    default_code = "INVALID_PARAMETER"


class ZeroDerivative(SolverError):
    """Raised when a Newton step meets f'(x) == 0."""

    default_code = "ZERO_DERIVATIVE"


class ZeroDenominator(SolverError):
    """Raised when a secant step meets equal function values."""

    default_code = "ZERO_DENOMINATOR"


class UnknownAlgorithm(SolverError):
    default_code = "UNKNOWN_ALGORITHM"


class EvaluationError(SolverError):
    """Raised when the function has no real value at the requested point."""

    default_code = "EVALUATION_ERROR"
