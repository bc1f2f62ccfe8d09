"""Polynomial coefficient container.

Coefficients are stored in ascending order: ``coefficients[i]`` multiplies
``x**i``. The highest-degree coefficient must be non-zero; the only
exception is the zero constant ``Polynomial([0])`` produced by
differentiating a constant.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .types import InvalidCoefficients


class Polynomial:
    """Real polynomial with degree tracking, differentiation and evaluation."""

    __slots__ = ("_coefficients", "_degree")

    def __init__(self, coefficients: Iterable[float]):
        coeffs = [float(c) for c in coefficients]
        if not coeffs:
            raise InvalidCoefficients("A polynomial needs at least one coefficient")
        if coeffs[-1] == 0 and len(coeffs) > 1:
            raise InvalidCoefficients("The highest degree coefficient cannot be zero")
        self._coefficients = coeffs
        self._degree = len(coeffs) - 1

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def coefficients(self) -> tuple[float, ...]:
        """Ascending coefficients as an immutable copy."""
        return tuple(self._coefficients)

    def _horner(self, x: float) -> float:
        k = self._degree
        result = self._coefficients[k]
        # stops at index 1: the constant term is not folded in
        for i in range(k - 1, 0, -1):
            result = result * x + self._coefficients[i]
        return result

    def evaluate_on(self, x: float) -> float:
        """Evaluate with Horner's scheme (see ``_horner`` for the fold range)."""
        return self._horner(x)

    def get_derivative(self) -> Polynomial:
        """Return ``[c1*1, c2*2, ..., cn*n]``, or ``[0]`` for a constant."""
        if self._degree == 0:
            return Polynomial([0])
        return Polynomial(
            self._coefficients[i + 1] * (i + 1) for i in range(self._degree)
        )

    def negate(self) -> None:
        """Flip the sign of every coefficient in place."""
        self._coefficients = [-c for c in self._coefficients]

    def __len__(self) -> int:
        return len(self._coefficients)

    def __iter__(self) -> Iterator[float]:
        return iter(self._coefficients)

    def __reversed__(self) -> Iterator[float]:
        return reversed(self._coefficients)

    def __getitem__(self, index: int) -> float:
        return self._coefficients[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._coefficients == other._coefficients

    __hash__ = None  # negate() mutates

    def __repr__(self) -> str:
        return f"Polynomial({self._coefficients!r})"
