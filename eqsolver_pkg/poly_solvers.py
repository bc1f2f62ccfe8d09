"""Polynomial root solvers.

Closed-form solvers for degrees 2, 3 and 4 return every root in the complex
plane, with repeated roots repeated. ``PolyEquation`` dispatches to generic
named algorithms for any degree.

All constructors take coefficients in the conventional descending order,
``a*x**n + b*x**(n-1) + ...``; the owned ``Polynomial`` stores them
ascending.
"""

from __future__ import annotations

import cmath
import math
from abc import ABC, abstractmethod
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Protocol, Sequence, runtime_checkable

import numpy as np

from .config import QUARTIC_BRANCH_TOLERANCE
from .logging_config import get_logger, solve_context
from .polynomial import Polynomial
from .types import PolyResult, UnknownAlgorithm

logger = get_logger("poly_solvers")

_CUBE_ROOTS_OF_UNITY = (
    complex(1.0, 0.0),
    complex(-0.5, math.sqrt(3) / 2),
    complex(-0.5, -math.sqrt(3) / 2),
)


@runtime_checkable
class PolynomialRootSolver(Protocol):
    """Anything that can produce the roots of its polynomial."""

    def get_solutions(self) -> PolyResult:
        ...


class PolyBase(ABC):
    """Shared base owning the polynomial whose roots are sought."""

    def __init__(self, coefficients: Sequence[float]):
        # descending in, ascending stored
        self._poly = Polynomial(reversed([float(c) for c in coefficients]))

    @property
    def polynomial(self) -> Polynomial:
        return self._poly

    @property
    def degree(self) -> int:
        return self._poly.degree

    def get_derivative(self) -> Polynomial:
        return self._poly.get_derivative()

    @abstractmethod
    def get_solutions(self) -> PolyResult:
        """Every root in the complex plane, repeated by multiplicity."""

    def __repr__(self) -> str:
        descending = ", ".join(repr(c) for c in reversed(self._poly))
        return f"{type(self).__name__}({descending})"


class Quadratic(PolyBase):
    """Roots of ``a*x**2 + b*x + c`` by the quadratic formula."""

    def __init__(self, a: float, b: float, c: float):
        super().__init__((a, b, c))
        self.a, self.b, self.c = float(a), float(b), float(c)

    def get_discriminant(self) -> float:
        return self.b * self.b - 4 * self.a * self.c

    def get_solutions(self) -> PolyResult:
        sqrt_delta = cmath.sqrt(complex(self.get_discriminant()))
        return [
            (-self.b + sqrt_delta) / (2 * self.a),
            (-self.b - sqrt_delta) / (2 * self.a),
        ]


class Cubic(PolyBase):
    """Roots of ``a*x**3 + b*x**2 + c*x + d``.

    Uses the depressed cubic with ``q = (3B - A**2)/9`` and
    ``r = (9AB - 27C - 2A**3)/54`` (``A, B, C`` the monic coefficients) and
    branches on ``delta = q**3 + r**2``:

    - ``delta < 0``: three distinct real roots, trigonometric form
    - ``delta == 0``: the triple root ``2*cbrt(r) - A/3``
    - ``delta > 0``: Cardano, one real root and a complex pair
    """

    def __init__(self, a: float, b: float, c: float, d: float):
        super().__init__((a, b, c, d))
        self.a, self.b, self.c, self.d = float(a), float(b), float(c), float(d)

    def get_discriminant(self) -> float:
        a, b, c, d = self.a, self.b, self.c, self.d
        return (
            b * b * c * c
            - 4 * a * c * c * c
            - 4 * b * b * b * d
            - 27 * a * a * d * d
            + 18 * a * b * c * d
        )

    def get_solutions(self) -> PolyResult:
        A = self.b / self.a
        B = self.c / self.a
        C = self.d / self.a
        q = (3 * B - A * A) / 9.0
        r = (9 * A * B - 27 * C - 2 * A * A * A) / 54.0

        a_over_3 = A / 3
        q_cube = q * q * q
        delta = q_cube + r * r

        if delta < 0:
            cos_arg = max(-1.0, min(1.0, r / math.sqrt(-q_cube)))
            theta = math.acos(cos_arg)
            sqrt_q = math.sqrt(-q)
            return [
                complex(sqrt_q * 2 * math.cos((theta + 2 * math.pi * k) / 3) - a_over_3)
                for k in range(3)
            ]

        if delta > 0:
            sqrt_d = math.sqrt(delta)
            s = float(np.cbrt(r + sqrt_d))
            t = float(np.cbrt(r - sqrt_d))
            real_part = a_over_3 + (s + t) / 2
            # both members of the pair carry +imag
            pair = complex(-real_part, math.sqrt(3) * (s - t) / 2)
            return [complex((s + t) - a_over_3), pair, pair]

        triple = complex(2 * float(np.cbrt(r)) - a_over_3)
        return [triple, triple, triple]


class Quartic(PolyBase):
    """Roots of ``a*x**4 + b*x**3 + c*x**2 + d*x + e`` in closed form.

    Everything is computed in complex arithmetic from the monic
    coefficients, so real and complex roots come out of the same formula:

        Q1 = c**2 - 3bd + 12e
        Q2 = 2c**3 - 9bcd + 27d**2 + 27b**2 e - 72ce
        Q3 = 8bc - 16d - 2b**3
        Q4 = 3b**2 - 8c
        Q5 = (sqrt(Q2**2/4 - Q1**3) + Q2/2) ** (1/3)
        Q6 = (Q1/Q5 + Q5) / 3
        Q7 = 2 sqrt(Q4/12 + Q6)

        x = (-b - Q7 -/+ sqrt(2Q4/3 - 4Q6 - Q3/Q7)) / 4
        x = (-b + Q7 -/+ sqrt(2Q4/3 - 4Q6 + Q3/Q7)) / 4

    When the principal cube root makes Q7 vanish (biquadratics such as
    ``x**4 - 1``), the other two cube roots of Q5 are tried and the one
    giving the largest ``|Q7|`` is kept.
    """

    def __init__(self, a: float, b: float, c: float, d: float, e: float):
        super().__init__((a, b, c, d, e))
        self.a, self.b, self.c, self.d, self.e = (
            float(a),
            float(b),
            float(c),
            float(d),
            float(e),
        )

    def get_discriminant(self) -> float:
        a, b, c, d, e = self.a, self.b, self.c, self.d, self.e
        return (
            256 * a**3 * e**3
            - 192 * a**2 * b * d * e**2
            - 128 * a**2 * c**2 * e**2
            + 144 * a**2 * c * d**2 * e
            - 27 * a**2 * d**4
            + 144 * a * b**2 * c * e**2
            - 6 * a * b**2 * d**2 * e
            - 80 * a * b * c**2 * d * e
            + 18 * a * b * c * d**3
            + 16 * a * c**4 * e
            - 4 * a * c**3 * d**2
            - 27 * b**4 * e**2
            + 18 * b**3 * c * d * e
            - 4 * b**3 * d**3
            - 4 * b**2 * c**3 * e
            + b**2 * c**2 * d**2
        )

    @staticmethod
    def _resolvent(q1: complex, q4: complex, q5: complex) -> tuple[complex, complex]:
        q6 = (q1 / q5 + q5) / 3.0 if q5 != 0 else 0j
        q7 = cmath.sqrt(q4 / 12.0 + q6) * 2.0
        return q6, q7

    def get_solutions(self) -> PolyResult:
        b = complex(self.b / self.a)
        c = complex(self.c / self.a)
        d = complex(self.d / self.a)
        e = complex(self.e / self.a)

        q1 = c * c - 3.0 * b * d + 12.0 * e
        q2 = 2.0 * c * c * c - 9.0 * b * c * d + 27.0 * d * d + 27.0 * b * b * e - 72.0 * c * e
        q3 = 8.0 * b * c - 16.0 * d - 2.0 * b * b * b
        q4 = 3.0 * b * b - 8.0 * c

        sqrt_term = cmath.sqrt(q2 * q2 / 4.0 - q1 * q1 * q1)
        q5 = (sqrt_term + q2 / 2.0) ** (1.0 / 3.0)
        if q5 == 0:
            q5 = (q2 / 2.0 - sqrt_term) ** (1.0 / 3.0)

        q6, q7 = self._resolvent(q1, q4, q5)
        if abs(q7) < QUARTIC_BRANCH_TOLERANCE:
            q6, q7 = max(
                (self._resolvent(q1, q4, q5 * w) for w in _CUBE_ROOTS_OF_UNITY),
                key=lambda pair: abs(pair[1]),
            )
            logger.debug("quartic: switched cube-root branch, |Q7|=%g", abs(q7))

        ratio = q3 / q7 if q7 != 0 else 0j

        temp = 4.0 * q4 / 6.0 - 4.0 * q6 - ratio
        first = [
            (-b - q7 - cmath.sqrt(temp)) / 4.0,
            (-b - q7 + cmath.sqrt(temp)) / 4.0,
        ]
        temp = 4.0 * q4 / 6.0 - 4.0 * q6 + ratio
        second = [
            (-b + q7 - cmath.sqrt(temp)) / 4.0,
            (-b + q7 + cmath.sqrt(temp)) / 4.0,
        ]
        return first + second


class PolyAlgorithm(str, Enum):
    LAGUERRE = "laguerre"
    BAIRSTOW = "bairstow"


PolyCode = Callable[[Sequence[float]], PolyResult]


def _laguerre(coefficients: Sequence[float]) -> PolyResult:
    # TODO: implement Laguerre's method with deflation
    logger.warning(
        "Laguerre's method is not implemented; returning no roots",
        extra=solve_context(method=PolyAlgorithm.LAGUERRE.value),
    )
    return []


def _bairstow(coefficients: Sequence[float]) -> PolyResult:
    # TODO: implement Bairstow's quadratic-factor iteration
    logger.warning(
        "Bairstow's method is not implemented; returning no roots",
        extra=solve_context(method=PolyAlgorithm.BAIRSTOW.value),
    )
    return []


POLY_ALGORITHMS: Mapping[PolyAlgorithm, PolyCode] = MappingProxyType(
    {
        PolyAlgorithm.LAGUERRE: _laguerre,
        PolyAlgorithm.BAIRSTOW: _bairstow,
    }
)


class PolyEquation(PolyBase):
    """Polynomial of any degree solved by a named generic algorithm.

    The registered algorithms are placeholders: ``get_solutions`` returns an
    empty list for every method.
    """

    def __init__(self, coefficients: Sequence[float], method: PolyAlgorithm | str):
        super().__init__(coefficients)
        try:
            self.method = PolyAlgorithm(method.lower() if isinstance(method, str) else method)
        except ValueError:
            choices = ", ".join(m.value for m in PolyAlgorithm)
            raise UnknownAlgorithm(
                f"Unknown polynomial method {method!r}; expected one of: {choices}"
            ) from None

    def get_solutions(self) -> PolyResult:
        return POLY_ALGORITHMS[self.method](self.polynomial.coefficients)
