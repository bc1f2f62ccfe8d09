"""Unit tests for the Polynomial container."""

import unittest

from eqsolver_pkg.polynomial import Polynomial
from eqsolver_pkg.types import InvalidCoefficients


class TestConstruction(unittest.TestCase):
    """Test construction and the leading-coefficient invariant."""

    def test_degree_tracks_length(self):
        self.assertEqual(Polynomial([1]).degree, 0)
        self.assertEqual(Polynomial([1, 2, 3]).degree, 2)

    def test_zero_leading_coefficient_rejected(self):
        with self.assertRaises(InvalidCoefficients) as ctx:
            Polynomial([1, 2, 0])
        self.assertEqual(ctx.exception.code, "INVALID_COEFFICIENTS")

    def test_empty_rejected(self):
        with self.assertRaises(InvalidCoefficients):
            Polynomial([])

    def test_zero_constant_allowed(self):
        p = Polynomial([0])
        self.assertEqual(p.degree, 0)
        self.assertEqual(p.coefficients, (0.0,))

    def test_owns_its_coefficients(self):
        source = [1.0, 2.0, 3.0]
        p = Polynomial(source)
        source[0] = 99.0
        self.assertEqual(p[0], 1.0)


class TestDerivative(unittest.TestCase):
    """Derivative coefficients for degree 0 through 4."""

    def test_degree_0(self):
        self.assertEqual(Polynomial([7]).get_derivative(), Polynomial([0]))

    def test_degree_1(self):
        self.assertEqual(Polynomial([3, 5]).get_derivative().coefficients, (5.0,))

    def test_degree_2(self):
        # 1 + 2x + 3x^2 -> 2 + 6x
        self.assertEqual(Polynomial([1, 2, 3]).get_derivative().coefficients, (2.0, 6.0))

    def test_degree_3(self):
        # -6 + 11x - 6x^2 + x^3 -> 11 - 12x + 3x^2
        d = Polynomial([-6, 11, -6, 1]).get_derivative()
        self.assertEqual(d.coefficients, (11.0, -12.0, 3.0))
        self.assertEqual(d.degree, 2)

    def test_degree_4(self):
        # 5 + x + 2x^2 + 3x^3 + 4x^4 -> 1 + 4x + 9x^2 + 16x^3
        d = Polynomial([5, 1, 2, 3, 4]).get_derivative()
        self.assertEqual(d.coefficients, (1.0, 4.0, 9.0, 16.0))

    def test_derivative_is_new_instance(self):
        p = Polynomial([1, 2, 3])
        d = p.get_derivative()
        d.negate()
        self.assertEqual(p.coefficients, (1.0, 2.0, 3.0))


class TestEvaluation(unittest.TestCase):
    """Horner evaluation folds coefficients n..1 and leaves out c[0]."""

    def test_constant_term_not_folded(self):
        # 1 + 2x + 3x^2 at x = 2: 3*2 + 2 = 8 (the full value would be 17)
        self.assertEqual(Polynomial([1, 2, 3]).evaluate_on(2.0), 8.0)

    def test_matches_shifted_quotient(self):
        coeffs = [4, -1, 0.5, 2, 1]
        x = 1.5
        full = sum(c * x**i for i, c in enumerate(coeffs))
        self.assertAlmostEqual(
            Polynomial(coeffs).evaluate_on(x), (full - coeffs[0]) / x, places=12
        )

    def test_low_degrees(self):
        self.assertEqual(Polynomial([9]).evaluate_on(3.0), 9.0)
        self.assertEqual(Polynomial([9, 4]).evaluate_on(3.0), 4.0)


class TestNegate(unittest.TestCase):
    def test_negate_in_place(self):
        p = Polynomial([1, -2, 3])
        p.negate()
        self.assertEqual(p.coefficients, (-1.0, 2.0, -3.0))
        self.assertEqual(p.degree, 2)

    def test_iteration_order(self):
        p = Polynomial([1, 2, 3])
        self.assertEqual(list(p), [1.0, 2.0, 3.0])
        self.assertEqual(list(reversed(p)), [3.0, 2.0, 1.0])
        self.assertEqual(len(p), 3)


if __name__ == "__main__":
    unittest.main()
