"""Unit tests for the Equation orchestrator."""

import math
import unittest

from eqsolver_pkg.equation import Equation
from eqsolver_pkg.iterative import Algorithm
from eqsolver_pkg.types import (
    EvaluationError,
    InvalidParameterCount,
    ParseError,
    UnknownAlgorithm,
    ValidationError,
    ZeroDerivative,
)


class TestNewtonThroughEquation(unittest.TestCase):
    """Newton's method driven by the forward-difference derivative."""

    def test_sqrt2(self):
        root, residual, guesses = Equation("x^2 - 2").solve(1.0)
        self.assertAlmostEqual(root, math.sqrt(2), delta=1e-9)
        self.assertAlmostEqual(residual, 0.0, delta=1e-9)
        self.assertEqual(guesses, [])

    def test_explicit_parameters(self):
        eq = Equation("x^2 - 2")
        result = eq.solve_equation(Algorithm.NEWTON, [1.0, 1e-10, 20])
        self.assertAlmostEqual(result.root, math.sqrt(2), delta=1e-9)

    def test_algorithm_by_name(self):
        result = Equation("x^2 - 2").solve_equation("newton", [1.0, 1e-10, 20])
        self.assertAlmostEqual(result.root, math.sqrt(2), delta=1e-9)

    def test_transcendental(self):
        root, _, _ = Equation("sin(x)").solve(3.0)
        self.assertAlmostEqual(root, math.pi, delta=1e-9)

    def test_custom_variable(self):
        root, _, _ = Equation("t^2 - 4", variable="t").solve(3.0)
        self.assertAlmostEqual(root, 2.0, delta=1e-9)

    def test_constant_function_zero_derivative(self):
        with self.assertRaises(ZeroDerivative) as ctx:
            Equation("5").solve(1.0)
        self.assertEqual(ctx.exception.code, "ZERO_DERIVATIVE")

    def test_constant_function_zero_derivative_first_iteration(self):
        eq = Equation("5")
        with self.assertRaises(ZeroDerivative):
            eq.solve_equation(Algorithm.NEWTON, [-42.0, 1e-10, 1])

    def test_default_expression_is_zero(self):
        eq = Equation()
        self.assertEqual(eq.expression, "0")
        self.assertEqual(eq.evaluate_on(12.5), 0.0)
        with self.assertRaises(ZeroDerivative):
            eq.solve(1.0)


class TestMultiplicity(unittest.TestCase):
    def test_double_root_converges_faster_with_multiplicity(self):
        eq = Equation("x^2")
        plain = eq.solve_equation(
            Algorithm.NEWTON_WITH_MULTIPLICITY, [1.0, 1e-10, 20, 1], True
        )
        scaled = eq.solve_equation(
            Algorithm.NEWTON_WITH_MULTIPLICITY, [1.0, 1e-10, 20, 2], True
        )
        self.assertLess(len(scaled.guesses), len(plain.guesses))
        self.assertLess(abs(scaled.root), 1e-6)

    def test_guesses_start_with_initial_guess(self):
        result = Equation("x^2 - 2").solve_equation(Algorithm.NEWTON, [1.0, 1e-10, 20], True)
        self.assertEqual(result.guesses[0], 1.0)
        self.assertEqual(result.guesses[-1], result.root)


class TestSecantThroughEquation(unittest.TestCase):
    def test_cubic_real_root(self):
        result = Equation("x^3 - x - 2").solve_equation(
            Algorithm.SECANT, [1.0, 2.0, 1e-10, 20]
        )
        self.assertAlmostEqual(result.root, 1.5213797, delta=1e-7)

    def test_wrong_parameter_count(self):
        eq = Equation("x^3 - x - 2")
        for algorithm, params in (
            (Algorithm.NEWTON, [1.0, 1e-10]),
            (Algorithm.NEWTON_WITH_MULTIPLICITY, [1.0, 1e-10, 20]),
            (Algorithm.SECANT, [1.0, 2.0, 1e-10]),
        ):
            with self.subTest(algorithm=algorithm):
                with self.assertRaises(InvalidParameterCount):
                    eq.solve_equation(algorithm, params)

    def test_unknown_algorithm(self):
        with self.assertRaises(UnknownAlgorithm):
            Equation("x").solve_equation("regula_falsi", [0.0, 1.0, 1e-10, 20])


class TestDerivativeAndTiming(unittest.TestCase):
    def test_derivative_of_square(self):
        self.assertAlmostEqual(Equation("x^2").evaluate_derivative(3.0), 6.0, delta=0.05)

    def test_derivative_uses_configured_step(self):
        eq = Equation("x^2", step=0.5)
        # ((3.5)^2 - 9) / 0.5
        self.assertEqual(eq.evaluate_derivative(3.0), 6.5)

    def test_elapsed_time(self):
        eq = Equation("x^2 - 2")
        self.assertEqual(eq.elapsed_milliseconds(), 0.0)
        eq.solve(1.0)
        self.assertGreaterEqual(eq.elapsed_milliseconds(), 0.0)

    def test_equation_reusable(self):
        eq = Equation("x^2 - 4")
        self.assertAlmostEqual(eq.solve(1.0).root, 2.0, delta=1e-9)
        self.assertAlmostEqual(eq.solve(-1.0).root, -2.0, delta=1e-9)


class TestConstructionErrors(unittest.TestCase):
    def test_parse_error(self):
        with self.assertRaises(ParseError):
            Equation("2 +")

    def test_unknown_symbol(self):
        with self.assertRaises(ParseError) as ctx:
            Equation("x + y")
        self.assertEqual(ctx.exception.code, "UNKNOWN_SYMBOL")

    def test_empty_expression(self):
        with self.assertRaises(ValidationError):
            Equation("")

    def test_domain_error_during_solve(self):
        eq = Equation("log(x)")
        with self.assertRaises(EvaluationError):
            eq.evaluate_on(-1.0)


if __name__ == "__main__":
    unittest.main()
