"""Expression parsing into callable real functions.

This module handles:
- Input sanitization and validation
- SymPy expression parsing restricted to one free variable
- Compiling the parsed expression into a fast float callable
- Result formatting (real numbers and complex roots)
"""

from __future__ import annotations

import math
from functools import lru_cache
from tokenize import TokenError
from typing import Any

import sympy as sp
from sympy import parse_expr

from . import config
from .config import (
    ALLOWED_SYMPY_NAMES,
    CACHE_SIZE_PARSE,
    DEFAULT_VARIABLE,
    MAX_INPUT_LENGTH,
    TRANSFORMATIONS,
    VAR_NAME_RE,
)
from .logging_config import get_logger
from .types import EvaluationError, ParseError, ValidationError

logger = get_logger("parser")

# Basic denylist to avoid dangerous tokens before SymPy parsing
FORBIDDEN_TOKENS = (
    "__",
    "import",
    "lambda",
    "eval",
    "exec",
    "open",
    "os.",
    "sys.",
    "subprocess",
    "builtins",
    "getattr",
    "setattr",
    "delattr",
    "compile",
    "globals",
    "locals",
)


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        return fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        return str(val)


def format_complex(val: complex, precision: int | None = None) -> str:
    """Format a complex root, dropping a zero imaginary part.

    Args:
        val: Complex value
        precision: Number of significant digits (default: OUTPUT_PRECISION)

    Returns:
        String such as ``"1.5"``, ``"-0.5 + 0.866025i"`` or ``"2 - 1i"``
    """
    z = complex(val)
    if z.imag == 0:
        return format_number(z.real, precision)
    sign = "-" if z.imag < 0 else "+"
    return f"{format_number(z.real, precision)} {sign} {format_number(abs(z.imag), precision)}i"


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses/brackets are balanced. Returns (is_balanced, error_position)."""
    pairs = {"(": ")", "[": "]", "{": "}"}
    stack: list[tuple[str, int]] = []  # (char, position)
    for i, char in enumerate(input_str):
        if char in pairs:
            stack.append((char, i))
        elif char in pairs.values():
            if not stack:
                return False, i
            opening, _ = stack.pop()
            if pairs[opening] != char:
                return False, i
    if stack:
        return False, stack[0][1]  # Return position of first unmatched
    return True, None


def preprocess(input_str: str) -> str:
    """Validate and normalise an expression string before parsing.

    Applies transformations:
    - Validates input length and forbidden tokens
    - Standardizes unicode operators to ASCII
    - Validates balanced parentheses/brackets

    Args:
        input_str: Raw expression string

    Returns:
        Sanitized string ready for SymPy parsing

    Raises:
        ValidationError: If input is empty, too long or contains forbidden tokens
        ParseError: If parentheses/brackets are unbalanced
    """
    input_str = input_str.strip() if input_str else ""
    if not input_str:
        raise ValidationError("Input cannot be empty", "EMPTY_INPUT")
    if len(input_str) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    lowered = input_str.lower()
    for token in FORBIDDEN_TOKENS:
        if token in lowered:
            logger.warning("Rejected forbidden token %r", token)
            raise ValidationError(
                f"Input contains forbidden token: {token}", "FORBIDDEN_TOKEN"
            )

    processed = (
        input_str.replace("−", "-")
        .replace("×", "*")
        .replace("·", "*")
        .replace("÷", "/")
        .replace("√", "sqrt")
    )

    balanced, position = is_balanced(processed)
    if not balanced:
        raise ParseError(
            f"Unbalanced parentheses or brackets at position {position}", "UNBALANCED"
        )
    return processed


# Function classes reachable by name from ALLOWED_SYMPY_NAMES (sqrt and cbrt build Pow nodes)
ALLOWED_FUNCTIONS = frozenset(
    value.__name__ for value in ALLOWED_SYMPY_NAMES.values() if isinstance(value, type)
)


def _validate_expression_tree(expr: sp.Expr) -> None:
    """Reject SymPy constructs outside the whitelist.

    ``parse_expr`` still resolves names from SymPy's own namespace, so
    ``zeta(x)`` or ``Integral(x, x)`` parse even though neither is in
    ``ALLOWED_SYMPY_NAMES``. Only atoms, arithmetic nodes and whitelisted
    function applications are accepted.
    """
    for node in sp.preorder_traversal(expr):
        if node.is_Atom or isinstance(node, (sp.Add, sp.Mul, sp.Pow)):
            continue
        if isinstance(node, sp.Function) and node.func.__name__ in ALLOWED_FUNCTIONS:
            continue
        name = node.func.__name__ if isinstance(node, sp.Function) else type(node).__name__
        logger.warning("Blocked function %r", name)
        raise ParseError(f"Function '{name}' is not allowed", "UNKNOWN_SYMBOL")


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def parse_preprocessed(expr_str: str, variable: str = DEFAULT_VARIABLE) -> sp.Expr:
    """Parse a preprocessed string into a SymPy expression of one variable.

    Raises:
        ParseError: On syntax errors or when symbols other than ``variable`` appear
    """
    symbol = sp.Symbol(variable)
    local_dict = dict(ALLOWED_SYMPY_NAMES)
    local_dict[variable] = symbol
    try:
        expr = parse_expr(
            expr_str,
            local_dict=local_dict,
            transformations=TRANSFORMATIONS,
            evaluate=True,
        )
    except (SyntaxError, TokenError, TypeError, ValueError, AttributeError) as e:
        raise ParseError(f"Invalid expression {expr_str!r}: {e}") from e

    if not isinstance(expr, sp.Expr):
        raise ParseError(f"Expression {expr_str!r} is not a scalar expression")
    unknown = sorted(str(s) for s in expr.free_symbols if s != symbol)
    if unknown:
        raise ParseError(
            f"Unknown symbol(s) {', '.join(unknown)}; only '{variable}' is allowed",
            "UNKNOWN_SYMBOL",
        )
    _validate_expression_tree(expr)
    logger.debug("Parsed %r as %s", expr_str, expr)
    return expr


class ScalarFunction:
    """Real function of one variable built from an expression string.

    The expression is parsed once with SymPy and compiled with
    ``sympy.lambdify`` against the ``math`` module, so ``evaluate`` costs
    one Python call.
    """

    def __init__(self, expression: str, variable: str = DEFAULT_VARIABLE):
        if not VAR_NAME_RE.match(variable or ""):
            raise ValidationError(f"Invalid variable name: {variable!r}", "INVALID_VARIABLE")
        self.expression = expression
        self.variable = variable
        self.sympy_expr = parse_preprocessed(preprocess(expression), variable)
        try:
            self._compiled = sp.lambdify(
                sp.Symbol(variable), self.sympy_expr, modules="math"
            )
        except (NotImplementedError, NameError, SyntaxError, TypeError, ValueError) as e:
            raise ParseError(f"Cannot compile {expression!r}: {e}") from e

    def evaluate(self, x: float) -> float:
        """Return f(x) as a float.

        Raises:
            EvaluationError: If f has no finite real value representation at ``x``
        """
        try:
            value = self._compiled(x)
        except (ValueError, ZeroDivisionError, OverflowError, TypeError, NameError) as e:
            raise EvaluationError(f"Cannot evaluate {self.expression!r} at {x!r}: {e}") from e
        if isinstance(value, complex):
            if value.imag != 0:
                raise EvaluationError(
                    f"{self.expression!r} is not real at {x!r} (got {value})"
                )
            value = value.real
        value = float(value)
        if not math.isfinite(value):
            raise EvaluationError(f"{self.expression!r} is not finite at {x!r} (got {value})")
        return value

    __call__ = evaluate

    def __repr__(self) -> str:
        return f"ScalarFunction({self.expression!r}, variable={self.variable!r})"
