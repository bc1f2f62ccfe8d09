"""Command-line interface for eqsolver.

Examples:
    python -m eqsolver_pkg -e "x^2 - 2" -p 1 1e-10 20
    python -m eqsolver_pkg -e "x^3 - x - 2" -a secant -p 1 2 1e-10 50 --guesses
    python -m eqsolver_pkg --poly 1 0 0 -1 --format json
    python -m eqsolver_pkg -e "sin(x)" --derivative 0
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from . import config as _config
from .api import derivative_at, find_root, polynomial_roots
from .iterative import Algorithm
from .logging_config import setup_logging
from .parser import format_complex, format_number
from .poly_solvers import PolyAlgorithm
from .types import EvalResult, PolyRootsResult, RootResult


def _print_root_result(res: RootResult, output_format: str) -> None:
    if output_format == "json":
        print(json.dumps(res.to_dict()))
        return
    if not res.ok:
        print(f"Error [{res.code}]: {res.error}")
        return
    print(f"x = {format_number(res.root)}")
    print(f"f(x) = {format_number(res.residual)}")
    if res.guesses:
        print("Iterates:")
        for i, guess in enumerate(res.guesses):
            print(f"  {i}: {format_number(guess)}")
    print(f"Time: {res.elapsed_ms:.3f} ms ({res.algorithm})")


def _print_poly_result(res: PolyRootsResult, output_format: str) -> None:
    if output_format == "json":
        print(json.dumps(res.to_dict()))
        return
    if not res.ok:
        print(f"Error [{res.code}]: {res.error}")
        return
    if not res.roots:
        print(f"No roots returned by method '{res.method}'")
        return
    for i, root in enumerate(res.roots, start=1):
        print(f"x{i} = {format_complex(root)}")
    if res.discriminant is not None:
        print(f"Discriminant: {format_number(res.discriminant)}")


def _print_eval_result(res: EvalResult, output_format: str) -> None:
    if output_format == "json":
        print(json.dumps(res.to_dict()))
    elif res.ok:
        print(f"f'(x) ~ {format_number(res.result)}")
    else:
        print(f"Error [{res.code}]: {res.error}")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eqsolver",
        description="Iterative and closed-form equation solving",
    )
    parser.add_argument("-e", "--expr", type=str, help="Expression f(x) to solve f(x) = 0")
    parser.add_argument(
        "-a",
        "--algorithm",
        type=str,
        choices=[a.value for a in Algorithm],
        default=Algorithm.NEWTON.value,
        help="Iterative algorithm (default: newton)",
    )
    parser.add_argument(
        "-p",
        "--params",
        type=float,
        nargs="+",
        help="Algorithm parameters, e.g. 'x0 tol max_iter' for newton",
    )
    parser.add_argument("--variable", type=str, default=_config.DEFAULT_VARIABLE)
    parser.add_argument(
        "--guesses", action="store_true", help="Print every intermediate iterate"
    )
    parser.add_argument(
        "--derivative",
        type=float,
        metavar="X",
        help="Print the numerical derivative of --expr at X and exit",
    )
    parser.add_argument(
        "--poly",
        type=float,
        nargs="+",
        metavar="COEFF",
        help="Polynomial coefficients, highest degree first",
    )
    parser.add_argument(
        "--poly-method",
        type=str,
        choices=[m.value for m in PolyAlgorithm],
        help="Generic polynomial algorithm instead of the closed form",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    return parser


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the eqsolver CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for solver errors, 2 for usage errors)
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)
    if args.precision and args.precision > 0:
        _config.OUTPUT_PRECISION = int(args.precision)

    if args.version:
        print(_config.VERSION)
        return 0

    result: Any
    if args.poly:
        result = polynomial_roots(args.poly, args.poly_method)
        _print_poly_result(result, args.format)
        return 0 if result.ok else 1

    if not args.expr:
        parser.print_usage(sys.stderr)
        print("eqsolver: error: one of --expr or --poly is required", file=sys.stderr)
        return 2

    if args.derivative is not None:
        result = derivative_at(args.expr, args.derivative, args.variable)
        _print_eval_result(result, args.format)
        return 0 if result.ok else 1

    result = find_root(
        args.expr,
        args.algorithm,
        args.params,
        record_guesses=args.guesses,
        variable=args.variable,
    )
    _print_root_result(result, args.format)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main_entry())
