"""Tests for the command-line interface."""

import json
import logging
import subprocess
import sys

import pytest

from eqsolver_pkg import config
from eqsolver_pkg.cli import build_arg_parser, main_entry
from eqsolver_pkg.logging_config import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def _restore_cli_state():
    precision = config.OUTPUT_PRECISION
    yield
    config.OUTPUT_PRECISION = precision
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _json_output(capsys):
    return json.loads(capsys.readouterr().out)


def test_version(capsys):
    assert main_entry(["--version"]) == 0
    assert capsys.readouterr().out.strip() == config.VERSION


def test_newton_json(capsys):
    code = main_entry(["-e", "x^2 - 2", "-p", "1", "1e-10", "20", "--format", "json"])
    assert code == 0
    data = _json_output(capsys)
    assert data["ok"] is True
    assert data["algorithm"] == "newton"
    assert data["root"] == pytest.approx(1.41421356, abs=1e-6)


def test_secant_human_with_guesses(capsys):
    code = main_entry(
        ["-e", "x^3 - x - 2", "-a", "secant", "-p", "1", "2", "1e-10", "50", "--guesses"]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("x = 1.52137970")
    assert "Iterates:" in out
    assert "  0: 2\n" in out
    assert "(secant)" in out


def test_solver_error_exit_code(capsys):
    code = main_entry(["-e", "5", "-p", "1", "1e-10", "20", "--format", "json"])
    assert code == 1
    assert _json_output(capsys)["code"] == "ZERO_DERIVATIVE"


def test_infinite_parameter_exit_code(capsys):
    code = main_entry(["-e", "x^2 - 2", "-p", "1", "1e-10", "inf", "--format", "json"])
    assert code == 1
    assert _json_output(capsys)["code"] == "INVALID_PARAMETER"


def test_error_human(capsys):
    assert main_entry(["-e", "x + y", "-p", "1", "1e-10", "20"]) == 1
    assert capsys.readouterr().out.startswith("Error [UNKNOWN_SYMBOL]")


def test_missing_expression(capsys):
    assert main_entry([]) == 2
    assert "one of --expr or --poly is required" in capsys.readouterr().err


def test_derivative(capsys):
    assert main_entry(["-e", "x^2", "--derivative", "3", "--format", "json"]) == 0
    assert _json_output(capsys)["result"] == pytest.approx(6.0, abs=0.05)


def test_poly_human(capsys):
    assert main_entry(["--poly", "1", "-3", "2"]) == 0
    out = capsys.readouterr().out
    assert "x1 = 2\n" in out
    assert "x2 = 1\n" in out
    assert "Discriminant: 1" in out


def test_poly_complex_json(capsys):
    assert main_entry(["--poly", "1", "0", "1", "--format", "json"]) == 0
    data = _json_output(capsys)
    assert data["method"] == "closed_form"
    assert len(data["roots"]) == 2


def test_poly_generic_method(capsys):
    assert main_entry(["--poly", "1", "0", "-1", "--poly-method", "bairstow"]) == 0
    assert "No roots returned by method 'bairstow'" in capsys.readouterr().out


def test_poly_leading_zero(capsys):
    assert main_entry(["--poly", "0", "1", "1", "--format", "json"]) == 1
    assert _json_output(capsys)["code"] == "INVALID_COEFFICIENTS"


def test_precision_override(capsys):
    assert main_entry(["-e", "x^2 - 2", "-p", "1", "1e-10", "20", "--precision", "3"]) == 0
    assert capsys.readouterr().out.startswith("x = 1.41\n")


def test_log_file(tmp_path, capsys):
    log_file = tmp_path / "eqsolver.log"
    main_entry(
        ["-e", "x - 1", "-p", "0", "1e-10", "20", "--log-level", "INFO",
         "--log-file", str(log_file)]
    )
    capsys.readouterr()
    logging.getLogger(ROOT_LOGGER_NAME).handlers[-1].flush()
    assert "[INFO] eqsolver.equation" in log_file.read_text()


def test_algorithm_choices():
    parser = build_arg_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["-e", "x", "-a", "bisection"])


def test_module_entry_point():
    result = subprocess.run(
        [sys.executable, "-m", "eqsolver_pkg", "--poly", "1", "0", "-4", "--format", "json"],
        capture_output=True,
        text=True,
        timeout=60,
    )
    assert result.returncode == 0
    assert json.loads(result.stdout)["ok"] is True
