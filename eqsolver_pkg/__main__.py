"""Main entry point for running eqsolver_pkg as a module.

This allows running eqsolver with:
    python -m eqsolver_pkg -e "x^2 - 2" -p 1 1e-10 20
    python -m eqsolver_pkg --poly 1 -6 11 -6
    python -m eqsolver_pkg --version

This is equivalent to running the ``eqsolver`` console script.
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
