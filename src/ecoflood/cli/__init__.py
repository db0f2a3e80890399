"""CLI package for EcoFlood.

Execute via:
  python -m ecoflood.cli <command> [options]

Or through the console script declared in pyproject.toml:
  ecoflood <command>

Commands implemented in `main.py` using the standard library `argparse`.
"""

from .main import main  # re-export for python -m ecoflood.cli

__all__ = ["main"]
