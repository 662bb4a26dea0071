"""Shared utilities for the vtlite CLI"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler

from vtlite.errors import VtliteError

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the vtlite CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (VTLITE_DEBUG=1): DEBUG level - shows everything
    """
    debug = bool(os.environ.get("VTLITE_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("vtlite")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def load_values_yaml(path: Optional[Path]) -> Dict[str, Any]:
    """Load a YAML mapping of template values. A missing option means no values."""
    if path is None:
        return {}
    if not path.exists():
        raise FileNotFoundError(f"Values file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Values file must contain a mapping at the top level: {path}")
    return data


def parse_var_pairs(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Parse NAME=VALUE pairs given on the command line."""
    values: Dict[str, str] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected NAME=VALUE, got {pair!r}")
        values[name.strip()] = value
    return values


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Report a template or input error and exit."""
    if isinstance(error, (VtliteError, OSError, ValueError)):
        exit_with_error(str(error))
    typer.echo(f"Unexpected error: {error}", err=True)
    sys.exit(1)
