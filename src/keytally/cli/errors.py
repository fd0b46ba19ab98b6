"""
Unified CLI Error Handling
==========================

Provides consistent error reporting and exit codes for the keytally
command.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for the keytally command."""
    SUCCESS = 0
    PERSISTENCE_ERROR = 1  # Save file could not be loaded or written
    INVALID_ARGS = 2       # Usage errors, reported by click itself
    INTERNAL_ERROR = 3     # Unexpected internal error


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Optional prefix for the error message (e.g., "Load")

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from keytally.errors import PersistenceError

    if isinstance(error, PersistenceError):
        # Message already carries the "path: error:" prefix
        prefix = f"{error_type} failed: " if error_type else ""
        click.echo(f"{prefix}{error}", err=True)
        sys.exit(ExitCode.PERSISTENCE_ERROR)

    else:
        # Unexpected internal error
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
