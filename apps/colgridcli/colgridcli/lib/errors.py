"""Shared error handling for colgridcli."""

import sys
from typing import NoReturn

import typer

from colgrid.exceptions import ColgridError


class CliError(Exception):
    """Base exception for CLI-level failures."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Report an error and exit."""
    if isinstance(error, CliError):
        exit_with_error(error.message, error.exit_code)
    elif isinstance(error, ColgridError):
        exit_with_error(str(error))
    else:
        # Unexpected error
        typer.echo(f"Unexpected error: {error}", err=True)
        sys.exit(1)
