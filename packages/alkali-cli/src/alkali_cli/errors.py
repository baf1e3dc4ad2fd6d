"""Exit codes and error reporting for the alkali command.

Failures the user can fix (a contract that does not compile, a bad
alkali.config.json, no contracts to build) exit with 1. Failures of the
machine (a directory that cannot be written) exit with 2.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, NoReturn

import click

from alkali_cli.output import error

if TYPE_CHECKING:
    from alkali_core.errors import ConfigurationError

EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2


class CLIError(click.ClickException):
    """A click exception printed with the ✗ prefix instead of "Error:"."""

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        error(self.format_message())


def handle_configuration_error(err: ConfigurationError) -> NoReturn:
    """Abort with the message of a config loading failure.

    The message already names the file and, for schema errors, the field.
    """
    raise CLIError(err.user_message)


def handle_permission_error(path: str, operation: str = "access") -> NoReturn:
    """Abort with exit code 2 for a path the process may not ``operation``."""
    raise CLIError(f"Permission denied: cannot {operation} {path}", exit_code=EXIT_SYSTEM_ERROR)


def exit_with_error(message: str, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print ``message`` as an error line and exit."""
    error(message)
    sys.exit(exit_code)
