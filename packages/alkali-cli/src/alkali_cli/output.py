"""Console output for the alkali command.

Status lines carry a one-character marker: ✓ for a compiled contract or a
created project, ✗ for failures, ⚠ for things left untouched. Text is
escaped before printing because compiler diagnostics such as
``error[E0425]`` would otherwise be read as Rich markup.

Color is off when NO_COLOR is set or ``--no-color`` is passed.
"""

from __future__ import annotations

import os
from typing import Any

from rich.console import Console
from rich.markup import escape

MARKERS = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]⚠[/yellow] ",
    "info": "",
}


def create_console(no_color: bool = False) -> Console:
    """Build the console, honouring NO_COLOR as well as ``no_color``."""
    plain = no_color or "NO_COLOR" in os.environ
    return Console(force_terminal=False if plain else None, no_color=plain)


console = create_console()


def _emit(kind: str, message: str, **kwargs: Any) -> None:
    console.print(MARKERS[kind] + escape(message), **kwargs)


def success(message: str, **kwargs: Any) -> None:
    """Print ``✓ message``.

    Example:
        >>> success("Successfully compiled contracts/Example.rs")
        ✓ Successfully compiled contracts/Example.rs
    """
    _emit("success", message, **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print ``✗ message``."""
    _emit("error", message, **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    _emit("warning", message, **kwargs)


def info(message: str, **kwargs: Any) -> None:
    _emit("info", message, **kwargs)


def set_no_color(no_color: bool) -> None:
    """Replace the module console, e.g. for ``alkali --no-color``."""
    global console
    console = create_console(no_color=no_color)
