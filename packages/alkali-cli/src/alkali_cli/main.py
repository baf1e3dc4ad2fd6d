"""Entry point of the ``alkali`` command.

Subcommands are registered by import path and only imported when they are
invoked, so ``alkali --help`` and ``alkali --version`` never load pydantic,
jinja2 or the compiler.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from alkali_cli import __version__
from alkali_cli.output import set_no_color

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True

LAZY_COMMANDS = {
    "compile": "alkali_cli.commands.compile.compile_cmd",
    "init": "alkali_cli.commands.init.init",
}


class LazyGroup(rclick.RichGroup):
    """Rich-click group resolving ``name -> "module.attr"`` on first use."""

    def __init__(self, *args: Any, lazy_subcommands: dict[str, str] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self.lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if command is not None or cmd_name not in self.lazy_subcommands:
            return command

        module_name, _, attr = self.lazy_subcommands[cmd_name].rpartition(".")
        return getattr(importlib.import_module(module_name), attr)  # type: ignore[no-any-return]


def _no_color(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if value:
        set_no_color(True)


def _verbose(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if value:
        from alkali_core.observability import configure_logging

        configure_logging(log_level="DEBUG", json_format=False)


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="alkali")
@click.option(
    "--no-color",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_no_color,
    help="Disable colored output.",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    expose_value=False,
    callback=_verbose,
    help="Show debug logs from the compilation pipeline.",
)
def cli() -> None:
    """Alkali - Smart contract development toolkit for Bitcoin Alkanes.

    Compile Rust contracts to WASM modules and ABI descriptions.

    **Getting Started:**

    - `alkali init` - Create a new project with an example contract
    - `alkali compile` - Compile every contract under `contracts/`
    - `alkali compile contracts/Example.rs -o build` - Compile one contract
    """


if __name__ == "__main__":
    cli()
