"""alkali compile command - Build contracts to WASM and ABI."""

from __future__ import annotations

from pathlib import Path

import click

from alkali_cli.errors import exit_with_error, handle_configuration_error
from alkali_cli.output import error, info, success


def parse_opt_level(value: str | None) -> int | str | None:
    """Turn a command line optimization level into an int where numeric.

    Non-numeric values (``s``, ``z`` or anything else) are kept as given;
    cargo is the authority on validity.
    """
    if value is None:
        return None
    return int(value) if value.isdigit() else value


@click.command("compile")
@click.argument("file", required=False, type=click.Path())
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default=None,
    help="Output directory [default: contracts.outputDir, else build]",
)
@click.option(
    "--optimize",
    "optimize",
    type=str,
    default=None,
    help="Optimization level (0-3) [default: compiler.optimizeLevel, else 3]",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(),
    default=None,
    help="Path to alkali.config.json [default: ./alkali.config.json]",
)
def compile_cmd(
    file: str | None,
    output_path: str | None,
    optimize: str | None,
    config_path: str | None,
) -> None:
    """Compile Alkanes contracts to WASM.

    Compiles FILE, or every .rs file in contracts/ when FILE is omitted.
    Each contract produces <name>.wasm and <name>.json in the output
    directory. A failing contract does not stop the remaining ones.

    Examples:

        alkali compile

        alkali compile contracts/Token.rs --output build/

        alkali compile --optimize z
    """
    # Import here to avoid heavy imports at CLI startup
    from alkali_core import (
        DEFAULT_CONTRACTS_DIR,
        AlkanesCompiler,
        CompilationFailure,
        ConfigurationError,
        find_contract_files,
        load_config,
    )

    info("Compiling contracts...")

    try:
        files = [Path(file)] if file else find_contract_files([DEFAULT_CONTRACTS_DIR])
    except FileNotFoundError:
        files = []

    if not files:
        exit_with_error("No contract files found")

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        handle_configuration_error(e)

    compiler = AlkanesCompiler(config.to_compiler_options())
    level = parse_opt_level(optimize)
    failures = 0

    for contract in files:
        info(f"Compiling {contract}...")
        try:
            compiler.compile_file(contract, optimize=level, output=output_path)
        except CompilationFailure as e:
            error(str(e))
            failures += 1
            continue
        success(f"Successfully compiled {contract}")

    if failures:
        exit_with_error(f"{failures} of {len(files)} contract(s) failed to compile")
