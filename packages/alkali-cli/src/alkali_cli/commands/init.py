"""alkali init command - Scaffold a new contract project.

Creates the contracts/, build/ and scripts/ directories, renders the
example contract from a packaged template and writes alkali.config.json.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path

import click

from alkali_cli.errors import EXIT_USER_ERROR, exit_with_error, handle_permission_error
from alkali_cli.output import error, info, success, warning

PROJECT_DIRS = ("contracts", "build", "scripts")
EXAMPLE_CONTRACT = "Example.rs"


def available_templates() -> list[str]:
    """Return the names of the packaged project templates."""
    root = resources.files("alkali_cli") / "templates"
    return sorted(entry.name for entry in root.iterdir() if entry.is_dir())


def render_example_contract(template: str, contract_name: str) -> str:
    """Render the example contract of ``template``.

    Raises:
        FileNotFoundError: If the template has no example contract.
    """
    from jinja2.sandbox import SandboxedEnvironment

    source = resources.files("alkali_cli") / "templates" / template / "contracts" / EXAMPLE_CONTRACT
    if not source.is_file():
        raise FileNotFoundError(f"Template {template!r} has no contracts/{EXAMPLE_CONTRACT}")

    env = SandboxedEnvironment(keep_trailing_newline=True)
    return env.from_string(source.read_text(encoding="utf-8")).render(
        contract_name=contract_name,
    )


@click.command()
@click.option(
    "-t",
    "--template",
    "template",
    type=str,
    default="default",
    help="Template to use [default: default]",
)
@click.option(
    "-n",
    "--name",
    "name",
    type=str,
    default=None,
    help="Project name [default: current directory name]",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite existing files",
)
def init(template: str, name: str | None, force: bool) -> None:
    """Initialize a new alkali project.

    Examples:

        alkali init

        alkali init --name my-token --force
    """
    from alkali_core import CONFIG_FILE_NAME, AlkaliConfig

    if name is None:
        name = Path.cwd().name

    if template not in available_templates():
        error(f'Template "{template}" not found')
        error(f"Available: {', '.join(available_templates())}")
        raise SystemExit(EXIT_USER_ERROR)

    config_path = Path(CONFIG_FILE_NAME)
    if config_path.exists() and not force:
        error(f"{CONFIG_FILE_NAME} already exists.")
        error("Use --force to overwrite.")
        raise SystemExit(EXIT_USER_ERROR)

    info("Initializing alkali project...")

    try:
        for directory in PROJECT_DIRS:
            Path(directory).mkdir(parents=True, exist_ok=True)

        contract_path = Path("contracts") / EXAMPLE_CONTRACT
        if not contract_path.exists() or force:
            contract_path.write_text(
                render_example_contract(template, contract_path.stem),
                encoding="utf-8",
            )
        else:
            warning(f"Kept existing {contract_path}")

        config_path.write_text(
            json.dumps(AlkaliConfig(name=name).model_dump(mode="json", by_alias=True), indent=2)
            + "\n",
            encoding="utf-8",
        )

    except PermissionError as e:
        handle_permission_error(e.filename or str(Path.cwd()), "write")

    except OSError as e:
        exit_with_error(f"Failed to initialize project: {e}")

    success(f"Created project: {name}")
    info("\nNext steps:")
    info("  1. alkali compile            # Compile contracts")
