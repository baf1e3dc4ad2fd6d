"""ProjectScaffolder: write the ephemeral cargo workspace.

The workspace holds a Cargo.toml and the contract source at src/lib.rs.
No external processes are started here.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import structlog

from alkali_core.errors import FilesystemError
from alkali_core.manifest import MANIFEST_FILE_NAME, CargoManifest
from alkali_core.schemas import DependencySpec

logger = structlog.get_logger(__name__)

SOURCE_DIR_NAME = "src"
ENTRY_FILE_NAME = "lib.rs"


class ProjectScaffolder:
    """Materialize the build workspace for one contract.

    Example:
        >>> ProjectScaffolder().materialize(source, Path(".alkanes"), {"serde": "1.0"})
    """

    def materialize(
        self,
        source_text: str,
        workspace_path: Path,
        dependencies: Mapping[str, DependencySpec] | None = None,
    ) -> None:
        """Write Cargo.toml and src/lib.rs into ``workspace_path``.

        Directories are created if missing. Existing files are overwritten.

        Args:
            source_text: Contract source, written verbatim.
            workspace_path: Workspace directory.
            dependencies: Extra dependencies appended to the manifest.

        Raises:
            FilesystemError: If a directory or file cannot be written.
        """
        src_dir = workspace_path / SOURCE_DIR_NAME
        manifest = CargoManifest.for_contract(dependencies)

        _mkdir(src_dir)
        _write_text(workspace_path / MANIFEST_FILE_NAME, manifest.render())
        _write_text(src_dir / ENTRY_FILE_NAME, source_text)

        logger.debug(
            "workspace_materialized",
            workspace=str(workspace_path),
            extra_dependencies=len(dependencies or {}),
        )


def _mkdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(str(e), path=str(path)) from e


def _write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FilesystemError(str(e), path=str(path)) from e
