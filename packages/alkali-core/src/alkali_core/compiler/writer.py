"""ArtifactWriter: persist compiled artifacts to the output directory."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog

from alkali_core.compiler.models import ArtifactPaths
from alkali_core.errors import FilesystemError

logger = structlog.get_logger(__name__)

WASM_EXTENSION = ".wasm"
ABI_EXTENSION = ".json"


class ArtifactWriter:
    """Write ``<name>.wasm`` and ``<name>.json`` into an output directory.

    Existing artifacts with the same name are overwritten.
    """

    def persist(
        self,
        base_name: str,
        wasm: bytes,
        abi: Any,
        output_dir: Path,
    ) -> ArtifactPaths:
        """Persist both artifacts.

        Args:
            base_name: Contract file name without the .rs extension.
            wasm: Raw WASM module bytes.
            abi: Decoded ABI document, written back as indented JSON.
            output_dir: Destination directory, created if missing.

        Returns:
            ArtifactPaths of the written files.

        Raises:
            FilesystemError: If the directory or a file cannot be written.
        """
        paths = ArtifactPaths(
            wasm_path=output_dir / f"{base_name}{WASM_EXTENSION}",
            abi_path=output_dir / f"{base_name}{ABI_EXTENSION}",
        )

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            paths.wasm_path.write_bytes(wasm)
            logger.info("wasm_written", path=str(paths.wasm_path))
            paths.abi_path.write_text(json.dumps(abi, indent=2), encoding="utf-8")
            logger.info("abi_written", path=str(paths.abi_path))
        except OSError as e:
            raise FilesystemError(str(e), path=e.filename or str(output_dir)) from e

        return paths
