"""ABIExtractor: derive the contract ABI with the abi_extractor binary.

abi_extractor is a Rust tool shipped as a crate in ``alkali_core/bin/abi_extractor``.
It reads a contract source file and prints a JSON document such as::

    {"name": "MintableAlkane",
     "methods": [{"name": "method_0", "opcode": 0, "inputs": [], "outputs": []}]}

alkali does not interpret the document; it only checks that stdout is
well-formed JSON.

The binary is looked up in this order:

1. ``ALKALI_ABI_EXTRACTOR``
2. the crate's release build, after
   ``cargo build --release --manifest-path <alkali_core>/bin/abi_extractor/Cargo.toml``
3. ``abi_extractor`` on PATH
"""

from __future__ import annotations

import json
import os
import shutil
import subprocess
from pathlib import Path
from typing import Any

import structlog

from alkali_core.errors import ABIExtractionFailure

logger = structlog.get_logger(__name__)

# Environment variable overriding the abi_extractor location
ABI_EXTRACTOR_ENV_VAR = "ALKALI_ABI_EXTRACTOR"

ABI_EXTRACTOR_NAME = "abi_extractor"

# Crate sources packaged with alkali_core
ABI_EXTRACTOR_CRATE = Path(__file__).resolve().parent.parent / "bin" / ABI_EXTRACTOR_NAME

SCRATCH_FILE_NAME = "temp_contract.rs"

DEFAULT_ABI_TIMEOUT_SECONDS = 120.0


def packaged_abi_extractor_path() -> Path:
    """Return where a release build of the packaged crate puts the binary."""
    return ABI_EXTRACTOR_CRATE / "target" / "release" / ABI_EXTRACTOR_NAME


def default_abi_extractor_path() -> Path:
    """Resolve the abi_extractor binary.

    Returns the packaged build path when nothing is found, so a launch
    failure names the location the build is expected at.
    """
    override = os.environ.get(ABI_EXTRACTOR_ENV_VAR)
    if override:
        return Path(override)

    packaged = packaged_abi_extractor_path()
    if packaged.is_file():
        return packaged

    on_path = shutil.which(ABI_EXTRACTOR_NAME)
    if on_path:
        return Path(on_path)
    return packaged


class ABIExtractor:
    """Run abi_extractor on contract source text.

    Attributes:
        scratch_dir: Directory the source is written to before extraction.
        binary: abi_extractor path. None resolves default_abi_extractor_path()
            on each call.
        timeout_seconds: Maximum wall time for one extraction.

    Example:
        >>> abi = ABIExtractor(Path(".alkanes")).extract_abi(source)
        >>> abi["name"]
        'MintableAlkane'
    """

    def __init__(
        self,
        scratch_dir: Path,
        binary: Path | None = None,
        timeout_seconds: float = DEFAULT_ABI_TIMEOUT_SECONDS,
    ) -> None:
        self.scratch_dir = scratch_dir
        self.binary = binary
        self.timeout_seconds = timeout_seconds

    def extract_abi(self, source_text: str, scratch_dir: Path | None = None) -> Any:
        """Extract the ABI document for ``source_text``.

        Args:
            source_text: Contract source.
            scratch_dir: Overrides the instance scratch directory for this call.

        Returns:
            The decoded JSON document, whatever its top-level type.

        Raises:
            ABIExtractionFailure: If the source cannot be staged, the binary
                cannot start, exits non-zero, times out, or prints
                malformed JSON.
        """
        try:
            return self._extract(source_text, scratch_dir or self.scratch_dir)
        except ABIExtractionFailure:
            raise
        except (OSError, subprocess.SubprocessError, ValueError) as e:
            raise ABIExtractionFailure(f"Failed to extract ABI: {e}") from e

    def _extract(self, source_text: str, scratch_dir: Path) -> Any:
        scratch_dir.mkdir(parents=True, exist_ok=True)
        scratch_file = scratch_dir / SCRATCH_FILE_NAME
        scratch_file.write_text(source_text, encoding="utf-8")

        binary = self.binary or default_abi_extractor_path()
        try:
            completed = subprocess.run(
                [str(binary), str(scratch_file)],
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout_seconds,
                check=False,
            )
        except FileNotFoundError as e:
            raise ABIExtractionFailure(
                f"Failed to extract ABI: {ABI_EXTRACTOR_NAME} not found at {binary}. "
                f"Build {ABI_EXTRACTOR_CRATE / 'Cargo.toml'} with cargo build --release, "
                f"put {ABI_EXTRACTOR_NAME} on PATH, or set {ABI_EXTRACTOR_ENV_VAR}"
            ) from e

        if completed.returncode != 0:
            diagnostic = (completed.stderr or completed.stdout).strip()
            raise ABIExtractionFailure(
                f"Failed to extract ABI: {binary.name} exited with status "
                f"{completed.returncode}: {diagnostic}"
            )

        # json.JSONDecodeError is a ValueError
        abi = json.loads(completed.stdout)

        logger.debug(
            "abi_extracted",
            scratch_file=str(scratch_file),
            contract=abi.get("name") if isinstance(abi, dict) else None,
        )
        return abi
