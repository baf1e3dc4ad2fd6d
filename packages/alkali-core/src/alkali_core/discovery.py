"""Contract source discovery.

Expands a list of files and directories into the contract files to compile.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from alkali_core.compiler.compiler import CONTRACT_EXTENSION

logger = structlog.get_logger(__name__)

DEFAULT_CONTRACTS_DIR = Path("contracts")


def find_contract_files(sources: Iterable[Path | str]) -> list[Path]:
    """Find contract files among ``sources``.

    Directories contribute their immediate ``.rs`` files, sorted by name.
    Files are kept when they end in ``.rs``; anything else is skipped.

    Args:
        sources: Files and directories to search.

    Returns:
        Contract file paths in source order.

    Raises:
        FileNotFoundError: If a source does not exist.
    """
    files: list[Path] = []

    for source in sources:
        path = Path(source)
        if path.is_dir():
            files.extend(
                sorted(
                    entry
                    for entry in path.iterdir()
                    if entry.is_file() and entry.name.endswith(CONTRACT_EXTENSION)
                )
            )
        elif not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        elif path.name.endswith(CONTRACT_EXTENSION):
            files.append(path)
        else:
            logger.debug("non_contract_source_skipped", path=str(path))

    return files
