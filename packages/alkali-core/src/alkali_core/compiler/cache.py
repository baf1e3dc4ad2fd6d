"""In-memory artifact cache keyed by a source/options fingerprint.

Off by default. A hit skips scaffolding, the build and ABI extraction;
the returned artifact is identical to what a fresh compile would produce
for a deterministic toolchain, only faster.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping

from alkali_core.compiler.models import CompiledArtifact
from alkali_core.manifest import render_dependency
from alkali_core.schemas import DependencySpec, OptLevel


def fingerprint(
    source_text: str,
    target: str,
    optimize: OptLevel,
    dependencies: Mapping[str, DependencySpec],
) -> str:
    """Compute the SHA-256 cache key for one compile request.

    ``optimize`` is hashed in the form cargo receives it, so ``3`` and
    ``"3"`` share an entry.

    Args:
        source_text: Contract source.
        target: Rust target triple.
        optimize: Optimization level.
        dependencies: Extra manifest dependencies.

    Returns:
        Hex-encoded SHA-256 digest.
    """
    digest = hashlib.sha256()
    for part in (
        source_text,
        target,
        str(optimize),
        *(render_dependency(name, spec) for name, spec in dependencies.items()),
    ):
        digest.update(part.encode("utf-8"))
        digest.update(b"\0")
    return digest.hexdigest()


class ArtifactCache:
    """Mapping of fingerprint to CompiledArtifact."""

    def __init__(self) -> None:
        self._entries: dict[str, CompiledArtifact] = {}

    def get(self, key: str) -> CompiledArtifact | None:
        return self._entries.get(key)

    def put(self, key: str, artifact: CompiledArtifact) -> None:
        self._entries[key] = artifact

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
