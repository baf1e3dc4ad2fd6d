"""Compiler output models for alkali.

This module defines the values produced by the compilation pipeline:
- CompiledArtifact: Base64 WASM bytecode plus the parsed ABI document
- ArtifactPaths: Where ArtifactWriter persisted the two artifacts
"""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CompiledArtifact(BaseModel):
    """Result of one compile call.

    Attributes:
        bytecode: WASM module encoded as base64 text.
        abi: Decoded JSON document emitted by the ABI extractor. Treated as
            opaque; usually an object with "name" and "methods".

    Example:
        >>> artifact = CompiledArtifact.from_wasm(b"\\x00asm", {"name": "Token", "methods": []})
        >>> artifact.bytecode
        'AGFzbQ=='
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    bytecode: str = Field(
        ...,
        description="WASM module as base64 text",
    )
    abi: Any = Field(
        ...,
        description="ABI document",
    )

    @classmethod
    def from_wasm(cls, wasm: bytes, abi: Any) -> CompiledArtifact:
        """Build a CompiledArtifact from raw WASM bytes."""
        return cls(bytecode=base64.b64encode(wasm).decode("ascii"), abi=abi)

    def wasm_bytes(self) -> bytes:
        """Decode the bytecode back to raw WASM bytes."""
        return base64.b64decode(self.bytecode)


class ArtifactPaths(BaseModel):
    """Paths of the artifacts written by ArtifactWriter.

    Attributes:
        wasm_path: ``<output>/<name>.wasm``
        abi_path: ``<output>/<name>.json``
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    wasm_path: Path
    abi_path: Path
