"""Compiler module for alkali.

This module exports the compilation facade, its pipeline components and
output models:
- AlkanesCompiler: Compile source text or files to WASM + ABI
- ProjectScaffolder: Write the ephemeral cargo workspace
- BuildInvoker: Run cargo and read the WASM module
- ABIExtractor: Run abi_extractor and parse its JSON output
- ArtifactWriter: Persist <name>.wasm and <name>.json
- ArtifactCache: Optional fingerprint-keyed result cache
- CompiledArtifact / ArtifactPaths: Output models
"""

from __future__ import annotations

from alkali_core.compiler.abi import (
    ABI_EXTRACTOR_ENV_VAR,
    ABI_EXTRACTOR_CRATE,
    SCRATCH_FILE_NAME,
    ABIExtractor,
    default_abi_extractor_path,
    packaged_abi_extractor_path,
)
from alkali_core.compiler.build import ARTIFACT_FILE_NAME, BuildInvoker, artifact_path
from alkali_core.compiler.cache import ArtifactCache, fingerprint
from alkali_core.compiler.compiler import (
    CONTRACT_EXTENSION,
    REQUESTS_DIR_NAME,
    AlkanesCompiler,
    contract_name,
)
from alkali_core.compiler.models import ArtifactPaths, CompiledArtifact
from alkali_core.compiler.scaffolder import (
    ENTRY_FILE_NAME,
    SOURCE_DIR_NAME,
    ProjectScaffolder,
)
from alkali_core.compiler.writer import ABI_EXTENSION, WASM_EXTENSION, ArtifactWriter

__all__: list[str] = [
    # Facade
    "AlkanesCompiler",
    "contract_name",
    "CONTRACT_EXTENSION",
    "REQUESTS_DIR_NAME",
    # Pipeline components
    "ProjectScaffolder",
    "SOURCE_DIR_NAME",
    "ENTRY_FILE_NAME",
    "BuildInvoker",
    "artifact_path",
    "ARTIFACT_FILE_NAME",
    "ABIExtractor",
    "default_abi_extractor_path",
    "packaged_abi_extractor_path",
    "ABI_EXTRACTOR_CRATE",
    "ABI_EXTRACTOR_ENV_VAR",
    "SCRATCH_FILE_NAME",
    "ArtifactWriter",
    "WASM_EXTENSION",
    "ABI_EXTENSION",
    # Cache
    "ArtifactCache",
    "fingerprint",
    # Output models
    "CompiledArtifact",
    "ArtifactPaths",
]
