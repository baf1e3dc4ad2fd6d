"""alkali-core: Contract compilation pipeline for alkali.

This package provides:
- AlkanesCompiler: Contract source -> WASM module + ABI document
- CompilerOptions / AlkaliConfig: Pydantic configuration models
- load_config: alkali.config.json loading
- find_contract_files: Contract discovery
- Exception hierarchy rooted at AlkaliError
"""

from __future__ import annotations

__version__ = "0.1.0"

from alkali_core.compiler import (
    ABIExtractor,
    AlkanesCompiler,
    ArtifactPaths,
    ArtifactWriter,
    BuildInvoker,
    CompiledArtifact,
    ProjectScaffolder,
)
from alkali_core.config import CONFIG_FILE_NAME, load_config
from alkali_core.discovery import DEFAULT_CONTRACTS_DIR, find_contract_files
from alkali_core.errors import (
    ABIExtractionFailure,
    AlkaliError,
    BuildFailure,
    CompilationFailure,
    ConfigurationError,
    FilesystemError,
)
from alkali_core.manifest import CargoManifest, render_dependency
from alkali_core.schemas import (
    AlkaliConfig,
    CompilerOptions,
    DependencySpec,
    GitDependency,
)

__all__ = [
    "__version__",
    # Compiler
    "AlkanesCompiler",
    "ProjectScaffolder",
    "BuildInvoker",
    "ABIExtractor",
    "ArtifactWriter",
    "CompiledArtifact",
    "ArtifactPaths",
    # Manifest
    "CargoManifest",
    "render_dependency",
    # Configuration
    "AlkaliConfig",
    "CompilerOptions",
    "DependencySpec",
    "GitDependency",
    "load_config",
    "CONFIG_FILE_NAME",
    # Discovery
    "find_contract_files",
    "DEFAULT_CONTRACTS_DIR",
    # Errors
    "AlkaliError",
    "ConfigurationError",
    "FilesystemError",
    "BuildFailure",
    "ABIExtractionFailure",
    "CompilationFailure",
]
