"""Schema definitions for alkali.

This module exports the Pydantic models for configuration input:
- AlkaliConfig: Root schema for alkali.config.json
- CompilerOptions: Options for the compilation pipeline
- DependencySpec / GitDependency: Extra Cargo dependencies
"""

from __future__ import annotations

from alkali_core.schemas.alkali_config import (
    AlkaliConfig,
    CompilerSection,
    ContractsSection,
)
from alkali_core.schemas.compiler_options import (
    DEFAULT_OPTIMIZE_LEVEL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TARGET,
    DEFAULT_TEMP_DIR,
    RECOGNIZED_OPT_LEVELS,
    CompilerOptions,
    OptLevel,
    is_recognized_opt_level,
)
from alkali_core.schemas.dependency import DependencySpec, GitDependency

__all__: list[str] = [
    "AlkaliConfig",
    "CompilerSection",
    "ContractsSection",
    "CompilerOptions",
    "OptLevel",
    "is_recognized_opt_level",
    "RECOGNIZED_OPT_LEVELS",
    "DEFAULT_TEMP_DIR",
    "DEFAULT_TARGET",
    "DEFAULT_OPTIMIZE_LEVEL",
    "DEFAULT_OUTPUT_DIR",
    "DependencySpec",
    "GitDependency",
]
