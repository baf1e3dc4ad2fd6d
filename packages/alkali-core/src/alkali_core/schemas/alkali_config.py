"""AlkaliConfig root model for alkali.config.json.

The project configuration file written by ``alkali init``. Keys are
camelCase on disk (``optimizeLevel``, ``outputDir``); snake_case names are
accepted as well.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from alkali_core.schemas.compiler_options import (
    DEFAULT_OPTIMIZE_LEVEL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TARGET,
    CompilerOptions,
    OptLevel,
)
from alkali_core.schemas.dependency import DependencySpec


class CompilerSection(BaseModel):
    """The ``compiler`` section of alkali.config.json.

    Attributes:
        target: Rust target triple.
        optimize_level: Release profile optimization level.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    target: str = Field(
        default=DEFAULT_TARGET,
        min_length=1,
        description="Rust target triple",
    )
    optimize_level: OptLevel = Field(
        default=DEFAULT_OPTIMIZE_LEVEL,
        alias="optimizeLevel",
        description="Release profile optimization level",
    )


class ContractsSection(BaseModel):
    """The ``contracts`` section of alkali.config.json.

    Attributes:
        output_dir: Directory compiled artifacts are written to.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    output_dir: Path = Field(
        default=DEFAULT_OUTPUT_DIR,
        alias="outputDir",
        description="Artifact output directory",
    )


class AlkaliConfig(BaseModel):
    """Root configuration model for alkali.config.json.

    Attributes:
        name: Project name.
        dependencies: Extra Cargo dependencies for every contract build.
        compiler: Compiler settings.
        contracts: Contract output settings.

    Example:
        >>> config = AlkaliConfig.model_validate(
        ...     {"name": "demo", "compiler": {"optimizeLevel": 2}}
        ... )
        >>> config.to_compiler_options().optimize
        2
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str | None = Field(
        default=None,
        description="Project name",
    )
    dependencies: dict[str, DependencySpec] = Field(
        default_factory=dict,
        description="Extra Cargo dependencies",
    )
    compiler: CompilerSection = Field(
        default_factory=CompilerSection,
        description="Compiler settings",
    )
    contracts: ContractsSection = Field(
        default_factory=ContractsSection,
        description="Contract output settings",
    )

    def to_compiler_options(self, **overrides: Any) -> CompilerOptions:
        """Build CompilerOptions from this configuration.

        Args:
            **overrides: CompilerOptions fields that take precedence over
                the configuration file.

        Returns:
            CompilerOptions for an AlkanesCompiler.
        """
        values: dict[str, Any] = {
            "target": self.compiler.target,
            "optimize": self.compiler.optimize_level,
            "output": self.contracts.output_dir,
            "dependencies": dict(self.dependencies),
        }
        values.update(overrides)
        return CompilerOptions(**values)
