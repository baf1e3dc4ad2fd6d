"""CompilerOptions model.

Options are fixed once per AlkanesCompiler instance. The optimization level
and output directory may be overridden per call.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from alkali_core.schemas.dependency import DependencySpec

DEFAULT_TEMP_DIR = Path(".alkanes")
DEFAULT_TARGET = "wasm32-unknown-unknown"
DEFAULT_OPTIMIZE_LEVEL = 3
DEFAULT_OUTPUT_DIR = Path("build")

RECOGNIZED_OPT_LEVELS: frozenset[int | str] = frozenset({0, 1, 2, 3, "s", "z"})
"""Optimization levels cargo accepts for ``profile.release.opt-level``."""

OptLevel = int | str


def is_recognized_opt_level(level: OptLevel) -> bool:
    """Return True if ``level`` is one of the known cargo optimization levels.

    Numeric strings such as ``"2"`` (as passed on the command line) count as
    their integer value.
    """
    if isinstance(level, str) and level.isdigit():
        return int(level) in RECOGNIZED_OPT_LEVELS
    return level in RECOGNIZED_OPT_LEVELS


class CompilerOptions(BaseModel):
    """Configuration for the compilation pipeline.

    Attributes:
        temp_dir: Build workspace directory. None means unset, and any
            compile call then fails with ConfigurationError.
        scratch_dir: Directory holding the ABI extractor's scratch source file.
        target: Rust target triple passed to cargo.
        optimize: Release profile optimization level. Passed to cargo verbatim.
        output: Artifact output directory. None means unset.
        dependencies: Extra Cargo dependencies appended to the manifest.
        cargo_bin: Name or path of the cargo executable.
        abi_extractor_bin: Path to the abi_extractor binary. None resolves
            ALKALI_ABI_EXTRACTOR, then the binary shipped with alkali-core.
        build_timeout_seconds: Maximum wall time for one cargo build.
        abi_timeout_seconds: Maximum wall time for one ABI extraction.
        parallel: Run the build and ABI extraction concurrently.
        cache_enabled: Reuse results for identical source and options.

    Example:
        >>> options = CompilerOptions(optimize=2, dependencies={"serde": "1.0"})
        >>> options.target
        'wasm32-unknown-unknown'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    temp_dir: Path | None = Field(
        default=DEFAULT_TEMP_DIR,
        description="Build workspace directory",
    )
    scratch_dir: Path = Field(
        default=DEFAULT_TEMP_DIR,
        description="Scratch directory for the ABI extractor input",
    )
    target: str = Field(
        default=DEFAULT_TARGET,
        min_length=1,
        description="Rust target triple",
    )
    optimize: OptLevel = Field(
        default=DEFAULT_OPTIMIZE_LEVEL,
        description="Release profile optimization level",
    )
    output: Path | None = Field(
        default=DEFAULT_OUTPUT_DIR,
        description="Artifact output directory",
    )
    dependencies: dict[str, DependencySpec] = Field(
        default_factory=dict,
        description="Extra Cargo dependencies",
    )
    cargo_bin: str = Field(
        default="cargo",
        min_length=1,
        description="cargo executable",
    )
    abi_extractor_bin: Path | None = Field(
        default=None,
        description="abi_extractor executable",
    )
    build_timeout_seconds: float = Field(
        default=900.0,
        gt=0,
        description="Timeout for one cargo build in seconds",
    )
    abi_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Timeout for one ABI extraction in seconds",
    )
    parallel: bool = Field(
        default=True,
        description="Run build and ABI extraction concurrently",
    )
    cache_enabled: bool = Field(
        default=False,
        description="Cache compiled artifacts by source and options fingerprint",
    )
