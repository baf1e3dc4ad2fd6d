"""Cargo.toml model for the ephemeral build workspace.

The manifest is assembled as a CargoManifest and serialized by
``CargoManifest.render()``. Only the subset of TOML the workspace needs is
produced: a [package] table, a [lib] table and a [dependencies] table whose
values are strings or single-line inline tables.

Caller dependencies render as:
- ``name = "1.0"`` for a bare version string
- ``name = { git = "...", version = "...", features = ["a", "b"] }`` for a
  structured spec, listing only the fields that are set, in that order
"""

from __future__ import annotations

import json
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from alkali_core.schemas.dependency import DependencySpec, GitDependency

MANIFEST_FILE_NAME = "Cargo.toml"

PACKAGE_NAME = "alkanes-contract"
PACKAGE_VERSION = "0.1.0"
PACKAGE_EDITION = "2021"

# Framework crates, resolved relative to the workspace directory
ALKANES_CRATES_ROOT = "../../alkanes-rs/crates"
FRAMEWORK_CRATES = (
    "alkanes-runtime",
    "alkanes-support",
    "metashrew-support",
    "alkanes-macros",
    "alkanes-types",
)

# Utility crates every contract gets
BASE_VERSIONED_DEPENDENCIES = (
    ("anyhow", "1.0"),
    ("hex_lit", "0.1.1"),
)


def quote(value: str) -> str:
    """Render a TOML basic string.

    JSON string escaping is a valid subset of TOML basic-string escaping.
    """
    return json.dumps(value, ensure_ascii=False)


def render_dependency(name: str, spec: DependencySpec) -> str:
    """Render one [dependencies] line.

    Args:
        name: Crate name.
        spec: Bare version string or GitDependency.

    Returns:
        The dependency line without a trailing newline.

    Example:
        >>> render_dependency("serde", "1.0")
        'serde = "1.0"'
        >>> render_dependency("alkanes", GitDependency(version="0.2"))
        'alkanes = { version = "0.2" }'
    """
    if isinstance(spec, str):
        return f"{name} = {quote(spec)}"

    fields: list[str] = []
    if spec.git:
        fields.append(f"git = {quote(spec.git)}")
    if spec.version:
        fields.append(f"version = {quote(spec.version)}")
    if spec.features:
        features = ", ".join(quote(f) for f in spec.features)
        fields.append(f"features = [{features}]")
    return f"{name} = {{ {', '.join(fields)} }}"


class PathDependency(BaseModel):
    """A dependency on a local crate directory."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(..., min_length=1, description="Crate directory")


class CargoManifest(BaseModel):
    """Cargo.toml of the build workspace.

    Attributes:
        name: Package name. Determines the WASM artifact name.
        version: Package version.
        edition: Rust edition.
        crate_types: [lib] crate-type list.
        path_dependencies: Framework crates referenced by relative path.
        dependencies: Version-string and structured dependencies, in order.

    Example:
        >>> manifest = CargoManifest.for_contract({"serde": "1.0"})
        >>> manifest.render().splitlines()[-1]
        'serde = "1.0"'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default=PACKAGE_NAME, min_length=1)
    version: str = Field(default=PACKAGE_VERSION, min_length=1)
    edition: str = Field(default=PACKAGE_EDITION, min_length=1)
    crate_types: list[str] = Field(default_factory=lambda: ["cdylib"])
    path_dependencies: dict[str, PathDependency] = Field(default_factory=dict)
    dependencies: dict[str, DependencySpec] = Field(default_factory=dict)

    @classmethod
    def for_contract(
        cls,
        extra_dependencies: Mapping[str, DependencySpec] | None = None,
    ) -> CargoManifest:
        """Build the standard contract manifest plus caller dependencies.

        Caller dependencies follow the base dependencies in mapping order.
        One named like a base dependency replaces it in place; one named
        like a framework crate drops that crate's path line. Either way
        every key appears once in [dependencies].

        Args:
            extra_dependencies: Extra dependencies from CompilerOptions.

        Returns:
            CargoManifest ready to render.
        """
        extra = dict(extra_dependencies or {})
        path_dependencies = {
            crate: PathDependency(path=f"{ALKANES_CRATES_ROOT}/{crate}")
            for crate in FRAMEWORK_CRATES
            if crate not in extra
        }
        dependencies: dict[str, DependencySpec] = dict(BASE_VERSIONED_DEPENDENCIES)
        dependencies.update(extra)
        return cls(path_dependencies=path_dependencies, dependencies=dependencies)

    def render(self) -> str:
        """Serialize the manifest to TOML text."""
        crate_types = ", ".join(quote(t) for t in self.crate_types)
        lines = [
            "[package]",
            f"name = {quote(self.name)}",
            f"version = {quote(self.version)}",
            f"edition = {quote(self.edition)}",
            "",
            "[lib]",
            f"crate-type = [{crate_types}]",
            "",
            "[dependencies]",
        ]
        for crate, dep in self.path_dependencies.items():
            lines.append(f"{crate} = {{ path = {quote(dep.path)} }}")
        for name, spec in self.dependencies.items():
            lines.append(render_dependency(name, spec))
        return "\n".join(lines) + "\n"


__all__ = [
    "CargoManifest",
    "GitDependency",
    "MANIFEST_FILE_NAME",
    "PathDependency",
    "render_dependency",
]
