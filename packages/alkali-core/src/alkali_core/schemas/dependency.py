"""Extra Cargo dependency declarations.

A dependency is either a bare version requirement (``"1.0"``) or a
structured record with any of ``git``, ``version`` and ``features``.
Dependencies have no meaning inside alkali beyond extending the generated
Cargo.toml of the build workspace.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class GitDependency(BaseModel):
    """Structured dependency specification.

    Attributes:
        git: Git repository URL.
        version: Version requirement.
        features: Cargo features to enable.

    Example:
        >>> GitDependency(git="https://github.com/kungfuflex/alkanes-rs", features=["mainnet"])
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    git: str | None = Field(
        default=None,
        description="Git repository URL",
    )
    version: str | None = Field(
        default=None,
        description="Version requirement",
    )
    features: list[str] | None = Field(
        default=None,
        description="Cargo features to enable",
    )


DependencySpec = Union[str, GitDependency]
"""A bare version string or a structured GitDependency."""
