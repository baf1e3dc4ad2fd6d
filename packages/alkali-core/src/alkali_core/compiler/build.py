"""BuildInvoker: run cargo against the scaffolded workspace.

cargo owns all Rust compilation. alkali only invokes it and picks up the
WASM module from the path cargo's layout makes deterministic:
``<workspace>/target/<target>/release/alkanes_contract.wasm``.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog

from alkali_core.errors import BuildFailure
from alkali_core.schemas import OptLevel

logger = structlog.get_logger(__name__)

# cargo turns the package name alkanes-contract into this library file name
ARTIFACT_FILE_NAME = "alkanes_contract.wasm"

DEFAULT_BUILD_TIMEOUT_SECONDS = 900.0


def artifact_path(workspace_path: Path, target: str) -> Path:
    """Return where cargo writes the release WASM module for ``target``."""
    return workspace_path / "target" / target / "release" / ARTIFACT_FILE_NAME


class BuildInvoker:
    """Invoke ``cargo build`` and read back the WASM module.

    Attributes:
        cargo_bin: cargo executable name or path.
        timeout_seconds: Maximum wall time for one build.

    Example:
        >>> wasm = BuildInvoker().build(Path(".alkanes"), "wasm32-unknown-unknown", 3)
    """

    def __init__(
        self,
        cargo_bin: str = "cargo",
        timeout_seconds: float = DEFAULT_BUILD_TIMEOUT_SECONDS,
    ) -> None:
        self.cargo_bin = cargo_bin
        self.timeout_seconds = timeout_seconds

    def command(self, target: str, optimize: OptLevel) -> list[str]:
        """Build the cargo argv.

        The optimization level is forwarded verbatim; cargo decides whether
        it is valid.
        """
        return [
            self.cargo_bin,
            "build",
            "--target",
            target,
            "--release",
            "--config",
            f"profile.release.opt-level={optimize}",
        ]

    def build(self, workspace_path: Path, target: str, optimize: OptLevel) -> bytes:
        """Run a release build and return the WASM module bytes.

        Args:
            workspace_path: Directory holding Cargo.toml; cargo's working directory.
            target: Rust target triple.
            optimize: Release profile optimization level.

        Returns:
            Raw WASM module bytes.

        Raises:
            BuildFailure: If cargo cannot start, exits non-zero, times out,
                or leaves no artifact behind.
        """
        argv = self.command(target, optimize)
        log = logger.bind(workspace=str(workspace_path), target=target, optimize=str(optimize))

        try:
            completed = subprocess.run(
                argv,
                cwd=workspace_path,
                capture_output=True,
                text=True,
                errors="replace",  # diagnostics are not guaranteed to be UTF-8
                timeout=self.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise BuildFailure(
                f"cargo build timed out after {self.timeout_seconds:g}s",
                internal_details=f"argv={argv}",
            ) from e
        except OSError as e:
            raise BuildFailure(
                f"Failed to run {self.cargo_bin}: {e}",
                internal_details=f"argv={argv}",
            ) from e

        if completed.returncode != 0:
            diagnostic = (completed.stderr or completed.stdout).strip()
            raise BuildFailure(
                f"cargo build exited with status {completed.returncode}: {diagnostic}",
                returncode=completed.returncode,
                stderr=completed.stderr,
            )

        # cargo reports progress and lints on stderr even when the build succeeds
        if completed.stderr:
            log.warning("build_warnings", stderr=completed.stderr.strip())

        wasm_path = artifact_path(workspace_path, target)
        try:
            wasm = wasm_path.read_bytes()
        except FileNotFoundError as e:
            raise BuildFailure(f"Build artifact not found: {wasm_path}") from e
        except OSError as e:
            raise BuildFailure(f"Cannot read build artifact {wasm_path}: {e}") from e

        log.debug("build_artifact_read", path=str(wasm_path), size=len(wasm))
        return wasm
