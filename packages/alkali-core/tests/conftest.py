"""Shared pytest fixtures for alkali-core tests.

This module provides common fixtures used across unit and integration
tests, including fake ``cargo`` and ``abi_extractor`` executables written
as POSIX shell scripts.
"""

from __future__ import annotations

import stat
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest
import structlog

EXAMPLE_SOURCE = """\
use alkanes_runtime::runtime::AlkaneResponder;

#[derive(Default)]
pub struct Example(());

impl AlkaneResponder for Example {
    fn execute(&self) -> Result<CallResponse> {
        match shift_or_err(&mut inputs)? {
            0 => Ok(response),
            99 => Ok(response),
            _ => Err(anyhow!("unrecognized opcode")),
        }
    }
}
"""

# Records its argv, then writes "\0asm" + src/lib.rs as the WASM module.
FAKE_CARGO = """\
#!/bin/sh
printf '%s\\n' "$@" > cargo_args.txt
target=""
while [ $# -gt 0 ]; do
  case "$1" in
    --target) target="$2"; shift 2 ;;
    *) shift ;;
  esac
done
mkdir -p "target/$target/release"
printf '\\000asm' > "target/$target/release/alkanes_contract.wasm"
cat src/lib.rs >> "target/$target/release/alkanes_contract.wasm"
echo "   Compiling alkanes-contract v0.1.0" >&2
"""

# Like FAKE_CARGO, but its diagnostics are not valid UTF-8.
FAKE_CARGO_NOISY = FAKE_CARGO + """\
printf '\\377\\376 warning: unused variable\\n' >&2
"""

FAKE_CARGO_FAILING = """\
#!/bin/sh
echo "error[E0425]: cannot find value \\`x\\` in this scope" >&2
exit 101
"""

FAKE_CARGO_NO_ARTIFACT = """\
#!/bin/sh
exit 0
"""

FAKE_CARGO_SLOW = """\
#!/bin/sh
exec sleep 5
"""

# Prints an ABI naming the first `pub struct` of the source file.
FAKE_ABI_EXTRACTOR = """\
#!/bin/sh
name=$(sed -n 's/^pub struct \\([A-Za-z0-9_]*\\).*/\\1/p' "$1" | head -n 1)
printf '{"name": "%s", "methods": [{"name": "method_0", "opcode": 0, "inputs": [], "outputs": []}]}\\n' "${name:-UnknownContract}"
"""

# Prints a top-level JSON array.
FAKE_ABI_EXTRACTOR_ARRAY = """\
#!/bin/sh
echo '[{"name": "method_0", "opcode": 0}]'
"""

FAKE_ABI_EXTRACTOR_FAILING = """\
#!/bin/sh
echo "Failed to parse Rust file" >&2
exit 1
"""

FAKE_ABI_EXTRACTOR_GARBAGE = """\
#!/bin/sh
echo "this is not json"
"""


SCRIPTS = {
    "cargo": FAKE_CARGO,
    "cargo_failing": FAKE_CARGO_FAILING,
    "cargo_noisy": FAKE_CARGO_NOISY,
    "cargo_no_artifact": FAKE_CARGO_NO_ARTIFACT,
    "cargo_slow": FAKE_CARGO_SLOW,
    "abi_extractor": FAKE_ABI_EXTRACTOR,
    "abi_extractor_array": FAKE_ABI_EXTRACTOR_ARRAY,
    "abi_extractor_failing": FAKE_ABI_EXTRACTOR_FAILING,
    "abi_extractor_garbage": FAKE_ABI_EXTRACTOR_GARBAGE,
}


@dataclass(frozen=True)
class FakeToolchain:
    """Paths of the fake executables for one test."""

    cargo: Path
    abi_extractor: Path


def write_script(path: Path, body: str) -> Path:
    """Write an executable shell script."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        # Resolve sys.stdout per logger so capsys sees the output
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def example_source() -> str:
    """Return a small contract source."""
    return EXAMPLE_SOURCE


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory writing one of the SCRIPTS variants to tmp_path/bin."""
    if sys.platform == "win32":
        pytest.skip("fake toolchain uses POSIX shell scripts")

    def _make(kind: str) -> Path:
        return write_script(tmp_path / "bin" / kind, SCRIPTS[kind])

    return _make


@pytest.fixture
def fake_toolchain(make_script: Callable[[str], Path]) -> FakeToolchain:
    """Return a working fake cargo and abi_extractor."""
    return FakeToolchain(cargo=make_script("cargo"), abi_extractor=make_script("abi_extractor"))


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change into an empty project directory under tmp_path."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project
