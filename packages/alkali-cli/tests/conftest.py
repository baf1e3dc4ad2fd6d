"""Shared test fixtures for alkali-cli tests.

Provides CliRunner fixtures and a fake toolchain (``cargo`` on PATH and
``ALKALI_ABI_EXTRACTOR``) for running commands end to end.
"""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Generator
from pathlib import Path

from click.testing import CliRunner
import pytest

CONFIG_FILENAME = "alkali.config.json"

FAKE_CARGO = """\
#!/bin/sh
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
"""

FAKE_ABI_EXTRACTOR = """\
#!/bin/sh
name=$(sed -n 's/^pub struct \\([A-Za-z0-9_]*\\).*/\\1/p' "$1" | head -n 1)
printf '{"name": "%s", "methods": []}\\n' "${name:-UnknownContract}"
"""


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ALKALI_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def fake_toolchain(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Put a fake cargo on PATH and point ALKALI_ABI_EXTRACTOR at a fake extractor.

    Returns:
        Directory holding both scripts.
    """
    if sys.platform == "win32":
        pytest.skip("fake toolchain uses POSIX shell scripts")

    bin_dir = tmp_path / "fake-bin"
    bin_dir.mkdir()
    for name, body in (("cargo", FAKE_CARGO), ("abi_extractor", FAKE_ABI_EXTRACTOR)):
        script = bin_dir / name
        script.write_text(body)
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setenv("ALKALI_ABI_EXTRACTOR", str(bin_dir / "abi_extractor"))
    return bin_dir
