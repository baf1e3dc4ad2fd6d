"""Unit tests for ArtifactWriter."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from alkali_core.compiler import ArtifactWriter
from alkali_core.errors import FilesystemError

ABI = {"name": "Token", "methods": [{"name": "method_1", "opcode": 1, "inputs": [], "outputs": []}]}


class TestPersist:
    """Tests for ArtifactWriter.persist()."""

    def test_writes_both_artifacts(self, tmp_path: Path) -> None:
        output = tmp_path / "build"

        paths = ArtifactWriter().persist("Token", b"\x00asm\x01\x00", ABI, output)

        assert paths.wasm_path == output / "Token.wasm"
        assert paths.abi_path == output / "Token.json"
        assert paths.wasm_path.read_bytes() == b"\x00asm\x01\x00"
        assert json.loads(paths.abi_path.read_text()) == ABI

    def test_abi_is_indented(self, tmp_path: Path) -> None:
        paths = ArtifactWriter().persist("Token", b"", ABI, tmp_path)
        assert paths.abi_path.read_text() == json.dumps(ABI, indent=2)

    @pytest.mark.parametrize("abi", [[{"name": "method_0", "opcode": 0}], "Token", None])
    def test_non_object_abi(self, tmp_path: Path, abi: object) -> None:
        paths = ArtifactWriter().persist("Token", b"", abi, tmp_path)
        assert json.loads(paths.abi_path.read_text()) == abi

    def test_creates_nested_output_dir(self, tmp_path: Path) -> None:
        output = tmp_path / "a" / "b" / "build"
        ArtifactWriter().persist("Token", b"", ABI, output)
        assert (output / "Token.wasm").exists()

    def test_last_write_wins(self, tmp_path: Path) -> None:
        writer = ArtifactWriter()
        writer.persist("Token", b"old", {"name": "Old"}, tmp_path)
        paths = writer.persist("Token", b"new", {"name": "New"}, tmp_path)

        assert paths.wasm_path.read_bytes() == b"new"
        assert json.loads(paths.abi_path.read_text()) == {"name": "New"}

    def test_filesystem_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "build"
        blocker.write_text("a file, not a directory")

        with pytest.raises(FilesystemError):
            ArtifactWriter().persist("Token", b"", ABI, blocker)
