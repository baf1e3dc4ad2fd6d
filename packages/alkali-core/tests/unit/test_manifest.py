"""Unit tests for Cargo.toml generation."""

from __future__ import annotations

import pytest

from alkali_core.manifest import (
    ALKANES_CRATES_ROOT,
    FRAMEWORK_CRATES,
    CargoManifest,
    GitDependency,
    render_dependency,
)

GIT_URL = "https://github.com/kungfuflex/alkanes-rs"


class TestRenderDependency:
    """Separator placement for every subset of git/version/features."""

    def test_bare_string(self) -> None:
        assert render_dependency("serde", "1.0") == 'serde = "1.0"'

    @pytest.mark.parametrize(
        ("spec", "expected"),
        [
            (GitDependency(), "dep = {  }"),
            (GitDependency(git=GIT_URL), f'dep = {{ git = "{GIT_URL}" }}'),
            (GitDependency(version="0.2"), 'dep = { version = "0.2" }'),
            (GitDependency(features=["a", "b"]), 'dep = { features = ["a", "b"] }'),
            (
                GitDependency(git=GIT_URL, version="0.2"),
                f'dep = {{ git = "{GIT_URL}", version = "0.2" }}',
            ),
            (
                GitDependency(git=GIT_URL, features=["a", "b"]),
                f'dep = {{ git = "{GIT_URL}", features = ["a", "b"] }}',
            ),
            (
                GitDependency(version="0.2", features=["a"]),
                'dep = { version = "0.2", features = ["a"] }',
            ),
            (
                GitDependency(git=GIT_URL, version="0.2", features=["a", "b"]),
                f'dep = {{ git = "{GIT_URL}", version = "0.2", features = ["a", "b"] }}',
            ),
        ],
    )
    def test_structured(self, spec: GitDependency, expected: str) -> None:
        assert render_dependency("dep", spec) == expected

    def test_empty_features_treated_as_absent(self) -> None:
        spec = GitDependency(version="1.0", features=[])
        assert render_dependency("dep", spec) == 'dep = { version = "1.0" }'

    def test_quotes_are_escaped(self) -> None:
        assert render_dependency("dep", 'weird"version') == 'dep = "weird\\"version"'


class TestCargoManifest:
    """Tests for the contract manifest."""

    def test_package_and_lib_sections(self) -> None:
        text = CargoManifest.for_contract().render()

        assert text.startswith("[package]\n")
        assert 'name = "alkanes-contract"' in text
        assert 'version = "0.1.0"' in text
        assert 'edition = "2021"' in text
        assert '[lib]\ncrate-type = ["cdylib"]' in text

    def test_base_dependencies(self) -> None:
        lines = CargoManifest.for_contract().render().splitlines()
        deps = lines[lines.index("[dependencies]") + 1 :]

        assert deps == [
            *(
                f'{crate} = {{ path = "{ALKANES_CRATES_ROOT}/{crate}" }}'
                for crate in FRAMEWORK_CRATES
            ),
            'anyhow = "1.0"',
            'hex_lit = "0.1.1"',
        ]

    def test_extra_dependencies_appended_in_order(self) -> None:
        manifest = CargoManifest.for_contract(
            {
                "serde": "1.0",
                "alkanes-std": GitDependency(git=GIT_URL, features=["mainnet"]),
            }
        )
        lines = manifest.render().splitlines()

        assert lines[-2] == 'serde = "1.0"'
        assert lines[-1] == f'alkanes-std = {{ git = "{GIT_URL}", features = ["mainnet"] }}'

    def test_caller_dependency_replaces_base_in_place(self) -> None:
        lines = CargoManifest.for_contract({"anyhow": "1.0.80", "serde": "1.0"}).render().splitlines()
        deps = lines[lines.index("[dependencies]") + len(FRAMEWORK_CRATES) + 1 :]

        assert deps == ['anyhow = "1.0.80"', 'hex_lit = "0.1.1"', 'serde = "1.0"']
        assert sum(line.startswith("anyhow = ") for line in lines) == 1

    def test_caller_dependency_replaces_framework_crate(self) -> None:
        pinned = GitDependency(git=GIT_URL)
        lines = CargoManifest.for_contract({"alkanes-runtime": pinned}).render().splitlines()

        runtime_lines = [line for line in lines if line.startswith("alkanes-runtime = ")]
        assert runtime_lines == [f'alkanes-runtime = {{ git = "{GIT_URL}" }}']
        assert lines[-1] == runtime_lines[0]
        assert f'alkanes-support = {{ path = "{ALKANES_CRATES_ROOT}/alkanes-support" }}' in lines

    def test_render_ends_with_newline(self) -> None:
        assert CargoManifest.for_contract().render().endswith('"0.1.1"\n')
