"""AlkanesCompiler: the compilation facade.

This module implements the AlkanesCompiler class that turns contract
source into CompiledArtifact (base64 WASM + ABI) and, for files, persists
both artifacts to the output directory.

Pipeline for one compile call:
- ProjectScaffolder writes Cargo.toml and src/lib.rs into the workspace
- BuildInvoker runs cargo in the workspace and reads the WASM module
- ABIExtractor runs abi_extractor on the source text
- ArtifactWriter persists <name>.wasm and <name>.json (compile_file only)

Scaffold + build and ABI extraction share nothing but the source text, so
they run on two worker threads. The first failure is raised immediately;
the sibling task is left to finish and its outcome is only logged.

Workspace isolation: the workspace and scratch paths are fixed per
instance. Calls that pass a ``request_id`` get their own
``requests/<request_id>`` subdirectories; calls without one share the
default paths and are only safe when serialized.
"""

from __future__ import annotations

import contextvars
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, TypeVar

import structlog

from alkali_core.compiler.abi import ABIExtractor
from alkali_core.compiler.build import BuildInvoker
from alkali_core.compiler.cache import ArtifactCache, fingerprint
from alkali_core.compiler.models import CompiledArtifact
from alkali_core.compiler.scaffolder import ProjectScaffolder
from alkali_core.compiler.writer import ArtifactWriter
from alkali_core.errors import (
    AlkaliError,
    CompilationFailure,
    ConfigurationError,
    FilesystemError,
)
from alkali_core.observability import stage
from alkali_core.schemas import CompilerOptions, OptLevel, is_recognized_opt_level

logger = structlog.get_logger(__name__)

CONTRACT_EXTENSION = ".rs"

# Per-request workspaces live under <temp_dir>/<REQUESTS_DIR_NAME>/<request_id>
REQUESTS_DIR_NAME = "requests"

T = TypeVar("T")


def contract_name(file_path: Path) -> str:
    """Return the file name with a trailing .rs stripped."""
    name = file_path.name
    if name.endswith(CONTRACT_EXTENSION) and len(name) > len(CONTRACT_EXTENSION):
        return name[: -len(CONTRACT_EXTENSION)]
    return name


class AlkanesCompiler:
    """Compile Alkanes contracts to WASM and ABI.

    Attributes:
        options: CompilerOptions fixed for this instance.
        scaffolder: Writes the build workspace.
        build_invoker: Runs cargo.
        abi_extractor: Runs abi_extractor.
        writer: Persists artifacts.
        cache: Fingerprint cache, or None when caching is disabled.

    Example:
        >>> compiler = AlkanesCompiler(CompilerOptions(optimize=2))
        >>> artifact = compiler.compile_file("contracts/Example.rs", output="build")
        >>> artifact.abi["name"]
        'Example'
    """

    def __init__(self, options: CompilerOptions | None = None, **overrides: Any) -> None:
        """Initialize the compiler.

        Args:
            options: Pipeline options. Defaults to CompilerOptions().
            **overrides: CompilerOptions fields overriding ``options``.
        """
        base = options or CompilerOptions()
        self.options = (
            CompilerOptions.model_validate({**base.model_dump(), **overrides})
            if overrides
            else base
        )
        self.scaffolder = ProjectScaffolder()
        self.build_invoker = BuildInvoker(
            cargo_bin=self.options.cargo_bin,
            timeout_seconds=self.options.build_timeout_seconds,
        )
        self.abi_extractor = ABIExtractor(
            scratch_dir=self.options.scratch_dir,
            binary=self.options.abi_extractor_bin,
            timeout_seconds=self.options.abi_timeout_seconds,
        )
        self.writer = ArtifactWriter()
        self.cache: ArtifactCache | None = ArtifactCache() if self.options.cache_enabled else None

    def workspace_path(self, request_id: str | None = None) -> Path:
        """Return the build workspace for a request.

        Raises:
            ConfigurationError: If temp_dir is unset.
        """
        if self.options.temp_dir is None:
            raise ConfigurationError("Temp directory is not defined", field_path="temp_dir")
        if request_id is None:
            return self.options.temp_dir
        return self.options.temp_dir / REQUESTS_DIR_NAME / _safe_request_id(request_id)

    def scratch_path(self, request_id: str | None = None) -> Path:
        """Return the ABI extractor scratch directory for a request."""
        if request_id is None:
            return self.options.scratch_dir
        return self.options.scratch_dir / REQUESTS_DIR_NAME / _safe_request_id(request_id)

    def compile(
        self,
        source_text: str,
        optimize: OptLevel | None = None,
        request_id: str | None = None,
    ) -> CompiledArtifact:
        """Compile contract source to a CompiledArtifact.

        Args:
            source_text: Contract source.
            optimize: Optimization level for this call. Defaults to
                options.optimize; ``0`` is honoured.
            request_id: Isolates workspace and scratch paths for this call.

        Returns:
            Immutable CompiledArtifact.

        Raises:
            CompilationFailure: Wrapping any configuration, filesystem, build
                or ABI extraction error.
        """
        try:
            return self._compile(source_text, optimize, request_id)
        except (AlkaliError, OSError) as e:
            raise CompilationFailure(f"Compilation failed: {e}") from e

    def compile_file(
        self,
        file_path: Path | str,
        optimize: OptLevel | None = None,
        output: Path | str | None = None,
        request_id: str | None = None,
    ) -> CompiledArtifact:
        """Compile a contract file and write its artifacts.

        Writes ``<output>/<name>.wasm`` and ``<output>/<name>.json`` where
        ``name`` is the file name without ``.rs``.

        Args:
            file_path: Contract source file (UTF-8).
            optimize: Optimization level for this call.
            output: Output directory for this call. Defaults to options.output.
            request_id: Isolates workspace and scratch paths for this call.

        Returns:
            The CompiledArtifact that was persisted.

        Raises:
            CompilationFailure: Message starts with "Failed to compile <file_path>".
        """
        path = Path(file_path)
        try:
            output_dir = Path(output) if output is not None else self.options.output
            if output_dir is None:
                raise ConfigurationError("Output directory is not defined", field_path="output")

            logger.info("reading_contract", path=str(path))
            source_text = _read_source(path)
            name = contract_name(path)

            logger.info("compiling_contract", contract=name)
            artifact = self.compile(source_text, optimize=optimize, request_id=request_id)

            with stage("persist", {"contract": name, "output": str(output_dir)}):
                self.writer.persist(name, artifact.wasm_bytes(), artifact.abi, output_dir)
            return artifact
        except (AlkaliError, OSError) as e:
            raise CompilationFailure(
                f"Failed to compile {file_path}: {e}",
                file_path=str(file_path),
            ) from e

    def _compile(
        self,
        source_text: str,
        optimize: OptLevel | None,
        request_id: str | None,
    ) -> CompiledArtifact:
        workspace = self.workspace_path(request_id)
        scratch = self.scratch_path(request_id)
        level = self.options.optimize if optimize is None else optimize
        target = self.options.target

        if not is_recognized_opt_level(level):
            logger.warning("unrecognized_opt_level", optimize=str(level))

        key: str | None = None
        if self.cache is not None:
            key = fingerprint(source_text, target, level, self.options.dependencies)
            cached = self.cache.get(key)
            if cached is not None:
                logger.info("compile_cache_hit", fingerprint=key[:12])
                return cached

        attributes = {
            "workspace": str(workspace),
            "target": target,
            "optimize": str(level),
        }
        with stage("compile", attributes):
            wasm, abi = self._run_pipeline(source_text, workspace, scratch, target, level)

        artifact = CompiledArtifact.from_wasm(wasm, abi)
        if self.cache is not None and key is not None:
            self.cache.put(key, artifact)
        return artifact

    def _run_pipeline(
        self,
        source_text: str,
        workspace: Path,
        scratch: Path,
        target: str,
        level: OptLevel,
    ) -> tuple[bytes, Any]:
        """Run scaffold + build and ABI extraction, concurrently if enabled."""

        def build() -> bytes:
            with stage("scaffold", {"workspace": str(workspace)}):
                self.scaffolder.materialize(source_text, workspace, self.options.dependencies)
            with stage("build", {"target": target, "optimize": str(level)}):
                return self.build_invoker.build(workspace, target, level)

        def extract() -> Any:
            with stage("extract_abi", {"scratch_dir": str(scratch)}):
                return self.abi_extractor.extract_abi(source_text, scratch)

        if not self.options.parallel:
            return build(), extract()

        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="alkali")
        try:
            build_future = _submit(executor, build)
            abi_future = _submit(executor, extract)
            done, _ = wait((build_future, abi_future), return_when=FIRST_EXCEPTION)

            # Surface the first failure; the sibling keeps running and is only logged
            for future in (build_future, abi_future):
                if future in done and future.exception() is not None:
                    sibling = abi_future if future is build_future else build_future
                    sibling.add_done_callback(_log_abandoned)
                    raise future.exception()  # type: ignore[misc]

            return build_future.result(), abi_future.result()
        finally:
            executor.shutdown(wait=False)


def _submit(executor: ThreadPoolExecutor, fn: Callable[[], T]) -> Future[T]:
    # Each task gets its own context copy so spans and structlog
    # contextvars carry over to the worker thread.
    return executor.submit(contextvars.copy_context().run, fn)


def _log_abandoned(future: Future[Any]) -> None:
    exc = future.exception()
    if exc is not None:
        logger.warning("sibling_task_failed", error=str(exc))
    else:
        logger.debug("sibling_task_completed")


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemError(str(e), path=str(path)) from e


def _safe_request_id(request_id: str) -> str:
    """Validate a request id for use as a single path component.

    Raises:
        ConfigurationError: If the id is empty or would escape its directory.
    """
    if not request_id or request_id in (".", "..") or "/" in request_id or "\\" in request_id:
        raise ConfigurationError(
            f"Invalid request id: {request_id!r}",
            field_path="request_id",
        )
    return request_id
