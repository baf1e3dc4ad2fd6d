"""Exceptions raised by the alkali compilation pipeline.

    AlkaliError
    ├── ConfigurationError    unset workspace/output path, bad alkali.config.json
    ├── FilesystemError       workspace or artifact I/O
    ├── BuildFailure          cargo could not run, failed, timed out, left no WASM
    ├── ABIExtractionFailure  abi_extractor failed or printed something other than JSON
    └── CompilationFailure    raised by AlkanesCompiler around any of the above

Messages are addressed to the contract developer and include the
toolchain's own diagnostic. Each wrapping layer prefixes its context and
chains the original with ``raise ... from``; ``AlkaliError.chain`` lists
the messages from the outermost inwards.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class AlkaliError(Exception):
    """Root of the alkali exception hierarchy.

    Args:
        user_message: The message shown to the developer.
        internal_details: Extra diagnostic context (argv, captured output).
            When given it is logged once, as an ``alkali_error`` event, at
            construction time.
    """

    def __init__(self, user_message: str, *, internal_details: str | None = None) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details
        if internal_details:
            logger.error(
                "alkali_error",
                kind=type(self).__name__,
                message=user_message,
                details=internal_details,
            )

    @property
    def chain(self) -> list[str]:
        """This message followed by the message of every ``__cause__``."""
        messages: list[str] = []
        cause: BaseException | None = self
        while cause is not None:
            messages.append(str(cause))
            cause = cause.__cause__
        return messages


class ConfigurationError(AlkaliError):
    """A setting the pipeline needs is missing or malformed.

    ``file_path`` and ``field_path`` are appended to the message, e.g.
    ``Invalid configuration: Input should be a valid string (in
    alkali.config.json, field 'compiler.target')``.

    Example:
        >>> raise ConfigurationError("Output directory is not defined", field_path="output")
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        where = [
            part
            for part in (
                f"in {file_path}" if file_path else None,
                f"field '{field_path}'" if field_path else None,
            )
            if part
        ]
        message = f"{user_message} ({', '.join(where)})" if where else user_message
        super().__init__(message, internal_details=internal_details)
        self.file_path = file_path
        self.field_path = field_path


class FilesystemError(AlkaliError):
    """Reading the contract or writing the workspace or artifacts failed.

    The message is the OS error text; ``path`` is the file or directory
    involved.
    """

    def __init__(self, user_message: str, *, path: str | None = None) -> None:
        super().__init__(user_message)
        self.path = path


class BuildFailure(AlkaliError):
    """cargo did not produce a WASM module.

    ``returncode`` and ``stderr`` are set when cargo ran and exited non-zero.

    Example:
        >>> raise BuildFailure("cargo build exited with status 101: error[E0425]", returncode=101)
    """

    def __init__(
        self,
        user_message: str,
        *,
        returncode: int | None = None,
        stderr: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message, internal_details=internal_details)
        self.returncode = returncode
        self.stderr = stderr


class ABIExtractionFailure(AlkaliError):
    """abi_extractor failed, timed out, or printed malformed JSON."""


class CompilationFailure(AlkaliError):
    """Facade-level failure; message starts with "Compilation failed" or "Failed to compile <path>"."""

    def __init__(self, user_message: str, *, file_path: str | None = None) -> None:
        super().__init__(user_message)
        self.file_path = file_path
