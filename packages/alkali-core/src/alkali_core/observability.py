"""Logging and tracing for the compilation pipeline.

Every pipeline stage (scaffold, build, extract_abi, persist) runs inside
``stage()``, which opens an OpenTelemetry span named ``alkali.<stage>`` and
emits ``<stage>_started`` / ``<stage>_completed`` / ``<stage>_failed``
structlog events carrying the same attributes.

Spans go to whatever TracerProvider the embedding application installed;
without one the OpenTelemetry API hands out no-op spans.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer

INSTRUMENTATION_NAME = "alkali.compiler"
SPAN_PREFIX = "alkali."

logger = structlog.get_logger(INSTRUMENTATION_NAME)


@lru_cache(maxsize=1)
def get_tracer() -> Tracer:
    """Return the pipeline tracer."""
    return trace.get_tracer(INSTRUMENTATION_NAME)


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = True,
    add_timestamp: bool = True,
) -> None:
    """Route structlog through the standard library at ``log_level``.

    Context bound with ``structlog.contextvars`` (such as the request id of
    a compile call) is merged into every event.

    Args:
        log_level: Minimum level name, e.g. "DEBUG".
        json_format: Render JSON lines instead of the console format.
        add_timestamp: Prefix each event with an ISO timestamp.
    """
    renderer: Any = (
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    )
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=log_level.upper())


@contextmanager
def stage(name: str, attributes: Mapping[str, Any] | None = None) -> Iterator[Span]:
    """Trace and log one pipeline stage.

    The span status is set from the outcome. Exceptions are recorded on the
    span, logged with the stage duration and re-raised unchanged.

    Example:
        >>> with stage("build", {"target": "wasm32-unknown-unknown"}):
        ...     invoker.build(workspace, target, 3)
    """
    attrs = dict(attributes or {})
    started = time.perf_counter()

    # Status and exception are recorded below, once
    with get_tracer().start_as_current_span(
        SPAN_PREFIX + name,
        attributes=attrs,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        logger.debug(f"{name}_started", **attrs)
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            logger.error(f"{name}_failed", error=str(exc), duration_ms=_elapsed_ms(started), **attrs)
            raise
        span.set_status(Status(StatusCode.OK))
        logger.info(f"{name}_completed", duration_ms=_elapsed_ms(started), **attrs)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)
