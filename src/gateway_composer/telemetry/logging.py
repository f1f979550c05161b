"""Structured logging setup with OpenTelemetry trace correlation.

gateway-composer logs through structlog. Library modules only call
``structlog.get_logger(__name__)``; applications (and the CLI) call
configure_logging() once to choose level and output format.

Logs emitted inside an active span carry ``trace_id`` and ``span_id``.

Example:
    >>> from gateway_composer.telemetry.logging import configure_logging
    >>> configure_logging(log_level="DEBUG", json_output=False)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any, TextIO

import structlog
from opentelemetry import trace
from opentelemetry.trace import INVALID_SPAN_ID, INVALID_TRACE_ID

# Type alias for structlog EventDict
EventDict = MutableMapping[str, Any]

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def add_trace_context(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Add trace context to a structlog event dictionary.

    Structlog processor that injects trace_id and span_id from the
    active OpenTelemetry span.

    Args:
        logger: The logger instance (unused, required by structlog processor API).
        method_name: The log method name (e.g., "info", "debug").
        event_dict: The event dictionary to enrich with trace context.

    Returns:
        The event dictionary, with trace_id and span_id if a span is active.
    """
    span = trace.get_current_span()
    ctx = span.get_span_context()

    if ctx.trace_id != INVALID_TRACE_ID and ctx.span_id != INVALID_SPAN_ID:
        # 32-char hex trace_id, 16-char hex span_id
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")

    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog with trace context injection.

    Args:
        log_level: Minimum level to emit (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: Emit JSON lines if True, human-readable console output otherwise.
        stream: Output stream (default: stderr, keeping stdout free for YAML).

    Raises:
        ValueError: If log_level is not a valid level name.
    """
    level_name = log_level.upper()
    if level_name not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {log_level!r}. Valid levels: {', '.join(VALID_LOG_LEVELS)}"
        )
    level: int = getattr(logging, level_name)

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_trace_context,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


__all__ = [
    "VALID_LOG_LEVELS",
    "add_trace_context",
    "configure_logging",
]
