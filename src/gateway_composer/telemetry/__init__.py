"""Logging and tracing for gateway-composer.

- logging: structlog configuration with trace-context injection
- tracing: cached OpenTelemetry tracer factory and span helper
"""

from __future__ import annotations

from gateway_composer.telemetry.logging import add_trace_context, configure_logging
from gateway_composer.telemetry.tracing import create_span, get_tracer, reset_tracer, set_tracer

__all__ = [
    "add_trace_context",
    "configure_logging",
    "create_span",
    "get_tracer",
    "reset_tracer",
    "set_tracer",
]
