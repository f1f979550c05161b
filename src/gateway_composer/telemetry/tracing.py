"""OpenTelemetry tracing helpers for gateway-composer.

Composition runs are traced with one parent span and one child span per
destination, so a failing destination is visible in the trace.

Tracers come from the global tracer provider. OpenTelemetry hands out
proxy tracers that follow a provider installed later, so a tracer cached
at import time still reports to whatever the host application configures.

Example:
    >>> from gateway_composer.telemetry.tracing import create_span
    >>> with create_span("gateway_composer.compose", {"compose.destinations": 3}) as span:
    ...     span.set_attribute("compose.exporters", 5)
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer

TRACER_NAME = "gateway_composer"

# name -> tracer; dict.setdefault keeps concurrent first lookups consistent
_tracers: dict[str, Tracer] = {}


def get_tracer(name: str = TRACER_NAME) -> Tracer:
    """Return the cached tracer for ``name``."""
    tracer = _tracers.get(name)
    if tracer is None:
        tracer = _tracers.setdefault(name, trace.get_tracer(name))
    return tracer


def set_tracer(name: str, tracer: Tracer | None) -> None:
    """Pin the tracer used for ``name``, or drop the pin with None."""
    if tracer is None:
        _tracers.pop(name, None)
    else:
        _tracers[name] = tracer


def reset_tracer() -> None:
    _tracers.clear()


@contextmanager
def create_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[Span, None, None]:
    """Create a span as a context manager.

    On exception the span status is set to ERROR with the exception type
    and message before the exception propagates.

    Args:
        name: The span name.
        attributes: Optional attributes to set on the span.

    Yields:
        The created span for additional attribute setting.
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(
        name,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.set_attribute("exception.type", type(e).__name__)
            span.set_attribute("exception.message", str(e))
            raise


__all__ = [
    "TRACER_NAME",
    "create_span",
    "get_tracer",
    "reset_tracer",
    "set_tracer",
]
