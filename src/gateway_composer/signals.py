"""Telemetry signals and the signal gate.

This module defines the Signal enum and the pure predicates that decide,
per destination descriptor, whether tracing, metrics or logging was
requested. A signal that is absent from the descriptor is disabled.

Example:
    >>> from gateway_composer.signals import Signal, tracing_enabled
    >>> from gateway_composer.schemas.destination import DestinationDescriptor
    >>> d = DestinationDescriptor(type="jaeger", signals={Signal.TRACES})
    >>> tracing_enabled(d)
    True
    >>> Signal.TRACES.pipeline_prefix
    'traces'
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gateway_composer.schemas.destination import DestinationDescriptor


class Signal(str, Enum):
    """Telemetry data category routed by a collector pipeline.

    The enum value is the collector's pipeline type, which is also the
    prefix of every pipeline name (``traces/<destination>``).

    Attributes:
        TRACES: Distributed traces.
        METRICS: Metrics.
        LOGS: Logs.
    """

    TRACES = "traces"
    METRICS = "metrics"
    LOGS = "logs"

    @property
    def pipeline_prefix(self) -> str:
        """Return the pipeline name prefix for this signal."""
        return self.value

    @classmethod
    def parse(cls, value: str) -> Signal:
        """Parse a signal from its value or member name, case-insensitively.

        Args:
            value: "traces", "TRACES", "Metrics", ...

        Returns:
            The matching Signal.

        Raises:
            ValueError: If the value names no signal.
        """
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown signal: {value!r}. Valid signals: {valid}")


ALL_SIGNALS: frozenset[Signal] = frozenset(Signal)


def is_signal_enabled(descriptor: DestinationDescriptor, signal: Signal) -> bool:
    """Return True iff ``signal`` is in the descriptor's enabled signals."""
    return signal in descriptor.signals


def tracing_enabled(descriptor: DestinationDescriptor) -> bool:
    """Return True iff the destination requests traces."""
    return is_signal_enabled(descriptor, Signal.TRACES)


def metrics_enabled(descriptor: DestinationDescriptor) -> bool:
    """Return True iff the destination requests metrics."""
    return is_signal_enabled(descriptor, Signal.METRICS)


def logging_enabled(descriptor: DestinationDescriptor) -> bool:
    """Return True iff the destination requests logs."""
    return is_signal_enabled(descriptor, Signal.LOGS)


__all__ = [
    "ALL_SIGNALS",
    "Signal",
    "is_signal_enabled",
    "logging_enabled",
    "metrics_enabled",
    "tracing_enabled",
]
