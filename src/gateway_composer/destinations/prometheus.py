"""Prometheus remote-write destination configurer.

Metrics are pushed with the collector's ``prometheusremotewrite`` exporter
to any remote-write compatible backend (Prometheus, Mimir, Thanos, ...).

Descriptor data:
    PROMETHEUS_REMOTEWRITE_URL (required): Server URL. The write path
        ``/api/v1/write`` is appended when missing.
    PROMETHEUS_RESOURCE_ATTRIBUTES_AS_LABELS (optional): "false" to stop
        converting resource attributes to metric labels (default: "true").
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.destinations.common import http_endpoint_field, parse_bool
from gateway_composer.signals import Signal

if TYPE_CHECKING:
    from gateway_composer.schemas.collector_config import CollectorConfig
    from gateway_composer.schemas.destination import DestinationDescriptor

PROMETHEUS_REMOTEWRITE_URL = "PROMETHEUS_REMOTEWRITE_URL"
PROMETHEUS_RESOURCE_ATTRIBUTES_AS_LABELS = "PROMETHEUS_RESOURCE_ATTRIBUTES_AS_LABELS"

REMOTE_WRITE_PATH = "/api/v1/write"


class PrometheusConfigurer(DestinationConfigurer):
    """Wires metrics to a Prometheus remote-write endpoint."""

    @property
    def destination_type(self) -> str:
        return "prometheus"

    @property
    def display_name(self) -> str:
        return "Prometheus"

    @property
    def supported_signals(self) -> frozenset[Signal]:
        return frozenset({Signal.METRICS})

    def modify_config(
        self,
        descriptor: DestinationDescriptor,
        config: CollectorConfig,
    ) -> None:
        signals = self.enabled_signals(descriptor)
        if not signals:
            return

        endpoint = http_endpoint_field(
            descriptor,
            PROMETHEUS_REMOTEWRITE_URL,
            path=REMOTE_WRITE_PATH,
            default_scheme="http",
        )
        convert = parse_bool(descriptor.get(PROMETHEUS_RESOURCE_ATTRIBUTES_AS_LABELS), default=True)

        exporter = self.exporter_name("prometheusremotewrite")
        config.add_exporter(
            exporter,
            {
                "endpoint": endpoint,
                "resource_to_telemetry_conversion": {"enabled": convert},
            },
        )
        self.add_signal_pipelines(config, exporter, signals)
