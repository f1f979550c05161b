"""Honeycomb destination configurer.

Honeycomb ingests OTLP/gRPC; the API key travels in the
``x-honeycomb-team`` header.

Descriptor data:
    HONEYCOMB_ENDPOINT (optional): Defaults to ``api.honeycomb.io:443``
        (use ``api.eu1.honeycomb.io:443`` for EU accounts).
    HONEYCOMB_DATASET (optional): Dataset for metrics
        (``x-honeycomb-dataset`` header).

Descriptor secret data:
    HONEYCOMB_API_KEY (required): Ingest key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.destinations.common import grpc_endpoint_field
from gateway_composer.signals import Signal

if TYPE_CHECKING:
    from gateway_composer.schemas.collector_config import CollectorConfig
    from gateway_composer.schemas.destination import DestinationDescriptor

HONEYCOMB_ENDPOINT = "HONEYCOMB_ENDPOINT"
HONEYCOMB_DATASET = "HONEYCOMB_DATASET"
HONEYCOMB_API_KEY = "HONEYCOMB_API_KEY"

DEFAULT_HONEYCOMB_ENDPOINT = "api.honeycomb.io:443"


class HoneycombConfigurer(DestinationConfigurer):
    """Wires traces, metrics and logs to Honeycomb."""

    @property
    def destination_type(self) -> str:
        return "honeycomb"

    @property
    def display_name(self) -> str:
        return "Honeycomb"

    def modify_config(
        self,
        descriptor: DestinationDescriptor,
        config: CollectorConfig,
    ) -> None:
        signals = self.enabled_signals(descriptor)
        if not signals:
            return

        api_key = descriptor.require_secret(HONEYCOMB_API_KEY)
        headers: dict[str, str] = {"x-honeycomb-team": api_key.to_placeholder()}
        dataset = descriptor.get(HONEYCOMB_DATASET)
        if dataset and Signal.METRICS in signals:
            headers["x-honeycomb-dataset"] = dataset

        settings: dict[str, Any] = {
            "endpoint": grpc_endpoint_field(
                descriptor, HONEYCOMB_ENDPOINT, default=DEFAULT_HONEYCOMB_ENDPOINT
            ),
            "headers": headers,
        }

        exporter = self.exporter_name("otlp")
        config.add_exporter(exporter, settings)
        self.add_signal_pipelines(config, exporter, signals)
