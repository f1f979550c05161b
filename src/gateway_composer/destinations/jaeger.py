"""Jaeger destination configurer.

Jaeger accepts OTLP natively, so traces are sent with the collector's
``otlp`` exporter to the Jaeger collector's gRPC port.

Descriptor data:
    JAEGER_URL (required): Jaeger collector endpoint, e.g.
        ``jaeger-collector.tracing:4317``. ``https://`` enables TLS;
        anything else is sent in plaintext.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.destinations.common import grpc_endpoint_field, is_tls_endpoint
from gateway_composer.signals import Signal

if TYPE_CHECKING:
    from gateway_composer.schemas.collector_config import CollectorConfig
    from gateway_composer.schemas.destination import DestinationDescriptor

JAEGER_URL = "JAEGER_URL"


class JaegerConfigurer(DestinationConfigurer):
    """Wires traces to a Jaeger collector over OTLP/gRPC.

    Example:
        >>> configurer = JaegerConfigurer()
        >>> configurer.exporter_name("otlp")
        'otlp/jaeger'
    """

    @property
    def destination_type(self) -> str:
        return "jaeger"

    @property
    def display_name(self) -> str:
        return "Jaeger"

    @property
    def supported_signals(self) -> frozenset[Signal]:
        return frozenset({Signal.TRACES})

    def modify_config(
        self,
        descriptor: DestinationDescriptor,
        config: CollectorConfig,
    ) -> None:
        signals = self.enabled_signals(descriptor)
        if not signals:
            return

        endpoint = grpc_endpoint_field(descriptor, JAEGER_URL)
        exporter = self.exporter_name("otlp")
        config.add_exporter(
            exporter,
            {
                "endpoint": endpoint,
                "tls": {"insecure": not is_tls_endpoint(descriptor.require(JAEGER_URL))},
            },
        )
        self.add_signal_pipelines(config, exporter, signals)
