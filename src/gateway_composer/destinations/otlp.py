"""Generic OTLP/gRPC destination configurer.

Sends any signal to an arbitrary OTLP/gRPC endpoint (another collector,
a vendor ingest endpoint, ...).

Descriptor data:
    OTLP_GRPC_ENDPOINT (required): ``host[:port]``, with or without scheme.
    OTLP_GRPC_TLS_ENABLED (optional): "true" to require TLS. Defaults to
        TLS only when the endpoint uses ``https://``.
    OTLP_GRPC_COMPRESSION (optional): Exporter compression (e.g. "gzip").

Descriptor secret data:
    OTLP_GRPC_AUTH_HEADER (optional): Sent as the ``authorization`` header.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.destinations.common import (
    grpc_endpoint_field,
    is_tls_endpoint,
    parse_bool,
)

if TYPE_CHECKING:
    from gateway_composer.schemas.collector_config import CollectorConfig
    from gateway_composer.schemas.destination import DestinationDescriptor

OTLP_GRPC_ENDPOINT = "OTLP_GRPC_ENDPOINT"
OTLP_GRPC_TLS_ENABLED = "OTLP_GRPC_TLS_ENABLED"
OTLP_GRPC_COMPRESSION = "OTLP_GRPC_COMPRESSION"
OTLP_GRPC_AUTH_HEADER = "OTLP_GRPC_AUTH_HEADER"


class OTLPConfigurer(DestinationConfigurer):
    """Wires traces, metrics and logs to a generic OTLP/gRPC endpoint."""

    @property
    def destination_type(self) -> str:
        return "otlp"

    @property
    def display_name(self) -> str:
        return "OTLP gRPC"

    def modify_config(
        self,
        descriptor: DestinationDescriptor,
        config: CollectorConfig,
    ) -> None:
        signals = self.enabled_signals(descriptor)
        if not signals:
            return

        endpoint = grpc_endpoint_field(descriptor, OTLP_GRPC_ENDPOINT)
        tls_enabled = parse_bool(
            descriptor.get(OTLP_GRPC_TLS_ENABLED),
            default=is_tls_endpoint(descriptor.require(OTLP_GRPC_ENDPOINT)),
        )

        settings: dict[str, Any] = {
            "endpoint": endpoint,
            "tls": {"insecure": not tls_enabled},
        }
        compression = descriptor.get(OTLP_GRPC_COMPRESSION)
        if compression:
            settings["compression"] = compression
        auth = descriptor.secret_ref(OTLP_GRPC_AUTH_HEADER)
        if auth is not None:
            settings["headers"] = {"authorization": auth.to_placeholder()}

        exporter = self.exporter_name("otlp")
        config.add_exporter(exporter, settings)
        self.add_signal_pipelines(config, exporter, signals)
