"""Generic OTLP/HTTP destination configurer.

Descriptor data:
    OTLP_HTTP_ENDPOINT (required): Base URL; ``https://`` is assumed when
        no scheme is given.
    OTLP_HTTP_BASIC_AUTH_USERNAME (optional): Enables HTTP basic auth.

Descriptor secret data:
    OTLP_HTTP_BASIC_AUTH_PASSWORD: Required when a username is set.

Basic auth is implemented with the collector's ``basicauth`` extension,
added as ``basicauth/otlphttp`` and referenced from the exporter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.destinations.common import http_endpoint_field

if TYPE_CHECKING:
    from gateway_composer.schemas.collector_config import CollectorConfig
    from gateway_composer.schemas.destination import DestinationDescriptor

OTLP_HTTP_ENDPOINT = "OTLP_HTTP_ENDPOINT"
OTLP_HTTP_BASIC_AUTH_USERNAME = "OTLP_HTTP_BASIC_AUTH_USERNAME"
OTLP_HTTP_BASIC_AUTH_PASSWORD = "OTLP_HTTP_BASIC_AUTH_PASSWORD"


class OTLPHttpConfigurer(DestinationConfigurer):
    """Wires traces, metrics and logs to a generic OTLP/HTTP endpoint."""

    @property
    def destination_type(self) -> str:
        return "otlphttp"

    @property
    def display_name(self) -> str:
        return "OTLP HTTP"

    def modify_config(
        self,
        descriptor: DestinationDescriptor,
        config: CollectorConfig,
    ) -> None:
        signals = self.enabled_signals(descriptor)
        if not signals:
            return

        settings: dict[str, Any] = {
            "endpoint": http_endpoint_field(descriptor, OTLP_HTTP_ENDPOINT),
        }

        # Resolve everything before the first mutation
        username = descriptor.get(OTLP_HTTP_BASIC_AUTH_USERNAME)
        password = (
            descriptor.require_secret(OTLP_HTTP_BASIC_AUTH_PASSWORD) if username else None
        )

        if username and password is not None:
            authenticator = f"basicauth/{self.destination_type}"
            config.add_extension(
                authenticator,
                {
                    "client_auth": {
                        "username": username,
                        "password": password.to_placeholder(),
                    }
                },
            )
            settings["auth"] = {"authenticator": authenticator}

        exporter = self.exporter_name("otlphttp")
        config.add_exporter(exporter, settings)
        self.add_signal_pipelines(config, exporter, signals)
