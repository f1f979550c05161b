"""Datadog destination configurer.

Uses the collector's ``datadog`` exporter.

Descriptor data:
    DATADOG_SITE (required): Datadog site, e.g. ``datadoghq.com`` or
        ``datadoghq.eu``.

Descriptor secret data:
    DATADOG_API_KEY (required): Datadog API key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gateway_composer.configurer import DestinationConfigurer

if TYPE_CHECKING:
    from gateway_composer.schemas.collector_config import CollectorConfig
    from gateway_composer.schemas.destination import DestinationDescriptor

DATADOG_SITE = "DATADOG_SITE"
DATADOG_API_KEY = "DATADOG_API_KEY"


class DatadogConfigurer(DestinationConfigurer):
    """Wires traces, metrics and logs to Datadog."""

    @property
    def destination_type(self) -> str:
        return "datadog"

    @property
    def display_name(self) -> str:
        return "Datadog"

    def modify_config(
        self,
        descriptor: DestinationDescriptor,
        config: CollectorConfig,
    ) -> None:
        signals = self.enabled_signals(descriptor)
        if not signals:
            return

        site = descriptor.require(DATADOG_SITE)
        api_key = descriptor.require_secret(DATADOG_API_KEY)

        exporter = self.exporter_name("datadog")
        config.add_exporter(
            exporter,
            {
                "api": {
                    "key": api_key.to_placeholder(),
                    "site": site,
                }
            },
        )
        self.add_signal_pipelines(config, exporter, signals)
