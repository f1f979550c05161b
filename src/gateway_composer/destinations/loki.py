"""Grafana Loki destination configurer.

Logs are pushed with the collector's ``loki`` exporter. Loki indexes by
labels; the exporter promotes the resource attributes named in the
``loki.resource.labels`` hint, which a destination-scoped ``resource``
processor inserts on every log record sent to this destination.

Descriptor data:
    LOKI_URL (required): Loki base URL or push URL. The push path
        ``/loki/api/v1/push`` is appended when missing.
    LOKI_LABELS (optional): Comma-separated resource attributes to promote
        to labels. Defaults to the Kubernetes namespace, pod and container.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.destinations.common import http_endpoint_field, split_csv
from gateway_composer.signals import Signal

if TYPE_CHECKING:
    from gateway_composer.schemas.collector_config import CollectorConfig
    from gateway_composer.schemas.destination import DestinationDescriptor

LOKI_URL = "LOKI_URL"
LOKI_LABELS = "LOKI_LABELS"

LOKI_PUSH_PATH = "/loki/api/v1/push"
DEFAULT_LOKI_LABELS = ("k8s.namespace.name", "k8s.pod.name", "k8s.container.name")


class LokiConfigurer(DestinationConfigurer):
    """Wires logs to Grafana Loki."""

    @property
    def destination_type(self) -> str:
        return "loki"

    @property
    def display_name(self) -> str:
        return "Loki"

    @property
    def supported_signals(self) -> frozenset[Signal]:
        return frozenset({Signal.LOGS})

    def modify_config(
        self,
        descriptor: DestinationDescriptor,
        config: CollectorConfig,
    ) -> None:
        signals = self.enabled_signals(descriptor)
        if not signals:
            return

        endpoint = http_endpoint_field(descriptor, LOKI_URL, path=LOKI_PUSH_PATH)
        labels = split_csv(descriptor.get(LOKI_LABELS)) or list(DEFAULT_LOKI_LABELS)

        processor = f"resource/{self.destination_type}"
        config.add_processor(
            processor,
            {
                "attributes": [
                    {
                        "action": "insert",
                        "key": "loki.resource.labels",
                        "value": ", ".join(labels),
                    }
                ]
            },
        )

        exporter = self.exporter_name("loki")
        config.add_exporter(exporter, {"endpoint": endpoint})
        self.add_signal_pipelines(config, exporter, signals, extra_processors=[processor])
