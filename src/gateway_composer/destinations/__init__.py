"""Built-in destination configurers.

Each configurer is advertised under the ``gateway_composer.destinations``
entry point group in this distribution's metadata, exactly like
third-party configurers, so load_registry() finds them through discovery.

BUILTIN_CONFIGURERS lists the classes for callers that build a registry
by hand (tests, embedded use without installed metadata).
"""

from __future__ import annotations

from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.destinations.datadog import DatadogConfigurer
from gateway_composer.destinations.honeycomb import HoneycombConfigurer
from gateway_composer.destinations.jaeger import JaegerConfigurer
from gateway_composer.destinations.loki import LokiConfigurer
from gateway_composer.destinations.otlp import OTLPConfigurer
from gateway_composer.destinations.otlphttp import OTLPHttpConfigurer
from gateway_composer.destinations.prometheus import PrometheusConfigurer

BUILTIN_CONFIGURERS: tuple[type[DestinationConfigurer], ...] = (
    DatadogConfigurer,
    HoneycombConfigurer,
    JaegerConfigurer,
    LokiConfigurer,
    OTLPConfigurer,
    OTLPHttpConfigurer,
    PrometheusConfigurer,
)


def builtin_configurers() -> list[DestinationConfigurer]:
    """Return fresh instances of every built-in configurer."""
    return [configurer_class() for configurer_class in BUILTIN_CONFIGURERS]


__all__ = [
    "BUILTIN_CONFIGURERS",
    "DatadogConfigurer",
    "HoneycombConfigurer",
    "JaegerConfigurer",
    "LokiConfigurer",
    "OTLPConfigurer",
    "OTLPHttpConfigurer",
    "PrometheusConfigurer",
    "builtin_configurers",
]
