"""gateway-composer: compose telemetry destinations into one collector configuration.

This package provides:
- DestinationConfigurer: Base ABC, one implementation per destination type
- ConfigurerRegistry / load_registry: Destination type -> configurer bindings
- Composer: Applies every configured destination to a cloned base config
- CollectorConfig, Pipeline: Typed collector configuration document
- DestinationDescriptor, Signal: Inputs read from the external store
- Errors: ComposerError hierarchy (gateway_composer.errors)
- Loaders and emitter: YAML in, collector YAML out

Example:
    >>> from gateway_composer import Composer, load_registry
    >>> from gateway_composer.loader import default_base_config
    >>> composer = Composer(load_registry())
    >>> config = composer.compose(
    ...     default_base_config(),
    ...     [{"type": "jaeger", "enabledSignals": ["traces"],
    ...       "data": {"JAEGER_URL": "jaeger-collector:4317"}}],
    ... )
    >>> sorted(config.exporters)
    ['otlp/jaeger']

See Also:
    - gateway_composer.destinations: Built-in configurers
    - gateway_composer.telemetry: structlog and OpenTelemetry helpers
    - gateway_composer.cli: ``gateway-composer`` command
"""

from __future__ import annotations

__version__ = "0.1.0"

from gateway_composer.composer import Composer
from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.emitter import dump_yaml, to_collector_dict
from gateway_composer.errors import (
    BaseConfigError,
    ComposerError,
    ConfigurerLoadError,
    DestinationError,
    DocumentSealedError,
    InvalidFieldValueError,
    InvalidReferenceError,
    LoadError,
    MissingRequiredFieldError,
    NameConflictError,
    RegistrationConflictError,
    RegistrationError,
    RegistryFrozenError,
    SecretExposureError,
    UnknownDestinationTypeError,
)
from gateway_composer.registry import ENTRY_POINT_GROUP, ConfigurerRegistry, load_registry
from gateway_composer.schemas import (
    CollectorConfig,
    DestinationDescriptor,
    Pipeline,
    SecretReference,
)
from gateway_composer.settings import ComposerSettings
from gateway_composer.signals import (
    Signal,
    logging_enabled,
    metrics_enabled,
    tracing_enabled,
)

__all__ = [
    "__version__",
    # Composition
    "Composer",
    "ComposerSettings",
    "ConfigurerRegistry",
    "DestinationConfigurer",
    "ENTRY_POINT_GROUP",
    "load_registry",
    # Schemas
    "CollectorConfig",
    "DestinationDescriptor",
    "Pipeline",
    "SecretReference",
    "Signal",
    # Signal gate
    "logging_enabled",
    "metrics_enabled",
    "tracing_enabled",
    # Output
    "dump_yaml",
    "to_collector_dict",
    # Errors
    "BaseConfigError",
    "ComposerError",
    "ConfigurerLoadError",
    "DestinationError",
    "DocumentSealedError",
    "InvalidFieldValueError",
    "InvalidReferenceError",
    "LoadError",
    "MissingRequiredFieldError",
    "NameConflictError",
    "RegistrationConflictError",
    "RegistrationError",
    "RegistryFrozenError",
    "SecretExposureError",
    "UnknownDestinationTypeError",
]
