"""Pydantic schemas for gateway-composer inputs and outputs.

- DestinationDescriptor: one configured destination from the external store
- CollectorConfig / Pipeline: the collector configuration document
- SecretReference: placeholder for a secret value
"""

from __future__ import annotations

from gateway_composer.schemas.collector_config import CollectorConfig, Pipeline, ServiceConfig
from gateway_composer.schemas.destination import DestinationDescriptor, DestinationType
from gateway_composer.schemas.secrets import SecretReference

__all__ = [
    "CollectorConfig",
    "DestinationDescriptor",
    "DestinationType",
    "Pipeline",
    "SecretReference",
    "ServiceConfig",
]
