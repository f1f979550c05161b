"""Serialize a composed document into collector configuration format.

The output uses the collector's native layout::

    receivers: {...}
    processors: {...}
    exporters: {...}
    extensions: {...}     # only when non-empty
    connectors: {...}     # only when non-empty
    service:
      extensions: [...]   # only when non-empty
      pipelines: {...}

Secret values stay ``${ENV}`` placeholders; the collector expands them
from its environment at startup.
"""

from __future__ import annotations

from typing import Any

import yaml

from gateway_composer.schemas.collector_config import CollectorConfig

_SECTION_ORDER = ("receivers", "processors", "exporters", "extensions", "connectors")
_OPTIONAL_SECTIONS = frozenset({"extensions", "connectors"})


def to_collector_dict(config: CollectorConfig) -> dict[str, Any]:
    """Convert a document to plain collector configuration data.

    Args:
        config: The composed document.

    Returns:
        A JSON-compatible mapping in collector section order. Unknown
        top-level sections from the base configuration are kept.
    """
    dumped = config.model_dump(mode="json")
    result: dict[str, Any] = {}

    for section in _SECTION_ORDER:
        value = dumped.pop(section)
        if value or section not in _OPTIONAL_SECTIONS:
            result[section] = value

    service = dumped.pop("service")
    if not service.get("extensions"):
        service.pop("extensions", None)
    result.update(dumped)
    result["service"] = service
    return result


def dump_yaml(config: CollectorConfig) -> str:
    """Render a document as collector YAML.

    Example:
        >>> print(dump_yaml(config))
        receivers:
          otlp: ...
    """
    return yaml.safe_dump(to_collector_dict(config), sort_keys=False, default_flow_style=False)


__all__ = ["dump_yaml", "to_collector_dict"]
