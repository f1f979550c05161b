"""YAML loaders for composition inputs.

- collector YAML -> CollectorConfig (the base topology)
- destinations YAML -> list[DestinationDescriptor]
- settings YAML -> ComposerSettings

Each loader reads the file, parses it with ``yaml.safe_load`` and validates
it with pydantic. Malformed YAML and validation failures are reported as
LoadError naming the file and the first invalid field; a missing file
raises FileNotFoundError.

Example:
    >>> from pathlib import Path
    >>> descriptors = load_descriptors(Path("destinations.yaml"))
    >>> [d.type for d in descriptors]
    ['jaeger', 'loki']
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar

import structlog
import yaml
from pydantic import BaseModel, ValidationError

from gateway_composer.errors import LoadError
from gateway_composer.schemas.collector_config import CollectorConfig
from gateway_composer.schemas.destination import DestinationDescriptor
from gateway_composer.settings import ComposerSettings

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def default_base_config() -> CollectorConfig:
    """Return the default base topology.

    One ``otlp`` receiver listening on the standard gRPC and HTTP ports and
    one ``batch`` processor, matching the default ComposerSettings.
    """
    return CollectorConfig.model_validate(
        {
            "receivers": {
                "otlp": {
                    "protocols": {
                        "grpc": {"endpoint": "0.0.0.0:4317"},
                        "http": {"endpoint": "0.0.0.0:4318"},
                    }
                }
            },
            "processors": {"batch": {}},
        }
    )


def _load_yaml(path: Path) -> Any:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        LoadError: If the content is not UTF-8 or not valid YAML.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise LoadError(str(path), f"invalid encoding: {e}") from e
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise LoadError(str(path), f"invalid YAML: {e}") from e


def _validate(data: Any, model_class: type[T], path: Path, *, prefix: str = "") -> T:
    """Validate parsed data, reporting the first failing field."""
    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        if errors:
            first = errors[0]
            field_path = prefix + ".".join(str(loc) for loc in first.get("loc", []))
            message = str(first.get("msg", "Invalid value"))
        else:
            field_path = prefix.rstrip(".")
            message = "Validation failed"
        raise LoadError(
            str(path),
            f"{field_path}: {message}" if field_path else message,
            field=field_path or None,
        ) from e


def load_base_config(path: Path) -> CollectorConfig:
    """Load a collector configuration to compose onto.

    Args:
        path: Collector YAML file.

    Returns:
        The validated base configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        LoadError: If the file is not valid YAML or not a mapping.
    """
    data = _load_yaml(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise LoadError(str(path), "expected a mapping at the top level")
    config = _validate(data, CollectorConfig, path)
    logger.debug(
        "load.base_config",
        path=str(path),
        receivers=sorted(config.receivers),
        processors=sorted(config.processors),
    )
    return config


def load_descriptors(path: Path) -> list[DestinationDescriptor]:
    """Load destination descriptors.

    The file holds either a list of descriptors or a mapping with a
    ``destinations`` list.

    Args:
        path: Destinations YAML (or JSON) file.

    Returns:
        Descriptors in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        LoadError: If the file is malformed or a descriptor is invalid.
    """
    data = _load_yaml(path)
    if isinstance(data, dict):
        if "destinations" not in data:
            raise LoadError(
                str(path), "expected a list of destinations or a 'destinations' key"
            )
        data = data["destinations"]
    if data is None:
        data = []
    if not isinstance(data, list):
        raise LoadError(str(path), "expected a list of destinations")

    descriptors = [
        _validate(item, DestinationDescriptor, path, prefix=f"destinations.{index}.")
        for index, item in enumerate(data)
    ]
    logger.debug("load.descriptors", path=str(path), count=len(descriptors))
    return descriptors


def load_settings(path: Path) -> ComposerSettings:
    """Load composer settings.

    Raises:
        FileNotFoundError: If the file does not exist.
        LoadError: If the file is malformed or has unknown keys.
    """
    data = _load_yaml(path)
    return _validate(data or {}, ComposerSettings, path)


__all__ = [
    "default_base_config",
    "load_base_config",
    "load_descriptors",
    "load_settings",
]
