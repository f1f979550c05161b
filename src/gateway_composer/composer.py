"""Composition driver: merge destinations into one collector configuration.

compose() runs a single synchronous pass over the descriptors:

1. Check that the base configuration defines the shared receivers and
   processors destination pipelines are wired through.
2. Clone the base. The caller's base is never mutated, so repeated runs
   are independent and reproducible.
3. For each descriptor, in order: resolve its configurer, apply it to the
   clone, then verify the application only added entries (no existing
   exporter, pipeline, processor or extension removed or altered) and
   inlined no raw secret value.
4. Check that every pipeline references defined components.
5. Seal the clone and return it.

Composition is all-or-nothing: any error aborts the run and the caller
only ever sees the exception, never a partially applied document.

Example:
    >>> from gateway_composer.composer import Composer
    >>> from gateway_composer.registry import load_registry
    >>> composer = Composer(load_registry())
    >>> config = composer.compose(base, [{"type": "jaeger", "enabledSignals": ["traces"],
    ...                                   "data": {"JAEGER_URL": "jaeger:4317"}}])
    >>> sorted(config.pipelines)
    ['traces/jaeger']
"""

from __future__ import annotations

import copy
import re
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from gateway_composer.errors import (
    BaseConfigError,
    InvalidReferenceError,
    NameConflictError,
    SecretExposureError,
)
from gateway_composer.registry import ConfigurerRegistry
from gateway_composer.schemas.collector_config import CollectorConfig
from gateway_composer.schemas.destination import DestinationDescriptor
from gateway_composer.settings import ComposerSettings
from gateway_composer.telemetry.tracing import create_span

logger = structlog.get_logger(__name__)

# kind -> name -> deep copy of the entry settings
_Snapshot = dict[str, dict[str, Any]]

_PLACEHOLDER_PATTERN = re.compile(r"\$\{[^}]*\}")


class Composer:
    """Applies destination configurers to a base collector configuration.

    The composer holds no per-run state; concurrent compose() calls each
    work on their own clone of the base.

    Attributes:
        registry: Frozen registry used to resolve destination types.
        settings: Shared component names and verification switches.
    """

    def __init__(
        self,
        registry: ConfigurerRegistry,
        settings: ComposerSettings | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or ComposerSettings()

    def compose(
        self,
        base_config: CollectorConfig | Mapping[str, Any],
        descriptors: Iterable[DestinationDescriptor | Mapping[str, Any]],
    ) -> CollectorConfig:
        """Compose a sealed collector configuration.

        Args:
            base_config: Base topology; a CollectorConfig or a plain mapping
                in collector format. Never mutated.
            descriptors: Destinations to apply, in order. Mappings are
                validated into DestinationDescriptor.

        Returns:
            The merged, sealed configuration document.

        Raises:
            BaseConfigError: Base lacks a shared receiver or processor.
            UnknownDestinationTypeError: A descriptor has no configurer.
            NameConflictError: A configurer reused a name or changed an
                entry it did not add.
            MissingRequiredFieldError: A configurer found required data missing.
            InvalidFieldValueError: A configurer found malformed data.
            SecretExposureError: A configurer inlined a raw secret value.
            InvalidReferenceError: A pipeline references an undefined component.
        """
        base = (
            base_config
            if isinstance(base_config, CollectorConfig)
            else CollectorConfig.model_validate(dict(base_config))
        )
        resolved = [
            d if isinstance(d, DestinationDescriptor) else DestinationDescriptor.model_validate(d)
            for d in descriptors
        ]

        log = logger.bind(destinations=len(resolved))
        log.info("compose.started")

        with create_span(
            "gateway_composer.compose",
            attributes={"compose.destinations": len(resolved)},
        ) as span:
            self._check_base(base)

            config = base.clone()
            config.use_shared_components(
                list(self.settings.shared_receivers),
                list(self.settings.shared_processors),
            )

            for descriptor in resolved:
                self._apply(config, descriptor)

            if self.settings.validate_references:
                problems = config.reference_problems()
                if problems:
                    raise InvalidReferenceError(problems)

            config.seal()
            span.set_attribute("compose.exporters", len(config.exporters))
            span.set_attribute("compose.pipelines", len(config.pipelines))

        log.info(
            "compose.completed",
            exporters=len(config.exporters),
            pipelines=len(config.pipelines),
        )
        return config

    def _check_base(self, base: CollectorConfig) -> None:
        missing = [
            f"receiver '{name}'"
            for name in self.settings.shared_receivers
            if name not in base.receivers
        ]
        missing.extend(
            f"processor '{name}'"
            for name in self.settings.shared_processors
            if name not in base.processors
        )
        if missing:
            raise BaseConfigError(missing)

    def _apply(self, config: CollectorConfig, descriptor: DestinationDescriptor) -> None:
        """Apply one descriptor to the document and verify the result."""
        destination_type = descriptor.type
        destination_id = descriptor.identity
        log = logger.bind(destination_type=destination_type, destination_id=destination_id)

        with create_span(
            "gateway_composer.apply_destination",
            attributes={
                "destination.type": destination_type,
                "destination.id": destination_id,
            },
        ):
            configurer = self.registry.resolve(destination_type, destination_id)
            before = _snapshot(config)

            with config.owned_by(destination_type, destination_id):
                configurer.modify_config(descriptor, config)

            added = _verify_unchanged(config, before, destination_type, destination_id)
            if self.settings.detect_secret_exposure:
                _check_secrets(config, added, descriptor, self.settings.secret_min_length)

        log.debug(
            "compose.destination_applied",
            added=sorted(f"{kind}:{name}" for kind, name in added),
        )


def _snapshot(config: CollectorConfig) -> _Snapshot:
    return {
        kind: {name: copy.deepcopy(entry) for name, entry in section.items()}
        for kind, section in config.sections().items()
    }


def _verify_unchanged(
    config: CollectorConfig,
    before: _Snapshot,
    destination_type: str,
    destination_id: str,
) -> list[tuple[str, str]]:
    """Check that pre-existing entries survived untouched.

    Returns:
        (kind, name) of every entry the application added.

    Raises:
        NameConflictError: If an existing entry was removed or altered.
    """
    added: list[tuple[str, str]] = []
    for kind, section in config.sections().items():
        previous = before[kind]
        for name, entry in previous.items():
            if name not in section:
                raise NameConflictError(
                    kind, name, destination_type, destination_id,
                    reason="removed an entry it did not add",
                )
            if section[name] != entry:
                raise NameConflictError(
                    kind, name, destination_type, destination_id,
                    reason="altered an entry it did not add",
                )
        added.extend((kind, name) for name in section if name not in previous)
    return added


def _string_leaves(value: Any) -> Iterable[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, Mapping):
        for item in value.values():
            yield from _string_leaves(item)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            yield from _string_leaves(item)
    elif hasattr(value, "model_dump"):
        yield from _string_leaves(value.model_dump())


def _check_secrets(
    config: CollectorConfig,
    added: list[tuple[str, str]],
    descriptor: DestinationDescriptor,
    min_length: int,
) -> None:
    secrets = {
        key: value
        for key, value in descriptor.secret_data.items()
        if len(value) >= min_length
    }
    if not secrets:
        return
    sections = config.sections()
    for kind, name in added:
        for leaf in _string_leaves(sections[kind][name]):
            # ${NAME} placeholders are the sanctioned form and never a leak
            text = _PLACEHOLDER_PATTERN.sub("", leaf)
            for key, value in secrets.items():
                if value in text:
                    raise SecretExposureError(
                        key, f"{kind} '{name}'", descriptor.type, descriptor.identity
                    )


__all__ = ["Composer"]
