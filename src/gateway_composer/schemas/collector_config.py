"""Collector configuration document schema.

CollectorConfig is the typed form of a vendor-neutral telemetry collector
configuration: component maps (receivers, processors, exporters,
extensions, connectors) plus ``service.pipelines``. It is the shared
mutable state of one composition run.

Invariants enforced here:
    - Exporter and pipeline names are unique. add_exporter() and
      add_pipeline() raise NameConflictError instead of overwriting.
    - Once sealed, the document rejects further additions.

Each addition is attributed to the destination that owns the current
application (see owned_by()), so conflicts name both parties.

Example:
    >>> config = CollectorConfig.model_validate({
    ...     "receivers": {"otlp": {"protocols": {"grpc": {}}}},
    ...     "processors": {"batch": {}},
    ... })
    >>> config.add_exporter("otlp/jaeger", {"endpoint": "jaeger:4317"})
    >>> config.add_pipeline(
    ...     "traces/jaeger",
    ...     Pipeline(receivers=["otlp"], processors=["batch"], exporters=["otlp/jaeger"]),
    ... )
    >>> sorted(config.pipelines)
    ['traces/jaeger']
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationInfo,
    field_validator,
)

from gateway_composer.errors import DocumentSealedError, NameConflictError
from gateway_composer.settings import DEFAULT_SHARED_PROCESSORS, DEFAULT_SHARED_RECEIVERS

EXPORTER = "exporter"
PIPELINE = "pipeline"
PROCESSOR = "processor"
EXTENSION = "extension"


class Pipeline(BaseModel):
    """One signal-scoped pipeline: receivers -> processors -> exporters.

    Attributes:
        receivers: Ordered receiver (or connector) names.
        processors: Ordered processor names.
        exporters: Ordered exporter (or connector) names.
    """

    model_config = ConfigDict(extra="forbid")

    receivers: list[str] = Field(default_factory=list)
    processors: list[str] = Field(default_factory=list)
    exporters: list[str] = Field(default_factory=list)


class ServiceConfig(BaseModel):
    """The ``service`` section: enabled extensions and pipelines."""

    model_config = ConfigDict(extra="allow")

    extensions: list[str] = Field(default_factory=list)
    pipelines: dict[str, Pipeline] = Field(default_factory=dict)

    @field_validator("extensions", "pipelines", mode="before")
    @classmethod
    def _allow_null_entries(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat ``pipelines:`` with no body as empty."""
        if value is None:
            return [] if info.field_name == "extensions" else {}
        return value


def _none_to_empty(value: Any) -> Any:
    return {} if value is None else value


class CollectorConfig(BaseModel):
    """Merged collector configuration document.

    Component settings are kept as loosely typed mappings because every
    exporter kind has its own schema; names and pipeline wiring are typed.

    Attributes:
        receivers: Receiver name -> settings.
        processors: Processor name -> settings.
        exporters: Exporter name -> settings.
        extensions: Extension name -> settings.
        connectors: Connector name -> settings.
        service: Extensions list and pipeline map.
    """

    model_config = ConfigDict(extra="allow")

    receivers: dict[str, Any] = Field(default_factory=dict)
    processors: dict[str, Any] = Field(default_factory=dict)
    exporters: dict[str, Any] = Field(default_factory=dict)
    extensions: dict[str, Any] = Field(default_factory=dict)
    connectors: dict[str, Any] = Field(default_factory=dict)
    service: ServiceConfig = Field(default_factory=ServiceConfig)

    # Owner of the application in progress: (destination_type, destination_id)
    _owner: tuple[str, str] | None = PrivateAttr(default=None)
    # (kind, name) -> owner identity for entries added during composition
    _provenance: dict[tuple[str, str], str] = PrivateAttr(default_factory=dict)
    _sealed: bool = PrivateAttr(default=False)
    _shared_receivers: tuple[str, ...] = PrivateAttr(default=DEFAULT_SHARED_RECEIVERS)
    _shared_processors: tuple[str, ...] = PrivateAttr(default=DEFAULT_SHARED_PROCESSORS)

    @field_validator(
        "receivers", "processors", "exporters", "extensions", "connectors", "service",
        mode="before",
    )
    @classmethod
    def _allow_null_sections(cls, value: Any) -> Any:
        """Treat ``exporters:`` with no body as an empty section."""
        return _none_to_empty(value)

    @property
    def pipelines(self) -> dict[str, Pipeline]:
        """Return the pipeline map (``service.pipelines``)."""
        return self.service.pipelines

    @property
    def sealed(self) -> bool:
        """Return True once composition has handed the document off."""
        return self._sealed

    @property
    def shared_receivers(self) -> list[str]:
        """Return the base receivers destination pipelines read from."""
        return list(self._shared_receivers)

    @property
    def shared_processors(self) -> list[str]:
        """Return the base processors destination pipelines run, in order."""
        return list(self._shared_processors)

    def use_shared_components(self, receivers: list[str], processors: list[str]) -> None:
        """Set the base components destination pipelines are wired through."""
        self._shared_receivers = tuple(receivers)
        self._shared_processors = tuple(processors)

    def seal(self) -> None:
        """Reject all further additions to this document."""
        self._sealed = True
        self._owner = None

    @contextmanager
    def owned_by(self, destination_type: str, destination_id: str) -> Iterator[None]:
        """Attribute additions made inside the block to one destination.

        Args:
            destination_type: Type tag of the destination being applied.
            destination_id: Identity of the destination being applied.
        """
        previous = self._owner
        self._owner = (destination_type, destination_id)
        try:
            yield
        finally:
            self._owner = previous

    def owner_of(self, kind: str, name: str) -> str | None:
        """Return the identity of the destination that added an entry.

        Returns:
            The destination identity, or None for base-configuration entries
            and unknown names.
        """
        return self._provenance.get((kind, name))

    def has_exporter(self, name: str) -> bool:
        return name in self.exporters

    def has_pipeline(self, name: str) -> bool:
        return name in self.service.pipelines

    def add_exporter(self, name: str, settings: dict[str, Any] | None = None) -> None:
        """Add an exporter entry.

        Args:
            name: Exporter name (``<kind>/<destination>``).
            settings: Exporter settings; None is stored as an empty mapping.

        Raises:
            DocumentSealedError: If the document is sealed.
            NameConflictError: If an exporter with this name exists.
        """
        self._check_insert(EXPORTER, name, name in self.exporters)
        self.exporters[name] = dict(settings or {})
        self._record(EXPORTER, name)

    def add_pipeline(self, name: str, pipeline: Pipeline) -> None:
        """Add a pipeline entry.

        Args:
            name: Pipeline name (``<signal>/<destination>``).
            pipeline: The pipeline wiring.

        Raises:
            DocumentSealedError: If the document is sealed.
            NameConflictError: If a pipeline with this name exists.
        """
        self._check_insert(PIPELINE, name, name in self.service.pipelines)
        self.service.pipelines[name] = pipeline
        self._record(PIPELINE, name)

    def add_processor(self, name: str, settings: dict[str, Any] | None = None) -> None:
        """Add a destination-scoped processor entry.

        Raises:
            DocumentSealedError: If the document is sealed.
            NameConflictError: If a processor with this name exists.
        """
        self._check_insert(PROCESSOR, name, name in self.processors)
        self.processors[name] = dict(settings or {})
        self._record(PROCESSOR, name)

    def add_extension(self, name: str, settings: dict[str, Any] | None = None) -> None:
        """Add an extension entry and enable it in ``service.extensions``.

        Raises:
            DocumentSealedError: If the document is sealed.
            NameConflictError: If an extension with this name exists.
        """
        self._check_insert(EXTENSION, name, name in self.extensions)
        self.extensions[name] = dict(settings or {})
        if name not in self.service.extensions:
            self.service.extensions.append(name)
        self._record(EXTENSION, name)

    def sections(self) -> dict[str, dict[str, Any]]:
        """Return the name-keyed sections a destination may add entries to.

        Returns:
            Mapping of entry kind to the live section mapping.
        """
        return {
            EXPORTER: self.exporters,
            PIPELINE: self.service.pipelines,
            PROCESSOR: self.processors,
            EXTENSION: self.extensions,
        }

    def _check_insert(self, kind: str, name: str, exists: bool) -> None:
        if self._sealed:
            raise DocumentSealedError(kind, name)
        if not exists:
            return
        owner = self.owner_of(kind, name)
        reason = (
            f"already defined by destination '{owner}'"
            if owner
            else "already defined in the base configuration"
        )
        destination_type, destination_id = self._owner or ("unknown", "unknown")
        raise NameConflictError(kind, name, destination_type, destination_id, reason=reason)

    def _record(self, kind: str, name: str) -> None:
        if self._owner is not None:
            self._provenance[(kind, name)] = self._owner[1]

    def clone(self) -> CollectorConfig:
        """Return an unsealed deep copy with no ownership history."""
        copy = self.model_copy(deep=True)
        copy._owner = None
        copy._provenance = {}
        copy._sealed = False
        return copy

    def reference_problems(self) -> list[str]:
        """List pipeline references to components the document lacks.

        Receivers may name receivers or connectors, exporters may name
        exporters or connectors, processors must name processors.

        Returns:
            One message per dangling reference, in pipeline order.
        """
        problems: list[str] = []
        sources = set(self.receivers) | set(self.connectors)
        sinks = set(self.exporters) | set(self.connectors)
        for pipeline_name, pipeline in self.service.pipelines.items():
            for receiver in pipeline.receivers:
                if receiver not in sources:
                    problems.append(f"{pipeline_name}: undefined receiver '{receiver}'")
            for processor in pipeline.processors:
                if processor not in self.processors:
                    problems.append(f"{pipeline_name}: undefined processor '{processor}'")
            for exporter in pipeline.exporters:
                if exporter not in sinks:
                    problems.append(f"{pipeline_name}: undefined exporter '{exporter}'")
            if not pipeline.exporters:
                problems.append(f"{pipeline_name}: pipeline has no exporters")
        return problems


__all__ = [
    "EXPORTER",
    "EXTENSION",
    "PIPELINE",
    "PROCESSOR",
    "CollectorConfig",
    "Pipeline",
    "ServiceConfig",
]
