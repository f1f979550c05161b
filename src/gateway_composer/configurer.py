"""DestinationConfigurer ABC for destination-specific configuration mutators.

A configurer is the unit of vendor logic: given one destination descriptor
and the shared collector configuration document, it adds that
destination's exporter and signal pipelines. There is exactly one
configurer per destination type.

Contract for modify_config():
    - For each signal the vendor supports AND the user enabled, add exactly
      one exporter (``<exporterKind>/<destinationType>``) and exactly one
      pipeline (``<signal>/<destinationType>``) whose exporters include it.
    - Pipelines read from the shared base receivers and run the shared base
      processors; they never define their own copies.
    - If no signal is enabled, add nothing.
    - Never remove or alter entries the configurer did not add.
    - Reference secrets through SecretReference placeholders only.
    - Not idempotent: applying the same descriptor twice conflicts.

Example:
    >>> class MyDestConfigurer(DestinationConfigurer):
    ...     @property
    ...     def destination_type(self) -> str:
    ...         return "mydest"
    ...
    ...     def modify_config(self, descriptor, config) -> None:
    ...         signals = self.enabled_signals(descriptor)
    ...         if not signals:
    ...             return
    ...         exporter = self.exporter_name("otlp")
    ...         config.add_exporter(exporter, {"endpoint": "https://mydest.com:4317"})
    ...         self.add_signal_pipelines(config, exporter, signals)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from gateway_composer.schemas.collector_config import Pipeline
from gateway_composer.signals import ALL_SIGNALS, Signal, is_signal_enabled

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from gateway_composer.schemas.collector_config import CollectorConfig
    from gateway_composer.schemas.destination import DestinationDescriptor


class DestinationConfigurer(ABC):
    """Abstract base class for destination configurers.

    Abstract members (MUST implement):
        - destination_type: The destination type tag this configurer handles.
        - modify_config(): Add this destination's wiring to the document.

    Optional members (with defaults):
        - supported_signals: Signals the vendor accepts (default: all).
        - display_name: Human-readable vendor name (default: the type).
        - version: Configurer version (default: "1.0.0").

    Shared helpers:
        - enabled_signals(): Signals to wire (requested AND supported).
        - exporter_name() / pipeline_name(): Naming convention.
        - add_signal_pipelines(): One pipeline per signal via shared components.

    See Also:
        - ConfigurerRegistry: Binds destination types to configurers
        - Composer: Applies configurers to a cloned base configuration
    """

    @property
    @abstractmethod
    def destination_type(self) -> str:
        """Destination type tag handled by this configurer (e.g. 'jaeger').

        Must match the type stored on destination descriptors.

        Returns:
            The destination type tag.
        """
        ...

    @property
    def supported_signals(self) -> frozenset[Signal]:
        """Signals the vendor accepts.

        Signals outside this set are never wired, even if a descriptor
        requests them.

        Returns:
            Supported signals (default: traces, metrics and logs).
        """
        return ALL_SIGNALS

    @property
    def display_name(self) -> str:
        """Human-readable vendor name (default: the destination type)."""
        return self.destination_type

    @property
    def version(self) -> str:
        """Configurer version in semver format."""
        return "1.0.0"

    @abstractmethod
    def modify_config(
        self,
        descriptor: DestinationDescriptor,
        config: CollectorConfig,
    ) -> None:
        """Add this destination's exporters and pipelines to the document.

        Args:
            descriptor: The destination to wire.
            config: The shared document, mutated in place.

        Raises:
            MissingRequiredFieldError: If the descriptor lacks required data.
            NameConflictError: If an added name already exists.
        """
        ...

    def enabled_signals(self, descriptor: DestinationDescriptor) -> list[Signal]:
        """Return signals both requested by the user and supported by the vendor.

        Args:
            descriptor: The destination descriptor.

        Returns:
            Signals in Signal declaration order (traces, metrics, logs).
        """
        return [
            signal
            for signal in Signal
            if signal in self.supported_signals and is_signal_enabled(descriptor, signal)
        ]

    def exporter_name(self, exporter_kind: str) -> str:
        """Return ``<exporterKind>/<destinationType>``."""
        return f"{exporter_kind}/{self.destination_type}"

    def pipeline_name(self, signal: Signal) -> str:
        """Return ``<signal>/<destinationType>``."""
        return f"{signal.pipeline_prefix}/{self.destination_type}"

    def add_signal_pipelines(
        self,
        config: CollectorConfig,
        exporter_name: str,
        signals: Iterable[Signal],
        *,
        extra_processors: Sequence[str] = (),
    ) -> list[str]:
        """Add one pipeline per signal, exporting to ``exporter_name``.

        Pipelines use the document's shared receivers and processors.

        Args:
            config: The shared document.
            exporter_name: Exporter every pipeline sends to.
            signals: Signals to add pipelines for.
            extra_processors: Destination-scoped processors run after the
                shared ones (the configurer must have added them).

        Returns:
            Names of the pipelines added.
        """
        added: list[str] = []
        for signal in signals:
            name = self.pipeline_name(signal)
            config.add_pipeline(
                name,
                Pipeline(
                    receivers=config.shared_receivers,
                    processors=[*config.shared_processors, *extra_processors],
                    exporters=[exporter_name],
                ),
            )
            added.append(name)
        return added

    def __repr__(self) -> str:
        return f"{type(self).__name__}(destination_type={self.destination_type!r})"


__all__ = ["DestinationConfigurer"]
