"""Configurer registry for destination types.

The registry binds each destination type to exactly one
DestinationConfigurer. It is built once at initialization, from entry
points and/or manual registration, then frozen. A frozen registry is
read-only and safe to share between concurrent composition runs without
locking.

There is no module-level registry: build one with load_registry() (or
ConfigurerRegistry() + register()) and pass it to the Composer.

Configurers are advertised by installed packages under the entry point
group ``gateway_composer.destinations``::

    [project.entry-points."gateway_composer.destinations"]
    mydest = "my_package.configurer:MyDestConfigurer"

Example:
    >>> from gateway_composer.registry import load_registry
    >>> registry = load_registry()
    >>> registry.resolve("jaeger").display_name
    'Jaeger'
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from importlib.metadata import EntryPoint, entry_points

import structlog

from gateway_composer.configurer import DestinationConfigurer
from gateway_composer.errors import (
    ConfigurerLoadError,
    RegistrationConflictError,
    RegistryFrozenError,
    UnknownDestinationTypeError,
)

logger = structlog.get_logger(__name__)

ENTRY_POINT_GROUP = "gateway_composer.destinations"


class ConfigurerRegistry:
    """Ordered mapping of destination type -> configurer.

    Attributes:
        _configurers: Registered configurers keyed by destination type,
            in registration order.
        _frozen: Set by freeze(); rejects further registration.

    Example:
        >>> registry = ConfigurerRegistry()
        >>> registry.register(JaegerConfigurer())
        >>> registry.freeze()
        >>> "jaeger" in registry
        True
    """

    def __init__(self, configurers: Iterable[DestinationConfigurer] = ()) -> None:
        """Initialize a registry, registering the given configurers in order.

        Args:
            configurers: Configurers to register immediately.

        Raises:
            RegistrationConflictError: If two configurers share a type.
        """
        self._configurers: dict[str, DestinationConfigurer] = {}
        self._frozen: bool = False
        for configurer in configurers:
            self.register(configurer)

    def register(self, configurer: DestinationConfigurer) -> None:
        """Bind a configurer to its destination type.

        Args:
            configurer: The configurer instance.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
            RegistrationConflictError: If the type is already bound.
            TypeError: If the object is not a DestinationConfigurer.
        """
        if not isinstance(configurer, DestinationConfigurer):
            raise TypeError(
                f"Expected a DestinationConfigurer, got {type(configurer).__name__}"
            )

        destination_type = configurer.destination_type

        if self._frozen:
            raise RegistryFrozenError(destination_type)

        existing = self._configurers.get(destination_type)
        if existing is not None:
            logger.warning(
                "register.duplicate",
                destination_type=destination_type,
                existing=type(existing).__name__,
                rejected=type(configurer).__name__,
            )
            raise RegistrationConflictError(
                destination_type,
                type(existing).__name__,
                type(configurer).__name__,
            )

        self._configurers[destination_type] = configurer
        logger.debug(
            "register.success",
            destination_type=destination_type,
            configurer=type(configurer).__name__,
            version=configurer.version,
        )

    def resolve(
        self, destination_type: str, destination_id: str | None = None
    ) -> DestinationConfigurer:
        """Return the configurer bound to a destination type.

        Args:
            destination_type: The destination type tag.
            destination_id: Identity of the destination being resolved,
                reported in the error if resolution fails.

        Returns:
            The bound configurer.

        Raises:
            UnknownDestinationTypeError: If no configurer is bound.
        """
        configurer = self._configurers.get(destination_type)
        if configurer is None:
            logger.debug(
                "resolve.not_found",
                destination_type=destination_type,
                destination_id=destination_id,
            )
            raise UnknownDestinationTypeError(destination_type, destination_id)
        return configurer

    def discover(self, group: str = ENTRY_POINT_GROUP) -> int:
        """Load and register every configurer advertised under an entry point group.

        Unlike best-effort plugin discovery, any failure is fatal: a broken
        entry point or a duplicate type must stop initialization rather than
        silently drop a destination.

        Args:
            group: Entry point group to scan.

        Returns:
            Number of configurers registered.

        Raises:
            ConfigurerLoadError: If an entry point fails to load or instantiate.
            RegistrationConflictError: If a discovered type is already bound.
            RegistryFrozenError: If the registry has been frozen.
        """
        logger.info("discover.started", group=group)
        count = 0
        # Sorted by name so registration order does not depend on install order
        for ep in sorted(entry_points(group=group), key=lambda e: e.name):
            configurer = self._load_entry_point(ep)
            self.register(configurer)
            count += 1
        logger.info("discover.completed", group=group, registered=count)
        return count

    def _load_entry_point(self, ep: EntryPoint) -> DestinationConfigurer:
        try:
            target = ep.load()
            configurer = target() if isinstance(target, type) else target
        except Exception as e:
            logger.error("discover.load_failed", name=ep.name, value=ep.value, error=str(e))
            raise ConfigurerLoadError(ep.name, ep.value, e) from e

        if not isinstance(configurer, DestinationConfigurer):
            raise ConfigurerLoadError(
                ep.name,
                ep.value,
                TypeError(f"{type(configurer).__name__} is not a DestinationConfigurer"),
            )
        if configurer.destination_type != ep.name:
            logger.warning(
                "discover.name_mismatch",
                entry_point=ep.name,
                destination_type=configurer.destination_type,
            )
        return configurer

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True
        logger.debug("registry.frozen", destination_types=self.types())

    @property
    def frozen(self) -> bool:
        return self._frozen

    def types(self) -> list[str]:
        """Return registered destination types in registration order."""
        return list(self._configurers)

    def __contains__(self, destination_type: object) -> bool:
        return destination_type in self._configurers

    def __iter__(self) -> Iterator[DestinationConfigurer]:
        return iter(self._configurers.values())

    def __len__(self) -> int:
        return len(self._configurers)

    def __repr__(self) -> str:
        return f"ConfigurerRegistry(types={self.types()!r}, frozen={self._frozen})"


def load_registry(
    extra: Iterable[DestinationConfigurer] = (),
    *,
    group: str = ENTRY_POINT_GROUP,
) -> ConfigurerRegistry:
    """Build a frozen registry from entry points plus extra configurers.

    Args:
        extra: Configurers to register after discovery (e.g. in-process
            vendors that are not packaged).
        group: Entry point group to scan.

    Returns:
        A frozen ConfigurerRegistry.

    Raises:
        RegistrationError: If discovery or registration fails.
    """
    registry = ConfigurerRegistry()
    registry.discover(group)
    for configurer in extra:
        registry.register(configurer)
    registry.freeze()
    return registry


__all__ = [
    "ENTRY_POINT_GROUP",
    "ConfigurerRegistry",
    "load_registry",
]
