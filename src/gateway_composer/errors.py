"""Exception hierarchy for gateway-composer.

All exceptions inherit from ComposerError, so callers can catch every
composition failure with a single except clause.

Exception Hierarchy:
    ComposerError (base)
    ├── RegistrationError
    │   ├── RegistrationConflictError  # Two configurers claim one type
    │   ├── RegistryFrozenError        # register() after initialization
    │   └── ConfigurerLoadError        # Entry point failed to load
    ├── DestinationError               # Failure tied to one destination
    │   ├── UnknownDestinationTypeError
    │   ├── NameConflictError
    │   ├── MissingRequiredFieldError
    │   ├── InvalidFieldValueError
    │   └── SecretExposureError
    ├── DocumentSealedError            # Mutation of a composed document
    ├── BaseConfigError                # Base topology lacks shared components
    ├── InvalidReferenceError          # Pipeline references undefined component
    └── LoadError                      # Input file could not be loaded

Example:
    >>> from gateway_composer.errors import UnknownDestinationTypeError
    >>> raise UnknownDestinationTypeError("mydest", destination_id="prod-traces")
    Traceback (most recent call last):
        ...
    UnknownDestinationTypeError: No configurer registered for destination type 'mydest' (destination 'prod-traces')
"""

from __future__ import annotations

from typing import Any


class ComposerError(Exception):
    """Base exception for all gateway-composer errors."""


# =============================================================================
# Registration errors (raised at initialization)
# =============================================================================


class RegistrationError(ComposerError):
    """Base exception for configurer registry failures."""


class RegistrationConflictError(RegistrationError):
    """Raised when two configurers claim the same destination type.

    This is a startup error: the registry refuses the second binding and
    the composition engine must not start.

    Attributes:
        destination_type: The contested destination type.
        existing: Class name of the configurer already bound.
        rejected: Class name of the configurer that was refused.

    Example:
        >>> raise RegistrationConflictError("jaeger", "JaegerConfigurer", "OtherJaeger")
        Traceback (most recent call last):
            ...
        RegistrationConflictError: Destination type 'jaeger' is already bound to JaegerConfigurer; refusing OtherJaeger
    """

    def __init__(self, destination_type: str, existing: str, rejected: str) -> None:
        """Initialize RegistrationConflictError.

        Args:
            destination_type: The contested destination type.
            existing: Class name of the configurer already bound.
            rejected: Class name of the configurer that was refused.
        """
        self.destination_type = destination_type
        self.existing = existing
        self.rejected = rejected
        super().__init__(
            f"Destination type '{destination_type}' is already bound to {existing}; "
            f"refusing {rejected}"
        )


class RegistryFrozenError(RegistrationError):
    """Raised when registering into a registry that has been frozen."""

    def __init__(self, destination_type: str) -> None:
        self.destination_type = destination_type
        super().__init__(
            f"Cannot register destination type '{destination_type}': registry is frozen"
        )


class ConfigurerLoadError(RegistrationError):
    """Raised when a configurer advertised via entry point cannot be loaded.

    Attributes:
        entry_point: The entry point name.
        value: The entry point target (``module:attr``).
        cause: The original exception.
    """

    def __init__(self, entry_point: str, value: str, cause: Exception) -> None:
        self.entry_point = entry_point
        self.value = value
        self.cause = cause
        super().__init__(f"Failed to load configurer '{entry_point}' ({value}): {cause}")


# =============================================================================
# Destination errors (raised during a composition run)
# =============================================================================


class DestinationError(ComposerError):
    """Base exception for failures attributable to a single destination.

    Every subclass carries the destination type and identity so the invoking
    layer can point an operator at the misconfigured destination.

    Attributes:
        destination_type: Type tag of the offending destination.
        destination_id: Identity of the offending destination.
    """

    def __init__(
        self,
        message: str,
        destination_type: str,
        destination_id: str | None = None,
    ) -> None:
        self.destination_type = destination_type
        self.destination_id = destination_id or destination_type
        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return structured context for logging.

        Returns:
            Dictionary with destination_type and destination_id.
        """
        return {
            "destination_type": self.destination_type,
            "destination_id": self.destination_id,
        }


class UnknownDestinationTypeError(DestinationError):
    """Raised when a descriptor references a type with no registered configurer.

    Fatal to the composition run: the destination is never silently skipped.
    """

    def __init__(self, destination_type: str, destination_id: str | None = None) -> None:
        message = f"No configurer registered for destination type '{destination_type}'"
        if destination_id and destination_id != destination_type:
            message += f" (destination '{destination_id}')"
        super().__init__(message, destination_type, destination_id)


class NameConflictError(DestinationError):
    """Raised when a configurer introduces a name that already exists.

    Also raised when a configurer removes or alters an entry it did not add.

    Attributes:
        kind: Entry kind ("exporter" or "pipeline").
        name: The conflicting entry name.

    Example:
        >>> raise NameConflictError("exporter", "otlp/mydest", "mydest")
        Traceback (most recent call last):
            ...
        NameConflictError: Destination 'mydest' (type 'mydest') conflicts on exporter 'otlp/mydest': name already present
    """

    def __init__(
        self,
        kind: str,
        name: str,
        destination_type: str,
        destination_id: str | None = None,
        reason: str = "name already present",
    ) -> None:
        self.kind = kind
        self.name = name
        self.reason = reason
        super().__init__(
            f"Destination '{destination_id or destination_type}' (type '{destination_type}') "
            f"conflicts on {kind} '{name}': {reason}",
            destination_type,
            destination_id,
        )


class MissingRequiredFieldError(DestinationError):
    """Raised when a descriptor lacks a field its configurer requires.

    Attributes:
        field: The missing key.
        secret: Whether the key was expected in secret data.
    """

    def __init__(
        self,
        field: str,
        destination_type: str,
        destination_id: str | None = None,
        *,
        secret: bool = False,
    ) -> None:
        self.field = field
        self.secret = secret
        where = "secret data" if secret else "data"
        super().__init__(
            f"Destination '{destination_id or destination_type}' (type '{destination_type}') "
            f"is missing required {where} field '{field}'",
            destination_type,
            destination_id,
        )


class InvalidFieldValueError(DestinationError):
    """Raised when a descriptor field is present but unusable.

    Attributes:
        field: The offending key.
        detail: Why the value was rejected (never the value of a secret).
    """

    def __init__(
        self,
        field: str,
        detail: str,
        destination_type: str,
        destination_id: str | None = None,
    ) -> None:
        self.field = field
        self.detail = detail
        super().__init__(
            f"Destination '{destination_id or destination_type}' (type '{destination_type}') "
            f"has an invalid value for '{field}': {detail}",
            destination_type,
            destination_id,
        )


class SecretExposureError(DestinationError):
    """Raised when a configurer inlines a raw secret value into the document.

    The message names the secret key and the entry, never the value.
    """

    def __init__(
        self,
        secret_key: str,
        entry: str,
        destination_type: str,
        destination_id: str | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.entry = entry
        super().__init__(
            f"Destination '{destination_id or destination_type}' (type '{destination_type}') "
            f"inlined the value of secret '{secret_key}' into {entry}",
            destination_type,
            destination_id,
        )


# =============================================================================
# Document errors
# =============================================================================


class DocumentSealedError(ComposerError):
    """Raised when adding entries to a document that composition has sealed."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"Cannot add {kind} '{name}': configuration document is sealed")


class BaseConfigError(ComposerError):
    """Raised when the base configuration lacks the shared components.

    Attributes:
        missing: Component references (e.g. "receiver 'otlp'") that are absent.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Base configuration is missing shared components: {', '.join(missing)}")


class InvalidReferenceError(ComposerError):
    """Raised when pipelines reference components the document does not define.

    Attributes:
        problems: One message per dangling reference.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Invalid pipeline references: " + "; ".join(problems))


class LoadError(ComposerError):
    """Raised when an input file cannot be parsed or validated.

    A missing file raises FileNotFoundError instead.

    Attributes:
        path: The file that failed to load.
        detail: Short description of the failure.
        field: Dotted path of the first invalid field, if validation failed.
    """

    def __init__(self, path: str, detail: str, field: str | None = None) -> None:
        self.path = path
        self.detail = detail
        self.field = field
        super().__init__(f"Failed to load {path}: {detail}")


__all__ = [
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
