"""Destination descriptor schema.

A DestinationDescriptor is the passive record of one user-configured
destination as read from the external store: its type tag, identity, the
signals the user enabled, and its non-secret and secret key/value data.

Unknown keys inside ``data`` and ``secret_data`` are kept as-is so newer
store records still load. Whether a key is required is decided by the
configurer through require() / secret_ref().

Example:
    >>> d = DestinationDescriptor.model_validate({
    ...     "type": "honeycomb",
    ...     "id": "hc-prod",
    ...     "enabledSignals": ["TRACES", "LOGS"],
    ...     "secretData": {"HONEYCOMB_API_KEY": "..."},
    ... })
    >>> sorted(s.value for s in d.signals)
    ['logs', 'traces']
    >>> d.secret_ref("HONEYCOMB_API_KEY").to_placeholder()
    '${HONEYCOMB_API_KEY}'
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gateway_composer.errors import MissingRequiredFieldError
from gateway_composer.schemas.secrets import SecretReference
from gateway_composer.signals import Signal

# Destination type tags: lowercase alphanumerics, hyphens and underscores
DESTINATION_TYPE_PATTERN = r"^[a-z0-9][a-z0-9_-]*$"

DestinationType = Annotated[
    str,
    Field(
        min_length=1,
        max_length=63,
        pattern=DESTINATION_TYPE_PATTERN,
        description="Destination type tag, unique per vendor integration",
        examples=["jaeger", "datadog", "otlphttp"],
    ),
]


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class DestinationDescriptor(BaseModel):
    """One configured destination, as supplied by the external store.

    Attributes:
        type: Destination type tag; selects the configurer.
        id: Identity of the stored destination (defaults to the type).
        signals: Signals the user enabled (alias: ``enabledSignals``).
        data: Non-secret configuration values.
        secret_data: Secret configuration values (alias: ``secretData``).
            Configurers only ever reference these through placeholders.

    Example:
        >>> d = DestinationDescriptor(type="jaeger", signals={Signal.TRACES},
        ...                           data={"JAEGER_URL": "jaeger:4317"})
        >>> d.identity
        'jaeger'
        >>> d.require("JAEGER_URL")
        'jaeger:4317'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "type": "jaeger",
                    "enabledSignals": ["traces"],
                    "data": {"JAEGER_URL": "jaeger-collector:4317"},
                },
            ]
        },
    )

    type: DestinationType
    id: str | None = Field(
        default=None,
        min_length=1,
        description="Identity of the stored destination",
    )
    signals: frozenset[Signal] = Field(
        default_factory=frozenset,
        alias="enabledSignals",
        description="Signals enabled by the user",
    )
    data: dict[str, str] = Field(
        default_factory=dict,
        description="Non-secret key/value configuration",
    )
    secret_data: dict[str, str] = Field(
        default_factory=dict,
        alias="secretData",
        repr=False,
        description="Secret key/value configuration",
    )

    @field_validator("signals", mode="before")
    @classmethod
    def _parse_signals(cls, value: Any) -> Any:
        """Accept signal names in any case ("TRACES", "traces")."""
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        return frozenset(
            item if isinstance(item, Signal) else Signal.parse(str(item)) for item in value
        )

    @field_validator("data", "secret_data", mode="before")
    @classmethod
    def _stringify_values(cls, value: Any) -> Any:
        """Coerce YAML scalars (booleans, numbers) to the store's string form."""
        if value is None:
            return {}
        if isinstance(value, dict):
            return {
                str(k): _stringify(v) for k, v in value.items() if v is not None
            }
        return value

    @property
    def identity(self) -> str:
        """Return the destination's identity, falling back to its type."""
        return self.id or self.type

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return a non-secret value, or ``default`` if absent or blank."""
        value = self.data.get(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    def require(self, key: str) -> str:
        """Return a required non-secret value.

        Args:
            key: The data key.

        Returns:
            The stripped value.

        Raises:
            MissingRequiredFieldError: If the key is absent or blank.
        """
        value = self.get(key)
        if value is None:
            raise MissingRequiredFieldError(key, self.type, self.identity)
        return value

    def has_secret(self, key: str) -> bool:
        """Return True if the secret key is present and non-empty."""
        return bool(self.secret_data.get(key))

    def secret_ref(self, key: str) -> SecretReference | None:
        """Return a reference to an optional secret, never the value itself.

        Args:
            key: The secret data key.

        Returns:
            SecretReference for the key, or None if the secret is missing.
        """
        if not self.has_secret(key):
            return None
        return SecretReference(key=key)

    def require_secret(self, key: str) -> SecretReference:
        """Return a reference to a required secret.

        Raises:
            MissingRequiredFieldError: If the secret is missing or empty.
        """
        ref = self.secret_ref(key)
        if ref is None:
            raise MissingRequiredFieldError(key, self.type, self.identity, secret=True)
        return ref


__all__ = [
    "DESTINATION_TYPE_PATTERN",
    "DestinationDescriptor",
    "DestinationType",
]
