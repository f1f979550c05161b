"""Endpoint and value helpers shared by the built-in configurers.

Destination data arrives as free-form strings typed by users, so endpoints
come with or without schemes, ports and trailing slashes. These helpers
normalise them into the shapes collector exporters expect.

Example:
    >>> parse_grpc_endpoint("http://jaeger-collector")
    'jaeger-collector:4317'
    >>> parse_http_endpoint("loki.example.com:3100/", path="/loki/api/v1/push")
    'https://loki.example.com:3100/loki/api/v1/push'
    >>> parse_bool("Yes")
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from gateway_composer.errors import InvalidFieldValueError

if TYPE_CHECKING:
    from gateway_composer.schemas.destination import DestinationDescriptor

DEFAULT_OTLP_GRPC_PORT = 4317

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse a boolean stored as a string.

    Args:
        value: The raw value ("true", "False", "1", ...), or None.
        default: Returned when the value is None, blank or unrecognised.

    Returns:
        The parsed boolean.
    """
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def is_tls_endpoint(url: str) -> bool:
    """Return True if the endpoint explicitly asks for TLS (``https://``)."""
    return url.strip().lower().startswith("https://")


def parse_grpc_endpoint(url: str, default_port: int = DEFAULT_OTLP_GRPC_PORT) -> str:
    """Normalise a gRPC endpoint to ``host:port``.

    Strips any scheme and path and adds ``default_port`` when no port is
    given. gRPC exporters take a bare authority, not a URL.

    Args:
        url: Endpoint as typed by the user.
        default_port: Port used when the endpoint has none.

    Returns:
        The ``host:port`` authority.

    Raises:
        ValueError: If the endpoint has no host or an invalid port.
    """
    raw = url.strip()
    if "://" not in raw:
        raw = f"grpc://{raw}"
    parts = urlsplit(raw)
    host = parts.hostname
    if not host:
        raise ValueError(f"Endpoint has no host: {url!r}")
    try:
        port = parts.port or default_port
    except ValueError as e:
        raise ValueError(f"Endpoint has an invalid port: {url!r}") from e
    if ":" in host:
        # IPv6 literal
        host = f"[{host}]"
    return f"{host}:{port}"


def parse_http_endpoint(
    url: str,
    *,
    default_scheme: str = "https",
    path: str | None = None,
) -> str:
    """Normalise an HTTP endpoint to a URL.

    Adds ``default_scheme`` when missing, drops trailing slashes, and
    appends ``path`` unless the URL already ends with it.

    Args:
        url: Endpoint as typed by the user.
        default_scheme: Scheme used when the endpoint has none.
        path: Required path suffix (e.g. "/api/v1/write").

    Returns:
        The normalised URL.

    Raises:
        ValueError: If the endpoint has no host.
    """
    raw = url.strip()
    if "://" not in raw:
        raw = f"{default_scheme}://{raw}"
    parts = urlsplit(raw)
    if not parts.hostname:
        raise ValueError(f"Endpoint has no host: {url!r}")
    normalized = raw.rstrip("/")
    if path and not normalized.endswith(path.rstrip("/")):
        normalized = normalized + "/" + path.strip("/")
    return normalized


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated value into stripped, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def grpc_endpoint_field(
    descriptor: DestinationDescriptor,
    key: str,
    *,
    default: str | None = None,
    default_port: int = DEFAULT_OTLP_GRPC_PORT,
) -> str:
    """Read a gRPC endpoint from descriptor data and normalise it.

    Args:
        descriptor: The destination descriptor.
        key: Data key holding the endpoint.
        default: Endpoint used when the key is absent; required if None.
        default_port: Port used when the endpoint has none.

    Returns:
        The ``host:port`` authority.

    Raises:
        MissingRequiredFieldError: If the key is absent and has no default.
        InvalidFieldValueError: If the endpoint cannot be parsed.
    """
    raw = descriptor.get(key, default) if default is not None else descriptor.require(key)
    try:
        return parse_grpc_endpoint(raw or "", default_port)
    except ValueError as e:
        raise InvalidFieldValueError(key, str(e), descriptor.type, descriptor.identity) from e


def http_endpoint_field(
    descriptor: DestinationDescriptor,
    key: str,
    *,
    path: str | None = None,
    default_scheme: str = "https",
) -> str:
    """Read a required HTTP endpoint from descriptor data and normalise it.

    Raises:
        MissingRequiredFieldError: If the key is absent.
        InvalidFieldValueError: If the endpoint cannot be parsed.
    """
    raw = descriptor.require(key)
    try:
        return parse_http_endpoint(raw, default_scheme=default_scheme, path=path)
    except ValueError as e:
        raise InvalidFieldValueError(key, str(e), descriptor.type, descriptor.identity) from e


__all__ = [
    "DEFAULT_OTLP_GRPC_PORT",
    "grpc_endpoint_field",
    "http_endpoint_field",
    "is_tls_endpoint",
    "parse_bool",
    "parse_grpc_endpoint",
    "parse_http_endpoint",
    "split_csv",
]
