"""Secret reference models for composed collector configuration.

Secret values are never written into the configuration document. A
configurer asks the descriptor for a SecretReference and writes its
placeholder (``${NAME}``); the collector runtime resolves the placeholder
from its environment, which the deployment layer populates from the
external secret store.

Example:
    >>> ref = SecretReference(key="DATADOG_API_KEY")
    >>> ref.to_placeholder()
    '${DATADOG_API_KEY}'
    >>> SecretReference(key="api-key").to_env_var_name()
    'API_KEY'
"""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

_ENV_INVALID_CHARS = re.compile(r"[^A-Z0-9_]")


class SecretReference(BaseModel):
    """Placeholder for a secret value held in a destination's secret data.

    Attributes:
        key: The key under which the secret is stored for the destination.

    Example:
        >>> SecretReference(key="honeycomb.api_key").to_placeholder()
        '${HONEYCOMB_API_KEY}'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: Annotated[
        str,
        Field(
            min_length=1,
            description="Secret key within the destination's secret data",
            examples=["DATADOG_API_KEY", "HONEYCOMB_API_KEY"],
        ),
    ]

    def to_env_var_name(self) -> str:
        """Return the environment variable the runtime resolves.

        Uppercases the key and replaces anything outside ``[A-Z0-9_]``
        with an underscore.

        Returns:
            Environment variable name.
        """
        name = _ENV_INVALID_CHARS.sub("_", self.key.upper())
        if name[0].isdigit():
            name = f"_{name}"
        return name

    def to_placeholder(self) -> str:
        """Return the collector environment placeholder (``${NAME}``)."""
        return f"${{{self.to_env_var_name()}}}"


__all__ = ["SecretReference"]
