"""Composer settings.

ComposerSettings holds the knobs of a composition run: the names of the
shared base-topology components every destination pipeline is wired
through, and which post-application checks run.

Example:
    >>> settings = ComposerSettings()
    >>> settings.shared_receivers
    ['otlp']
    >>> ComposerSettings(shared_processors=["memory_limiter", "batch"]).shared_processors
    ['memory_limiter', 'batch']
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SHARED_RECEIVERS: tuple[str, ...] = ("otlp",)
DEFAULT_SHARED_PROCESSORS: tuple[str, ...] = ("batch",)


class ComposerSettings(BaseModel):
    """Settings for a Composer.

    Attributes:
        shared_receivers: Base receivers every destination pipeline reads from.
        shared_processors: Base processors every destination pipeline runs, in order.
        validate_references: Fail the run if any pipeline references an
            undefined component.
        detect_secret_exposure: Fail the run if a configurer inlined a raw
            secret value into the document.
        secret_min_length: Secret values shorter than this are too likely to
            occur by chance (a hostname, a type tag) and are not scanned for.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    shared_receivers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SHARED_RECEIVERS),
        min_length=1,
        description="Receivers referenced by every destination pipeline",
    )
    shared_processors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SHARED_PROCESSORS),
        description="Processors referenced by every destination pipeline",
    )
    validate_references: bool = Field(
        default=True,
        description="Reject pipelines that reference undefined components",
    )
    detect_secret_exposure: bool = Field(
        default=True,
        description="Reject raw secret values in the composed document",
    )
    secret_min_length: int = Field(
        default=8,
        ge=1,
        description="Shorter secret values are not scanned for",
    )


__all__ = [
    "DEFAULT_SHARED_PROCESSORS",
    "DEFAULT_SHARED_RECEIVERS",
    "ComposerSettings",
]
