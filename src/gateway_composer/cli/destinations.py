"""List registered destination types."""

from __future__ import annotations

import click

from gateway_composer.cli.utils import fail, get_registry, success
from gateway_composer.errors import RegistrationError
from gateway_composer.signals import Signal


@click.command(
    name="destinations",
    help="List registered destination types and the signals they support.",
)
@click.pass_context
def destinations_command(ctx: click.Context) -> None:
    """Print one line per destination type: type, display name, signals."""
    try:
        registry = get_registry(ctx)
    except RegistrationError as e:
        fail(e)

    for configurer in sorted(registry, key=lambda c: c.destination_type):
        signals = ",".join(
            signal.value for signal in Signal if signal in configurer.supported_signals
        )
        success(f"{configurer.destination_type}\t{configurer.display_name}\t{signals}")
