"""Main entry point for the gateway-composer CLI.

Commands:
    gateway-composer compose: Compose destinations into collector YAML
    gateway-composer destinations: List registered destination types

Example:
    $ gateway-composer --help
    $ gateway-composer compose --destinations destinations.yaml
"""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

import click

from gateway_composer.cli.compose import compose_command
from gateway_composer.cli.destinations import destinations_command


def _get_version() -> str:
    """Get the gateway-composer package version.

    Returns:
        Version string from package metadata, or 'unknown' if not installed.
    """
    try:
        return get_version("gateway-composer")
    except PackageNotFoundError:
        return "unknown"


@click.group(
    name="gateway-composer",
    help="gateway-composer - Compose telemetry destinations into a collector configuration.",
    epilog="Use 'gateway-composer <command> --help' for command-specific help.",
    context_settings={
        "help_option_names": ["-h", "--help"],
    },
)
@click.version_option(
    version=_get_version(),
    prog_name="gateway-composer",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Root command group for the gateway-composer CLI."""
    # Commands share the registry through the context object
    ctx.ensure_object(dict)


cli.add_command(compose_command)
cli.add_command(destinations_command)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the gateway-composer CLI.

    Args:
        argv: Command-line arguments (uses sys.argv if None).
    """
    try:
        cli(args=argv, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
