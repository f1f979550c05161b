"""Compose command implementation.

Loads a base collector configuration and a destinations file, composes
them with the registered configurers and writes collector YAML.

Example:
    $ gateway-composer compose --base base.yaml --destinations destinations.yaml
    $ gateway-composer compose -b base.yaml -d destinations.yaml -o collector.yaml
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
import structlog

from gateway_composer.cli.utils import fail, get_registry, info
from gateway_composer.composer import Composer
from gateway_composer.emitter import dump_yaml
from gateway_composer.errors import ComposerError
from gateway_composer.loader import (
    default_base_config,
    load_base_config,
    load_descriptors,
    load_settings,
)
from gateway_composer.telemetry.logging import VALID_LOG_LEVELS, configure_logging

logger = structlog.get_logger(__name__)


@click.command(
    name="compose",
    help="Compose destinations into a collector configuration.",
    epilog="""
Examples:
    $ gateway-composer compose --destinations destinations.yaml
    $ gateway-composer compose --base base.yaml --destinations destinations.yaml
    $ gateway-composer compose -d destinations.yaml --output collector.yaml --json-logs
""",
)
@click.option(
    "--base",
    "-b",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Base collector configuration. Defaults to an otlp receiver and batch processor.",
    metavar="PATH",
)
@click.option(
    "--destinations",
    "-d",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Destinations file (list of descriptors).",
    metavar="PATH",
)
@click.option(
    "--settings",
    "-s",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Composer settings file.",
    metavar="PATH",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the collector YAML here instead of stdout.",
    metavar="PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(list(VALID_LOG_LEVELS), case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Minimum log level written to stderr.",
)
@click.option(
    "--json-logs",
    is_flag=True,
    default=False,
    help="Write logs as JSON lines instead of console format.",
)
@click.pass_context
def compose_command(
    ctx: click.Context,
    base: Path | None,
    destinations: Path,
    settings: Path | None,
    output: Path | None,
    log_level: str,
    json_logs: bool,
) -> None:
    """Compose destinations into a collector configuration.

    Args:
        ctx: Click context; ``ctx.obj["registry"]`` overrides discovery.
        base: Base collector configuration file.
        destinations: Destinations file.
        settings: Composer settings file.
        output: Output file; stdout when omitted.
        log_level: Minimum log level.
        json_logs: Render logs as JSON.
    """
    configure_logging(log_level.upper(), json_output=json_logs, stream=sys.stderr)

    try:
        registry = get_registry(ctx)
        base_config = load_base_config(base) if base is not None else default_base_config()
        descriptors = load_descriptors(destinations)
        composer_settings = load_settings(settings) if settings is not None else None

        config = Composer(registry, composer_settings).compose(base_config, descriptors)
        rendered = dump_yaml(config)

        if output is None:
            click.echo(rendered, nl=False)
        else:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(rendered, encoding="utf-8")
            info(f"Collector configuration written to: {output}")
    except (ComposerError, OSError) as e:
        logger.error("compose.failed", error_type=type(e).__name__, error=str(e))
        fail(e)
