"""CLI utility functions and error handling.

Shared helpers for the gateway-composer CLI:
- Exit code constants
- Error/info output on stderr, results on stdout
- Mapping from composition exceptions to exit codes

Example:
    from gateway_composer.cli.utils import error_exit, ExitCode

    error_exit("Base configuration not found", exit_code=ExitCode.FILE_NOT_FOUND)
"""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TYPE_CHECKING

import click

from gateway_composer.errors import (
    ComposerError,
    DestinationError,
    LoadError,
)
from gateway_composer.registry import ConfigurerRegistry, load_registry

if TYPE_CHECKING:
    from typing import NoReturn


class ExitCode(IntEnum):
    """Exit codes for CLI commands, stable for CI/CD pipelines."""

    SUCCESS = 0
    """Command completed successfully."""

    GENERAL_ERROR = 1
    """General error (catch-all for failures)."""

    USAGE_ERROR = 2
    """Invalid usage (bad arguments, missing required options)."""

    FILE_NOT_FOUND = 3
    """Required input file not found."""

    PERMISSION_ERROR = 4
    """Permission denied reading an input or writing the output."""

    VALIDATION_ERROR = 5
    """An input file failed to parse or validate."""

    COMPOSITION_ERROR = 7
    """Composition failed (unknown type, name conflict, missing field, ...)."""


def error(message: str, **context: str | int | bool | None) -> None:
    """Print an error message to stderr.

    Args:
        message: Error message to display.
        **context: Optional context key-value pairs to include.

    Example:
        error("Unknown destination type", destination_type="mydest")
        # Output: Error: Unknown destination type (destination_type=mydest)
    """
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items() if v is not None)
        full_message = f"Error: {message} ({context_str})"
    else:
        full_message = f"Error: {message}"

    click.echo(full_message, err=True)


def error_exit(
    message: str,
    exit_code: ExitCode = ExitCode.GENERAL_ERROR,
    **context: str | int | bool | None,
) -> NoReturn:
    """Print an error message to stderr and exit with a code.

    Raises:
        SystemExit: Always exits with the specified code.
    """
    error(message, **context)
    sys.exit(exit_code)


def info(message: str) -> None:
    """Print an informational message to stderr.

    Keeps progress output out of stdout, which may carry the rendered YAML.
    """
    click.echo(message, err=True)


def success(message: str) -> None:
    """Print a success message to stdout."""
    click.echo(message)


def get_registry(ctx: click.Context) -> ConfigurerRegistry:
    """Return the registry for this invocation.

    Uses ``ctx.obj["registry"]`` when the caller supplied one, otherwise
    discovers installed configurers once and caches the result on the context.
    """
    obj = ctx.ensure_object(dict)
    registry = obj.get("registry")
    if registry is None:
        registry = load_registry()
        obj["registry"] = registry
    return registry


def exit_code_for(exc: BaseException) -> ExitCode:
    """Map an exception raised while composing to an exit code."""
    if isinstance(exc, FileNotFoundError):
        return ExitCode.FILE_NOT_FOUND
    if isinstance(exc, PermissionError):
        return ExitCode.PERMISSION_ERROR
    if isinstance(exc, LoadError):
        return ExitCode.VALIDATION_ERROR
    if isinstance(exc, ComposerError):
        return ExitCode.COMPOSITION_ERROR
    return ExitCode.GENERAL_ERROR


def fail(exc: Exception) -> NoReturn:
    """Report a composition failure and exit with its mapped code.

    Destination failures carry the destination type and identity so the
    operator knows which destination to fix.
    """
    if isinstance(exc, DestinationError):
        error_exit(str(exc), exit_code_for(exc), **exc.context)
    if isinstance(exc, FileNotFoundError):
        error_exit("File not found", exit_code_for(exc), path=exc.filename)
    error_exit(str(exc), exit_code_for(exc))


__all__ = [
    "ExitCode",
    "error",
    "error_exit",
    "exit_code_for",
    "fail",
    "get_registry",
    "info",
    "success",
]
