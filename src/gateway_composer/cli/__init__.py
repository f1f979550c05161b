"""Command-line interface for gateway-composer.

Example:
    $ gateway-composer --version
    $ gateway-composer destinations
    $ gateway-composer compose --base base.yaml --destinations destinations.yaml

Exit Codes:
    0: Success
    1: General error
    2: Usage error (invalid arguments)
    3: File not found
    4: Permission error
    5: Validation error (malformed input file)
    7: Composition error
"""

from __future__ import annotations

from gateway_composer.cli.main import cli, main
from gateway_composer.cli.utils import ExitCode, error, error_exit, success

__all__: list[str] = [
    # Entry points
    "main",
    "cli",
    # Utilities
    "ExitCode",
    "error",
    "error_exit",
    "success",
]
