"""Command-line interface helpers for releaser."""

from __future__ import annotations

from releaser.cli.context import CLIContext, ExitCode, async_command
from releaser.cli.output import format_error, format_json, format_success

__all__ = [
    "CLIContext",
    "ExitCode",
    "async_command",
    "format_error",
    "format_json",
    "format_success",
]
