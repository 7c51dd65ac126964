"""CLI context and utilities for releaser.

Exit codes, the shared context object, and the bridge from Click's
synchronous commands to the async gateway.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, TypeVar

from releaser.config import ReleaserConfig

__all__ = [
    "ExitCode",
    "CLIContext",
    "async_command",
]


class ExitCode(IntEnum):
    """Standard exit codes for the releaser CLI.

    - 0 for success
    - 1 for failure
    """

    SUCCESS = 0
    FAILURE = 1


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and configuration shared with subcommands.

    Attributes:
        config: Loaded releaser configuration.
        repo_path: Repository the commands operate on.
    """

    config: ReleaserConfig
    repo_path: Path | None = None


F = TypeVar("F", bound=Callable[..., Any])


def async_command(f: F) -> F:
    """Decorator to run async Click commands with asyncio.run().

    Example:
        >>> @cli.command()
        >>> @async_command
        >>> async def head(ctx: click.Context) -> None:
        >>>     click.echo(await gateway.head_sha())
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))

    return wrapper  # type: ignore[return-value]
