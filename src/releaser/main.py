"""CLI entry point for releaser.

This module defines the Click-based command-line interface.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from releaser.logging import configure_logging

# Credentials for the push usually arrive through the environment
load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

from releaser import __version__  # noqa: E402
from releaser.cli.commands import head, modified, publish  # noqa: E402
from releaser.cli.context import CLIContext, ExitCode  # noqa: E402
from releaser.cli.output import format_error  # noqa: E402
from releaser.config import load_config  # noqa: E402
from releaser.exceptions import ConfigError  # noqa: E402

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="releaser")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./releaser.yaml).",
)
@click.option(
    "-C",
    "--repo",
    "repo_dir",
    type=click.Path(file_okay=False, path_type=str),
    default=None,
    help="Repository to operate on (defaults to the current directory).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    repo_dir: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """releaser - commit and push release assets with git."""
    ctx.ensure_object(dict)

    # Keep config loading messages off stdout until the level is known
    configure_logging(level=logging.ERROR if quiet else logging.WARNING)

    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        details = [f"Field: {e.field}"] if e.field else None
        click.echo(format_error(e.message, details=details), err=True)
        ctx.exit(ExitCode.FAILURE)

    ctx.obj["cli_ctx"] = CLIContext(
        config=config,
        repo_path=Path(repo_dir) if repo_dir else None,
    )

    # Priority: quiet > verbose > config
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = _VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)
    configure_logging(level=level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(modified)
cli.add_command(head)
cli.add_command(publish)


if __name__ == "__main__":
    cli()
