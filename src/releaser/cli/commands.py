"""Git subcommands of the releaser CLI."""

from __future__ import annotations

from dataclasses import asdict
from typing import NoReturn

import click
from pydantic import ValidationError

from releaser.actions import commit_release
from releaser.cli.context import CLIContext, ExitCode, async_command
from releaser.cli.output import format_error, format_json, format_success
from releaser.config import GitConfig
from releaser.exceptions import GitNotFoundError, NotARepositoryError, ReleaserError
from releaser.git import AsyncGitGateway
from releaser.logging import get_logger

logger = get_logger(__name__)

__all__ = ["head", "modified", "publish"]


_SUGGESTIONS: dict[type[ReleaserError], str] = {
    NotARepositoryError: "Run inside a git repository or pass -C PATH.",
    GitNotFoundError: "Install git and make sure it is on PATH.",
}


def _fail(ctx: click.Context, error: ReleaserError) -> NoReturn:
    suggestion = _SUGGESTIONS.get(type(error))
    click.echo(format_error(error.message, suggestion=suggestion), err=True)
    ctx.exit(ExitCode.FAILURE)


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@async_command
async def modified(ctx: click.Context, as_json: bool) -> None:
    """List modified and untracked files that are not ignored."""
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    try:
        gateway = AsyncGitGateway(cli_ctx.repo_path)
        files = await gateway.modified_files()
    except ReleaserError as e:
        _fail(ctx, e)

    if as_json:
        click.echo(format_json(files))
        return
    for path in files:
        click.echo(path)


@click.command()
@click.pass_context
@async_command
async def head(ctx: click.Context) -> None:
    """Print the SHA of the HEAD commit."""
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    try:
        gateway = AsyncGitGateway(cli_ctx.repo_path)
        sha = await gateway.head_sha()
    except ReleaserError as e:
        _fail(ctx, e)
    click.echo(sha)


@click.command()
@click.argument("version")
@click.option("--notes", default="", help="Release notes ($notes in the message).")
@click.option("--branch", default=None, help="Remote branch (overrides config).")
@click.option("--no-push", is_flag=True, default=False, help="Commit without pushing.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@async_command
async def publish(
    ctx: click.Context,
    version: str,
    notes: str,
    branch: str | None,
    no_push: bool,
    as_json: bool,
) -> None:
    """Commit the modified release assets for VERSION and push them."""
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    git_config = cli_ctx.config.git
    if branch is not None:
        try:
            git_config = GitConfig.model_validate(
                {**git_config.model_dump(), "branch": branch}
            )
        except ValidationError as e:
            raise click.BadParameter(
                e.errors()[0]["msg"], ctx=ctx, param_hint="--branch"
            ) from e

    try:
        gateway = AsyncGitGateway(cli_ctx.repo_path)
        result = await commit_release(
            gateway, git_config, version, notes, push=not no_push
        )
    except ReleaserError as e:
        logger.error("publish_failed", version=version, error=e.message)
        _fail(ctx, e)

    if as_json:
        click.echo(format_json(asdict(result)))
    elif result.committed:
        click.echo(format_success(f"Release {version} committed as {result.sha}"))
    else:
        click.echo("Nothing to commit.")
    for path in result.skipped:
        click.echo(f"Skipped: {path}", err=True)
