"""Release commit action.

Composes the gateway operations into the release step: pick the modified
release assets, stage them, commit them with the rendered release message,
push, and report the new HEAD.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatch
from string import Template

from releaser.config import GitConfig
from releaser.git import AsyncGitGateway
from releaser.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "ReleaseCommitResult",
    "commit_release",
    "render_message",
    "select_assets",
]


@dataclass(frozen=True, slots=True)
class ReleaseCommitResult:
    """Outcome of :func:`commit_release`.

    Attributes:
        committed: True if a release commit was created.
        files: Asset paths staged into the commit.
        skipped: Asset paths git refused to stage.
        sha: HEAD after the commit, None when nothing was committed.
        message: Commit message used, None when nothing was committed.
    """

    committed: bool
    files: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()
    sha: str | None = None
    message: str | None = None


def _matches(path: str, pattern: str) -> bool:
    normalized = pattern[2:] if pattern.startswith("./") else pattern
    if normalized.endswith("/"):
        return path.startswith(normalized)
    return fnmatch(path, normalized) or fnmatch(os.path.basename(path), normalized)


def select_assets(files: list[str], patterns: list[str]) -> list[str]:
    """Keep the files matching any of the asset glob patterns.

    A pattern matches either the full repository-relative path or the
    basename; a pattern ending in ``/`` matches everything under that
    directory.

    Args:
        files: Repository-relative paths, as listed by git.
        patterns: Glob patterns. Empty selects every file.

    Returns:
        Matching files in their original order.
    """
    if not patterns:
        return list(files)
    return [f for f in files if any(_matches(f, p) for p in patterns)]


def render_message(template: str, version: str, notes: str = "") -> str:
    """Render a release commit message.

    Unknown placeholders are left untouched.

    Example:
        >>> render_message("chore(release): $version", "1.2.0")
        'chore(release): 1.2.0'
    """
    return Template(template).safe_substitute(version=version, notes=notes).rstrip()


async def commit_release(
    gateway: AsyncGitGateway,
    config: GitConfig,
    version: str,
    notes: str = "",
    *,
    push: bool = True,
) -> ReleaseCommitResult:
    """Commit the modified release assets and push them.

    Args:
        gateway: Gateway bound to the repository being released.
        config: Git release settings.
        version: Version being released.
        notes: Release notes, available to the message template as $notes.
        push: Push to ``config.repository_url`` when one is configured.

    Returns:
        ReleaseCommitResult describing what was committed.

    Raises:
        GitError: If configuring, committing, pushing or reading HEAD fails.
    """
    modified = await gateway.modified_files()
    assets = select_assets(modified, config.assets)
    logger.debug(
        "release_assets_selected",
        modified=len(modified),
        selected=assets,
    )

    if not assets:
        logger.info("release_commit_skipped", reason="no modified assets")
        return ReleaseCommitResult(committed=False)

    if config.author_name:
        await gateway.set_config("user.name", config.author_name)
    if config.author_email:
        await gateway.set_config("user.email", config.author_email)

    staged = await gateway.add(assets)
    if not staged.staged:
        logger.warning("release_commit_skipped", reason="no asset could be staged")
        return ReleaseCommitResult(committed=False, skipped=staged.skipped)

    message = render_message(config.message, version, notes)
    await gateway.commit(message)

    if push and config.repository_url is not None:
        await gateway.push(config.repository_url.get_secret_value(), config.branch)
    elif push:
        logger.info("release_push_skipped", reason="no repository_url configured")

    sha = await gateway.head_sha()
    logger.info(
        "release_committed",
        version=version,
        sha=sha[:7],
        files=len(staged.staged),
    )
    return ReleaseCommitResult(
        committed=True,
        files=staged.staged,
        skipped=staged.skipped,
        sha=sha,
        message=message,
    )
