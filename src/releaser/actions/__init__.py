"""Release actions built on the git gateway."""

from __future__ import annotations

from releaser.actions.git import (
    ReleaseCommitResult,
    commit_release,
    render_message,
    select_assets,
)

__all__ = [
    "ReleaseCommitResult",
    "commit_release",
    "render_message",
    "select_assets",
]
