"""Git gateway package.

Wraps the handful of git invocations a release needs behind a sync
(``GitGateway``) and an async (``AsyncGitGateway``) API, both bound to an
explicit repository path.

Usage:
    ```python
    from releaser.git import AsyncGitGateway

    gateway = AsyncGitGateway("/path/to/repo")
    files = await gateway.modified_files()
    await gateway.add(files)
    await gateway.commit("chore(release): 1.2.0")
    ```
"""

from __future__ import annotations

from releaser.git.repository import (
    AsyncGitGateway,
    GitGateway,
    StageResult,
)

__all__ = [
    "AsyncGitGateway",
    "GitGateway",
    "StageResult",
]
