"""Releaser exception hierarchy.

All exceptions can be imported from this package:
    from releaser.exceptions import GitError, PushFailedError
"""

from __future__ import annotations

# Base exception
from releaser.exceptions.base import ReleaserError

# Configuration exceptions
from releaser.exceptions.config import ConfigError

# Git-related exceptions
from releaser.exceptions.git import (
    PUSH_FAILED_MESSAGE,
    GitCommandFailedError,
    GitError,
    GitNotFoundError,
    HeadCommitError,
    NotARepositoryError,
    NothingToCommitError,
    PushFailedError,
)

__all__ = [
    "PUSH_FAILED_MESSAGE",
    "ConfigError",
    "GitCommandFailedError",
    "GitError",
    "GitNotFoundError",
    "HeadCommitError",
    "NotARepositoryError",
    "NothingToCommitError",
    "PushFailedError",
    "ReleaserError",
]
