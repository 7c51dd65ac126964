from __future__ import annotations

from pathlib import Path

from releaser.exceptions.base import ReleaserError

#: Fixed message shape for push failures; only the branch is interpolated.
PUSH_FAILED_MESSAGE = (
    "An error occurred during the git push to the remote branch {branch}"
)


class GitError(ReleaserError):
    """Exception for git operation failures.

    Attributes:
        message: Human-readable error message.
        operation: Git operation that failed (e.g., "commit", "push").
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        """Initialize the GitError.

        Args:
            message: Human-readable error message.
            operation: Git operation that failed.
        """
        self.operation = operation
        super().__init__(message)


class GitNotFoundError(GitError):
    """Exception raised when the git executable is not installed or not in PATH."""

    def __init__(self, message: str = "Git CLI not found") -> None:
        super().__init__(message, operation="git_check")


class NotARepositoryError(GitError):
    """Exception raised when operating outside a git repository.

    Attributes:
        message: Human-readable error message.
        path: Directory that is not a repo.
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
    ) -> None:
        """Initialize the NotARepositoryError.

        Args:
            message: Human-readable error message.
            path: Directory that is not a repo.
        """
        self.path = path
        super().__init__(message, operation="repo_check")


class GitCommandFailedError(GitError):
    """Exception raised when git exits non-zero for a propagated operation.

    The diagnostic git wrote to stderr is preserved on the exception so the
    caller sees exactly why the executable refused.

    Attributes:
        message: Human-readable error message.
        operation: Git operation that failed.
        status: Exit status of the git process.
        stderr: Diagnostic output written by git.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialize the GitCommandFailedError.

        Args:
            message: Human-readable error message.
            operation: Git operation that failed.
            status: Exit status of the git process.
            stderr: Diagnostic output written by git.
        """
        self.status = status
        self.stderr = stderr
        super().__init__(message, operation=operation)


class NothingToCommitError(GitCommandFailedError):
    """Exception raised when git reports there is nothing to commit."""

    def __init__(
        self,
        message: str = "Nothing to commit",
        status: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message, operation="commit", status=status, stderr=stderr)


class HeadCommitError(GitError):
    """Exception raised when the HEAD commit cannot be resolved.

    The message is git's own diagnostic (for example the "ambiguous argument
    'HEAD'" error of a repository without commits).
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, operation="head_sha")


class PushFailedError(GitError):
    """Exception raised when a push to the remote fails.

    Only the target branch is carried. The remote URL and git's output may
    embed credentials, so they are never attached to this exception.

    Attributes:
        message: Fixed message naming the branch.
        branch: Remote branch the push targeted.
    """

    def __init__(self, branch: str) -> None:
        """Initialize the PushFailedError.

        Args:
            branch: Remote branch the push targeted.
        """
        self.branch = branch
        super().__init__(PUSH_FAILED_MESSAGE.format(branch=branch), operation="push")
