"""GitPython-backed gateway to the git executable.

Every operation is one ``git`` invocation run through GitPython's command
wrapper inside an explicit repository path. Results are normalised and
failures mapped onto the releaser exception hierarchy.

Example:
    ```python
    from releaser.git import AsyncGitGateway

    gateway = AsyncGitGateway("/path/to/repo")
    files = await gateway.modified_files()
    result = await gateway.add(files)
    await gateway.commit("chore(release): 1.2.0 [skip ci]")
    await gateway.push(remote_url, "main")
    sha = await gateway.head_sha()
    ```
"""

from __future__ import annotations

import asyncio
import posixpath
from dataclasses import dataclass
from pathlib import Path

from git import InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import GitCommandNotFound

from releaser.exceptions import (
    GitCommandFailedError,
    GitNotFoundError,
    HeadCommitError,
    NotARepositoryError,
    NothingToCommitError,
    PushFailedError,
)
from releaser.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "AsyncGitGateway",
    "GitGateway",
    "StageResult",
]

# =============================================================================
# Constants
# =============================================================================

#: Ask GitPython for (status, stdout, stderr) instead of raising on failure
_RAW_OUTPUT: dict[str, bool] = {
    "with_extended_output": True,
    "with_exceptions": False,
}

#: Patterns git prints when a commit has no staged changes
NOTHING_TO_COMMIT_PATTERNS: tuple[str, ...] = (
    "nothing to commit",
    "no changes added to commit",
)

#: List paths verbatim instead of octal-escaping non-ASCII bytes
_UNQUOTED_PATHS: dict[str, str] = {"c": "core.quotePath=false"}

#: Single-character escapes git uses inside quoted paths
_C_ESCAPES: dict[str, int] = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}


# =============================================================================
# Value Objects
# =============================================================================


@dataclass(frozen=True, slots=True)
class StageResult:
    """Outcome of a best-effort ``git add``.

    Attributes:
        staged: Requested paths git accepted into the index.
        skipped: Requested paths git rejected (ignored, unmatched, unreadable).
    """

    staged: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """True when every requested path was staged."""
        return not self.skipped


# =============================================================================
# Helper Functions
# =============================================================================


def _split_lines(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if line.strip()]


def _unquote_path(entry: str) -> str:
    """Decode a path git printed in C-quoted form.

    Git quotes paths holding control characters, quotes or backslashes
    (and non-ASCII bytes unless ``core.quotePath`` is off), e.g.
    ``"caf\\303\\251.md"``. Unquoted entries are returned unchanged.
    """
    if len(entry) < 2 or not (entry.startswith('"') and entry.endswith('"')):
        return entry

    body = entry[1:-1]
    raw = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\" and i + 1 < len(body):
            escape = body[i + 1]
            octal = body[i + 1 : i + 4]
            if len(octal) == 3 and all(c in "01234567" for c in octal):
                raw.append(int(octal, 8))
                i += 4
                continue
            if escape in _C_ESCAPES:
                raw.append(_C_ESCAPES[escape])
                i += 2
                continue
        raw.extend(char.encode("utf-8"))
        i += 1
    return raw.decode("utf-8", errors="surrogateescape")


def _rejected_paths(files: list[str], stderr: str) -> set[str]:
    """Work out which requested paths git refused during ``add``.

    Requested paths are compared in normalised form (``./a.log`` and
    ``a.log`` name the same file) since git reports paths that way.

    Args:
        files: Paths passed to ``git add``.
        stderr: Diagnostic output of the add.

    Returns:
        The subset of ``files`` named by git's diagnostics.
    """
    lines = _split_lines(stderr)
    if any(line.startswith("fatal:") for line in lines):
        # A fatal error aborts the whole add before the index is written
        return set(files)

    listed = [_unquote_path(line) for line in lines]
    rejected: set[str] = set()
    for path in files:
        normalized = posixpath.normpath(path)
        for line, entry in zip(lines, listed):
            if (
                entry in (path, normalized)
                or normalized.startswith(posixpath.normpath(entry) + "/")
                or (
                    line.startswith("error:")
                    and (f"'{path}'" in line or f"'{normalized}'" in line)
                )
            ):
                rejected.add(path)
                break
    return rejected


# =============================================================================
# Main Class: GitGateway
# =============================================================================


class GitGateway:
    """Synchronous gateway running git commands inside one repository.

    Thread-safe: only stores the repository path and the Repo handle.

    Example:
        ```python
        gateway = GitGateway("/path/to/repo")
        gateway.set_config("user.email", "release-bot@example.com")
        gateway.commit("chore(release): 1.2.0")
        print(gateway.head_sha())
        ```
    """

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize GitGateway.

        Args:
            path: Path inside the git repository. Defaults to current directory.

        Raises:
            GitNotFoundError: If git is not installed.
            NotARepositoryError: If path is not inside a git repository.
        """
        resolved_path = Path.cwd() if path is None else Path(path)

        try:
            self._repo = Repo(resolved_path, search_parent_directories=True)
        except GitCommandNotFound as e:
            raise GitNotFoundError("Git CLI not found. Please install git.") from e
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotARepositoryError(
                f"Not a git repository: {resolved_path}",
                path=resolved_path,
            ) from e

        if self._repo.working_tree_dir is None:
            raise NotARepositoryError(
                f"Repository has no working tree: {resolved_path}",
                path=resolved_path,
            )
        self._path = Path(self._repo.working_tree_dir)

    @property
    def path(self) -> Path:
        """Path to the repository root."""
        return self._path

    @property
    def repo(self) -> Repo:
        """Underlying GitPython Repo instance."""
        return self._repo

    def _git(
        self,
        command: str,
        *args: str,
        git_options: dict[str, str] | None = None,
    ) -> tuple[int, str, str]:
        """Run ``git <command> <args...>`` in the repository root.

        Args:
            command: Git subcommand in GitPython form (``ls_files``).
            *args: Arguments passed after the subcommand.
            git_options: Options placed before the subcommand, such as
                ``{"c": "core.quotePath=false"}`` for ``-c core.quotePath=false``.

        Returns:
            Tuple of (exit status, stdout, stderr).

        Raises:
            GitNotFoundError: If the git executable cannot be started.
        """
        git = self._repo.git(**git_options) if git_options else self._repo.git
        try:
            status, stdout, stderr = getattr(git, command)(*args, **_RAW_OUTPUT)
        except GitCommandNotFound as e:
            raise GitNotFoundError("Git CLI not found. Please install git.") from e
        return status, stdout, stderr

    # -------------------------------------------------------------------------
    # Working Tree
    # -------------------------------------------------------------------------

    def modified_files(self) -> list[str]:
        """List modified and untracked files that are not ignored.

        Returns:
            Paths relative to the repository root, in git's order, decoded
            so they can be passed straight back to :meth:`add`.

        Raises:
            GitCommandFailedError: If git cannot list the working tree.
        """
        status, stdout, stderr = self._git(
            "ls_files",
            "-m",
            "-o",
            "--exclude-standard",
            git_options=_UNQUOTED_PATHS,
        )
        if status != 0:
            raise GitCommandFailedError(
                f"git ls-files failed: {stderr}",
                operation="modified_files",
                status=status,
                stderr=stderr,
            )
        return [_unquote_path(entry) for entry in _split_lines(stdout)]

    def add(self, files: list[str]) -> StageResult:
        """Stage files, skipping the ones git rejects.

        Ignored or otherwise unaddable paths do not stop the remaining paths
        from being staged, and the exit status of git is not inspected.

        Args:
            files: Paths to add to the index.

        Returns:
            StageResult listing staged and skipped paths.
        """
        if not files:
            return StageResult()

        status, stdout, stderr = self._git("add", "--ignore-errors", *files)
        logger.debug(
            "git_add",
            status=status,
            stdout=stdout,
            stderr=stderr,
        )

        rejected = _rejected_paths(files, stderr)
        result = StageResult(
            staged=tuple(f for f in files if f not in rejected),
            skipped=tuple(f for f in files if f in rejected),
        )
        if result.skipped:
            logger.debug("git_add_skipped_paths", skipped=list(result.skipped))
        return result

    # -------------------------------------------------------------------------
    # Configuration and Committing
    # -------------------------------------------------------------------------

    def set_config(self, name: str, value: str) -> None:
        """Set a repository-local git configuration value.

        Raises:
            GitCommandFailedError: If git rejects the key or value.
        """
        status, _, stderr = self._git("config", name, value)
        if status != 0:
            raise GitCommandFailedError(
                f"git config {name} failed: {stderr}",
                operation="set_config",
                status=status,
                stderr=stderr,
            )
        logger.debug("git_config_set", name=name)

    def commit(self, message: str) -> None:
        """Create a commit on the current branch.

        Args:
            message: Commit message.

        Raises:
            NothingToCommitError: If nothing is staged.
            GitCommandFailedError: If git refuses the commit for another reason.
        """
        status, stdout, stderr = self._git("commit", "-m", message)
        if status == 0:
            logger.info("commit_created")
            return

        diagnostic = stderr or stdout
        combined = f"{stdout}\n{stderr}".lower()
        if any(pattern in combined for pattern in NOTHING_TO_COMMIT_PATTERNS):
            raise NothingToCommitError(status=status, stderr=diagnostic)
        raise GitCommandFailedError(
            f"git commit failed: {diagnostic}",
            operation="commit",
            status=status,
            stderr=diagnostic,
        )

    # -------------------------------------------------------------------------
    # Remote Operations
    # -------------------------------------------------------------------------

    def push(self, remote_url: str, branch: str) -> None:
        """Push HEAD and all tags to ``branch`` on ``remote_url``.

        Git's output and the URL are dropped on failure since either can
        contain credentials.

        Args:
            remote_url: Remote repository URL.
            branch: Remote branch to update.

        Raises:
            PushFailedError: If the push fails for any reason.
        """
        try:
            status, _, _ = self._git("push", "--tags", remote_url, f"HEAD:{branch}")
        except GitNotFoundError:
            raise PushFailedError(branch) from None
        if status != 0:
            raise PushFailedError(branch)
        logger.info("push_completed", branch=branch)

    # -------------------------------------------------------------------------
    # Repository Information
    # -------------------------------------------------------------------------

    def head_sha(self) -> str:
        """Get the full SHA of the HEAD commit.

        Raises:
            HeadCommitError: With git's diagnostic if HEAD cannot be resolved.
        """
        status, stdout, stderr = self._git("rev_parse", "HEAD")
        if status != 0:
            logger.debug("git_rev_parse_failed", status=status, stderr=stderr)
            raise HeadCommitError(stderr.strip() or f"git rev-parse exited {status}")
        return stdout.strip()


# =============================================================================
# Async Wrapper
# =============================================================================


class AsyncGitGateway:
    """Async wrapper for GitGateway.

    Each call runs the synchronous gateway in a worker thread and completes
    when the git process exits. Calls against the same repository are not
    serialised; callers await one operation before starting the next.

    Example:
        ```python
        gateway = AsyncGitGateway("/path/to/repo")
        files = await gateway.modified_files()
        await gateway.add(files)
        ```
    """

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize AsyncGitGateway.

        Args:
            path: Path inside the git repository. Defaults to current directory.

        Raises:
            GitNotFoundError: If git is not installed.
            NotARepositoryError: If path is not inside a git repository.
        """
        self._sync = GitGateway(path)

    @property
    def path(self) -> Path:
        """Path to the repository root."""
        return self._sync.path

    async def modified_files(self) -> list[str]:
        """List modified and untracked files that are not ignored."""
        return await asyncio.to_thread(self._sync.modified_files)

    async def add(self, files: list[str]) -> StageResult:
        """Stage files, skipping the ones git rejects."""
        return await asyncio.to_thread(self._sync.add, files)

    async def set_config(self, name: str, value: str) -> None:
        """Set a repository-local git configuration value."""
        return await asyncio.to_thread(self._sync.set_config, name, value)

    async def commit(self, message: str) -> None:
        """Create a commit on the current branch."""
        return await asyncio.to_thread(self._sync.commit, message)

    async def push(self, remote_url: str, branch: str) -> None:
        """Push HEAD and all tags to a remote branch."""
        return await asyncio.to_thread(self._sync.push, remote_url, branch)

    async def head_sha(self) -> str:
        """Get the full SHA of the HEAD commit."""
        return await asyncio.to_thread(self._sync.head_sha)
