"""Git repository fixtures for releaser tests.

Every fixture builds a throwaway repository under ``tmp_path`` with
GitPython, isolated from the developer's global and system git config.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from git import Repo

TEST_EMAIL = "test@example.com"
TEST_NAME = "Test User"


@pytest.fixture(autouse=True)
def isolated_git_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep git from reading the developer's identity and config."""
    global_config = tmp_path / "gitconfig"
    global_config.write_text("")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")
    for var in (
        "EMAIL",
        "GIT_AUTHOR_NAME",
        "GIT_AUTHOR_EMAIL",
        "GIT_COMMITTER_NAME",
        "GIT_COMMITTER_EMAIL",
    ):
        monkeypatch.delenv(var, raising=False)
    yield


def _configure_identity(repo: Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "email", TEST_EMAIL)
        writer.set_value("user", "name", TEST_NAME)


@pytest.fixture
def git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository with an initial commit.

    The repository ignores ``*.log`` through a committed ``.gitignore``.

    Yields:
        Path to the repository root.
    """
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    repo = Repo.init(repo_path)
    _configure_identity(repo)

    (repo_path / "README.md").write_text("# Test Repo\n")
    (repo_path / ".gitignore").write_text("*.log\n")
    repo.index.add(["README.md", ".gitignore"])
    repo.index.commit("Initial commit")

    yield repo_path


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """Create a git repository without commits or a configured identity.

    ``user.useConfigOnly`` stops git from guessing an identity, so a commit
    fails until ``user.name`` and ``user.email`` are set.
    """
    repo_path = tmp_path / "empty"
    repo_path.mkdir()
    repo = Repo.init(repo_path)
    with repo.config_writer() as writer:
        writer.set_value("user", "useConfigOnly", "true")
    return repo_path


@pytest.fixture
def git_repo_with_remote(git_repo: Path, tmp_path: Path) -> tuple[Path, Path]:
    """Pair the repository fixture with an empty bare remote.

    Returns:
        Tuple of (local_repo_path, remote_repo_path).
    """
    remote_path = tmp_path / "remote.git"
    Repo.init(remote_path, bare=True)
    return git_repo, remote_path


@pytest.fixture
def non_git_dir(tmp_path: Path) -> Path:
    """Create a temporary directory that is not a git repository."""
    dir_path = tmp_path / "not_a_repo"
    dir_path.mkdir()
    return dir_path
