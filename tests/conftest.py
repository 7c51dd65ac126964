from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from click.testing import CliRunner

# Register fixture plugins from tests/fixtures/
pytest_plugins = [
    "tests.fixtures.config",
    "tests.fixtures.git",
]


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog to write quietly to stderr during tests."""
    from releaser.logging import clear_context, configure_logging

    configure_logging(level=logging.WARNING)
    yield
    clear_context()


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory, restoring the cwd afterwards."""
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Remove RELEASER_ variables and hide the user's config file."""
    for key in list(os.environ.keys()):
        if key.startswith("RELEASER_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(
        "releaser.config.get_user_config_path",
        lambda: tmp_path / "no-user-config.yaml",
    )
    yield


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
