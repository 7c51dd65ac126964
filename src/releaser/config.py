from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from releaser.exceptions import ConfigError
from releaser.logging import get_logger

__all__ = [
    "DEFAULT_ASSETS",
    "DEFAULT_COMMIT_MESSAGE",
    "GitConfig",
    "ReleaserConfig",
    "get_project_config_path",
    "get_user_config_path",
    "load_config",
]

logger = get_logger(__name__)

#: Files committed by default when a release runs
DEFAULT_ASSETS: tuple[str, ...] = ("CHANGELOG.md", "pyproject.toml")

#: ``string.Template`` for the release commit; $version and $notes are filled in
DEFAULT_COMMIT_MESSAGE = "chore(release): $version [skip ci]\n\n$notes"

PROJECT_CONFIG_NAME = "releaser.yaml"

#: Project config path chosen by load_config() for the current load
_project_config_path: ContextVar[Path | None] = ContextVar(
    "releaser_project_config_path", default=None
)


class GitConfig(BaseModel):
    """Settings for the release commit and push.

    Attributes:
        repository_url: Remote to push to. May embed credentials, so it is
            kept as a secret and never rendered.
        branch: Remote branch receiving the release commit.
        assets: Glob patterns of modified files to commit. Empty means all.
        message: Commit message template ($version, $notes).
        author_name: Written to ``user.name`` before committing when set.
        author_email: Written to ``user.email`` before committing when set.
    """

    repository_url: SecretStr | None = None
    branch: str = "main"
    assets: list[str] = Field(default_factory=lambda: list(DEFAULT_ASSETS))
    message: str = DEFAULT_COMMIT_MESSAGE
    author_name: str | None = None
    author_email: str | None = None

    @field_validator("branch")
    @classmethod
    def check_branch_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("branch cannot be empty")
        return v.strip()


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that loads from a YAML file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    field=None,
                    value=type(loaded).__name__,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class ReleaserConfig(BaseSettings):
    """Root configuration object containing all releaser settings."""

    model_config = SettingsConfigDict(
        env_prefix="RELEASER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    git: GitConfig = Field(default_factory=GitConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init arguments
        2. Environment variables (RELEASER_*)
        3. Project YAML config (./releaser.yaml or the path given to load_config)
        4. User YAML config (~/.config/releaser/config.yaml)
        """
        project_config_path = _project_config_path.get() or get_project_config_path()
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_project_config_path() -> Path:
    """Get the default project configuration path (``./releaser.yaml``)."""
    return Path.cwd() / PROJECT_CONFIG_NAME


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/releaser/config.yaml
    """
    return Path.home() / ".config" / "releaser" / "config.yaml"


def load_config(config_path: Path | None = None) -> ReleaserConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to project config file. Defaults to
            ./releaser.yaml

    Returns:
        ReleaserConfig instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if config_path is None:
        config_path = get_project_config_path()

    if not config_path.exists():
        logger.info("project_config_not_found", path=str(config_path))

    token = _project_config_path.set(config_path)
    try:
        return ReleaserConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
