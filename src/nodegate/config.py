from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from nodegate.constants import DEFAULT_CHECK_TIMEOUT_SECONDS, DEFAULT_TEMP_FILE_PREFIX
from nodegate.exceptions import ConfigError
from nodegate.logging import get_logger
from nodegate.models import PrerequisiteSpec

__all__ = [
    "NodegateConfig",
    "CheckConfig",
    "JobConfig",
    "load_config",
    "load_job_config",
    "get_user_config_path",
]

logger = get_logger(__name__)

PROJECT_CONFIG_NAME = "nodegate.yaml"


class CheckConfig(BaseModel):
    """Settings for prerequisite script runs.

    Attributes:
        timeout_seconds: Wall-clock ceiling per script run (default: 60s).
        temp_file_prefix: File name prefix for scripts written to nodes.
    """

    timeout_seconds: float = Field(
        default=DEFAULT_CHECK_TIMEOUT_SECONDS, gt=0.0, le=3600.0
    )
    temp_file_prefix: str = Field(default=DEFAULT_TEMP_FILE_PREFIX, min_length=1)


class JobConfig(BaseModel):
    """Per-job configuration as persisted in a job file.

    Example job.yaml:
        prerequisites:
          interpreter: linux shell script
          script: |
            test -x /opt/toolchain/bin/cc
            test "$BRANCH" != "frozen"
    """

    prerequisites: PrerequisiteSpec | None = None


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping, returning {} for an empty file.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    try:
        with open(path) as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if loaded is None:
        logger.warning("config_file_empty", path=str(path))
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(
            f"Expected a mapping at the top of {path}",
            value=type(loaded).__name__,
        )
    return loaded


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            self._config_data = _read_yaml(yaml_file)

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class NodegateConfig(BaseSettings):
    """Root configuration object containing all nodegate settings."""

    model_config = SettingsConfigDict(
        env_prefix="NODEGATE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    check: CheckConfig = Field(default_factory=CheckConfig)
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
        1. Environment variables (NODEGATE_*)
        2. Explicit config file passed to load_config (as init settings)
        3. Project YAML config (./nodegate.yaml)
        4. User YAML config (~/.config/nodegate/config.yaml)
        5. Model defaults
        """
        return (
            env_settings,
            init_settings,
            YamlConfigSource(settings_cls, Path.cwd() / PROJECT_CONFIG_NAME),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/nodegate/config.yaml
    """
    return Path.home() / ".config" / "nodegate" / "config.yaml"


def _config_error(e: ValidationError, prefix: str = "") -> ConfigError:
    first_error = e.errors()[0]
    field = ".".join(str(loc) for loc in first_error["loc"])
    return ConfigError(
        message=f"{prefix}Invalid configuration: {first_error['msg']}",
        field=field,
        value=first_error.get("input"),
    )


def load_config(config_path: Path | None = None) -> NodegateConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional explicit config file. It overrides the project
            and user files but not environment variables.

    Returns:
        NodegateConfig instance with merged configuration.

    Raises:
        ConfigError: If configuration is invalid or config_path is missing.
    """
    overrides: dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        overrides = _read_yaml(config_path)
    elif not (Path.cwd() / PROJECT_CONFIG_NAME).exists():
        logger.debug("no_project_config", using="defaults")

    try:
        return NodegateConfig(**overrides)
    except ValidationError as e:
        raise _config_error(e) from e


def load_job_config(path: Path) -> JobConfig:
    """Load a job's configuration file.

    Args:
        path: Path to the job YAML file.

    Returns:
        The parsed JobConfig. ``prerequisites`` is None when the job has no
        prerequisite script configured.

    Raises:
        ConfigError: If the file is missing, not YAML, or fails validation.
    """
    if not path.exists():
        raise ConfigError(f"Job file not found: {path}")
    data = _read_yaml(path)
    try:
        return JobConfig.model_validate(data)
    except ValidationError as e:
        raise _config_error(e, prefix=f"{path}: ") from e
