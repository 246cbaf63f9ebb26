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

from minlog.constants import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_OPERATION_LIMIT,
    ENV_PREFIX,
    PROJECT_CONFIG_FILENAME,
)
from minlog.exceptions import ConfigError
from minlog.expressions.evaluator import MissingSetting
from minlog.logging import get_logger

__all__ = [
    "MinlogConfig",
    "ParserConfig",
    "EvaluationConfig",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)


class ParserConfig(BaseModel):
    """Bounds applied while parsing expressions.

    Attributes:
        operation_limit: Node count at which the tree builder aborts
            (default: 1000, which is also the highest accepted value).
        max_depth: Maximum parenthesis nesting (default: 64).
    """

    operation_limit: int = Field(
        default=DEFAULT_OPERATION_LIMIT, ge=2, le=DEFAULT_OPERATION_LIMIT
    )
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=500)


class EvaluationConfig(BaseModel):
    """Settings for evaluating expressions against a mapping environment."""

    missing_setting: MissingSetting = MissingSetting.FALSE


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
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class MinlogConfig(BaseSettings):
    """Root configuration object containing all minlog settings.

    Attributes:
        parser: Parser bounds.
        evaluation: Evaluation policy.
        settings: Default flag values the CLI evaluates expressions against.
        verbosity: Log level used by the CLI when no -v/-q flag is given.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
    )

    parser: ParserConfig = Field(default_factory=ParserConfig)
    evaluation: EvaluationConfig = Field(default_factory=EvaluationConfig)
    settings: dict[str, bool] = Field(default_factory=dict)
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
        2. Environment variables (MINLOG_*)
        3. Project YAML config (./minlog.yaml or --config path)
        4. User YAML config (~/.config/minlog/config.yaml)
        5. Model defaults
        """
        project_config_path = (
            _ProjectPath.current or Path.cwd() / PROJECT_CONFIG_FILENAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


class _ProjectPath:
    """Holds the explicit project config path while ``load_config`` runs."""

    current: Path | None = None


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/minlog/config.yaml
    """
    return Path.home() / ".config" / "minlog" / "config.yaml"


def load_config(config_path: Path | None = None) -> MinlogConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to the project config file. Defaults to
            ./minlog.yaml

    Returns:
        MinlogConfig instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid or the YAML is malformed
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME

    if not config_path.exists():
        logger.info("project_config_not_found", path=str(config_path))

    _ProjectPath.current = config_path
    try:
        return MinlogConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _ProjectPath.current = None
