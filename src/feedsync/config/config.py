"""Application configuration management for feedsync.

This module defines the settings model and settings sources for the
feedsync application, including alert wording, logging options and custom
YAML file loading capabilities.
"""

import logging
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
import yaml

from ..exceptions import ConfigLoadError
from ..types import Category
from .alert_texts import AlertTexts

logger = logging.getLogger(__name__)


class YamlFileFromFieldSource(PydanticBaseSettingsSource):
    """Load configuration from a YAML file specified by a field.

    A settings source that loads configuration from a YAML file specified
    by a field within the settings model itself. This source should be run
    after all other sources that might populate the path field.

    Attributes:
        yaml_file_encoding: Encoding to use when reading the YAML file.
        yaml_data: Cached YAML data loaded from the file.
    """

    def _get_current_state_of(self, field_name: str) -> Any:
        """Get the current state of a field from the settings model."""
        value = self.current_state.get(field_name)
        if value not in (None, PydanticUndefined):
            return value

        field_info = self.settings_cls.model_fields[field_name]
        if isinstance(field_info.validation_alias, str):
            value = self.current_state.get(field_info.validation_alias)
            if value not in (None, PydanticUndefined):
                return value
        return field_info.get_default()

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file_encoding: str | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file_encoding = yaml_file_encoding or "utf-8"
        self.yaml_data: dict[str, Any] = {}

    def _get_yaml_path(self) -> Path | None:
        """Determines the YAML path from the already processed settings state."""
        path_value = self._get_current_state_of("config_file")

        match path_value:
            case None:
                return None
            case Path():
                return path_value.expanduser()
            case str():
                return Path(path_value).expanduser()
            case _:
                raise TypeError(
                    f"Field 'config_file' must resolve to a Path or string, "
                    f"received type '{type(path_value).__name__}'"
                )

    def _read_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Reads and parses the YAML file."""
        logger.debug(
            "Reading YAML configuration file.",
            extra={"file_path": str(file_path)},
        )
        with Path.open(file_path, encoding=self.yaml_file_encoding) as f:
            loaded_yaml = yaml.safe_load(f)

        if isinstance(loaded_yaml, dict):
            return cast(dict[str, Any], loaded_yaml)
        elif loaded_yaml is None:  # empty file
            logger.info(
                "YAML configuration file is empty.",
                extra={"file_path": str(file_path)},
            )
            return {}
        else:
            raise TypeError(
                f"Invalid YAML config format: expected dict, got {type(loaded_yaml).__name__}"
            )

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value from loaded YAML data."""
        field_value = self.yaml_data.get(field_name)
        return field_value, field_name, self.field_is_complex(field)

    def __call__(self) -> dict[str, Any]:
        """Load YAML data from file specified in the config_file field."""
        try:
            yaml_path = self._get_yaml_path()
        except TypeError as e:
            raise ConfigLoadError(
                "Failed to resolve YAML configuration file path.",
            ) from e

        if yaml_path:
            try:
                self.yaml_data = self._read_yaml_file(yaml_path)
            except (TypeError, OSError, yaml.YAMLError) as e:
                raise ConfigLoadError(
                    "Failed to load or parse YAML configuration file.",
                    config_file=str(yaml_path),
                ) from e
        else:
            logger.debug("No YAML configuration file specified; skipping.")
            self.yaml_data = {}

        return self.yaml_data.copy()


class AppSettings(BaseSettings):
    """Application settings.

    Configuration is loaded from initialization arguments, environment
    variables, and an optional YAML file named by ``config_file``.

    Attributes:
        log_format: Format for application logs (human or json).
        log_level: Logging level for the application.
        log_include_stacktrace: Include full stack traces in error logs.
        config_file: Optional path to the YAML config file.
        summaries_file: Summary data file read by the replay CLI.
        category: Category filter selected when the CLI starts.
        preferred_categories: Categories served by the CLI's preference store.
        alerts: Alert titles and action labels.
    """

    log_format: Literal["human", "json"] = Field(
        default="human",
        validation_alias="LOG_FORMAT",
        description="Format for application logs ('human' or 'json').",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level for the application (e.g., DEBUG, INFO, WARNING, ERROR). Case-insensitive.",
    )
    log_include_stacktrace: bool = Field(
        default=False,
        validation_alias="LOG_INCLUDE_STACKTRACE",
        description="Include full stack traces in error logs (true/false).",
    )
    config_file: Path | None = Field(
        default=None,
        validation_alias="CONFIG_FILE",
        description="Optional path to the YAML config file.",
    )
    summaries_file: Path | None = Field(
        default=None,
        validation_alias="SUMMARIES_FILE",
        description="YAML or JSON file holding summary items for the replay CLI.",
    )
    category: Category = Field(
        default=Category.ALL,
        validation_alias="CATEGORY",
        description="Category filter applied when the CLI starts.",
    )
    preferred_categories: list[Category] = Field(
        default_factory=list[Category],
        validation_alias="PREFERRED_CATEGORIES",
        description="Categories the user prefers; empty means not configured.",
    )
    alerts: AlertTexts = Field(
        default_factory=AlertTexts,
        description="Alert titles and action labels. Usually read from the YAML file.",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_nested_delimiter="__",
        cli_ignore_unknown_args=True,
        cli_kebab_case=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v: Any) -> Any:
        """Normalize category names so 'Economy' and ' economy ' both match.

        Args:
            v: Raw value from any settings source.

        Returns:
            Normalized string, or the value unchanged if not a string.
        """
        match v:
            case str() as s if not s.strip():
                return Category.ALL
            case str() as s:
                return s.strip().lower()
            case _:
                return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order and sources for settings loading.

        Initialization parameters and environment variables are processed
        first so they can set ``config_file``; ``YamlFileFromFieldSource``
        then reads that file.

        Args:
            settings_cls: The settings class being configured.
            init_settings: Settings from initialization parameters.
            env_settings: Settings from environment variables.
            dotenv_settings: Settings from .env files.
            file_secret_settings: Settings from secret files.

        Returns:
            Tuple of settings sources in the order they should be processed.
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlFileFromFieldSource(settings_cls=settings_cls),
            file_secret_settings,
        )
