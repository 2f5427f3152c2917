"""SDK settings using pydantic-settings with an optional YAML overlay.

These are process-wide settings (where the CLI lives, how errors are
rendered, log level). Per-query knobs belong in ClaudeCodeOptions.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Environment variable naming an optional YAML settings file
CONFIG_FILE_ENV = "CLAUDE_SDK_CONFIG_FILE"

# Common install locations checked after PATH
DEFAULT_SEARCH_PATHS = [
    "~/.npm-global/bin",
    "/usr/local/bin",
    "~/.local/bin",
    "~/node_modules/.bin",
    "~/.yarn/bin",
]


class CLIConfig(BaseModel):
    """Location and process handling of the Claude Code CLI."""

    path: Optional[str] = Field(None, description="Explicit path to the CLI binary")
    entrypoint: str = Field(
        "sdk-py", description="Value of CLAUDE_CODE_ENTRYPOINT for the child"
    )
    search_paths: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SEARCH_PATHS),
        description="Directories searched when the CLI is not on PATH",
    )
    terminate_timeout: float = Field(
        5.0, description="Seconds to wait after terminate before kill", gt=0
    )


class DecoderConfig(BaseModel):
    """Rendering of undecodable output lines."""

    preview_length: int = Field(
        100, description="Characters of a bad line kept in error messages", ge=10
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Logging level")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()


class Settings(BaseSettings):
    """Unified settings for the Claude CLI SDK."""

    cli: CLIConfig = Field(default_factory=CLIConfig)
    decoder: DecoderConfig = Field(default_factory=DecoderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="CLAUDE_SDK_",
        env_nested_delimiter="__",  # Allows CLAUDE_SDK_CLI__PATH
        extra="ignore",
        validate_default=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """Add YAML and legacy flat environment variables as sources."""
        from pydantic_settings.sources import PydanticBaseSettingsSource

        class YamlConfigSource(PydanticBaseSettingsSource):
            """Load settings from the YAML file named in the environment."""

            def get_field_value(
                self, field: FieldInfo, field_name: str
            ) -> Tuple[Any, str, bool]:
                data = self()
                if field_name in data:
                    return data[field_name], field_name, True
                return None, field_name, False

            def __call__(self) -> Dict[str, Any]:
                return cls._yaml_config_source()

        class LegacyEnvVars(PydanticBaseSettingsSource):
            """Load flat environment variables."""

            def get_field_value(
                self, field: FieldInfo, field_name: str
            ) -> Tuple[Any, str, bool]:
                data = self()
                if field_name in data:
                    return data[field_name], field_name, True
                return None, field_name, False

            def __call__(self) -> Dict[str, Any]:
                return cls._legacy_env_source()

        # Precedence (first source wins):
        # init > nested env > legacy env > yaml > defaults
        return (
            init_settings,
            env_settings,
            LegacyEnvVars(settings_cls),
            YamlConfigSource(settings_cls),
            file_secret_settings,
        )

    @classmethod
    def _yaml_config_source(cls) -> Dict[str, Any]:
        """Load configuration from the YAML files named in the environment.

        CLAUDE_SDK_CONFIG_FILE may list several files separated by
        os.pathsep; later files override earlier ones key by key.
        """
        config_paths = os.getenv(CONFIG_FILE_ENV)
        if not config_paths:
            return {}

        config_data: Dict[str, Any] = {}

        for config_path in config_paths.split(os.pathsep):
            if not config_path:
                continue

            config_file = Path(config_path).expanduser()
            if not config_file.exists():
                logger.warning(f"Settings file {config_file} does not exist, ignoring")
                continue

            try:
                with open(config_file) as f:
                    file_data = yaml.safe_load(f) or {}
                logger.debug(f"Loaded configuration from {config_file}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load {config_file}: {e}")
                continue

            if not isinstance(file_data, dict):
                logger.warning(f"Ignoring {config_file}: top level is not a mapping")
                continue

            config_data = _deep_merge(config_data, file_data)

        # Handle None values from YAML (e.g., "cli:" with no content)
        for key in list(config_data.keys()):
            if config_data[key] is None:
                config_data[key] = {}

        return config_data

    @classmethod
    def _legacy_env_source(cls) -> Dict[str, Any]:
        """Support flat environment variables."""
        config_data: Dict[str, Any] = {}

        legacy_mappings = {
            "CLAUDE_CLI_PATH": ("cli", "path"),
            "CLAUDE_SDK_LOG_LEVEL": ("logging", "level"),
        }

        for env_key, path in legacy_mappings.items():
            value = os.getenv(env_key)
            if value is None:
                continue

            current = config_data
            for key in path[:-1]:
                current = current.setdefault(key, {})
            current[path[-1]] = value

        return config_data


def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries, with b taking precedence."""
    result = a.copy()

    for key, value in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
