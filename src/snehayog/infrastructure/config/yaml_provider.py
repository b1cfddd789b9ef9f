"""YAML-based settings provider implementation."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from snehayog.domain.exceptions import ConfigurationError
from snehayog.infrastructure.config.environment import Environment
from snehayog.infrastructure.config.models import (
    AppSettings,
    GoogleAuthConfig,
    LoggingConfig,
    PlayerSettings,
)

# ${VAR_NAME} or ${VAR_NAME:default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


class YamlSettingsProvider:
    """
    Settings provider that loads the client settings from a YAML file.

    Supports environment variable substitution and validates the result with
    the Pydantic settings models.
    """

    def __init__(self, config_path: str | Path) -> None:
        """
        Initialize the YAML settings provider.

        Args:
            config_path: Path to the YAML settings file

        Raises:
            ConfigurationError: If the file cannot be loaded or is invalid
        """
        self.config_path = Path(config_path)
        self._settings: AppSettings | None = None
        self._load_settings()

    def _load_settings(self) -> None:
        """Load and validate settings from the YAML file."""
        if not self.config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                raw_settings = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in configuration file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

        if not raw_settings:
            raise ConfigurationError("Configuration file is empty")

        raw_settings = self._substitute_env_vars(raw_settings)

        try:
            self._settings = AppSettings(**raw_settings)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e
        except TypeError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

    def _substitute_env_vars(self, obj: Any) -> Any:
        """
        Recursively substitute environment variables in the settings.

        Supports ${VAR_NAME} and ${VAR_NAME:default_value} syntax.
        """
        if isinstance(obj, dict):
            return {key: self._substitute_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._substitute_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            return self._substitute_string_env_vars(obj)
        else:
            return obj

    def _substitute_string_env_vars(self, value: str) -> str:
        """Substitute environment variables in a string value."""

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.getenv(var_name, default_value)

        return _ENV_VAR_PATTERN.sub(replace_var, value)

    @property
    def settings(self) -> AppSettings:
        """Get the loaded settings."""
        if self._settings is None:
            raise ConfigurationError("Configuration not loaded")
        return self._settings

    def get_environment(self) -> Environment:
        return self.settings.environment

    def get_user_store_path(self) -> Path:
        """Get the expanded path of the local session file."""
        return Path(self.settings.storage.user_store_path).expanduser()

    def get_google_auth_config(self) -> GoogleAuthConfig:
        return self.settings.google_auth

    def get_player_settings(self) -> PlayerSettings:
        return self.settings.player

    def get_logging_config(self) -> LoggingConfig:
        return self.settings.logging

    def reload(self) -> None:
        """Reload settings from the file."""
        self._settings = None
        self._load_settings()
