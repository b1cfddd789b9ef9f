"""Configuration tables, settings models and providers."""

from snehayog.infrastructure.config.environment import Environment, EnvironmentConfig
from snehayog.infrastructure.config.models import AppSettings, LoggingConfig
from snehayog.infrastructure.config.yaml_provider import YamlSettingsProvider

__all__ = [
    "AppSettings",
    "Environment",
    "EnvironmentConfig",
    "LoggingConfig",
    "YamlSettingsProvider",
]
