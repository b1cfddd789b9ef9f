"""Environment-specific constant tables and typed lookup."""

from __future__ import annotations

import logging
from datetime import timedelta
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, TypeVar

from snehayog.domain.constants import (  # noqa: F401
    MAX_IMAGE_FILE_SIZE,
    MAX_VIDEO_FILE_SIZE,
    VALID_IMAGE_EXTENSIONS,
    VALID_VIDEO_EXTENSIONS,
    format_file_size,
    is_valid_image_extension,
    is_valid_video_extension,
)
from snehayog.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Environment(str, Enum):
    """Deployment environments the client can point at."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


_COMMON: dict[str, Any] = {
    "api_timeout": timedelta(seconds=15),
    "upload_timeout": timedelta(minutes=5),
    "short_timeout": timedelta(seconds=5),
    "auth_timeout": timedelta(seconds=10),
    "max_retries": 2,
    "retry_delay": timedelta(seconds=1),
    "long_video_threshold": timedelta(minutes=2),
}

ENVIRONMENT_TABLES: Mapping[Environment, Mapping[str, Any]] = MappingProxyType({
    Environment.DEVELOPMENT: MappingProxyType({
        **_COMMON,
        "api_base_url": "http://localhost:5000",
        "enable_ads": False,
        "enable_analytics": False,
        "video_cache_size_mb": 50,
        "max_cached_players": 3,
    }),
    Environment.STAGING: MappingProxyType({
        **_COMMON,
        "api_base_url": "https://staging-api.snehayog.app",
        "enable_ads": True,
        "enable_analytics": False,
        "video_cache_size_mb": 100,
        "max_cached_players": 5,
    }),
    Environment.PRODUCTION: MappingProxyType({
        **_COMMON,
        "api_base_url": "https://api.snehayog.app",
        "enable_ads": True,
        "enable_analytics": True,
        "video_cache_size_mb": 200,
        "max_cached_players": 5,
    }),
})

_MISSING: Any = object()


class EnvironmentConfig:
    """
    Typed read access to the constant table of the active environment.

    The active table is held as a single reference, so switching environments
    replaces every derived value at once. The environment can be chosen once at
    start-up; after that it is fixed for the life of the object.
    """

    def __init__(
        self,
        environment: Environment | str = Environment.DEVELOPMENT,
        tables: Mapping[Environment, Mapping[str, Any]] | None = None,
    ) -> None:
        self._tables = tables if tables is not None else ENVIRONMENT_TABLES
        self._environment = self._coerce(environment)
        self._table = self._tables[self._environment]
        self._locked = False

    @staticmethod
    def _coerce(environment: Environment | str) -> Environment:
        try:
            return Environment(environment)
        except ValueError as e:
            valid = ", ".join(env.value for env in Environment)
            raise ConfigurationError(
                f"Unknown environment: {environment}. Must be one of {valid}"
            ) from e

    @property
    def environment(self) -> Environment:
        return self._environment

    def set_environment(self, environment: Environment | str) -> None:
        """
        Switch the active environment.

        Raises:
            ConfigurationError: If the tag is unknown, or if a different
                environment was already set
        """
        target = self._coerce(environment)
        if self._locked:
            if target is self._environment:
                return
            raise ConfigurationError(
                f"Environment already set to {self._environment.value}; "
                f"cannot switch to {target.value}"
            )

        self._table = self._tables[target]
        self._environment = target
        self._locked = True
        logger.info("Active environment: %s", target.value)

    def get(self, key: str, expected_type: type[T], default: T = _MISSING) -> T:
        """
        Look up a value with a type check.

        Args:
            key: Table key
            expected_type: Type the value must have
            default: Returned when the key is absent or of the wrong type

        Raises:
            ConfigurationError: If the key is absent or mismatched and no
                default was given
        """
        value = self._table.get(key, _MISSING)

        if value is _MISSING:
            if default is not _MISSING:
                return default
            raise ConfigurationError(
                f"Missing configuration key '{key}' for environment {self._environment.value}"
            )

        # bool is a subclass of int; don't let flags pass as counts
        mismatched = not isinstance(value, expected_type) or (
            expected_type is int and isinstance(value, bool)
        )
        if mismatched:
            if default is not _MISSING:
                return default
            raise ConfigurationError(
                f"Configuration key '{key}' is {type(value).__name__}, "
                f"expected {expected_type.__name__}"
            )

        return value  # type: ignore[no-any-return]

    def as_dict(self) -> dict[str, Any]:
        """Copy of the active table."""
        return dict(self._table)

    # Endpoints

    @property
    def base_url(self) -> str:
        return self.get("api_base_url", str).rstrip("/")

    @property
    def api_base(self) -> str:
        return f"{self.base_url}/api"

    @property
    def health_endpoint(self) -> str:
        return f"{self.base_url}/health"

    @property
    def videos_endpoint(self) -> str:
        return f"{self.api_base}/videos"

    @property
    def auth_endpoint(self) -> str:
        return f"{self.api_base}/auth"

    @property
    def users_endpoint(self) -> str:
        return f"{self.api_base}/users"

    @property
    def ads_endpoint(self) -> str:
        return f"{self.api_base}/ads"

    # Timeouts

    @property
    def default_timeout(self) -> float:
        return self.get("api_timeout", timedelta).total_seconds()

    @property
    def upload_timeout(self) -> float:
        return self.get("upload_timeout", timedelta).total_seconds()

    @property
    def short_timeout(self) -> float:
        return self.get("short_timeout", timedelta).total_seconds()

    @property
    def auth_timeout(self) -> float:
        return self.get("auth_timeout", timedelta).total_seconds()
