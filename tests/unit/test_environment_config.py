"""Tests for environment constant tables."""

from __future__ import annotations

from datetime import timedelta

import pytest

from snehayog.domain.exceptions import ConfigurationError
from snehayog.infrastructure.config.environment import (
    ENVIRONMENT_TABLES,
    Environment,
    EnvironmentConfig,
    format_file_size,
    is_valid_image_extension,
    is_valid_video_extension,
)


class TestEnvironmentConfig:
    """Tests for EnvironmentConfig."""

    @pytest.mark.parametrize("environment", list(Environment))
    def test_lookup_matches_table(self, environment: Environment) -> None:
        config = EnvironmentConfig(environment)
        assert config.as_dict() == dict(ENVIRONMENT_TABLES[environment])

    def test_development_defaults(self, environment: EnvironmentConfig) -> None:
        assert environment.environment == Environment.DEVELOPMENT
        assert environment.base_url == "http://localhost:5000"
        assert environment.get("max_cached_players", int) == 3
        assert environment.default_timeout == 15.0
        assert environment.upload_timeout == 300.0

    def test_derived_endpoints(self) -> None:
        config = EnvironmentConfig(Environment.PRODUCTION)
        assert config.api_base == "https://api.snehayog.app/api"
        assert config.health_endpoint == "https://api.snehayog.app/health"
        assert config.videos_endpoint == "https://api.snehayog.app/api/videos"
        assert config.auth_endpoint == "https://api.snehayog.app/api/auth"
        assert config.users_endpoint == "https://api.snehayog.app/api/users"
        assert config.ads_endpoint == "https://api.snehayog.app/api/ads"

    def test_set_environment_switches_all_values(self, environment: EnvironmentConfig) -> None:
        environment.set_environment("staging")

        assert environment.environment == Environment.STAGING
        assert environment.as_dict() == dict(ENVIRONMENT_TABLES[Environment.STAGING])
        assert environment.videos_endpoint.startswith("https://staging-api.snehayog.app")

    def test_set_same_environment_twice_is_noop(self, environment: EnvironmentConfig) -> None:
        environment.set_environment(Environment.STAGING)
        environment.set_environment(Environment.STAGING)
        assert environment.environment == Environment.STAGING

    def test_set_different_environment_after_switch(self, environment: EnvironmentConfig) -> None:
        environment.set_environment(Environment.STAGING)
        with pytest.raises(ConfigurationError):
            environment.set_environment(Environment.PRODUCTION)
        assert environment.environment == Environment.STAGING

    def test_set_unknown_environment(self, environment: EnvironmentConfig) -> None:
        with pytest.raises(ConfigurationError):
            environment.set_environment("moon")

    def test_get_typed_value(self, environment: EnvironmentConfig) -> None:
        assert environment.get("retry_delay", timedelta) == timedelta(seconds=1)
        assert environment.get("enable_ads", bool) is False

    def test_get_missing_key_with_default(self, environment: EnvironmentConfig) -> None:
        assert environment.get("not_a_key", int, 7) == 7

    def test_get_missing_key_without_default(self, environment: EnvironmentConfig) -> None:
        with pytest.raises(ConfigurationError, match="Missing configuration key"):
            environment.get("not_a_key", int)

    def test_get_type_mismatch(self, environment: EnvironmentConfig) -> None:
        with pytest.raises(ConfigurationError):
            environment.get("api_base_url", int)
        assert environment.get("api_base_url", int, 0) == 0

    def test_bool_is_not_an_int(self, environment: EnvironmentConfig) -> None:
        with pytest.raises(ConfigurationError):
            environment.get("enable_ads", int)


class TestUploadConstraints:
    """Tests for upload constraint helpers."""

    @pytest.mark.parametrize("extension", ["mp4", ".MOV", "webm"])
    def test_valid_video_extensions(self, extension: str) -> None:
        assert is_valid_video_extension(extension)

    def test_invalid_video_extension(self) -> None:
        assert not is_valid_video_extension("exe")

    def test_image_extensions(self) -> None:
        assert is_valid_image_extension("jpeg")
        assert not is_valid_image_extension("mp4")

    def test_format_file_size(self) -> None:
        assert format_file_size(512) == "512 B"
        assert format_file_size(2048) == "2.0 KB"
        assert format_file_size(5 * 1024 * 1024) == "5.0 MB"

    def test_limits_shared_with_domain(self) -> None:
        from snehayog.domain import constants
        from snehayog.infrastructure.config import environment

        assert environment.MAX_VIDEO_FILE_SIZE == constants.MAX_VIDEO_FILE_SIZE == 100 * 1024 * 1024
        assert environment.VALID_VIDEO_EXTENSIONS is constants.VALID_VIDEO_EXTENSIONS
        assert environment.is_valid_video_extension is constants.is_valid_video_extension
