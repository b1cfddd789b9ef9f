"""Pydantic configuration models for application settings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, validator

from snehayog.infrastructure.config.environment import Environment


class LoggingConfig(BaseModel):
    """Configuration for application logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string"
    )
    file_path: str | None = Field(default=None, description="Log file path (None for console only)")
    max_file_size: int = Field(default=10485760, ge=1024, description="Max log file size in bytes (10MB)")
    backup_count: int = Field(default=5, ge=1, description="Number of backup log files to keep")

    @validator("level")
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class StorageConfig(BaseModel):
    """Where the client keeps its locally persisted session."""

    user_store_path: str = Field(
        default="~/.snehayog/session.json",
        min_length=1,
        description="JSON file holding the fallback user and bearer token",
    )

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class GoogleAuthConfig(BaseModel):
    """Configuration for Google sign-in."""

    client_secrets_file: str | None = Field(
        default=None, description="Path to the OAuth2 client secrets JSON file"
    )
    scopes: list[str] = Field(
        default=["openid", "https://www.googleapis.com/auth/userinfo.email",
                 "https://www.googleapis.com/auth/userinfo.profile"],
        description="OAuth2 scopes requested at sign-in",
    )
    open_browser: bool = Field(default=True, description="Open a browser for the consent screen")

    @validator("scopes")
    def validate_scopes(cls, v: list[str]) -> list[str]:
        """An ID token is only issued for the openid scope."""
        if "openid" not in v:
            raise ValueError("Required scope 'openid' must be included")
        return v

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class PlayerSettings(BaseModel):
    """Configuration for per-video player state managers."""

    max_cached_players: int | None = Field(
        default=None, ge=1, le=20,
        description="Live player managers to keep (None uses the environment default)",
    )
    default_quality_preset: str = Field(default="reels_feed", description="Preset for new players")

    @validator("default_quality_preset")
    def validate_preset(cls, v: str) -> str:
        """Validate the quality preset name."""
        valid_presets = {"reels_feed", "high_quality", "data_saver"}
        if v not in valid_presets:
            raise ValueError(f"Invalid quality preset: {v}. Must be one of {valid_presets}")
        return v

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class AppSettings(BaseModel):
    """
    Main settings model.

    Root object of the settings file. The environment tag selects the constant
    table in :mod:`snehayog.infrastructure.config.environment`; everything else
    configures local infrastructure.
    """

    environment: Environment = Field(default=Environment.DEVELOPMENT)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    google_auth: GoogleAuthConfig = Field(default_factory=GoogleAuthConfig)
    player: PlayerSettings = Field(default_factory=PlayerSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self.dict()

    class Config:
        """Pydantic configuration."""
        extra = "forbid"
        validate_assignment = True
