"""Dependency injection container configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from dependency_injector import containers, providers

from snehayog.application.controllers.auth_controller import AuthController
from snehayog.application.controllers.player_state_manager import VideoPlayerStateManager
from snehayog.application.services.player_registry import PlayerStateRegistry
from snehayog.application.use_cases.get_videos import (
    GetUserVideosUseCase,
    GetVideoByIdUseCase,
    GetVideosUseCase,
)
from snehayog.application.use_cases.upload_video import UploadVideoUseCase
from snehayog.application.use_cases.video_actions import (
    AddCommentUseCase,
    DeleteVideoUseCase,
    ShareVideoUseCase,
    ToggleLikeUseCase,
)
from snehayog.domain.services.comment_data_source import CommentDataSource
from snehayog.domain.services.video_repository import VideoRepository
from snehayog.infrastructure.auth.google_sign_in import GoogleSignInService
from snehayog.infrastructure.config.environment import EnvironmentConfig
from snehayog.infrastructure.config.yaml_provider import YamlSettingsProvider
from snehayog.infrastructure.http.client import ApiClient
from snehayog.infrastructure.http.comment_sources import AdCommentDataSource, VideoCommentDataSource
from snehayog.infrastructure.http.video_repository import HttpVideoRepository
from snehayog.infrastructure.logging_setup import configure_logging
from snehayog.infrastructure.storage.json_user_store import JsonFileUserStore


def _build_environment_config(settings_provider: YamlSettingsProvider) -> EnvironmentConfig:
    """Environment table switched once to the tag named in the settings file."""
    environment = EnvironmentConfig()
    environment.set_environment(settings_provider.get_environment())
    return environment


def _max_cached_players(
    settings_provider: YamlSettingsProvider, environment: EnvironmentConfig
) -> int:
    configured = settings_provider.get_player_settings().max_cached_players
    if configured is not None:
        return configured
    return environment.get("max_cached_players", int)


def _user_id_provider(auth_controller: AuthController) -> Callable[[], Optional[str]]:
    def current_user_id() -> Optional[str]:
        user = auth_controller.user
        return user.id if user is not None else None

    return current_user_id


class Container(containers.DeclarativeContainer):
    """
    Dependency injection container for the Snehayog client.

    One container is built per settings file. Singletons live as long as the
    container, so two containers never share state.
    """

    # Configuration
    config_file_path = providers.Configuration()

    settings_provider = providers.Singleton(
        YamlSettingsProvider,
        config_path=config_file_path,
    )

    environment_config = providers.Singleton(
        _build_environment_config,
        settings_provider=settings_provider,
    )

    # Infrastructure
    user_store = providers.Singleton(
        JsonFileUserStore,
        path=settings_provider.provided.get_user_store_path.call(),
    )

    api_client = providers.Singleton(
        ApiClient,
        environment=environment_config,
        token_provider=user_store.provided.get_token,
    )

    sign_in_service = providers.Singleton(
        GoogleSignInService,
        client=api_client,
        config=settings_provider.provided.get_google_auth_config.call(),
    )

    video_repository = providers.Singleton(HttpVideoRepository, client=api_client)

    # Use cases
    get_videos_use_case = providers.Factory(GetVideosUseCase, repository=video_repository)
    get_video_by_id_use_case = providers.Factory(GetVideoByIdUseCase, repository=video_repository)
    get_user_videos_use_case = providers.Factory(GetUserVideosUseCase, repository=video_repository)
    upload_video_use_case = providers.Factory(UploadVideoUseCase, repository=video_repository)
    toggle_like_use_case = providers.Factory(ToggleLikeUseCase, repository=video_repository)
    add_comment_use_case = providers.Factory(AddCommentUseCase, repository=video_repository)
    share_video_use_case = providers.Factory(ShareVideoUseCase, repository=video_repository)
    delete_video_use_case = providers.Factory(DeleteVideoUseCase, repository=video_repository)

    # Controllers
    auth_controller = providers.Singleton(
        AuthController,
        sign_in_service=sign_in_service,
        user_store=user_store,
    )

    current_user_id = providers.Singleton(_user_id_provider, auth_controller=auth_controller)

    video_comment_source = providers.Factory(
        VideoCommentDataSource,
        client=api_client,
        user_id_provider=current_user_id,
    )

    ad_comment_source = providers.Factory(
        AdCommentDataSource,
        client=api_client,
        user_id_provider=current_user_id,
    )

    player_state_manager = providers.Factory(
        VideoPlayerStateManager,
        quality_preset=settings_provider.provided.get_player_settings.call().default_quality_preset,
    )

    player_registry = providers.Singleton(
        PlayerStateRegistry,
        manager_factory=player_state_manager.provider,
        max_managers=providers.Callable(
            _max_cached_players,
            settings_provider=settings_provider,
            environment=environment_config,
        ),
    )


def create_container(config_path: str | Path) -> Container:
    """
    Create and configure the dependency injection container.

    The settings file is loaded straight away so configuration errors
    surface here.

    Args:
        config_path: Path to the settings file

    Returns:
        Configured container instance

    Raises:
        ConfigurationError: If the settings file is missing or invalid
    """
    container = Container()
    container.config_file_path.override(str(config_path))
    container.settings_provider()
    return container


def setup_logging(container: Container) -> logging.Logger:
    """Configure package logging from the container's settings."""
    return configure_logging(get_settings_provider(container).get_logging_config())


def get_settings_provider(container: Container) -> YamlSettingsProvider:
    return container.settings_provider()


def get_environment_config(container: Container) -> EnvironmentConfig:
    return container.environment_config()


def get_video_repository(container: Container) -> VideoRepository:
    return container.video_repository()


def get_auth_controller(container: Container) -> AuthController:
    return container.auth_controller()


def get_player_registry(container: Container) -> PlayerStateRegistry:
    return container.player_registry()


def get_video_comment_source(container: Container, video_id: str) -> CommentDataSource:
    """Comment data source bound to one video."""
    return container.video_comment_source(video_id=video_id)


def get_ad_comment_source(container: Container, ad_id: str) -> CommentDataSource:
    """Comment data source bound to one ad."""
    return container.ad_comment_source(ad_id=ad_id)
