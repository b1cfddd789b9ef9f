"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import tempfile
from datetime import datetime, timezone, timedelta
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest
import yaml

from snehayog.domain.models.comment import Comment
from snehayog.domain.models.user import CachedUser
from snehayog.domain.models.video import Video, VideoPage, VideoType
from snehayog.domain.services.sign_in_service import SignInService, UserStore
from snehayog.domain.services.video_repository import VideoRepository
from snehayog.infrastructure.config.environment import EnvironmentConfig
from snehayog.infrastructure.config.models import AppSettings


@pytest.fixture
def sample_settings_data(tmp_path: Path) -> dict[str, Any]:
    """Sample settings data for testing."""
    return {
        "environment": "staging",
        "storage": {
            "user_store_path": str(tmp_path / "session.json"),
        },
        "google_auth": {
            "client_secrets_file": "test_client_secrets.json",
            "scopes": ["openid", "email", "profile"],
            "open_browser": False,
        },
        "player": {
            "max_cached_players": 4,
            "default_quality_preset": "data_saver",
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "file_path": None,
            "max_file_size": 10485760,
            "backup_count": 5,
        },
    }


@pytest.fixture
def temp_settings_file(sample_settings_data: dict[str, Any]) -> Path:
    """Create a temporary settings file for testing."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
        yaml.dump(sample_settings_data, f)
        return Path(f.name)


@pytest.fixture
def app_settings(sample_settings_data: dict[str, Any]) -> AppSettings:
    """Create an AppSettings instance for testing."""
    return AppSettings(**sample_settings_data)


@pytest.fixture
def environment() -> EnvironmentConfig:
    """Development environment table."""
    return EnvironmentConfig()


@pytest.fixture
def sample_comment() -> Comment:
    return Comment(
        id="c1",
        text="Great video!",
        user_id="u2",
        user_name="Commenter",
        created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_video(sample_comment: Comment) -> Video:
    """Create a sample short video."""
    return Video(
        id="v1",
        title="Morning Yoga",
        description="Stretching routine",
        video_url="http://localhost:5000/uploads/v1.mp4",
        thumbnail_url="http://localhost:5000/uploads/v1.jpg",
        uploader_id="u1",
        uploader_name="Asha",
        upload_time=datetime.now(timezone.utc) - timedelta(days=2),
        views=1500,
        likes=12,
        shares=3,
        comments=(sample_comment,),
        video_type=VideoType.SNEHA,
        liked_by=frozenset({"u2"}),
    )


@pytest.fixture
def sample_user() -> CachedUser:
    return CachedUser(id="u1", name="A", token="t1", email="a@example.com")


@pytest.fixture
def sample_video_api_data() -> dict[str, Any]:
    """A video document as the backend returns it."""
    return {
        "_id": "v1",
        "videoName": "Morning Yoga",
        "description": "Stretching routine",
        "videoUrl": "/uploads/v1.mp4",
        "thumbnailUrl": "https://cdn.example.com/v1.jpg",
        "uploader": {"_id": "mongo1", "googleId": "u1", "name": "Asha"},
        "uploadedAt": "2024-05-01T12:00:00.000Z",
        "views": 1500,
        "likes": 12,
        "shares": 3,
        "videoType": "sneha",
        "likedBy": ["u2"],
        "comments": [
            {
                "_id": "c1",
                "text": "Great video!",
                "userId": "u2",
                "userName": "Commenter",
                "createdAt": "2024-05-01T13:00:00Z",
            }
        ],
    }


@pytest.fixture
def mock_video_repository(sample_video: Video) -> AsyncMock:
    """Create a mock video repository."""
    mock = AsyncMock(spec=VideoRepository)
    mock.get_videos.return_value = VideoPage(videos=[sample_video], has_more=False)
    mock.get_video_by_id.return_value = sample_video
    mock.get_user_videos.return_value = [sample_video]
    mock.upload_video.return_value = sample_video
    mock.toggle_like.return_value = sample_video
    mock.add_comment.return_value = list(sample_video.comments)
    mock.share_video.return_value = sample_video
    mock.delete_video.return_value = True
    mock.check_server_health.return_value = True
    return mock


@pytest.fixture
def mock_sign_in_service() -> AsyncMock:
    """Create a mock sign-in service."""
    mock = AsyncMock(spec=SignInService)
    mock.sign_in.return_value = None
    mock.sign_out.return_value = None
    mock.fetch_current_user.return_value = None
    return mock


@pytest.fixture
def mock_user_store() -> Mock:
    """Create a mock user store holding nothing."""
    mock = Mock(spec=UserStore)
    mock.load.return_value = None
    mock.get_token.return_value = None
    return mock


def make_response(status_code: int = 200, json_data: Any = None, url: str = "http://test") -> Mock:
    """Build a stand-in for requests.Response."""
    import json

    response = Mock()
    response.status_code = status_code
    response.url = url
    response.content = b"" if json_data is None else json.dumps(json_data).encode()
    response.json.side_effect = (
        ValueError("No JSON") if json_data is None else (lambda: json.loads(response.content))
    )
    return response


@pytest.fixture
def response_factory():
    return make_response
