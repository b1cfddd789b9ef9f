"""Abstract contracts for domain services."""

from snehayog.domain.services.comment_data_source import CommentDataSource
from snehayog.domain.services.playback_backend import PlaybackBackend
from snehayog.domain.services.sign_in_service import SignInService, UserStore
from snehayog.domain.services.video_repository import VideoRepository

__all__ = [
    "CommentDataSource",
    "PlaybackBackend",
    "SignInService",
    "UserStore",
    "VideoRepository",
]
