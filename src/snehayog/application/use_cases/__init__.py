"""Use case implementations for application workflows."""

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

__all__ = [
    "AddCommentUseCase",
    "DeleteVideoUseCase",
    "GetUserVideosUseCase",
    "GetVideoByIdUseCase",
    "GetVideosUseCase",
    "ShareVideoUseCase",
    "ToggleLikeUseCase",
    "UploadVideoUseCase",
]
