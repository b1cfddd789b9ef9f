"""Use cases for reading the video feed."""

from __future__ import annotations

import logging

from snehayog.domain.exceptions import ValidationError
from snehayog.domain.models.video import Video, VideoPage
from snehayog.domain.services.video_repository import VideoRepository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 50


def require_id(field: str, value: str) -> str:
    """Reject empty or blank identifiers."""
    if not value or not value.strip():
        raise ValidationError(field, value, "must not be empty")
    return value.strip()


class GetVideosUseCase:
    """
    Fetch one page of the video feed.

    Pagination arguments are validated before the repository is called:
    ``page`` must be at least 1 and ``limit`` between 1 and 50.
    """

    def __init__(self, repository: VideoRepository) -> None:
        self.repository = repository

    async def execute(self, page: int = 1, limit: int = 10) -> VideoPage:
        """
        Execute the use case.

        Raises:
            ValidationError: If page or limit is out of range
        """
        if page < 1:
            raise ValidationError("page", page, "must be at least 1")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError("limit", limit, f"must be between 1 and {MAX_PAGE_SIZE}")

        logger.debug("Loading feed page %d (limit %d)", page, limit)
        return await self.repository.get_videos(page=page, limit=limit)


class GetVideoByIdUseCase:
    """Fetch a single video."""

    def __init__(self, repository: VideoRepository) -> None:
        self.repository = repository

    async def execute(self, video_id: str) -> Video:
        return await self.repository.get_video_by_id(require_id("video_id", video_id))


class GetUserVideosUseCase:
    """Fetch every video uploaded by a user."""

    def __init__(self, repository: VideoRepository) -> None:
        self.repository = repository

    async def execute(self, user_id: str) -> list[Video]:
        return await self.repository.get_user_videos(require_id("user_id", user_id))
