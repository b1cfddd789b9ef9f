"""Use cases for acting on a single video."""

from __future__ import annotations

from snehayog.application.use_cases.get_videos import require_id
from snehayog.domain.exceptions import ValidationError
from snehayog.domain.models.comment import Comment
from snehayog.domain.models.video import Video
from snehayog.domain.services.video_repository import VideoRepository

MAX_COMMENT_LENGTH = 500


class ToggleLikeUseCase:
    """Like or unlike a video for a user."""

    def __init__(self, repository: VideoRepository) -> None:
        self.repository = repository

    async def execute(self, video_id: str, user_id: str) -> Video:
        return await self.repository.toggle_like(
            require_id("video_id", video_id), require_id("user_id", user_id)
        )


class AddCommentUseCase:
    """Add a comment to a video and return the updated comment list."""

    def __init__(self, repository: VideoRepository) -> None:
        self.repository = repository

    async def execute(self, video_id: str, text: str, user_id: str) -> list[Comment]:
        if not text or not text.strip():
            raise ValidationError("text", text, "must not be empty")
        if len(text.strip()) > MAX_COMMENT_LENGTH:
            raise ValidationError("text", text, f"must be at most {MAX_COMMENT_LENGTH} characters")

        return await self.repository.add_comment(
            require_id("video_id", video_id), text.strip(), require_id("user_id", user_id)
        )


class ShareVideoUseCase:
    """Record a share of a video."""

    def __init__(self, repository: VideoRepository) -> None:
        self.repository = repository

    async def execute(self, video_id: str) -> Video:
        return await self.repository.share_video(require_id("video_id", video_id))


class DeleteVideoUseCase:
    """Delete a video owned by the signed-in user."""

    def __init__(self, repository: VideoRepository) -> None:
        self.repository = repository

    async def execute(self, video_id: str) -> bool:
        return await self.repository.delete_video(require_id("video_id", video_id))
