"""HTTP implementation of the video repository."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

from snehayog.domain.exceptions import APIError, NotFoundError, UploadError
from snehayog.domain.models.comment import Comment
from snehayog.domain.models.video import Video, VideoPage, VideoType
from snehayog.domain.services.video_repository import ProgressCallback, VideoRepository
from snehayog.infrastructure.config.environment import EnvironmentConfig
from snehayog.infrastructure.http.client import ApiClient
from snehayog.infrastructure.http.mappers import parse_comments, parse_video, parse_videos

logger = logging.getLogger(__name__)


class HttpVideoRepository(VideoRepository):
    """
    Snehayog REST API implementation of the video repository.

    Talks to the ``/api/videos`` resource family and the health endpoint.
    """

    def __init__(self, client: ApiClient) -> None:
        """
        Initialize the repository.

        Args:
            client: API client bound to the active environment
        """
        self.client = client

    @property
    def _env(self) -> EnvironmentConfig:
        return self.client.environment

    async def get_videos(self, page: int = 1, limit: int = 10) -> VideoPage:
        """Retrieve one page of the video feed."""
        data = await self.client.get_json(
            self._env.videos_endpoint, params={"page": page, "limit": limit}
        )
        if not isinstance(data, dict):
            raise APIError("Unexpected response shape for video feed")

        videos = parse_videos(data.get("videos") or [], self._env.base_url)
        logger.debug("Fetched %d videos (page %d)", len(videos), page)
        return VideoPage(videos=videos, has_more=bool(data.get("hasMore", False)), page=page)

    async def get_video_by_id(self, video_id: str) -> Video:
        """Retrieve a single video."""
        try:
            data = await self.client.get_json(f"{self._env.videos_endpoint}/{video_id}")
        except APIError as e:
            if e.status_code == 404:
                raise NotFoundError("video", video_id, e) from e
            raise
        return parse_video(data, self._env.base_url)

    async def get_user_videos(self, user_id: str) -> list[Video]:
        """Retrieve all videos uploaded by a user."""
        data = await self.client.get_json(f"{self._env.videos_endpoint}/user/{user_id}")
        items = data.get("videos", []) if isinstance(data, dict) else data or []
        return parse_videos(items, self._env.base_url)

    async def upload_video(
        self,
        video_path: str,
        title: str,
        description: str,
        link: str | None = None,
        on_progress: ProgressCallback | None = None,
        duration_seconds: float | None = None,
    ) -> Video:
        """Upload a new video as a multipart form."""
        is_long = (
            await self.is_long_video(duration_seconds) if duration_seconds is not None else False
        )
        fields = {
            "videoName": title,
            "description": description,
            "videoType": VideoType.YOG.value if is_long else VideoType.SNEHA.value,
        }
        if link:
            fields["link"] = link

        path = Path(video_path)
        content_type = mimetypes.guess_type(path.name)[0] or "video/mp4"

        if on_progress:
            on_progress(0.0)

        with open(path, "rb") as video_file:
            try:
                response = await self.client.request(
                    "POST",
                    f"{self._env.videos_endpoint}/upload",
                    data=fields,
                    files={"video": (path.name, video_file, content_type)},
                    timeout=self._env.upload_timeout,
                    auth_required=True,
                    retry=False,
                )
            except APIError as e:
                if e.status_code in (400, 413, 415):
                    raise UploadError(e.message, e) from e
                raise

        if on_progress:
            on_progress(1.0)

        data = self.client.decode_json(response)
        video_data = data.get("video", data) if isinstance(data, dict) else {}
        video = parse_video(video_data, self._env.base_url)
        logger.info("Uploaded video %s (%s)", video.id, video.video_type.value)
        return video.with_changes(is_long_video=is_long)

    async def toggle_like(self, video_id: str, user_id: str) -> Video:
        """Like or unlike a video."""
        data = await self.client.post_json(
            f"{self._env.videos_endpoint}/{video_id}/like",
            {"userId": user_id},
            auth_required=True,
        )
        return parse_video(data, self._env.base_url)

    async def add_comment(self, video_id: str, text: str, user_id: str) -> list[Comment]:
        """Add a comment and return the video's comment list."""
        data = await self.client.post_json(
            f"{self._env.videos_endpoint}/{video_id}/comments",
            {"userId": user_id, "text": text},
            auth_required=True,
        )
        items = data.get("comments", []) if isinstance(data, dict) else data or []
        return parse_comments(items)

    async def share_video(self, video_id: str) -> Video:
        """Record a share."""
        data = await self.client.post_json(f"{self._env.videos_endpoint}/{video_id}/share")
        return parse_video(data, self._env.base_url)

    async def delete_video(self, video_id: str) -> bool:
        """Delete one of the signed-in user's videos."""
        try:
            await self.client.delete_json(
                f"{self._env.videos_endpoint}/{video_id}", auth_required=True
            )
        except APIError as e:
            if e.status_code == 404:
                raise NotFoundError("video", video_id, e) from e
            raise
        logger.info("Deleted video %s", video_id)
        return True

    async def check_server_health(self) -> bool:
        """Check the health endpoint; never raises."""
        try:
            await self.client.request(
                "GET", self._env.health_endpoint, timeout=self._env.short_timeout, retry=False
            )
            return True
        except Exception as e:
            logger.warning("Health check failed: %s", e)
            return False
