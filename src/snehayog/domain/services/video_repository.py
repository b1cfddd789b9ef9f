"""Abstract base class for video repository operations."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from snehayog.domain.models.comment import Comment
from snehayog.domain.models.video import Video, VideoPage

# Videos longer than this are filed under the long-form feed.
LONG_VIDEO_THRESHOLD_SECONDS = 120

ProgressCallback = Callable[[float], None]


class VideoRepository(ABC):
    """
    Abstract repository for video data operations.

    This interface defines the contract for reading and mutating videos on the
    Snehayog backend. Implementations handle HTTP calls, retries, error mapping
    and conversion of responses into domain objects.
    """

    @abstractmethod
    async def get_videos(self, page: int = 1, limit: int = 10) -> VideoPage:
        """
        Retrieve one page of the video feed.

        Args:
            page: 1-based page number
            limit: Number of videos per page

        Returns:
            The requested page and whether more pages exist

        Raises:
            APIError: If the API call fails
        """
        pass

    @abstractmethod
    async def get_video_by_id(self, video_id: str) -> Video:
        """
        Retrieve a single video.

        Raises:
            NotFoundError: If the video does not exist
            APIError: If the API call fails
        """
        pass

    @abstractmethod
    async def get_user_videos(self, user_id: str) -> list[Video]:
        """
        Retrieve all videos uploaded by a user.

        Raises:
            APIError: If the API call fails
        """
        pass

    @abstractmethod
    async def upload_video(
        self,
        video_path: str,
        title: str,
        description: str,
        link: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
        duration_seconds: Optional[float] = None,
    ) -> Video:
        """
        Upload a new video.

        Args:
            video_path: Local path of the video file
            title: Video title
            description: Video description
            link: Optional external link shown with the video
            on_progress: Called with upload progress between 0.0 and 1.0
            duration_seconds: Duration of the clip, used to pick the feed

        Returns:
            The created video

        Raises:
            UploadError: If the server rejects the upload
            AuthenticationError: If the user is not signed in
            APIError: If the API call fails
        """
        pass

    @abstractmethod
    async def toggle_like(self, video_id: str, user_id: str) -> Video:
        """
        Like or unlike a video on behalf of a user.

        Returns:
            The video with updated like counters
        """
        pass

    @abstractmethod
    async def add_comment(self, video_id: str, text: str, user_id: str) -> list[Comment]:
        """
        Add a comment to a video.

        Returns:
            The video's full comment list after the addition
        """
        pass

    @abstractmethod
    async def share_video(self, video_id: str) -> Video:
        """
        Record a share of a video.

        Returns:
            The video with an updated share counter
        """
        pass

    @abstractmethod
    async def delete_video(self, video_id: str) -> bool:
        """
        Delete a video owned by the signed-in user.

        Returns:
            True if the video was deleted
        """
        pass

    @abstractmethod
    async def check_server_health(self) -> bool:
        """
        Check whether the backend is reachable.

        Returns:
            True if the health endpoint answered successfully. Never raises.
        """
        pass

    async def is_long_video(self, duration_seconds: float) -> bool:
        """Classify a clip as long-form by its duration."""
        return duration_seconds > LONG_VIDEO_THRESHOLD_SECONDS
