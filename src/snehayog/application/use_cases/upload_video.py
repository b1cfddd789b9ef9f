"""Use case for uploading a video."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from snehayog.domain.constants import (
    MAX_VIDEO_FILE_SIZE,
    VALID_VIDEO_EXTENSIONS,
    is_valid_video_extension,
)
from snehayog.domain.exceptions import (
    APIError,
    FileTooLargeError,
    UnsupportedFileTypeError,
    ValidationError,
)
from snehayog.domain.models.video import Video
from snehayog.domain.services.video_repository import ProgressCallback, VideoRepository

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


class UploadVideoUseCase:
    """
    Validate an upload locally, check the server is up, then upload.

    All checks run before any bytes are sent.
    """

    def __init__(self, repository: VideoRepository, max_file_size: int = MAX_VIDEO_FILE_SIZE) -> None:
        """
        Initialize the use case.

        Args:
            repository: Video repository to upload through
            max_file_size: Largest accepted file in bytes
        """
        self.repository = repository
        self.max_file_size = max_file_size

    def validate(self, video_path: str, title: str, description: str) -> Path:
        """
        Check the upload arguments and the file on disk.

        Returns:
            The path of the video file

        Raises:
            ValidationError: If a field is empty or too long, or the file is missing
            FileTooLargeError: If the file exceeds the size limit
            UnsupportedFileTypeError: If the extension is not accepted
        """
        if not video_path:
            raise ValidationError("video_path", video_path, "must not be empty")
        if not title or not title.strip():
            raise ValidationError("title", title, "must not be empty")
        if not description or not description.strip():
            raise ValidationError("description", description, "must not be empty")
        if len(title.strip()) > MAX_TITLE_LENGTH:
            raise ValidationError("title", title, f"must be at most {MAX_TITLE_LENGTH} characters")
        if len(description.strip()) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                "description", description, f"must be at most {MAX_DESCRIPTION_LENGTH} characters"
            )

        path = Path(video_path).expanduser()
        if not path.is_file():
            raise ValidationError("video_path", video_path, "file does not exist")

        size = path.stat().st_size
        if size > self.max_file_size:
            raise FileTooLargeError(size, self.max_file_size)

        extension = path.suffix.lstrip(".").lower()
        if not is_valid_video_extension(extension):
            raise UnsupportedFileTypeError(extension, VALID_VIDEO_EXTENSIONS)

        return path

    async def execute(
        self,
        video_path: str,
        title: str,
        description: str,
        link: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
        duration_seconds: Optional[float] = None,
    ) -> Video:
        """
        Execute the upload.

        Raises:
            ValidationError, FileTooLargeError, UnsupportedFileTypeError: On bad input
            APIError: If the server is unavailable or rejects the request
        """
        path = self.validate(video_path, title, description)

        if not await self.repository.check_server_health():
            raise APIError("Server is not available. Please try again later.", 503)

        logger.info("Uploading %s as '%s'", path.name, title.strip())
        return await self.repository.upload_video(
            video_path=str(path),
            title=title.strip(),
            description=description.strip(),
            link=link.strip() if link and link.strip() else None,
            on_progress=on_progress,
            duration_seconds=duration_seconds,
        )
