"""Video domain model and related enums."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from snehayog.domain.models.comment import Comment


class VideoType(str, Enum):
    """Feed category a video belongs to."""

    YOG = "yog"  # long-form
    SNEHA = "sneha"  # short-form


def format_count(count: int) -> str:
    """Format a counter the way the feed displays it (1.2K, 3.4M)."""
    if count < 1000:
        return str(count)
    if count < 1_000_000:
        return f"{count / 1000:.1f}K"
    return f"{count / 1_000_000:.1f}M"


def format_relative_time(moment: datetime, now: datetime | None = None) -> str:
    """Human-readable age of a timestamp ("3 days ago", "Just now")."""
    now = now or datetime.now(tz=moment.tzinfo or timezone.utc)
    seconds = int((now - moment).total_seconds())

    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        amount = seconds // size
        if amount > 0:
            return f"{amount} {unit}{'' if amount == 1 else 's'} ago"
    return "Just now"


@dataclass(frozen=True, eq=False)
class Video:
    """
    A video in the Snehayog feed.

    Immutable value object produced by the repository layer. Two videos are
    equal when their ids match, so a refreshed copy of the same video compares
    equal to the stale one it replaces.
    """

    id: str
    title: str
    video_url: str
    uploader_id: str
    uploader_name: str
    upload_time: datetime
    description: str = ""
    thumbnail_url: str = ""
    original_video_url: str | None = None
    views: int = 0
    likes: int = 0
    shares: int = 0
    comments: tuple[Comment, ...] = ()
    video_type: VideoType = VideoType.SNEHA
    link: str | None = None
    is_long_video: bool = False
    liked_by: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Validate video data after initialization."""
        if not self.id:
            raise ValueError("Video ID cannot be empty")
        if self.views < 0 or self.likes < 0 or self.shares < 0:
            raise ValueError(f"Video counters cannot be negative: {self.id}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Video):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def with_changes(self, **changes: Any) -> Video:
        """Create a new Video instance with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def is_liked_by(self, user_id: str) -> bool:
        """Whether the given user has liked this video."""
        return user_id in self.liked_by

    @property
    def formatted_views(self) -> str:
        return format_count(self.views)

    @property
    def formatted_likes(self) -> str:
        return format_count(self.likes)

    @property
    def formatted_upload_time(self) -> str:
        return format_relative_time(self.upload_time)

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"Video(id={self.id}, title='{self.title[:50]}', uploader={self.uploader_name})"

    def __repr__(self) -> str:
        """Developer-friendly string representation."""
        return (
            f"Video(id='{self.id}', title='{self.title}', "
            f"uploader_id='{self.uploader_id}', video_type={self.video_type}, "
            f"views={self.views}, likes={self.likes})"
        )


@dataclass(frozen=True)
class VideoPage:
    """One page of the paginated video feed."""

    videos: list[Video]
    has_more: bool
    page: int = 1

    def __len__(self) -> int:
        return len(self.videos)
