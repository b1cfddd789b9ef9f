"""Conversion of backend JSON into domain objects."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from snehayog.domain.models.comment import Comment
from snehayog.domain.models.video import Video, VideoType

logger = logging.getLogger(__name__)


def parse_datetime(value: Any) -> datetime:
    """
    Parse an ISO 8601 timestamp into an aware datetime.

    Values without an offset are taken as UTC; missing or malformed values
    become now (UTC).
    """
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
        except ValueError:
            logger.debug("Unparseable timestamp: %s", value)
    return datetime.now(timezone.utc)


def absolute_url(url: str | None, base_url: str) -> str:
    """Make a backend-relative media path absolute."""
    if not url:
        return ""
    if url.startswith(("http://", "https://")):
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


def parse_comment(item: dict[str, Any]) -> Comment:
    """
    Parse a backend comment.

    The author is either embedded as a ``user`` object or flattened into
    ``userId``/``userName`` fields.
    """
    user = item.get("user") if isinstance(item.get("user"), dict) else {}
    return Comment(
        id=str(item.get("_id") or item.get("id") or ""),
        text=item.get("text") or item.get("content") or "",
        user_id=str(user.get("_id") or user.get("googleId") or item.get("userId") or ""),
        user_name=user.get("name") or item.get("userName") or "",
        user_profile_pic=user.get("profilePic") or item.get("userProfilePic") or "",
        created_at=parse_datetime(item.get("createdAt")),
        likes=int(item.get("likes") or 0),
        liked_by=frozenset(str(uid) for uid in item.get("likedBy") or []),
    )


def parse_comments(
    items: list[Any],
    normalize: Optional[Callable[[dict[str, Any]], dict[str, Any]]] = None,
) -> list[Comment]:
    """Parse a list of comments, skipping malformed entries instead of failing the list."""
    comments = []
    for item in items:
        if not isinstance(item, dict):
            logger.warning("Skipping non-object comment entry: %r", item)
            continue
        try:
            comments.append(parse_comment(normalize(item) if normalize else item))
        except (ValueError, TypeError) as e:
            logger.warning("Failed to parse comment %s: %s", item.get("_id", "unknown"), e)
    return comments


def parse_video(item: dict[str, Any], base_url: str) -> Video:
    """
    Parse a backend video document into a Video.

    Raises:
        ValueError: If the document has no id
    """
    uploader = item.get("uploader")
    if isinstance(uploader, dict):
        uploader_id = str(uploader.get("googleId") or uploader.get("_id") or uploader.get("id") or "")
        uploader_name = uploader.get("name") or "Unknown"
    else:
        uploader_id = str(uploader or "")
        uploader_name = "Unknown"

    raw_type = item.get("videoType")
    is_long = bool(item.get("isLongVideo", raw_type == VideoType.YOG.value))
    try:
        video_type = VideoType(raw_type)
    except ValueError:
        video_type = VideoType.YOG if is_long else VideoType.SNEHA

    comments = parse_comments(item.get("comments") or [])

    original_url = item.get("originalVideoUrl")
    return Video(
        id=str(item.get("_id") or item.get("id") or ""),
        title=item.get("videoName") or item.get("title") or "",
        description=item.get("description") or "",
        video_url=absolute_url(item.get("videoUrl") or item.get("hlsPlaylistUrl"), base_url),
        thumbnail_url=absolute_url(item.get("thumbnailUrl"), base_url),
        original_video_url=absolute_url(original_url, base_url) if original_url else None,
        uploader_id=uploader_id,
        uploader_name=uploader_name,
        upload_time=parse_datetime(item.get("uploadedAt") or item.get("createdAt")),
        views=int(item.get("views") or 0),
        likes=int(item.get("likes") or 0),
        shares=int(item.get("shares") or 0),
        comments=tuple(comments),
        video_type=video_type,
        link=item.get("link") or None,
        is_long_video=is_long,
        liked_by=frozenset(str(uid) for uid in item.get("likedBy") or []),
    )


def parse_videos(items: list[dict[str, Any]], base_url: str) -> list[Video]:
    """Parse a list of videos, skipping malformed entries instead of failing the page."""
    videos = []
    for item in items:
        try:
            videos.append(parse_video(item, base_url))
        except (ValueError, TypeError) as e:
            logger.warning("Failed to parse video %s: %s", item.get("_id", "unknown"), e)
    return videos
