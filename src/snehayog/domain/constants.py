"""Upload limits and accepted media file types."""

from __future__ import annotations

MAX_VIDEO_FILE_SIZE = 100 * 1024 * 1024  # 100MB
MAX_IMAGE_FILE_SIZE = 5 * 1024 * 1024  # 5MB
VALID_VIDEO_EXTENSIONS = ["mp4", "avi", "mov", "wmv", "flv", "webm", "mkv"]
VALID_IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "gif", "webp"]


def is_valid_video_extension(extension: str) -> bool:
    return extension.lower().lstrip(".") in VALID_VIDEO_EXTENSIONS


def is_valid_image_extension(extension: str) -> bool:
    return extension.lower().lstrip(".") in VALID_IMAGE_EXTENSIONS


def format_file_size(size_bytes: int) -> str:
    """Format a byte count as B, KB or MB."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"
