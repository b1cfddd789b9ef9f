"""Snehayog REST API integration."""

from snehayog.infrastructure.http.client import ApiClient
from snehayog.infrastructure.http.comment_sources import AdCommentDataSource, VideoCommentDataSource
from snehayog.infrastructure.http.video_repository import HttpVideoRepository

__all__ = [
    "AdCommentDataSource",
    "ApiClient",
    "HttpVideoRepository",
    "VideoCommentDataSource",
]
