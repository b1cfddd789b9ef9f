"""Snehayog Client - application-state layer for the Snehayog video-sharing service."""

__version__ = "0.1.0"
__author__ = "Snehayog Team"
__email__ = "dev@snehayog.app"
__description__ = "Video feed, authentication and comment state management for the Snehayog client"

from snehayog.domain.models import CachedUser, Comment, Video, VideoType

__all__ = ["CachedUser", "Comment", "Video", "VideoType"]
