"""Domain models for the Snehayog client."""

from snehayog.domain.models.comment import Comment, CommentPage
from snehayog.domain.models.user import AuthState, AuthStatus, CachedUser
from snehayog.domain.models.video import Video, VideoPage, VideoType

__all__ = [
    "AuthState",
    "AuthStatus",
    "CachedUser",
    "Comment",
    "CommentPage",
    "Video",
    "VideoPage",
    "VideoType",
]
