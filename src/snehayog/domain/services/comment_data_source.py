"""Shared contract for comment backends (video comments and ad comments)."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from snehayog.domain.models.comment import Comment, CommentPage


@runtime_checkable
class CommentDataSource(Protocol):
    """
    Capability set every comment backend exposes.

    Callers such as a comment sheet depend only on this shape; they never know
    whether the comments belong to a video or to an ad.
    """

    async def fetch_comments(self, page: int = 1, limit: int = 20) -> CommentPage:
        """Fetch one page of comments and whether more exist."""
        ...

    async def post_comment(self, content: str) -> Comment:
        """Post a comment and return the created comment."""
        ...

    async def delete_comment(self, comment_id: str) -> None:
        """Delete one of the signed-in user's comments."""
        ...

    async def toggle_like(self, comment_id: str) -> Comment:
        """Like or unlike a comment and return the updated comment."""
        ...

    def normalize(self, raw: dict[str, Any]) -> dict[str, Any]:
        """Adjust a raw backend comment into the common comment shape."""
        ...
