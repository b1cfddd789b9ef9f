"""Comment domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, eq=False)
class Comment:
    """
    A comment on a video or an ad.

    Immutable value object; equality by id.
    """

    id: str
    text: str
    user_id: str
    user_name: str
    created_at: datetime
    user_profile_pic: str = ""
    likes: int = 0
    liked_by: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Comment ID cannot be empty")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Comment):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def is_liked_by(self, user_id: str) -> bool:
        return user_id in self.liked_by

    def __str__(self) -> str:
        return f"Comment(id={self.id}, user={self.user_name}, text='{self.text[:40]}')"


@dataclass(frozen=True)
class CommentPage:
    """A page of comments and whether more can be fetched."""

    items: list[Comment]
    has_more: bool

    @property
    def ids(self) -> list[str]:
        return [comment.id for comment in self.items]
