"""Comment data sources for video comments and ad comments."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from snehayog.domain.exceptions import APIError, AuthenticationError, NotFoundError
from snehayog.domain.models.comment import Comment, CommentPage
from snehayog.infrastructure.http.client import ApiClient
from snehayog.infrastructure.http.mappers import parse_comment, parse_comments

logger = logging.getLogger(__name__)

UserIdProvider = Callable[[], Optional[str]]


def _require_user(user_id_provider: UserIdProvider) -> str:
    user_id = user_id_provider()
    if not user_id:
        raise AuthenticationError("User not authenticated")
    return user_id


class VideoCommentDataSource:
    """
    Comments on a single video, served by ``/api/videos/{id}/comments``.

    The video endpoint returns the whole comment list, so pages are cut on the
    client side.
    """

    def __init__(self, client: ApiClient, video_id: str, user_id_provider: UserIdProvider) -> None:
        self.client = client
        self.video_id = video_id
        self.user_id_provider = user_id_provider

    @property
    def _base(self) -> str:
        return f"{self.client.environment.videos_endpoint}/{self.video_id}/comments"

    def normalize(self, raw: dict[str, Any]) -> dict[str, Any]:
        return raw

    def _parse(self, raw: dict[str, Any]) -> Comment:
        return parse_comment(self.normalize(raw))

    async def fetch_comments(self, page: int = 1, limit: int = 20) -> CommentPage:
        try:
            data = await self.client.get_json(self._base, params={"page": page, "limit": limit})
        except APIError as e:
            if e.status_code == 404:
                raise NotFoundError("video", self.video_id, e) from e
            raise

        if isinstance(data, dict):
            items = data.get("comments") or []
            has_more = bool(data.get("hasMore", False))
            return CommentPage(items=parse_comments(items, self.normalize), has_more=has_more)

        items = data or []
        start = (page - 1) * limit
        window = items[start:start + limit]
        return CommentPage(
            items=parse_comments(window, self.normalize),
            has_more=start + limit < len(items),
        )

    async def post_comment(self, content: str) -> Comment:
        user_id = _require_user(self.user_id_provider)
        data = await self.client.post_json(
            self._base, {"userId": user_id, "text": content}, auth_required=True
        )

        if isinstance(data, dict) and "comment" in data:
            return self._parse(data["comment"])

        # The endpoint answers with the full list; pick the newest matching entry
        comments = parse_comments(data or [], self.normalize)
        own = [c for c in comments if c.user_id == user_id and c.text == content]
        candidates = own or comments
        if not candidates:
            raise APIError("Comment was not returned by the server")
        return max(candidates, key=lambda c: c.created_at)

    async def delete_comment(self, comment_id: str) -> None:
        user_id = _require_user(self.user_id_provider)
        try:
            await self.client.delete_json(
                f"{self._base}/{comment_id}", json={"userId": user_id}, auth_required=True
            )
        except APIError as e:
            if e.status_code == 404:
                raise NotFoundError("comment", comment_id, e) from e
            raise

    async def toggle_like(self, comment_id: str) -> Comment:
        user_id = _require_user(self.user_id_provider)
        data = await self.client.post_json(
            f"{self._base}/{comment_id}/like", {"userId": user_id}, auth_required=True
        )
        return self._parse(data.get("comment", data))


class AdCommentDataSource:
    """Comments on an ad, served by ``/api/ads/comments/{ad_id}``."""

    def __init__(self, client: ApiClient, ad_id: str, user_id_provider: UserIdProvider) -> None:
        self.client = client
        self.ad_id = ad_id
        self.user_id_provider = user_id_provider

    @property
    def _base(self) -> str:
        return f"{self.client.environment.ads_endpoint}/comments/{self.ad_id}"

    def normalize(self, raw: dict[str, Any]) -> dict[str, Any]:
        """Map the ad backend's ``content`` field onto ``text``."""
        normalized = dict(raw)
        if "text" not in normalized and "content" in normalized:
            normalized["text"] = normalized.pop("content")
        return normalized

    def _parse(self, raw: dict[str, Any]) -> Comment:
        return parse_comment(self.normalize(raw))

    async def fetch_comments(self, page: int = 1, limit: int = 20) -> CommentPage:
        _require_user(self.user_id_provider)
        data = await self.client.get_json(
            self._base, params={"page": page, "limit": limit}, auth_required=True
        )
        items = data.get("comments") or []
        pagination = data.get("pagination") or {}
        return CommentPage(
            items=parse_comments(items, self.normalize),
            has_more=bool(pagination.get("hasNextPage", data.get("hasMore", False))),
        )

    async def post_comment(self, content: str) -> Comment:
        _require_user(self.user_id_provider)
        data = await self.client.post_json(self._base, {"content": content}, auth_required=True)
        return self._parse(data["comment"])

    async def delete_comment(self, comment_id: str) -> None:
        _require_user(self.user_id_provider)
        try:
            await self.client.delete_json(f"{self._base}/{comment_id}", auth_required=True)
        except APIError as e:
            if e.status_code == 404:
                raise NotFoundError("comment", comment_id, e) from e
            raise
        logger.debug("Deleted ad comment %s on ad %s", comment_id, self.ad_id)

    async def toggle_like(self, comment_id: str) -> Comment:
        _require_user(self.user_id_provider)
        data = await self.client.post_json(f"{self._base}/{comment_id}/like", auth_required=True)
        return self._parse(data["comment"])
