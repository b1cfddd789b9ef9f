"""Signed-in user record and authentication state snapshots."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class CachedUser:
    """
    Identity of the signed-in user plus the backend bearer token.

    The record is written to local storage on sign-in and read back at start-up
    so the app can show the user before the network confirms the session.
    ``is_fallback`` marks a copy that came from local storage and may be stale.
    """

    id: str
    name: str
    token: str | None = None
    email: str | None = None
    profile_pic: str | None = None
    is_fallback: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("User ID cannot be empty")

    def as_fallback(self) -> CachedUser:
        """Copy of this record marked as a locally cached fallback."""
        return dataclasses.replace(self, is_fallback=True)

    def as_confirmed(self) -> CachedUser:
        """Copy of this record marked as confirmed by the backend."""
        return dataclasses.replace(self, is_fallback=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "profilePic": self.profile_pic,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], token: str | None = None) -> CachedUser:
        """Build a user from the stored or backend JSON shape."""
        user_id = data.get("googleId") or data.get("id") or data.get("_id")
        return cls(
            id=str(user_id or ""),
            name=data.get("name") or "User",
            token=token if token is not None else data.get("token"),
            email=data.get("email"),
            profile_pic=data.get("profilePic"),
            is_fallback=bool(data.get("isFallback", False)),
        )

    def __str__(self) -> str:
        marker = " (cached)" if self.is_fallback else ""
        return f"User(id={self.id}, name='{self.name}'){marker}"


class AuthStatus(str, Enum):
    """Lifecycle of the authentication controller."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class AuthState:
    """Snapshot of the authentication controller published to subscribers."""

    status: AuthStatus = AuthStatus.UNINITIALIZED
    user: CachedUser | None = None
    error: str | None = None
    is_loading: bool = False

    @property
    def is_signed_in(self) -> bool:
        return self.user is not None
