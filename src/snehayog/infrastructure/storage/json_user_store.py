"""JSON file backed user store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from snehayog.domain.exceptions import ConfigurationError
from snehayog.domain.models.user import CachedUser
from snehayog.domain.services.sign_in_service import UserStore

logger = logging.getLogger(__name__)

FALLBACK_USER_KEY = "fallback_user"
TOKEN_KEY = "jwt_token"


class JsonFileUserStore(UserStore):
    """
    Keeps the fallback user and the backend bearer token in a small JSON file.

    The file holds two keys, ``fallback_user`` and ``jwt_token``. A missing or
    unreadable file is treated as an empty store.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable user store %s: %s", self.path, e)
            return {}

        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Failed to write user store {self.path}: {e}", e) from e

    def load(self) -> Optional[CachedUser]:
        data = self._read()
        raw_user = data.get(FALLBACK_USER_KEY)
        if not isinstance(raw_user, dict):
            return None

        try:
            user = CachedUser.from_dict(raw_user, token=data.get(TOKEN_KEY))
        except ValueError as e:
            logger.warning("Ignoring invalid stored user: %s", e)
            return None

        return user.as_fallback()

    def save(self, user: CachedUser) -> None:
        data = self._read()
        data[FALLBACK_USER_KEY] = {**user.to_dict(), "googleId": user.id}
        if user.token:
            data[TOKEN_KEY] = user.token
        self._write(data)
        logger.debug("Stored user %s", user.id)

    def clear(self) -> None:
        data = self._read()
        data.pop(FALLBACK_USER_KEY, None)
        data.pop(TOKEN_KEY, None)
        if data:
            self._write(data)
        elif self.path.exists():
            try:
                self.path.unlink()
            except OSError as e:
                raise ConfigurationError(f"Failed to clear user store {self.path}: {e}", e) from e

    def get_token(self) -> Optional[str]:
        token = self._read().get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None
