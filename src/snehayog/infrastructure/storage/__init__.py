"""Local persistence."""

from snehayog.infrastructure.storage.json_user_store import JsonFileUserStore

__all__ = ["JsonFileUserStore"]
