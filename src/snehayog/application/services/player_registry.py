"""Registry of per-video player state managers."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Callable, Iterator, Optional

from snehayog.application.controllers.player_state_manager import VideoPlayerStateManager

logger = logging.getLogger(__name__)

ManagerFactory = Callable[[str], VideoPlayerStateManager]


class PlayerStateRegistry:
    """
    Owns one live :class:`VideoPlayerStateManager` per video id.

    Managers are created on first request through the injected factory. When
    ``max_managers`` is set, the least recently requested manager is disposed
    once the bound is exceeded. Disposal errors propagate to the caller;
    ``dispose_all`` still releases every manager before re-raising.
    """

    def __init__(self, manager_factory: ManagerFactory, max_managers: Optional[int] = None) -> None:
        """
        Initialize the registry.

        Args:
            manager_factory: Builds a new manager for a video id
            max_managers: Upper bound on live managers (unbounded if None)
        """
        if max_managers is not None and max_managers < 1:
            raise ValueError("max_managers must be at least 1")
        self.manager_factory = manager_factory
        self.max_managers = max_managers
        self._managers: OrderedDict[str, VideoPlayerStateManager] = OrderedDict()

    def get_manager(self, video_id: str) -> VideoPlayerStateManager:
        manager = self._managers.get(video_id)
        if manager is not None:
            self._managers.move_to_end(video_id)
            return manager

        manager = self.manager_factory(video_id)
        self._managers[video_id] = manager
        logger.debug("Created player state for video %s (%d live)", video_id, len(self._managers))
        self._evict()
        return manager

    def _evict(self) -> None:
        if self.max_managers is None:
            return
        while len(self._managers) > self.max_managers:
            video_id, manager = self._managers.popitem(last=False)
            logger.debug("Evicting player state for video %s", video_id)
            manager.dispose()

    def has_manager(self, video_id: str) -> bool:
        return video_id in self._managers

    def __contains__(self, video_id: object) -> bool:
        return video_id in self._managers

    def __len__(self) -> int:
        return len(self._managers)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._managers))

    @property
    def video_ids(self) -> list[str]:
        """Registered ids, least recently requested first."""
        return list(self._managers)

    def dispose_manager(self, video_id: str) -> None:
        manager = self._managers.pop(video_id, None)
        if manager is not None:
            manager.dispose()

    def dispose_all(self) -> None:
        """
        Dispose every manager and empty the registry.

        All managers are released even if one fails; the first error is
        re-raised afterwards.
        """
        managers = list(self._managers.items())
        self._managers.clear()
        first_error: Optional[Exception] = None
        for video_id, manager in managers:
            try:
                manager.dispose()
            except Exception as e:
                logger.error("Failed to dispose player state for video %s: %s", video_id, e)
                if first_error is None:
                    first_error = e
        logger.debug("Disposed %d player states", len(managers))
        if first_error is not None:
            raise first_error
