"""Contract of the video-playback library a player state manager drives."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PlaybackBackend(Protocol):
    """A native player instance bound to one video."""

    async def play(self) -> None:
        ...

    async def pause(self) -> None:
        ...

    async def seek_to(self, position_seconds: float) -> None:
        ...

    async def set_volume(self, volume: float) -> None:
        ...

    def dispose(self) -> None:
        """Release the native player. Must not be called twice."""
        ...
