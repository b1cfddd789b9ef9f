"""Per-video player state."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Awaitable, Callable, Optional

from snehayog.application.observable import Observable
from snehayog.domain.services.playback_backend import PlaybackBackend

logger = logging.getLogger(__name__)

OVERLAY_SECONDS = 1.5


@dataclass(frozen=True)
class QualityPreset:
    """Playback tuning for one use case."""

    name: str
    target_resolution: str
    max_bitrate: int
    buffer_seconds: int
    preload_distance: int


DEFAULT_PRESET = "reels_feed"

QUALITY_PRESETS = MappingProxyType({
    "reels_feed": QualityPreset("Reels Feed", "720p", 2_000_000, 10, 2),
    "high_quality": QualityPreset("High Quality", "1080p", 5_000_000, 15, 1),
    "data_saver": QualityPreset("Data Saver", "480p", 800_000, 5, 1),
})


def get_quality_preset(name: str) -> QualityPreset:
    """Look up a preset, falling back to the reels feed preset."""
    return QUALITY_PRESETS.get(name, QUALITY_PRESETS[DEFAULT_PRESET])


def friendly_error_message(error: BaseException | str) -> str:
    """Turn a playback failure into a message fit for display."""
    text = str(error).lower()
    if isinstance(error, (asyncio.TimeoutError, TimeoutError)) or "timeout" in text or "timed out" in text:
        return "Video loading timed out. Please check your connection and try again."
    if "network" in text or "connection" in text:
        return "Network error. Please check your internet connection."
    if "format" in text or "codec" in text:
        return "Video format not supported. Please try a different video."
    if "permission" in text:
        return "Permission denied. Please check app permissions."
    if "not found" in text:
        return "Video not found. Please try again later."
    if "server" in text:
        return "Server error. Please try again later."
    return "Video error. Please try again."


class VideoPlayerStateManager(Observable):
    """
    Observable playback state for a single video.

    Drives an attached :class:`PlaybackBackend` and mirrors its state.
    Backend failures are stored as ``error_message`` instead of being raised.
    After :meth:`dispose` every operation is ignored.
    """

    def __init__(self, video_id: str, quality_preset: str = DEFAULT_PRESET) -> None:
        super().__init__()
        self.video_id = video_id
        self.backend: Optional[PlaybackBackend] = None
        self.is_playing = False
        self.is_buffering = False
        self.is_muted = True
        self.volume = 0.0
        self.position = 0.0
        self.has_error = False
        self.error_message: Optional[str] = None
        self.show_overlay = False
        self.quality_preset_name = quality_preset if quality_preset in QUALITY_PRESETS else DEFAULT_PRESET
        self.is_disposed = False
        self._overlay_handle: Optional[asyncio.TimerHandle] = None

    @property
    def quality_preset(self) -> QualityPreset:
        return QUALITY_PRESETS[self.quality_preset_name]

    @property
    def is_network_error(self) -> bool:
        """Whether the current error is connection related and worth retrying."""
        if not self.has_error or not self.error_message:
            return False
        message = self.error_message.lower()
        return any(word in message for word in ("network", "connection", "timed out"))

    def attach(self, backend: PlaybackBackend) -> None:
        """Bind the playback backend for this video."""
        if self.is_disposed:
            return
        self.backend = backend
        self._notify()

    def _set_error(self, error: BaseException) -> None:
        logger.warning("Playback error on video %s: %s", self.video_id, error)
        self.has_error = True
        self.error_message = friendly_error_message(error)
        self._notify()

    async def _run(self, operation: Callable[[PlaybackBackend], Awaitable[None]]) -> bool:
        if self.is_disposed:
            return False
        if self.backend is None:
            logger.debug("No playback backend attached for video %s", self.video_id)
            return False
        try:
            await operation(self.backend)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._set_error(e)
            return False
        return True

    async def play(self) -> None:
        if await self._run(lambda backend: backend.play()):
            self.is_playing = True
            self._notify()

    async def pause(self) -> None:
        if await self._run(lambda backend: backend.pause()):
            self.is_playing = False
            self._notify()

    async def toggle_play_pause(self) -> None:
        if self.is_playing:
            await self.pause()
        else:
            await self.play()
        self.display_overlay()

    async def seek_to(self, position_seconds: float) -> None:
        position = max(0.0, position_seconds)
        if await self._run(lambda backend: backend.seek_to(position)):
            self.position = position
            self._notify()

    async def set_volume(self, volume: float) -> None:
        volume = min(max(volume, 0.0), 1.0)
        if await self._run(lambda backend: backend.set_volume(volume)):
            self.volume = volume
            self.is_muted = volume == 0.0
            self._notify()

    async def toggle_mute(self) -> None:
        await self.set_volume(1.0 if self.is_muted else 0.0)

    def update_buffering(self, is_buffering: bool) -> None:
        if self.is_disposed or self.is_buffering == is_buffering:
            return
        self.is_buffering = is_buffering
        self._notify()

    def update_quality_preset(self, name: str) -> None:
        if self.is_disposed:
            return
        if name not in QUALITY_PRESETS:
            logger.warning("Unknown quality preset %s, using %s", name, DEFAULT_PRESET)
            name = DEFAULT_PRESET
        self.quality_preset_name = name
        self._notify()

    def display_overlay(self) -> None:
        """Show the play/pause overlay and hide it again shortly after."""
        if self.is_disposed:
            return
        self.show_overlay = True
        self._notify()

        if self._overlay_handle is not None:
            self._overlay_handle.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._overlay_handle = loop.call_later(OVERLAY_SECONDS, self._hide_overlay)

    def _hide_overlay(self) -> None:
        self._overlay_handle = None
        if self.is_disposed:
            return
        self.show_overlay = False
        self._notify()

    def clear_error(self) -> None:
        if self.is_disposed:
            return
        self.has_error = False
        self.error_message = None
        self._notify()

    def dispose(self) -> None:
        """Release the backend. Calling it again does nothing."""
        if self.is_disposed:
            return
        self.is_disposed = True
        if self._overlay_handle is not None:
            self._overlay_handle.cancel()
            self._overlay_handle = None
        self.clear_listeners()

        backend, self.backend = self.backend, None
        if backend is not None:
            backend.dispose()
        logger.debug("Disposed player state for video %s", self.video_id)
