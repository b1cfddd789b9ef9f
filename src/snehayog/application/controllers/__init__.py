"""Observable application controllers."""

from snehayog.application.controllers.auth_controller import AuthController
from snehayog.application.controllers.player_state_manager import (
    QUALITY_PRESETS,
    QualityPreset,
    VideoPlayerStateManager,
)

__all__ = [
    "AuthController",
    "QUALITY_PRESETS",
    "QualityPreset",
    "VideoPlayerStateManager",
]
