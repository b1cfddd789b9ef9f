"""Application services."""

from snehayog.application.services.player_registry import PlayerStateRegistry

__all__ = ["PlayerStateRegistry"]
