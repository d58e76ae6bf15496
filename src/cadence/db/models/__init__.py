"""Database models."""
from cadence.db.models.player_save import PlayerSave

__all__ = [
    "PlayerSave",
]
