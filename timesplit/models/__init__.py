"""Database model exports."""

from .session import GAME_MODES, GameSession
from .split import Split

__all__ = [
    "GAME_MODES",
    "GameSession",
    "Split",
]
