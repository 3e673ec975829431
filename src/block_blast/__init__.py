"""Block Blast: a drag-and-drop block puzzle engine."""

from .game import GameConfig, GameSession, new_game

__all__ = ["GameConfig", "GameSession", "new_game"]
