"""Game module for Block Blast.

Exports the puzzle engine and supporting classes:
- ShapeType / SHAPES: the piece shape catalogue
- GameGrid: board state, placement checks and anchor search
- apply_placement / ClearResult: line detection and clearing
- ScoringRules: scoring constants and helpers
- ClearedCellsPolicy / BoardClearPolicy: level progression rules
- Piece / Tray / PieceFactory: the piece tray
- GameSession / new_game: the session the UI talks to
"""

from .shapes import SHAPES, CATALOGUE, ShapeType, get_shape
from .grid import GameGrid
from .clearing import ClearResult, apply_placement, find_complete_lines
from .rules import ScoringRules
from .levels import BoardClearPolicy, ClearedCellsPolicy, LevelPolicy, LevelUp
from .config import CLASSIC_10X10, COMPACT_8X8, GameConfig
from .errors import (
    BlockBlastError,
    ConfigError,
    HintsDisabledError,
    PieceAlreadyUsedError,
    UnknownPieceError,
    UnknownRewardError,
)
from .tray import Piece, PieceFactory, Tray, is_terminal
from .storage import InMemoryCoinStore, JsonCoinStore
from .hints import Hint, find_hint
from .session import BoardDelta, GameSession, PlacementOutcome, new_game

__all__ = [
    "SHAPES",
    "CATALOGUE",
    "ShapeType",
    "get_shape",
    "GameGrid",
    "ClearResult",
    "apply_placement",
    "find_complete_lines",
    "ScoringRules",
    "LevelPolicy",
    "ClearedCellsPolicy",
    "BoardClearPolicy",
    "LevelUp",
    "GameConfig",
    "CLASSIC_10X10",
    "COMPACT_8X8",
    "BlockBlastError",
    "ConfigError",
    "HintsDisabledError",
    "PieceAlreadyUsedError",
    "UnknownPieceError",
    "UnknownRewardError",
    "Piece",
    "PieceFactory",
    "Tray",
    "is_terminal",
    "InMemoryCoinStore",
    "JsonCoinStore",
    "Hint",
    "find_hint",
    "BoardDelta",
    "GameSession",
    "PlacementOutcome",
    "new_game",
]
