"""Level progression rules.

Two variants exist: one levels up on cleared-cell volume (or an empty board
after some time), the other on empty boards (or a count of clearing
placements). Both are plain dataclasses so they can sit in ``GameConfig``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class LevelProgress:
    cells_cleared: int = 0
    clear_events: int = 0
    level_started_at: float = 0.0

    def record(self, cells_cleared: int) -> None:
        if cells_cleared > 0:
            self.cells_cleared += cells_cleared
            self.clear_events += 1

    def restart(self, now: float) -> None:
        self.cells_cleared = 0
        self.clear_events = 0
        self.level_started_at = now


@dataclass(frozen=True)
class LevelUp:
    new_level: int
    coins_awarded: float
    score_bonus: int


class LevelPolicy:
    def should_level_up(self, progress: LevelProgress, board_empty: bool, now: float) -> bool:
        raise NotImplementedError


@dataclass
class ClearedCellsPolicy(LevelPolicy):
    cells_threshold: int = 15
    min_elapsed: Optional[float] = 40.0

    def should_level_up(self, progress: LevelProgress, board_empty: bool, now: float) -> bool:
        if progress.cells_cleared >= self.cells_threshold:
            return True
        if board_empty and self.min_elapsed is not None:
            return now - progress.level_started_at >= self.min_elapsed
        return False


@dataclass
class BoardClearPolicy(LevelPolicy):
    clear_events_threshold: int = 20

    def should_level_up(self, progress: LevelProgress, board_empty: bool, now: float) -> bool:
        return board_empty or progress.clear_events >= self.clear_events_threshold
