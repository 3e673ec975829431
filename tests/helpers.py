from __future__ import annotations

from typing import Iterable, List

import numpy as np

from block_blast.game import GameConfig, GameSession, InMemoryCoinStore, Piece, ShapeType, Tray
from block_blast.game.levels import ClearedCellsPolicy


class ScriptedRandom:
    """Stand-in for random.Random that replays ``values`` (mod n) in a loop."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values: List[int] = list(values)
        self.calls = 0

    def randrange(self, n: int) -> int:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value % n


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def quiet_config(**overrides) -> GameConfig:
    """No clear delay and no level-ups unless a test asks for them."""
    params = dict(
        clear_delay=0.0,
        level_policy=ClearedCellsPolicy(cells_threshold=10_000, min_elapsed=None),
    )
    params.update(overrides)
    return GameConfig(**params)


def make_session(config: GameConfig = None, values=(0,), clock=None, coin_store=None) -> GameSession:
    return GameSession(
        config or quiet_config(),
        rng=ScriptedRandom(values),
        clock=clock or FakeClock(),
        coin_store=coin_store if coin_store is not None else InMemoryCoinStore(),
    )


def set_tray(session: GameSession, *shape_types: ShapeType, first_id: int = 100) -> List[int]:
    pieces = [Piece(id=first_id + i, shape_type=t, color=1) for i, t in enumerate(shape_types)]
    session.tray = Tray(pieces)
    return [p.id for p in pieces]


def next_piece(session: GameSession) -> int:
    return session.tray.available()[0].id


def fill_row_except(cells: np.ndarray, row: int, missing_col: int, value: int = 1) -> None:
    cells[row, :] = value
    cells[row, missing_col] = 0
