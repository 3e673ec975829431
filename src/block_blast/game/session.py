from __future__ import annotations

import dataclasses
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Tuple

from .clearing import apply_placement
from .config import GameConfig
from .errors import HintsDisabledError, UnknownRewardError
from .grid import Anchor, GameGrid
from .hints import Hint, find_hint
from .levels import LevelProgress, LevelUp
from .shapes import occupied_offsets
from .storage import InMemoryCoinStore
from .tray import Piece, PieceFactory, Tray, is_terminal

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Cell = Tuple[int, int]


@dataclass
class BoardDelta:
    placed: List[Cell] = field(default_factory=list)
    cleared: List[Cell] = field(default_factory=list)


@dataclass
class PlacementOutcome:
    piece_id: int
    anchor: Anchor
    board_delta: BoardDelta
    score_delta: int
    lines_cleared: int
    cells_cleared: int
    combo_tier: int
    level_up: Optional[LevelUp] = None
    replenished: bool = False
    terminal: bool = False


class GameSession:
    """One game: board, tray, score, level, combo and coin balance.

    Presentation code drives it through ``drag_start``/``drag_move``/``drag_end``
    (pointer targets snap to the nearest valid anchor) or ``place`` (exact
    anchor). Each placement is applied synchronously. When lines clear and
    ``config.clear_delay`` is positive, further placements are rejected until
    the delay has elapsed on ``clock`` or ``settle()`` is called.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        coin_store=None,
        clock: Optional[Clock] = None,
        ids: Optional[Iterator[int]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = self.config.rules
        self.clock: Clock = clock or time.monotonic
        self.coin_store = coin_store if coin_store is not None else InMemoryCoinStore()
        self.factory = PieceFactory(
            len(self.config.palette),
            rng=rng,
            ids=ids,
            color_per_shape=self.config.color_per_shape,
        )
        self.grid = GameGrid(self.config.board_size)
        self.tray = Tray([])
        self.coins = float(self.coin_store.load())

        self.score = 0
        self.level = 1
        self.combo = 0
        self.game_over = False
        self.progress = LevelProgress()
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.busy_until: Optional[float] = None
        self.dragging: Optional[int] = None
        self.snap_anchor: Optional[Anchor] = None

        self.reset()

    def reset(self) -> None:
        self.grid.reset()
        self.score = 0
        self.level = 1
        self.combo = 0
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.busy_until = None
        self.dragging = None
        self.snap_anchor = None
        self.progress.restart(self.clock())
        self.tray = Tray(self.factory.draw_set(self.config.pieces_per_set))
        self.game_over = is_terminal(self.grid, self.tray)

    # ---------- Busy window ----------
    @property
    def is_busy(self) -> bool:
        return self.busy_until is not None and self.clock() < self.busy_until

    def settle(self) -> None:
        """End the clear animation window immediately."""
        self.busy_until = None

    # ---------- Drag gestures ----------
    def drag_start(self, piece_id: int, target: Optional[Cell] = None) -> Optional[Anchor]:
        piece = self.tray.get_available(piece_id)
        self.dragging = piece.id
        self.snap_anchor = self._snap(piece, target)
        return self.snap_anchor

    def drag_move(self, piece_id: int, target: Optional[Cell]) -> Optional[Anchor]:
        piece = self.tray.get_available(piece_id)
        self.snap_anchor = self._snap(piece, target)
        return self.snap_anchor

    def drag_end(self, piece_id: int, target: Optional[Cell]) -> Optional[PlacementOutcome]:
        piece = self.tray.get_available(piece_id)
        self.dragging = None
        self.snap_anchor = None
        if not self._accepting(piece):
            return None
        anchor = self._snap(piece, target)
        if anchor is None:
            return None
        return self._apply(piece, anchor)

    def place(self, piece_id: int, row: int, col: int) -> Optional[PlacementOutcome]:
        piece = self.tray.get_available(piece_id)
        if not self._accepting(piece):
            return None
        if not self.grid.can_place(piece.shape, row, col):
            return None
        return self._apply(piece, (row, col))

    def _snap(self, piece: Piece, target: Optional[Cell]) -> Optional[Anchor]:
        if target is None:
            return None
        row, col = target
        if not self.grid.is_inside(row, col):
            return None
        return self.grid.find_closest_anchor(piece.shape, row, col)

    def _accepting(self, piece: Piece) -> bool:
        if self.game_over:
            logger.debug("Rejecting piece %d: game is over", piece.id)
            return False
        if self.is_busy:
            logger.debug("Rejecting piece %d: line clear in progress", piece.id)
            return False
        return True

    # ---------- Placement ----------
    def _apply(self, piece: Piece, anchor: Anchor) -> PlacementOutcome:
        shape = piece.shape
        row, col = anchor
        placed = [(row + dr, col + dc) for dr, dc in occupied_offsets(shape)]

        result = apply_placement(self.grid.cells, shape, anchor, piece.color)
        self.grid.cells = result.cells

        score_delta = self.rules.placement_score(len(placed), self.level)
        if result.cleared:
            previous_combo = self.combo if self.config.combo_enabled else 0
            score_delta += self.rules.clear_score(
                result.lines_cleared, result.cells_cleared, self.level, previous_combo
            )
            self.combo += 1
            if self.config.clear_delay > 0:
                self.busy_until = self.clock() + self.config.clear_delay
        else:
            self.combo = 0
        self.score += score_delta
        self.total_lines_cleared += result.lines_cleared
        self.total_pieces_placed += 1
        self.progress.record(result.cells_cleared)

        level_up = self._check_level_up()
        if level_up is not None:
            score_delta += level_up.score_bonus

        self.tray.mark_used(piece.id)
        replenished = False
        if self.tray.needs_replenish():
            self.tray = Tray(self.factory.draw_set(self.config.pieces_per_set))
            replenished = True
            logger.debug("Tray replenished: %s", [p.shape_type.name for p in self.tray])

        self.game_over = is_terminal(self.grid, self.tray)
        if self.game_over:
            logger.info("Game over at level %d with score %d", self.level, self.score)

        return PlacementOutcome(
            piece_id=piece.id,
            anchor=anchor,
            board_delta=BoardDelta(placed=placed, cleared=result.cleared_positions),
            score_delta=score_delta,
            lines_cleared=result.lines_cleared,
            cells_cleared=result.cells_cleared,
            combo_tier=self.combo,
            level_up=level_up,
            replenished=replenished,
            terminal=self.game_over,
        )

    def _check_level_up(self) -> Optional[LevelUp]:
        now = self.clock()
        policy = self.config.level_policy
        if not policy.should_level_up(self.progress, self.grid.is_clear(), now):
            return None
        bonus = self.rules.level_up_bonus(self.level)
        self.score += bonus
        self.level += 1
        coins = self.config.level_up_coins
        self._add_coins(coins)
        self.progress.restart(now)
        logger.info("Level up to %d (+%d points, +%s coins)", self.level, bonus, coins)
        return LevelUp(new_level=self.level, coins_awarded=coins, score_bonus=bonus)

    # ---------- Coins and hints ----------
    def _add_coins(self, amount: float) -> None:
        if amount <= 0:
            return
        self.coins += amount
        self.coin_store.save(self.coins)

    def grant_reward(self, kind: str) -> float:
        """Credit the configured coin reward for a watched ad of ``kind``."""
        try:
            amount = self.config.ad_rewards[kind]
        except KeyError:
            raise UnknownRewardError(kind) from None
        self._add_coins(amount)
        logger.info("Granted %s coins for %s reward", amount, kind)
        return self.coins

    def hint(self) -> Optional[Hint]:
        if not self.config.hints_enabled:
            raise HintsDisabledError("hints are disabled for this game")
        return find_hint(self.grid, self.tray)

    # ---------- Queries ----------
    def get_state(self) -> dict:
        return {
            "grid": self.grid.clone_state(),
            "pieces": [(p.id, p.shape_type.name, p.used) for p in self.tray],
            "score": self.score,
            "level": self.level,
            "combo": self.combo,
            "coins": self.coins,
            "total_lines_cleared": self.total_lines_cleared,
            "total_pieces_placed": self.total_pieces_placed,
            "game_over": self.game_over,
            "filled_ratio": self.grid.get_filled_ratio(),
        }


def new_game(
    board_size: Optional[int] = None,
    config: Optional[GameConfig] = None,
    *,
    rng: Optional[random.Random] = None,
    coin_store=None,
    clock: Optional[Clock] = None,
    ids: Optional[Iterator[int]] = None,
) -> GameSession:
    """Start a session; ``board_size`` overrides the one in ``config``."""
    config = config or GameConfig()
    if board_size is not None and board_size != config.board_size:
        config = dataclasses.replace(config, board_size=board_size)
    return GameSession(config, rng=rng, coin_store=coin_store, clock=clock, ids=ids)
