from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .clearing import apply_placement
from .grid import Anchor, GameGrid
from .tray import Tray


@dataclass(frozen=True)
class Hint:
    piece_id: int
    anchor: Anchor
    lines_cleared: int


def find_hint(grid: GameGrid, tray: Tray) -> Optional[Hint]:
    """Suggest the move that clears the most lines.

    Ties go to the earlier piece in the tray, then the row-major first anchor.
    Returns None when no unused piece fits.
    """
    best: Optional[Hint] = None
    for piece in tray.available():
        shape = piece.shape
        for anchor in grid.valid_anchors(shape):
            lines = apply_placement(grid.cells, shape, anchor, piece.color).lines_cleared
            if best is None or lines > best.lines_cleared:
                best = Hint(piece_id=piece.id, anchor=anchor, lines_cleared=lines)
    return best
