from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import numpy as np

from .shapes import Shape

Anchor = Tuple[int, int]


class GameGrid:
    """Square N x N board for block placement.

    The grid uses 0 for empty cells and positive integers for filled cells.
    A filled value is the 1-based palette index of the piece's color token.
    Coordinates are (row, col) with (0, 0) at the top-left.
    """

    def __init__(self, size: int = 10, cells: Optional[np.ndarray] = None) -> None:
        self.size = int(size)
        if cells is None:
            self.cells = np.zeros((self.size, self.size), dtype=np.int8)
        else:
            if cells.shape != (self.size, self.size):
                raise ValueError(f"expected a {self.size}x{self.size} board, got {cells.shape}")
            self.cells = cells.astype(np.int8, copy=True)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> "GameGrid":
        cells = np.array([list(r) for r in rows], dtype=np.int8)
        return cls(cells.shape[0], cells)

    def reset(self) -> None:
        self.cells.fill(0)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row, col] == 0

    def can_place(self, shape: Shape, row: int, col: int) -> bool:
        """Check that every occupied sub-cell of ``shape`` lands on an empty cell."""
        h, w = shape.shape
        for dr in range(h):
            for dc in range(w):
                if not shape[dr, dc]:
                    continue
                r = row + dr
                c = col + dc
                if not self.is_inside(r, c):
                    return False
                if not self.is_empty(r, c):
                    return False
        return True

    def _anchor_range(self, shape: Shape) -> Iterable[Anchor]:
        h, w = shape.shape
        for row in range(self.size - h + 1):
            for col in range(self.size - w + 1):
                yield row, col

    def valid_anchors(self, shape: Shape) -> List[Anchor]:
        """All valid anchors for ``shape`` in row-major order."""
        return [(r, c) for r, c in self._anchor_range(shape) if self.can_place(shape, r, c)]

    def has_valid_anchor(self, shape: Shape) -> bool:
        return any(self.can_place(shape, r, c) for r, c in self._anchor_range(shape))

    def find_closest_anchor(self, shape: Shape, target_row: int, target_col: int) -> Optional[Anchor]:
        """Valid anchor nearest (Manhattan) to the target cell.

        Scans every anchor in row-major order; ties keep the first one found.
        """
        best: Optional[Anchor] = None
        best_distance = None
        for row, col in self._anchor_range(shape):
            if not self.can_place(shape, row, col):
                continue
            distance = abs(row - target_row) + abs(col - target_col)
            if best_distance is None or distance < best_distance:
                best_distance = distance
                best = (row, col)
        return best

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def is_clear(self) -> bool:
        return not self.cells.any()

    def get_filled_ratio(self) -> float:
        return self.filled_count() / float(self.size * self.size)

    def copy(self) -> "GameGrid":
        return GameGrid(self.size, self.cells)

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()
