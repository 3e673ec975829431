"""Line detection and clearing.

All functions here are pure: they take a board matrix and return new
matrices, never touching the input. A cell that sits on both a complete row
and a complete column is emptied once but counts toward both lines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .grid import Anchor
from .shapes import Shape


@dataclass
class ClearResult:
    cells: np.ndarray
    rows_cleared: int = 0
    cols_cleared: int = 0
    lines_cleared: int = 0
    cells_cleared: int = 0
    cleared_positions: List[Tuple[int, int]] = field(default_factory=list)
    passes: int = 0

    @property
    def cleared(self) -> bool:
        return self.lines_cleared > 0


def find_complete_lines(cells: np.ndarray) -> Tuple[List[int], List[int]]:
    """Indices of complete rows and complete columns."""
    filled = cells != 0
    rows = np.flatnonzero(np.all(filled, axis=1))
    cols = np.flatnonzero(np.all(filled, axis=0))
    return [int(r) for r in rows], [int(c) for c in cols]


def clear_mask(shape: Tuple[int, int], rows: List[int], cols: List[int]) -> np.ndarray:
    mask = np.zeros(shape, dtype=bool)
    if rows:
        mask[rows, :] = True
    if cols:
        mask[:, cols] = True
    return mask


def stamp(cells: np.ndarray, shape: Shape, anchor: Anchor, color: int) -> np.ndarray:
    """Copy of ``cells`` with ``shape`` written at ``anchor``.

    Assumes the placement was validated; overlapping cells are overwritten.
    """
    row, col = anchor
    h, w = shape.shape
    out = cells.copy()
    window = out[row : row + h, col : col + w]
    window[shape != 0] = color
    return out


def resolve_clears(cells: np.ndarray) -> ClearResult:
    """Clear every complete row and column, then rescan the result."""
    rows, cols = find_complete_lines(cells)
    if not rows and not cols:
        return ClearResult(cells=cells.copy())

    size = cells.shape[0]
    mask = clear_mask(cells.shape, rows, cols)
    cleared = cells.copy()
    cleared[mask] = 0
    positions = [(int(r), int(c)) for r, c in zip(*np.nonzero(mask))]
    lines = min(len(rows) + len(cols), 2 * size)

    # Clearing only empties cells, so this pass always comes back empty.
    rest = resolve_clears(cleared)
    return ClearResult(
        cells=rest.cells,
        rows_cleared=len(rows) + rest.rows_cleared,
        cols_cleared=len(cols) + rest.cols_cleared,
        lines_cleared=min(lines + rest.lines_cleared, 2 * size),
        cells_cleared=len(positions) + rest.cells_cleared,
        cleared_positions=positions + rest.cleared_positions,
        passes=1 + rest.passes,
    )


def apply_placement(cells: np.ndarray, shape: Shape, anchor: Anchor, color: int) -> ClearResult:
    """Stamp ``shape`` at ``anchor`` and resolve any completed lines."""
    return resolve_clears(stamp(cells, shape, anchor, color))
