from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class ShapeType(IntEnum):
    MONO = 0
    DOMINO_H = 1
    DOMINO_V = 2
    TRIO_H = 3
    TRIO_V = 4
    TRIO_L = 5
    TRIO_J = 6
    SQUARE = 7
    LINE_4 = 8
    L = 9
    J = 10
    T = 11
    Z = 12
    S = 13
    LINE_5 = 14
    PLUS = 15
    U = 16
    LONG_L = 17


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


SHAPES: Dict[ShapeType, Shape] = {
    # 1 cell
    ShapeType.MONO: _frozen([[1]]),
    # 2 cells
    ShapeType.DOMINO_H: _frozen([[1, 1]]),
    ShapeType.DOMINO_V: _frozen([[1], [1]]),
    # 3 cells
    ShapeType.TRIO_H: _frozen([[1, 1, 1]]),
    ShapeType.TRIO_V: _frozen([[1], [1], [1]]),
    ShapeType.TRIO_L: _frozen([[1, 1], [1, 0]]),
    ShapeType.TRIO_J: _frozen([[1, 0], [1, 1]]),
    # 4 cells
    ShapeType.SQUARE: _frozen([[1, 1], [1, 1]]),
    ShapeType.LINE_4: _frozen([[1, 1, 1, 1]]),
    ShapeType.L: _frozen([[1, 1, 1], [1, 0, 0]]),
    ShapeType.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    ShapeType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    ShapeType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    ShapeType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    # 5 cells
    ShapeType.LINE_5: _frozen([[1, 1, 1, 1, 1]]),
    ShapeType.PLUS: _frozen([[1, 1, 1], [0, 1, 0], [0, 1, 0]]),
    ShapeType.U: _frozen([[1, 0, 1], [1, 1, 1]]),
    ShapeType.LONG_L: _frozen([[1, 1, 1, 1], [1, 0, 0, 0]]),
}

CATALOGUE: Tuple[ShapeType, ...] = tuple(ShapeType)


def get_shape(shape_type: ShapeType) -> Shape:
    return SHAPES[shape_type]


def cell_count(shape: Shape) -> int:
    """Number of occupied sub-cells in ``shape``."""
    return int(np.count_nonzero(shape))


def occupied_offsets(shape: Shape) -> List[Tuple[int, int]]:
    """(row, col) offsets of occupied sub-cells in row-major order."""
    rows, cols = np.nonzero(shape)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]
