from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .errors import PieceAlreadyUsedError, UnknownPieceError
from .grid import GameGrid
from .shapes import CATALOGUE, Shape, ShapeType, cell_count, get_shape


@dataclass
class Piece:
    id: int
    shape_type: ShapeType
    color: int  # 1-based palette index
    used: bool = False

    @property
    def shape(self) -> Shape:
        return get_shape(self.shape_type)

    @property
    def cell_count(self) -> int:
        return cell_count(self.shape)


class PieceFactory:
    """Draws pieces uniformly from the catalogue.

    ``rng`` only needs ``randrange``; pass a seeded ``random.Random`` (or a
    scripted stand-in) for reproducible trays.
    """

    def __init__(
        self,
        palette_size: int,
        rng: Optional[random.Random] = None,
        ids: Optional[Iterator[int]] = None,
        color_per_shape: bool = False,
    ) -> None:
        self.palette_size = palette_size
        self.rng = rng or random.Random()
        self.ids = ids or itertools.count(1)
        self.color_per_shape = color_per_shape

    def draw(self) -> Piece:
        shape_type = CATALOGUE[self.rng.randrange(len(CATALOGUE))]
        if self.color_per_shape:
            color = int(shape_type) % self.palette_size + 1
        else:
            color = self.rng.randrange(self.palette_size) + 1
        return Piece(id=next(self.ids), shape_type=shape_type, color=color)

    def draw_set(self, count: int) -> List[Piece]:
        return [self.draw() for _ in range(count)]


class Tray:
    """The pieces currently on offer, in display order."""

    def __init__(self, pieces: List[Piece]) -> None:
        self.pieces = list(pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.pieces)

    def __len__(self) -> int:
        return len(self.pieces)

    def get(self, piece_id: int) -> Piece:
        for piece in self.pieces:
            if piece.id == piece_id:
                return piece
        raise UnknownPieceError(piece_id)

    def get_available(self, piece_id: int) -> Piece:
        piece = self.get(piece_id)
        if piece.used:
            raise PieceAlreadyUsedError(piece_id)
        return piece

    def available(self) -> List[Piece]:
        return [p for p in self.pieces if not p.used]

    def mark_used(self, piece_id: int) -> Piece:
        piece = self.get_available(piece_id)
        piece.used = True
        return piece

    def needs_replenish(self) -> bool:
        return all(p.used for p in self.pieces)


def is_terminal(grid: GameGrid, tray: Tray) -> bool:
    """True when no unused piece fits anywhere on the board."""
    for piece in tray.available():
        if grid.has_valid_anchor(piece.shape):
            return False
    return True
