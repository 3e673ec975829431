import itertools

import pytest

from block_blast.game.errors import PieceAlreadyUsedError, UnknownPieceError
from block_blast.game.grid import GameGrid
from block_blast.game.shapes import ShapeType
from block_blast.game.tray import Piece, PieceFactory, Tray, is_terminal
from helpers import ScriptedRandom


def test_factory_draws_shape_then_color():
    factory = PieceFactory(6, rng=ScriptedRandom([7, 3, 16, 5]), ids=itertools.count(1))
    first, second = factory.draw_set(2)
    assert (first.id, first.shape_type, first.color, first.used) == (1, ShapeType.SQUARE, 4, False)
    assert (second.id, second.shape_type, second.color) == (2, ShapeType.U, 6)


def test_factory_allows_duplicates_within_a_set():
    factory = PieceFactory(6, rng=ScriptedRandom([2, 0]))
    pieces = factory.draw_set(3)
    assert [p.shape_type for p in pieces] == [ShapeType.DOMINO_V] * 3
    assert len({p.id for p in pieces}) == 3


def test_color_per_shape_uses_a_single_draw():
    rng = ScriptedRandom([9])
    factory = PieceFactory(6, rng=rng, color_per_shape=True)
    piece = factory.draw()
    assert piece.shape_type == ShapeType.L
    assert piece.color == 9 % 6 + 1
    assert rng.calls == 1


def test_mark_used_and_replenish_flag():
    tray = Tray([Piece(1, ShapeType.MONO, 1), Piece(2, ShapeType.T, 2), Piece(3, ShapeType.S, 3)])
    assert not tray.needs_replenish()
    tray.mark_used(1)
    tray.mark_used(3)
    assert [p.id for p in tray.available()] == [2]
    assert not tray.needs_replenish()
    tray.mark_used(2)
    assert tray.needs_replenish()


def test_unknown_and_reused_pieces_raise():
    tray = Tray([Piece(1, ShapeType.MONO, 1)])
    with pytest.raises(UnknownPieceError):
        tray.mark_used(42)
    tray.mark_used(1)
    with pytest.raises(PieceAlreadyUsedError):
        tray.mark_used(1)


def test_terminal_on_full_board():
    grid = GameGrid(10)
    grid.cells[:] = 1
    tray = Tray([Piece(1, ShapeType.MONO, 1), Piece(2, ShapeType.PLUS, 1), Piece(3, ShapeType.LINE_5, 1)])
    assert is_terminal(grid, tray)


def test_not_terminal_on_empty_board():
    tray = Tray([Piece(i, t, 1) for i, t in enumerate([ShapeType.LINE_5, ShapeType.PLUS, ShapeType.LONG_L])])
    assert not is_terminal(GameGrid(10), tray)


def test_terminal_ignores_used_pieces():
    grid = GameGrid(10)
    grid.cells[:] = 1
    grid.cells[0, 0] = 0
    tray = Tray([Piece(1, ShapeType.MONO, 1, used=True), Piece(2, ShapeType.SQUARE, 1)])
    assert is_terminal(grid, tray)
    tray.pieces[0].used = False
    assert not is_terminal(grid, tray)
