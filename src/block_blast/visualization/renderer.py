from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import numpy as np
import pygame

from block_blast.game import GameSession
from block_blast.game.grid import Anchor
from block_blast.game.shapes import Shape

# First stop of each gradient in the default palette.
PALETTE_RGB = {
    0: (40, 40, 48),
    1: (102, 126, 234),  # purple
    2: (240, 147, 251),  # pink
    3: (79, 172, 254),   # blue
    4: (67, 233, 123),   # green
    5: (250, 112, 154),  # orange
    6: (168, 237, 234),  # pastel
}

SNAP_COLOR = (255, 255, 255)
BLAST_COLOR = (255, 240, 120)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    return PALETTE_RGB.get(int(v), (200, 200, 200))


def cell_at(pos: Tuple[int, int], size: int, cell_size: int, margin: int) -> Optional[Tuple[int, int]]:
    """Board cell under a pixel position, or None outside the board."""
    x, y = pos
    col = (x - margin) // cell_size
    row = (y - margin) // cell_size
    if 0 <= row < size and 0 <= col < size and x >= margin and y >= margin:
        return int(row), int(col)
    return None


def draw_board(screen: pygame.Surface, cells: np.ndarray, cell_size: int, margin: int) -> None:
    h, w = cells.shape
    screen.fill((15, 15, 20))
    for row in range(h):
        for col in range(w):
            rect = pygame.Rect(margin + col * cell_size, margin + row * cell_size, cell_size - 1, cell_size - 1)
            pygame.draw.rect(screen, _color_for_value(cells[row, col]), rect)


def draw_blast(screen: pygame.Surface, cleared: Iterable[Tuple[int, int]], cell_size: int, margin: int) -> None:
    for row, col in cleared:
        rect = pygame.Rect(margin + col * cell_size, margin + row * cell_size, cell_size - 1, cell_size - 1)
        pygame.draw.rect(screen, BLAST_COLOR, rect)


def draw_snap(screen: pygame.Surface, shape: Shape, anchor: Anchor, cell_size: int, margin: int) -> None:
    row0, col0 = anchor
    for dr in range(shape.shape[0]):
        for dc in range(shape.shape[1]):
            if shape[dr, dc]:
                x = margin + (col0 + dc) * cell_size
                y = margin + (row0 + dr) * cell_size
                pygame.draw.rect(screen, SNAP_COLOR, pygame.Rect(x, y, cell_size - 1, cell_size - 1), 2)


def tray_slot_rects(session: GameSession, cell_size: int, margin: int) -> List[Tuple[int, pygame.Rect]]:
    """(piece id, hit box) for every unused tray piece."""
    x0 = margin * 2 + session.grid.size * cell_size
    slots = []
    for idx, piece in enumerate(session.tray):
        if piece.used:
            continue
        h, w = piece.shape.shape
        slots.append((piece.id, pygame.Rect(x0, margin + idx * cell_size * 5, w * cell_size, h * cell_size)))
    return slots


def draw_tray(screen: pygame.Surface, session: GameSession, cell_size: int, margin: int, dragging: Optional[int]) -> None:
    for piece_id, box in tray_slot_rects(session, cell_size, margin):
        piece = session.tray.get(piece_id)
        shape = piece.shape
        color = _color_for_value(piece.color)
        for dr in range(shape.shape[0]):
            for dc in range(shape.shape[1]):
                if shape[dr, dc]:
                    rect = pygame.Rect(box.x + dc * cell_size, box.y + dr * cell_size, cell_size - 1, cell_size - 1)
                    pygame.draw.rect(screen, color, rect)
        if piece_id == dragging:
            pygame.draw.rect(screen, SNAP_COLOR, box, 2)
