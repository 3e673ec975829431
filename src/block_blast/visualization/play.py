from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pygame

from block_blast.game import CLASSIC_10X10, COMPACT_8X8, JsonCoinStore, new_game
from block_blast.game.errors import HintsDisabledError

from .renderer import cell_at, draw_blast, draw_board, draw_snap, draw_tray, tray_slot_rects

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Block Blast - drag and drop")
    p.add_argument("--variant", choices=["classic", "compact"], default="classic")
    p.add_argument("--coins-file", type=Path, default=Path.home() / ".block_blast" / "coins.json")
    p.add_argument("--verbose", action="store_true")
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = CLASSIC_10X10 if args.variant == "classic" else COMPACT_8X8
    session = new_game(config=config, coin_store=JsonCoinStore(args.coins_file))

    pygame.init()
    try:
        cell_size = 36
        margin = 20
        board_px = session.grid.size * cell_size
        side_panel_w = 6 * cell_size
        width = margin * 3 + board_px + side_panel_w
        height = max(margin * 2 + board_px, margin * 2 + 15 * cell_size) + 60
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Block Blast")
        font = pygame.font.SysFont(None, 24)
        clock = pygame.time.Clock()

        dragging: Optional[int] = None
        blast: List[Tuple[int, int]] = []
        hint_text = ""

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        session.reset()
                        dragging = None
                        blast = []
                    elif event.key == pygame.K_g:
                        session.grant_reward("manual")
                    elif event.key == pygame.K_h:
                        try:
                            hint = session.hint()
                        except HintsDisabledError:
                            hint_text = "Hints are off for this variant"
                        else:
                            hint_text = "No moves left" if hint is None else f"Try piece {hint.piece_id} at {hint.anchor}"
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not session.game_over:
                    for piece_id, box in tray_slot_rects(session, cell_size, margin):
                        if box.collidepoint(event.pos):
                            dragging = piece_id
                            session.drag_start(piece_id, cell_at(event.pos, session.grid.size, cell_size, margin))
                            break
                elif event.type == pygame.MOUSEMOTION and dragging is not None:
                    session.drag_move(dragging, cell_at(event.pos, session.grid.size, cell_size, margin))
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and dragging is not None:
                    outcome = session.drag_end(dragging, cell_at(event.pos, session.grid.size, cell_size, margin))
                    dragging = None
                    if outcome is not None:
                        blast = outcome.board_delta.cleared
                        hint_text = ""

            if blast and not session.is_busy:
                blast = []

            # Draw
            draw_board(screen, session.grid.cells, cell_size, margin)
            if blast:
                draw_blast(screen, blast, cell_size, margin)
            if dragging is not None and session.snap_anchor is not None:
                draw_snap(screen, session.tray.get(dragging).shape, session.snap_anchor, cell_size, margin)
            draw_tray(screen, session, cell_size, margin, dragging)

            info_lines = [
                f"Score: {session.score}   Level: {session.level}   Coins: {session.coins:g}",
                f"Combo: x{session.combo}" if session.combo > 1 else hint_text,
                "Drag pieces onto the board   H: hint   G: bonus coins   N: new game",
            ]
            y_text = margin * 2 + max(session.grid.size, 15) * cell_size - 10
            for i, txt in enumerate(info_lines):
                img = font.render(txt, True, (230, 230, 230))
                screen.blit(img, (margin, y_text + i * 20))
            if session.game_over:
                over = font.render("Game Over - Press N to play again", True, (255, 100, 100))
                screen.blit(over, (margin, 2))

            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
