from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    cell_points: int = 10
    level_placement_points: int = 5
    line_points: int = 100
    cleared_cell_points: int = 50
    combo_points: int = 200
    level_up_points: int = 1000

    def placement_score(self, cells_placed: int, level: int) -> int:
        """Score for putting a piece down, independent of any clear."""
        return cells_placed * self.cell_points + level * self.level_placement_points

    def combo_bonus(self, previous_combo: int) -> int:
        if previous_combo <= 0:
            return 0
        return previous_combo * self.combo_points

    def clear_score(self, lines: int, cells_cleared: int, level: int, previous_combo: int) -> int:
        if lines <= 0:
            return 0
        line_bonus = lines * self.line_points * level
        block_bonus = cells_cleared * self.cleared_cell_points
        return line_bonus + block_bonus + self.combo_bonus(previous_combo)

    def level_up_bonus(self, level: int) -> int:
        return level * self.level_up_points
