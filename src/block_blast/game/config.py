from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .errors import ConfigError
from .levels import BoardClearPolicy, ClearedCellsPolicy, LevelPolicy
from .rules import ScoringRules

DEFAULT_PALETTE: Tuple[str, ...] = (
    "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",  # purple
    "linear-gradient(135deg, #f093fb 0%, #f5576c 100%)",  # pink
    "linear-gradient(135deg, #4facfe 0%, #00f2fe 100%)",  # blue
    "linear-gradient(135deg, #43e97b 0%, #38f9d7 100%)",  # green
    "linear-gradient(135deg, #fa709a 0%, #fee140 100%)",  # orange
    "linear-gradient(135deg, #a8edea 0%, #fed6e3 100%)",  # pastel
)


@dataclass
class GameConfig:
    """Configuration for a block blast session"""
    board_size: int = 10
    pieces_per_set: int = 3
    level_policy: LevelPolicy = field(default_factory=ClearedCellsPolicy)
    combo_enabled: bool = True
    hints_enabled: bool = False
    color_per_shape: bool = False
    palette: Tuple[str, ...] = DEFAULT_PALETTE
    clear_delay: float = 0.6
    level_up_coins: float = 5.0
    ad_rewards: Dict[str, float] = field(default_factory=lambda: {"manual": 2.0, "auto": 4.5})
    max_episode_steps: int = 10000
    rules: ScoringRules = field(default_factory=ScoringRules)

    def __post_init__(self) -> None:
        if self.board_size < 5:
            raise ConfigError(f"board_size must be at least 5, got {self.board_size}")
        if self.pieces_per_set < 1:
            raise ConfigError("pieces_per_set must be positive")
        if not self.palette:
            raise ConfigError("palette must contain at least one color token")
        # Grid cells are int8 palette indices.
        if len(self.palette) > 127:
            raise ConfigError("palette is limited to 127 color tokens")
        if self.clear_delay < 0:
            raise ConfigError("clear_delay cannot be negative")
        if self.level_up_coins < 0 or any(v < 0 for v in self.ad_rewards.values()):
            raise ConfigError("coin rewards cannot be negative")


CLASSIC_10X10 = GameConfig()

COMPACT_8X8 = GameConfig(
    board_size=8,
    level_policy=BoardClearPolicy(),
    hints_enabled=True,
    color_per_shape=True,
    clear_delay=0.5,
)
