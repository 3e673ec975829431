"""Coin balance persistence.

The engine only needs ``load()`` and ``save(value)``; anything with those two
methods can be passed as a coin store.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

COINS_KEY = "blockPuzzleCoins"


class InMemoryCoinStore:
    def __init__(self, value: float = 0.0) -> None:
        self.value = float(value)

    def load(self) -> float:
        return self.value

    def save(self, value: float) -> None:
        self.value = float(value)


class JsonCoinStore:
    """Keeps the balance under a single key in a JSON file."""

    def __init__(self, path: Union[str, Path], key: str = COINS_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def load(self) -> float:
        if not self.path.exists():
            return 0.0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return float(data.get(self.key, 0.0))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable coin file %s: %s", self.path, e)
            return 0.0

    def save(self, value: float) -> None:
        data = {}
        if self.path.exists():
            try:
                loaded = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(loaded, dict):
                    data = loaded
            except ValueError as e:
                logger.warning("Overwriting unreadable coin file %s: %s", self.path, e)
        data[self.key] = float(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # The target only ever holds a fully written document.
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        tmp.replace(self.path)
