# gameplay/config.py
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

DEFAULT_WIDTH = 16
DEFAULT_HEIGHT = 16
DEFAULT_MINES = 40
# Edge length of one tile on screen, in pixels.
DEFAULT_TILE_SIZE = 32


@dataclass(frozen=True)
class GameConfig:
    """
    Settings for a game session.

    Values are not checked here; Board construction rejects bad
    dimensions or mine counts with InvalidConfig.
    """
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    mine_count: int = DEFAULT_MINES
    tile_size: int = DEFAULT_TILE_SIZE
    seed: Optional[int] = None

    @classmethod
    def from_window(
        cls,
        window_width: int,
        window_height: int,
        tile_size: int = DEFAULT_TILE_SIZE,
        mine_count: int = DEFAULT_MINES,
        seed: Optional[int] = None,
    ) -> "GameConfig":
        """Size the grid so that whole tiles fill a window of the given pixel size."""
        return cls(
            width=window_width // tile_size,
            height=window_height // tile_size,
            mine_count=mine_count,
            tile_size=tile_size,
            seed=seed,
        )

    def make_rng(self) -> random.Random:
        return random.Random(self.seed) if self.seed is not None else random.Random()
