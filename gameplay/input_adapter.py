# gameplay/input_adapter.py
from __future__ import annotations

from typing import Tuple

from board import Coordinate, InvalidConfig

from .session import ActionResult, GameSession


def pixel_to_grid(
    px: int, py: int, tile_size: int, origin: Tuple[int, int] = (0, 0)
) -> Coordinate:
    """Map a pixel position to the grid cell under it (may be off the board)."""
    ox, oy = origin
    return (px - ox) // tile_size, (py - oy) // tile_size


class InputAdapter:
    """
    Turns raw input events into session actions.

    While a game is in progress the primary button reveals and the
    secondary button toggles a flag. Before the first game, or after a win
    or loss, any click starts a new game instead.
    """

    def __init__(
        self,
        session: GameSession,
        tile_size: int,
        origin: Tuple[int, int] = (0, 0),
    ) -> None:
        if tile_size <= 0:
            raise InvalidConfig(f"Tile size must be positive, got {tile_size}.")
        self.session = session
        self.tile_size = tile_size
        self.origin = origin

    # Pixel-level events
    def on_primary_click(self, px: int, py: int) -> ActionResult:
        return self.primary(*pixel_to_grid(px, py, self.tile_size, self.origin))

    def on_secondary_click(self, px: int, py: int) -> ActionResult:
        return self.secondary(*pixel_to_grid(px, py, self.tile_size, self.origin))

    def on_debug_toggle_key(self) -> bool:
        return self.session.toggle_debug()

    # Grid-level actions
    def primary(self, x: int, y: int) -> ActionResult:
        if not self.session.is_playing:
            return self.session.start_new_game()
        return self.session.reveal(x, y)

    def secondary(self, x: int, y: int) -> ActionResult:
        if not self.session.is_playing:
            return self.session.start_new_game()
        return self.session.toggle_flag(x, y)
