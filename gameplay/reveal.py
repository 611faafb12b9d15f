# gameplay/reveal.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Tuple

from board import Board, Coordinate, InvalidOperation

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Result of a reveal as seen by the game."""
    CONTINUE = auto()
    LOSS = auto()
    WIN = auto()


@dataclass(frozen=True)
class RevealResult:
    """
    outcome  : CONTINUE or LOSS; WIN is decided by the caller from its counter
    revealed : coordinates revealed by this call, in reveal order
    """
    outcome: Outcome
    revealed: Tuple[Coordinate, ...] = ()


def reveal_cascade(board: Board, x: int, y: int) -> RevealResult:
    """
    Reveal the tile at (x, y).

    - A mine is not revealed here; the result is LOSS and the caller
      decides what to disclose.
    - Otherwise flood-fill from (x, y): every tile with 0 adjacent mines
      also reveals its four orthogonal neighbors. Numbered tiles are
      revealed but stop the fill.

    Raises OutOfBounds for a coordinate off the board and InvalidOperation
    if the tile is already revealed or flagged.
    """
    tile = board.require_tile(x, y)
    if tile.revealed:
        raise InvalidOperation(f"Tile ({x}, {y}) is already revealed.")
    if tile.flagged:
        raise InvalidOperation(f"Tile ({x}, {y}) is flagged.")

    if tile.is_mine:
        return RevealResult(Outcome.LOSS)

    revealed: List[Coordinate] = []
    stack: List[Coordinate] = [(x, y)]

    while stack:
        cx, cy = stack.pop()
        if not board.in_bounds(cx, cy):
            continue
        current = board.tile_at(cx, cy)
        if current.revealed or current.flagged:
            continue

        current.revealed = True
        revealed.append((cx, cy))

        # Neighbors are pushed unchecked; the pop above validates them.
        if current.adjacent_mines == 0:
            stack.append((cx - 1, cy))
            stack.append((cx + 1, cy))
            stack.append((cx, cy - 1))
            stack.append((cx, cy + 1))

    logger.debug("Reveal at (%d, %d) opened %d tiles", x, y, len(revealed))
    return RevealResult(Outcome.CONTINUE, tuple(revealed))


def toggle_flag(board: Board, x: int, y: int) -> bool:
    """
    Toggle a flag on the given tile and return the new flag state.
    Flags can only be placed on hidden tiles.
    """
    tile = board.require_tile(x, y)
    if tile.revealed:
        raise InvalidOperation(f"Tile ({x}, {y}) is revealed and cannot be flagged.")

    tile.flagged = not tile.flagged
    return tile.flagged


def reveal_all(board: Board) -> None:
    """Reveal every tile and clear every flag (shown after an explosion)."""
    for index in range(board.size):
        tile = board.tile_at_index(index)
        tile.revealed = True
        tile.flagged = False
