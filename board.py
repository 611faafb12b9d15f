from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]

# Random tries per mine before falling back to a linear scan.
MAX_PLACEMENT_ATTEMPTS = 100


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class MinesweeperError(Exception):
    """Base class for every error raised by the board and engine."""


class InvalidConfig(MinesweeperError, ValueError):
    """Board dimensions or mine count are unusable."""


class OutOfBounds(MinesweeperError, IndexError):
    """A coordinate lies outside the grid."""


class InvalidOperation(MinesweeperError):
    """The action is not allowed on this tile or in this game state."""


# ---------------------------------------------------------------------------
# Tiles
# ---------------------------------------------------------------------------

class TileKind(Enum):
    """What a tile holds underneath."""
    EMPTY = auto()
    MINE = auto()


@dataclass
class Tile:
    """A single square on the Minesweeper board."""
    kind: TileKind = TileKind.EMPTY
    adjacent_mines: int = 0
    revealed: bool = False
    flagged: bool = False

    @property
    def is_mine(self) -> bool:
        return self.kind == TileKind.MINE

    def display_char(self, debug: bool = False) -> str:
        """
        Character for this tile:

        - 'U' : hidden
        - 'F' : flagged
        - 'O' : revealed, 0 adjacent mines
        - '1'..'8' : revealed, that many adjacent mines
        - 'B' : mine (revealed, or any mine when debug=True)

        With debug=True hidden tiles show what lies underneath.
        """
        if self.flagged and not debug:
            return "F"
        if not self.revealed and not debug:
            return "U"
        if self.is_mine:
            return "B"
        return "O" if self.adjacent_mines == 0 else str(self.adjacent_mines)


# ---------------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------------

def _check_mine_count(mine_count: int, size: int) -> None:
    # At least one tile must stay safe.
    if mine_count < 0 or mine_count >= size:
        raise InvalidConfig(f"Number of mines must be between 0 and {size - 1}.")


class Board:
    """
    Grid of tiles with mines placed at construction time.

    Design:
    - Coordinates are (x, y) with x the column and y the row, 0-indexed.
    - Tiles are stored row-major in a flat list, so index i maps to
      (i % width, i // width).
    - Mine positions and neighbor counts are fixed once the board exists;
      only the revealed/flagged bits change afterwards.
    """

    def __init__(
        self,
        width: int,
        height: int,
        mine_count: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise InvalidConfig("Board dimensions must be positive.")
        _check_mine_count(mine_count, width * height)

        self.width = width
        self.height = height
        self.mine_count = mine_count
        self.rng = rng or random.Random()

        # Flat row-major grid of Tile objects
        self.tiles: List[Tile] = [Tile() for _ in range(width * height)]

        self._place_mines()
        self._compute_adjacent_mine_counts()

    @classmethod
    def from_mines(cls, width: int, height: int, mines: Iterable[Coordinate]) -> "Board":
        """Build a board with mines at exactly the given coordinates."""
        board = cls(width, height, 0)
        mines = list(mines)
        _check_mine_count(len(mines), board.size)

        for x, y in mines:
            tile = board.get_tile(x, y)
            if tile is None:
                raise InvalidConfig(f"Mine ({x}, {y}) is outside a {width}x{height} board.")
            if tile.is_mine:
                raise InvalidConfig(f"Mine ({x}, {y}) is listed twice.")
            tile.kind = TileKind.MINE

        board.mine_count = len(mines)
        board._compute_adjacent_mine_counts()
        return board

    # ------------------------------------------------------------------
    # Core board / tile helpers
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def safe_tile_count(self) -> int:
        """Number of non-mine tiles; revealing all of them wins the game."""
        return self.size - self.mine_count

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile:
        """Unchecked access; the caller must have validated (x, y)."""
        return self.tiles[y * self.width + x]

    def tile_at_index(self, index: int) -> Tile:
        return self.tiles[index]

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        if not self.in_bounds(x, y):
            return None
        return self.tile_at(x, y)

    def require_tile(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise OutOfBounds(f"Tile ({x}, {y}) is out of bounds.")
        return self.tile_at(x, y)

    def neighbors(self, x: int, y: int) -> Iterator[Coordinate]:
        """Yield all neighboring coordinates (up to 8)."""
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if self.in_bounds(nx, ny):
                    yield nx, ny

    # ------------------------------------------------------------------
    # Mine placement and counts
    # ------------------------------------------------------------------
    def _place_mines(self) -> None:
        """
        Place mine_count mines by rejection sampling. When a mine cannot
        find a free cell within MAX_PLACEMENT_ATTEMPTS tries it goes into
        the first free tile in row-major order instead, so placement
        always terminates with the exact count.
        """
        for _ in range(self.mine_count):
            for _attempt in range(MAX_PLACEMENT_ATTEMPTS):
                tile = self.tile_at(
                    self.rng.randrange(self.width), self.rng.randrange(self.height)
                )
                if not tile.is_mine:
                    tile.kind = TileKind.MINE
                    break
            else:
                self._place_mine_linear()

    def _place_mine_linear(self) -> None:
        for index, tile in enumerate(self.tiles):
            if not tile.is_mine:
                tile.kind = TileKind.MINE
                logger.debug("Placement budget exhausted, mine placed at index %d", index)
                return

    def _compute_adjacent_mine_counts(self) -> None:
        """Calculate the number of mines around each tile."""
        for x, y in self.iter_coords():
            tile = self.tile_at(x, y)
            if tile.is_mine:
                tile.adjacent_mines = 0
                continue
            tile.adjacent_mines = sum(
                1 for nx, ny in self.neighbors(x, y) if self.tile_at(nx, ny).is_mine
            )

    # ------------------------------------------------------------------
    # Queries (useful for the session & tests)
    # ------------------------------------------------------------------
    def iter_coords(self) -> Iterator[Coordinate]:
        """Iterate over all coordinates in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def iter_tiles(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def mine_coords(self) -> List[Coordinate]:
        return [(x, y) for x, y in self.iter_coords() if self.tile_at(x, y).is_mine]

    def count_flags(self) -> int:
        return sum(1 for tile in self.tiles if tile.flagged)

    def remaining_mines_estimate(self) -> int:
        """
        How many mines *should* remain, assuming every flag is correct.
        Mainly for UI/debugging, not strict rule enforcement.
        """
        return self.mine_count - self.count_flags()

    # ------------------------------------------------------------------
    # Rendering helpers (terminal front-end can just print(board))
    # ------------------------------------------------------------------
    def to_display_grid(self, debug: bool = False) -> List[List[str]]:
        return [
            [self.tile_at(x, y).display_char(debug=debug) for x in range(self.width)]
            for y in range(self.height)
        ]

    def __str__(self) -> str:
        return self.render()

    def render(self, debug: bool = False) -> str:
        """
        Render the board as a multiline string, e.g.:

        ________________________________
        [U][U][2][U][O][U]
        [U][U][2][U][U][U]
        ________________________________
        """
        grid = self.to_display_grid(debug=debug)
        border = "_" * (self.width * 3 + 2)

        lines = [border]
        lines.extend("".join(f"[{ch}]" for ch in row) for row in grid)
        lines.append(border)
        return "\n".join(lines)
