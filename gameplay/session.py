# gameplay/session.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from board import (
    Board,
    Coordinate,
    InvalidConfig,
    InvalidOperation,
    MinesweeperError,
    OutOfBounds,
    TileKind,
)

from .config import GameConfig
from .reveal import Outcome, reveal_all, reveal_cascade
from .reveal import toggle_flag as flag_tile

logger = logging.getLogger(__name__)


class GameState(Enum):
    IDLE = auto()
    PLAYING = auto()
    EXPLODED = auto()
    WON = auto()


@dataclass(frozen=True)
class ActionResult:
    """
    What a player action did.

    accepted : False when the action was rejected and nothing changed
    outcome  : reveal outcome; None for flags, restarts and rejections
    error    : the OutOfBounds / InvalidOperation behind a rejection
    revealed : coordinates revealed by this action
    """
    accepted: bool
    outcome: Optional[Outcome] = None
    error: Optional[MinesweeperError] = None
    revealed: Tuple[Coordinate, ...] = ()

    def __bool__(self) -> bool:
        return self.accepted


@dataclass(frozen=True)
class TileView:
    """Read-only view of a tile; kind and count stay hidden until revealed."""
    kind: Optional[TileKind]
    adjacent_mines: Optional[int]
    revealed: bool
    flagged: bool


class GameSession:
    """
    One player's game: the current board plus the Idle/Playing/Exploded/Won
    state machine.

    Typical usage:
        session = GameSession(GameConfig(9, 9, 10))
        session.start_new_game()
        session.reveal(4, 4)

    Exploded and Won are terminal: reveal and flag actions are rejected
    until start_new_game() is called again.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.rng = self.config.make_rng()
        self.debug_mode: bool = False

        self._board: Optional[Board] = None
        self._state = GameState.IDLE
        self.revealed_count = 0

    # ------------------------------------------------------------------
    # Read-only interface
    # ------------------------------------------------------------------
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> Optional[Board]:
        return self._board

    @property
    def is_playing(self) -> bool:
        return self._state == GameState.PLAYING

    @property
    def width(self) -> int:
        return self._board.width if self._board else self.config.width

    @property
    def height(self) -> int:
        return self._board.height if self._board else self.config.height

    @property
    def mine_count(self) -> int:
        return self._board.mine_count if self._board else self.config.mine_count

    def get_tile(self, x: int, y: int) -> Optional[TileView]:
        return self._view(x, y, show_hidden=False)

    def debug_tile(self, x: int, y: int) -> Optional[TileView]:
        """Tile view for the debug overlay; hidden contents show while debug_mode is on."""
        return self._view(x, y, show_hidden=self.debug_mode)

    def _view(self, x: int, y: int, show_hidden: bool) -> Optional[TileView]:
        if self._board is None:
            return None
        tile = self._board.get_tile(x, y)
        if tile is None:
            return None

        visible = tile.revealed or show_hidden
        return TileView(
            kind=tile.kind if visible else None,
            adjacent_mines=tile.adjacent_mines if visible else None,
            revealed=tile.revealed,
            flagged=tile.flagged,
        )

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------
    def start_new_game(self, board: Optional[Board] = None) -> ActionResult:
        """
        Replace the board and start playing. A fresh board is generated from
        the config unless one is given; a given board must be unplayed.
        Raises InvalidConfig for bad settings.
        """
        if board is not None and any(t.revealed or t.flagged for t in board.iter_tiles()):
            raise InvalidConfig("A new game needs a board with no revealed or flagged tiles.")
        if board is None:
            board = Board(
                self.config.width,
                self.config.height,
                self.config.mine_count,
                rng=self.rng,
            )

        self._board = board
        self.revealed_count = 0
        self._state = GameState.PLAYING
        logger.info(
            "New game: %dx%d with %d mines", board.width, board.height, board.mine_count
        )
        return ActionResult(True)

    def toggle_debug(self) -> bool:
        self.debug_mode = not self.debug_mode
        return self.debug_mode

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------
    def reveal(self, x: int, y: int) -> ActionResult:
        try:
            board = self._require_playing()
            result = reveal_cascade(board, x, y)
        except (OutOfBounds, InvalidOperation) as exc:
            return self._rejected(exc)

        if result.outcome == Outcome.LOSS:
            self._state = GameState.EXPLODED
            reveal_all(board)
            logger.info("Mine hit at (%d, %d)", x, y)
            return ActionResult(True, Outcome.LOSS)

        self.revealed_count += len(result.revealed)
        if self.revealed_count == board.safe_tile_count:
            self._state = GameState.WON
            logger.info("All %d safe tiles revealed", self.revealed_count)
            return ActionResult(True, Outcome.WIN, revealed=result.revealed)

        return ActionResult(True, Outcome.CONTINUE, revealed=result.revealed)

    def toggle_flag(self, x: int, y: int) -> ActionResult:
        try:
            flag_tile(self._require_playing(), x, y)
        except (OutOfBounds, InvalidOperation) as exc:
            return self._rejected(exc)
        return ActionResult(True)

    def _require_playing(self) -> Board:
        if self._state != GameState.PLAYING or self._board is None:
            raise InvalidOperation(f"No game in progress (state is {self._state.name}).")
        return self._board

    @staticmethod
    def _rejected(exc: MinesweeperError) -> ActionResult:
        logger.debug("Action rejected: %s", exc)
        return ActionResult(False, error=exc)
