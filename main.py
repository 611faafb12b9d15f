# main.py

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from board import InvalidConfig
from gameplay.config import DEFAULT_HEIGHT, DEFAULT_MINES, DEFAULT_WIDTH, GameConfig
from gameplay.input_adapter import InputAdapter
from gameplay.session import GameSession, GameState


# ---------------------------------------------------------------------------
# Helper functions for user input
# ---------------------------------------------------------------------------

def parse_move(user_input: str) -> Tuple[str, int, int]:
    """
    Parse a move string like:
      'o 3 4' or 'open 3 4'  -> reveal tile (x=3, y=4)
      'f 3 4' or 'flag 3 4'  -> toggle flag
      'g' or 'debug'         -> toggle the debug overlay
      'n' or 'new'           -> start a new game

    Returns: (action, x_index, y_index) where x/y are 0-based; commands
    without coordinates return -1 for both.

    Raises ValueError on bad input.
    """
    tokens = user_input.strip().split()
    if not tokens:
        raise ValueError("Empty input.")

    action_token = tokens[0].lower()
    if action_token in {"q", "quit", "exit"}:
        return ("quit", -1, -1)
    if action_token in {"g", "debug"}:
        return ("debug", -1, -1)
    if action_token in {"n", "new"}:
        return ("new", -1, -1)

    if action_token in {"o", "open"}:
        action = "open"
    elif action_token in {"f", "flag"}:
        action = "flag"
    else:
        raise ValueError("First token must be 'o', 'f', 'g', 'n', or 'q'.")

    if len(tokens) != 3:
        raise ValueError("Format must be: 'o x y' or 'f x y'.")

    try:
        # User enters 1-based coordinates; convert to 0-based
        x = int(tokens[1]) - 1
        y = int(tokens[2]) - 1
    except ValueError:
        raise ValueError("Column and row must be integers.")

    return (action, x, y)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Minesweeper in the terminal.")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument("--mines", type=int, default=DEFAULT_MINES)
    parser.add_argument("--seed", type=int, default=-1,
                        help="RNG seed; <0 uses OS entropy (random every run)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


# ---------------------------------------------------------------------------
# Human game loop
# ---------------------------------------------------------------------------

def print_status(session: GameSession) -> None:
    print(session.board.render(debug=session.debug_mode))
    print(f"Mines remaining (estimate): {session.board.remaining_mines_estimate()}")

    if session.state == GameState.WON:
        print("\nYou revealed all safe tiles. You win!")
    elif session.state == GameState.EXPLODED:
        print("\nYou hit a mine. Game over!")
    if not session.is_playing:
        print("Enter any move to start a new game.")


def run_game(session: GameSession, adapter: InputAdapter) -> None:
    print("=== Minesweeper ===")
    print("Commands:")
    print("  o x y   -> reveal tile at column x, row y (1-based indices)")
    print("  f x y   -> toggle flag at column x, row y")
    print("  g       -> toggle debug overlay")
    print("  n       -> new game")
    print("  q       -> quit")
    print()

    while True:
        print_status(session)

        try:
            user_input = input("\nEnter your move: ")
        except EOFError:
            print()
            break

        try:
            action, x, y = parse_move(user_input)
        except ValueError as exc:
            print(f"Invalid move: {exc}")
            continue

        if action == "quit":
            print("Goodbye!")
            break

        if action == "debug":
            adapter.on_debug_toggle_key()
        elif action == "new":
            session.start_new_game()
        else:
            handler = adapter.primary if action == "open" else adapter.secondary
            result = handler(x, y)
            if not result:
                print(f"Move ignored: {result.error}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig(
        width=args.width,
        height=args.height,
        mine_count=args.mines,
        seed=(None if args.seed < 0 else args.seed),
    )
    session = GameSession(config)
    try:
        adapter = InputAdapter(session, config.tile_size)
        session.start_new_game()
    except InvalidConfig as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    run_game(session, adapter)
    return 0


if __name__ == "__main__":
    sys.exit(main())
