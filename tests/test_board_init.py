# tests/test_board_init.py

import random

import pytest

from board import (
    MAX_PLACEMENT_ATTEMPTS,
    Board,
    InvalidConfig,
    OutOfBounds,
    TileKind,
)


def naive_neighbor_mine_count(board: Board, x: int, y: int) -> int:
    count = 0
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if 0 <= nx < board.width and 0 <= ny < board.height:
                if board.tile_at(nx, ny).kind == TileKind.MINE:
                    count += 1
    return count


def test_board_initialization():
    """Board size and mine count should be configurable; every tile starts hidden."""
    board = Board(width=12, height=10, mine_count=20, rng=random.Random(1))

    assert board.width == 12
    assert board.height == 10
    assert board.mine_count == 20
    assert board.size == 120
    assert board.safe_tile_count == 100

    for tile in board.iter_tiles():
        assert tile.revealed is False
        assert tile.flagged is False


@pytest.mark.parametrize("seed", range(10))
@pytest.mark.parametrize("width,height,mines", [(9, 9, 10), (16, 16, 40), (30, 16, 99), (4, 3, 11), (1, 1, 0)])
def test_generated_boards_have_exact_mines_and_consistent_counts(seed, width, height, mines):
    """Every generated board has the requested mines and correct neighbor counts."""
    board = Board(width, height, mines, rng=random.Random(seed))

    assert sum(1 for t in board.iter_tiles() if t.is_mine) == mines
    assert len(board.mine_coords()) == mines

    for x, y in board.iter_coords():
        tile = board.tile_at(x, y)
        if not tile.is_mine:
            assert tile.adjacent_mines == naive_neighbor_mine_count(board, x, y)


def test_same_seed_gives_same_layout():
    """A seeded rng reproduces the same mine layout."""
    first = Board(16, 16, 40, rng=random.Random(42))
    second = Board(16, 16, 40, rng=random.Random(42))
    assert first.mine_coords() == second.mine_coords()


class _StuckRandom(random.Random):
    """Always picks the top-left corner."""

    def randrange(self, *args, **kwargs):
        return 0


def test_exhausted_placement_falls_back_to_linear_scan():
    """When random picks keep colliding, mines fill the first free tiles in order."""
    board = Board(3, 3, 8, rng=_StuckRandom())

    # First mine lands on (0, 0); the rest fill the next free tiles in order.
    assert board.mine_count == 8
    assert board.mine_coords() == [(x, y) for y in range(3) for x in range(3)][:8]
    assert board.tile_at(2, 2).is_mine is False
    assert board.tile_at(2, 2).adjacent_mines == 3


def test_placement_budget_is_bounded():
    """Each mine gives up on random picks after the attempt budget."""
    calls = []

    class CountingRandom(_StuckRandom):
        def randrange(self, *args, **kwargs):
            calls.append(args)
            return 0

    Board(2, 2, 2, rng=CountingRandom())
    # One pick for the first mine, a full budget for the second (x and y each).
    assert len(calls) == 2 * (1 + MAX_PLACEMENT_ATTEMPTS)


def test_from_mines_places_exact_layout():
    """A fixed layout puts mines exactly where asked and counts neighbors."""
    board = Board.from_mines(3, 3, [(2, 2)])

    assert board.mine_count == 1
    assert board.tile_at(2, 2).is_mine
    assert board.tile_at(0, 0).adjacent_mines == 0
    assert board.tile_at(1, 1).adjacent_mines == 1
    assert board.tile_at(2, 1).adjacent_mines == 1
    assert board.tile_at(1, 2).adjacent_mines == 1
    assert board.tile_at(2, 0).adjacent_mines == 0


@pytest.mark.parametrize("mines", [[(3, 0)], [(0, 0), (0, 0)], [(x, y) for y in range(2) for x in range(2)]])
def test_from_mines_rejects_bad_layouts(mines):
    """Out-of-bounds, duplicate, or board-filling layouts are rejected."""
    with pytest.raises(InvalidConfig):
        Board.from_mines(2, 2, mines)


def test_invalid_board_parameters_raise_invalid_config():
    """Bad dimensions or mine counts should fail fast."""
    with pytest.raises(InvalidConfig):
        Board(width=0, height=5, mine_count=1)

    with pytest.raises(InvalidConfig):
        Board(width=5, height=-1, mine_count=1)

    with pytest.raises(InvalidConfig):
        Board(width=5, height=5, mine_count=-1)

    with pytest.raises(InvalidConfig):
        # At least one tile must be safe
        Board(width=5, height=5, mine_count=25)


def test_invalid_config_is_a_value_error():
    """InvalidConfig can still be caught as ValueError."""
    with pytest.raises(ValueError):
        Board(5, 5, 25)


def test_coordinate_access():
    """Bounds checks, safe lookups and linear indexing agree."""
    board = Board.from_mines(4, 3, [(3, 2)])

    assert board.in_bounds(0, 0)
    assert board.in_bounds(3, 2)
    assert not board.in_bounds(4, 0)
    assert not board.in_bounds(0, 3)
    assert not board.in_bounds(-1, 0)

    assert board.get_tile(3, 2) is board.tile_at(3, 2)
    assert board.get_tile(-1, 0) is None
    assert board.tile_at_index(11) is board.tile_at(3, 2)

    with pytest.raises(OutOfBounds):
        board.require_tile(4, 0)
    with pytest.raises(IndexError):
        board.require_tile(0, -1)


def test_neighbors_respect_edges():
    """Corner and edge tiles have fewer neighbors."""
    board = Board(3, 3, 0)

    assert sorted(board.neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]
    assert len(list(board.neighbors(1, 1))) == 8
    assert len(list(board.neighbors(2, 1))) == 5


def test_render_and_debug_overlay():
    """Text rendering hides contents unless the debug overlay is on."""
    board = Board.from_mines(3, 2, [(0, 0)])
    board.tile_at(2, 1).revealed = True
    board.tile_at(1, 1).flagged = True

    assert board.to_display_grid() == [["U", "U", "U"], ["U", "F", "O"]]
    assert board.to_display_grid(debug=True) == [["B", "1", "O"], ["1", "1", "O"]]

    lines = str(board).splitlines()
    assert lines[1] == "[U][U][U]"
    assert lines[2] == "[U][F][O]"
    assert lines[0] == lines[-1] == "_" * 11


def test_remaining_mines_estimate_counts_flags():
    """The remaining-mines estimate subtracts placed flags."""
    board = Board.from_mines(3, 3, [(0, 0), (1, 1)])
    board.tile_at(2, 2).flagged = True

    assert board.count_flags() == 1
    assert board.remaining_mines_estimate() == 1
