# tests/test_board.py

from __future__ import annotations

import pytest

from gridviz.algorithms.board import Board
from gridviz.algorithms.plugins.dijkstra import search


def test_default_board_matches_browser_layout() -> None:
    board = Board()

    assert (board.rows, board.cols) == (20, 40)
    assert board.start == (10, 5)
    assert board.goal == (10, 35)
    assert board.blocked == frozenset()


def test_toggle_block_adds_and_removes() -> None:
    board = Board(rows=3, cols=3, start=(0, 0), goal=(2, 2))

    blocked = board.toggle_block((1, 1))
    assert blocked.blocked == {(1, 1)}
    assert blocked.toggle_block((1, 1)).blocked == frozenset()
    # original is untouched
    assert board.blocked == frozenset()


@pytest.mark.parametrize("coord", [(0, 0), (2, 2)])
def test_toggle_block_on_endpoint_is_noop(coord) -> None:
    board = Board(rows=3, cols=3, start=(0, 0), goal=(2, 2))

    assert board.toggle_block(coord) is board


def test_moving_endpoint_onto_block_clears_it() -> None:
    board = Board(rows=3, cols=3, start=(0, 0), goal=(2, 2)).toggle_block((1, 1))

    moved = board.with_start((1, 1))
    assert moved.start == (1, 1)
    assert (1, 1) not in moved.blocked

    moved = board.with_goal((1, 1))
    assert moved.goal == (1, 1)
    assert (1, 1) not in moved.blocked


def test_reset_clears_blocks_but_keeps_endpoints() -> None:
    board = Board(rows=3, cols=3, start=(0, 1), goal=(2, 1))
    board = board.toggle_block((1, 0)).toggle_block((1, 1)).reset()

    assert board.blocked == frozenset()
    assert board.start == (0, 1)
    assert board.goal == (2, 1)


def test_out_of_bounds_edits_raise() -> None:
    board = Board(rows=3, cols=3, start=(0, 0), goal=(2, 2))

    with pytest.raises(ValueError):
        board.with_start((3, 0))
    with pytest.raises(ValueError):
        board.with_goal((0, -1))
    with pytest.raises(ValueError):
        board.toggle_block((5, 5))


def test_constructor_rejects_blocked_endpoint() -> None:
    with pytest.raises(ValueError, match="cannot be blocked"):
        Board(rows=3, cols=3, start=(0, 0), goal=(2, 2), blocked=frozenset({(0, 0)}))


def test_from_keys_accepts_browser_keys() -> None:
    board = Board.from_keys(3, 3, [0, 0], [2, 2], ["1,1", "1,0"])

    assert board.start == (0, 0)
    assert board.blocked == {(1, 1), (1, 0)}
    assert board.blocked_keys() == ["1,0", "1,1"]


def test_board_grid_feeds_search() -> None:
    board = Board(rows=3, cols=3, start=(0, 0), goal=(2, 0))
    for col in range(3):
        board = board.toggle_block((1, col))

    result = search(board.grid(), board.start, board.goal)
    assert result.path == ()

    result = search(board.toggle_block((1, 2)).grid(), board.start, board.goal)
    assert len(result.path) == 7
