# tests/test_grid.py

from __future__ import annotations

import pytest

from gridviz.algorithms.types import Cell, build_grid, format_key, parse_key, reconstruct_path


def test_build_grid_marks_blocked_cells() -> None:
    grid = build_grid(2, 3, {(0, 1), "1,2"})

    assert grid.rows == 2
    assert grid.cols == 3
    assert grid.size() == 6
    assert grid.cell((0, 1)).blocked
    assert grid.cell((1, 2)).blocked
    assert not grid.cell((1, 1)).blocked
    assert [c.coord for c in grid.free_cells()] == [(0, 0), (0, 2), (1, 0), (1, 1)]


def test_build_grid_is_pure() -> None:
    blocked = {(0, 0)}
    a = build_grid(2, 2, blocked)
    b = build_grid(2, 2, blocked)

    assert a == b
    assert blocked == {(0, 0)}


@pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (-1, -1)])
def test_build_grid_rejects_empty_dimensions(rows, cols) -> None:
    with pytest.raises(ValueError, match="at least 1x1"):
        build_grid(rows, cols)


@pytest.mark.parametrize("key", [(2, 0), (0, 5), "-1,0", "9,9"])
def test_build_grid_rejects_out_of_bounds_blocks(key) -> None:
    with pytest.raises(ValueError, match="outside"):
        build_grid(2, 5, [key])


@pytest.mark.parametrize("key", ["1", "a,b", "1,2,3", 7, (1,), (1.7, 2), (0, 2.0), (True, 0), ("1", 2)])
def test_parse_key_rejects_malformed(key) -> None:
    with pytest.raises(ValueError, match="Malformed"):
        parse_key(key)


def test_key_formats_agree() -> None:
    assert parse_key("10,35") == (10, 35)
    assert parse_key([4, 2]) == (4, 2)
    assert format_key((10, 35)) == "10,35"


def test_neighbors4_order_and_filtering() -> None:
    grid = build_grid(3, 3, {(1, 0)})

    centre = grid.cell((1, 1))
    assert [c.coord for c in grid.neighbors4(centre)] == [(0, 1), (2, 1), (1, 2)]

    corner = grid.cell((0, 0))
    assert [c.coord for c in grid.neighbors4(corner)] == [(0, 1)]


def test_cell_lookup_out_of_bounds() -> None:
    grid = build_grid(2, 2)
    with pytest.raises(ValueError):
        grid.cell((2, 0))


def test_reconstruct_path_requires_chain_to_start() -> None:
    a, b, c, d = Cell(0, 0), Cell(0, 1), Cell(0, 2), Cell(1, 2)
    predecessor = {b: a, c: b}

    assert reconstruct_path(predecessor, a, c) == (a, b, c)
    assert reconstruct_path(predecessor, a, d) == ()
    assert reconstruct_path({}, a, a) == (a,)
