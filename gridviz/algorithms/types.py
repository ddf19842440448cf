from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

Coord = Tuple[int, int]  # (row, col)
CoordKey = Union[Coord, str]


@dataclass(frozen=True)
class AlgorithmSpec:
    """Metadata for an algorithm plugin."""

    id: str
    name: str
    description: str = ""
    enabled: bool = True


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    blocked: bool = False

    @property
    def coord(self) -> Coord:
        return self.row, self.col


@dataclass(frozen=True)
class Grid:
    """A fixed-size rectangular grid of cells.

    Notes
    -----
    - Cells are addressed as (row, col); row 0 is the top row.
    - The grid is 4-connected: up, down, left, right. No diagonals.
    - Every step costs 1.

    Grids are immutable snapshots. To change the blocked set, build a new one
    with `build_grid`.
    """

    rows: int
    cols: int
    cells: Tuple[Tuple[Cell, ...], ...]

    def size(self) -> int:
        return self.rows * self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, coord: Coord) -> Cell:
        row, col = coord
        if not self.in_bounds(row, col):
            raise ValueError(f"cell {coord} is outside the {self.rows}x{self.cols} grid")
        return self.cells[row][col]

    def is_blocked(self, coord: Coord) -> bool:
        return self.cell(coord).blocked

    def free_cells(self) -> Iterator[Cell]:
        """Yield unblocked cells in row-major scan order."""
        for row in self.cells:
            for c in row:
                if not c.blocked:
                    yield c

    def neighbors4(self, cell: Cell) -> Iterator[Cell]:
        """Yield free (non-blocked) orthogonal neighbors: up, down, left, right."""
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            r = cell.row + dr
            c = cell.col + dc
            if not self.in_bounds(r, c):
                continue
            nxt = self.cells[r][c]
            if nxt.blocked:
                continue
            yield nxt


@dataclass(frozen=True)
class GridProblem:
    """A single-source single-target grid routing problem."""

    grid: Grid
    start: Coord
    goal: Coord


@dataclass(frozen=True)
class SearchResult:
    visited_order: Tuple[Cell, ...]
    path: Tuple[Cell, ...]

    @property
    def reachable(self) -> bool:
        return bool(self.path)


def parse_key(key: CoordKey) -> Coord:
    """Turn a blocked-set key into a (row, col) tuple.

    Accepts either a pair or the browser's "row,col" string form.
    """
    if isinstance(key, str):
        parts = key.split(",")
        if len(parts) != 2:
            raise ValueError(f"Malformed cell key: {key!r}")
        try:
            return int(parts[0]), int(parts[1])
        except ValueError:
            raise ValueError(f"Malformed cell key: {key!r}") from None
    try:
        row, col = key
    except (TypeError, ValueError):
        raise ValueError(f"Malformed cell key: {key!r}") from None
    for part in (row, col):
        if isinstance(part, bool) or not isinstance(part, int):
            raise ValueError(f"Malformed cell key: {key!r}")
    return row, col


def format_key(coord: Coord) -> str:
    return f"{coord[0]},{coord[1]}"


def build_grid(num_rows: int, num_cols: int, blocked: Iterable[CoordKey] = ()) -> Grid:
    if num_rows < 1 or num_cols < 1:
        raise ValueError(f"Grid must be at least 1x1, got {num_rows}x{num_cols}")

    blocked_set = set()
    for key in blocked:
        row, col = parse_key(key)
        if not (0 <= row < num_rows and 0 <= col < num_cols):
            raise ValueError(f"Blocked cell {(row, col)} is outside the {num_rows}x{num_cols} grid")
        blocked_set.add((row, col))

    cells = tuple(
        tuple(Cell(row=r, col=c, blocked=(r, c) in blocked_set) for c in range(num_cols))
        for r in range(num_rows)
    )
    return Grid(rows=num_rows, cols=num_cols, cells=cells)


def check_endpoint(grid: Grid, coord: Coord, label: str) -> Cell:
    row, col = coord
    if not grid.in_bounds(row, col):
        raise ValueError(f"{label} {coord} out of bounds for {grid.rows}x{grid.cols} grid")
    cell = grid.cells[row][col]
    if cell.blocked:
        raise ValueError(f"{label} {coord} is blocked")
    return cell


def reconstruct_path(predecessor: Dict[Cell, Cell], start: Cell, goal: Cell) -> Tuple[Cell, ...]:
    out = [goal]
    cur: Optional[Cell] = goal
    while True:
        cur = predecessor.get(cur)
        if cur is None:
            break
        out.append(cur)
    if out[-1] != start:
        return ()
    out.reverse()
    return tuple(out)
