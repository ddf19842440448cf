"""
Editable board state.

The UI lets a user move the start and goal and toggle obstacles between runs.
A Board is the immutable record of those choices. Every edit returns a new
Board, and `grid()` turns it into the snapshot that the search reads.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable

from .types import Coord, CoordKey, Grid, build_grid, format_key, parse_key


@dataclass(frozen=True)
class Board:
    rows: int = 20
    cols: int = 40
    start: Coord = (10, 5)
    goal: Coord = (10, 35)
    blocked: FrozenSet[Coord] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Board must be at least 1x1, got {self.rows}x{self.cols}")
        self._check(self.start, "start")
        self._check(self.goal, "goal")
        for coord in self.blocked:
            self._check(coord, "blocked cell")
        if self.start in self.blocked or self.goal in self.blocked:
            raise ValueError("start and goal cannot be blocked")

    @classmethod
    def from_keys(cls, rows: int, cols: int, start: Coord, goal: Coord,
                  blocked: Iterable[CoordKey] = ()) -> "Board":
        return cls(
            rows=rows,
            cols=cols,
            start=tuple(start),
            goal=tuple(goal),
            blocked=frozenset(parse_key(k) for k in blocked),
        )

    def _check(self, coord: Coord, label: str) -> None:
        row, col = coord
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise ValueError(f"{label} {coord} out of bounds for {self.rows}x{self.cols} board")

    def is_endpoint(self, coord: Coord) -> bool:
        return coord == self.start or coord == self.goal

    def with_start(self, coord: Coord) -> "Board":
        """Move the start. A block under the new start is cleared."""
        coord = tuple(coord)
        self._check(coord, "start")
        return replace(self, start=coord, blocked=self.blocked - {coord})

    def with_goal(self, coord: Coord) -> "Board":
        """Move the goal. A block under the new goal is cleared."""
        coord = tuple(coord)
        self._check(coord, "goal")
        return replace(self, goal=coord, blocked=self.blocked - {coord})

    def toggle_block(self, coord: Coord) -> "Board":
        coord = tuple(coord)
        self._check(coord, "blocked cell")
        if self.is_endpoint(coord):
            return self
        if coord in self.blocked:
            return replace(self, blocked=self.blocked - {coord})
        return replace(self, blocked=self.blocked | {coord})

    def reset(self) -> "Board":
        return replace(self, blocked=frozenset())

    def blocked_keys(self) -> list:
        return [format_key(c) for c in sorted(self.blocked)]

    def grid(self) -> Grid:
        return build_grid(self.rows, self.cols, self.blocked)
