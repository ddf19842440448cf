from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from .types import Cell, SearchResult

PHASE_VISIT = "visit"
PHASE_PATH = "path"
PHASE_DONE = "done"


@dataclass(frozen=True)
class Frame:
    index: int
    phase: str                    # "visit" | "path" | "done"
    cell: Optional[Cell]          # cell revealed by this frame, None on "done"
    visited_count: int            # visited cells revealed so far
    path_count: int               # path cells revealed so far
    delay_ms: int                 # pause before showing this frame
    result: SearchResult = field(repr=False, compare=False)

    @property
    def visited(self) -> Tuple[Cell, ...]:
        return self.result.visited_order[: self.visited_count]

    @property
    def path(self) -> Tuple[Cell, ...]:
        return self.result.path[: self.path_count]


class Playback:
    """Step-by-step replay of a SearchResult.

    Iterating yields every visited cell in order, then every path cell, then
    one closing "done" frame. Frames are produced lazily and hold counts into
    the shared result; `Frame.visited` and `Frame.path` slice on access. Each
    `iter()` starts again from the first frame, so one Playback can be replayed
    or shared between renderers.
    """

    def __init__(self, result: SearchResult, visit_delay_ms: int = 10, path_delay_ms: int = 40):
        if visit_delay_ms < 0 or path_delay_ms < 0:
            raise ValueError("Playback delays must be >= 0")
        self.result = result
        self.visit_delay_ms = visit_delay_ms
        self.path_delay_ms = path_delay_ms

    def __len__(self) -> int:
        return len(self.result.visited_order) + len(self.result.path) + 1

    def __iter__(self) -> Iterator[Frame]:
        result = self.result
        n_visited = len(result.visited_order)
        n_path = len(result.path)
        index = 0

        for i, cell in enumerate(result.visited_order):
            yield Frame(index, PHASE_VISIT, cell, i + 1, 0, self.visit_delay_ms, result)
            index += 1

        for i, cell in enumerate(result.path):
            yield Frame(index, PHASE_PATH, cell, n_visited, i + 1, self.path_delay_ms, result)
            index += 1

        yield Frame(index, PHASE_DONE, None, n_visited, n_path, 0, result)

    def total_duration_ms(self) -> int:
        return (len(self.result.visited_order) * self.visit_delay_ms
                + len(self.result.path) * self.path_delay_ms)
