from __future__ import annotations

import heapq
from itertools import count
from math import inf
from typing import Dict, List, Set, Tuple

from loguru import logger

from ..types import (
    AlgorithmSpec,
    Cell,
    Coord,
    Grid,
    GridProblem,
    SearchResult,
    check_endpoint,
    reconstruct_path,
)

ALGORITHM = AlgorithmSpec(
    id="dijkstra",
    name="Dijkstra's Algorithm",
    description="Shortest path on a 4-connected unit-weight grid.",
)


def search(grid: Grid, start: Coord, goal: Coord) -> SearchResult:
    """Run Dijkstra from `start` to `goal`.

    Equal-distance cells are finalized in the order their distance was set
    (FIFO on discovery), so the visitation order is the breadth-first one and
    the path prefers the up, down, left, right neighbor scan order.
    """
    start_cell = check_endpoint(grid, start, "start")
    goal_cell = check_endpoint(grid, goal, "goal")

    dist: Dict[Cell, float] = {start_cell: 0}
    came_from: Dict[Cell, Cell] = {}
    finalized: Set[Cell] = set()

    seq = count()
    # (distance, discovery sequence, cell)
    pq: List[Tuple[float, int, Cell]] = [(0, next(seq), start_cell)]
    visited_out: List[Cell] = []

    while pq:
        d, _, cur = heapq.heappop(pq)
        if cur in finalized or d != dist.get(cur, inf):
            continue
        finalized.add(cur)
        visited_out.append(cur)

        if cur == goal_cell:
            break

        for nxt in grid.neighbors4(cur):
            nd = d + 1
            if nd < dist.get(nxt, inf):
                dist[nxt] = nd
                came_from[nxt] = cur
                heapq.heappush(pq, (nd, next(seq), nxt))

    path = reconstruct_path(came_from, start_cell, goal_cell)
    logger.debug(
        "dijkstra {}x{} {}->{}: visited={} path_len={}",
        grid.rows, grid.cols, start, goal, len(visited_out), len(path),
    )
    return SearchResult(visited_order=tuple(visited_out), path=path)


def run(problem: GridProblem) -> SearchResult:
    return search(problem.grid, problem.start, problem.goal)
