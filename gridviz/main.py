from __future__ import annotations

import time
from typing import List, Optional, Tuple, Union

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

from .algorithms.board import Board
from .algorithms.loader import LoadedAlgorithm, is_planned, list_algorithms, load_plugins
from .algorithms.playback import Playback
from .algorithms.types import GridProblem, SearchResult
from .config import get_config
from .logging_setup import setup_logger


CONFIG = get_config()
setup_logger(CONFIG.logging.level, CONFIG.logging.log_dir)

app = FastAPI(title="Grid Pathfinding Visualizer Backend", version="0.1.0")

# In dev, the frontend uses a proxy. This CORS config is just extra safety.
app.add_middleware(
    CORSMiddleware,
    allow_origins=CONFIG.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

REGISTRY = load_plugins()

CoordModel = Tuple[int, int]


class AlgorithmInfo(BaseModel):
    id: str
    name: str
    description: str = ""
    enabled: bool = True


class GridProblemModel(BaseModel):
    rows: int = Field(gt=0)
    cols: int = Field(gt=0)
    start: CoordModel
    goal: CoordModel
    # [row, col] pairs or "row,col" strings
    blocked: List[Union[CoordModel, str]] = Field(default_factory=list)


class RunOptionsModel(BaseModel):
    return_visited: bool = True
    max_visited: int = Field(default=CONFIG.api.max_visited, ge=0)


class RunRequestModel(BaseModel):
    algorithm_id: str = "dijkstra"
    problem: GridProblemModel
    options: Optional[RunOptionsModel] = None


class RunResponseModel(BaseModel):
    path: List[CoordModel]
    visited: List[CoordModel]
    reachable: bool
    runtime_ms: float


class FrameModel(BaseModel):
    index: int
    phase: str
    cell: Optional[CoordModel]
    visited_count: int
    path_count: int
    delay_ms: int


class PlaybackResponseModel(BaseModel):
    frames: List[FrameModel]
    total_duration_ms: int


class BoardModel(BaseModel):
    rows: int
    cols: int
    start: CoordModel
    goal: CoordModel
    blocked: List[str]


def _coords(cells) -> List[CoordModel]:
    return [c.coord for c in cells]


def _resolve_algorithm(algorithm_id: str) -> LoadedAlgorithm:
    algo = REGISTRY.get(algorithm_id)
    if algo is not None:
        return algo
    if is_planned(algorithm_id):
        raise HTTPException(
            status_code=501,
            detail=f"Only Dijkstra's Algorithm is implemented; {algorithm_id} is not available yet.",
        )
    raise HTTPException(status_code=404, detail=f"Unknown algorithm_id: {algorithm_id}")


def _solve(req: RunRequestModel) -> Tuple[SearchResult, float]:
    algo = _resolve_algorithm(req.algorithm_id)

    p = req.problem
    if p.rows * p.cols > CONFIG.api.max_cells:
        logger.warning("Rejected {}x{} grid (max_cells={})", p.rows, p.cols, CONFIG.api.max_cells)
        raise HTTPException(
            status_code=400,
            detail=f"Grid {p.rows}x{p.cols} exceeds the limit of {CONFIG.api.max_cells} cells",
        )
    try:
        board = Board.from_keys(p.rows, p.cols, p.start, p.goal, p.blocked)
        problem = GridProblem(grid=board.grid(), start=board.start, goal=board.goal)
    except ValueError as e:
        logger.warning("Rejected problem: {}", e)
        raise HTTPException(status_code=400, detail=str(e))

    t0 = time.perf_counter()
    try:
        result: SearchResult = algo.run(problem)
    except ValueError as e:
        logger.warning("{} rejected problem: {}", algo.spec.id, e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("{} crashed", algo.spec.id)
        raise HTTPException(status_code=500, detail=f"Algorithm crashed: {type(e).__name__}: {e}")
    t1 = time.perf_counter()

    runtime_ms = (t1 - t0) * 1000.0
    logger.info(
        "{} on {}x{}: visited={} path={} in {:.2f} ms",
        algo.spec.id, p.rows, p.cols, len(result.visited_order), len(result.path), runtime_ms,
    )
    return result, runtime_ms


@app.get("/api/health")
def health():
    return {"ok": True, "algorithms": len(REGISTRY)}


@app.get("/api/algorithms", response_model=list[AlgorithmInfo])
def algorithms() -> list[AlgorithmInfo]:
    out: list[AlgorithmInfo] = []
    for spec in list_algorithms(REGISTRY):
        out.append(AlgorithmInfo(id=spec.id, name=spec.name, description=spec.description, enabled=spec.enabled))
    return out


@app.get("/api/board/default", response_model=BoardModel)
def default_board() -> BoardModel:
    g = CONFIG.grid
    board = Board(rows=g.rows, cols=g.cols, start=tuple(g.start), goal=tuple(g.goal))
    return BoardModel(
        rows=board.rows,
        cols=board.cols,
        start=board.start,
        goal=board.goal,
        blocked=board.blocked_keys(),
    )


@app.post("/api/run", response_model=RunResponseModel)
def run(req: RunRequestModel) -> RunResponseModel:
    result, runtime_ms = _solve(req)

    opts = req.options or RunOptionsModel()
    # Truncation only limits the response size; the search itself is complete.
    visited = _coords(result.visited_order[: opts.max_visited]) if opts.return_visited else []

    return RunResponseModel(
        path=_coords(result.path),
        visited=visited,
        reachable=result.reachable,
        runtime_ms=runtime_ms,
    )


@app.post("/api/playback", response_model=PlaybackResponseModel)
def playback(req: RunRequestModel) -> PlaybackResponseModel:
    result, _ = _solve(req)
    pb = Playback(
        result,
        visit_delay_ms=CONFIG.playback.visit_delay_ms,
        path_delay_ms=CONFIG.playback.path_delay_ms,
    )
    frames = [
        FrameModel(
            index=f.index,
            phase=f.phase,
            cell=f.cell.coord if f.cell is not None else None,
            visited_count=f.visited_count,
            path_count=f.path_count,
            delay_ms=f.delay_ms,
        )
        for f in pb
    ]
    return PlaybackResponseModel(frames=frames, total_duration_ms=pb.total_duration_ms())


def serve() -> None:
    uvicorn.run("gridviz.main:app", host=CONFIG.api.host, port=CONFIG.api.port)


if __name__ == "__main__":
    serve()
