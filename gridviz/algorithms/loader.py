from __future__ import annotations

import importlib
import pkgutil
from dataclasses import dataclass
from typing import Callable, Dict, List

from loguru import logger

from .types import AlgorithmSpec, GridProblem, SearchResult

# Shown in the algorithm picker but not implemented yet.
PLANNED_ALGORITHMS = (
    AlgorithmSpec(id="bfs", name="Breadth-First Search (BFS)", enabled=False),
    AlgorithmSpec(id="dfs", name="Depth-First Search (DFS)", enabled=False),
    AlgorithmSpec(id="astar", name="A* Search", enabled=False),
)


@dataclass
class LoadedAlgorithm:
    spec: AlgorithmSpec
    run: Callable[[GridProblem], SearchResult]


def load_plugins() -> Dict[str, LoadedAlgorithm]:
    """Discover and import all algorithms from gridviz/algorithms/plugins.

    Each plugin module must define:
      - ALGORITHM: AlgorithmSpec
      - run(problem: GridProblem) -> SearchResult

    Returns
    -------
    dict mapping algorithm_id -> LoadedAlgorithm
    """

    registry: Dict[str, LoadedAlgorithm] = {}

    package_name = __package__ + '.plugins'
    package = importlib.import_module(package_name)

    for m in pkgutil.iter_modules(package.__path__):
        if m.name.startswith('_'):
            continue
        module = importlib.import_module(f"{package_name}.{m.name}")
        spec = getattr(module, 'ALGORITHM', None)
        run_fn = getattr(module, 'run', None)
        if spec is None or run_fn is None:
            logger.debug("Skipping plugin module {} (no ALGORITHM/run)", m.name)
            continue
        if not isinstance(spec, AlgorithmSpec):
            raise TypeError(f"Plugin {m.name} ALGORITHM must be AlgorithmSpec")
        if spec.id in registry:
            raise ValueError(f"Duplicate algorithm id: {spec.id}")
        registry[spec.id] = LoadedAlgorithm(spec=spec, run=run_fn)

    logger.info("Loaded {} algorithm plugin(s): {}", len(registry), ", ".join(sorted(registry)))
    return registry


def list_algorithms(registry: Dict[str, LoadedAlgorithm]) -> List[AlgorithmSpec]:
    """Implemented algorithms first, then planned ones not yet registered."""
    out = [registry[k].spec for k in sorted(registry.keys())]
    out.extend(spec for spec in PLANNED_ALGORITHMS if spec.id not in registry)
    return out


def is_planned(algorithm_id: str) -> bool:
    return any(spec.id == algorithm_id for spec in PLANNED_ALGORITHMS)
