# mazelab/core/search.py
#!/usr/bin/env python3
import logging
from dataclasses import dataclass, field
from typing import Dict, List

from mazelab.core.astar import AStarAlgo
from mazelab.core.bfs import BfsAlgo
from mazelab.core.dfs import DfsAlgo
from mazelab.core.grid import Grid
from mazelab.core.types import Position, UnknownAlgorithm

log = logging.getLogger(__name__)

ALGORITHMS = {
    "astar": AStarAlgo,
    "bfs": BfsAlgo,
    "dfs": DfsAlgo,
}

ALGORITHM_LABELS = {
    "astar": "A* Search",
    "bfs": "Breadth-First Search",
    "dfs": "Depth-First Search",
}

# order used by compare()
COMPARE_ORDER = ("astar", "bfs", "dfs")


def make_algo(name: str):
    try:
        cls = ALGORITHMS[name]
    except KeyError:
        raise UnknownAlgorithm(f"unknown algorithm {name!r}; expected one of {sorted(ALGORITHMS)}") from None
    return cls()


@dataclass
class SearchTrace:
    algorithm: str
    found: bool
    visited: List[Position] = field(default_factory=list)
    path: List[Position] = field(default_factory=list)
    parent: Dict[Position, Position] = field(default_factory=dict)


def run_search(grid: Grid, name: str) -> SearchTrace:
    """Run `name` on `grid` to completion with no pacing or callbacks."""
    algo = make_algo(name)
    algo.init(grid)
    visited: List[Position] = []
    while True:
        res = algo.step()
        if res.visited is not None:
            visited.append(res.visited)
        if res.status != "running":
            break
    found = res.status == "done"
    log.debug("%s: found=%s visited=%d", name, found, len(visited))
    return SearchTrace(name, found, visited, list(res.path or []), dict(algo.parent))
