# mazelab/core/dfs.py
#!/usr/bin/env python3
"""
Depth-first search with an explicit stack, one pop per step().

Nothing is marked on push; a cell may sit on the stack several times and
only its first pop counts. Neighbors go on the stack right, left, down, up
so they come off up, down, left, right.

parent[v] is overwritten on every push, so the recorded predecessor is the
one from the last push before v is popped. Paths are not shortest.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from mazelab.core.grid import Grid
from mazelab.core.path import reconstruct_path
from mazelab.core.types import Position, StepResult


@dataclass
class DfsAlgo:
    name: str = "DFS"

    grid: Optional[Grid] = None
    stack: List[Position] = field(default_factory=list)
    visited: Set[Position] = field(default_factory=set)
    parent: Dict[Position, Position] = field(default_factory=dict)
    popped_count: int = 0
    visited_count: int = 0
    done: bool = False
    no_path: bool = False
    path: Optional[list] = None

    def init(self, grid: Grid) -> None:
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.stack.clear()
        self.visited.clear()
        self.parent.clear()
        self.popped_count = 0
        self.visited_count = 0
        self.done = False
        self.no_path = False
        self.path = None
        self.stack.append(self.grid.start)

    def step(self) -> StepResult:
        if self.done:
            return StepResult(status="done", path=self.path, metrics=self._metrics())
        if self.no_path or not self.stack:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        u = self.stack.pop()
        self.popped_count += 1

        # stale duplicate
        if u in self.visited:
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.visited.add(u)
        visited = None
        if u != self.grid.start and u != self.grid.end:
            visited = u
            self.visited_count += 1

        if u == self.grid.end:
            self.done = True
            self.path = reconstruct_path(self.parent, self.grid.start, u)
            return StepResult(status="done", current=u, path=self.path, metrics=self._metrics())

        for v in reversed(self.grid.neighbors(u)):
            if v in self.visited or self.grid.is_wall(v):
                continue
            self.stack.append(v)
            self.parent[v] = u

        return StepResult(status="running", visited=visited, current=u, metrics=self._metrics())

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "visited": self.visited_count,
            "frontier": len(self.stack),
            "path_len": len(self.path) if self.path is not None else 0,
        }
