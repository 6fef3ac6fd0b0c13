# mazelab/core/bfs.py
#!/usr/bin/env python3
"""
Breadth-first search, one queue pop per step() for animation.

Same Algorithm API as the other searches:
- init(grid) - reset() - step() -> StepResult

Cells are marked visited when enqueued, so each cell enters the queue once
and the first path found is a shortest one in step count.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Optional, Set

from mazelab.core.grid import Grid
from mazelab.core.path import reconstruct_path
from mazelab.core.types import Position, StepResult


@dataclass
class BfsAlgo:
    name: str = "BFS"

    grid: Optional[Grid] = None
    queue: Deque[Position] = field(default_factory=deque)
    seen: Set[Position] = field(default_factory=set)
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
        self.queue.clear()
        self.seen.clear()
        self.parent.clear()
        self.popped_count = 0
        self.visited_count = 0
        self.done = False
        self.no_path = False
        self.path = None

        s = self.grid.start
        self.queue.append(s)
        self.seen.add(s)

    def step(self) -> StepResult:
        if self.done:
            return StepResult(status="done", path=self.path, metrics=self._metrics())
        if self.no_path or not self.queue:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        u = self.queue.popleft()
        self.popped_count += 1
        visited = None
        if u != self.grid.start and u != self.grid.end:
            visited = u
            self.visited_count += 1

        if u == self.grid.end:
            self.done = True
            self.path = reconstruct_path(self.parent, self.grid.start, u)
            return StepResult(status="done", current=u, path=self.path, metrics=self._metrics())

        for v in self.grid.neighbors(u):
            if v in self.seen or self.grid.is_wall(v):
                continue
            self.seen.add(v)
            self.parent[v] = u
            self.queue.append(v)

        return StepResult(status="running", visited=visited, current=u, metrics=self._metrics())

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "visited": self.visited_count,
            "frontier": len(self.queue),
            "path_len": len(self.path) if self.path is not None else 0,
        }
