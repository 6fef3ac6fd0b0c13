# mazelab/core/astar.py
#!/usr/bin/env python3
"""
A* - one open-set extraction per step() for animation.

Heuristic:
- Manhattan distance; admissible and consistent on a 4-connected unit grid.

Tie-breaking in the PQ:
- (f, seq, cell): lower f, then whichever cell entered the open set first.
  seq is assigned once when a cell joins the open set and kept when its
  f improves, so extraction matches a first-minimum scan over the open set
  in insertion order. Superseded heap entries are skipped on pop.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import heapq

from mazelab.core.grid import Grid
from mazelab.core.path import reconstruct_path
from mazelab.core.types import Position, StepResult


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class AStarAlgo:
    name: str = "A*"

    grid: Optional[Grid] = None
    open_pq: List[Tuple[int, int, Position]] = field(default_factory=list)  # (f, seq, cell)
    open_seq: Dict[Position, int] = field(default_factory=dict)             # cell -> seq while open
    g: Dict[Position, int] = field(default_factory=dict)
    f: Dict[Position, int] = field(default_factory=dict)
    parent: Dict[Position, Position] = field(default_factory=dict)
    popped_count: int = 0
    visited_count: int = 0
    done: bool = False
    no_path: bool = False
    path: Optional[list] = None
    seq: int = 0  # monotonic counter for PQ stability

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.open_pq.clear()
        self.open_seq.clear()
        self.g.clear()
        self.f.clear()
        self.parent.clear()
        self.popped_count = 0
        self.visited_count = 0
        self.done = False
        self.no_path = False
        self.path = None
        self.seq = 0

        s = self.grid.start
        self.g[s] = 0
        self.f[s] = self._h(s)
        self._open(s)

    # -------------------- helpers --------------------

    def _h(self, c: Position) -> int:
        return manhattan(c, self.grid.end)

    def _open(self, c: Position) -> None:
        if c not in self.open_seq:
            self.seq += 1
            self.open_seq[c] = self.seq
        heapq.heappush(self.open_pq, (self.f[c], self.open_seq[c], c))

    def _pop_best(self) -> Optional[Position]:
        while self.open_pq:
            f_u, seq_u, u = heapq.heappop(self.open_pq)
            if self.open_seq.get(u) == seq_u and self.f[u] == f_u:
                del self.open_seq[u]
                return u
        return None

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion step:
          - Pop the lowest-f open cell.
          - If it is the end, reconstruct and finish.
          - Else relax neighbors with unit edge cost.
        """
        if self.done:
            return StepResult(status="done", path=self.path, metrics=self._metrics())
        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        u = self._pop_best()
        if u is None:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

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
            if self.grid.is_wall(v):
                continue
            alt = self.g[u] + 1
            if v not in self.g or alt < self.g[v]:
                self.parent[v] = u
                self.g[v] = alt
                self.f[v] = alt + self._h(v)
                self._open(v)

        return StepResult(status="running", visited=visited, current=u, metrics=self._metrics())

    # -------------------- metrics --------------------

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "visited": self.visited_count,
            "frontier": len(self.open_seq),
            "path_len": len(self.path) if self.path is not None else 0,
        }
