# mazelab/core/grid.py
#!/usr/bin/env python3
"""
Grid model: a rectangular wall/open array plus one start and one end cell.

Cells are stored [row][col] with 0 = open, 1 = wall. Start and end are kept
as positions and are always open.

Neighbor order is up, down, left, right. BFS and A* consume it as is, DFS
reversed; changing it changes every visitation trace.
"""

from dataclasses import dataclass
from typing import Iterable, List

from mazelab.core.types import CellKind, OutOfBounds, Position

OPEN = 0
WALL = 1

# (drow, dcol): up, down, left, right
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[int]]             # [row][col]
    start: Position
    end: Position

    def __post_init__(self):
        self.start = tuple(self.start)
        self.end = tuple(self.end)
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError("grid must have at least one row and one column")
        if len(self.cells) != self.rows or any(len(r) != self.cols for r in self.cells):
            raise ValueError("cells size mismatch")
        if not self.in_bounds(self.start):
            raise ValueError("start out of bounds")
        if not self.in_bounds(self.end):
            raise ValueError("end out of bounds")
        if self.start == self.end:
            raise ValueError("start and end must differ")
        if self.is_wall(self.start) or self.is_wall(self.end):
            raise ValueError("start/end cannot be walls")

    # -------------------- constructors --------------------

    @classmethod
    def empty(cls, rows: int, cols: int, start: Position = None, end: Position = None) -> "Grid":
        cells = [[OPEN] * cols for _ in range(rows)]
        return cls(rows, cols, cells,
                   start if start is not None else (0, 0),
                   end if end is not None else (rows - 1, cols - 1))

    @classmethod
    def from_rows(cls, lines: Iterable[str]) -> "Grid":
        """Parse a text maze: '#' wall, '.' open, 'S' start, 'E' end."""
        cells: List[List[int]] = []
        start = end = None
        for r, line in enumerate(lines):
            row: List[int] = []
            for c, ch in enumerate(line):
                if ch == "#":
                    row.append(WALL)
                    continue
                if ch == "S":
                    start = (r, c)
                elif ch == "E":
                    end = (r, c)
                elif ch != ".":
                    raise ValueError(f"unknown cell character {ch!r} at {(r, c)}")
                row.append(OPEN)
            cells.append(row)
        if start is None or end is None:
            raise ValueError("maze text needs exactly one 'S' and one 'E'")
        return cls(len(cells), len(cells[0]) if cells else 0, cells, start, end)

    def copy(self) -> "Grid":
        return Grid(self.rows, self.cols, [list(r) for r in self.cells], self.start, self.end)

    # -------------------- queries --------------------

    def in_bounds(self, pos: Position) -> bool:
        r, c = pos
        return 0 <= r < self.rows and 0 <= c < self.cols

    def _check(self, pos: Position) -> None:
        if not self.in_bounds(pos):
            raise OutOfBounds(pos, self.rows, self.cols)

    def is_wall(self, pos: Position) -> bool:
        r, c = pos
        return self.cells[r][c] == WALL

    def is_open(self, pos: Position) -> bool:
        self._check(pos)
        return not self.is_wall(pos)

    def kind_at(self, pos: Position) -> CellKind:
        self._check(pos)
        if pos == self.start:
            return CellKind.START
        if pos == self.end:
            return CellKind.END
        return CellKind.WALL if self.is_wall(pos) else CellKind.OPEN

    def neighbors(self, pos: Position) -> List[Position]:
        """In-bounds neighbors (walls included) in up, down, left, right order."""
        r, c = pos
        out: List[Position] = []
        for dr, dc in DIRECTIONS:
            n = (r + dr, c + dc)
            if self.in_bounds(n):
                out.append(n)
        return out

    def wall_count(self) -> int:
        return sum(sum(row) for row in self.cells)

    # -------------------- mutations --------------------

    def toggle_wall(self, pos: Position) -> bool:
        self._check(pos)
        if pos == self.start or pos == self.end:
            return False
        r, c = pos
        self.cells[r][c] = OPEN if self.cells[r][c] == WALL else WALL
        return True

    def set_start(self, pos: Position) -> bool:
        pos = tuple(pos)
        self._check(pos)
        if self.is_wall(pos) or pos == self.end:
            return False
        self.start = pos
        return True

    def set_end(self, pos: Position) -> bool:
        pos = tuple(pos)
        self._check(pos)
        if self.is_wall(pos) or pos == self.start:
            return False
        self.end = pos
        return True

    def clear_walls(self) -> None:
        for row in self.cells:
            row[:] = [OPEN] * self.cols

    def __str__(self) -> str:
        lines = []
        for r in range(self.rows):
            chars = []
            for c in range(self.cols):
                if (r, c) == self.start:
                    chars.append("S")
                elif (r, c) == self.end:
                    chars.append("E")
                else:
                    chars.append("#" if self.cells[r][c] == WALL else ".")
            lines.append("".join(chars))
        return "\n".join(lines)
