# mazelab/core/generator.py
#!/usr/bin/env python3
"""
Uniform-random maze: every cell is a wall with probability p, independently.

Start and end (by default (0, 0) and (rows-1, cols-1)) are always forced
open. Nothing guarantees a route between them; an unsolvable maze is a
normal outcome.
"""

import logging
import random
from typing import Optional

from mazelab.core.grid import Grid, OPEN, WALL
from mazelab.core.types import Position

log = logging.getLogger(__name__)

DEFAULT_WALL_PROBABILITY = 0.3


def generate_maze(rows: int, cols: int,
                  wall_probability: float = DEFAULT_WALL_PROBABILITY,
                  seed: Optional[int] = None,
                  rng: Optional[random.Random] = None,
                  start: Optional[Position] = None,
                  end: Optional[Position] = None) -> Grid:
    if not 0.0 <= wall_probability <= 1.0:
        raise ValueError(f"wall_probability must be in [0, 1], got {wall_probability}")
    if rows <= 0 or cols <= 0 or rows * cols < 2:
        raise ValueError("maze needs at least two cells")
    if rng is None:
        rng = random.Random(seed)

    cells = []
    for _ in range(rows):
        cells.append([WALL if rng.random() < wall_probability else OPEN for _ in range(cols)])

    start = (0, 0) if start is None else tuple(start)
    end = (rows - 1, cols - 1) if end is None else tuple(end)
    for r, c in (start, end):
        if not (0 <= r < rows and 0 <= c < cols):
            raise ValueError(f"endpoint {(r, c)} outside {rows}x{cols} maze")
        cells[r][c] = OPEN

    grid = Grid(rows, cols, cells, start, end)
    log.debug("generated %dx%d maze, p=%.2f, %d walls", rows, cols, wall_probability, grid.wall_count())
    return grid
