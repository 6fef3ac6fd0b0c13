# mazelab/core/solver.py
#!/usr/bin/env python3
import logging
import time
from typing import Callable, Dict, Optional

from mazelab.core.grid import Grid
from mazelab.core.search import COMPARE_ORDER
from mazelab.core.session import SPEED_PRESETS, PathCallback, SolveSession, VisitedCallback
from mazelab.core.types import InvalidEndpoint, OutOfBounds, PathResult, Position

log = logging.getLogger(__name__)


def _prepared(grid: Grid, start: Position, end: Position) -> Grid:
    """Copy of `grid` with the requested endpoints, or InvalidEndpoint."""
    start, end = tuple(start), tuple(end)
    for pos in (start, end):
        if not grid.in_bounds(pos):
            raise OutOfBounds(pos, grid.rows, grid.cols)
        if grid.is_wall(pos):
            raise InvalidEndpoint(f"{pos} is a wall")
    if start == end:
        raise InvalidEndpoint(f"start and end are both {start}")
    g = grid.copy()
    g.start, g.end = start, end
    return g


def solve(grid: Grid, start: Position, end: Position, algorithm: str,
          on_visited_update: Optional[VisitedCallback] = None,
          on_path_update: Optional[PathCallback] = None,
          speed: float = SPEED_PRESETS["normal"],
          fast: bool = False,
          sleep: Callable[[float], None] = time.sleep) -> PathResult:
    """Run one algorithm with animation pacing and return its result."""
    session = SolveSession(_prepared(grid, start, end), algorithm,
                           on_visited_update, on_path_update, speed=speed, fast=fast)
    return session.run(sleep=sleep)


def _stop_checked(session: SolveSession, callback, should_stop: Callable[[], bool]):
    def emit(cells):
        if callback is not None:
            callback(cells)
        if should_stop():
            session.cancel()
    return emit


def compare(grid: Grid, start: Position, end: Position,
            on_visited_update: Optional[VisitedCallback] = None,
            on_path_update: Optional[PathCallback] = None,
            speed: float = SPEED_PRESETS["normal"],
            fast: bool = False,
            sleep: Callable[[float], None] = time.sleep,
            on_algorithm_start: Optional[Callable[[str], None]] = None,
            should_stop: Optional[Callable[[], bool]] = None) -> Dict[str, PathResult]:
    """
    Run A*, BFS and DFS one after another, each on a fresh copy of the grid.

    `on_algorithm_start(name)` fires before each run so the consumer can
    clear whatever it drew for the previous one.

    `should_stop()` is polled before each run and after every emission. Once
    it returns True the current run is cancelled (its result is kept with
    `cancelled=True`) and the remaining algorithms are skipped.
    """
    base = _prepared(grid, start, end)
    results: Dict[str, PathResult] = {}
    for name in COMPARE_ORDER:
        if should_stop is not None and should_stop():
            break
        if on_algorithm_start is not None:
            on_algorithm_start(name)
        session = SolveSession(base.copy(), name, on_visited_update, on_path_update,
                               speed=speed, fast=fast)
        if should_stop is not None:
            session.on_visited_update = _stop_checked(session, on_visited_update, should_stop)
            session.on_path_update = _stop_checked(session, on_path_update, should_stop)
        results[name] = session.run(sleep=sleep)
        if results[name].cancelled:
            log.info("compare stopped during %s", name)
            break
    log.info("compare: %s", ", ".join(
        f"{n}={r.path_length if r.found else 'none'}/{r.visited_count}" for n, r in results.items()))
    return results
