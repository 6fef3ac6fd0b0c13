# mazelab/core/session.py
#!/usr/bin/env python3
"""
Animation driver: runs one search as a paced, pausable, cancelable session.

States and transitions:
    IDLE --start--> RUNNING --pause--> PAUSED --resume--> RUNNING
    RUNNING/PAUSED --(search + path emission finish)--> COMPLETED
    IDLE/RUNNING/PAUSED --cancel--> CANCELLED

Each advance() is one emission unit:
- visit phase: step the search until one new visited cell (fast mode: up to
  FAST_BATCH_SIZE) or termination, then on_visited_update(trace so far)
- path phase: one more path cell (fast mode: the whole path), then
  on_path_update(path so far)

The search only moves inside advance(), so pausing freezes the algorithm
itself, not just the output. Two ways to drive a session:
- run(): blocking loop that sleeps between units and polls while paused
- tick(now): non-blocking, for a host loop that already runs per frame
"""

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from mazelab.core.grid import Grid
from mazelab.core.search import make_algo
from mazelab.core.types import PathResult, Position, SessionStateError

log = logging.getLogger(__name__)

SPEED_PRESETS = {
    "slow": 25,
    "normal": 50,
    "fast": 75,
    "veryfast": 95,
}
FAST_PRESET = "veryfast"

MIN_DELAY_MS = 5
FAST_BATCH_SIZE = 10
PAUSE_POLL_S = 0.05

VisitedCallback = Callable[[List[Position]], None]
PathCallback = Callable[[List[Position]], None]


class SessionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def speed_to_delay_ms(speed: float, fast: bool = False) -> float:
    """Delay between visit emissions; higher speed, shorter delay."""
    if fast:
        return MIN_DELAY_MS
    return max(MIN_DELAY_MS, 100 - speed)


def path_delay_ms(speed: float, fast: bool = False) -> float:
    if fast:
        return MIN_DELAY_MS
    return max(MIN_DELAY_MS, 100 - speed / 2)


class SolveSession:
    def __init__(self, grid: Grid, algorithm: str,
                 on_visited_update: Optional[VisitedCallback] = None,
                 on_path_update: Optional[PathCallback] = None,
                 speed: float = SPEED_PRESETS["normal"],
                 fast: bool = False,
                 clock: Callable[[], float] = time.perf_counter):
        self.grid = grid
        self.algorithm = algorithm
        self.on_visited_update = on_visited_update
        self.on_path_update = on_path_update
        self.speed = speed
        self.fast = fast
        self._clock = clock

        self._algo = make_algo(algorithm)
        self._state = SessionState.IDLE
        self._phase = "visit"
        self._visited: List[Position] = []
        self._path: List[Position] = []
        self._shown: List[Position] = []
        self._found = False
        self._elapsed_s = 0.0
        self._last_emit: Optional[float] = None
        self._metrics: Dict[str, Any] = {}
        self.result: Optional[PathResult] = None

    # -------------------- state machine --------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state in (SessionState.RUNNING, SessionState.PAUSED)

    @property
    def finished(self) -> bool:
        return self._state in (SessionState.COMPLETED, SessionState.CANCELLED)

    @property
    def visited(self) -> List[Position]:
        return list(self._visited)

    @property
    def path(self) -> List[Position]:
        return list(self._shown)

    @property
    def metrics(self) -> Dict[str, Any]:
        """Counters from the last search step (popped, frontier, ...)."""
        return dict(self._metrics)

    def _move(self, allowed, target: SessionState, op: str) -> None:
        if self._state not in allowed:
            raise SessionStateError(f"cannot {op} a {self._state.value} session")
        log.debug("%s session: %s -> %s", self.algorithm, self._state.value, target.value)
        self._state = target

    def start(self) -> None:
        self._move((SessionState.IDLE,), SessionState.RUNNING, "start")
        self._algo.init(self.grid)

    def pause(self) -> None:
        self._move((SessionState.RUNNING,), SessionState.PAUSED, "pause")

    def resume(self) -> None:
        self._move((SessionState.PAUSED,), SessionState.RUNNING, "resume")

    def cancel(self) -> None:
        if self.finished:
            return
        self._move((SessionState.IDLE, SessionState.RUNNING, SessionState.PAUSED),
                   SessionState.CANCELLED, "cancel")
        self._algo = None
        self.result = self._build_result(cancelled=True)

    # -------------------- stepping --------------------

    @property
    def delay_ms(self) -> float:
        if self._phase == "path":
            return path_delay_ms(self.speed, self.fast)
        return speed_to_delay_ms(self.speed, self.fast)

    def advance(self) -> bool:
        """Emit one unit. Returns False (and does nothing) unless RUNNING."""
        if self._state is not SessionState.RUNNING:
            return False
        if self._phase == "visit":
            self._advance_visits()
        else:
            self._advance_path()
        return True

    def _advance_visits(self) -> None:
        batch = FAST_BATCH_SIZE if self.fast else 1
        algo = self._algo
        new = 0
        t0 = self._clock()
        while True:
            res = algo.step()
            self._metrics = res.metrics
            if res.visited is not None:
                self._visited.append(res.visited)
                new += 1
            if res.status != "running" or new >= batch:
                break
        self._elapsed_s += self._clock() - t0

        if res.status == "done":
            self._found = True
            self._path = list(res.path or [])
            self._phase = "path"

        if new:
            self._emit(self.on_visited_update, self._visited)

        if res.status == "no_path" or (res.status == "done" and not self._path):
            self._complete()

    def _advance_path(self) -> None:
        if self.fast:
            self._shown = list(self._path)
        else:
            self._shown.append(self._path[len(self._shown)])
        self._emit(self.on_path_update, self._shown)
        if len(self._shown) == len(self._path):
            self._complete()

    def _emit(self, callback, cells: List[Position]) -> None:
        if callback is None or self._state is SessionState.CANCELLED:
            return
        callback(list(cells))

    def _complete(self) -> None:
        if self.finished:
            return
        log.debug("%s session: %s -> completed", self.algorithm, self._state.value)
        self._state = SessionState.COMPLETED
        self._algo = None
        self.result = self._build_result(cancelled=False)
        log.info("%s: found=%s path=%d visited=%d time=%.2fms", self.algorithm, self._found,
                 len(self._path), len(self._visited), self.result.elapsed_ms)

    def _build_result(self, cancelled: bool) -> PathResult:
        return PathResult(
            algorithm=self.algorithm,
            found=self._found,
            path=list(self._path),
            visited_count=len(self._visited),
            elapsed_ms=self._elapsed_s * 1000.0,
            visited=list(self._visited),
            cancelled=cancelled,
        )

    # -------------------- drivers --------------------

    def run(self, sleep: Callable[[float], None] = time.sleep) -> PathResult:
        """Drive the session to COMPLETED or CANCELLED, pacing with `sleep`."""
        if self._state is SessionState.IDLE:
            self.start()
        while not self.finished:
            if self._state is SessionState.PAUSED:
                sleep(PAUSE_POLL_S)
                continue
            self.advance()
            if self._state is SessionState.RUNNING:
                sleep(self.delay_ms / 1000.0)
        return self.result

    def due(self, now: float) -> bool:
        if self._state is not SessionState.RUNNING:
            return False
        return self._last_emit is None or (now - self._last_emit) * 1000.0 >= self.delay_ms

    def tick(self, now: float) -> bool:
        """Advance one unit if the pacing delay has passed since the last one."""
        if not self.due(now):
            return False
        self._last_emit = now
        return self.advance()
