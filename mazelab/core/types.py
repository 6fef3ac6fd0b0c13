# mazelab/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any

Position = Tuple[int, int]  # (row, col)


class CellKind(Enum):
    OPEN = "open"
    WALL = "wall"
    START = "start"
    END = "end"


# ---------- errors ----------
class MazeError(Exception):
    """Base class for everything the engine raises on purpose."""


class OutOfBounds(MazeError, IndexError):
    def __init__(self, pos: Position, rows: int, cols: int):
        super().__init__(f"position {pos} outside {rows}x{cols} grid")
        self.pos = pos


class InvalidEndpoint(MazeError, ValueError):
    pass


class UnknownAlgorithm(MazeError, ValueError):
    pass


class SessionStateError(MazeError, RuntimeError):
    pass


@dataclass
class StepResult:
    status: str                        # "running" | "done" | "no_path"
    visited: Optional[Position] = None  # newly visited this step (never start/end)
    current: Optional[Position] = None
    path: Optional[List[Position]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PathResult:
    algorithm: str
    found: bool
    path: List[Position] = field(default_factory=list)
    visited_count: int = 0
    elapsed_ms: float = 0.0
    visited: List[Position] = field(default_factory=list)
    cancelled: bool = False

    @property
    def path_length(self) -> Optional[int]:
        """Moves from start to end (path excludes both endpoints)."""
        return len(self.path) + 1 if self.found else None
