"""mazelab: grid maze pathfinding (BFS / DFS / A*) with step-by-step animation."""

from mazelab.core.generator import generate_maze
from mazelab.core.grid import Grid
from mazelab.core.solver import compare, solve
from mazelab.core.types import PathResult

__all__ = ["Grid", "PathResult", "compare", "generate_maze", "solve"]
__version__ = "0.1.0"
