# mazelab/core/path.py
#!/usr/bin/env python3
import logging
from typing import Dict, List

from mazelab.core.types import Position

log = logging.getLogger(__name__)


def reconstruct_path(parent: Dict[Position, Position], start: Position, end: Position) -> List[Position]:
    """
    Walk parent links back from `end` to `start`.

    Returns the cells strictly between start and end, ordered start -> end.
    A broken or cyclic chain yields [] (only possible if the caller passes a
    map from an unsuccessful run).
    """
    path: List[Position] = []
    cur = end
    for _ in range(len(parent) + 1):
        if cur not in parent:
            break
        cur = parent[cur]
        if cur == start:
            path.reverse()
            return path
        path.append(cur)

    log.error("no parent chain from %s back to %s", end, start)
    return []
