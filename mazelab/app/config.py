# mazelab/app/config.py
#!/usr/bin/env python3
"""
Viewer settings.

- ENV:  MAZELAB_ROWS, MAZELAB_COLS, MAZELAB_ALGO, MAZELAB_SPEED,
        MAZELAB_WALLS, MAZELAB_SEED
- CLI:  --rows=, --cols=, --algo=, --speed=, --walls=, --seed=
CLI flags win over the environment. rows must be 2..30, cols 2..40.
"""

import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from mazelab.core.search import ALGORITHMS
from mazelab.core.session import SPEED_PRESETS

ENV_PREFIX = "MAZELAB_"
KEYS = ("rows", "cols", "algo", "speed", "walls", "seed")

MAX_ROWS = 30
MAX_COLS = 40


@dataclass
class ViewerSettings:
    rows: int = 15
    cols: int = 25
    algorithm: str = "astar"
    speed_preset: str = "normal"
    wall_probability: float = 0.3
    seed: Optional[int] = None


def _raw_values(argv: List[str], environ: Mapping[str, str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for key in KEYS:
        v = environ.get(ENV_PREFIX + key.upper())
        if v:
            raw[key] = v
    for arg in argv:
        for key in KEYS:
            if arg.startswith(f"--{key}="):
                raw[key] = arg.split("=", 1)[1]
    return raw


def _int(raw: Dict[str, str], key: str, minimum: int,
         maximum: Optional[int] = None) -> Optional[int]:
    if key not in raw:
        return None
    try:
        v = int(raw[key])
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw[key]!r}") from None
    if v < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {v}")
    if maximum is not None and v > maximum:
        raise ValueError(f"{key} must be <= {maximum}, got {v}")
    return v


def resolve_settings(argv: Optional[List[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> ViewerSettings:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ
    raw = _raw_values(argv, environ)
    s = ViewerSettings()

    rows = _int(raw, "rows", 2, MAX_ROWS)
    cols = _int(raw, "cols", 2, MAX_COLS)
    if rows is not None:
        s.rows = rows
    if cols is not None:
        s.cols = cols

    if "algo" in raw:
        algo = raw["algo"].lower()
        if algo not in ALGORITHMS:
            raise ValueError(f"algo must be one of {sorted(ALGORITHMS)}, got {raw['algo']!r}")
        s.algorithm = algo

    if "speed" in raw:
        preset = raw["speed"].lower()
        if preset not in SPEED_PRESETS:
            raise ValueError(f"speed must be one of {list(SPEED_PRESETS)}, got {raw['speed']!r}")
        s.speed_preset = preset

    if "walls" in raw:
        try:
            p = float(raw["walls"])
        except ValueError:
            raise ValueError(f"walls must be a number, got {raw['walls']!r}") from None
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"walls must be in [0, 1], got {p}")
        s.wall_probability = p

    if "seed" in raw:
        s.seed = _int(raw, "seed", 0)

    return s
