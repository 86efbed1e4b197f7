#!/usr/bin/env python3
"""
Runtime settings.

Resolved the same way the viewer has always picked its mode:
- ENV:  PATHFINDER_ROWS, PATHFINDER_COLS, PATHFINDER_ALGORITHM,
        PATHFINDER_SPEED=slow|medium|fast, PATHFINDER_STEP_DELAY_MS,
        PATHFINDER_MAZE_DELAY_MS, PATHFINDER_LOG_LEVEL
- CLI:  --rows=21 --cols=59 --algorithm=A* --speed=fast --step-delay-ms=10 ...
CLI wins over ENV; anything unset keeps its default. A --key=value with an
unknown key is rejected rather than ignored.
"""

import os
import sys
from dataclasses import dataclass, replace
from typing import Dict, Mapping, Optional, Sequence

from pathfinder.core.grid import DEFAULT_ROWS, DEFAULT_COLS
from pathfinder.core.registry import get_algorithm
from pathfinder.core.types import ConfigError

# step delays (ms) behind the Slow / Medium / Fast buttons
SPEED_PRESETS: Dict[str, int] = {
    "slow": 75,
    "medium": 15,
    "fast": 2,
}
DEFAULT_SPEED = "medium"
DEFAULT_ALGORITHM = "Dijkstra"
MAZE_DELAY_MS = 5

ENV_PREFIX = "PATHFINDER_"
_KEYS = ("rows", "cols", "algorithm", "speed", "step_delay_ms", "maze_delay_ms", "log_level")


@dataclass
class Settings:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    algorithm: str = DEFAULT_ALGORITHM
    speed: str = DEFAULT_SPEED
    step_delay_ms: Optional[int] = None    # None -> taken from the speed preset
    maze_delay_ms: int = MAZE_DELAY_MS
    log_level: str = "INFO"

    @property
    def step_delay(self) -> int:
        """Effective step delay in milliseconds."""
        if self.step_delay_ms is not None:
            return self.step_delay_ms
        return SPEED_PRESETS[self.speed]

    def with_speed(self, speed: str) -> "Settings":
        if speed not in SPEED_PRESETS:
            raise ConfigError(f"Unknown speed {speed!r}; expected one of: {', '.join(SPEED_PRESETS)}")
        return replace(self, speed=speed, step_delay_ms=None)


def _parse_int(key: str, raw: str, minimum: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {value}")
    return value


def _collect(environ: Mapping[str, str], argv: Sequence[str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for key in _KEYS:
        env_key = ENV_PREFIX + key.upper()
        if env_key in environ:
            raw[key] = environ[env_key]
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        name, value = arg[2:].split("=", 1)
        raw[name.replace("-", "_").lower()] = value
    return raw


def load_settings(environ: Optional[Mapping[str, str]] = None,
                  argv: Optional[Sequence[str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    argv = sys.argv[1:] if argv is None else argv
    raw = _collect(environ, argv)

    s = Settings()
    if "rows" in raw:
        s.rows = _parse_int("rows", raw.pop("rows"), 1)
    if "cols" in raw:
        s.cols = _parse_int("cols", raw.pop("cols"), 1)
    if "algorithm" in raw:
        s.algorithm = raw.pop("algorithm")
    get_algorithm(s.algorithm)   # fail fast on unknown names
    if "speed" in raw:
        speed = raw.pop("speed").lower()
        if speed not in SPEED_PRESETS:
            raise ConfigError(f"Unknown speed {speed!r}; expected one of: {', '.join(SPEED_PRESETS)}")
        s.speed = speed
    if "step_delay_ms" in raw:
        s.step_delay_ms = _parse_int("step_delay_ms", raw.pop("step_delay_ms"), 0)
    if "maze_delay_ms" in raw:
        s.maze_delay_ms = _parse_int("maze_delay_ms", raw.pop("maze_delay_ms"), 0)
    if "log_level" in raw:
        s.log_level = raw.pop("log_level").upper()
    if raw:
        raise ConfigError(f"Unknown setting(s): {', '.join(sorted(raw))}; "
                          f"expected one of: {', '.join(_KEYS)}")
    return s
