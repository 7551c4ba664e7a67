# pathfinder/core/config.py
#!/usr/bin/env python3
"""
Settings for the viewer.

Resolution order: defaults, then PATHFINDER_* environment variables, then
command-line flags.
"""
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence
import argparse
import logging
import os

from pathfinder.core.runner import ALGORITHMS, normalize_kind
from pathfinder.core.swarm import SWARM_CAP
from pathfinder.core.types import DEFAULT_ROWS, DEFAULT_COLS

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

MIN_SIDE = 3
MAX_SPEED = 500


@dataclass
class Settings:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    algorithm: str = "dijkstra"
    steps_per_sec: int = 100
    cell_size: int = 25
    seed: Optional[int] = None
    dev_mode: bool = False
    swarm_cap: int = SWARM_CAP
    log_level: str = "INFO"

    def validate(self) -> "Settings":
        if self.rows < MIN_SIDE or self.cols < MIN_SIDE:
            raise ValueError(f"grid must be at least {MIN_SIDE}x{MIN_SIDE}")
        if not 1 <= self.steps_per_sec <= MAX_SPEED:
            raise ValueError(f"speed must be between 1 and {MAX_SPEED} steps/s")
        if self.swarm_cap < 1:
            raise ValueError("swarm cap must be positive")
        self.algorithm = normalize_kind(self.algorithm)
        if self.algorithm == "swarm" and not self.dev_mode:
            raise ValueError("the swarm algorithm is only available in dev mode")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"unknown log level: {self.log_level!r}")
        self.log_level = self.log_level.upper()
        return self


def _env_int(environ: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def from_env(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    s = Settings()
    s.rows = _env_int(env, "PATHFINDER_ROWS", s.rows)
    s.cols = _env_int(env, "PATHFINDER_COLS", s.cols)
    s.algorithm = env.get("PATHFINDER_ALGO", s.algorithm) or s.algorithm
    s.steps_per_sec = _env_int(env, "PATHFINDER_SPEED", s.steps_per_sec)
    s.seed = _env_int(env, "PATHFINDER_SEED", s.seed)
    s.dev_mode = _env_flag(env, "PATHFINDER_DEV", s.dev_mode)
    s.log_level = env.get("PATHFINDER_LOG_LEVEL", s.log_level) or s.log_level
    return s


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pathfinder",
                                description="Grid pathfinding visualizer")
    p.add_argument("--rows", type=int, help="grid rows")
    p.add_argument("--cols", type=int, help="grid columns")
    p.add_argument("--algo", choices=sorted(ALGORITHMS), help="initial algorithm")
    p.add_argument("--speed", type=int, help="replay steps per second")
    p.add_argument("--seed", type=int, help="seed for mazes and the swarm")
    p.add_argument("--dev", action="store_true", default=None, help="unlock the swarm algorithm")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return p


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    s = from_env(environ)
    args = build_parser().parse_args(argv)
    if args.rows is not None:
        s.rows = args.rows
    if args.cols is not None:
        s.cols = args.cols
    if args.algo is not None:
        s.algorithm = args.algo
    if args.speed is not None:
        s.steps_per_sec = args.speed
    if args.seed is not None:
        s.seed = args.seed
    if args.dev:
        s.dev_mode = True
    if args.log_level:
        s.log_level = args.log_level
    return s.validate()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
