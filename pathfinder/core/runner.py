# pathfinder/core/runner.py
#!/usr/bin/env python3
"""
Run a search to completion and guard the grid while a run is in flight.

run_search() drives an algorithm's step() until it reports "done" or
"no_path" and hands back the visit order and path. Session adds the
idle -> running -> done/failed state machine the viewer uses: the run stays
"running" while the visit order is replayed and only finish_run() closes it.
"""
from typing import Callable, Dict, Optional
import logging
import random
import time

from pathfinder.core.astar import AStarAlgo
from pathfinder.core.dijkstra import DijkstraAlgo
from pathfinder.core.errors import RunInProgressError, UnknownAlgorithmError, PathfinderError
from pathfinder.core.maze import generate_maze, MAX_ATTEMPTS
from pathfinder.core.swarm import SwarmAlgo, SWARM_CAP
from pathfinder.core.types import Grid, Cell, RunResult, SearchState

logger = logging.getLogger(__name__)

ALGORITHMS = {
    "dijkstra": DijkstraAlgo,
    "bfs": DijkstraAlgo,
    "astar": AStarAlgo,
    "swarm": SwarmAlgo,
}

LABELS = {
    "dijkstra": "Dijkstra",
    "bfs": "BFS",
    "astar": "A*",
    "swarm": "Swarm",
}

_ALIASES = {"a*": "astar", "a-star": "astar", "uniform": "dijkstra"}

IDLE = "idle"
RUNNING = "running"
DONE = "done"
FAILED = "failed"


def normalize_kind(kind: str) -> str:
    key = str(kind).strip().lower()
    key = _ALIASES.get(key, key)
    if key not in ALGORITHMS:
        raise UnknownAlgorithmError(kind)
    return key


def make_algo(kind: str, *, rng: Optional[random.Random] = None, swarm_cap: int = SWARM_CAP):
    key = normalize_kind(kind)
    if key == "swarm":
        return SwarmAlgo(name=LABELS[key], cap=swarm_cap, rng=rng or random.Random())
    return ALGORITHMS[key](name=LABELS[key])


def run_search(grid: Grid, kind: str, *, rng: Optional[random.Random] = None,
               on_visit: Optional[Callable[[Cell], None]] = None,
               swarm_cap: int = SWARM_CAP) -> RunResult:
    """
    Run one search over the grid's current walls. Walls are never touched; the
    run's search table replaces grid.search. on_visit gets each visited cell
    in order.
    """
    algo = make_algo(kind, rng=rng, swarm_cap=swarm_cap)
    t0 = time.perf_counter()
    algo.init(grid)
    grid.search = algo.state

    while True:
        res = algo.step()
        if on_visit is not None:
            for c in res.closed:
                on_visit(c)
        if res.status in ("done", "no_path"):
            break

    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    path = list(res.path or [])
    result = RunResult(
        algorithm=algo.name,
        visited=list(algo.state.visited_order),
        path=path,
        status=res.status,
        elapsed_ms=elapsed_ms,
        metrics={
            "visited": len(algo.state.visited_order),
            "path_len": len(path),
            "popped": algo.popped_count,
        },
    )
    logger.info("%s: %s, visited=%d path=%d in %.1f ms", algo.name, result.status,
                len(result.visited), len(path), elapsed_ms)
    return result


def reset_search_state(grid: Grid) -> None:
    grid.search = SearchState()


class Session:
    def __init__(self, grid: Grid, *, rng: Optional[random.Random] = None,
                 swarm_cap: int = SWARM_CAP):
        self.grid = grid
        self.rng = rng or random.Random()
        self.swarm_cap = swarm_cap
        self.status = IDLE
        self.result: Optional[RunResult] = None

    @property
    def running(self) -> bool:
        return self.status == RUNNING

    def _guard(self, action: str) -> None:
        if self.running:
            raise RunInProgressError(action)

    # -------------------- runs --------------------

    def start_run(self, kind: str, on_visit: Optional[Callable[[Cell], None]] = None) -> RunResult:
        self._guard("start a run")
        normalize_kind(kind)
        self.result = None
        self.status = RUNNING
        try:
            self.result = run_search(self.grid, kind, rng=self.rng, on_visit=on_visit,
                                     swarm_cap=self.swarm_cap)
        except Exception:
            self.status = FAILED
            logger.exception("run of %s aborted", kind)
            raise
        return self.result

    def finish_run(self) -> str:
        if not self.running:
            raise PathfinderError("no run in progress")
        self.status = DONE if self.result is not None and self.result.found else FAILED
        return self.status

    def run(self, kind: str) -> RunResult:
        result = self.start_run(kind)
        self.finish_run()
        return result

    # -------------------- grid edits --------------------

    def toggle_wall(self, c: Cell) -> bool:
        self._guard("edit walls")
        return self.grid.toggle_wall(c)

    def set_wall(self, c: Cell, value: bool = True) -> bool:
        self._guard("edit walls")
        return self.grid.set_wall(c, value)

    def place_start(self, c: Cell) -> bool:
        self._guard("move the start")
        return self.grid.place_start(c)

    def place_target(self, c: Cell) -> bool:
        self._guard("move the target")
        return self.grid.place_target(c)

    def clear(self) -> None:
        self._guard("clear the grid")
        self.grid.clear()
        self.result = None
        self.status = IDLE

    def reset_search(self) -> None:
        self._guard("reset the search")
        reset_search_state(self.grid)
        self.result = None
        self.status = IDLE

    def generate_maze(self, *, ensure_solvable: bool = True, max_attempts: int = MAX_ATTEMPTS,
                      on_wall: Optional[Callable[[Cell, bool], None]] = None) -> None:
        self._guard("generate a maze")
        generate_maze(self.grid, rng=self.rng, ensure_solvable=ensure_solvable,
                      max_attempts=max_attempts, on_wall=on_wall)
        self.result = None
        self.status = IDLE

    def grid_summary(self) -> Dict[str, object]:
        return {
            "rows": self.grid.rows,
            "cols": self.grid.cols,
            "walls": self.grid.wall_count(),
            "start": self.grid.start,
            "target": self.grid.target,
            "status": self.status,
        }
