#!/usr/bin/env python3
"""
Swarm — randomized exploration from both ends at once.

The frontier starts with the start and the target cell. Each step pulls a
uniformly random entry off the frontier, visits it, and pushes its unvisited
open neighbors with their predecessor pointing back at it. A neighbor pushed
twice keeps the predecessor of whichever visit came last.

The search does not stop at the target; it runs until the frontier is empty
or `cap` cells have been visited. Predecessor chains recorded this way always
terminate but are NOT shortest paths, and the chain from the target may end
at the target itself rather than at the start. This is a visual mode, not a
solver.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import logging
import random

from pathfinder.core.paths import reconstruct_path
from pathfinder.core.types import StepResult, Grid, SearchState, Cell

logger = logging.getLogger(__name__)

SWARM_CAP = 1500


@dataclass
class SwarmAlgo:
    name: str = "Swarm"
    cap: int = SWARM_CAP
    rng: random.Random = field(default_factory=random.Random)

    grid: Optional[Grid] = None
    state: SearchState = field(default_factory=SearchState)
    frontier: List[Cell] = field(default_factory=list)
    popped_count: int = 0
    finished: bool = False

    def init(self, grid: Grid) -> None:
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.state = SearchState()
        self.frontier = [self.grid.start, self.grid.target]
        self.state.distance[self.grid.start] = 0
        self.state.distance[self.grid.target] = 0
        self.popped_count = 0
        self.finished = False

    def _terminal(self) -> StepResult:
        target = self.grid.target
        if self.state.is_visited(target):
            path = reconstruct_path(self.state, target, limit=self.grid.rows * self.grid.cols)
            return StepResult(status="done", path=path, metrics=self._metrics(path_len=len(path)))
        return StepResult(status="no_path", metrics=self._metrics())

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.finished:
            return self._terminal()

        if not self.frontier or len(self.state.visited) >= self.cap:
            self.finished = True
            if self.frontier:
                logger.debug("%s: stopped at cap of %d visited cells", self.name, self.cap)
            return self._terminal()

        u = self.frontier.pop(self.rng.randrange(len(self.frontier)))
        self.popped_count += 1
        if self.grid.is_wall(u) or self.state.is_visited(u):
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.state.mark_visited(u)

        opened_now: List[Cell] = []
        for v in self.grid.open_neighbors(u):
            if self.state.is_visited(v):
                continue
            self.state.predecessor[v] = u
            self.frontier.append(v)
            opened_now.append(v)

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.frontier),
            "closed_count": len(self.state.visited),
            "path_len": path_len,
        }
