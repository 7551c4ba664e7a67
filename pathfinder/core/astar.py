#!/usr/bin/env python3
"""
A* — one expansion per step() for animation.

Implements the step protocol used by the runner and the viewer:
- init(grid) - reset() - step() -> StepResult

Heuristic:
- Manhattan distance to the target (admissible and consistent on a
  4-connected unit-cost grid).

Tie-breaking in the PQ:
- (f, cell): lower f first, then grid scan order since cells are (row, col).
"""

from dataclasses import dataclass, field
from typing import Tuple, List, Optional
import heapq
import logging

from pathfinder.core.paths import reconstruct_path
from pathfinder.core.types import StepResult, Grid, SearchState, Cell

logger = logging.getLogger(__name__)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class AStarAlgo:
    name: str = "A*"

    # Internal state
    grid: Optional[Grid] = None
    state: SearchState = field(default_factory=SearchState)
    open_pq: List[Tuple[float, Cell]] = field(default_factory=list)  # (f, cell)
    open_set: set = field(default_factory=set)         # for overlay
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    goal_cell: Optional[Cell] = None

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        """Initialize on a given grid."""
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
        if self.grid is None:
            return
        self.state = SearchState()
        self.open_pq.clear()
        self.open_set.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.goal_cell = self.grid.target

        s = self.grid.start
        self.state.g_score[s] = 0
        self.state.f_score[s] = self._h(s)
        heapq.heappush(self.open_pq, (self.state.f_score[s], s))
        self.open_set.add(s)

    # -------------------- helpers --------------------

    def _h(self, c: Cell) -> int:
        return manhattan(c, self.grid.target)

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        return reconstruct_path(self.state, end, limit=self.grid.rows * self.grid.cols)

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion step:
          - Pop the lowest-f node.
          - If goal, reconstruct and finish.
          - Else relax unvisited open neighbors with unit edge cost.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.goal_cell)
            return StepResult(
                status="done",
                path=path,
                metrics=self._metrics(path_len=len(path)),
            )

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.open_pq:
            self.no_path = True
            logger.debug("%s: open set empty after %d pops", self.name, self.popped_count)
            return StepResult(status="no_path", metrics=self._metrics())

        f_u, u = heapq.heappop(self.open_pq)

        # Ignore stale pops
        if f_u != self.state.f(u) or self.state.is_visited(u):
            return StepResult(status="running", current=u, metrics=self._metrics())

        # Finalize u
        self.popped_count += 1
        self.open_set.discard(u)
        self.state.mark_visited(u)

        if u == self.goal_cell:
            self.done = True
            path = self._reconstruct_path(u)
            return StepResult(
                status="done",
                closed=[u],
                current=u,
                path=path,
                metrics=self._metrics(path_len=len(path)),
            )

        # Relax neighbors
        opened_now: List[Cell] = []
        for v in self.grid.open_neighbors(u):
            if self.state.is_visited(v):
                continue
            alt = self.state.g(u) + 1
            if alt < self.state.g(v):
                self.state.predecessor[v] = u
                self.state.g_score[v] = alt
                self.state.f_score[v] = alt + self._h(v)
                heapq.heappush(self.open_pq, (self.state.f_score[v], v))
                if v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return StepResult(
            status="running",
            opened=opened_now,
            closed=[u],
            current=u,
            metrics=self._metrics(),
        )

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.state.visited),
            "path_len": path_len,
        }
