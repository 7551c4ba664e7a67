# pathfinder/core/dijkstra.py
#!/usr/bin/env python3

from dataclasses import dataclass, field
from typing import Tuple, List, Optional
import heapq
import logging

from pathfinder.core.paths import reconstruct_path
from pathfinder.core.types import StepResult, Grid, SearchState, Cell

logger = logging.getLogger(__name__)


@dataclass
class DijkstraAlgo:
    """
    Uniform-cost search, one expansion per step().

    Every move costs 1, so this expands cells in the same order as BFS. The
    queue is keyed on (distance, cell) and cells are (row, col), so equal
    distances come out in grid scan order.
    """
    name: str = "Dijkstra"

    grid: Optional[Grid] = None
    state: SearchState = field(default_factory=SearchState)
    open_pq: List[Tuple[float, Cell]] = field(default_factory=list)   # (distance, cell)
    open_set: set = field(default_factory=set)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    goal_cell: Optional[Cell] = None

    def init(self, grid: Grid) -> None:
        self.grid = grid
        self.reset()

    def reset(self) -> None:
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
        self.state.distance[s] = 0
        heapq.heappush(self.open_pq, (0, s))
        self.open_set.add(s)

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        return reconstruct_path(self.state, end, limit=self.grid.rows * self.grid.cols)

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.goal_cell)
            return StepResult(status="done", path=path,
                              metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.open_pq:
            self.no_path = True
            logger.debug("%s: frontier exhausted after %d pops", self.name, self.popped_count)
            return StepResult(status="no_path", metrics=self._metrics())

        d_u, u = heapq.heappop(self.open_pq)
        if d_u != self.state.dist(u) or self.state.is_visited(u):
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.popped_count += 1
        self.open_set.discard(u)
        self.state.mark_visited(u)

        if u == self.goal_cell:
            self.done = True
            path = self._reconstruct_path(u)
            return StepResult(status="done", closed=[u], current=u, path=path,
                              metrics=self._metrics(path_len=len(path)))

        opened_now: List[Cell] = []
        for v in self.grid.open_neighbors(u):
            if self.state.is_visited(v):
                continue
            alt = d_u + 1
            if alt < self.state.dist(v):
                self.state.distance[v] = alt
                self.state.predecessor[v] = u
                heapq.heappush(self.open_pq, (alt, v))
                if v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.state.visited),
            "path_len": path_len,
        }
