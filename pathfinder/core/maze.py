# pathfinder/core/maze.py
#!/usr/bin/env python3
"""
Recursive-division maze generator.

The grid is cleared, the outer border walled, and the interior region
(cols 2..cols-3, rows 2..rows-3) split recursively. Each split is a wall
perpendicular to the region's longer axis, on a random even offset, running
one cell past the region at both ends, with a single gap on an even offset.
Start and target are never walled.

A gap can occasionally be blocked by a later split in a neighbouring region.
With ensure_solvable the layout is regenerated until the target is reachable
from the start, up to max_attempts times.

on_wall(cell, is_wall) receives the kept layout's wall edits in the order
they were carved, starting from an empty grid, so a viewer can draw the
divisions one by one.
"""
from collections import deque
from typing import Callable, List, Optional, Tuple
import logging
import random

from pathfinder.core.types import Grid, Cell

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 25

WallEdit = Tuple[Cell, bool]


def generate_maze(grid: Grid, *, rng: Optional[random.Random] = None,
                  ensure_solvable: bool = True, max_attempts: int = MAX_ATTEMPTS,
                  on_wall: Optional[Callable[[Cell, bool], None]] = None) -> None:
    rng = rng or random.Random()
    attempts = max(1, max_attempts) if ensure_solvable else 1
    edits: List[WallEdit] = []
    for attempt in range(1, attempts + 1):
        edits = _carve(grid, rng)
        if not ensure_solvable or is_connected(grid, grid.start, grid.target):
            logger.info("maze %dx%d generated in %d attempt(s), %d walls",
                        grid.rows, grid.cols, attempt, grid.wall_count())
            break
        logger.debug("maze attempt %d sealed the target off, retrying", attempt)
    else:
        logger.warning("no solvable maze after %d attempts; keeping the last layout", attempts)

    if on_wall is not None:
        for cell, value in edits:
            on_wall(cell, value)


def _carve(grid: Grid, rng: random.Random) -> List[WallEdit]:
    grid.clear()
    edits: List[WallEdit] = []

    def put(c: Cell, value: bool = True) -> None:
        if grid.set_wall(c, value):
            edits.append((c, value))

    for r in range(grid.rows):
        put((r, 0))
        put((r, grid.cols - 1))
    for c in range(grid.cols):
        put((0, c))
        put((grid.rows - 1, c))
    _divide(put, rng, 2, grid.cols - 3, 2, grid.rows - 3)
    return edits


def _divide(put: Callable[..., None], rng: random.Random,
            col_start: int, col_end: int, row_start: int, row_end: int) -> None:
    if col_end - col_start <= 0 or row_end - row_start <= 0:
        return
    horizontal = (col_end - col_start) < (row_end - row_start)

    if horizontal:
        mid_row = rng.choice(range(row_start, row_end + 1, 2))
        for c in range(col_start - 1, col_end + 2):
            put((mid_row, c))
        gap_col = rng.choice(range(col_start, col_end + 1, 2))
        put((mid_row, gap_col), False)

        _divide(put, rng, col_start, col_end, row_start, mid_row - 2)
        _divide(put, rng, col_start, col_end, mid_row + 2, row_end)
    else:
        mid_col = rng.choice(range(col_start, col_end + 1, 2))
        for r in range(row_start - 1, row_end + 2):
            put((r, mid_col))
        gap_row = rng.choice(range(row_start, row_end + 1, 2))
        put((gap_row, mid_col), False)

        _divide(put, rng, col_start, mid_col - 2, row_start, row_end)
        _divide(put, rng, mid_col + 2, col_end, row_start, row_end)


def is_connected(grid: Grid, a: Cell, b: Cell) -> bool:
    """Plain BFS over open cells."""
    if grid.is_wall(a) or grid.is_wall(b):
        return False
    seen = {a}
    queue = deque([a])
    while queue:
        u = queue.popleft()
        if u == b:
            return True
        for v in grid.open_neighbors(u):
            if v not in seen:
                seen.add(v)
                queue.append(v)
    return False
