# tests/conftest.py
from collections import deque
from typing import Optional

import pytest

from pathfinder.core.types import Grid


def _shortest_cells(grid: Grid) -> Optional[int]:
    """Cell count of a shortest start->target route, or None if unreachable."""
    dist = {grid.start: 1}
    queue = deque([grid.start])
    while queue:
        u = queue.popleft()
        if u == grid.target:
            return dist[u]
        for v in grid.open_neighbors(u):
            if v not in dist:
                dist[v] = dist[u] + 1
                queue.append(v)
    return None


@pytest.fixture
def shortest_cells():
    return _shortest_cells


@pytest.fixture
def open_5x5():
    return Grid(5, 5, (2, 0), (2, 4))


@pytest.fixture
def split_5x5():
    return Grid.from_strings([
        "..#..",
        "..#..",
        "S.#.T",
        "..#..",
        "..#..",
    ])
