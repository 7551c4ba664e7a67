# tests/test_swarm.py
import random

from pathfinder.core.astar import manhattan
from pathfinder.core.runner import run_search
from pathfinder.core.swarm import SwarmAlgo
from pathfinder.core.types import Grid


def test_first_visit_is_an_endpoint():
    grid = Grid.create(20, 30)
    result = run_search(grid, "swarm", rng=random.Random(1))
    assert result.visited[0] in (grid.start, grid.target)


def test_cap_bounds_the_run():
    grid = Grid(60, 60, (30, 5), (30, 55))
    result = run_search(grid, "swarm", rng=random.Random(7), swarm_cap=100)
    assert len(result.visited) == 100


def test_same_seed_same_run():
    a = run_search(Grid.create(15, 25), "swarm", rng=random.Random(42))
    b = run_search(Grid.create(15, 25), "swarm", rng=random.Random(42))
    assert a.visited == b.visited
    assert a.path == b.path


def test_visits_each_open_cell_once_and_skips_walls():
    grid = Grid.from_strings([
        "S.#....",
        "..#.##.",
        "..#..#T",
    ])
    result = run_search(grid, "swarm", rng=random.Random(5))
    assert len(result.visited) == len(set(result.visited))
    assert not any(grid.is_wall(c) for c in result.visited)
    # both sides of the wall get explored since both endpoints seed the frontier
    assert (0, 0) in result.visited and (2, 6) in result.visited


def test_predecessor_chain_is_walkable():
    for seed in range(5):
        grid = Grid.create(15, 25)
        result = run_search(grid, "swarm", rng=random.Random(seed))
        assert result.status == "done"
        assert result.path[-1] == grid.target
        assert result.path[0] not in grid.search.predecessor
        for a, b in zip(result.path, result.path[1:]):
            assert manhattan(a, b) == 1


def test_sealed_target_is_still_visited_but_has_no_route():
    grid = Grid.from_strings([
        "S....",
        "...#.",
        "..#T#",
        "...#.",
    ])
    result = run_search(grid, "swarm", rng=random.Random(0))
    assert result.status == "done"
    assert result.path == [grid.target]


def test_terminal_step_repeats():
    grid = Grid(4, 4, (0, 0), (3, 3))
    algo = SwarmAlgo(rng=random.Random(2))
    algo.init(grid)
    res = algo.step()
    while res.status == "running":
        res = algo.step()
    assert len(algo.state.visited) == 16
    assert algo.step().status == res.status
