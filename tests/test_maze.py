# tests/test_maze.py
import logging
import random

from pathfinder.core.maze import generate_maze, is_connected
from pathfinder.core.types import Grid


def _border(grid):
    for r in range(grid.rows):
        yield (r, 0)
        yield (r, grid.cols - 1)
    for c in range(grid.cols):
        yield (0, c)
        yield (grid.rows - 1, c)


def test_endpoints_open_and_border_walled():
    for seed in range(20):
        grid = Grid.create()
        generate_maze(grid, rng=random.Random(seed))
        assert not grid.is_wall(grid.start)
        assert not grid.is_wall(grid.target)
        for cell in _border(grid):
            assert grid.is_wall(cell) or grid.is_endpoint(cell)


def test_generated_maze_is_solvable():
    for seed in range(20):
        grid = Grid.create(21, 41)
        generate_maze(grid, rng=random.Random(seed))
        assert is_connected(grid, grid.start, grid.target)


def test_interior_gets_divided():
    grid = Grid.create()
    generate_maze(grid, rng=random.Random(0))
    border_cells = 2 * grid.rows + 2 * grid.cols - 4
    assert grid.wall_count() > border_cells


def test_same_seed_same_maze():
    a, b = Grid.create(), Grid.create()
    generate_maze(a, rng=random.Random(99))
    generate_maze(b, rng=random.Random(99))
    assert a.render() == b.render()


def test_previous_walls_and_search_are_cleared():
    grid = Grid.create(5, 5)
    grid.set_wall((2, 2))
    grid.search.mark_visited((1, 1))
    generate_maze(grid, rng=random.Random(0))
    assert not grid.is_wall((2, 2))
    assert grid.search.visited_order == []


def test_small_grid_only_gets_a_border():
    grid = Grid(5, 5, (2, 0), (2, 4))
    generate_maze(grid, rng=random.Random(0))
    # border minus the two endpoints sitting on it
    assert grid.wall_count() == 16 - 2
    assert grid.render().splitlines() == [
        "#####",
        "#...#",
        "S...T",
        "#...#",
        "#####",
    ]


def test_unsolvable_layout_is_kept_with_a_warning(caplog):
    grid = Grid(5, 5, (0, 0), (2, 2))
    with caplog.at_level(logging.WARNING, logger="pathfinder.core.maze"):
        generate_maze(grid, rng=random.Random(0), max_attempts=3)
    assert "no solvable maze" in caplog.text
    assert not grid.is_wall(grid.start)
    assert not is_connected(grid, grid.start, grid.target)


def test_without_solvability_check_single_pass():
    grid = Grid(5, 5, (0, 0), (2, 2))
    generate_maze(grid, rng=random.Random(0), ensure_solvable=False)
    assert grid.is_wall((0, 1)) and grid.is_wall((1, 0))


def _replay_walls(grid, edits):
    walls = set()
    for cell, value in edits:
        assert not grid.is_endpoint(cell)
        # every reported edit flips the cell
        assert (cell in walls) != value
        if value:
            walls.add(cell)
        else:
            walls.discard(cell)
    return walls


def test_wall_edits_rebuild_the_final_layout():
    for seed in range(10):
        grid = Grid.create()
        edits = []
        generate_maze(grid, rng=random.Random(seed), on_wall=lambda c, v: edits.append((c, v)))
        assert edits
        assert edits[0] == ((0, 0), True)
        assert any(v is False for _, v in edits)
        walls = _replay_walls(grid, edits)
        assert walls == {c for c in grid.cells() if grid.is_wall(c)}


def test_wall_edits_describe_only_the_kept_attempt():
    grid = Grid(5, 5, (0, 0), (2, 2))
    grid.set_wall((2, 3))
    edits = []
    generate_maze(grid, rng=random.Random(0), max_attempts=3,
                  on_wall=lambda c, v: edits.append((c, v)))
    walls = _replay_walls(grid, edits)
    assert walls == {c for c in grid.cells() if grid.is_wall(c)}
    assert len(walls) == len([e for e in edits if e[1]]) - len([e for e in edits if not e[1]])
