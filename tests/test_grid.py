# tests/test_grid.py
import pytest

from pathfinder.core.types import Grid, SearchState, default_endpoints


def test_default_grid_places_endpoints_on_middle_row():
    grid = Grid.create()
    assert (grid.rows, grid.cols) == (25, 50)
    assert grid.start == (12, 7)
    assert grid.target == (12, 42)
    assert grid.wall_count() == 0


def test_default_endpoints_never_collide_on_tiny_grids():
    start, target = default_endpoints(3, 3)
    assert start != target


def test_single_column_grid_gets_distinct_endpoints():
    grid = Grid.create(3, 1)
    assert grid.start == (0, 0)
    assert grid.target == (2, 0)
    assert [c for c in grid.cells()] == [(0, 0), (1, 0), (2, 0)]

    wide = Grid.create(1, 2)
    assert wide.start != wide.target


def test_single_cell_grid_is_rejected():
    with pytest.raises(ValueError, match="no room"):
        Grid.create(1, 1)


def test_from_strings_reads_walls_and_endpoints(split_5x5):
    grid = split_5x5
    assert grid.start == (2, 0)
    assert grid.target == (2, 4)
    assert all(grid.is_wall((r, 2)) for r in range(5))
    assert grid.wall_count() == 5
    assert grid.render().splitlines()[2] == "S.#.T"


def test_from_strings_requires_both_endpoints():
    with pytest.raises(ValueError):
        Grid.from_strings(["S..", "..."])


def test_constructor_rejects_bad_layouts():
    with pytest.raises(ValueError):
        Grid(3, 3, (0, 0), (0, 0))
    with pytest.raises(ValueError):
        Grid(3, 3, (0, 0), (5, 5))
    with pytest.raises(ValueError):
        Grid(0, 3, (0, 0), (0, 1))


def test_toggle_wall_ignores_start_and_target(open_5x5):
    grid = open_5x5
    assert grid.toggle_wall(grid.start) is False
    assert grid.toggle_wall(grid.target) is False
    assert not grid.is_wall(grid.start)
    assert not grid.is_wall(grid.target)

    assert grid.toggle_wall((0, 0)) is True
    assert grid.is_wall((0, 0))
    assert grid.toggle_wall((0, 0)) is True
    assert not grid.is_wall((0, 0))


def test_out_of_bounds_edit_raises(open_5x5):
    with pytest.raises(IndexError):
        open_5x5.toggle_wall((5, 0))
    with pytest.raises(IndexError):
        open_5x5.place_start((-1, 2))


def test_neighbors_order_and_edges(open_5x5):
    assert open_5x5.neighbors((2, 2)) == [(1, 2), (3, 2), (2, 1), (2, 3)]
    assert open_5x5.neighbors((0, 0)) == [(1, 0), (0, 1)]


def test_open_neighbors_skip_walls(open_5x5):
    open_5x5.set_wall((1, 2))
    assert (1, 2) not in open_5x5.open_neighbors((2, 2))


def test_placing_start_on_wall_clears_it(open_5x5):
    grid = open_5x5
    grid.set_wall((0, 0))
    assert grid.place_start((0, 0))
    assert grid.start == (0, 0)
    assert not grid.is_wall((0, 0))
    assert grid.place_target((0, 0)) is False
    assert grid.target == (2, 4)


def test_clear_drops_walls_and_search_table(open_5x5):
    grid = open_5x5
    grid.set_wall((1, 1))
    grid.search.mark_visited((1, 1))
    grid.clear()
    assert grid.wall_count() == 0
    assert grid.search.visited_order == []


def test_search_state_sentinels():
    s = SearchState()
    assert s.dist((0, 0)) == float("inf")
    assert s.g((0, 0)) == float("inf")
    assert not s.is_visited((0, 0))
    s.mark_visited((0, 0))
    assert s.visited_order == [(0, 0)]
