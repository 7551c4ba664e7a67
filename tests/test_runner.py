# tests/test_runner.py
import random

import pytest

from pathfinder.core.errors import RunInProgressError, UnknownAlgorithmError, PathfinderError
from pathfinder.core.runner import (
    Session, run_search, reset_search_state, make_algo, normalize_kind,
    IDLE, RUNNING, DONE, FAILED,
)
from pathfinder.core.types import Grid


def test_run_search_leaves_walls_alone(split_5x5):
    before = split_5x5.render()
    for kind in ("dijkstra", "astar", "swarm"):
        run_search(split_5x5, kind, rng=random.Random(0))
        assert split_5x5.render() == before


def test_on_visit_reports_visit_order(open_5x5):
    seen = []
    result = run_search(open_5x5, "dijkstra", on_visit=seen.append)
    assert seen == result.visited


def test_each_run_gets_a_fresh_table(open_5x5):
    first = run_search(open_5x5, "astar")
    table = open_5x5.search
    second = run_search(open_5x5, "astar")
    assert open_5x5.search is not table
    assert first.visited == second.visited
    assert first.path == second.path


def test_reset_search_state(open_5x5):
    run_search(open_5x5, "dijkstra")
    assert open_5x5.search.visited_order
    reset_search_state(open_5x5)
    assert open_5x5.search.visited_order == []
    assert open_5x5.search.predecessor == {}


def test_result_metrics(open_5x5):
    result = run_search(open_5x5, "dijkstra")
    assert result.found
    assert result.metrics["visited"] == len(result.visited)
    assert result.metrics["path_len"] == 5
    assert result.elapsed_ms >= 0


def test_unknown_algorithm():
    with pytest.raises(UnknownAlgorithmError):
        normalize_kind("greedy")
    with pytest.raises(ValueError):
        run_search(Grid(3, 3, (0, 0), (2, 2)), "greedy")


def test_aliases():
    assert normalize_kind("A*") == "astar"
    assert normalize_kind(" BFS ") == "bfs"
    assert make_algo("bfs").name == "BFS"


def test_session_state_machine(open_5x5):
    session = Session(open_5x5)
    assert session.status == IDLE

    result = session.start_run("dijkstra")
    assert session.status == RUNNING
    assert result.found

    with pytest.raises(RunInProgressError):
        session.start_run("astar")
    with pytest.raises(RunInProgressError):
        session.toggle_wall((0, 0))
    with pytest.raises(RunInProgressError):
        session.generate_maze()
    with pytest.raises(RunInProgressError):
        session.clear()
    assert not open_5x5.is_wall((0, 0))

    assert session.finish_run() == DONE
    assert session.status == DONE
    with pytest.raises(PathfinderError):
        session.finish_run()


def test_session_failed_run(split_5x5):
    session = Session(split_5x5)
    result = session.run("astar")
    assert result.path == []
    assert session.status == FAILED

    # a finished run does not block edits
    assert session.toggle_wall((0, 2))
    assert session.run("astar").found
    assert session.status == DONE


def test_session_recovers_from_a_raising_listener(open_5x5):
    session = Session(open_5x5)
    session.run("dijkstra")
    assert session.result.found

    def boom(cell):
        raise RuntimeError("listener broke")

    with pytest.raises(RuntimeError):
        session.start_run("dijkstra", on_visit=boom)
    assert session.status == FAILED
    assert session.result is None
    with pytest.raises(PathfinderError):
        session.finish_run()

    session.clear()
    assert session.status == IDLE
    assert session.run("astar").found
    assert session.status == DONE


def test_session_unknown_kind_does_not_start(open_5x5):
    session = Session(open_5x5)
    with pytest.raises(UnknownAlgorithmError):
        session.start_run("nope")
    assert session.status == IDLE


def test_session_clear_and_maze_return_to_idle():
    session = Session(Grid.create(15, 25), rng=random.Random(4))
    session.run("dijkstra")
    session.generate_maze()
    assert session.status == IDLE
    assert session.grid.wall_count() > 0
    session.clear()
    assert session.status == IDLE
    assert session.grid.wall_count() == 0
    assert session.result is None
