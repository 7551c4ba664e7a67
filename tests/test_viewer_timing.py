# tests/test_viewer_timing.py
import pytest

pytest.importorskip("pygame")

from pathfinder.app.viewer import steps_due


def test_no_step_before_one_interval():
    assert steps_due(10.0, 10.05, 10) == (0, 10.0)


def test_fraction_of_a_step_carries_over():
    # 2.5 intervals at 10 steps/s: two steps now, the half stays owed
    due, last = steps_due(0.0, 0.25, 10)
    assert due == 2
    assert last == pytest.approx(0.2)

    # the carried half plus another half is one more step
    due, last = steps_due(last, 0.31, 10)
    assert due == 1
    assert last == pytest.approx(0.3)


def test_slow_rate_still_advances_at_high_frame_rate():
    # half a step per frame: 64 frames over one second at 32 steps/s
    last, total = 0.0, 0
    for frame in range(1, 65):
        due, last = steps_due(last, frame / 64, 32)
        assert due in (0, 1)
        total += due
    assert total == 32
