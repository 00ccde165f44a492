import time

import pytest

from ecas.logger import EcasError
from ecas.timer import CpuTimer, Timer


def test_cpu_timer_measures_sleep():
    timer = CpuTimer()
    timer.start()
    time.sleep(0.01)
    timer.stop()
    assert timer.seconds() >= 0.009


def test_cpu_timer_units_are_consistent():
    with CpuTimer() as timer:
        time.sleep(0.001)
    ns = timer.nanoseconds()
    assert timer.microseconds() == pytest.approx(ns / 1000.0)
    assert timer.milliseconds() == pytest.approx(timer.microseconds() / 1000.0)
    assert timer.seconds() == pytest.approx(timer.milliseconds() / 1000.0)


def test_record_tracks_min_max_and_mean():
    timer = Timer("t", 2)
    timer.record(0, 2.0)
    timer.record(0, 4.0)
    stats = timer.stats(0)
    assert stats.count == 2
    assert stats.min_ms == 2.0
    assert stats.max_ms == 4.0
    assert stats.mean_ms == pytest.approx(stats.total_ms / stats.count)
    assert timer.stats(1).count == 0


def test_stop_records_elapsed_time():
    timer = Timer("t", 1)
    timer.start()
    elapsed = timer.stop(0)
    stats = timer.stats(0)
    assert stats.count == 1
    assert stats.max_ms == elapsed
    assert stats.min_ms == elapsed


def test_print_interval_reports_and_resets(capsys):
    timer = Timer("t", 1)
    timer.record(0, 1.0, 2)
    assert capsys.readouterr().err == ""
    timer.record(0, 3.0, 2)
    assert "Timer(t) idx(0) cnt(2)" in capsys.readouterr().err
    stats = timer.stats(0)
    assert stats.count == 0
    assert stats.min_ms == 999999.0


def test_out_of_range_index_raises():
    timer = Timer("t", 1)
    with pytest.raises(EcasError):
        timer.record(1, 1.0)