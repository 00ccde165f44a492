import threading
import time

import pytest

from ecas.internal_thread import InternalThread
from ecas.logger import EcasError


class Counter(InternalThread):
    def __init__(self):
        super().__init__()
        self.iterations = 0
        self.running = threading.Event()
        self.finished = threading.Event()

    def entry(self):
        self.running.set()
        while not self.must_stop():
            self.iterations += 1
            time.sleep(0.001)
        self.finished.set()


def test_start_runs_entry_until_stop():
    worker = Counter()
    assert InternalThread.start(worker) is True
    assert worker.running.wait(timeout=5)
    assert InternalThread.is_started(worker)
    InternalThread.stop(worker)
    assert worker.finished.is_set()
    assert not InternalThread.is_started(worker)


def test_restart_while_running_raises():
    worker = Counter()
    InternalThread.start(worker)
    try:
        with pytest.raises(EcasError):
            InternalThread.start(worker)
    finally:
        InternalThread.stop(worker)
    assert worker.finished.is_set()


def test_stop_request_is_consumed():
    worker = Counter()
    InternalThread.start(worker)
    InternalThread.stop(worker)
    assert InternalThread.must_stop(worker) is False


def test_must_stop_false_before_start():
    assert InternalThread().must_stop() is False


def test_stop_without_start_leaves_not_started():
    thread = InternalThread()
    thread.stop()
    assert not thread.is_started()


def test_can_start_again_after_stop():
    worker = Counter()
    InternalThread.start(worker)
    InternalThread.stop(worker)
    worker.finished.clear()
    assert InternalThread.start(worker) is True
    InternalThread.stop(worker)
    assert worker.finished.is_set()


def test_context_manager_stops_thread():
    with Counter() as worker:
        assert worker.running.wait(timeout=5)
        assert InternalThread.is_started(worker)
    assert worker.finished.is_set()
    assert not InternalThread.is_started(worker)