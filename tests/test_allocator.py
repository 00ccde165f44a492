import numpy as np
import pytest

from ecas.allocator import BLOCKING_QUEUE_SIZE, Allocator
from ecas.blocking_queue import QueueExited
from ecas.types import DataType


def test_create_tensor_owned():
    alloc = Allocator()
    t = alloc.create_tensor([3, 2], DataType.FP32)
    assert t.shape == [3, 2]
    assert t.get_data().tolist() == [[0.0, 0.0]] * 3


def test_create_tensor_external():
    alloc = Allocator()
    external = np.full(4, 3.0, dtype=np.float32)
    t = alloc.create_tensor([4], DataType.FP32, external)
    t.get_data()[2] = 8.0
    assert external[2] == 8.0


def test_queue_pair_starts_with_free_tensors():
    pair = Allocator().create_blocking_queue([2], DataType.FP32)
    assert len(pair.free) == BLOCKING_QUEUE_SIZE == 10
    assert pair.full.empty()


def test_enqueue_dequeue_round_trip():
    alloc = Allocator()
    pair = alloc.create_blocking_queue([3], DataType.FP32)
    src = alloc.create_tensor([3], DataType.FP32)
    src.get_data()[...] = [1.5, 2.5, 3.5]
    src.id = 4
    pair.enqueue(src)
    assert len(pair.full) == 1
    dst = alloc.create_tensor([3], DataType.FP32)
    pair.dequeue(dst)
    assert dst.id == 4
    assert dst.get_data().tolist() == [1.5, 2.5, 3.5]
    assert len(pair.free) == BLOCKING_QUEUE_SIZE
    assert pair.full.empty()


def test_loan_and_recycle():
    alloc = Allocator()
    pair = alloc.create_blocking_queue([1], DataType.INT32)
    assert pair.loan_out_from_full() is None
    pair.enqueue(alloc.create_tensor([1], DataType.INT32))
    loaned = pair.loan_out_from_full()
    assert loaned.shape == [1]
    assert len(pair.free) == BLOCKING_QUEUE_SIZE - 1
    pair.recycle_to_free(loaned)
    assert len(pair.free) == BLOCKING_QUEUE_SIZE


def test_exit_releases_waiters():
    alloc = Allocator()
    pair = alloc.create_blocking_queue([1], DataType.FP32)
    alloc.exit_all_blocking_queues()
    with pytest.raises(QueueExited):
        pair.dequeue(alloc.create_tensor([1], DataType.FP32))


def test_info_reports_pairs():
    alloc = Allocator()
    pair = alloc.create_blocking_queue([1], DataType.FP32)
    pair.front_name = "n1"
    pair.rear_name = "n2"
    text = alloc.info()
    assert text.startswith("Allocator info:\n")
    assert f"[n1, n2]: (full: 0, free: {BLOCKING_QUEUE_SIZE})." in text