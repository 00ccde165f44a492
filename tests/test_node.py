import pytest

from ecas.allocator import Allocator
from ecas.blocking_queue import QueueExited
from ecas.logger import EcasError
from ecas.node import CompositeNode, NormalNode
from ecas.types import DataType


def _noop(usr, inputs, outputs):
    pass


def _node(name):
    return NormalNode(name, _noop, [[DataType.FP32, 2]], [[DataType.FP32, 2]])


def _pair(allocator, front="", rear=""):
    pair = allocator.create_blocking_queue([2], DataType.FP32)
    pair.front_name = front
    pair.rear_name = rear
    return pair


def test_normal_node_keeps_dims_and_runs_task():
    calls = []
    node = NormalNode("n1", lambda usr, i, o: calls.append((usr, i, o)),
                      [[0, 600, 600]], [[0, 200, 600], [0, 400, 600]])
    assert node.name == "n1"
    assert node.input_dims == [[0, 600, 600]]
    assert node.output_dims == [[0, 200, 600], [0, 400, 600]]
    node.run("usr", ["in"], ["out"])
    assert calls == [("usr", ["in"], ["out"])]


def test_composite_node_stores_relation_and_cannot_run():
    node = CompositeNode("n5", [["n1", "n2"], ["n2", "n3"]])
    assert node.relation == [["n1", "n2"], ["n2", "n3"]]
    with pytest.raises(EcasError):
        node.run(None, [], [])


def test_new_node_has_no_neighbours():
    node = _node("x")
    assert node.input_nodes is None
    assert node.output_nodes is None


def test_reorder_input_queues_follows_input_nodes():
    allocator = Allocator()
    node = _node("t")
    node.input_nodes = [_node("a"), _node("b"), _node("c")]
    for name in ("c", "a", "b"):
        node.append_input_queue(_pair(allocator, front=name))
    node.reorder_input_queues()
    assert [q.front_name for q in node.input_queues] == ["a", "b", "c"]


def test_reorder_output_queues_follows_output_nodes():
    allocator = Allocator()
    node = _node("t")
    node.output_nodes = [_node("a"), _node("b")]
    for name in ("b", "a"):
        node.append_output_queue(_pair(allocator, rear=name))
    node.reorder_output_queues()
    assert [q.rear_name for q in node.output_queues] == ["a", "b"]


def test_reorder_without_neighbours_keeps_order():
    allocator = Allocator()
    node = _node("t")
    for name in ("z", "y"):
        node.append_input_queue(_pair(allocator, front=name))
    node.reorder_input_queues()
    assert [q.front_name for q in node.input_queues] == ["z", "y"]


def test_check_io_is_ready():
    allocator = Allocator()
    node = _node("t")
    in_pair = _pair(allocator)
    out_pair = _pair(allocator)
    node.append_input_queue(in_pair)
    node.append_output_queue(out_pair)
    assert node.check_io_is_ready() is False
    src = allocator.create_tensor([2], DataType.FP32)
    in_pair.enqueue(src)
    assert node.check_io_is_ready() is True


def test_borrow_passes_id_and_recycle_returns_tensors():
    allocator = Allocator()
    node = _node("t")
    in_pair = _pair(allocator)
    out_pair = _pair(allocator)
    node.append_input_queue(in_pair)
    node.append_output_queue(out_pair)
    src = allocator.create_tensor([2], DataType.FP32)
    src.id = 7
    in_pair.enqueue(src)
    inputs, outputs = node.borrow_io()
    assert len(inputs) == 1 and len(outputs) == 1
    assert inputs[0].id == 7
    assert outputs[0].id == 7
    free_before = len(in_pair.free)
    node.recycle_io()
    assert len(in_pair.free) == free_before + 1
    assert len(out_pair.full) == 1
    assert out_pair.full.try_front() is outputs[0]


def test_borrow_with_inconsistent_ids_raises():
    allocator = Allocator()
    node = _node("t")
    first, second = _pair(allocator), _pair(allocator)
    node.append_input_queue(first)
    node.append_input_queue(second)
    src = allocator.create_tensor([2], DataType.FP32)
    src.id = 1
    first.enqueue(src)
    src.id = 2
    second.enqueue(src)
    with pytest.raises(EcasError):
        node.borrow_io()


def test_borrow_after_exit_raises_queue_exited():
    allocator = Allocator()
    node = _node("t")
    node.append_input_queue(_pair(allocator))
    allocator.exit_all_blocking_queues()
    with pytest.raises(QueueExited):
        node.borrow_io()