"""A worked example: a four-node graph run both asynchronously and serially."""

from __future__ import annotations

import argparse
import itertools
import math
import threading

from ecas.fastmath import hello_world
from ecas.session import Math, Session, UtilBox
from ecas.types import DataType, ExecutionMode, SessionConfig

FP32 = int(DataType.FP32)
_SIZE = 600

_counters = {name: itertools.count() for name in ("TaskA", "TaskB", "TaskC", "TaskD")}


def _report(task_name: str) -> None:
    print(f"{task_name}: {next(_counters[task_name])} ({threading.get_ident()}).")


class AlgoTasks:
    """Operators and constant tensors shared by the demo tasks."""

    def __init__(self, session: Session) -> None:
        self.session = session

        op_params = "alpha: 1.0, beta: 2.0"
        self.gemm_op = session.create_op("gemm", op_params)
        self.dot_op = session.create_op("dot", op_params)

        # Right-hand matrix for tasks B and C.
        self.gemm_b = session.create_tensor([600, 300], DataType.FP32)
        self.gemm_b.get_data()[...] = 1
        # Vectors for task D; they are rebound to its inputs on every run.
        self.dot_a = session.create_tensor([300], DataType.FP32)
        self.dot_b = session.create_tensor([300], DataType.FP32)


def task_a(usr, inputs, outputs) -> None:
    """Transpose the square input in place and split it: top third, and the rest plus one."""
    data = inputs[0].get_data()
    if data.ndim != 2 or data.shape[0] != data.shape[1]:
        raise ValueError(f"task_a needs a square matrix, got shape {list(data.shape)}")
    data[...] = data.T.copy()

    third = data.shape[0] // 3
    outputs[0].get_data()[...] = data[:third]
    outputs[1].get_data()[...] = data[third:] + 1
    _report("TaskA")


def _gemm_with_shared_b(usr: AlgoTasks, inputs, outputs) -> None:
    usr.session.op_run(usr.gemm_op, [], [inputs[0], usr.gemm_b], outputs)


def task_b(usr, inputs, outputs) -> None:
    """Multiply the (200 x 600) input by the shared (600 x 300) matrix."""
    _gemm_with_shared_b(usr, inputs, outputs)
    _report("TaskB")


def task_c(usr, inputs, outputs) -> None:
    """Multiply the (400 x 600) input by the shared (600 x 300) matrix."""
    _gemm_with_shared_b(usr, inputs, outputs)
    _report("TaskC")


def task_d(usr, inputs, outputs) -> None:
    """Dot product of the leading 300 values of both inputs."""
    usr.dot_a.bind_host_data(inputs[0].get_data())
    usr.dot_b.bind_host_data(inputs[1].get_data())
    usr.session.op_run(usr.dot_op, [], [usr.dot_a, usr.dot_b], outputs)
    print(outputs[0].describe())
    _report("TaskD")


class SerialPass:
    """Runs the four tasks one after another on the calling thread."""

    def __init__(self, ins: AlgoTasks) -> None:
        self.ins = ins
        session = ins.session
        a_out_b_in = session.create_tensor([200, 600], DataType.FP32)
        a_out_c_in = session.create_tensor([400, 600], DataType.FP32)
        b_out_d_in = session.create_tensor([200, 300], DataType.FP32)
        c_out_d_in = session.create_tensor([400, 300], DataType.FP32)

        self._a_out = [a_out_b_in, a_out_c_in]
        self._b_in, self._b_out = [a_out_b_in], [b_out_d_in]
        self._c_in, self._c_out = [a_out_c_in], [c_out_d_in]
        self._d_in = [b_out_d_in, c_out_d_in]

    def run(self, inputs, outputs) -> None:
        task_a(self.ins, inputs, self._a_out)
        task_b(self.ins, self._b_in, self._b_out)
        task_c(self.ins, self._c_in, self._c_out)
        task_d(self.ins, self._d_in, outputs)


def _first_value(tensor) -> float:
    return float(tensor.get_data().reshape(-1)[0])


def graph_base_demo() -> list[tuple[int, float]]:
    """Run five frames through the graph, then five serially.

    Returns the (id, value) of each of the ten results in order.
    """
    config = SessionConfig(mode=ExecutionMode.SINGLE, num_thread=1)
    session = Session("s1", config)

    session.create_node("n1", task_a, [[FP32, 600, 600]], [[FP32, 200, 600], [FP32, 400, 600]], 0)
    session.create_node("n2", task_b, [[FP32, 200, 600]], [[FP32, 200, 300]], 1)
    session.create_node("n3", task_c, [[FP32, 400, 600]], [[FP32, 400, 300]], 0)
    session.create_node("n4", task_d, [[FP32, 200, 300], [FP32, 400, 300]], [[FP32, 1]], 0)
    session.create_composite_node("n5", [["n1", "n2"], ["n2", "n3"]])

    session.build_graph([["n1", "n2"], ["n1", "n3"], ["n2", "n4"], ["n3", "n4"]])
    session.show_info()

    tensor_in = session.create_tensor([_SIZE, _SIZE], DataType.FP32)
    tensor_out = session.create_tensor([1], DataType.FP32)

    util_box = UtilBox()
    timer = util_box.new_timer("graph_base", 2)
    results: list[tuple[int, float]] = []

    util_box.timer_start(timer)
    algo = AlgoTasks(session)
    session.start(algo)
    in_data = tensor_in.get_data()
    for frame in range(5):
        in_data[...] = 1
        tensor_in.id = frame
        session.graph_feed(tensor_in)
    for _ in range(5):
        session.graph_get_result(tensor_out)
        value = _first_value(tensor_out)
        results.append((tensor_out.id, value))
        print(f"out id: {tensor_out.id}, {value:f}.")
    util_box.timer_stop(timer, 0)

    print("Call stop.")
    session.stop()

    serial = SerialPass(algo)
    util_box.timer_start(timer)
    for frame in range(5):
        in_data[...] = 1
        tensor_in.id = frame + 5
        serial.run([tensor_in], [tensor_out])
        value = _first_value(tensor_out)
        results.append((tensor_out.id, value))
        print(f"out id: {tensor_out.id}, {value:f}.")
    util_box.timer_stop(timer, 1, 1)

    y = Math.expf(1.234)
    y2 = math.exp(1.234)
    print(f"expf(1.234f): {y:f}, {y2:f}.")
    return results


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="ecas-demo", description="Run the graph demo.")
    parser.parse_args([] if argv is None else argv)
    hello_world()
    graph_base_demo()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())