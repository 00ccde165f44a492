"""The public entry points: sessions, utilities and fast math."""

from __future__ import annotations

from typing import Optional

from ecas.allocator import Allocator
from ecas.async_graph import AsyncGraph
from ecas.fastmath import fast_expf, fast_sqrtf
from ecas.node import Task
from ecas.operator_executor import OperatorExecutor
from ecas.operators import Operator
from ecas.tensor import Tensor
from ecas.timer import Timer
from ecas.types import SessionConfig


class Session:
    """Owns the memory, the operators and the asynchronous graph of one job."""

    def __init__(self, name: str, config: Optional[SessionConfig] = None) -> None:
        config = config if config is not None else SessionConfig()
        self.name = name
        self.config = config
        self._executor = OperatorExecutor()
        self._allocator = Allocator()
        self._graph = AsyncGraph(name, config.mode, config.num_thread, self._allocator)

    @property
    def graph(self) -> AsyncGraph:
        return self._graph

    @property
    def allocator(self) -> Allocator:
        return self._allocator

    def create_tensor(self, shape, data_type, data=None) -> Tensor:
        """A tensor over ``data`` if given, else over fresh zeroed memory."""
        return self._allocator.create_tensor(shape, data_type, data)

    def create_op(self, op_name: str, op_params: str = "") -> Optional[Operator]:
        return self._executor.create_op(op_name, op_params)

    def op_run(self, op: Operator, params, inputs, outputs) -> None:
        self._executor.op_run(op, params, inputs, outputs)

    def create_node(self, name: str, task: Task, input_dims, output_dims, group_id: int = 0):
        return self._graph.create_node(name, task, input_dims, output_dims, group_id)

    def create_composite_node(self, name: str, relation):
        return self._graph.create_composite_node(name, relation)

    def build_graph(self, relation) -> None:
        self._graph.build_graph(relation)

    def show_info(self) -> None:
        self._graph.show_info()

    def start(self, usr=None) -> None:
        self._graph.start(usr)

    def stop(self) -> None:
        self._graph.stop()

    def graph_feed(self, tensor) -> None:
        """Feed ``tensor`` to the graph without waiting for its result."""
        self._graph.feed(tensor)

    def graph_get_result(self, tensor) -> None:
        """Copy the next result of the graph into ``tensor``."""
        self._graph.get_result(tensor)


class UtilBox:
    """Holds utilities such as timers created on request."""

    def __init__(self) -> None:
        self._timers: list[Timer] = []

    def new_timer(self, name: str, num: int) -> Timer:
        """A timer with ``num`` statistic slots."""
        timer = Timer(name, num)
        self._timers.append(timer)
        return timer

    def timer_start(self, timer: Timer) -> None:
        timer.start()

    def timer_stop(self, timer: Timer, idx: int, print_interval: int = 0) -> float:
        """Stop ``timer`` into slot ``idx``; returns the elapsed milliseconds."""
        return timer.stop(idx, print_interval)


class Math:
    """Fast single-precision approximations."""

    @staticmethod
    def expf(x: float) -> float:
        return fast_expf(x)

    @staticmethod
    def sqrtf(x: float) -> float:
        return fast_sqrtf(x)