"""Compute nodes of the asynchronous graph and their tensor exchange."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ecas.logger import fail

Task = Callable[[object, list, list], None]


class Node(ABC):
    """A graph node that borrows tensors from its queues, runs, and returns them."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        # None means the node has no neighbours on that side.
        self.input_nodes: Optional[list[Node]] = None
        self.output_nodes: Optional[list[Node]] = None
        # Each dims entry is [data_type, dim0, dim1, ...].
        self.input_dims: list[list[int]] = []
        self.output_dims: list[list[int]] = []
        self.input_queues: list = []
        self.output_queues: list = []
        self._input_tensors: list = []
        self._output_tensors: list = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    @abstractmethod
    def run(self, usr, inputs, outputs) -> None:
        """Compute ``outputs`` from ``inputs``."""

    def append_input_queue(self, queue_pair) -> None:
        self.input_queues.append(queue_pair)

    def append_output_queue(self, queue_pair) -> None:
        self.output_queues.append(queue_pair)

    @staticmethod
    def _reorder(queues: list, nodes: Optional[list], name_of) -> None:
        if nodes is None:
            return
        for ni, node in enumerate(nodes):
            for qi in range(len(queues)):
                if name_of(queues[qi]) == node.name and ni != qi:
                    queues[ni], queues[qi] = queues[qi], queues[ni]

    def reorder_input_queues(self) -> None:
        """Put the input queues in the order of the input nodes."""
        self._reorder(self.input_queues, self.input_nodes, lambda q: q.front_name)

    def reorder_output_queues(self) -> None:
        """Put the output queues in the order of the output nodes."""
        self._reorder(self.output_queues, self.output_nodes, lambda q: q.rear_name)

    def check_io_is_ready(self) -> bool:
        """True if every input has a full tensor and every output a free one."""
        return all(not q.full.empty() for q in self.input_queues) and all(
            not q.free.empty() for q in self.output_queues
        )

    def borrow_io(self) -> tuple[list, list]:
        """Take one full tensor per input and one free tensor per output.

        Blocks until they are available; raises QueueExited once a queue exits.
        The inputs' id is passed on to the outputs.
        """
        self._input_tensors = [q.full.wait_and_pop() for q in self.input_queues]
        self._output_tensors = [q.free.wait_and_pop() for q in self.output_queues]
        if self._input_tensors:
            first_id = self._input_tensors[0].id
            if any(t.id != first_id for t in self._input_tensors[1:]):
                fail("Node::BorrowIo -> The ID of Tensor in the same group is inconsistent.\n")
            for tensor in self._output_tensors:
                tensor.id = first_id
        return list(self._input_tensors), list(self._output_tensors)

    def recycle_io(self) -> None:
        """Return borrowed inputs as free and outputs as full."""
        for queue, tensor in zip(self.input_queues, self._input_tensors):
            queue.free.push(tensor)
        for queue, tensor in zip(self.output_queues, self._output_tensors):
            queue.full.push(tensor)


class NormalNode(Node):
    """A node that runs a user task."""

    def __init__(self, name: str, task: Task, input_dims, output_dims) -> None:
        super().__init__(name)
        self.task = task
        self.input_dims = [list(dims) for dims in input_dims]
        self.output_dims = [list(dims) for dims in output_dims]

    def run(self, usr, inputs, outputs) -> None:
        self.task(usr, inputs, outputs)


class CompositeNode(Node):
    """A node standing for a sub-graph given as chains of node names."""

    def __init__(self, name: str, relation) -> None:
        super().__init__(name)
        self.relation = [list(chain) for chain in relation]

    def run(self, usr, inputs, outputs) -> None:
        fail(f"CompositeNode {self.name} has no task to run.\n")