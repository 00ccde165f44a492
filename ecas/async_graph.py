"""The asynchronous graph: nodes, their topology, threads and tensor queues."""

from __future__ import annotations

from typing import Optional

from ecas.allocator import Allocator, BlockingQueuePair
from ecas.logger import LogLevel, fail, log
from ecas.node import CompositeNode, Node, NormalNode, Task
from ecas.scheduler import Scheduler
from ecas.topology import Topology
from ecas.types import DataType, ExecutionMode


def _dims_text(dims_list) -> str:
    parts = []
    for dims in dims_list:
        inner = ",".join(str(int(d)) for d in dims[1:])
        parts.append(f"{int(dims[0])}({inner})")
    return ",".join(parts)


class AsyncGraph:
    """Builds a graph of nodes, links them with tensor queues and runs them on threads."""

    def __init__(self, name: str, mode=ExecutionMode.GRAPH, num_thread: int = 1,
                 allocator: Optional[Allocator] = None) -> None:
        self.name = name
        self.mode = ExecutionMode(mode)
        self.num_thread = num_thread
        self._allocator = allocator if allocator is not None else Allocator()
        self._nodes: dict[str, Node] = {}
        self._input_node: Optional[Node] = None
        self._output_node: Optional[Node] = None
        self._graph_nodes: list[Node] = []
        self._topology = Topology()
        self._scheduler = Scheduler()
        self._built = False

    @property
    def nodes(self) -> dict[str, Node]:
        """All nodes by name, sorted by name."""
        return dict(sorted(self._nodes.items()))

    @property
    def input_node(self) -> Optional[Node]:
        return self._input_node

    @property
    def output_node(self) -> Optional[Node]:
        return self._output_node

    @property
    def graph_nodes(self) -> list[Node]:
        """The grouped nodes that take part in the graph."""
        return list(self._graph_nodes)

    def _check_new_name(self, name: str) -> None:
        if name in self._nodes:
            fail(f"CreateNode -> node {name} already exists.\n")

    def create_node(self, name: str, task: Task, input_dims, output_dims,
                    group_id: int = 0) -> NormalNode:
        """Add a node running ``task``; each dims entry is [data_type, dim0, ...]."""
        self._check_new_name(name)
        node = NormalNode(name, task, input_dims, output_dims)
        self._scheduler.mark_group_id(node, group_id)
        self._nodes[name] = node
        return node

    def create_composite_node(self, name: str, relation) -> CompositeNode:
        self._check_new_name(name)
        node = CompositeNode(name, relation)
        self._nodes[name] = node
        return node

    def _setup_interact_tensors(self) -> None:
        for node in self._graph_nodes:
            input_nodes = node.input_nodes
            if input_nodes is None:
                continue
            if len(input_nodes) != len(node.input_dims):
                fail(
                    "SetupInteractTensors -> output_nodes->size() != output_dims.size(): "
                    f"{len(input_nodes)} vs {len(node.input_dims)}.\n"
                )
            for si, in_node in enumerate(input_nodes):
                wanted = list(node.input_dims[si])
                candidates = [list(d) for d in in_node.output_dims]
                if not candidates:
                    fail(
                        "SetupInteractTensors -> Shape check failed: need_match_dims.size() <= 0 "
                        f"(node {node.name} to {in_node.name}).\n"
                    )
                if wanted not in candidates:
                    fail(
                        f"SetupInteractTensors -> Shape check failed "
                        f"(node {node.name} to {in_node.name}).\n"
                    )
                pair = self._allocator.create_blocking_queue(wanted[1:], DataType(wanted[0]))
                pair.front_name = in_node.name
                pair.rear_name = node.name
                in_node.append_output_queue(pair)
                node.append_input_queue(pair)

    def _setup_io_tensors(self) -> None:
        if self._input_node is None or self._output_node is None:
            fail("SetupIoTensors -> Both input and output nodes must exist.\n")
        if len(self._input_node.input_dims) != 1 or len(self._output_node.output_dims) != 1:
            fail("SetupIoTensors -> Input node has one input, output node has one output.\n")

        dims = self._input_node.input_dims[0]
        pair = self._allocator.create_blocking_queue(dims[1:], DataType(dims[0]))
        pair.front_name = "input"
        pair.rear_name = self._input_node.name
        self._input_node.append_input_queue(pair)

        dims = self._output_node.output_dims[0]
        pair = self._allocator.create_blocking_queue(dims[1:], DataType(dims[0]))
        pair.front_name = self._output_node.name
        pair.rear_name = "output"
        self._output_node.append_output_queue(pair)

    def _reorder_tensors(self) -> None:
        for node in self._graph_nodes:
            node.reorder_input_queues()
            node.reorder_output_queues()

    def build_graph(self, relation) -> None:
        """Link nodes along the chains of names in ``relation`` and allocate their queues."""
        if self._built:
            fail("BuildGraph -> the graph has already been built.\n")
        self._topology.build(self._nodes, relation)
        ordered = [self._nodes[name] for name in sorted(self._nodes)]
        for node in ordered:
            node.input_nodes = self._topology.inputs_of(node)
            node.output_nodes = self._topology.outputs_of(node)

        for node in ordered:
            if node.input_nodes is None and node.output_nodes is None:
                continue
            if node.input_nodes is None:
                if self._input_node is not None:
                    fail("BuildGraph -> Only one input node is allowed.\n")
                self._input_node = node
            elif node.output_nodes is None:
                if self._output_node is not None:
                    fail("BuildGraph -> Only one output node is allowed.\n")
                self._output_node = node

        self._scheduler.update_groups()
        self._graph_nodes = self._scheduler.graph_nodes()

        self._setup_interact_tensors()
        self._setup_io_tensors()
        self._reorder_tensors()
        self._built = True
        log(LogLevel.INFO, "Finish AsyncGraph::BuildGraph.\n")

    def _require_built(self, what: str) -> None:
        if not self._built:
            fail(f"{what} -> please call function BuildGraph first.\n")

    def info(self) -> str:
        """A description of the nodes, their relations, queues and groups."""
        self._require_built("ShowInfo")
        lines = [
            "\n>>>>>>>>> AsyncGraph ShowInfo >>>>>>>>>\n",
            f"AsyncGraph: {self.name}.\n",
            f"Input node: {self._input_node.name}.\n",
            f"Output node: {self._output_node.name}.\n",
        ]
        ordered = [self._nodes[name] for name in sorted(self._nodes)]
        for node in ordered:
            lines.append(
                f"node: {node.name} ({id(node):#x}) -> in: [{_dims_text(node.input_dims)}], "
                f"out: [{_dims_text(node.output_dims)}]\n"
            )
        lines.append("\nNode Relationship: \n")
        for node in ordered:
            ins = ", ".join(n.name for n in node.input_nodes or ())
            outs = ", ".join(n.name for n in node.output_nodes or ())
            lines.append(f"{node.name} -> in: [{ins}], out: [{outs}].\n")
        lines.append("\nTensors: \n")
        for node in ordered:
            if not node.input_queues and not node.output_queues:
                continue
            ins = ", ".join(f"{id(q):#x}({q.front_name})" for q in node.input_queues)
            outs = ", ".join(f"{id(q):#x}({q.rear_name})" for q in node.output_queues)
            lines.append(f"{node.name} -> in: [{ins}], out: [{outs}].\n")
        lines.append("\n")
        lines.append(self._scheduler.groups_info())
        lines.append(">>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>\n\n")
        return "".join(lines)

    def show_info(self) -> None:
        log(LogLevel.INFO_SIMPLE, self.info())

    def start(self, usr=None) -> None:
        """Start one thread per node group; ``usr`` is handed to every task."""
        self._require_built("Start")
        self._scheduler.tasks_spawn(usr)

    def stop(self) -> None:
        """Stop and join every task thread."""
        self._scheduler.tasks_stop(self._allocator)
        self._scheduler.tasks_join()
        log(LogLevel.INFO, "AsyncGraph::Stop().\n")

    def _input_pair(self) -> BlockingQueuePair:
        self._require_built("Feed")
        return self._input_node.input_queues[0]

    def feed(self, tensor) -> None:
        """Copy ``tensor`` into the graph; blocks while the input queue is full."""
        self._input_pair().enqueue(tensor)

    def get_result(self, tensor) -> None:
        """Copy the next result into ``tensor``; blocks until one is ready."""
        self._require_built("GetResult")
        self._output_node.output_queues[0].dequeue(tensor)