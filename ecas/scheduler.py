"""Groups nodes onto threads and drives them."""

from __future__ import annotations

import threading
from collections import deque

from ecas.blocking_queue import QueueExited
from ecas.logger import LogLevel, fail, log
from ecas.node import Node

MAX_GROUPS = 10


class Scheduler:
    """Each group of nodes runs in order on a thread of its own."""

    def __init__(self) -> None:
        self._groups: list[list[Node]] = []
        self._groups_temp: list[list[Node]] = [[] for _ in range(MAX_GROUPS)]
        self._threads: list[threading.Thread] = []
        self._stop = threading.Event()

    def mark_group_id(self, node: Node, group_id: int) -> None:
        if not 0 <= group_id < MAX_GROUPS:
            fail(f"group_id should be smaller than {MAX_GROUPS}.\n")
        self._groups_temp[group_id].append(node)

    def update_groups(self) -> None:
        """Make the non-empty marked groups current, in group id order."""
        self._groups = [list(group) for group in self._groups_temp if group]

    def graph_nodes(self) -> list[Node]:
        """All grouped nodes, group by group."""
        return [node for group in self._groups for node in group]

    def bfs_order(self, input_node: Node) -> list[Node]:
        """Breadth-first visit order from ``input_node``; a node reached twice appears twice."""
        self._check_acyclic(input_node)
        order = []
        pending = deque([input_node])
        while pending:
            node = pending.popleft()
            order.append(node)
            pending.extend(node.output_nodes or ())
        return order

    @staticmethod
    def _check_acyclic(start: Node) -> None:
        done: set[int] = set()
        on_path: set[int] = set()
        stack = [(start, iter(start.output_nodes or ()))]
        on_path.add(id(start))
        while stack:
            node, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                on_path.discard(id(node))
                done.add(id(node))
            elif id(child) in on_path:
                fail("Scheduler::BfsExecute -> the graph contains a cycle.\n")
            elif id(child) not in done:
                on_path.add(id(child))
                stack.append((child, iter(child.output_nodes or ())))

    def build_group(self, nodes: dict, groups) -> None:
        """Set the groups from lists of node names; unknown names are skipped."""
        built = []
        for names in groups:
            group = []
            for name in names:
                node = nodes.get(name)
                if node is None:
                    log(LogLevel.INFO, f"BuildGroup -> Can not find node named {name} .\n")
                else:
                    group.append(node)
            built.append(group)
        self._groups = built

    def groups_info(self) -> str:
        lines = ["Groups: \n"]
        for i, group in enumerate(self._groups):
            if not group:
                fail(f"ShowGroups -> groups_[{i}].size() == 0.\n")
            lines.append(f"{i} -> {', '.join(node.name for node in group)}\n")
        return "".join(lines)

    def group_size(self) -> int:
        return len(self._groups)

    def _worker(self, group: list[Node], usr) -> None:
        while not self._stop.is_set():
            for node in group:
                try:
                    inputs, outputs = node.borrow_io()
                except QueueExited:
                    break
                node.run(usr, inputs, outputs)
                node.recycle_io()
        log(LogLevel.INFO, f"is_stop_: {int(self._stop.is_set())}.\n")

    def tasks_spawn(self, usr) -> None:
        """Start one thread per group."""
        if not self._groups:
            fail("TasksSpawn -> groups_.size() == 0, please call function BuildGraph first.\n")
        log(LogLevel.INFO, f"group size: {len(self._groups)}.\n")
        self._stop.clear()
        for group in self._groups:
            thread = threading.Thread(target=self._worker, args=(list(group), usr), daemon=True)
            self._threads.append(thread)
            thread.start()
        log(LogLevel.INFO, "Scheduler::TasksSpawn End.\n")

    def tasks_stop(self, allocator) -> None:
        """Ask the threads to stop and release any that are blocked."""
        self._stop.set()
        allocator.exit_all_blocking_queues()

    def tasks_join(self) -> None:
        for thread in self._threads:
            thread.join()
        self._threads.clear()