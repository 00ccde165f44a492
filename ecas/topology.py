"""Input and output relations between graph nodes."""

from __future__ import annotations

from typing import Optional

from ecas.logger import fail
from ecas.node import Node


class Topology:
    """Records, for every node, the nodes feeding it and the nodes it feeds."""

    def __init__(self) -> None:
        self._outputs: dict[Node, list[Node]] = {}
        self._inputs: dict[Node, list[Node]] = {}

    def _find(self, nodes: dict, name: str) -> Node:
        node = nodes.get(name)
        if node is None:
            fail(f"Can not find node named {name} .\n")
        return node

    def build(self, nodes: dict, relation) -> None:
        """Add the edges of each chain of names in ``relation``."""
        for chain in relation:
            for src_name, dst_name in zip(chain, chain[1:]):
                src = self._find(nodes, src_name)
                dst = self._find(nodes, dst_name)
                self._outputs.setdefault(src, []).append(dst)
                self._inputs.setdefault(dst, []).append(src)

    def outputs_of(self, node: Node) -> Optional[list[Node]]:
        """Nodes fed by ``node``, or None if there are none."""
        return self._outputs.get(node)

    def inputs_of(self, node: Node) -> Optional[list[Node]]:
        """Nodes feeding ``node``, or None if there are none."""
        return self._inputs.get(node)