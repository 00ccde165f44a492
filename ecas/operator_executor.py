"""Creates operators through the factory and runs them."""

from __future__ import annotations

from typing import Optional

from ecas.op_factory import OpFactory, get_op_factory
from ecas.operators import Operator


class OperatorExecutor:
    """Keeps every operator it has created and runs them on request."""

    def __init__(self, factory: Optional[OpFactory] = None) -> None:
        self._factory = factory if factory is not None else get_op_factory()
        self._ops: list[Operator] = []

    @property
    def ops(self) -> list[Operator]:
        """The operators created so far, oldest first."""
        return list(self._ops)

    def create_op(self, op_name: str, op_params: str = "") -> Optional[Operator]:
        """Create the operator registered as ``op_name`` with ``op_params``."""
        op = self._factory.create_op_by_name(op_name, op_params)
        self._ops.append(op)
        return op

    def op_run(self, op: Operator, params, inputs, outputs) -> None:
        """Run ``op`` on the given tensors."""
        op.run(params, inputs, outputs)