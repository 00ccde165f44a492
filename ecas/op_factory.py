"""Registry that creates operators by name."""

from __future__ import annotations

from typing import Callable, Optional

from ecas.logger import EcasError, LogLevel, log
from ecas.operators import DotOp, GemmOp, Operator

OpCreator = Callable[[str], Operator]


class UnknownOperatorError(EcasError):
    """Raised when no operator is registered under a name."""


class OpFactory:
    """Maps operator names to the callables that build them."""

    def __init__(self) -> None:
        self._creators: dict[str, Optional[OpCreator]] = {}

    def create_op_by_name(self, op_name: str, params_str: str = "") -> Optional[Operator]:
        if op_name not in self._creators:
            raise UnknownOperatorError(
                f"Can not find Op: {op_name}.\n Registered Op: < {self.print_list()}>"
            )
        creator = self._creators[op_name]
        if creator is None:
            return None
        return creator(params_str)

    def register_op_class(self, op_name: str, creator: Optional[OpCreator]) -> None:
        """Register ``creator``; a name already registered keeps its first creator."""
        if op_name in self._creators:
            log(LogLevel.WARNING, f"Op name: {op_name} has already been registered.")
            return
        self._creators[op_name] = creator

    def registered_names(self) -> list[str]:
        return sorted(self._creators)

    def print_list(self) -> str:
        """The registered names, each followed by a space."""
        return "".join(f"{name} " for name in self.registered_names())


_FACTORY = OpFactory()
_FACTORY.register_op_class("dot", DotOp.create)
_FACTORY.register_op_class("gemm", GemmOp.create)


def get_op_factory() -> OpFactory:
    """The shared factory with the built-in operators registered."""
    return _FACTORY