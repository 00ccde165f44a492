"""Public enumerations and configuration shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExecutionMode(IntEnum):
    """How a session executes its tasks."""

    SINGLE = 0
    SERIAL = 1
    GRAPH = 2


class DataType(IntEnum):
    """Element type of a tensor."""

    FP32 = 0
    FP16 = 1
    INT32 = 2
    INT16 = 3
    INT8 = 4

    def itemsize(self) -> int:
        """Number of bytes taken by one element of this type."""
        return _ITEM_SIZES[self]


class MemoryMode(IntEnum):
    """Where a tensor's memory lives."""

    ON_HOST = 0
    ON_DEVICE = 1


# FP16 is stored as a 16-bit integer.
_ITEM_SIZES = {
    DataType.FP32: 4,
    DataType.FP16: 2,
    DataType.INT32: 4,
    DataType.INT16: 2,
    DataType.INT8: 1,
}


@dataclass
class SessionConfig:
    """Settings a session is created with."""

    mode: ExecutionMode = ExecutionMode.SINGLE
    num_thread: int = 1