"""Raw memory blocks that tensors are bound to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum

import numpy as np


class MemoryType(IntEnum):
    ONLY_ON_HOST = 0
    ONLY_ON_DEVICE = 1
    ON_HOST_AND_DEVICE = 2


class Buffer(ABC):
    """A block of memory; it knows nothing of how the bytes are used."""

    @abstractmethod
    def data(self) -> np.ndarray:
        """The buffer's bytes as a flat uint8 array."""


class HostBuffer(Buffer):
    """Host memory, either allocated here (zeroed) or wrapping external data."""

    def __init__(self, size: int, data=None) -> None:
        if size < 0:
            raise ValueError("buffer size must not be negative")
        self._size = size
        if data is None:
            self._data = np.zeros(size, dtype=np.uint8)
            self._owned = True
            return
        if isinstance(data, np.ndarray):
            if not data.flags.c_contiguous:
                raise ValueError("external array must be C-contiguous")
            raw = data.reshape(-1).view(np.uint8)
        else:
            raw = np.frombuffer(data, dtype=np.uint8)
        if raw.size < size:
            raise ValueError(f"external data holds {raw.size} bytes, {size} needed")
        self._data = raw[:size]
        self._owned = False

    @property
    def size(self) -> int:
        return self._size

    def data(self) -> np.ndarray:
        return self._data

    def is_owned(self) -> bool:
        """True if the memory was allocated by this buffer."""
        return self._owned