"""Tensors: shape and element type over a bound buffer."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from ecas.buffer import Buffer, HostBuffer
from ecas.common import numpy_dtype
from ecas.logger import fail
from ecas.types import DataType, MemoryMode


class Tensor:
    """Shape and type of data; the memory itself lives in a Buffer."""

    def __init__(self, shape, data_type) -> None:
        self.id = -1
        self.shape = [int(dim) for dim in shape]
        self.data_type = DataType(data_type)
        self.mode = MemoryMode.ON_HOST
        self._size = self.data_type.itemsize() * math.prod(self.shape)
        if self._size == 0:
            fail("Tensor -> size is zero.\n")
        self._buffer: Optional[Buffer] = None
        self._owns_buffer = False

    def size(self) -> int:
        """Size of the data in bytes."""
        return self._size

    def bind_buffer(self, buffer: Buffer) -> None:
        self._buffer = buffer
        self._owns_buffer = False

    def bind_host_data(self, data) -> None:
        """Use external host memory as this tensor's storage."""
        self._buffer = HostBuffer(self._size, data)
        self._owns_buffer = True

    def _raw(self) -> np.ndarray:
        if self._buffer is None:
            fail("Tensor::GetData -> no buffer is bound.\n")
        raw = self._buffer.data()
        if raw.size < self._size:
            fail("Tensor::GetData -> buffer is smaller than the tensor.\n")
        return raw[:self._size]

    def get_data(self, mode=MemoryMode.ON_HOST) -> np.ndarray:
        """A writable view of the data with this tensor's shape and type."""
        return self._raw().view(numpy_dtype(self.data_type)).reshape(self.shape)

    def _check_dimension(self, other) -> None:
        if list(self.shape) != list(other.shape):
            fail("Tensor::CloneFrom -> shape mismatch.\n")

    def copy_from(self, other) -> None:
        """Copy the data and id of ``other`` into this tensor."""
        self._check_dimension(other)
        if self.mode != other.mode:
            fail("Tensor::CloneFrom -> memory type mismatch.\n")
        self.id = other.id
        src = np.ascontiguousarray(other.get_data()).reshape(-1).view(np.uint8)
        self._raw()[:] = src[:self._size]

    def copy_to(self, other) -> None:
        """Copy this tensor's data and id into ``other``."""
        self._check_dimension(other)
        if self.mode != other.mode:
            fail("Tensor::CopyTo -> memory type mismatch.\n")
        other.id = self.id
        dst = other.get_data().reshape(-1).view(np.uint8)
        dst[:self._size] = self._raw()

    def describe(self) -> str:
        """Shape and data as text, grouped by the (n, c) planes."""
        if len(self.shape) > 4:
            fail("Tensor::Print -> at most 4 dimensions are supported.\n")
        lines = [f"\n====== Tensor {id(self):#x} ======\n", "\nShape: "]
        lines.extend(f"{dim}, " for dim in self.shape)
        lines.append("\nData: \n")
        n, c, h, w = [1] * (4 - len(self.shape)) + self.shape
        data = self.get_data().reshape(n, c, h * w)
        for ni in range(n):
            for ci in range(c):
                lines.append(f"(n: {ni}, c: {ci})\n")
                lines.extend(f"{value:g}, " for value in data[ni, ci].tolist())
        return "".join(lines)