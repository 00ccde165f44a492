"""Creates tensors with buffers and the queue pairs that link graph nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ecas.blocking_queue import BlockingQueue
from ecas.buffer import Buffer, HostBuffer, MemoryType
from ecas.logger import fail
from ecas.tensor import Tensor

BLOCKING_QUEUE_SIZE = 10


@dataclass
class BlockingQueuePair:
    """Free tensors waiting to be filled and full tensors waiting to be read."""

    front_name: str = ""
    rear_name: str = ""
    free: BlockingQueue = field(default_factory=BlockingQueue)
    full: BlockingQueue = field(default_factory=BlockingQueue)

    def enqueue(self, tensor) -> None:
        """Copy ``tensor`` into a free slot and mark it full; blocks if none is free."""
        inside = self.free.wait_and_pop()
        inside.copy_from(tensor)
        self.full.push(inside)

    def dequeue(self, tensor) -> None:
        """Copy the oldest full slot into ``tensor`` and free it; blocks if none is full."""
        inside = self.full.wait_and_pop()
        inside.copy_to(tensor)
        self.free.push(inside)

    def loan_out_from_full(self) -> Optional[Tensor]:
        """Take a full tensor without waiting, or None."""
        return self.full.try_pop()

    def recycle_to_free(self, tensor: Tensor) -> None:
        self.free.push(tensor)


class Allocator:
    """Owns every tensor, buffer and queue pair it creates."""

    def __init__(self) -> None:
        self._pairs: list[BlockingQueuePair] = []
        self._tensors: list[Tensor] = []
        self._buffers: list[Buffer] = []

    def _create_buffer(self, memory_type, size: int) -> Buffer:
        if memory_type == MemoryType.ONLY_ON_HOST:
            return HostBuffer(size)
        fail(f"Buffer* Create -> type {int(memory_type)} is not supported.\n")

    def create_blocking_queue(self, shape, data_type) -> BlockingQueuePair:
        pair = BlockingQueuePair()
        for _ in range(BLOCKING_QUEUE_SIZE):
            tensor = Tensor(shape, data_type)
            buffer = self._create_buffer(MemoryType.ONLY_ON_HOST, tensor.size())
            tensor.bind_buffer(buffer)
            pair.free.push(tensor)
            self._buffers.append(buffer)
        self._pairs.append(pair)
        return pair

    def create_tensor(self, shape, data_type, data=None) -> Tensor:
        """A tensor over ``data`` if given, else over a fresh zeroed buffer."""
        tensor = Tensor(shape, data_type)
        if data is not None:
            tensor.bind_host_data(data)
        else:
            buffer = self._create_buffer(MemoryType.ONLY_ON_HOST, tensor.size())
            tensor.bind_buffer(buffer)
            self._buffers.append(buffer)
        self._tensors.append(tensor)
        return tensor

    def info(self) -> str:
        lines = ["Allocator info:\n"]
        lines.extend(
            f"[{pair.front_name}, {pair.rear_name}]: "
            f"(full: {len(pair.full)}, free: {len(pair.free)}).\n"
            for pair in self._pairs
        )
        return "".join(lines)

    def exit_all_blocking_queues(self) -> None:
        """Release every thread blocked on any queue this allocator made."""
        for pair in self._pairs:
            pair.full.exit()
            pair.free.exit()