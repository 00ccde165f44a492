"""A fixed-size byte ring buffer with blocking and non-blocking access."""

from __future__ import annotations

import threading
from typing import Optional


class RingBuffer:
    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("ring buffer size must be positive")
        self._data = bytearray(size)
        self._capacity = size
        self._head = 0
        self._tail = 0
        self._payload = 0
        lock = threading.Lock()
        self._not_full = threading.Condition(lock)
        self._not_empty = threading.Condition(lock)

    @property
    def capacity(self) -> int:
        return self._capacity

    def write(self, data, blocking: bool = True) -> bool:
        """Append bytes; False if they can never fit or, non-blocking, do not fit now."""
        if data is None:
            return False
        chunk = bytes(data)
        size = len(chunk)
        if size == 0 or size > self._capacity:
            return False
        with self._not_full:
            while size > self._capacity - self._payload:
                if not blocking:
                    return False
                self._not_full.wait()
            first = min(size, self._capacity - self._head)
            self._data[self._head:self._head + first] = chunk[:first]
            self._data[:size - first] = chunk[first:]
            self._head = (self._head + size) % self._capacity
            self._payload += size
            self._not_empty.notify()
        return True

    def _consume(self, size: int, blocking: bool, copy: bool) -> tuple[bool, bytes]:
        if size <= 0 or size > self._capacity:
            return False, b""
        with self._not_empty:
            while size > self._payload:
                if not blocking:
                    return False, b""
                self._not_empty.wait()
            out = b""
            if copy:
                first = min(size, self._capacity - self._tail)
                out = bytes(self._data[self._tail:self._tail + first])
                out += bytes(self._data[:size - first])
            self._tail = (self._tail + size) % self._capacity
            self._payload -= size
            self._not_full.notify()
        return True, out

    def read(self, size: int, blocking: bool = True) -> Optional[bytes]:
        """Remove and return ``size`` bytes, or None if that cannot be done."""
        ok, out = self._consume(size, blocking, copy=True)
        return out if ok else None

    def skip(self, size: int, blocking: bool = True) -> bool:
        """Discard ``size`` bytes; False if that cannot be done."""
        ok, _ = self._consume(size, blocking, copy=False)
        return ok

    def payload_size(self) -> int:
        with self._not_full:
            return self._payload

    def free_size(self) -> int:
        with self._not_full:
            return self._capacity - self._payload

    def reset(self) -> None:
        with self._not_full:
            self._head = 0
            self._tail = 0
            self._payload = 0
            self._not_full.notify_all()