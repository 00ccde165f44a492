"""A thread-safe FIFO whose consumers block until data arrives or it exits."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class QueueExited(Exception):
    """Raised by a waiting pop once the queue has been told to exit."""


class BlockingQueue(Generic[T]):
    def __init__(self) -> None:
        self._items: deque[T] = deque()
        self._cond = threading.Condition()
        self._exited = False

    def push(self, item: T) -> None:
        with self._cond:
            self._items.append(item)
            self._cond.notify()

    def try_front(self) -> Optional[T]:
        """Return the front item without removing it, or None if empty."""
        with self._cond:
            return self._items[0] if self._items else None

    def try_pop(self) -> Optional[T]:
        """Remove and return the front item, or None if empty."""
        with self._cond:
            return self._items.popleft() if self._items else None

    def wait_and_pop(self) -> T:
        """Block until an item is available; raise QueueExited after exit()."""
        with self._cond:
            while not self._exited and not self._items:
                self._cond.wait()
            if self._exited:
                raise QueueExited()
            return self._items.popleft()

    def exit(self) -> None:
        """Wake every waiter; all later waiting pops raise QueueExited."""
        with self._cond:
            self._exited = True
            self._cond.notify_all()

    def empty(self) -> bool:
        with self._cond:
            return not self._items

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)