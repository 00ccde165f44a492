"""A base class owning one worker thread that can be asked to stop."""

from __future__ import annotations

import threading
from typing import Optional

from ecas.logger import fail


class InternalThread:
    """Runs ``entry`` on a thread of its own; ``entry`` polls ``must_stop``."""

    def __init__(self) -> None:
        self._thread: Optional[threading.Thread] = None
        self._joined = False
        self._interrupt = False
        self._lock = threading.Lock()

    def is_started(self) -> bool:
        """True from start() until the thread has been joined by stop()."""
        return self._thread is not None and not self._joined

    def start(self) -> bool:
        """Spawn the thread; starting a running thread is an error."""
        if self.is_started():
            fail("Threads should persist and not be restarted.")
        with self._lock:
            self._interrupt = False
        self._thread = threading.Thread(target=self.entry, daemon=True)
        self._joined = False
        self._thread.start()
        return True

    def stop(self) -> None:
        """Ask the thread to stop and wait for it to finish."""
        if not self.is_started():
            return
        with self._lock:
            self._interrupt = True
        self._thread.join()
        self._joined = True

    def entry(self) -> None:
        """Body of the thread; subclasses override it."""

    def must_stop(self) -> bool:
        """True once after stop() has been requested; the request is then cleared."""
        with self._lock:
            if self._thread is not None and self._interrupt:
                self._interrupt = False
                return True
            return False

    def __enter__(self) -> "InternalThread":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()