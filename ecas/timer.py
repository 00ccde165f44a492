"""Wall-clock timers with per-slot statistics."""

from __future__ import annotations

import time
from dataclasses import dataclass, replace

from ecas.logger import LogLevel, fail, log

_MIN_SENTINEL = 999999.0


class CpuTimer:
    """Measures the time between start() and stop(); also a context manager."""

    def __init__(self) -> None:
        self._start_ns = 0
        self._stop_ns = 0

    def start(self) -> None:
        self._start_ns = time.perf_counter_ns()

    def stop(self) -> None:
        self._stop_ns = time.perf_counter_ns()

    def nanoseconds(self) -> float:
        return float(self._stop_ns - self._start_ns)

    def microseconds(self) -> float:
        return self.nanoseconds() / 1000.0

    def milliseconds(self) -> float:
        return self.nanoseconds() / 1000000.0

    def seconds(self) -> float:
        return self.nanoseconds() / 1000000000.0

    def __enter__(self) -> "CpuTimer":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()


@dataclass
class TimerStats:
    """Accumulated timings of one slot, in milliseconds."""

    count: int = 0
    min_ms: float = _MIN_SENTINEL
    max_ms: float = 0.0
    total_ms: float = 0.0

    @property
    def mean_ms(self) -> float:
        return self.total_ms / self.count if self.count else float("nan")


class Timer:
    """Named timer with ``num`` slots of statistics."""

    def __init__(self, name: str, num: int) -> None:
        self.name = name
        self._timer = CpuTimer()
        self._stats = [TimerStats() for _ in range(num)]

    def start(self) -> None:
        self._timer.start()

    def stop(self, idx: int, print_interval: int = 0) -> float:
        """Stop timing, record into slot ``idx`` and return the milliseconds."""
        self._timer.stop()
        elapsed = self._timer.milliseconds()
        self.record(idx, elapsed, print_interval)
        return elapsed

    def record(self, idx: int, milliseconds: float, print_interval: int = 0) -> None:
        """Add one measurement; every ``print_interval`` of them, report and reset."""
        if not 0 <= idx < len(self._stats):
            fail(f"Timer::Stop -> idx({idx}) >= num_({len(self._stats)}).\n")
        stats = self._stats[idx]
        stats.max_ms = max(stats.max_ms, milliseconds)
        stats.min_ms = min(stats.min_ms, milliseconds)
        stats.total_ms += milliseconds
        stats.count += 1
        if print_interval and stats.count >= print_interval:
            for i, slot in enumerate(self._stats):
                log(
                    LogLevel.INFO_SIMPLE,
                    f"Timer({self.name}) idx({i}) cnt({slot.count}): {slot.mean_ms:.3f} ms "
                    f"(min: {slot.min_ms:.3f}, max: {slot.max_ms:.3f}).\n",
                )
            self._stats = [TimerStats() for _ in self._stats]

    def stats(self, idx: int) -> TimerStats:
        """A copy of the statistics of slot ``idx``."""
        return replace(self._stats[idx])