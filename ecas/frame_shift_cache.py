"""Cache that yields fixed-size frames advancing by a fixed shift."""

from __future__ import annotations


class FrameShiftCache:
    """Buffers pushed bytes until a frame is ready; pop() advances by one shift."""

    def __init__(self, frame_size: int, frame_shift_size: int) -> None:
        if frame_size <= 0 or frame_shift_size <= 0:
            raise ValueError("frame and shift sizes must be positive")
        self._frame_size = frame_size
        self._frame_shift_size = frame_shift_size
        self._capacity = frame_size * 2
        self._data = bytearray(self._capacity)
        self._pushed = 0

    @property
    def frame_size(self) -> int:
        return self._frame_size

    @property
    def frame_shift_size(self) -> int:
        return self._frame_shift_size

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def pushed_size(self) -> int:
        return self._pushed

    def data(self) -> bytes:
        """The current frame; meaningful once is_ready() is true."""
        return bytes(self._data[:self._frame_size])

    def is_ready(self) -> bool:
        return self._pushed >= self._frame_size

    def push(self, data) -> bool:
        """Append bytes; False if there is not enough room."""
        chunk = bytes(data)
        if len(chunk) > self._capacity - self._pushed:
            return False
        self._data[self._pushed:self._pushed + len(chunk)] = chunk
        self._pushed += len(chunk)
        return True

    def pop(self) -> None:
        """Drop one frame shift from the front."""
        if self._pushed < self._frame_shift_size:
            raise ValueError("not enough data to shift")
        self._pushed -= self._frame_shift_size
        shift = self._frame_shift_size
        self._data[:self._pushed] = self._data[shift:shift + self._pushed]

    def reset(self) -> None:
        self._data[:self._frame_size] = bytes(self._frame_size)
        self._pushed = 0