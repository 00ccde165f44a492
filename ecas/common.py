"""Small helpers shared by the engine."""

from __future__ import annotations

import numpy as np

from ecas.logger import fail
from ecas.types import DataType

_NUMPY_TYPES = {
    DataType.FP32: np.float32,
    DataType.FP16: np.int16,
    DataType.INT32: np.int32,
    DataType.INT16: np.int16,
    DataType.INT8: np.int8,
}


def fetch_sub_str(src: str, start: str, end: str) -> str:
    """Return the text of ``src`` between ``start`` and the next ``end``.

    If ``end`` does not follow ``start`` the rest of the string is returned.
    Raises ValueError when ``start`` does not occur in ``src``.
    """
    position = src.find(start)
    if position < 0:
        raise ValueError(f"{start!r} not found in {src!r}")
    begin = position + len(start)
    finish = src.find(end, begin)
    return src[begin:] if finish < 0 else src[begin:finish]


def numpy_dtype(data_type) -> type:
    """Return the numpy scalar type used to store elements of ``data_type``."""
    try:
        return _NUMPY_TYPES[DataType(data_type)]
    except (ValueError, KeyError):
        fail(f"Unknown type enum: {data_type} \n")