"""Host compute kernels and their dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np


def dot(vec_a, vec_b) -> float:
    """Inner product of ``vec_a`` with the first len(vec_a) items of ``vec_b``."""
    a = np.asarray(vec_a, dtype=np.float32).ravel()
    b = np.asarray(vec_b, dtype=np.float32).ravel()
    if b.size < a.size:
        raise ValueError(f"second vector is shorter than the first: {b.size} < {a.size}")
    return float(np.dot(a, b[:a.size]))


def gemm(alpha, a, b, out: np.ndarray) -> np.ndarray:
    """Overwrite ``out`` (M x N) with alpha * a (M x K) @ b (K x N) and return it."""
    if not isinstance(out, np.ndarray):
        raise TypeError("out must be a numpy array")
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    if a.ndim != 2 or b.ndim != 2 or out.ndim != 2:
        raise ValueError("gemm operands must be two-dimensional")
    m, n = out.shape
    k = a.shape[1]
    if a.shape[0] != m or b.shape != (k, n):
        raise ValueError(f"shape mismatch: {a.shape} @ {b.shape} -> {out.shape}")
    out[...] = (np.float32(alpha) * a) @ b
    return out


@dataclass(frozen=True)
class CpuKernelDispatcher:
    """The one host implementation chosen for each kernel."""

    dot_kernel: Callable = dot
    gemm_kernel: Callable = gemm


_CPU_DISPATCHER = CpuKernelDispatcher()


def get_cpu_dispatcher() -> CpuKernelDispatcher:
    return _CPU_DISPATCHER