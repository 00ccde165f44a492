"""Fixed launch parameters of the GPU compute kernels, free of any GPU API."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Union

from ecas.logger import LogLevel, log


class DescriptorType(IntEnum):
    STORAGE_IMAGE = 1
    UNIFORM_BUFFER = 2
    STORAGE_BUFFER = 3


@dataclass(frozen=True)
class SpecializationConstant:
    """A 4-byte shader specialization constant: an int or a single float."""

    id: int
    value: Union[int, float]

    def as_u32(self) -> int:
        """The constant's 32-bit pattern as an unsigned integer."""
        if isinstance(self.value, float):
            return struct.unpack("<I", struct.pack("<f", self.value))[0]
        return self.value & 0xFFFFFFFF


@dataclass
class KernelParams:
    buffer_types: list = field(default_factory=list)
    spec_constants: list = field(default_factory=list)
    push_constant_num: int = 0
    workgroup_size: tuple = (0, 0, 0)


def _set_params_mandelbrot(params: KernelParams) -> None:
    params.buffer_types = [DescriptorType.STORAGE_BUFFER]
    params.spec_constants = []
    params.push_constant_num = 0
    params.workgroup_size = (32, 32, 1)


def _set_params_matmul_tiled_fp32(params: KernelParams) -> None:
    params.buffer_types = [DescriptorType.STORAGE_BUFFER] * 3
    params.spec_constants = [
        SpecializationConstant(0, 640),
        SpecializationConstant(1, 640),
        SpecializationConstant(2, 640),
    ]
    params.push_constant_num = 0
    params.workgroup_size = (16, 1, 1)


def _set_params_engine_test(params: KernelParams) -> None:
    params.buffer_types = [DescriptorType.STORAGE_BUFFER] * 3
    params.spec_constants = [
        SpecializationConstant(0, 160),
        SpecializationConstant(1, 320),
        SpecializationConstant(2, 640.123),
    ]
    params.push_constant_num = 2
    params.workgroup_size = (16, 1, 1)


class GpuKernelDispatcher:
    """Maps kernel names to the parameters they are launched with."""

    def __init__(self) -> None:
        self._setters: dict[str, Callable[[KernelParams], None]] = {
            "mandelbrot": _set_params_mandelbrot,
            "matmul_tiled_fp32": _set_params_matmul_tiled_fp32,
            "engine_test": _set_params_engine_test,
        }

    def create_kernel_params(self, kernel_name: str) -> KernelParams:
        """Fresh parameters for ``kernel_name``; empty ones if it is unknown."""
        params = KernelParams()
        setter = self._setters.get(kernel_name)
        if setter is None:
            log(LogLevel.WARNING, f"Can not find params: {kernel_name}.\n")
        else:
            log(LogLevel.INFO, f"CreateKernelParams: {kernel_name}.\n")
            setter(params)
        return params

    def kernel_names(self) -> list[str]:
        return sorted(self._setters)


_GPU_DISPATCHER = GpuKernelDispatcher()


def get_gpu_dispatcher() -> GpuKernelDispatcher:
    return _GPU_DISPATCHER