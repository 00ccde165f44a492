"""Operators: wrappers that check tensors and call the host kernels."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ecas.common import fetch_sub_str
from ecas.kernels import get_cpu_dispatcher
from ecas.logger import LogLevel, log

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def _atof(text: str) -> float:
    """Parse a leading float as the C library does; 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


class Operator(ABC):
    """An operation on tensors, run through the host kernel dispatcher."""

    def __init__(self) -> None:
        self.cpu_dispatcher = get_cpu_dispatcher()

    @abstractmethod
    def dim_check(self, params, inputs, outputs) -> bool:
        """True if the inputs and outputs suit this operator."""

    @abstractmethod
    def run(self, params, inputs, outputs) -> None:
        """Compute the outputs from the inputs."""

    @abstractmethod
    def help(self) -> str:
        """Log and return a short description of the operator."""


@dataclass
class DotKernelParam:
    pass


class DotOp(Operator):
    """Dot product of two vectors into a one-element output."""

    def __init__(self, params: DotKernelParam | None = None) -> None:
        super().__init__()
        self.params = params if params is not None else DotKernelParam()

    @classmethod
    def create(cls, params_str: str = "") -> "DotOp":
        return cls(DotKernelParam())

    def help(self) -> str:
        text = "Dot: 2 input 1 output"
        log(LogLevel.INFO, text)
        return text

    def dim_check(self, params, inputs, outputs) -> bool:
        return len(inputs) == 2 and len(outputs) == 1

    def run(self, params, inputs, outputs) -> None:
        length = inputs[0].shape[0]
        vec_a = inputs[0].get_data().reshape(-1)[:length]
        vec_b = inputs[1].get_data().reshape(-1)
        result = outputs[0].get_data().reshape(-1)
        result[0] = self.cpu_dispatcher.dot_kernel(vec_a, vec_b)


@dataclass
class GemmKernelParam:
    alpha: float = 1.0
    beta: float = 0.0


class GemmOp(Operator):
    """C = alpha * A @ B for a (M x K) A and a (K x N) B."""

    def __init__(self, params: GemmKernelParam | None = None) -> None:
        super().__init__()
        self.params = params if params is not None else GemmKernelParam()

    @classmethod
    def create(cls, params_str: str) -> "GemmOp":
        """Parse ``alpha:`` and ``beta:`` from a string like "alpha: 1.0, beta: 2.0"."""
        params = GemmKernelParam(
            alpha=_atof(fetch_sub_str(params_str, "alpha:", ",")),
            beta=_atof(fetch_sub_str(params_str, "beta:", ",")),
        )
        log(
            LogLevel.INFO,
            f"Create GemmOp, params.alpha: {params.alpha:.3f}, "
            f"params.beta: {params.beta:.3f}.\n",
        )
        return cls(params)

    def help(self) -> str:
        text = "Gemm: 2 input 1 output. Params example: alpha: 1.0, beta: 2.0"
        log(LogLevel.INFO, text)
        return text

    def dim_check(self, params, inputs, outputs) -> bool:
        return len(inputs) == 2 and len(outputs) == 1

    def run(self, params, inputs, outputs) -> None:
        m, n = outputs[0].shape[0], outputs[0].shape[1]
        k = inputs[0].shape[1]
        a = inputs[0].get_data().reshape(m, k)
        b = inputs[1].get_data().reshape(k, n)
        c = outputs[0].get_data().reshape(m, n)
        self.cpu_dispatcher.gemm_kernel(self.params.alpha, a, b, c)