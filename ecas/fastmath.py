"""Fast approximations of exp and sqrt in single precision."""

from __future__ import annotations

import math
import struct

import numpy as np

_LOG2_E = np.float32(1.44269504)
_K0 = np.float32(0.99992522)
_K1 = np.float32(0.69583354)
_K2 = np.float32(0.22606716)
_K3 = np.float32(0.078024523)

_GREETING = "HelloWorld ABC!\n"


def _f32_bits(value: float) -> int:
    return struct.unpack("<I", struct.pack("<f", value))[0]


def _bits_f32(bits: int) -> float:
    return struct.unpack("<f", struct.pack("<I", bits & 0xFFFFFFFF))[0]


def fast_exp2(x: float) -> float:
    """Approximate 2**x with a cubic polynomial on the fraction."""
    x32 = np.float32(x)
    if math.isnan(x32):
        return math.nan
    if math.isinf(x32):
        return math.inf if x32 > 0 else 0.0
    integer = int(math.floor(x32))
    if integer < -50:
        return 0.0
    frac = x32 - np.float32(integer)
    poly = _K0 + frac * (_K1 + frac * (_K2 + _K3 * frac))
    bits = (_f32_bits(float(poly)) + (integer << 23)) & 0x7FFFFFFF
    return _bits_f32(bits)


def fast_expf(x: float) -> float:
    """Approximate e**x."""
    return fast_exp2(float(np.float32(x) * _LOG2_E))


def fast_sqrtf(x: float) -> float:
    """Approximate sqrt(x) by averaging two bit-level estimates."""
    x32 = np.float32(x)
    bits = _f32_bits(float(x32))
    signed = bits - (1 << 32) if bits & 0x80000000 else bits
    half = signed >> 1
    root = np.float32(_bits_f32(0x1FBCF800 + half))
    inv_root = np.float32(_bits_f32(0x5F3759DF - half))
    return float(np.float32(0.5) * (root + x32 * inv_root))


def hello_world() -> str:
    """Print the greeting and return it."""
    message = _GREETING
    print(message)
    return message