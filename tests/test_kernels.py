import numpy as np
import pytest

from ecas.kernels import CpuKernelDispatcher, dot, gemm, get_cpu_dispatcher


def test_dot_ones_and_twos():
    assert dot([1.0] * 300, [2.0] * 300) == 600


def test_dot_uses_length_of_first_vector():
    assert dot([1.0, 1.0], [3.0, 4.0, 100.0]) == dot([1.0, 1.0], [3.0, 4.0])


def test_dot_short_second_vector_raises():
    with pytest.raises(ValueError):
        dot([1.0, 2.0, 3.0], [1.0])


def test_gemm_identity_returns_input():
    a = np.array([[1, 2], [3, 4]], dtype=np.float32)
    out = np.zeros((2, 2), dtype=np.float32)
    result = gemm(1.0, a, np.eye(2), out)
    assert result is out
    np.testing.assert_array_equal(out, a)


def test_gemm_ones_sums_inner_dimension():
    out = np.zeros((2, 4), dtype=np.float32)
    gemm(1.0, np.ones((2, 3)), np.ones((3, 4)), out)
    assert np.all(out == 3)


def test_gemm_overwrites_previous_output():
    a = np.arange(6, dtype=np.float32).reshape(2, 3)
    b = np.arange(12, dtype=np.float32).reshape(3, 4)
    clean = gemm(0.5, a, b, np.zeros((2, 4), dtype=np.float32))
    dirty = gemm(0.5, a, b, np.full((2, 4), 99.0, dtype=np.float32))
    np.testing.assert_array_equal(clean, dirty)


def test_gemm_alpha_scales_linearly():
    a = np.arange(6, dtype=np.float32).reshape(3, 2)
    b = np.arange(8, dtype=np.float32).reshape(2, 4)
    single = gemm(1.0, a, b, np.zeros((3, 4), dtype=np.float32))
    double = gemm(2.0, a, b, np.zeros((3, 4), dtype=np.float32))
    np.testing.assert_allclose(double, single + single)


def test_gemm_shape_mismatch_raises():
    with pytest.raises(ValueError):
        gemm(1.0, np.ones((2, 3)), np.ones((2, 4)), np.zeros((2, 4), dtype=np.float32))


def test_gemm_requires_array_output():
    with pytest.raises(TypeError):
        gemm(1.0, np.ones((1, 1)), np.ones((1, 1)), [[0.0]])


def test_dispatcher_singleton_holds_kernels():
    dispatcher = get_cpu_dispatcher()
    assert dispatcher is get_cpu_dispatcher()
    assert dispatcher.dot_kernel is dot
    assert dispatcher.gemm_kernel is gemm
    assert dispatcher == CpuKernelDispatcher()