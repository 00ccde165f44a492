import numpy as np
import pytest

from ecas.buffer import HostBuffer
from ecas.logger import EcasError
from ecas.tensor import Tensor
from ecas.types import DataType, MemoryMode


def _bound(shape, data_type=DataType.FP32):
    t = Tensor(shape, data_type)
    t.bind_buffer(HostBuffer(t.size()))
    return t


def test_defaults():
    t = Tensor([2, 3], DataType.FP32)
    assert t.id == -1
    assert t.shape == [2, 3]
    assert t.mode == MemoryMode.ON_HOST


@pytest.mark.parametrize("data_type", list(DataType))
def test_size_is_itemsize_times_elements(data_type):
    t = Tensor([2, 3, 5], data_type)
    assert t.size() == data_type.itemsize() * 2 * 3 * 5


def test_zero_size_fails():
    with pytest.raises(EcasError):
        Tensor([0, 4], DataType.FP32)


def test_get_data_without_buffer_fails():
    with pytest.raises(EcasError):
        Tensor([2], DataType.FP32).get_data()


def test_get_data_shape_and_type():
    t = _bound([2, 3], DataType.INT32)
    data = t.get_data()
    assert data.shape == (2, 3)
    assert data.dtype == np.int32
    data[1, 2] = 9
    assert t.get_data()[1, 2] == 9


def test_bind_host_data_shares_memory():
    external = np.arange(6, dtype=np.float32)
    t = Tensor([6], DataType.FP32)
    t.bind_host_data(external)
    assert t.get_data().tolist() == external.tolist()
    t.get_data()[0] = 42.0
    assert external[0] == 42.0


def test_copy_round_trip():
    src = _bound([2, 2])
    src.get_data()[...] = [[1, 2], [3, 4]]
    src.id = 5
    mid = _bound([2, 2])
    mid.copy_from(src)
    dst = _bound([2, 2])
    mid.copy_to(dst)
    assert dst.id == src.id
    assert dst.get_data().tolist() == src.get_data().tolist()


def test_copy_shape_mismatch():
    a = _bound([2, 2])
    b = _bound([4])
    with pytest.raises(EcasError):
        a.copy_from(b)
    with pytest.raises(EcasError):
        a.copy_to(b)


def test_describe_lists_shape_and_values():
    t = _bound([2, 3])
    t.get_data()[...] = 1
    text = t.describe()
    assert "Shape: 2, 3, " in text
    assert "(n: 0, c: 0)" in text
    assert text.count("1, ") == 6


def test_describe_too_many_dims():
    with pytest.raises(EcasError):
        _bound([1, 1, 1, 1, 2]).describe()