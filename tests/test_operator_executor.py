import numpy as np
import pytest

from ecas.allocator import Allocator
from ecas.op_factory import UnknownOperatorError
from ecas.operator_executor import OperatorExecutor
from ecas.operators import DotOp, GemmOp
from ecas.types import DataType


def test_create_and_run_dot():
    executor = OperatorExecutor()
    op = executor.create_op("dot", "")
    assert isinstance(op, DotOp)
    allocator = Allocator()
    a = allocator.create_tensor([300], DataType.FP32)
    b = allocator.create_tensor([300], DataType.FP32)
    a.get_data()[:] = 1
    b.get_data()[:] = 2
    out = allocator.create_tensor([1], DataType.FP32)
    executor.op_run(op, [], [a, b], [out])
    assert out.get_data()[0] == 600


def test_create_gemm_with_params():
    executor = OperatorExecutor()
    op = executor.create_op("gemm", "alpha: 2.0, beta: 0.5")
    assert isinstance(op, GemmOp)
    assert op.params.alpha == 2.0
    assert op.params.beta == 0.5


def test_run_gemm_matches_numpy():
    executor = OperatorExecutor()
    op = executor.create_op("gemm", "alpha: 1.0, beta: 2.0")
    allocator = Allocator()
    a = allocator.create_tensor([2, 3], DataType.FP32)
    b = allocator.create_tensor([3, 4], DataType.FP32)
    a.get_data()[:] = np.arange(6, dtype=np.float32).reshape(2, 3)
    b.get_data()[:] = np.arange(12, dtype=np.float32).reshape(3, 4)
    c = allocator.create_tensor([2, 4], DataType.FP32)
    executor.op_run(op, [], [a, b], [c])
    np.testing.assert_allclose(c.get_data(), a.get_data() @ b.get_data())


def test_ops_are_kept_in_order():
    executor = OperatorExecutor()
    first = executor.create_op("dot")
    second = executor.create_op("gemm", "alpha: 1.0, beta: 2.0")
    assert executor.ops == [first, second]


def test_unknown_op_raises():
    executor = OperatorExecutor()
    with pytest.raises(UnknownOperatorError):
        executor.create_op("no_such_op", "")
    assert executor.ops == []