import pytest

from ecas.logger import EcasError
from ecas.op_factory import OpFactory, UnknownOperatorError, get_op_factory
from ecas.operators import DotOp, GemmOp


def test_builtin_operators_registered():
    factory = get_op_factory()
    assert factory.registered_names() == ["dot", "gemm"]
    assert factory.print_list() == "dot gemm "


def test_singleton():
    first = get_op_factory()
    second = get_op_factory()
    assert first is second
    assert second.registered_names() == ["dot", "gemm"]


def test_create_builtin_ops():
    factory = get_op_factory()
    dot = factory.create_op_by_name("dot", "")
    gemm = factory.create_op_by_name("gemm", "alpha: 1.0, beta: 2.0")
    assert isinstance(dot, DotOp)
    assert isinstance(gemm, GemmOp)
    assert gemm.params.alpha == 1.0
    assert gemm.params.beta == 2.0


def test_unknown_operator():
    with pytest.raises(UnknownOperatorError) as info:
        get_op_factory().create_op_by_name("conv", "")
    assert "conv" in str(info.value)
    assert isinstance(info.value, EcasError)


def test_duplicate_registration_keeps_first():
    factory = OpFactory()
    factory.register_op_class("dot", DotOp.create)
    factory.register_op_class("dot", GemmOp.create)
    assert factory.registered_names() == ["dot"]
    assert isinstance(factory.create_op_by_name("dot", ""), DotOp)


def test_none_creator_yields_none():
    factory = OpFactory()
    factory.register_op_class("empty", None)
    assert factory.create_op_by_name("empty", "") is None


def test_empty_factory_list():
    factory = OpFactory()
    assert factory.print_list() == ""
    with pytest.raises(UnknownOperatorError):
        factory.create_op_by_name("dot", "")