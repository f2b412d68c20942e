import pytest

from splakit.accelerator import Accelerator
from splakit.config import SplaError, Status
from splakit.ops import NQZERO_INT, PLUS_INT
from splakit.program import (
    Kernel,
    Program,
    ProgramBuildError,
    ProgramBuilder,
    ProgramCache,
)
from splakit.types import INT

KERNEL_CODE = "__kernel void assign(__global int* r) { r[0] = 1; }\n"


def _ready_accelerator():
    acc = Accelerator()
    acc.init()
    return acc


def _builder(cache=None):
    return ProgramBuilder(_ready_accelerator(), cache)


def test_source_assembly_order():
    builder = _builder()
    program = (
        builder.set_key("vector_assign")
        .add_type("TYPE", INT)
        .add_define("BLOCK_SIZE", 32)
        .add_op("OP_BINARY", PLUS_INT)
        .add_op("OP_SELECT", NQZERO_INT)
        .add_code(KERNEL_CODE)
        .build()
    )
    expected = (
        "#define TYPE int\n"
        "#define BLOCK_SIZE 32\n"
        f"int OP_BINARY {PLUS_INT.source}\n"
        f"bool OP_SELECT {NQZERO_INT.source}\n"
        + KERNEL_CODE
    )
    assert program.source == expected
    assert program.key == "vector_assign"
    assert program.defines == ("TYPE int", "BLOCK_SIZE 32")
    assert program.sources == (KERNEL_CODE,)
    assert len(program.functions) == 2


def test_build_sets_program_and_kernels():
    builder = _builder()
    assert builder.program is None
    program = builder.set_key("k").add_code(KERNEL_CODE).build()
    assert builder.program is program
    assert program.kernels == ("assign",)
    kernel = program.make_kernel("assign")
    assert kernel == Kernel("assign", program)


def test_make_kernel_unknown_name():
    program = _builder().add_code(KERNEL_CODE).build()
    with pytest.raises(SplaError) as info:
        program.make_kernel("missing")
    assert info.value.status is Status.InvalidArgument


def test_cache_reuses_program_for_same_source():
    cache = ProgramCache()
    first = _builder(cache).set_key("a").add_code(KERNEL_CODE).build()
    second = _builder(cache).set_key("b").add_code(KERNEL_CODE).build()
    assert second is first
    assert len(cache) == 1
    assert first.source in cache


def test_cache_distinguishes_sources():
    cache = ProgramCache()
    first = _builder(cache).add_define("N", 1).add_code(KERNEL_CODE).build()
    second = _builder(cache).add_define("N", 2).add_code(KERNEL_CODE).build()
    assert first is not second
    assert len(cache) == 2
    assert set(cache) == {first, second}


def test_cache_get_and_add():
    cache = ProgramCache()
    program = Program("src", key="k")
    assert cache.get_program("src") is None
    cache.add_program(program)
    assert cache.get_program("src") is program


def test_build_failure_raises():
    cache = ProgramCache()
    builder = _builder(cache).set_key("bad").add_code("__kernel void f( { }\n")
    with pytest.raises(ProgramBuildError) as info:
        builder.build()
    assert info.value.status is Status.Error
    assert info.value.source == "__kernel void f( { }\n"
    assert len(cache) == 0
    assert builder.program is None


def test_uninitialized_accelerator_fails_build():
    builder = ProgramBuilder(Accelerator()).add_code(KERNEL_CODE)
    with pytest.raises(ProgramBuildError):
        builder.build()


def test_add_op_rejects_other_objects():
    with pytest.raises(SplaError) as info:
        _builder().add_op("X", "not an op")
    assert info.value.status is Status.InvalidArgument


def test_add_define_requires_integer():
    with pytest.raises(TypeError):
        _builder().add_define("N", 1.5)