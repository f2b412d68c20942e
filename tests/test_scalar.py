import pytest

from splakit.config import SplaError, Status
from splakit.scalar import (
    Scalar,
    make_byte,
    make_float,
    make_int,
    make_scalar,
    make_uint,
)
from splakit.types import BYTE, FLOAT, INT, UINT, Type


@pytest.mark.parametrize("t", [BYTE, INT, UINT, FLOAT])
def test_make_scalar_zero_initialised(t):
    s = make_scalar(t)
    assert s.type is t
    assert s.value == 0


def test_make_scalar_none_is_invalid_argument():
    with pytest.raises(SplaError) as info:
        make_scalar(None)
    assert info.value.status is Status.InvalidArgument


def test_make_scalar_unsupported_type():
    custom = Type("CUSTOM", "C", "custom", "custom", 2, 99)
    with pytest.raises(SplaError) as info:
        make_scalar(custom)
    assert info.value.status is Status.NotImplemented
    assert "CUSTOM" in str(info.value)


@pytest.mark.parametrize(
    "factory, t",
    [(make_byte, BYTE), (make_int, INT), (make_uint, UINT), (make_float, FLOAT)],
)
def test_factories_set_type_and_value(factory, t):
    s = factory(5)
    assert s.type is t
    assert s.value == 5


@pytest.mark.parametrize(
    "factory, t, value",
    [(make_byte, BYTE, 200), (make_int, INT, 2**40 + 3), (make_uint, UINT, -4), (make_float, FLOAT, 0.3)],
)
def test_factories_convert_to_type(factory, t, value):
    assert factory(value).value == t.cast(value)


def test_value_setter_converts():
    s = make_byte(0)
    s.value = 300
    assert s.value == BYTE.cast(300)
    assert -128 <= s.value <= 127


def test_equality_depends_on_type_and_value():
    assert make_int(3) == make_int(3)
    assert make_int(3) != make_uint(3)
    assert make_int(3) != make_int(4)


def test_explicit_construction_matches_factory():
    assert Scalar(FLOAT, 1.5) == make_float(1.5)


def test_repr_names_type():
    assert repr(make_int(7)) == "Scalar(INT, 7)"