"""Typed single-value containers."""

from __future__ import annotations

from typing import Optional, Union

from .config import SplaError, Status
from .types import BYTE, FLOAT, INT, UINT, Type

__all__ = ["Scalar", "make_scalar", "make_byte", "make_int", "make_uint", "make_float"]

Number = Union[int, float]

_SUPPORTED = (BYTE, INT, UINT, FLOAT)


class Scalar:
    """A single value of a fixed element type."""

    def __init__(self, type: Type, value: Optional[Number] = None) -> None:
        self._type = type
        self._value = type.default if value is None else type.cast(value)

    @property
    def type(self) -> Type:
        return self._type

    @property
    def value(self) -> Number:
        return self._value

    @value.setter
    def value(self, new_value: Number) -> None:
        self._value = self._type.cast(new_value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return NotImplemented
        return self._type is other._type and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Scalar({self._type.name}, {self._value!r})"


def make_scalar(type: Optional[Type]) -> Scalar:
    """Create a zero-valued scalar of a built-in type."""
    if type is None:
        raise SplaError(Status.InvalidArgument, "passed null type")
    if not any(type is supported for supported in _SUPPORTED):
        raise SplaError(Status.NotImplemented, f"not supported type {type.name}")
    return Scalar(type)


def make_byte(value: Number) -> Scalar:
    return Scalar(BYTE, value)


def make_int(value: Number) -> Scalar:
    return Scalar(INT, value)


def make_uint(value: Number) -> Scalar:
    return Scalar(UINT, value)


def make_float(value: Number) -> Scalar:
    return Scalar(FLOAT, value)