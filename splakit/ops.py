"""Typed unary-select and binary operations that parametrise computations."""

from __future__ import annotations

import math
from typing import Any, Callable, Union

from .types import FLOAT, INT, UINT, Type

__all__ = [
    "Op",
    "OpBinary",
    "OpSelect",
    "make_op_binary",
    "make_op_select",
    "PLUS_INT", "PLUS_UINT", "PLUS_FLOAT",
    "MINUS_INT", "MINUS_UINT", "MINUS_FLOAT",
    "MULT_INT", "MULT_UINT", "MULT_FLOAT",
    "DIV_INT", "DIV_UINT", "DIV_FLOAT",
    "FIRST_INT", "FIRST_UINT", "FIRST_FLOAT",
    "SECOND_INT", "SECOND_UINT", "SECOND_FLOAT",
    "ONE_INT", "ONE_UINT", "ONE_FLOAT",
    "MIN_INT", "MIN_UINT", "MIN_FLOAT",
    "MAX_INT", "MAX_UINT", "MAX_FLOAT",
    "BOR_INT", "BOR_UINT",
    "BAND_INT", "BAND_UINT",
    "BXOR_INT", "BXOR_UINT",
    "EQZERO_INT", "EQZERO_UINT", "EQZERO_FLOAT",
    "NQZERO_INT", "NQZERO_UINT", "NQZERO_FLOAT",
]

Number = Union[int, float]


class Op:
    """A named callable operation with device source text and a unique key."""

    def __init__(self, name: str, source: str, key: str) -> None:
        self.name = name
        self.source = source
        self.key = key
        self.label = ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name}, key={self.key!r})"


class OpBinary(Op):
    """Operation of two typed arguments producing a typed result."""

    def __init__(
        self,
        name: str,
        source: str,
        key: str,
        type_arg_0: Type,
        type_arg_1: Type,
        type_res: Type,
        function: Callable[[Any, Any], Number],
    ) -> None:
        super().__init__(name, source, key)
        self.type_arg_0 = type_arg_0
        self.type_arg_1 = type_arg_1
        self.type_res = type_res
        self.function = function

    def __call__(self, a: Number, b: Number) -> Number:
        result = self.function(self.type_arg_0.cast(a), self.type_arg_1.cast(b))
        return self.type_res.cast(result)


class OpSelect(Op):
    """Predicate over one typed argument."""

    def __init__(
        self,
        name: str,
        source: str,
        key: str,
        type_arg_0: Type,
        function: Callable[[Any], Any],
    ) -> None:
        super().__init__(name, source, key)
        self.type_arg_0 = type_arg_0
        self.function = function

    def __call__(self, a: Number) -> bool:
        return bool(self.function(self.type_arg_0.cast(a)))


def make_op_binary(
    name: str,
    key_prefix: str,
    arg0: Type,
    arg1: Type,
    res: Type,
    function: Callable[[Any, Any], Number],
    body: str,
) -> OpBinary:
    """Create a binary op; ``body`` is the device code following the signature."""
    source = f"({arg0.cpp} a, {arg1.cpp} b){body}"
    key = f"{key_prefix}_{arg0.code}{arg1.code}{res.code}"
    return OpBinary(name, source, key, arg0, arg1, res, function)


def make_op_select(
    name: str,
    key_prefix: str,
    arg0: Type,
    function: Callable[[Any], Any],
    body: str,
) -> OpSelect:
    """Create a select op; ``body`` is the device code following the signature."""
    source = f"({arg0.cpp} a){body}"
    key = f"{key_prefix}_{arg0.code}"
    return OpSelect(name, source, key, arg0, function)


def _div_int(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _div_float(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _binary(name: str, prefix: str, t: Type, function: Callable, body: str) -> OpBinary:
    return make_op_binary(name, prefix, t, t, t, function, body)


_PLUS = ("PLUS", lambda a, b: a + b, "{ return a + b; }")
_MINUS = ("MINUS", lambda a, b: a - b, "{ return a - b; }")
_MULT = ("MULT", lambda a, b: a * b, "{ return a * b; }")
_FIRST = ("FIRST", lambda a, b: a, "{ return a; }")
_SECOND = ("SECOND", lambda a, b: b, "{ return b; }")
_ONE = ("ONE", lambda a, b: 1, "{ return 1; }")
_MIN = ("MIN", lambda a, b: min(a, b), "{ return min(a, b); }")
_MAX = ("MAX", lambda a, b: max(a, b), "{ return max(a, b); }")
_BOR = ("BOR", lambda a, b: a | b, "{ return a | b; }")
_BAND = ("BAND", lambda a, b: a & b, "{ return a & b; }")
_BXOR = ("BXOR", lambda a, b: a ^ b, "{ return a ^ b; }")


def _family(spec: tuple, t: Type) -> OpBinary:
    prefix, function, body = spec
    return _binary(f"{prefix}_{t.name}", prefix, t, function, body)


PLUS_INT = _family(_PLUS, INT)
PLUS_UINT = _family(_PLUS, UINT)
PLUS_FLOAT = _family(_PLUS, FLOAT)
MINUS_INT = _family(_MINUS, INT)
MINUS_UINT = _family(_MINUS, UINT)
MINUS_FLOAT = _family(_MINUS, FLOAT)
MULT_INT = _family(_MULT, INT)
MULT_UINT = _family(_MULT, UINT)
MULT_FLOAT = _family(_MULT, FLOAT)
DIV_INT = _binary("DIV_INT", "DIV", INT, _div_int, "{ return a / b; }")
DIV_UINT = _binary("DIV_UINT", "DIV", UINT, lambda a, b: a // b, "{ return a / b; }")
DIV_FLOAT = _binary("DIV_FLOAT", "DIV", FLOAT, _div_float, "{ return a / b; }")

FIRST_INT = _family(_FIRST, INT)
FIRST_UINT = _family(_FIRST, UINT)
FIRST_FLOAT = _family(_FIRST, FLOAT)
SECOND_INT = _family(_SECOND, INT)
SECOND_UINT = _family(_SECOND, UINT)
SECOND_FLOAT = _family(_SECOND, FLOAT)

ONE_INT = _family(_ONE, INT)
ONE_UINT = _family(_ONE, UINT)
ONE_FLOAT = _family(_ONE, FLOAT)

MIN_INT = _family(_MIN, INT)
MIN_UINT = _family(_MIN, UINT)
MIN_FLOAT = _family(_MIN, FLOAT)
MAX_INT = _family(_MAX, INT)
MAX_UINT = _family(_MAX, UINT)
MAX_FLOAT = _family(_MAX, FLOAT)

BOR_INT = _family(_BOR, INT)
BOR_UINT = _family(_BOR, UINT)
BAND_INT = _family(_BAND, INT)
BAND_UINT = _family(_BAND, UINT)
BXOR_INT = _family(_BXOR, INT)
BXOR_UINT = _family(_BXOR, UINT)


def _select(prefix: str, t: Type, function: Callable, body: str) -> OpSelect:
    return make_op_select(f"{prefix}_{t.name}", prefix, t, function, body)


EQZERO_INT = _select("EQZERO", INT, lambda a: a == 0, "{ return a == 0; }")
EQZERO_UINT = _select("EQZERO", UINT, lambda a: a == 0, "{ return a == 0; }")
EQZERO_FLOAT = _select("EQZERO", FLOAT, lambda a: a == 0, "{ return a == 0; }")
NQZERO_INT = _select("NQZERO", INT, lambda a: a != 0, "{ return a != 0; }")
NQZERO_UINT = _select("NQZERO", UINT, lambda a: a != 0, "{ return a != 0; }")
NQZERO_FLOAT = _select("NQZERO", FLOAT, lambda a: a != 0, "{ return a != 0; }")