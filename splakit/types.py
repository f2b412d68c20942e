"""Element types that parametrise containers and their value conversion."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Union

__all__ = ["Type", "BYTE", "INT", "UINT", "FLOAT"]

Number = Union[int, float]


@dataclass(frozen=True, eq=False)
class Type:
    """A stored value type; instances compare by identity."""

    name: str
    code: str
    cpp: str
    description: str
    size: int
    id: int
    is_float: bool = False
    signed: bool = True

    def cast(self, value: Number) -> Number:
        """Convert ``value`` the way a store into this type would."""
        if isinstance(value, (str, bytes)) or not isinstance(value, (int, float)):
            raise TypeError(f"cannot store {type(value).__name__} as {self.name}")
        if self.is_float:
            return _to_float32(float(value))
        if isinstance(value, float):
            if math.isnan(value) or math.isinf(value):
                raise ValueError(f"cannot store {value} as {self.name}")
            number = int(value)
        else:
            number = int(value)
        bits = self.size * 8
        number &= (1 << bits) - 1
        if self.signed and number >= 1 << (bits - 1):
            number -= 1 << bits
        return number

    @property
    def default(self) -> Number:
        """The zero value of this type."""
        return self.cast(0)

    def __repr__(self) -> str:
        return f"Type({self.name})"


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


BYTE = Type("BYTE", "B", "char", "signed 1 byte integer", 1, 0, signed=True)
INT = Type("INT", "I", "int", "signed 4 byte integer", 4, 1, signed=True)
UINT = Type("UINT", "U", "uint", "unsigned 4 byte integer", 4, 2, signed=False)
FLOAT = Type("FLOAT", "F", "float", "4 byte floating point", 4, 3, is_float=True)