"""Library-wide enumerations, status codes and the error type."""

from __future__ import annotations

from enum import Enum, IntEnum

__all__ = [
    "Status",
    "AcceleratorType",
    "StateHint",
    "MatrixFormat",
    "VectorFormat",
    "SplaError",
    "status_to_string",
]


class Status(IntEnum):
    """Outcome of a library operation."""

    Ok = 0
    Error = 1
    NoAcceleration = 2
    PlatformNotFound = 3
    DeviceNotFound = 4
    InvalidState = 5
    InvalidArgument = 6
    NoValue = 7
    NotImplemented = 1024


class AcceleratorType(Enum):
    """Kinds of computation accelerators."""

    None_ = 0
    OpenCL = 1


class StateHint(Enum):
    """Hint used to explicitly prepare a container's state."""

    Default = 0
    Incremental = 1
    Compute = 2


class MatrixFormat(IntEnum):
    """Storage formats of a matrix; values index decoration slots."""

    CpuLil = 0
    CpuDok = 1
    CpuCoo = 2
    CpuCsr = 3
    CpuCsc = 4
    AccCoo = 5
    AccCsr = 6
    AccCsc = 7
    CLCoo = 8
    CLCsr = 9
    CLCsc = 10


class VectorFormat(IntEnum):
    """Storage formats of a vector; values index decoration slots."""

    CpuDokVec = 0
    CpuDenseVec = 1
    CpuCooVec = 2
    AccDenseVec = 3
    AccCooVec = 4
    CLDenseVec = 5
    CLCooVec = 6


class SplaError(Exception):
    """Error raised by the library, carrying a :class:`Status`."""

    def __init__(self, status: Status, message: str = "") -> None:
        self.status = Status(status)
        self.message = message
        text = status_to_string(self.status)
        super().__init__(f"{text}: {message}" if message else text)


def status_to_string(status: Status | int) -> str:
    """Return the name of a status value, or ``"none"`` if it is unknown."""
    try:
        return Status(status).name
    except ValueError:
        return "none"