"""Host computation accelerator: platform and device selection and program compilation."""

from __future__ import annotations

import re
from typing import Mapping, Optional, Sequence, Tuple

from .config import SplaError, Status

__all__ = ["Accelerator"]

_KERNEL = re.compile(r"__kernel\s+void\s+(\w+)\s*\(")
_COMMENT = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)
_PAIRS = {")": "(", "]": "[", "}": "{"}


class Accelerator:
    """A computation backend that selects a platform and device and compiles programs."""

    def __init__(
        self,
        platforms: Optional[Mapping[str, Sequence[str]]] = None,
        name: str = "host",
        description: str = "sequential host execution",
        suffix: str = "__host",
    ) -> None:
        self.name = name
        self.description = description
        self.suffix = suffix
        self._platforms = {
            platform: tuple(devices)
            for platform, devices in (platforms if platforms is not None else {"Host": ("CPU",)}).items()
        }
        self._platform_index = 0
        self._device_index = 0
        self._queues_count = 1
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def platform(self) -> str:
        return list(self._platforms)[self._platform_index]

    @property
    def device(self) -> str:
        return self._platforms[self.platform][self._device_index]

    @property
    def queues_count(self) -> int:
        return self._queues_count

    def init(self) -> None:
        """Check the chosen platform and device and become ready for use."""
        names = list(self._platforms)
        if self._platform_index >= len(names):
            raise SplaError(
                Status.PlatformNotFound, f"no platform with index {self._platform_index}"
            )
        devices = self._platforms[names[self._platform_index]]
        if self._device_index >= len(devices):
            raise SplaError(
                Status.DeviceNotFound, f"no device with index {self._device_index}"
            )
        self._initialized = True

    def set_platform(self, index: int) -> None:
        if index < 0:
            raise SplaError(Status.InvalidArgument, "platform index must be non-negative")
        self._platform_index = index
        self._initialized = False

    def set_device(self, index: int) -> None:
        if index < 0:
            raise SplaError(Status.InvalidArgument, "device index must be non-negative")
        self._device_index = index
        self._initialized = False

    def set_queues_count(self, count: int) -> None:
        if count < 1:
            raise SplaError(Status.InvalidArgument, "queues count must be at least 1")
        self._queues_count = count

    def compile(self, source: str) -> Tuple[str, ...]:
        """Check program source and return the names of its kernels in order."""
        if not self._initialized:
            raise SplaError(Status.InvalidState, "accelerator is not initialized")
        code = _COMMENT.sub(" ", source)
        stack = []
        for line_number, line in enumerate(code.splitlines(), start=1):
            for char in line:
                if char in "([{":
                    stack.append((char, line_number))
                elif char in _PAIRS:
                    if not stack or stack[-1][0] != _PAIRS[char]:
                        raise SplaError(
                            Status.Error, f"line {line_number}: unexpected '{char}'"
                        )
                    stack.pop()
        if stack:
            char, line_number = stack[-1]
            raise SplaError(Status.Error, f"line {line_number}: unclosed '{char}'")
        return tuple(_KERNEL.findall(code))

    def __repr__(self) -> str:
        return f"Accelerator({self.name!r})"