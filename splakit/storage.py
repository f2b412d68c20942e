"""Multi-format decoration storage and the manager that converts between formats."""

from __future__ import annotations

import operator
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from .config import SplaError, Status

__all__ = ["DecorationStorage", "StorageManager"]

StorageFunction = Callable[["DecorationStorage"], None]

_SOURCE = -1


def _format_index(format: Any, capacity: int) -> int:
    index = operator.index(format)
    if not 0 <= index < capacity:
        raise SplaError(Status.InvalidArgument, f"format {index} out of range 0..{capacity - 1}")
    return index


class DecorationStorage:
    """Per-format slots of one container, each with a validity flag."""

    def __init__(self, capacity: int, n_rows: int = 0, n_cols: int = 0) -> None:
        if capacity <= 0:
            raise SplaError(Status.InvalidArgument, "capacity must be positive")
        self.n_rows = n_rows
        self.n_cols = n_cols
        self._slots: List[Any] = [None] * capacity
        self._valid: List[bool] = [False] * capacity

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def __getitem__(self, format: Any) -> Any:
        return self._slots[_format_index(format, self.capacity)]

    def __setitem__(self, format: Any, value: Any) -> None:
        self._slots[_format_index(format, self.capacity)] = value

    def is_valid(self, format: Any) -> bool:
        return self._valid[_format_index(format, self.capacity)]

    def is_valid_any(self) -> bool:
        return any(self._valid)

    def valid_formats(self) -> List[int]:
        """Indices of the formats currently holding valid data."""
        return [index for index, valid in enumerate(self._valid) if valid]

    def validate(self, format: Any) -> None:
        self._valid[_format_index(format, self.capacity)] = True

    def invalidate(self) -> None:
        self._valid = [False] * self.capacity


class StorageManager:
    """Creates format slots and converts data between formats along the shortest path."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise SplaError(Status.InvalidArgument, "capacity must be positive")
        self._capacity = capacity
        self._constructors: List[Optional[StorageFunction]] = [None] * capacity
        self._validators: List[Optional[StorageFunction]] = [None] * capacity
        self._rules: List[List[Tuple[int, StorageFunction]]] = [[] for _ in range(capacity)]

    @property
    def capacity(self) -> int:
        return self._capacity

    def _index(self, format: Any) -> int:
        return _format_index(format, self._capacity)

    def _check(self, storage: DecorationStorage) -> None:
        if storage.capacity != self._capacity:
            raise SplaError(
                Status.InvalidArgument,
                f"storage capacity {storage.capacity} does not match manager capacity {self._capacity}",
            )

    def _construct(self, index: int, storage: DecorationStorage) -> None:
        constructor = self._constructors[index]
        if constructor is None:
            raise SplaError(Status.InvalidState, f"no constructor registered for format {index}")
        constructor(storage)

    def register_constructor(self, format: Any, function: StorageFunction) -> None:
        self._constructors[self._index(format)] = function

    def register_validator(self, format: Any, function: StorageFunction) -> None:
        self._validators[self._index(format)] = function

    def register_converter(self, source: Any, target: Any, function: StorageFunction) -> None:
        self._rules[self._index(source)].append((self._index(target), function))

    def validate_ctor(self, format: Any, storage: DecorationStorage) -> None:
        """Make sure the slot of ``format`` exists."""
        self._check(storage)
        index = self._index(format)
        if storage[index] is None:
            self._construct(index, storage)

    def validate_rw(self, format: Any, storage: DecorationStorage) -> None:
        """Make ``format`` valid, converting from valid formats if needed."""
        self._check(storage)
        target = self._index(format)
        if storage.is_valid(target):
            return
        if not storage.is_valid_any():
            self.validate_wd(target, storage)
            return

        reached: Dict[int, int] = {}
        queue: Deque[int] = deque()
        for index in storage.valid_formats():
            reached[index] = _SOURCE
            queue.append(index)

        while target not in reached:
            if not queue:
                raise SplaError(
                    Status.InvalidState, f"no conversion path to format {target}"
                )
            current = queue.popleft()
            for next_format, _ in self._rules[current]:
                if next_format not in reached:
                    reached[next_format] = current
                    queue.append(next_format)

        steps: List[Tuple[int, int]] = []
        current = target
        while reached[current] != _SOURCE:
            steps.append((reached[current], current))
            current = reached[current]

        for source, destination in reversed(steps):
            converter = next(
                function for to, function in self._rules[source] if to == destination
            )
            if storage[destination] is None:
                self._construct(destination, storage)
            converter(storage)
            storage.validate(destination)

    def validate_rwd(self, format: Any, storage: DecorationStorage) -> None:
        """Make ``format`` valid and the only valid format (prepared for writing)."""
        self.validate_rw(format, storage)
        storage.invalidate()
        storage.validate(format)

    def validate_wd(self, format: Any, storage: DecorationStorage) -> None:
        """Reset ``format`` to an empty valid state, discarding all other formats."""
        self._check(storage)
        index = self._index(format)
        if storage[index] is None:
            self._construct(index, storage)
        validator = self._validators[index]
        if validator is not None:
            validator(storage)
        storage.invalidate()
        storage.validate(index)