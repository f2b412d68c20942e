"""Scope-based time profiling of named, optionally nested, labels."""

from __future__ import annotations

import sys
import threading
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, TextIO

__all__ = ["TimeProfilerLabel", "TimeProfiler"]


class TimeProfilerLabel:
    """A named measurement point holding the last measured duration in nanoseconds."""

    def __init__(
        self,
        name: str,
        parent: Optional["TimeProfilerLabel"] = None,
        file: str = "",
        function: str = "",
    ) -> None:
        self.file = file
        self.function = function
        self.parent = parent
        self.child_count = 0
        self._nano = 0
        self._lock = threading.Lock()
        if parent is not None:
            name = f"{parent.name}/{parent.child_count}-{name}"
            parent.child_count += 1
        self.name = name

    @property
    def nano(self) -> int:
        with self._lock:
            return self._nano

    @nano.setter
    def nano(self, value: int) -> None:
        with self._lock:
            self._nano = int(value)

    @contextmanager
    def scope(self) -> Iterator["TimeProfilerLabel"]:
        """Measure the time spent inside the ``with`` block and store it."""
        start = time.perf_counter_ns()
        try:
            yield self
        finally:
            self.nano = time.perf_counter_ns() - start

    def __repr__(self) -> str:
        return f"TimeProfilerLabel({self.name!r}, nano={self.nano})"


class TimeProfiler:
    """Collection of labels, reported in name order."""

    def __init__(self) -> None:
        self._labels: Dict[str, TimeProfilerLabel] = {}

    @property
    def labels(self) -> Dict[str, TimeProfilerLabel]:
        """Registered labels keyed by name, in name order."""
        return dict(sorted(self._labels.items()))

    def label(
        self, name: str, parent: Optional[TimeProfilerLabel] = None
    ) -> TimeProfilerLabel:
        """Create a label, register it and return it."""
        new_label = TimeProfilerLabel(name, parent)
        self.add_label(new_label)
        return new_label

    def add_label(self, label: TimeProfilerLabel) -> None:
        self._labels[label.name] = label

    def dump(self, where: Optional[TextIO] = None) -> None:
        """Write every label with a non-zero time, in milliseconds."""
        out = sys.stdout if where is None else where
        for name, label in sorted(self._labels.items()):
            value = label.nano
            if value != 0:
                out.write(f"  - {name} {value * 1e-6:g} ms\n")

    def reset(self) -> None:
        for label in self._labels.values():
            label.nano = 0