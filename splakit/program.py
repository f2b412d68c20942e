"""Runtime device programs: assembly from parts, compilation and caching."""

from __future__ import annotations

import logging
import operator
import time
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .accelerator import Accelerator
from .config import SplaError, Status
from .ops import OpBinary, OpSelect
from .types import Type

__all__ = ["Kernel", "Program", "ProgramCache", "ProgramBuilder", "ProgramBuildError"]

_log = logging.getLogger(__name__)


class ProgramBuildError(SplaError):
    """Raised when a program's source fails to compile."""

    def __init__(self, message: str = "", source: str = "") -> None:
        super().__init__(Status.Error, message)
        self.source = source


@dataclass(frozen=True)
class Kernel:
    """An entry point of a compiled program."""

    name: str
    program: "Program"


class Program:
    """A compiled program together with the parts it was assembled from."""

    def __init__(
        self,
        source: str,
        key: str = "",
        defines: Tuple[str, ...] = (),
        functions: Tuple[str, ...] = (),
        sources: Tuple[str, ...] = (),
        kernels: Tuple[str, ...] = (),
    ) -> None:
        self.source = source
        self.key = key
        self.defines = tuple(defines)
        self.functions = tuple(functions)
        self.sources = tuple(sources)
        self.kernels = tuple(kernels)

    def make_kernel(self, name: str) -> Kernel:
        """Return the kernel called ``name``."""
        if name not in self.kernels:
            raise SplaError(
                Status.InvalidArgument, f"no kernel '{name}' in program '{self.key}'"
            )
        return Kernel(name, self)

    def __repr__(self) -> str:
        return f"Program({self.key!r}, kernels={self.kernels!r})"


class ProgramCache:
    """Compiled programs keyed by their full source text."""

    def __init__(self) -> None:
        self._programs: Dict[str, Program] = {}

    def add_program(self, program: Program) -> None:
        self._programs[program.source] = program
        _log.debug("cache program '%s'", program.key)

    def get_program(self, source: str) -> Optional[Program]:
        return self._programs.get(source)

    def __len__(self) -> int:
        return len(self._programs)

    def __contains__(self, source: object) -> bool:
        return source in self._programs

    def __iter__(self) -> Iterator[Program]:
        return iter(list(self._programs.values()))


class ProgramBuilder:
    """Assembles program source from defines, operations and code, then compiles it."""

    def __init__(
        self,
        accelerator: Optional[Accelerator] = None,
        cache: Optional[ProgramCache] = None,
    ) -> None:
        if accelerator is None:
            accelerator = Accelerator()
            accelerator.init()
        self.accelerator = accelerator
        self.cache = cache if cache is not None else ProgramCache()
        self._defines: List[str] = []
        self._functions: List[str] = []
        self._sources: List[str] = []
        self._key = ""
        self._program: Optional[Program] = None

    @property
    def program(self) -> Optional[Program]:
        """The program produced by the last successful build."""
        return self._program

    def set_key(self, key: str) -> "ProgramBuilder":
        self._key = key
        return self

    def add_define(self, define: str, value: int) -> "ProgramBuilder":
        self._defines.append(f"{define} {operator.index(value)}")
        return self

    def add_type(self, alias: str, type: Type) -> "ProgramBuilder":
        self._defines.append(f"{alias} {type.cpp}")
        return self

    def add_op(self, name: str, op: Union[OpBinary, OpSelect]) -> "ProgramBuilder":
        if isinstance(op, OpBinary):
            self._functions.append(f"{op.type_res.cpp} {name} {op.source}")
        elif isinstance(op, OpSelect):
            self._functions.append(f"bool {name} {op.source}")
        else:
            raise SplaError(
                Status.InvalidArgument, f"unsupported operation {type(op).__name__}"
            )
        return self

    def add_code(self, source: str) -> "ProgramBuilder":
        self._sources.append(source)
        return self

    def _assemble(self) -> str:
        parts = [f"#define {define}\n" for define in self._defines]
        parts.extend(f"{function}\n" for function in self._functions)
        parts.extend(self._sources)
        return "".join(parts)

    def build(self) -> Program:
        """Compile the assembled source, reusing a cached program when possible."""
        source = self._assemble()

        cached = self.cache.get_program(source)
        if cached is not None:
            _log.debug("found program '%s' in cache", self._key)
            self._program = cached
            return cached

        start = time.perf_counter()
        try:
            kernels = self.accelerator.compile(source)
        except SplaError as exc:
            _log.error("failed to build program: %s", exc.message)
            _log.error("src\n%s", source)
            raise ProgramBuildError(
                f"failed to build program '{self._key}': {exc.message}", source
            ) from exc
        elapsed = time.perf_counter() - start

        program = Program(
            source,
            key=self._key,
            defines=tuple(self._defines),
            functions=tuple(self._functions),
            sources=tuple(self._sources),
            kernels=kernels,
        )
        self._defines = []
        self._functions = []
        self._sources = []
        self._key = ""
        _log.debug("build program '%s' in %gsec", program.key, elapsed)

        self.cache.add_program(program)
        self._program = program
        return program