# splakit

Building blocks for sparse linear algebra over typed values, in pure Python
with no third-party dependencies.

## Modules

- `splakit.config` — the `Status` enumeration of operation outcomes,
  `AcceleratorType`, `StateHint`, the `MatrixFormat` and `VectorFormat`
  storage format enumerations (their values index storage slots),
  the `SplaError` exception carrying a `Status`, and `status_to_string`,
  which returns a status name or `"none"` for an unknown value.
- `splakit.types` — `Type` and the built-in types `BYTE`, `INT`, `UINT` and
  `FLOAT`. `Type.cast` converts a Python number the way a store into that type
  would: integers wrap to the type's width and sign, floats round to 32-bit
  precision. Types compare by identity.
- `splakit.scalar` — `Scalar`, a single value of a fixed type, and the
  factories `make_scalar(type)`, `make_byte`, `make_int`, `make_uint` and
  `make_float`. `make_scalar` raises `SplaError` with `InvalidArgument` for
  `None` and `NotImplemented` for a type that is not built in.
- `splakit.ops` — `Op`, `OpBinary` and `OpSelect`: callable typed operations
  with a name, a device source body and a lookup key (for example
  `PLUS_INT.key == "PLUS_III"`). Custom ones are made with `make_op_binary`
  and `make_op_select`. Ready-made operations include `PLUS_*`, `MINUS_*`,
  `MULT_*`, `DIV_*`, `FIRST_*`, `SECOND_*`, `ONE_*`, `MIN_*`, `MAX_*`,
  `BOR_*`, `BAND_*`, `BXOR_*` and the selects `EQZERO_*` and `NQZERO_*`.
- `splakit.algorithms` — `vector_assign_masked(r, mask, value, op_assign,
  op_select)`, which sets `r[i] = op_assign(r[i], value)` in place wherever
  `op_select(mask[i])` holds.
- `splakit.profiler` — `TimeProfiler` and `TimeProfilerLabel`. Labels can be
  nested; `label.scope()` is a context manager that records the time spent in
  its block; `dump` writes the non-zero timings in milliseconds, sorted by
  name; `reset` zeroes them.
- `splakit.storage` — `DecorationStorage`, one slot and one validity flag per
  format, and `StorageManager`, which creates slots with registered
  constructors and brings a format up to date along the shortest chain of
  registered converters (`validate_ctor`, `validate_rw`, `validate_rwd`,
  `validate_wd`).
- `splakit.accelerator` — `Accelerator`, a host backend with selectable
  platform and device (`set_platform`, `set_device`, `set_queues_count`,
  `init`). Its `compile` checks that brackets in a program's source balance
  and returns the names of the `__kernel void` functions it declares.
- `splakit.program` — `ProgramBuilder` assembles program source from
  `#define` lines, typed operations and code, compiles it through an
  `Accelerator` and keeps the result in a `ProgramCache` keyed by source.
  `Program.make_kernel` returns a `Kernel`; a failed compile raises
  `ProgramBuildError`.

## Examples

Masked assignment:

```python
from splakit.algorithms import vector_assign_masked
from splakit.ops import NQZERO_INT, PLUS_INT
from splakit.scalar import make_int

r = [1, 2, 3, 4]
vector_assign_masked(r, [0, 1, 0, 1], make_int(10), PLUS_INT, NQZERO_INT)
assert r == [1, 12, 3, 14]
```

Format conversion:

```python
from splakit.config import VectorFormat
from splakit.storage import DecorationStorage, StorageManager

DOK, DENSE = VectorFormat.CpuDokVec, VectorFormat.CpuDenseVec


def make_dok(s):
    s[DOK] = {}


def make_dense(s):
    s[DENSE] = [0] * s.n_rows


def dok_to_dense(s):
    dense = [0] * s.n_rows
    for index, value in s[DOK].items():
        dense[index] = value
    s[DENSE] = dense


manager = StorageManager(len(VectorFormat))
manager.register_constructor(DOK, make_dok)
manager.register_constructor(DENSE, make_dense)
manager.register_converter(DOK, DENSE, dok_to_dense)

storage = DecorationStorage(len(VectorFormat), n_rows=4)
manager.validate_wd(DOK, storage)
storage[DOK][2] = 7
manager.validate_rw(DENSE, storage)
assert storage[DENSE] == [0, 0, 7, 0]
```

Program assembly:

```python
from splakit.ops import PLUS_INT
from splakit.program import ProgramBuilder
from splakit.types import INT

program = (
    ProgramBuilder()
    .set_key("assign")
    .add_type("TYPE", INT)
    .add_op("OP_BINARY", PLUS_INT)
    .add_code("__kernel void assign(TYPE x) { }\n")
    .build()
)
assert program.kernels == ("assign",)
kernel = program.make_kernel("assign")
```

Profiling:

```python
import sys
from splakit.profiler import TimeProfiler

profiler = TimeProfiler()
outer = profiler.label("vxm")
inner = profiler.label("exec", outer)   # named "vxm/0-exec"
with outer.scope():
    with inner.scope():
        sum(range(10_000))
profiler.dump(sys.stdout)
```

Errors are reported by raising `SplaError`, whose `status` attribute holds a
`Status`.

## What it does not do

There are no matrix or vector container classes, no algorithm registry or
scheduler, and no matrix-vector products; `vector_assign_masked` works on
plain Python sequences. Programs are not run on any device: `Accelerator.compile`
only checks and scans the source, and a `Kernel` is a name bound to its
`Program`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```