"""Typed sparse linear algebra building blocks: types, scalars, operations,
masked vector assignment, storage format conversion, profiling and program assembly."""

__version__ = "0.1.0"