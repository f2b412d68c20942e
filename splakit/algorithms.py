"""Sequential algorithms over dense vectors."""

from __future__ import annotations

from typing import MutableSequence, Sequence, Union

from .config import SplaError, Status
from .ops import OpBinary, OpSelect
from .scalar import Scalar

__all__ = ["vector_assign_masked"]

Number = Union[int, float]


def vector_assign_masked(
    r: MutableSequence[Number],
    mask: Sequence[Number],
    value: Union[Scalar, Number],
    op_assign: OpBinary,
    op_select: OpSelect,
) -> None:
    """Set ``r[i] = op_assign(r[i], value)`` in place wherever ``op_select(mask[i])``."""
    t = op_assign.type_res
    if not (op_assign.type_arg_0 is t and op_assign.type_arg_1 is t and op_select.type_arg_0 is t):
        raise SplaError(Status.InvalidArgument, "operation types do not match")
    if isinstance(value, Scalar):
        if value.type is not t:
            raise SplaError(Status.InvalidArgument, "value type does not match operations")
        assign_value = value.value
    else:
        assign_value = t.cast(value)
    if len(mask) != len(r):
        raise SplaError(
            Status.InvalidArgument,
            f"mask size {len(mask)} does not match vector size {len(r)}",
        )

    r[:] = [
        op_assign(current, assign_value) if op_select(selector) else current
        for current, selector in zip(r, mask)
    ]