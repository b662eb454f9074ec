"""
Layout-specific implementations of elementwise arithmetic via control-path
dispatch.

This module registers flat and strided implementations of
``ArrayMixinArithmetic._binary_in_place``, the primitive behind every
arithmetic operator.

- Flat arrays apply the kernel to their single run.
- Strided arrays with a scalar operand unroll the receiver alone and apply
  the kernel to every flat run.
- Strided arrays with an array operand decompose *both* operands at their
  common unroll depth, so each pair of runs is structurally matched even
  when the two layouts differ.

An array operand that overlaps the receiver (``m.add_assign(m.T)``) is
copied first: runs are updated one after another, so a later run must not
read elements an earlier run already wrote.
"""

from typing import Union

from ..._array_builder import array_control_path_manager
from ....ops.flat_cpu_ext import flat_binary, flat_scalar

from .....domain._array import IF64Array
from .....domain._layout import Layout

from ._base import ArrayMixinArithmetic as AMA

Number = Union[int, float]


@array_control_path_manager(AMA, AMA._binary_in_place, Layout.FLAT)
def array_binary_in_place_flat(
    self: IF64Array, op: str, other: Union[IF64Array, Number]
) -> None:
    if isinstance(other, type(self)):
        self.check_shape(other)
        if other.overlaps(self):
            other = other.copy()
        flat_binary(op, self, other)
    else:
        flat_scalar(op, self, float(other))


@array_control_path_manager(AMA, AMA._binary_in_place, Layout.STRIDED)
def array_binary_in_place_strided(
    self: IF64Array, op: str, other: Union[IF64Array, Number]
) -> None:
    if isinstance(other, type(self)):
        self.check_shape(other)
        if other.overlaps(self):
            other = other.copy()
        for a, b in self.common_unroll_to_flat(other):
            flat_binary(op, a, b)
    else:
        value = float(other)
        for run in self.unroll_to_flat():
            flat_scalar(op, run, value)
