"""
Layout-specific implementations of ``copy_to`` via control-path dispatch.

``copy_to`` is the cross-array operation with the strictest requirements on
the unrolling machinery: source and destination share a shape but may have
unrelated strides. The strided path pairs their flat runs with
``common_unroll_to_flat``.

A source overlapping its destination is snapshotted with ``copy()`` first,
so every destination element receives the source value from before the
call.
"""

from ..._array_builder import array_control_path_manager
from ....ops.flat_cpu_ext import flat_copy

from .....domain._array import IF64Array
from .....domain._layout import Layout

from ._base import ArrayMixinMemory as AMM


@array_control_path_manager(AMM, AMM.copy_to, Layout.FLAT)
def array_copy_to_flat(self: IF64Array, other: IF64Array) -> None:
    self.check_shape(other)
    src = self.copy() if self.overlaps(other) else self
    flat_copy(src, other)


@array_control_path_manager(AMM, AMM.copy_to, Layout.STRIDED)
def array_copy_to_strided(self: IF64Array, other: IF64Array) -> None:
    self.check_shape(other)
    src = self.copy() if self.overlaps(other) else self
    for a, b in src.common_unroll_to_flat(other):
        flat_copy(a, b)
