"""
Layout-specific implementations of elementwise unary maps via control-path
dispatch.

The flat path maps its single run; the strided path maps every run yielded
by ``unroll_to_flat``.
"""

from ..._array_builder import array_control_path_manager
from ....ops.flat_cpu_ext import flat_unary

from .....domain._array import IF64Array
from .....domain._layout import Layout

from ._base import ArrayMixinUnary as AMU


@array_control_path_manager(AMU, AMU._unary_in_place, Layout.FLAT)
def array_unary_in_place_flat(self: IF64Array, op: str) -> None:
    flat_unary(op, self)


@array_control_path_manager(AMU, AMU._unary_in_place, Layout.STRIDED)
def array_unary_in_place_strided(self: IF64Array, op: str) -> None:
    for run in self.unroll_to_flat():
        flat_unary(op, run)
