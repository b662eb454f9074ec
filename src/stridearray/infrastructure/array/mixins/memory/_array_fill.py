"""
Layout-specific implementations of ``fill`` via control-path dispatch.

The flat path writes the run directly; the strided path decomposes the
array into flat runs (``unroll_to_flat``) and fills each of them, so no
full flattenability is required.
"""

from ..._array_builder import array_control_path_manager
from ....ops.flat_cpu_ext import flat_fill

from .....domain._array import IF64Array
from .....domain._layout import Layout

from ._base import ArrayMixinMemory as AMM


@array_control_path_manager(AMM, AMM.fill, Layout.FLAT)
def array_fill_flat(self: IF64Array, value: float) -> None:
    flat_fill(self, float(value))


@array_control_path_manager(AMM, AMM.fill, Layout.STRIDED)
def array_fill_strided(self: IF64Array, value: float) -> None:
    value = float(value)
    for run in self.unroll_to_flat():
        flat_fill(run, value)
