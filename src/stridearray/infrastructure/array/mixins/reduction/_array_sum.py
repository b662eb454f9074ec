"""
Layout-specific implementations of ``sum`` and ``cum_sum``.

The flat path sums its run directly (native for dense runs when available).
The strided path sums every flat run of ``unroll_to_flat`` and combines the
partial sums with the same compensated accumulator.
"""

from ..._array_builder import array_control_path_manager
from ....ops._compensated import CompensatedSum
from ....ops.flat_cpu_ext import flat_cum_sum, flat_sum

from .....domain._array import IF64Array
from .....domain._errors import UnsupportedOperationError
from .....domain._layout import Layout

from ._base import ArrayMixinReduction as AMR


@array_control_path_manager(AMR, AMR.sum, Layout.FLAT)
def array_sum_flat(self: IF64Array) -> float:
    return flat_sum(self)


@array_control_path_manager(AMR, AMR.sum, Layout.STRIDED)
def array_sum_strided(self: IF64Array) -> float:
    acc = CompensatedSum()
    for run in self.unroll_to_flat():
        acc.feed(flat_sum(run))
    return acc.result()


@array_control_path_manager(AMR, AMR.cum_sum, Layout.FLAT)
def array_cum_sum_flat(self: IF64Array) -> None:
    flat_cum_sum(self)


@array_control_path_manager(AMR, AMR.cum_sum, Layout.STRIDED)
def array_cum_sum_strided(self: IF64Array) -> None:
    raise UnsupportedOperationError("cum_sum", self.shape)
