"""
Layout-specific implementations of ``log_sum_exp``.

The strided path computes the stabilized value of every flat run and then
combines the per-run values with the same stabilization, by taking the
``log_sum_exp`` of the flat array of partial results.
"""

from ..._array_builder import array_control_path_manager
from ....ops.flat_cpu_ext import flat_log_sum_exp

from .....domain._array import IF64Array
from .....domain._layout import Layout

from ._base import ArrayMixinReduction as AMR


@array_control_path_manager(AMR, AMR.log_sum_exp, Layout.FLAT)
def array_log_sum_exp_flat(self: IF64Array) -> float:
    return flat_log_sum_exp(self)


@array_control_path_manager(AMR, AMR.log_sum_exp, Layout.STRIDED)
def array_log_sum_exp_strided(self: IF64Array) -> float:
    partial = [flat_log_sum_exp(run) for run in self.unroll_to_flat()]
    return type(self).of(*partial).log_sum_exp()
