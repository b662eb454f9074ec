"""
Layout-specific implementations of ``max``, ``min``, ``arg_max`` and
``arg_min``.

``max``/``min`` reduce each flat run and combine the per-run results.
``arg_max``/``arg_min`` are positions in a flat run and have no strided
implementation.
"""

from ..._array_builder import array_control_path_manager
from ....ops.flat_cpu_ext import flat_arg_max, flat_arg_min, flat_max, flat_min

from .....domain._array import IF64Array
from .....domain._errors import UnsupportedOperationError
from .....domain._layout import Layout

from ._base import ArrayMixinReduction as AMR


@array_control_path_manager(AMR, AMR.max, Layout.FLAT)
def array_max_flat(self: IF64Array) -> float:
    return flat_max(self)


@array_control_path_manager(AMR, AMR.max, Layout.STRIDED)
def array_max_strided(self: IF64Array) -> float:
    return max(flat_max(run) for run in self.unroll_to_flat())


@array_control_path_manager(AMR, AMR.min, Layout.FLAT)
def array_min_flat(self: IF64Array) -> float:
    return flat_min(self)


@array_control_path_manager(AMR, AMR.min, Layout.STRIDED)
def array_min_strided(self: IF64Array) -> float:
    return min(flat_min(run) for run in self.unroll_to_flat())


@array_control_path_manager(AMR, AMR.arg_max, Layout.FLAT)
def array_arg_max_flat(self: IF64Array) -> int:
    return flat_arg_max(self)


@array_control_path_manager(AMR, AMR.arg_max, Layout.STRIDED)
def array_arg_max_strided(self: IF64Array) -> int:
    raise UnsupportedOperationError("arg_max", self.shape)


@array_control_path_manager(AMR, AMR.arg_min, Layout.FLAT)
def array_arg_min_flat(self: IF64Array) -> int:
    return flat_arg_min(self)


@array_control_path_manager(AMR, AMR.arg_min, Layout.STRIDED)
def array_arg_min_strided(self: IF64Array) -> int:
    raise UnsupportedOperationError("arg_min", self.shape)
