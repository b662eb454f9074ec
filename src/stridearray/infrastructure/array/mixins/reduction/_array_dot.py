"""
Layout-specific implementations of ``dot``.

Only flat arrays have a dot product. Sequences and ndarrays on the right
are coerced to a float64 flat array (no copy for float64 ndarrays that are
already contiguous).
"""

from typing import Sequence, Union

import numpy as np

from ..._array_builder import array_control_path_manager
from ....ops.flat_cpu_ext import flat_dot

from .....domain._array import IF64Array
from .....domain._errors import ShapeMismatchError, UnsupportedOperationError
from .....domain._layout import Layout

from ._base import ArrayMixinReduction as AMR


def _as_flat_operand(
    self: IF64Array, other: Union[IF64Array, Sequence[float], np.ndarray]
) -> IF64Array:
    cls = type(self)
    if isinstance(other, cls):
        if other.ndim != 1:
            raise UnsupportedOperationError("dot", other.shape)
        return other
    arr = np.ascontiguousarray(other, dtype=np.float64)
    if arr.shape != self.shape:
        raise ShapeMismatchError(self.shape, arr.shape)
    return cls.wrap(arr)


@array_control_path_manager(AMR, AMR.dot, Layout.FLAT)
def array_dot_flat(
    self: IF64Array, other: Union[IF64Array, Sequence[float], np.ndarray]
) -> float:
    rhs = _as_flat_operand(self, other)
    self.check_shape(rhs)
    return flat_dot(self, rhs)


@array_control_path_manager(AMR, AMR.dot, Layout.STRIDED)
def array_dot_strided(
    self: IF64Array, other: Union[IF64Array, Sequence[float], np.ndarray]
) -> float:
    raise UnsupportedOperationError("dot", self.shape)
