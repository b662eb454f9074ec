"""
Layout-specific implementations of flat-only buffer access.

``swap`` and ``dense_buffer`` expose the mutable, linearly addressed view
that selection utilities and native kernels consume. They exist only for
flat arrays; the strided control paths fail unconditionally.
"""

from typing import Tuple

import numpy as np

from ..._array_builder import array_control_path_manager
from ..._indexer import linear_index

from .....domain._array import IF64Array
from .....domain._errors import UnsupportedOperationError
from .....domain._layout import Layout

from ._base import ArrayMixinMemory as AMM


@array_control_path_manager(AMM, AMM.swap, Layout.FLAT)
def array_swap_flat(self: IF64Array, i: int, j: int) -> None:
    pi = linear_index(self, (int(i),))
    pj = linear_index(self, (int(j),))
    data = self.data
    data[pi], data[pj] = data[pj], data[pi]


@array_control_path_manager(AMM, AMM.swap, Layout.STRIDED)
def array_swap_strided(self: IF64Array, i: int, j: int) -> None:
    raise UnsupportedOperationError("swap", self.shape)


@array_control_path_manager(AMM, AMM.dense_buffer, Layout.FLAT)
def array_dense_buffer_flat(self: IF64Array) -> Tuple[np.ndarray, int, int]:
    if self.strides[0] != 1:
        raise UnsupportedOperationError("dense_buffer", self.shape, "dense 1-D")
    return self.data, self.offset, self.size


@array_control_path_manager(AMM, AMM.dense_buffer, Layout.STRIDED)
def array_dense_buffer_strided(self: IF64Array) -> Tuple[np.ndarray, int, int]:
    raise UnsupportedOperationError("dense_buffer", self.shape, "dense 1-D")
