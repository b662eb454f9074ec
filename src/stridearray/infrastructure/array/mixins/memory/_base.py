"""
Memory mixin: fill, copy and raw-buffer access.

This module declares :class:`ArrayMixinMemory`. ``fill``, ``copy_to``,
``swap`` and ``dense_buffer`` are interface declarations whose concrete
implementations are registered per layout (flat leaf vs. strided array)
through the array control-path manager. ``copy``, ``to_numpy`` and
``to_list`` are built on top of them.

Every in-place method writes through the shared buffer: the change is
visible from all views that reference the same elements.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, List, Tuple

import numpy as np

from .....domain._array import IF64Array


class ArrayMixinMemory(ABC):
    """
    Abstract mixin defining buffer-level operations for arrays.

    Notes
    -----
    - ``fill``, ``copy_to``, ``swap`` and ``dense_buffer`` are dispatched on
      ``self.layout``; see ``_array_fill``, ``_array_copy`` and
      ``_array_buffer``.
    """

    def fill(self: IF64Array, value: float) -> None:
        """
        Set every element of this array to ``value``, in place.

        Parameters
        ----------
        value : float
            The fill value.
        """

    def copy_to(self: IF64Array, other: IF64Array) -> None:
        """
        Copy the elements of this array into ``other``.

        The two arrays must have identical shapes; their strides may differ.
        The copy pairs flat runs of both arrays using their common unroll
        depth.

        Raises
        ------
        ShapeMismatchError
            If the shapes differ.
        """

    def swap(self: IF64Array, i: int, j: int) -> None:
        """
        Exchange the elements at linear positions ``i`` and ``j`` (flat only).

        Raises
        ------
        UnsupportedOperationError
            If the array is not 1-D.
        OutOfBoundsError
            If a position is outside the array.
        """

    def dense_buffer(self: IF64Array) -> Tuple[np.ndarray, int, int]:
        """
        Return ``(data, offset, size)`` of a dense flat array.

        This is the handle native kernels use to operate on the shared
        buffer without a copy.

        Raises
        ------
        UnsupportedOperationError
            If the array is not 1-D with stride 1.
        """

    def copy(self: IF64Array) -> IF64Array:
        """
        Return a dense, independent copy of this array.

        The copy always has row-major strides (it is flattenable regardless
        of the source layout) and the same shape as the source.
        """
        out = type(self).zeros(*self.shape)
        self.copy_to(out)
        return out

    def to_numpy(self: IF64Array) -> np.ndarray:
        """Return the elements as a new C-contiguous ndarray of ``self.shape``."""
        return self.copy().data.reshape(self.shape)

    def to_list(self: IF64Array) -> List[Any]:
        """Return the elements as nested Python lists of floats."""
        return self.to_numpy().tolist()

    def __contains__(self: IF64Array, value: float) -> bool:
        return any(value in run._flat_view() for run in self.unroll_to_flat())
