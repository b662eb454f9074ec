"""
Array view algebra, indexing and structural ops mixin.

This module defines `ArrayShapeAndIndexingMixin`, the mixin implementing every
operation that derives a new header from an existing one: coordinate
indexing, per-axis views, slices, transpose, reversal, flatten and reshape.
Each of these is O(1) and shares the receiver's buffer.

It also hosts the composition utilities (``concatenate``/``append``), which
are the only operations here that allocate.

Design notes
------------
- This mixin is intended to be inherited by the concrete `F64Array` class.
- To avoid circular imports, the implementation does not import `F64Array`
  directly; new headers are built via ``self._derive(...)`` and new arrays via
  ``type(self)`` (instance methods) or ``type(first)`` (staticmethods).
- For an axis ``k`` and a position ``i`` along it, a view has
  ``offset' = offset + strides[k] * i`` and drops axis ``k``; a slice with
  step ``t`` keeps axis ``k`` with stride ``strides[k] * t`` and size
  ``ceil((stop - start) / t)``.
"""

from __future__ import annotations

from typing import Any, Iterator, Sequence, Tuple, Union

from ...domain._array import IF64Array
from ...domain._errors import (
    InvalidConstructionError,
    NonFlattenableError,
    OutOfBoundsError,
    ShapeMismatchError,
)
from ._indexer import Indexer, get_scalar, normalize_indices, set_scalar
from ._viewer import Viewer, is_view_key


class ArrayShapeAndIndexingMixin:
    """
    Shape and indexing operations for the concrete array implementation.

    Notes
    -----
    - Methods assume the host class provides ``.data``, ``.offset``,
      ``.strides``, ``.shape``, the unroll metadata and
      ``._derive(offset, strides, shape)``.
    - Views returned here alias the receiver: writes through a view are
      visible through the receiver and vice versa.
    """

    def _check_axis(self: IF64Array, axis: int) -> int:
        axis = int(axis)
        if not 0 <= axis < self.ndim:
            raise OutOfBoundsError.for_axis(axis, self.shape)
        return axis

    # ----------------------------
    # Indexing
    # ----------------------------
    def _prefix_view(self: IF64Array, indices: Tuple[int, ...]) -> IF64Array:
        k = len(indices)
        offset = self.offset
        for i, s, dim in zip(indices, self.strides, self.shape):
            if not 0 <= i < dim:
                raise OutOfBoundsError(indices, self.shape)
            offset += i * s
        return self._derive(offset, self.strides[k:], self.shape[k:])

    def __getitem__(self: IF64Array, key: Any) -> Union[IF64Array, float]:
        """
        Index the array by coordinates.

        A full coordinate tuple returns the element as a float; a shorter
        tuple returns the sub-array view at that prefix, so that
        ``a[i][j] == a[i, j]``. Keys containing slices or ``_I`` are handed to
        the viewer (``a.V``).

        Raises
        ------
        OutOfBoundsError
            If there are more coordinates than axes or a coordinate is
            outside its axis.
        """
        if is_view_key(key):
            return Viewer(self)[key]
        indices = normalize_indices(key)
        if len(indices) == self.ndim:
            return get_scalar(self, indices)
        if len(indices) > self.ndim:
            raise OutOfBoundsError(indices, self.shape)
        return self._prefix_view(indices)

    def __setitem__(self: IF64Array, key: Any, value: Any) -> None:
        """
        Assign through coordinates.

        A full coordinate tuple sets one element. A prefix (or a viewer key)
        addresses a sub-array, which is filled with a scalar ``value`` or
        receives a copy of an array ``value`` of the same shape.
        """
        if is_view_key(key):
            Viewer(self)[key] = value
            return
        indices = normalize_indices(key)
        if len(indices) == self.ndim:
            set_scalar(self, indices, float(value))
            return
        if len(indices) > self.ndim:
            raise OutOfBoundsError(indices, self.shape)
        target = self._prefix_view(indices)
        if isinstance(value, type(self)):
            value.copy_to(target)
        else:
            target.fill(float(value))

    @property
    def ix(self: IF64Array) -> Indexer:
        """Scalar indexer: ``a.ix[i, j]`` reads or writes one element."""
        return Indexer(self)

    @property
    def V(self: IF64Array) -> Viewer:
        """Viewer accepting ``_I`` markers and slices: ``a.V[_I, 2]``."""
        return Viewer(self)

    # ----------------------------
    # Views
    # ----------------------------
    def view(self: IF64Array, index: int, axis: int = 0) -> IF64Array:
        """
        Return the ``(ndim - 1)``-dimensional view at ``index`` along ``axis``.

        Raises
        ------
        InvalidConstructionError
            If the array is 1-D (a view would be 0-dimensional).
        OutOfBoundsError
            If ``axis`` or ``index`` is out of range.
        """
        if self.ndim == 1:
            raise InvalidConstructionError(
                "view() of a 1-D array would be 0-dimensional; use a[i] instead."
            )
        axis = self._check_axis(axis)
        index = int(index)
        if not 0 <= index < self.shape[axis]:
            raise OutOfBoundsError((index,), self.shape)
        return self._derive(
            self.offset + self.strides[axis] * index,
            self.strides[:axis] + self.strides[axis + 1 :],
            self.shape[:axis] + self.shape[axis + 1 :],
        )

    def along(self: IF64Array, axis: int) -> Iterator[IF64Array]:
        """Yield ``view(i, axis)`` for every ``i`` along ``axis``."""
        axis = self._check_axis(axis)
        for i in range(self.shape[axis]):
            yield self.view(i, axis)

    def slice(
        self: IF64Array, start: int = 0, stop: int = -1, step: int = 1, axis: int = 0
    ) -> IF64Array:
        """
        Return the view of positions ``start, start + step, ...`` below ``stop``
        along ``axis``.

        Parameters
        ----------
        start : int, optional
            First position (``>= 0``). Defaults to 0.
        stop : int, optional
            Exclusive end, or ``-1`` for the end of the axis. Defaults to -1.
        step : int, optional
            Positive step. Defaults to 1.
        axis : int, optional
            Axis to slice. Defaults to 0.

        Raises
        ------
        InvalidConstructionError
            If ``step <= 0``, ``start < 0``, or ``stop`` is neither ``-1`` nor
            in ``(start, shape[axis]]``.
        """
        axis = self._check_axis(axis)
        start, stop, step = int(start), int(stop), int(step)
        n = self.shape[axis]
        if step <= 0:
            raise InvalidConstructionError(f"slice step must be positive, got {step}.")
        if stop == -1:
            stop = n
        if start < 0 or not start < stop <= n:
            raise InvalidConstructionError(
                f"invalid slice [{start}:{stop}] for axis {axis} of size {n}."
            )
        strides = list(self.strides)
        shape = list(self.shape)
        offset = self.offset + strides[axis] * start
        shape[axis] = (stop - start + step - 1) // step
        strides[axis] *= step
        return self._derive(offset, tuple(strides), tuple(shape))

    def transpose(self: IF64Array) -> IF64Array:
        """Return the view with axis order reversed (strides and shape)."""
        return self._derive(self.offset, self.strides[::-1], self.shape[::-1])

    @property
    def T(self: IF64Array) -> IF64Array:
        """Alias of :meth:`transpose`."""
        return self.transpose()

    def reversed(self: IF64Array, axis: int = 0) -> IF64Array:
        """Return the view traversing ``axis`` backwards."""
        axis = self._check_axis(axis)
        strides = list(self.strides)
        offset = self.offset + strides[axis] * (self.shape[axis] - 1)
        strides[axis] = -strides[axis]
        return self._derive(offset, tuple(strides), self.shape)

    def flatten(self: IF64Array) -> IF64Array:
        """
        Return the 1-D view over every element, in row-major order.

        Raises
        ------
        NonFlattenableError
            If the elements cannot be visited with a single stride; call
            ``copy()`` first.
        """
        if self.ndim == 1:
            return self
        if not self.is_flattenable:
            raise NonFlattenableError("flatten", self.shape, self.strides)
        return self._derive(self.offset, (self.unroll_stride,), (self.unroll_size,))

    def reshape(self: IF64Array, *shape: Union[int, Sequence[int]]) -> IF64Array:
        """
        Reinterpret a flattenable array under a new row-major shape.

        Accepts ``a.reshape(2, 3)`` as well as ``a.reshape((2, 3))``.

        Raises
        ------
        InvalidConstructionError
            If the new shape is empty, has a non-positive entry, or a
            different element count.
        NonFlattenableError
            If the array is not flattenable.
        """
        if len(shape) == 1 and isinstance(shape[0], (tuple, list)):
            shape = tuple(shape[0])
        new_shape = tuple(int(d) for d in shape)
        if not new_shape or any(d < 1 for d in new_shape):
            raise InvalidConstructionError(f"invalid shape {new_shape} for reshape.")
        numel = 1
        for d in new_shape:
            numel *= d
        if numel != self.numel:
            raise InvalidConstructionError(
                f"cannot reshape {self.numel} elements into shape {new_shape}."
            )
        if not self.is_flattenable:
            raise NonFlattenableError("reshape", self.shape, self.strides)

        strides = [0] * len(new_shape)
        step = self.unroll_stride
        for axis in range(len(new_shape) - 1, -1, -1):
            strides[axis] = step
            step *= new_shape[axis]
        return self._derive(self.offset, tuple(strides), new_shape)

    # ----------------------------
    # Composition
    # ----------------------------
    @staticmethod
    def concatenate(first: IF64Array, *rest: IF64Array, axis: int = 0) -> IF64Array:
        """
        Join arrays along ``axis`` into one freshly allocated dense array.

        All inputs must have the same rank and the same size on every axis
        other than ``axis``.

        Raises
        ------
        ShapeMismatchError
            If the inputs are incompatible.
        """
        axis = first._check_axis(axis)
        arrays = (first,) + rest
        base = first.shape
        total = 0
        for a in arrays:
            if a.ndim != first.ndim or any(
                d != e for k, (d, e) in enumerate(zip(base, a.shape)) if k != axis
            ):
                raise ShapeMismatchError(
                    base, a.shape, detail=f"concatenating along axis {axis}"
                )
            total += a.shape[axis]

        out_shape = base[:axis] + (total,) + base[axis + 1 :]
        out = type(first).zeros(*out_shape)
        pos = 0
        for a in arrays:
            n = a.shape[axis]
            a.copy_to(out.slice(pos, pos + n, axis=axis))
            pos += n
        return out

    def append(self: IF64Array, other: IF64Array, axis: int = 0) -> IF64Array:
        """Return ``concatenate(self, other, axis=axis)``."""
        return type(self).concatenate(self, other, axis=axis)
