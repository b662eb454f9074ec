"""
Concrete strided array implementation (NumPy buffer backend).

This module provides `F64Array`, the concrete array that satisfies the
domain-level `IF64Array` protocol. An `F64Array` is a *header* over a shared
one-dimensional ``float64`` NumPy buffer:

- ``offset``  : buffer index of element ``(0, ..., 0)``;
- ``strides`` : signed buffer step per axis (never zero);
- ``shape``   : element count per axis (every entry ``>= 1``).

The element at ``(i0, ..., ik)`` lives at
``data[offset + i0 * strides[0] + ... + ik * strides[k]]``.

Design notes
------------
- Headers are immutable. Views, slices, transposes and reshapes build new
  headers over the same buffer in O(1); ``copy()`` is the only way to obtain
  an independent dense buffer.
- Unroll metadata is computed once per header (see ``_unroll``) and drives
  both the flattenability checks and the flat-run decomposition that every
  bulk operation is built on.
- There is no separate flat array class. ``layout`` is ``Layout.FLAT`` for
  1-D headers and the control-path manager selects flat implementations at
  call time.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from ...domain._errors import (
    InvalidConstructionError,
    ShapeMismatchError,
)
from ...domain._layout import Layout
from ..ops.flat_cpu import strided_view
from ._formatting import array_to_string
from ._shape_and_indexing import ArrayShapeAndIndexingMixin
from ._unroll import UnrollInfo, compute_unroll, prefix_unroll

Number = Union[int, float]


from .mixins.arithmetic import ArrayMixinArithmetic
from .mixins.memory import ArrayMixinMemory
from .mixins.reduction import ArrayMixinReduction
from .mixins.unary import ArrayMixinUnary


def _normalize_shape(shape: Tuple[Any, ...]) -> Tuple[int, ...]:
    if len(shape) == 1 and isinstance(shape[0], (tuple, list)):
        shape = tuple(shape[0])
    return tuple(int(d) for d in shape)


class F64Array(
    ArrayShapeAndIndexingMixin,
    ArrayMixinArithmetic,
    ArrayMixinUnary,
    ArrayMixinReduction,
    ArrayMixinMemory,
):
    """
    Strided N-dimensional array of 64-bit floats.

    Parameters
    ----------
    data : np.ndarray
        One-dimensional, C-contiguous ``float64`` buffer. Not copied.
    offset : int
        Buffer index of the first logical element.
    strides : Sequence[int]
        Signed, non-zero buffer step per axis.
    shape : Sequence[int]
        Positive element count per axis; same length as ``strides``.
    validate : bool, optional
        Check the header against the buffer. Internal view constructors pass
        False because they derive headers from an already valid one.
        Defaults to True.

    Raises
    ------
    InvalidConstructionError
        If the buffer or the header is malformed, or the header addresses
        elements outside the buffer.

    Notes
    -----
    - Prefer the factories (``zeros``, ``full``, ``of``, ``wrap``,
      ``from_function``, ``from_numpy``) over calling the constructor.
    - Arrays compare structurally and are therefore unhashable.
    """

    def __init__(
        self,
        data: np.ndarray,
        offset: int,
        strides: Sequence[int],
        shape: Sequence[int],
        *,
        validate: bool = True,
    ) -> None:
        self._data = data
        self._offset = int(offset)
        self._strides = tuple(int(s) for s in strides)
        self._shape = tuple(int(d) for d in shape)
        if validate:
            self._validate()
        numel = 1
        for d in self._shape:
            numel *= d
        self._numel = numel
        self._unroll: UnrollInfo = compute_unroll(self._strides, self._shape)

    def _validate(self) -> None:
        data = self._data
        if not isinstance(data, np.ndarray):
            raise InvalidConstructionError(
                f"data must be a numpy.ndarray, got {type(data).__name__!r}."
            )
        if data.dtype != np.float64:
            raise InvalidConstructionError(f"data must be float64, got {data.dtype}.")
        if data.ndim != 1 or not data.flags.c_contiguous:
            raise InvalidConstructionError(
                "data must be a one-dimensional C-contiguous buffer."
            )
        if not self._shape:
            raise InvalidConstructionError("0-dimensional arrays are not supported.")
        if len(self._strides) != len(self._shape):
            raise InvalidConstructionError(
                f"strides {self._strides} and shape {self._shape} differ in length."
            )
        if any(d < 1 for d in self._shape):
            raise InvalidConstructionError(
                f"every axis must have at least one element, got shape {self._shape}."
            )
        if any(s == 0 for s in self._strides):
            raise InvalidConstructionError(f"zero stride in {self._strides}.")

        lo, hi = self._span()
        if lo < 0 or hi >= data.shape[0]:
            raise InvalidConstructionError(
                f"header (offset={self._offset}, strides={self._strides}, "
                f"shape={self._shape}) addresses [{lo}, {hi}] outside a buffer "
                f"of length {data.shape[0]}."
            )

    def _span(self) -> Tuple[int, int]:
        # lowest and highest buffer index the header addresses
        lo = hi = self._offset
        for s, d in zip(self._strides, self._shape):
            span = s * (d - 1)
            if span < 0:
                lo += span
            else:
                hi += span
        return lo, hi

    def _derive(
        self, offset: int, strides: Tuple[int, ...], shape: Tuple[int, ...]
    ) -> "F64Array":
        return type(self)(self._data, offset, strides, shape, validate=False)

    def overlaps(self, other: "F64Array") -> bool:
        """
        True if ``self`` and ``other`` may address the same memory.

        Arrays over the same buffer overlap when their addressed index ranges
        intersect. Arrays over distinct buffers overlap only if NumPy reports
        that the buffers themselves may share memory.
        """
        if self._data is not other.data:
            return bool(np.may_share_memory(self._data, other.data))
        lo, hi = self._span()
        other_lo, other_hi = other._span()
        return lo <= other_hi and other_lo <= hi

    # ----------------------------
    # Header
    # ----------------------------
    @property
    def data(self) -> np.ndarray:
        """Shared one-dimensional float64 buffer."""
        return self._data

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def strides(self) -> Tuple[int, ...]:
        return self._strides

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._shape

    @property
    def ndim(self) -> int:
        return len(self._shape)

    @property
    def size(self) -> int:
        """Number of elements along the first axis."""
        return self._shape[0]

    @property
    def numel(self) -> int:
        """Total number of elements."""
        return self._numel

    @property
    def layout(self) -> Layout:
        return Layout.of(len(self._shape))

    def __len__(self) -> int:
        return self._shape[0]

    # ----------------------------
    # Unrolling
    # ----------------------------
    @property
    def unroll_dim(self) -> int:
        """Length of the longest prefix of axes visitable with one stride."""
        return self._unroll.dim

    @property
    def unroll_stride(self) -> int:
        """Buffer step of the collapsed prefix loop."""
        return self._unroll.stride

    @property
    def unroll_size(self) -> int:
        """Number of elements visited by the collapsed prefix loop."""
        return self._unroll.size

    @property
    def is_flattenable(self) -> bool:
        """Whether every element is reachable with one fixed-stride loop."""
        return self._unroll.dim == len(self._shape)

    @property
    def is_dense(self) -> bool:
        """Flattenable with unit stride (a contiguous run of the buffer)."""
        return self.is_flattenable and self._unroll.stride == 1

    def _flat_view(self) -> np.ndarray:
        # writable NumPy view of a 1-D header
        return strided_view(self._data, self._offset, self._strides[0], self._shape[0])

    def check_shape(self, other: "F64Array") -> None:
        """
        Raises
        ------
        ShapeMismatchError
            If ``other`` does not have exactly the same shape.
        """
        if self._shape != other.shape:
            raise ShapeMismatchError(self._shape, other.shape)

    def unroll_once(self, n: Optional[int] = None) -> Iterator["F64Array"]:
        """
        Iterate over the first ``n`` axes as one collapsed loop.

        Yields, in row-major order, the ``(ndim - n)``-dimensional sub-array
        at every position of the first ``n`` axes. When ``n == ndim`` the
        single flat view of the whole array is yielded instead.

        Parameters
        ----------
        n : int, optional
            Number of leading axes to collapse, ``1 <= n <= unroll_dim``.
            Defaults to ``unroll_dim``.

        Raises
        ------
        InvalidConstructionError
            If ``n`` is outside ``[1, unroll_dim]``.
        """
        if n is None:
            n = self._unroll.dim
        if not 1 <= n <= self._unroll.dim:
            raise InvalidConstructionError(
                f"cannot unroll {n} axes; the first {self._unroll.dim} axes "
                f"of shape {self._shape} collapse."
            )
        if n == self.ndim:
            yield self.flatten()
            return
        info = self._unroll if n == self._unroll.dim else prefix_unroll(
            self._strides, self._shape, n
        )
        strides = self._strides[n:]
        shape = self._shape[n:]
        for i in range(info.size):
            yield self._derive(self._offset + i * info.stride, strides, shape)

    def unroll_to_flat(self) -> Iterator["F64Array"]:
        """
        Decompose the array into flat runs covering every element once.

        Runs come out in row-major order of the elements they cover. A
        flattenable array yields exactly one run.
        """
        if self.is_flattenable:
            yield self.flatten()
            return
        for sub in self.unroll_once():
            yield from sub.unroll_to_flat()

    def common_unroll_to_flat(
        self, other: "F64Array"
    ) -> Iterator[Tuple["F64Array", "F64Array"]]:
        """
        Decompose two arrays of the same shape into matching pairs of flat runs.

        Both arrays are unrolled to ``min(self.unroll_dim, other.unroll_dim)``
        axes at every level, so each yielded pair covers the same logical
        positions in both arrays regardless of their strides.

        Raises
        ------
        ShapeMismatchError
            If the shapes differ (raised before anything is yielded).
        """
        self.check_shape(other)
        return self._common_runs(other)

    def _common_runs(
        self, other: "F64Array"
    ) -> Iterator[Tuple["F64Array", "F64Array"]]:
        d = min(self._unroll.dim, other.unroll_dim)
        if d == self.ndim:
            yield self.flatten(), other.flatten()
            return
        for a, b in zip(self.unroll_once(d), other.unroll_once(d)):
            yield from a._common_runs(b)

    # ----------------------------
    # Factories
    # ----------------------------
    @classmethod
    def zeros(cls, *shape: Union[int, Sequence[int]]) -> "F64Array":
        """Allocate a dense, zero-filled array: ``F64Array.zeros(2, 3)``."""
        dims = _normalize_shape(shape)
        if not dims or any(d < 1 for d in dims):
            raise InvalidConstructionError(f"invalid shape {dims}.")
        strides = [1] * len(dims)
        for axis in range(len(dims) - 2, -1, -1):
            strides[axis] = strides[axis + 1] * dims[axis + 1]
        numel = strides[0] * dims[0]
        return cls(np.zeros(numel, dtype=np.float64), 0, strides, dims, validate=False)

    @classmethod
    def full(cls, *shape: Union[int, Sequence[int]], init: float) -> "F64Array":
        """Allocate a dense array with every element set to ``init``."""
        out = cls.zeros(*shape)
        out._data.fill(float(init))
        return out

    @classmethod
    def of(cls, *values: Number) -> "F64Array":
        """Build a flat array from its elements: ``F64Array.of(1.0, 2.0)``."""
        if not values:
            raise InvalidConstructionError("F64Array.of() needs at least one value.")
        data = np.array([float(v) for v in values], dtype=np.float64)
        return cls(data, 0, (1,), (data.shape[0],), validate=False)

    @classmethod
    def wrap(
        cls, buffer: np.ndarray, offset: int = 0, size: Optional[int] = None
    ) -> "F64Array":
        """
        Wrap an existing float64 buffer as a flat array (no copy).

        Parameters
        ----------
        buffer : np.ndarray
            One-dimensional, C-contiguous float64 buffer.
        offset : int, optional
            First element. Defaults to 0.
        size : int, optional
            Number of elements. Defaults to ``len(buffer) - offset``.
        """
        if size is None:
            size = (buffer.shape[0] if isinstance(buffer, np.ndarray) else 0) - offset
        return cls(buffer, offset, (1,), (size,))

    @classmethod
    def from_function(
        cls, *shape: Union[int, Sequence[int]], block: Callable[..., float]
    ) -> "F64Array":
        """
        Build a dense array whose element at ``(i, j, ...)`` is
        ``block(i, j, ...)``.

        Examples
        --------
        >>> F64Array.from_function(2, 3, block=lambda r, c: 10 * r + c).to_list()
        [[0.0, 1.0, 2.0], [10.0, 11.0, 12.0]]
        """
        out = cls.zeros(*shape)
        data = out._data
        dims = out.shape
        if len(dims) == 1:
            for i in range(dims[0]):
                data[i] = block(i)
        elif len(dims) == 2:
            pos = 0
            for r in range(dims[0]):
                for c in range(dims[1]):
                    data[pos] = block(r, c)
                    pos += 1
        elif len(dims) == 3:
            pos = 0
            for d in range(dims[0]):
                for r in range(dims[1]):
                    for c in range(dims[2]):
                        data[pos] = block(d, r, c)
                        pos += 1
        else:
            for pos, idx in enumerate(np.ndindex(*dims)):
                data[pos] = block(*idx)
        return out

    @classmethod
    def from_numpy(cls, arr: Union[np.ndarray, Iterable[Any]]) -> "F64Array":
        """Copy an ndarray (any numeric dtype, at least 1-D) into a new dense array."""
        src = np.asarray(arr, dtype=np.float64)
        if src.ndim == 0:
            raise InvalidConstructionError("0-dimensional arrays are not supported.")
        out = cls.zeros(*src.shape)
        out._data[:] = src.ravel(order="C")
        return out

    # ----------------------------
    # Equality and rendering
    # ----------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, F64Array):
            return NotImplemented
        if self._shape != other.shape:
            return False
        return all(
            np.array_equal(a._flat_view(), b._flat_view())
            for a, b in self.common_unroll_to_flat(other)
        )

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    __hash__ = None

    def to_string(self, max_display: int = 8, precision: int = 4) -> str:
        """
        Render the elements as nested brackets, eliding long axes.

        Parameters
        ----------
        max_display : int, optional
            Maximum number of entries shown along each axis. Defaults to 8.
        precision : int, optional
            Maximum number of fractional digits. Defaults to 4.
        """
        return array_to_string(self, max_display=max_display, precision=precision)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"F64Array({self.to_string()}, shape={self._shape})"
