"""
Scalar element access by full coordinate tuple.

``get_scalar``/``set_scalar`` translate a coordinate tuple into a buffer
index with a bounds check. Specialized paths exist for 1, 2 and 3
dimensions; any other rank uses the generic stride-weighted sum.

:class:`Indexer` is the thin ``a.ix[...]`` helper built on these functions.
"""

from __future__ import annotations

from operator import index as _as_index
from typing import Any, Tuple

from ...domain._array import IF64Array
from ...domain._errors import OutOfBoundsError


def normalize_indices(key: Any) -> Tuple[int, ...]:
    """
    Coerce an indexing key to a tuple of Python ints.

    Raises
    ------
    TypeError
        If any component is not an integer.
    """
    if isinstance(key, tuple):
        return tuple(_as_index(k) for k in key)
    return (_as_index(key),)


def linear_index(a: IF64Array, indices: Tuple[int, ...]) -> int:
    """
    Buffer index of the element at ``indices`` (bounds-checked).

    Raises
    ------
    OutOfBoundsError
        If ``len(indices) != a.ndim`` or any coordinate is outside its axis.
    """
    shape = a.shape
    strides = a.strides
    n = len(indices)
    if n != len(shape):
        raise OutOfBoundsError(indices, shape)

    if n == 1:
        (i,) = indices
        if not 0 <= i < shape[0]:
            raise OutOfBoundsError(indices, shape)
        return a.offset + i * strides[0]

    if n == 2:
        r, c = indices
        if not (0 <= r < shape[0] and 0 <= c < shape[1]):
            raise OutOfBoundsError(indices, shape)
        return a.offset + r * strides[0] + c * strides[1]

    if n == 3:
        d, r, c = indices
        if not (0 <= d < shape[0] and 0 <= r < shape[1] and 0 <= c < shape[2]):
            raise OutOfBoundsError(indices, shape)
        return a.offset + d * strides[0] + r * strides[1] + c * strides[2]

    pos = a.offset
    for i, s, dim in zip(indices, strides, shape):
        if not 0 <= i < dim:
            raise OutOfBoundsError(indices, shape)
        pos += i * s
    return pos


def get_scalar(a: IF64Array, indices: Tuple[int, ...]) -> float:
    return float(a.data[linear_index(a, indices)])


def set_scalar(a: IF64Array, indices: Tuple[int, ...], value: float) -> None:
    a.data[linear_index(a, indices)] = value


class Indexer:
    """
    Scalar accessor ``a.ix[...]`` without view semantics.

    Unlike ``a[...]``, the indexer never returns a view: the key must be a
    full coordinate tuple.

    Examples
    --------
    >>> m = F64Array.zeros(2, 3)
    >>> m.ix[1, 2] = 4.0
    >>> m.ix[1, 2]
    4.0
    """

    __slots__ = ("_a",)

    def __init__(self, a: IF64Array) -> None:
        self._a = a

    def __getitem__(self, key: Any) -> float:
        return get_scalar(self._a, normalize_indices(key))

    def __setitem__(self, key: Any, value: float) -> None:
        set_scalar(self._a, normalize_indices(key), float(value))
