"""
Broadcasting viewer: indexing that mixes "skip this axis" markers, slices
and concrete indices.

``a.V[...]`` walks the key from the outermost axis inwards and routes each
component to an O(1) view primitive:

- ``_I`` (or a bare ``:``) keeps the axis as is;
- an ``int`` calls ``view(index, axis)``, removing the axis;
- a ``slice`` is read with Python semantics (negative bounds count from
  the end) and calls ``slice(start, stop, step, axis)``; empty or
  reversed slices raise ``InvalidConstructionError``.

A key made only of integers, one per axis, addresses a single element.
"""

from __future__ import annotations

from operator import index as _as_index
from typing import Any, Tuple, Union

from ...domain._array import IF64Array
from ...domain._errors import OutOfBoundsError
from ._indexer import get_scalar, set_scalar


class _AllMarker:
    """Singleton marker meaning "every index along this axis"."""

    _instance = None

    def __new__(cls) -> "_AllMarker":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "_I"


_I = _AllMarker()


def is_view_key(key: Any) -> bool:
    """True if ``key`` contains a marker or a slice and needs the viewer."""
    parts = key if isinstance(key, tuple) else (key,)
    return any(p is _I or isinstance(p, slice) for p in parts)


def _resolve(a: IF64Array, key: Any) -> Union[IF64Array, Tuple[int, ...]]:
    parts = key if isinstance(key, tuple) else (key,)
    if len(parts) > a.ndim:
        raise OutOfBoundsError(
            tuple(p if isinstance(p, int) else -1 for p in parts), a.shape
        )

    if len(parts) == a.ndim and not is_view_key(parts):
        return tuple(_as_index(p) for p in parts)

    out = a
    axis = 0
    for p in parts:
        if p is _I:
            axis += 1
        elif isinstance(p, slice):
            # Python semantics: negative bounds count from the end
            start, stop, step = p.indices(out.shape[axis])
            out = out.slice(start, stop, step, axis=axis)
            axis += 1
        else:
            out = out.view(_as_index(p), axis=axis)
    return out


class Viewer:
    """
    The ``a.V[...]`` helper.

    Examples
    --------
    >>> m = F64Array.from_function(3, 4, block=lambda r, c: 10 * r + c)
    >>> m.V[_I, 2].to_list()
    [2.0, 12.0, 22.0]
    >>> m.V[_I, 1:3].shape
    (3, 2)
    >>> m.V[_I, 0] = 0.0
    """

    __slots__ = ("_a",)

    def __init__(self, a: IF64Array) -> None:
        self._a = a

    def __getitem__(self, key: Any) -> Union[IF64Array, float]:
        target = _resolve(self._a, key)
        if isinstance(target, tuple):
            return get_scalar(self._a, target)
        return target

    def __setitem__(self, key: Any, value: Any) -> None:
        target = _resolve(self._a, key)
        if isinstance(target, tuple):
            set_scalar(self._a, target, float(value))
        elif isinstance(value, type(self._a)):
            value.copy_to(target)
        else:
            target.fill(float(value))
