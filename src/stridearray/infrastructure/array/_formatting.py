"""
Bounded-width string rendering of arrays.

At most ``max_display`` entries are shown per axis; longer axes show the
first ``max_display // 2`` and the last ``max_display - max_display // 2``
entries around an ``...`` marker. Values use at most ``precision``
fractional digits with trailing zeros removed (``1.5``, ``2``, ``0.3333``).
"""

from __future__ import annotations

import math
from typing import Callable, List

from ...domain._array import IF64Array


def format_value(v: float, precision: int = 4) -> str:
    if math.isnan(v):
        return "nan"
    if math.isinf(v):
        return "inf" if v > 0 else "-inf"
    s = f"{v:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return "0" if s == "-0" else s


def _elide(size: int, max_display: int, render: Callable[[int], str]) -> List[str]:
    if max_display >= size:
        return [render(i) for i in range(size)]
    head = max_display // 2
    tail = max_display - head
    return (
        [render(i) for i in range(head)]
        + ["..."]
        + [render(i) for i in range(size - tail, size)]
    )


def array_to_string(a: IF64Array, max_display: int = 8, precision: int = 4) -> str:
    """
    Render ``a`` as nested bracketed lists.

    Parameters
    ----------
    a : IF64Array
        Array to render.
    max_display : int, optional
        Maximum number of entries shown along each axis. Defaults to 8.
    precision : int, optional
        Maximum number of fractional digits. Defaults to 4.
    """
    if a.ndim == 1:
        values = a._flat_view()
        parts = _elide(a.size, max_display, lambda i: format_value(float(values[i]), precision))
    else:
        parts = _elide(
            a.size,
            max_display,
            lambda i: array_to_string(a.view(i), max_display, precision),
        )
    return "[" + ", ".join(parts) + "]"
