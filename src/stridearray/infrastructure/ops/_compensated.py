"""
Compensated (Kahan–Babuška/Neumaier) floating-point accumulation.

Flat-run sums are combined through :class:`CompensatedSum` so that the
rounding error of a reduction over many runs stays bounded instead of
growing with the number of runs.
"""

from __future__ import annotations

import math
from typing import Iterable


class CompensatedSum:
    """
    Running sum that tracks the low-order bits lost by each addition.

    Examples
    --------
    >>> acc = CompensatedSum()
    >>> for _ in range(10):
    ...     acc.feed(0.1)
    >>> acc.result()
    1.0
    """

    __slots__ = ("_sum", "_c")

    def __init__(self) -> None:
        self._sum = 0.0
        self._c = 0.0

    def feed(self, value: float) -> "CompensatedSum":
        s = self._sum
        t = s + value
        if math.fabs(s) >= math.fabs(value):
            self._c += (s - t) + value
        else:
            self._c += (value - t) + s
        self._sum = t
        return self

    def feed_all(self, values: Iterable[float]) -> "CompensatedSum":
        for v in values:
            self.feed(v)
        return self

    def result(self) -> float:
        # inf/nan inputs poison the correction term; the plain sum is the answer then
        if not math.isfinite(self._sum):
            return self._sum
        return self._sum + self._c
