"""
Reduction mixin defining the public array reduction API.

This module declares :class:`ArrayMixinReduction`, the mixin that specifies
the interface and semantics of reductions and of the numerically stable
normalizations built on them.

``sum``, ``max``, ``min``, ``arg_max``, ``arg_min``, ``cum_sum``, ``dot`` and
``log_sum_exp`` are interface declarations; their flat and strided
implementations are registered through the control-path manager. ``mean``,
``sd``, ``rescale`` and ``log_rescale`` are expressed in terms of them.

Numerical notes
---------------
- Sums are compensated: each flat run is summed with correct rounding and
  run results are combined with a Neumaier accumulator.
- ``log_sum_exp`` factors out the maximum before exponentiating, both within
  a run and when combining runs.
- With NaN present, ``max``/``min``/``arg_max``/``arg_min`` return *some*
  valid result (an element of the array, or a valid position); which one is
  unspecified.
"""

from __future__ import annotations

import math
from abc import ABC
from typing import Sequence, Union

import numpy as np

from .....domain._array import IF64Array
from ....ops._compensated import CompensatedSum
from ....ops.flat_cpu_ext import flat_dot

# smallest positive x with 1.0 + x != 1.0 under round-to-nearest, halved
EPSILON = 2.0**-53


class ArrayMixinReduction(ABC):
    """
    Abstract mixin defining reduction operations for arrays.

    Notes
    -----
    - Reductions always cover every element; there is no axis argument.
    - ``arg_max``, ``arg_min``, ``cum_sum`` and ``dot`` are defined only for
      flat (1-D) arrays and raise ``UnsupportedOperationError`` otherwise.
    """

    def sum(self: IF64Array) -> float:
        """
        Return the sum of all elements (compensated summation).
        """

    def max(self: IF64Array) -> float:
        """Return the maximum element."""

    def min(self: IF64Array) -> float:
        """Return the minimum element."""

    def arg_max(self: IF64Array) -> int:
        """
        Return the position of the maximum element of a flat array.

        Raises
        ------
        UnsupportedOperationError
            If the array is not 1-D.
        """

    def arg_min(self: IF64Array) -> int:
        """
        Return the position of the minimum element of a flat array.

        Raises
        ------
        UnsupportedOperationError
            If the array is not 1-D.
        """

    def cum_sum(self: IF64Array) -> None:
        """
        Replace a flat array with its prefix sums, in place.

        The running sum is compensated, so ``cum_sum`` of many small values
        does not drift.

        Raises
        ------
        UnsupportedOperationError
            If the array is not 1-D.
        """

    def dot(
        self: IF64Array, other: Union[IF64Array, Sequence[float], np.ndarray]
    ) -> float:
        """
        Dot product of two flat arrays of equal length.

        Parameters
        ----------
        other : F64Array or sequence of numbers or 1-D ndarray
            The other operand. Sequences and ndarrays (including integer
            dtypes) are coerced to float64.

        Raises
        ------
        UnsupportedOperationError
            If either operand is not 1-D.
        ShapeMismatchError
            If the lengths differ.
        """

    def log_sum_exp(self: IF64Array) -> float:
        """
        Compute ``log(exp(x[0]) + ... + exp(x[n - 1]))`` without overflow.

        Returns ``max + log(sum(exp(x - max)))``. An infinite or NaN maximum
        is returned as is.
        """

    def mean(self: IF64Array) -> float:
        """Arithmetic mean of all elements."""
        return self.sum() / self.numel

    def _sum_of_squares(self: IF64Array) -> float:
        acc = CompensatedSum()
        for run in self.unroll_to_flat():
            acc.feed(flat_dot(run, run))
        return acc.result()

    def sd(self: IF64Array) -> float:
        """
        Unbiased sample standard deviation of all elements.

        Computed as ``sqrt((sum(x^2) - sum(x)^2 / n) / (n - 1))``. Returns NaN
        for a single element.
        """
        n = self.numel
        if n < 2:
            return math.nan
        s = self.sum()
        s2 = self._sum_of_squares()
        return math.sqrt(max(0.0, (s2 - s * s / n) / (n - 1)))

    def rescale(self: IF64Array) -> None:
        """
        Rescale the elements in place so that they sum to 1.

        The divisor is ``sum() + EPSILON * numel`` so an all-zero array stays
        finite.
        """
        self.div_assign(self.sum() + EPSILON * self.numel)

    def log_rescale(self: IF64Array) -> None:
        """
        Rescale log-domain elements in place so that ``log_sum_exp() == 0``.
        """
        self.sub_assign(self.log_sum_exp())
