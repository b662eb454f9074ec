"""
NumPy reference kernels for flat (1-D, uniformly strided) runs.

Every function in this module operates on a one-dimensional NumPy *view*
into the shared data buffer of an array, obtained with :func:`strided_view`.
Writes go through the view, so they are visible from every array header that
shares the buffer.

These kernels are the pure fallback of the native dense kernels bound in
``stridearray.infrastructure.native.python.flat_ctypes``: they accept any
non-zero stride and produce the results the native path is required to
reproduce.

Floating-point policy
---------------------
IEEE special values propagate silently (``log(-1) -> nan``, ``1/0 -> inf``);
NumPy floating-point warnings are suppressed inside the kernels.
"""

from __future__ import annotations

import math
from typing import Union

import numpy as np

from ._compensated import CompensatedSum

Number = Union[int, float]


def strided_view(data: np.ndarray, offset: int, stride: int, size: int) -> np.ndarray:
    """
    Return a writable 1-D view of ``size`` elements of ``data``.

    Parameters
    ----------
    data : np.ndarray
        One-dimensional float64 buffer.
    offset : int
        Buffer index of the first element.
    stride : int
        Non-zero buffer step between consecutive elements; may be negative.
    size : int
        Number of elements.

    Returns
    -------
    np.ndarray
        A view (never a copy) sharing memory with ``data``.
    """
    stop = offset + stride * size
    if stop < 0:
        # negative stride running down to (and including) index 0
        return data[offset::stride][:size]
    return data[offset:stop:stride]


# ---------------------------------------------------------------------------
# reductions
# ---------------------------------------------------------------------------
def sum_cpu(v: np.ndarray) -> float:
    """Correctly rounded sum of a run (``math.fsum``)."""
    return math.fsum(v.tolist())


def dot_cpu(v: np.ndarray, w: np.ndarray) -> float:
    """Dot product of two runs, products summed with ``math.fsum``."""
    with np.errstate(all="ignore"):
        return math.fsum(np.multiply(v, w).tolist())


def max_cpu(v: np.ndarray) -> float:
    return float(v.max())


def min_cpu(v: np.ndarray) -> float:
    return float(v.min())


def arg_max_cpu(v: np.ndarray) -> int:
    return int(np.argmax(v))


def arg_min_cpu(v: np.ndarray) -> int:
    return int(np.argmin(v))


def log_sum_exp_cpu(v: np.ndarray) -> float:
    """
    Compute ``log(sum(exp(v)))`` without overflow.

    The maximum ``m`` is factored out: ``m + log(sum(exp(v - m)))``. If
    ``m`` is infinite (or NaN) it is returned as is.
    """
    m = float(v.max())
    if not math.isfinite(m):
        return m
    with np.errstate(all="ignore"):
        return m + math.log(math.fsum(np.exp(v - m).tolist()))


def cum_sum_cpu(v: np.ndarray) -> None:
    """In-place compensated prefix sum."""
    acc = CompensatedSum()
    for i in range(v.shape[0]):
        v[i] = acc.feed(float(v[i])).result()


# ---------------------------------------------------------------------------
# in-place maps
# ---------------------------------------------------------------------------
_UNARY_UFUNCS = {
    "exp": np.exp,
    "expm1": np.expm1,
    "log": np.log,
    "log1p": np.log1p,
    "neg": np.negative,
}

_BINARY_UFUNCS = {
    "add": np.add,
    "sub": np.subtract,
    "mul": np.multiply,
    "div": np.divide,
    "log_add_exp": np.logaddexp,
}


def unary_in_place_cpu(op: str, v: np.ndarray) -> None:
    """
    Apply a named elementwise map in place.

    Parameters
    ----------
    op : str
        One of ``"exp"``, ``"expm1"``, ``"log"``, ``"log1p"``, ``"neg"``.
    v : np.ndarray
        Run to transform (written through).
    """
    fn = _UNARY_UFUNCS[op]
    with np.errstate(all="ignore"):
        fn(v, out=v)


def binary_in_place_cpu(op: str, v: np.ndarray, other: Union[np.ndarray, Number]) -> None:
    """
    ``v = op(v, other)`` elementwise, in place.

    ``other`` is either a run of the same length or a scalar.
    """
    fn = _BINARY_UFUNCS[op]
    with np.errstate(all="ignore"):
        fn(v, other, out=v)


def fill_cpu(v: np.ndarray, value: float) -> None:
    v[...] = value


def copy_cpu(src: np.ndarray, dst: np.ndarray) -> None:
    dst[...] = src
