"""
ctypes bindings for stridearray native dense-run kernels.

The native library operates directly on the shared float64 buffer of an
array. Each binding receives the ``(data, offset, size)`` triple of a dense
flat run (see ``F64Array.dense_buffer``) and passes a pointer to
``data[0]`` plus the offset, so no intermediate copy is made.

Expected C ABI
--------------
::

    double stridearray_sum_f64(const double* x, int64_t off, int64_t n);
    double stridearray_dot_f64(const double* x, int64_t xoff,
                               const double* y, int64_t yoff, int64_t n);
    double stridearray_log_sum_exp_f64(const double* x, int64_t off, int64_t n);
    void   stridearray_<unary>_f64(double* x, int64_t off, int64_t n);
           // unary in {exp, expm1, log, log1p}
    void   stridearray_<binary>_f64(double* x, int64_t xoff,
                                    const double* y, int64_t yoff, int64_t n);
           // binary in {add, sub, mul, div, log_add_exp}
    void   stridearray_<binary>_scalar_f64(double* x, int64_t off, int64_t n,
                                           double value);
           // binary in {add, sub, mul, div}

Argument validation is strict: crossing the Python/native boundary with a
wrong dtype or a non-contiguous buffer is undefined behaviour on the C side.
"""

from __future__ import annotations

import ctypes
from ctypes import POINTER, c_double, c_int64

import numpy as np

from ._native_loader import load_stridearray_native

UNARY_OPS = ("exp", "expm1", "log", "log1p")
BINARY_OPS = ("add", "sub", "mul", "div", "log_add_exp")
SCALAR_OPS = ("add", "sub", "mul", "div")

_PD = POINTER(c_double)


def _check_buffer(name: str, data: np.ndarray, offset: int, size: int) -> None:
    if not isinstance(data, np.ndarray) or data.dtype != np.float64:
        raise TypeError(f"{name} must be a float64 ndarray, got {getattr(data, 'dtype', type(data))}")
    if data.ndim != 1 or not data.flags["C_CONTIGUOUS"]:
        raise ValueError(f"{name} must be a 1-D C-contiguous buffer")
    if offset < 0 or size < 0 or offset + size > data.shape[0]:
        raise ValueError(
            f"{name}: run [{offset}, {offset + size}) outside buffer of length {data.shape[0]}"
        )


def _ptr(data: np.ndarray):
    return data.ctypes.data_as(_PD)


def _bind(lib: ctypes.CDLL, symbol: str, argtypes, restype):
    fn = getattr(lib, symbol)
    fn.argtypes = argtypes
    fn.restype = restype
    return fn


def sum_f64_ctypes(lib: ctypes.CDLL, *, data: np.ndarray, offset: int, size: int) -> float:
    """
    Sum a dense run with the native kernel.

    Parameters
    ----------
    lib : ctypes.CDLL
        Loaded native library handle.
    data : np.ndarray
        Shared float64 buffer.
    offset : int
        Index of the first element of the run.
    size : int
        Number of elements.

    Returns
    -------
    float
        Compensated sum of the run.
    """
    _check_buffer("data", data, offset, size)
    fn = _bind(lib, "stridearray_sum_f64", [_PD, c_int64, c_int64], c_double)
    return float(fn(_ptr(data), offset, size))


def log_sum_exp_f64_ctypes(
    lib: ctypes.CDLL, *, data: np.ndarray, offset: int, size: int
) -> float:
    _check_buffer("data", data, offset, size)
    fn = _bind(lib, "stridearray_log_sum_exp_f64", [_PD, c_int64, c_int64], c_double)
    return float(fn(_ptr(data), offset, size))


def dot_f64_ctypes(
    lib: ctypes.CDLL,
    *,
    x: np.ndarray,
    x_offset: int,
    y: np.ndarray,
    y_offset: int,
    size: int,
) -> float:
    _check_buffer("x", x, x_offset, size)
    _check_buffer("y", y, y_offset, size)
    fn = _bind(
        lib,
        "stridearray_dot_f64",
        [_PD, c_int64, _PD, c_int64, c_int64],
        c_double,
    )
    return float(fn(_ptr(x), x_offset, _ptr(y), y_offset, size))


def unary_f64_ctypes(
    lib: ctypes.CDLL, op: str, *, data: np.ndarray, offset: int, size: int
) -> None:
    """
    Apply a native elementwise map in place (``exp``, ``expm1``, ``log`` or
    ``log1p``).
    """
    if op not in UNARY_OPS:
        raise ValueError(f"Unknown unary op: {op!r}")
    _check_buffer("data", data, offset, size)
    fn = _bind(lib, f"stridearray_{op}_f64", [_PD, c_int64, c_int64], None)
    fn(_ptr(data), offset, size)


def binary_f64_ctypes(
    lib: ctypes.CDLL,
    op: str,
    *,
    x: np.ndarray,
    x_offset: int,
    y: np.ndarray,
    y_offset: int,
    size: int,
) -> None:
    """
    ``x[i] = op(x[i], y[i])`` over two dense runs of equal length, in place.
    """
    if op not in BINARY_OPS:
        raise ValueError(f"Unknown binary op: {op!r}")
    _check_buffer("x", x, x_offset, size)
    _check_buffer("y", y, y_offset, size)
    fn = _bind(
        lib,
        f"stridearray_{op}_f64",
        [_PD, c_int64, _PD, c_int64, c_int64],
        None,
    )
    fn(_ptr(x), x_offset, _ptr(y), y_offset, size)


def scalar_f64_ctypes(
    lib: ctypes.CDLL,
    op: str,
    *,
    data: np.ndarray,
    offset: int,
    size: int,
    value: float,
) -> None:
    """``x[i] = op(x[i], value)`` over a dense run, in place."""
    if op not in SCALAR_OPS:
        raise ValueError(f"Unknown scalar op: {op!r}")
    _check_buffer("data", data, offset, size)
    fn = _bind(
        lib,
        f"stridearray_{op}_scalar_f64",
        [_PD, c_int64, c_int64, c_double],
        None,
    )
    fn(_ptr(data), offset, size, float(value))


__all__ = [
    "load_stridearray_native",
    "sum_f64_ctypes",
    "log_sum_exp_f64_ctypes",
    "dot_f64_ctypes",
    "unary_f64_ctypes",
    "binary_f64_ctypes",
    "scalar_f64_ctypes",
]
