"""
Flat-run kernels with a native-dispatch boundary.

This module is the single place where the engine decides between the
optional native dense-kernel library and the NumPy reference kernels in
:mod:`.flat_cpu`. All functions take *flat* arrays (``ndim == 1``) and keep
the NumPy boundary inside the infrastructure layer.

Responsibilities
----------------
- Route dense runs (stride 1) to the native library when it is loaded,
  passing the raw buffer, offset and length (no copy).
- Route every other run, or every run when the library is unavailable, to
  the NumPy kernels, which produce identical results.
- Report a native library that exists but fails to load once per process
  with a ``RuntimeWarning``. A library that is simply not installed is
  logged at DEBUG; ``STRIDEARRAY_DISABLE_NATIVE`` skips the attempt.
"""

from __future__ import annotations

import ctypes
import logging
import warnings
from typing import Callable, Optional, TypeVar, Union

from ...domain._array import IF64Array
from . import flat_cpu

logger = logging.getLogger(__name__)

Number = Union[int, float]
T = TypeVar("T")

_native_state: dict = {"resolved": False, "lib": None}


def reset_native_state() -> None:
    """Forget the cached native-library resolution (used by tests)."""
    from ..native.python._native_loader import load_stridearray_native

    load_stridearray_native.cache_clear()
    _native_state["resolved"] = False
    _native_state["lib"] = None


def native_library() -> Optional[ctypes.CDLL]:
    """
    Return the loaded native library, or None when it is unavailable.

    The first failed load of an existing library emits a
    ``RuntimeWarning``; later calls return None silently until
    :func:`reset_native_state` is called.
    """
    if _native_state["resolved"]:
        return _native_state["lib"]

    from ..native.python._native_loader import (
        NativeLibraryNotFoundError,
        load_stridearray_native,
        native_disabled,
    )

    lib = None
    if not native_disabled():
        try:
            lib = load_stridearray_native()
        except NativeLibraryNotFoundError as e:
            logger.debug("using NumPy kernels: %s", e)
        except OSError as e:
            warnings.warn(
                "stridearray native library could not be loaded; "
                "falling back to NumPy kernels. "
                f"Reason: {e}",
                RuntimeWarning,
                stacklevel=2,
            )
    _native_state["resolved"] = True
    _native_state["lib"] = lib
    return lib


def _dispatch(native: Callable[[ctypes.CDLL], T], fallback: Callable[[], T], dense: bool) -> T:
    lib = native_library() if dense else None
    if lib is not None:
        try:
            return native(lib)
        except AttributeError as e:
            # library loaded but lacks this symbol
            warnings.warn(
                f"stridearray native library is missing a kernel; using NumPy. Reason: {e}",
                RuntimeWarning,
                stacklevel=3,
            )
    return fallback()


# ---------------------------------------------------------------------------
# reductions
# ---------------------------------------------------------------------------
def flat_sum(a: IF64Array) -> float:
    from ..native.python.flat_ctypes import sum_f64_ctypes

    def native(lib):
        data, off, n = a.dense_buffer()
        return sum_f64_ctypes(lib, data=data, offset=off, size=n)

    return _dispatch(native, lambda: flat_cpu.sum_cpu(a._flat_view()), a.is_dense)


def flat_log_sum_exp(a: IF64Array) -> float:
    from ..native.python.flat_ctypes import log_sum_exp_f64_ctypes

    def native(lib):
        data, off, n = a.dense_buffer()
        return log_sum_exp_f64_ctypes(lib, data=data, offset=off, size=n)

    return _dispatch(native, lambda: flat_cpu.log_sum_exp_cpu(a._flat_view()), a.is_dense)


def flat_dot(a: IF64Array, b: IF64Array) -> float:
    from ..native.python.flat_ctypes import dot_f64_ctypes

    def native(lib):
        x, xo, n = a.dense_buffer()
        y, yo, _ = b.dense_buffer()
        return dot_f64_ctypes(lib, x=x, x_offset=xo, y=y, y_offset=yo, size=n)

    return _dispatch(
        native,
        lambda: flat_cpu.dot_cpu(a._flat_view(), b._flat_view()),
        a.is_dense and b.is_dense,
    )


def flat_max(a: IF64Array) -> float:
    return flat_cpu.max_cpu(a._flat_view())


def flat_min(a: IF64Array) -> float:
    return flat_cpu.min_cpu(a._flat_view())


def flat_arg_max(a: IF64Array) -> int:
    return flat_cpu.arg_max_cpu(a._flat_view())


def flat_arg_min(a: IF64Array) -> int:
    return flat_cpu.arg_min_cpu(a._flat_view())


def flat_cum_sum(a: IF64Array) -> None:
    flat_cpu.cum_sum_cpu(a._flat_view())


# ---------------------------------------------------------------------------
# in-place maps
# ---------------------------------------------------------------------------
def flat_unary(op: str, a: IF64Array) -> None:
    """In-place elementwise map over a flat run (see ``flat_cpu.unary_in_place_cpu``)."""
    from ..native.python.flat_ctypes import UNARY_OPS, unary_f64_ctypes

    def native(lib):
        data, off, n = a.dense_buffer()
        unary_f64_ctypes(lib, op, data=data, offset=off, size=n)

    _dispatch(
        native,
        lambda: flat_cpu.unary_in_place_cpu(op, a._flat_view()),
        a.is_dense and op in UNARY_OPS,
    )


def flat_binary(op: str, a: IF64Array, b: IF64Array) -> None:
    """``a = op(a, b)`` over two flat runs of the same length, in place."""
    from ..native.python.flat_ctypes import BINARY_OPS, binary_f64_ctypes

    def native(lib):
        x, xo, n = a.dense_buffer()
        y, yo, _ = b.dense_buffer()
        binary_f64_ctypes(lib, op, x=x, x_offset=xo, y=y, y_offset=yo, size=n)

    _dispatch(
        native,
        lambda: flat_cpu.binary_in_place_cpu(op, a._flat_view(), b._flat_view()),
        a.is_dense and b.is_dense and op in BINARY_OPS,
    )


def flat_scalar(op: str, a: IF64Array, value: Number) -> None:
    """``a = op(a, value)`` over a flat run, in place."""
    from ..native.python.flat_ctypes import SCALAR_OPS, scalar_f64_ctypes

    def native(lib):
        data, off, n = a.dense_buffer()
        scalar_f64_ctypes(lib, op, data=data, offset=off, size=n, value=value)

    _dispatch(
        native,
        lambda: flat_cpu.binary_in_place_cpu(op, a._flat_view(), float(value)),
        a.is_dense and op in SCALAR_OPS,
    )


def flat_fill(a: IF64Array, value: float) -> None:
    flat_cpu.fill_cpu(a._flat_view(), value)


def flat_copy(src: IF64Array, dst: IF64Array) -> None:
    flat_cpu.copy_cpu(src._flat_view(), dst._flat_view())
