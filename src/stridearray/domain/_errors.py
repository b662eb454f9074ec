"""
Array contract violations for stridearray.

This module defines the custom errors raised by the strided array engine.
Every error signals a contract violation detected *before* (or instead of)
touching the shared data buffer: the engine never retries and never returns
partial results.

Each error derives from the built-in exception a caller would naturally
catch for the same situation (``ValueError`` for bad arguments,
``IndexError`` for bad coordinates, ``RuntimeError`` for operations that
the array's layout cannot support), so existing ``except`` clauses keep
working.
"""

from __future__ import annotations

from typing import Sequence


def _fmt_shape(shape: Sequence[int]) -> str:
    return "(" + ", ".join(str(int(d)) for d in shape) + ")"


class ShapeMismatchError(ValueError):
    """
    Raised when two arrays taking part in one operation have different shapes.

    Elementwise binary operators, ``copy_to`` and ``concatenate`` require
    exact shape equality; no implicit broadcasting is ever attempted.

    Attributes
    ----------
    shape_a : tuple[int, ...]
        Shape of the receiver (left-hand operand).
    shape_b : tuple[int, ...]
        Shape of the other operand.
    """

    def __init__(
        self, shape_a: Sequence[int], shape_b: Sequence[int], detail: str = ""
    ) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        shape_a : Sequence[int]
            Shape of the first operand.
        shape_b : Sequence[int]
            Shape of the second operand.
        detail : str, optional
            Extra context appended to the message (e.g. the axis being
            concatenated).
        """
        msg = f"Shape mismatch: {_fmt_shape(shape_a)} vs {_fmt_shape(shape_b)}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg + ".")
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)


class OutOfBoundsError(IndexError):
    """
    Raised when a coordinate tuple does not address an element of an array.

    This covers too many or too few coordinates as well as a coordinate
    outside the ``[0, shape[axis])`` range of its axis.

    Attributes
    ----------
    index : tuple[int, ...]
        The offending coordinate tuple.
    shape : tuple[int, ...]
        Shape of the array that was indexed.
    """

    def __init__(self, index: Sequence[int], shape: Sequence[int]) -> None:
        super().__init__(
            f"Index {_fmt_shape(index)} out of bounds for shape {_fmt_shape(shape)}."
        )
        self.index = tuple(index)
        self.shape = tuple(shape)

    @classmethod
    def for_axis(cls, axis: int, shape: Sequence[int]) -> "OutOfBoundsError":
        """Build the error for an axis argument outside ``[0, ndim)``."""
        err = cls((axis,), shape)
        err.args = (
            f"Axis {axis} out of bounds for array of shape {_fmt_shape(shape)} "
            f"({len(shape)} dimensions).",
        )
        return err


class InvalidConstructionError(ValueError):
    """
    Raised when an array header (or a request to derive one) is malformed.

    Examples are zero-dimensional arrays, mismatched ``strides``/``shape``
    lengths, zero strides, headers addressing memory outside the buffer,
    non-positive slice steps and invalid slice bounds.
    """


class UnsupportedOperationError(RuntimeError):
    """
    Raised when an operation is defined only for flat (1-D) arrays.

    ``arg_max``, ``arg_min``, ``cum_sum`` and ``dot`` are flat-only. Invoking
    them on a higher-rank array is a fixed failure, not a degraded
    computation.

    Attributes
    ----------
    op : str
        Name of the operation that was attempted.
    shape : tuple[int, ...]
        Shape of the receiver.
    """

    def __init__(self, op: str, shape: Sequence[int], requirement: str = "1-D") -> None:
        super().__init__(
            f"{op} is only supported for {requirement} arrays, "
            f"got shape {_fmt_shape(shape)}."
        )
        self.op = op
        self.shape = tuple(shape)


class NonFlattenableError(RuntimeError):
    """
    Raised when ``flatten`` or ``reshape`` is requested for an array whose
    elements cannot be visited with a single fixed stride.

    Callers must ``copy()`` the array first to obtain a dense layout.
    """

    def __init__(self, op: str, shape: Sequence[int], strides: Sequence[int]) -> None:
        super().__init__(
            f"{op} requires a flattenable array; shape {_fmt_shape(shape)} with "
            f"strides {_fmt_shape(strides)} is not. Call copy() first."
        )
        self.op = op
        self.shape = tuple(shape)
        self.strides = tuple(strides)
