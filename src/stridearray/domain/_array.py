"""
Array interface definitions.

This module defines the domain-level interface of a strided, N-dimensional,
double-precision array using structural typing. Mixins in the infrastructure
layer annotate ``self`` with :class:`IF64Array` so they can be written
against the header API without importing the concrete class.

Notes
-----
The protocol lists the header and unrolling surface every operation relies
on. Numeric operations are declared by the mixins themselves.
"""

from __future__ import annotations

from typing import Iterator, Protocol, Tuple, Union, runtime_checkable

import numpy as np

from ._layout import Layout

Number = Union[int, float]


@runtime_checkable
class IF64Array(Protocol):
    """
    Strided array interface.

    An ``IF64Array`` is a header ``(offset, strides, shape)`` over a shared
    one-dimensional ``float64`` buffer. Every derived view shares the buffer;
    in-place mutation through one view is visible through all of them.
    """

    @property
    def data(self) -> np.ndarray:
        """Shared one-dimensional float64 buffer."""
        ...

    @property
    def offset(self) -> int:
        """Buffer index of the first logical element."""
        ...

    @property
    def strides(self) -> Tuple[int, ...]:
        """Signed buffer step between consecutive indices along each axis."""
        ...

    @property
    def shape(self) -> Tuple[int, ...]:
        """Number of elements along each axis."""
        ...

    @property
    def ndim(self) -> int:
        """Number of axes."""
        ...

    @property
    def numel(self) -> int:
        """Total number of elements."""
        ...

    @property
    def layout(self) -> Layout:
        """Dispatch tag: flat leaf or general strided array."""
        ...

    @property
    def is_flattenable(self) -> bool:
        """Whether all elements are reachable with one fixed-stride loop."""
        ...

    @property
    def size(self) -> int:
        """Number of elements along the first axis."""
        ...

    @property
    def is_dense(self) -> bool:
        """Flattenable with unit stride."""
        ...

    def check_shape(self, other: "IF64Array") -> None:
        """Raise ``ShapeMismatchError`` unless ``other`` has the same shape."""
        ...

    def overlaps(self, other: "IF64Array") -> bool:
        """True if the two arrays may address the same memory."""
        ...

    def dense_buffer(self) -> Tuple[np.ndarray, int, int]:
        """``(data, offset, size)`` of a dense flat array."""
        ...

    def flatten(self) -> "IF64Array":
        """O(1) flat view of a flattenable array."""
        ...

    def copy(self) -> "IF64Array":
        """Dense, independent copy."""
        ...

    def unroll_to_flat(self) -> Iterator["IF64Array"]:
        """Decompose into flat runs covering every element exactly once."""
        ...

    def common_unroll_to_flat(
        self, other: "IF64Array"
    ) -> Iterator[Tuple["IF64Array", "IF64Array"]]:
        """Decompose two same-shape arrays into pairwise matching flat runs."""
        ...
