"""
stridearray: strided N-dimensional float64 arrays over shared buffers.

Views, slices, transposes and reshapes are O(1) headers over one buffer;
bulk operations decompose arrays into single-stride runs and apply flat
kernels to each run.
"""

from .domain import (
    IF64Array,
    InvalidConstructionError,
    Layout,
    NonFlattenableError,
    OutOfBoundsError,
    ShapeMismatchError,
    UnsupportedOperationError,
)
from .infrastructure.array import F64Array, _I

__version__ = "0.1.0"

__all__ = [
    "F64Array",
    "_I",
    "IF64Array",
    "Layout",
    "InvalidConstructionError",
    "NonFlattenableError",
    "OutOfBoundsError",
    "ShapeMismatchError",
    "UnsupportedOperationError",
]
