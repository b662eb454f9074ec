"""
Domain layer: array contract, layout tags and error types.
"""

from ._array import IF64Array
from ._errors import (
    InvalidConstructionError,
    NonFlattenableError,
    OutOfBoundsError,
    ShapeMismatchError,
    UnsupportedOperationError,
)
from ._layout import Layout

__all__ = [
    IF64Array.__name__,
    Layout.__name__,
    InvalidConstructionError.__name__,
    NonFlattenableError.__name__,
    OutOfBoundsError.__name__,
    ShapeMismatchError.__name__,
    UnsupportedOperationError.__name__,
]
