"""
Unary mixins and layout-specific implementations for array operations.

- ``exp`` / ``expm1`` / ``log`` / ``log1p`` : in-place and copying maps
- ``neg`` : negated copy

The implementation module is imported for its side effect of registering
control paths; only the base mixin class is exported.
"""

from ._array_unary import *
from ._base import ArrayMixinUnary

__all__ = [
    ArrayMixinUnary.__name__,
]
