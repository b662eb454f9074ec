"""
Arithmetic mixins and layout-specific implementations for array operators.

This package aggregates elementwise arithmetic (``add``, ``sub``, ``mul``,
``div``, ``log_add_exp`` and their in-place/operator forms). The
implementation module is imported for its side effect of registering the
flat and strided control paths; only the base mixin class is exported.
"""

from ._array_arithmetic import *
from ._base import ArrayMixinArithmetic

__all__ = [
    ArrayMixinArithmetic.__name__,
]
