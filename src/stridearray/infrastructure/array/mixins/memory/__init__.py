"""
Memory mixins and layout-specific implementations for array operations.

This package aggregates buffer-level array operations and their concrete
control-path implementations:

- ``fill``         : in-place fill
- ``copy_to``      : cross-layout element copy
- ``swap``         : in-place element exchange (flat only)
- ``dense_buffer`` : raw buffer handle of a dense flat run

Implementation modules are imported for their side effects (registering
control paths). Only the base mixin class is exported.
"""

from ._array_fill import *
from ._array_copy import *
from ._array_buffer import *
from ._base import ArrayMixinMemory

__all__ = [
    ArrayMixinMemory.__name__,
]
