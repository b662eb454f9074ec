"""
Per-concern array mixins.

Each subpackage exports one abstract mixin and, on import, registers the
flat and strided control paths of its dispatched methods.
"""

from .arithmetic import ArrayMixinArithmetic
from .memory import ArrayMixinMemory
from .reduction import ArrayMixinReduction
from .unary import ArrayMixinUnary

__all__ = [
    ArrayMixinArithmetic.__name__,
    ArrayMixinMemory.__name__,
    ArrayMixinReduction.__name__,
    ArrayMixinUnary.__name__,
]
