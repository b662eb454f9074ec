"""
Reduction mixins and layout-specific implementations for array operations.

- ``sum`` / ``cum_sum``       : compensated summation
- ``max`` / ``min``           : extrema
- ``arg_max`` / ``arg_min``   : positions of extrema (flat only)
- ``dot``                     : dot product (flat only)
- ``log_sum_exp``             : stabilized log of summed exponentials
- ``mean`` / ``sd`` / ``rescale`` / ``log_rescale`` : built on the above

Implementation modules are imported for their side effects (registering
control paths); only the base mixin class is exported.
"""

from ._array_sum import *
from ._array_extrema import *
from ._array_log_sum_exp import *
from ._array_dot import *
from ._base import ArrayMixinReduction

__all__ = [
    ArrayMixinReduction.__name__,
]
