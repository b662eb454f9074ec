"""
Array control-path manager for layout-specific dispatch.

This module defines the shared control-path manager used to register and
resolve layout-specific implementations of array methods.

The manager is created by specializing the generic ``create_path_builder``
utility with the state attribute name ``"layout"``. Method dispatch is
therefore performed on the runtime value of ``self.layout``, which is derived
from cached header metadata (``Layout.FLAT`` for 1-D arrays,
``Layout.STRIDED`` otherwise).

Typical usage
-------------
::

    @array_control_path_manager(ArrayMixin, ArrayMixin.op, Layout.FLAT)
    def op_flat(self, ...): ...

    @array_control_path_manager(ArrayMixin, ArrayMixin.op, Layout.STRIDED)
    def op_strided(self, ...): ...

Calling ``F64Array.op(...)`` then runs the implementation whose registered
layout matches ``self.layout``.
"""

from ...domain.utils._control_path import create_path_builder

array_control_path_manager = create_path_builder("layout")
