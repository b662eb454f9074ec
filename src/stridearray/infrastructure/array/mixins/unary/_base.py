"""
Unary mixin defining elementwise transcendental maps.

This module declares :class:`ArrayMixinUnary`. The in-place maps
(``exp_in_place``, ``expm1_in_place``, ``log_in_place``,
``log1p_in_place``) are built on ``_unary_in_place``, whose flat and strided
implementations are registered through the control-path manager (see
``_array_unary``). Each map has a copying variant that clones the receiver
first and returns the clone.

Domain errors follow IEEE semantics silently: ``log(-1.0)`` is NaN and
``log(0.0)`` is ``-inf``.
"""

from __future__ import annotations

from abc import ABC

from .....domain._array import IF64Array


class ArrayMixinUnary(ABC):
    """
    Abstract mixin defining elementwise unary operations for arrays.
    """

    def _unary_in_place(self: IF64Array, op: str) -> None:
        """
        Apply a named elementwise map to every element, in place.

        Parameters
        ----------
        op : str
            One of ``"exp"``, ``"expm1"``, ``"log"``, ``"log1p"``, ``"neg"``.
        """

    def exp_in_place(self: IF64Array) -> None:
        """Replace each element ``x`` with ``exp(x)``."""
        self._unary_in_place("exp")

    def expm1_in_place(self: IF64Array) -> None:
        """Replace each element ``x`` with ``exp(x) - 1`` (accurate near 0)."""
        self._unary_in_place("expm1")

    def log_in_place(self: IF64Array) -> None:
        """Replace each element ``x`` with ``log(x)``."""
        self._unary_in_place("log")

    def log1p_in_place(self: IF64Array) -> None:
        """Replace each element ``x`` with ``log(1 + x)`` (accurate near 0)."""
        self._unary_in_place("log1p")

    def exp(self: IF64Array) -> IF64Array:
        out = self.copy()
        out.exp_in_place()
        return out

    def expm1(self: IF64Array) -> IF64Array:
        out = self.copy()
        out.expm1_in_place()
        return out

    def log(self: IF64Array) -> IF64Array:
        out = self.copy()
        out.log_in_place()
        return out

    def log1p(self: IF64Array) -> IF64Array:
        out = self.copy()
        out.log1p_in_place()
        return out

    def neg(self: IF64Array) -> IF64Array:
        """Return ``-self`` as a new dense array."""
        out = self.copy()
        out._unary_in_place("neg")
        return out
