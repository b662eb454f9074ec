"""
Arithmetic mixin defining elementwise array operators.

This module declares :class:`ArrayMixinArithmetic`, the mixin that specifies
the public API and semantics of elementwise arithmetic on arrays.

Only ``_binary_in_place`` carries numerical work; its concrete flat and
strided implementations are registered via the control-path dispatch
mechanism (see ``_array_arithmetic``). Every public method is expressed in
terms of it:

- ``add_assign`` / ``sub_assign`` / ``mul_assign`` / ``div_assign`` /
  ``log_add_exp_assign`` update the receiver in place;
- ``add`` / ``sub`` / ``mul`` / ``div`` / ``log_add_exp`` are
  copy-then-assign;
- the Python operators are thin aliases.

Operands
--------
The other operand is either an array of *exactly* the same shape (no
broadcasting across differing shapes) or a real scalar, which is applied to
every element.
"""

from __future__ import annotations

from abc import ABC
from numbers import Real
from typing import Optional, Union

from .....domain._array import IF64Array

Number = Union[int, float]
Operand = Union[IF64Array, Number]


class ArrayMixinArithmetic(ABC):
    """
    Abstract mixin defining elementwise arithmetic operations for arrays.

    Notes
    -----
    - In-place variants mutate the shared buffer; the change is visible
      through every view of the same elements.
    - Array operands of a different shape raise ``ShapeMismatchError``
      naming both shapes.
    """

    def _binary_in_place(self: IF64Array, op: str, other: Operand) -> None:
        """
        Apply ``self = op(self, other)`` elementwise.

        Parameters
        ----------
        op : str
            One of ``"add"``, ``"sub"``, ``"mul"``, ``"div"``,
            ``"log_add_exp"``.
        other : IF64Array or Number
            Same-shape array or scalar.
        """

    def _check_operand(self: IF64Array, other: object) -> bool:
        if isinstance(other, type(self)):
            return True
        if isinstance(other, Real):
            return True
        raise TypeError(
            f"unsupported operand type {type(other).__name__!r}; "
            f"expected {type(self).__name__} or a real number"
        )

    # ----------------------------
    # In-place
    # ----------------------------
    def add_assign(self: IF64Array, other: Operand) -> None:
        """``self += other`` elementwise."""
        self._check_operand(other)
        self._binary_in_place("add", other)

    def sub_assign(self: IF64Array, other: Operand) -> None:
        """``self -= other`` elementwise."""
        self._check_operand(other)
        self._binary_in_place("sub", other)

    def mul_assign(self: IF64Array, other: Operand) -> None:
        """``self *= other`` elementwise."""
        self._check_operand(other)
        self._binary_in_place("mul", other)

    def div_assign(self: IF64Array, other: Operand) -> None:
        """``self /= other`` elementwise (IEEE semantics for division by zero)."""
        self._check_operand(other)
        self._binary_in_place("div", other)

    def log_add_exp_assign(self: IF64Array, other: IF64Array) -> None:
        """
        Compute, elementwise and in place,

            ``self[i] = log(exp(self[i]) + exp(other[i]))``

        in a numerically stable way (the larger operand is factored out).
        """
        if not isinstance(other, type(self)):
            raise TypeError(f"log_add_exp requires an array, got {type(other).__name__!r}")
        self._binary_in_place("log_add_exp", other)

    # ----------------------------
    # Copying
    # ----------------------------
    def add(self: IF64Array, other: Operand) -> IF64Array:
        """Return ``self + other`` as a new dense array."""
        out = self.copy()
        out.add_assign(other)
        return out

    def sub(self: IF64Array, other: Operand) -> IF64Array:
        """Return ``self - other`` as a new dense array."""
        out = self.copy()
        out.sub_assign(other)
        return out

    def mul(self: IF64Array, other: Operand) -> IF64Array:
        """Return ``self * other`` as a new dense array."""
        out = self.copy()
        out.mul_assign(other)
        return out

    def div(self: IF64Array, other: Operand) -> IF64Array:
        """Return ``self / other`` as a new dense array."""
        out = self.copy()
        out.div_assign(other)
        return out

    def log_add_exp(
        self: IF64Array, other: IF64Array, out: Optional[IF64Array] = None
    ) -> IF64Array:
        """
        Return ``log(exp(self) + exp(other))`` elementwise.

        Parameters
        ----------
        other : IF64Array
            Array of the same shape.
        out : IF64Array, optional
            Destination of the same shape, of any layout. When omitted a new
            dense array is allocated.

        Returns
        -------
        IF64Array
            ``out``, or the new array.

        Raises
        ------
        ShapeMismatchError
            If ``other`` or ``out`` has a different shape.
        """
        if not isinstance(other, type(self)):
            raise TypeError(f"log_add_exp requires an array, got {type(other).__name__!r}")
        if out is None:
            out = self.copy()
        else:
            self.check_shape(out)
            self.check_shape(other)
            # writing self into out must not clobber other
            if other.overlaps(out):
                other = other.copy()
            self.copy_to(out)
        out.log_add_exp_assign(other)
        return out

    # ----------------------------
    # Operator sugar
    # ----------------------------
    def __add__(self, other):
        if not isinstance(other, (type(self), Real)):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if not isinstance(other, Real):
            return NotImplemented
        return self.add(other)

    def __iadd__(self, other):
        if not isinstance(other, (type(self), Real)):
            return NotImplemented
        self.add_assign(other)
        return self

    def __sub__(self, other):
        if not isinstance(other, (type(self), Real)):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        if not isinstance(other, Real):
            return NotImplemented
        out = self.neg()
        out.add_assign(other)
        return out

    def __isub__(self, other):
        if not isinstance(other, (type(self), Real)):
            return NotImplemented
        self.sub_assign(other)
        return self

    def __mul__(self, other):
        if not isinstance(other, (type(self), Real)):
            return NotImplemented
        return self.mul(other)

    def __rmul__(self, other):
        if not isinstance(other, Real):
            return NotImplemented
        return self.mul(other)

    def __imul__(self, other):
        if not isinstance(other, (type(self), Real)):
            return NotImplemented
        self.mul_assign(other)
        return self

    def __truediv__(self, other):
        if not isinstance(other, (type(self), Real)):
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other):
        if not isinstance(other, Real):
            return NotImplemented
        out = type(self).full(*self.shape, init=float(other))
        out.div_assign(self)
        return out

    def __itruediv__(self, other):
        if not isinstance(other, (type(self), Real)):
            return NotImplemented
        self.div_assign(other)
        return self

    def __neg__(self):
        return self.neg()

    def __pos__(self):
        return self
