import unittest

from stridearray import F64Array
from stridearray.domain import (
    InvalidConstructionError,
    NonFlattenableError,
    OutOfBoundsError,
    ShapeMismatchError,
    UnsupportedOperationError,
)


class TestErrorTypes(unittest.TestCase):
    def test_errors_subclass_builtin_exceptions(self) -> None:
        self.assertTrue(issubclass(ShapeMismatchError, ValueError))
        self.assertTrue(issubclass(InvalidConstructionError, ValueError))
        self.assertTrue(issubclass(OutOfBoundsError, IndexError))
        self.assertTrue(issubclass(UnsupportedOperationError, RuntimeError))
        self.assertTrue(issubclass(NonFlattenableError, RuntimeError))

    def test_shape_mismatch_names_both_shapes(self) -> None:
        err = ShapeMismatchError((2, 3), (3, 2), detail="copy_to")
        msg = str(err)
        self.assertIn("(2, 3)", msg)
        self.assertIn("(3, 2)", msg)
        self.assertIn("copy_to", msg)
        self.assertEqual(err.shape_a, (2, 3))
        self.assertEqual(err.shape_b, (3, 2))

    def test_out_of_bounds_names_index_and_shape(self) -> None:
        err = OutOfBoundsError((1, 7), (2, 3))
        self.assertIn("(1, 7)", str(err))
        self.assertIn("(2, 3)", str(err))
        self.assertEqual(err.index, (1, 7))

    def test_out_of_bounds_for_axis(self) -> None:
        err = OutOfBoundsError.for_axis(2, (3, 4))
        self.assertIsInstance(err, OutOfBoundsError)
        self.assertIn("Axis 2", str(err))
        self.assertIn("(3, 4)", str(err))

    def test_unsupported_operation_message(self) -> None:
        err = UnsupportedOperationError("arg_max", (2, 2))
        self.assertIn("arg_max", str(err))
        self.assertIn("(2, 2)", str(err))
        self.assertEqual(err.op, "arg_max")

    def test_non_flattenable_suggests_copy(self) -> None:
        err = NonFlattenableError("flatten", (4, 3), (1, 4))
        self.assertIn("copy()", str(err))
        self.assertEqual(err.strides, (1, 4))


class TestErrorsRaisedByArrays(unittest.TestCase):
    def test_binary_op_shape_mismatch(self) -> None:
        a = F64Array.zeros(2, 3)
        b = F64Array.zeros(3, 2)
        with self.assertRaises(ShapeMismatchError) as ctx:
            a.add_assign(b)
        self.assertIn("(2, 3)", str(ctx.exception))
        self.assertIn("(3, 2)", str(ctx.exception))

    def test_flat_binary_op_shape_mismatch(self) -> None:
        with self.assertRaises(ShapeMismatchError):
            F64Array.of(1, 2, 3) + F64Array.of(1, 2)

    def test_bad_axis(self) -> None:
        with self.assertRaises(OutOfBoundsError):
            F64Array.zeros(2, 3).view(0, axis=2)

    def test_failed_binary_op_leaves_receiver_untouched(self) -> None:
        a = F64Array.full(2, 2, init=1.0)
        with self.assertRaises(ShapeMismatchError):
            a.mul_assign(F64Array.zeros(2, 3))
        self.assertEqual(a.to_list(), [[1.0, 1.0], [1.0, 1.0]])


if __name__ == "__main__":
    unittest.main()
