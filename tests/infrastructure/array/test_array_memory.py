import unittest

import numpy as np

from stridearray import F64Array, _I
from stridearray.domain import (
    OutOfBoundsError,
    ShapeMismatchError,
    UnsupportedOperationError,
)


class TestCopy(unittest.TestCase):
    def setUp(self) -> None:
        self.ref = np.arange(12, dtype=np.float64).reshape(3, 4)
        self.a = F64Array.from_numpy(self.ref)

    def test_copy_of_strided_view_is_dense_and_equal(self) -> None:
        t = self.a.T
        c = t.copy()
        self.assertTrue(c.is_dense)
        self.assertTrue(c.is_flattenable)
        self.assertEqual(c.shape, t.shape)
        self.assertEqual(c, t)
        self.assertIsNot(c.data, t.data)

    def test_copy_is_independent(self) -> None:
        c = self.a.copy()
        c.fill(0.0)
        np.testing.assert_array_equal(self.a.to_numpy(), self.ref)

    def test_copy_to_across_layouts(self) -> None:
        dst = F64Array.zeros(4, 3)
        self.a.T.copy_to(dst)
        np.testing.assert_array_equal(dst.to_numpy(), self.ref.T)

        back = F64Array.zeros(3, 4).T
        dst.copy_to(back)
        np.testing.assert_array_equal(back.to_numpy(), self.ref.T)

    def test_copy_to_own_transpose(self) -> None:
        ref = np.arange(9, dtype=np.float64).reshape(3, 3)
        m = F64Array.from_numpy(ref)
        m.T.copy_to(m)
        np.testing.assert_array_equal(m.to_numpy(), ref.T)

    def test_copy_to_shifted_run(self) -> None:
        a = F64Array.of(0, 1, 2, 3, 4)
        a.slice(0, 4).copy_to(a.slice(1))
        self.assertEqual(a.to_list(), [0.0, 0.0, 1.0, 2.0, 3.0])

    def test_overlaps(self) -> None:
        a = F64Array.of(0, 1, 2, 3)
        self.assertTrue(a.slice(0, 3).overlaps(a.slice(2)))
        self.assertFalse(a.slice(0, 2).overlaps(a.slice(2)))
        self.assertFalse(a.overlaps(F64Array.of(0, 1, 2, 3)))
        buf = np.zeros(4)
        self.assertTrue(F64Array.wrap(buf).overlaps(F64Array.wrap(buf[:])))

    def test_copy_to_shape_mismatch(self) -> None:
        with self.assertRaises(ShapeMismatchError):
            self.a.copy_to(F64Array.zeros(4, 3))
        with self.assertRaises(ShapeMismatchError):
            F64Array.of(1, 2).copy_to(F64Array.zeros(3))


class TestFillAndSwap(unittest.TestCase):
    def test_fill_strided_column(self) -> None:
        m = F64Array.zeros(3, 4)
        m.V[_I, 1].fill(3.0)
        expected = np.zeros((3, 4))
        expected[:, 1] = 3.0
        np.testing.assert_array_equal(m.to_numpy(), expected)

    def test_fill_non_flattenable_view(self) -> None:
        m = F64Array.zeros(4, 4)
        m.slice(0, -1, 2, axis=0).slice(1, 3, axis=1).fill(1.0)
        expected = np.zeros((4, 4))
        expected[::2, 1:3] = 1.0
        np.testing.assert_array_equal(m.to_numpy(), expected)

    def test_swap(self) -> None:
        v = F64Array.of(1, 2, 3)
        v.swap(0, 2)
        self.assertEqual(v.to_list(), [3.0, 2.0, 1.0])

    def test_swap_on_strided_run(self) -> None:
        a = F64Array.of(*range(6))
        a.slice(0, -1, 2).swap(0, 1)
        self.assertEqual(a.to_list(), [2.0, 1.0, 0.0, 3.0, 4.0, 5.0])

    def test_swap_errors(self) -> None:
        with self.assertRaises(OutOfBoundsError):
            F64Array.of(1, 2).swap(0, 2)
        with self.assertRaises(UnsupportedOperationError):
            F64Array.zeros(2, 2).swap(0, 1)


class TestBufferAccess(unittest.TestCase):
    def test_dense_buffer(self) -> None:
        a = F64Array.of(1, 2, 3, 4)
        data, offset, size = a.slice(1).dense_buffer()
        self.assertIs(data, a.data)
        self.assertEqual((offset, size), (1, 3))

    def test_dense_buffer_requires_unit_stride(self) -> None:
        with self.assertRaises(UnsupportedOperationError):
            F64Array.of(1, 2, 3, 4).slice(0, -1, 2).dense_buffer()
        with self.assertRaises(UnsupportedOperationError):
            F64Array.zeros(2, 2).dense_buffer()

    def test_to_numpy_and_to_list(self) -> None:
        m = F64Array.from_function(2, 2, block=lambda r, c: r - c)
        arr = m.T.to_numpy()
        self.assertEqual(arr.shape, (2, 2))
        self.assertTrue(arr.flags.c_contiguous)
        self.assertEqual(m.T.to_list(), [[0.0, 1.0], [-1.0, 0.0]])

    def test_contains(self) -> None:
        m = F64Array.from_function(3, 4, block=lambda r, c: 10 * r + c)
        self.assertIn(12.0, m.T)
        self.assertNotIn(99.0, m)

    def test_wrap_shares_buffer(self) -> None:
        buf = np.arange(5, dtype=np.float64)
        w = F64Array.wrap(buf, 1, 3)
        w.fill(0.0)
        np.testing.assert_array_equal(buf, [0.0, 0.0, 0.0, 0.0, 4.0])
        self.assertEqual(F64Array.wrap(buf, 2).shape, (3,))

    def test_from_numpy_copies(self) -> None:
        src = np.ones((2, 2))
        a = F64Array.from_numpy(src)
        src[0, 0] = 5.0
        self.assertEqual(a.ix[0, 0], 1.0)


if __name__ == "__main__":
    unittest.main()
