import unittest

import numpy as np

from stridearray import F64Array
from stridearray.domain import InvalidConstructionError, ShapeMismatchError
from stridearray.infrastructure.array._unroll import (
    UnrollInfo,
    compute_unroll,
    prefix_unroll,
)


def _arange(*shape: int) -> F64Array:
    n = int(np.prod(shape))
    return F64Array.from_numpy(np.arange(n, dtype=np.float64).reshape(shape))


class TestComputeUnroll(unittest.TestCase):
    def test_dense_array_unrolls_fully(self) -> None:
        self.assertEqual(compute_unroll((12, 4, 1), (2, 3, 4)), UnrollInfo(3, 1, 24))

    def test_transpose_unrolls_first_axis_only(self) -> None:
        self.assertEqual(compute_unroll((1, 4, 12), (4, 3, 2)), UnrollInfo(1, 1, 4))

    def test_column_slice_breaks_after_first_axis(self) -> None:
        self.assertEqual(compute_unroll((4, 1), (3, 2)), UnrollInfo(1, 4, 3))

    def test_stepped_inner_axis_stays_flattenable(self) -> None:
        # every other column of a (3, 4) matrix: strides (4, 2), shape (3, 2)
        self.assertEqual(compute_unroll((4, 2), (3, 2)), UnrollInfo(2, 2, 6))

    def test_size_one_axes_never_break(self) -> None:
        self.assertEqual(compute_unroll((100, 2), (1, 3)), UnrollInfo(2, 2, 3))
        self.assertEqual(compute_unroll((2, 50, 1), (3, 1, 2)), UnrollInfo(3, 1, 6))

    def test_all_size_one_prefix_uses_innermost_stride(self) -> None:
        self.assertEqual(compute_unroll((5, 7), (1, 1)), UnrollInfo(2, 7, 1))

    def test_negative_strides_form_a_progression(self) -> None:
        self.assertEqual(compute_unroll((-3, -1), (2, 3)), UnrollInfo(2, -1, 6))

    def test_prefix_unroll(self) -> None:
        self.assertEqual(prefix_unroll((12, 4, 1), (2, 3, 4), 2), UnrollInfo(2, 4, 6))
        self.assertEqual(prefix_unroll((12, 4, 1), (2, 3, 4), 1), UnrollInfo(1, 12, 2))


class TestArrayUnrollMetadata(unittest.TestCase):
    def test_dense_matrix(self) -> None:
        m = F64Array.zeros(3, 4)
        self.assertEqual((m.unroll_dim, m.unroll_stride, m.unroll_size), (2, 1, 12))
        self.assertTrue(m.is_flattenable)
        self.assertTrue(m.is_dense)

    def test_transposed_matrix(self) -> None:
        t = F64Array.zeros(3, 4).T
        self.assertEqual(t.unroll_dim, 1)
        self.assertFalse(t.is_flattenable)
        self.assertFalse(t.is_dense)

    def test_row_stepped_matrix_is_not_flattenable(self) -> None:
        rows = F64Array.zeros(3, 4).slice(0, -1, 2, axis=0)
        self.assertEqual(rows.shape, (2, 4))
        self.assertFalse(rows.is_flattenable)

    def test_column_stepped_matrix_is_flattenable_but_not_dense(self) -> None:
        cols = F64Array.zeros(3, 4).slice(0, -1, 2, axis=1)
        self.assertTrue(cols.is_flattenable)
        self.assertFalse(cols.is_dense)
        self.assertEqual(cols.unroll_stride, 2)


class TestUnrollToFlat(unittest.TestCase):
    def test_flattenable_array_yields_one_run(self) -> None:
        a = _arange(2, 3, 4)
        runs = list(a.unroll_to_flat())
        self.assertEqual(len(runs), 1)
        self.assertEqual(runs[0].shape, (24,))

    def test_runs_of_transpose_follow_row_major_order(self) -> None:
        ref = np.arange(12, dtype=np.float64).reshape(3, 4)
        t = F64Array.from_numpy(ref).T
        runs = list(t.unroll_to_flat())
        self.assertEqual(len(runs), 4)
        for run in runs:
            self.assertEqual(run.ndim, 1)
        values = np.concatenate([r.to_numpy() for r in runs])
        np.testing.assert_array_equal(values, ref.T.ravel())

    def test_runs_cover_every_element_once(self) -> None:
        ref = np.arange(60, dtype=np.float64).reshape(3, 4, 5)
        views = [
            F64Array.from_numpy(ref).T,
            F64Array.from_numpy(ref).slice(1, 4, 2, axis=1),
            F64Array.from_numpy(ref).reversed(axis=2).slice(0, 3, axis=0),
        ]
        expected = [
            ref.T,
            ref[:, 1:4:2, :],
            ref[:, :, ::-1][0:3],
        ]
        for v, e in zip(views, expected):
            values = np.concatenate([r.to_numpy() for r in v.unroll_to_flat()])
            np.testing.assert_array_equal(values, e.ravel())

    def test_unroll_once_splits_first_axes(self) -> None:
        a = _arange(2, 3, 4)
        subs = list(a.unroll_once(1))
        self.assertEqual(len(subs), 2)
        self.assertEqual(subs[1].shape, (3, 4))
        self.assertEqual(subs[1].offset, 12)
        subs = list(a.unroll_once(2))
        self.assertEqual(len(subs), 6)
        self.assertEqual(subs[5].to_list(), [20.0, 21.0, 22.0, 23.0])

    def test_unroll_once_beyond_unroll_dim_fails(self) -> None:
        t = _arange(3, 4).T
        with self.assertRaises(InvalidConstructionError):
            list(t.unroll_once(2))


class TestCommonUnrollToFlat(unittest.TestCase):
    def test_pairs_cover_same_positions(self) -> None:
        a = _arange(3, 4)
        b = a.T.copy().T  # same values, column-major strides
        self.assertEqual(b.strides, (1, 3))
        pairs = list(a.common_unroll_to_flat(b))
        self.assertEqual(len(pairs), 3)
        for x, y in pairs:
            self.assertEqual(x.shape, y.shape)
            np.testing.assert_array_equal(x.to_numpy(), y.to_numpy())

    def test_both_flattenable_gives_single_pair(self) -> None:
        a = _arange(2, 3)
        b = F64Array.zeros(2, 3)
        self.assertEqual(len(list(a.common_unroll_to_flat(b))), 1)

    def test_shape_mismatch_raises_immediately(self) -> None:
        with self.assertRaises(ShapeMismatchError):
            _arange(2, 3).common_unroll_to_flat(_arange(3, 2))


if __name__ == "__main__":
    unittest.main()
