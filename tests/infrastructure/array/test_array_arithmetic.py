import math
import unittest

import numpy as np

from stridearray import F64Array, _I
from stridearray.domain import ShapeMismatchError


class TestBinaryOperators(unittest.TestCase):
    def setUp(self) -> None:
        self.ref_a = np.arange(12, dtype=np.float64).reshape(3, 4)
        self.ref_b = np.arange(12, dtype=np.float64).reshape(4, 3).T + 1.0
        self.a = F64Array.from_numpy(self.ref_a)
        # same shape as a, column-major strides
        self.b = F64Array.from_numpy(self.ref_b.T).T

    def test_operands_have_differing_strides(self) -> None:
        self.assertEqual(self.a.shape, self.b.shape)
        self.assertNotEqual(self.a.strides, self.b.strides)

    def test_copying_ops_match_dense_results(self) -> None:
        cases = [
            (self.a.add(self.b), self.ref_a + self.ref_b),
            (self.a.sub(self.b), self.ref_a - self.ref_b),
            (self.a.mul(self.b), self.ref_a * self.ref_b),
            (self.a.div(self.b), self.ref_a / self.ref_b),
            (self.b.sub(self.a), self.ref_b - self.ref_a),
        ]
        for out, expected in cases:
            self.assertTrue(out.is_dense)
            np.testing.assert_allclose(out.to_numpy(), expected, rtol=0, atol=0)

    def test_copying_ops_leave_operands_untouched(self) -> None:
        self.a.add(self.b)
        np.testing.assert_array_equal(self.a.to_numpy(), self.ref_a)

    def test_in_place_ops_into_strided_receiver(self) -> None:
        self.b.add_assign(self.a)
        np.testing.assert_array_equal(self.b.to_numpy(), self.ref_b + self.ref_a)
        self.b.mul_assign(2.0)
        np.testing.assert_array_equal(self.b.to_numpy(), 2.0 * (self.ref_b + self.ref_a))

    def test_python_operators(self) -> None:
        np.testing.assert_array_equal((self.a + self.b).to_numpy(), self.ref_a + self.ref_b)
        np.testing.assert_array_equal((self.a - 1).to_numpy(), self.ref_a - 1)
        np.testing.assert_array_equal((self.a * 3).to_numpy(), self.ref_a * 3)
        np.testing.assert_array_equal((self.b / 2).to_numpy(), self.ref_b / 2)
        np.testing.assert_array_equal((1 + self.a).to_numpy(), 1 + self.ref_a)
        np.testing.assert_array_equal((10 - self.a).to_numpy(), 10 - self.ref_a)
        np.testing.assert_array_equal((3 * self.a).to_numpy(), 3 * self.ref_a)
        np.testing.assert_allclose((6 / self.b).to_numpy(), 6 / self.ref_b)
        np.testing.assert_array_equal((-self.b).to_numpy(), -self.ref_b)
        self.assertIs(+self.a, self.a)

    def test_augmented_assignment_keeps_identity(self) -> None:
        c = self.a.copy()
        before = c
        c += self.b
        c -= 1.0
        c *= 2
        c /= self.b
        self.assertIs(c, before)
        expected = (self.ref_a + self.ref_b - 1.0) * 2 / self.ref_b
        np.testing.assert_allclose(c.to_numpy(), expected)

    def test_scalar_update_through_view(self) -> None:
        m = F64Array.from_numpy(self.ref_a)
        col = m.V[_I, 1]
        col += 100.0
        expected = self.ref_a.copy()
        expected[:, 1] += 100.0
        np.testing.assert_array_equal(m.to_numpy(), expected)

    def test_division_by_zero_follows_ieee(self) -> None:
        out = F64Array.of(1.0, -1.0, 0.0).div(0.0).to_list()
        self.assertEqual(out[0], math.inf)
        self.assertEqual(out[1], -math.inf)
        self.assertTrue(math.isnan(out[2]))

    def test_shape_mismatch(self) -> None:
        with self.assertRaises(ShapeMismatchError):
            self.a + F64Array.zeros(4, 3)

    def test_unsupported_operand_type(self) -> None:
        with self.assertRaises(TypeError):
            self.a.add_assign("x")
        with self.assertRaises(TypeError):
            self.a + "x"
        with self.assertRaises(TypeError):
            self.a.log_add_exp_assign(1.0)


class TestAliasedOperands(unittest.TestCase):
    def test_add_own_transpose(self) -> None:
        ref = np.array([[0.0, 1.0], [2.0, 3.0]])
        m = F64Array.from_numpy(ref)
        m.add_assign(m.T)
        np.testing.assert_array_equal(m.to_numpy(), ref + ref.T)

    def test_sub_own_transpose_3d(self) -> None:
        ref = np.arange(27, dtype=np.float64).reshape(3, 3, 3)
        a = F64Array.from_numpy(ref)
        a.sub_assign(a.T)
        np.testing.assert_array_equal(a.to_numpy(), ref - ref.T)

    def test_shifted_flat_runs(self) -> None:
        ref = np.arange(5, dtype=np.float64)
        a = F64Array.from_numpy(ref)
        a.slice(1).add_assign(a.slice(0, 4))
        np.testing.assert_array_equal(a.to_numpy(), [0.0, 1.0, 3.0, 5.0, 7.0])

    def test_self_operand(self) -> None:
        m = F64Array.from_numpy(np.arange(6, dtype=np.float64).reshape(2, 3)).T
        m.mul_assign(m)
        np.testing.assert_array_equal(m.to_numpy(), np.arange(6.0).reshape(2, 3).T ** 2)


class TestLogAddExp(unittest.TestCase):
    def test_stable_for_large_inputs(self) -> None:
        x = F64Array.of(0.0, 1000.0, -1000.0)
        y = F64Array.of(0.0, 1000.0, 0.0)
        out = x.log_add_exp(y).to_list()
        self.assertAlmostEqual(out[0], math.log(2.0))
        self.assertAlmostEqual(out[1], 1000.0 + math.log(2.0))
        self.assertAlmostEqual(out[2], 0.0)
        self.assertEqual(x.to_list(), [0.0, 1000.0, -1000.0])

    def test_into_destination(self) -> None:
        ref = np.arange(6, dtype=np.float64).reshape(2, 3)
        x = F64Array.from_numpy(ref)
        y = F64Array.full(2, 3, init=1.0)
        dst = F64Array.zeros(3, 2).T
        self.assertIs(x.log_add_exp(y, out=dst), dst)
        np.testing.assert_allclose(dst.to_numpy(), np.logaddexp(ref, 1.0))
        np.testing.assert_array_equal(x.to_numpy(), ref)

    def test_destination_aliasing_other(self) -> None:
        ref = np.arange(4, dtype=np.float64).reshape(2, 2)
        x = F64Array.from_numpy(ref)
        y = F64Array.from_numpy(ref.T)
        x.log_add_exp(y, out=y)
        np.testing.assert_allclose(y.to_numpy(), np.logaddexp(ref, ref.T))

    def test_destination_shape_mismatch(self) -> None:
        x = F64Array.zeros(2, 3)
        with self.assertRaises(ShapeMismatchError):
            x.log_add_exp(x.copy(), out=F64Array.zeros(3, 2))

    def test_strided_in_place(self) -> None:
        ref = np.arange(6, dtype=np.float64).reshape(2, 3)
        x = F64Array.from_numpy(ref).T
        y = F64Array.from_numpy(ref.T)
        x.log_add_exp_assign(y)
        np.testing.assert_allclose(x.to_numpy(), np.logaddexp(ref.T, ref.T))


class TestUnaryMaps(unittest.TestCase):
    def setUp(self) -> None:
        self.ref = np.linspace(0.1, 2.0, 12).reshape(3, 4)

    def test_copying_maps_on_strided_view(self) -> None:
        t = F64Array.from_numpy(self.ref).T
        for name, fn in [("exp", np.exp), ("expm1", np.expm1), ("log", np.log), ("log1p", np.log1p)]:
            with self.subTest(op=name):
                out = getattr(t, name)()
                np.testing.assert_allclose(out.to_numpy(), fn(self.ref.T))
        np.testing.assert_array_equal(t.to_numpy(), self.ref.T)

    def test_in_place_maps(self) -> None:
        a = F64Array.from_numpy(self.ref)
        a.exp_in_place()
        a.log_in_place()
        np.testing.assert_allclose(a.to_numpy(), self.ref)
        a.expm1_in_place()
        a.log1p_in_place()
        np.testing.assert_allclose(a.to_numpy(), self.ref)

    def test_in_place_map_on_column_view(self) -> None:
        a = F64Array.from_numpy(self.ref)
        a.V[_I, 0].exp_in_place()
        expected = self.ref.copy()
        expected[:, 0] = np.exp(expected[:, 0])
        np.testing.assert_allclose(a.to_numpy(), expected)

    def test_log_of_zero_is_negative_infinity(self) -> None:
        self.assertEqual(F64Array.of(0.0).log().to_list(), [-math.inf])

    def test_neg(self) -> None:
        a = F64Array.of(1.0, -2.0)
        self.assertEqual(a.neg().to_list(), [-1.0, 2.0])
        self.assertEqual(a.to_list(), [1.0, -2.0])


if __name__ == "__main__":
    unittest.main()
