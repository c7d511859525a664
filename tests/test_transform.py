import unittest
import copy
import pickle
import numpy as np
from blockframe import AffineTransform, CombinedTransform, Identity
from blockframe.geometry import axis_rotation

NORTH = np.array([0.0, 0.0, -1.0])
EAST = np.array([1.0, 0.0, 0.0])
SOUTH = np.array([0.0, 0.0, 1.0])
WEST = np.array([-1.0, 0.0, 0.0])
UP = np.array([0.0, 1.0, 0.0])


class TestAffineTransform(unittest.TestCase):
    def test_identity_apply(self):
        I = AffineTransform.identity()
        for p in (np.array([1.0, 2.0, 3.0]), [4, 5, 6], (0, 0, 0)):
            np.testing.assert_allclose(I.apply(p), np.asarray(p, dtype=float), atol=1e-12)
        self.assertTrue(I.is_identity())

    def test_rotate_y_turns_north_to_east(self):
        r = AffineTransform.rotate_y(90)
        np.testing.assert_array_equal(r.apply(NORTH), EAST)
        np.testing.assert_array_equal(r.apply(EAST), SOUTH)
        # negative angle goes the other way
        np.testing.assert_array_equal(AffineTransform.rotate_y(-90).apply(NORTH), WEST)

    def test_right_angles_are_exact(self):
        for theta in (90, 180, 270, -90):
            R = axis_rotation(1, theta)
            self.assertTrue(np.all(np.isin(R, [-1.0, 0.0, 1.0])))

    def test_rotate_x_and_z_are_right_handed(self):
        np.testing.assert_array_equal(AffineTransform.rotate_x(90).apply(UP), SOUTH)
        np.testing.assert_array_equal(AffineTransform.rotate_z(90).apply(EAST), UP)

    def test_radians(self):
        a = AffineTransform.rotate_y(np.pi / 2, degrees=False)
        b = AffineTransform.rotate_y(90)
        self.assertEqual(a, b)

    def test_translation(self):
        t = AffineTransform.from_translation([1, -2, 3])
        np.testing.assert_allclose(t.apply([5, 5, 5]), [6, 3, 8], atol=1e-12)
        np.testing.assert_allclose(t.transform_vector([5, 5, 5]), [5, 5, 5], atol=1e-12)
        np.testing.assert_allclose(t.translation, [1, -2, 3])

    def test_transform_direction_ignores_translation(self):
        t = AffineTransform.from_values(translation=[10, 5, 3], rotation=axis_rotation(1, 90))
        np.testing.assert_allclose(t.transform_direction(NORTH), EAST, atol=1e-12)

    def test_transform_direction_normalizes(self):
        s = AffineTransform.from_scale([2, 3, 4])
        np.testing.assert_allclose(s.transform_direction([0, 1, 0]), UP, atol=1e-12)
        np.testing.assert_allclose(np.linalg.norm(s.transform_direction([1, 1, 1])), 1.0)

    def test_mirror(self):
        m = AffineTransform.mirror("x")
        np.testing.assert_array_equal(m.apply(EAST), WEST)
        np.testing.assert_array_equal(m.apply(UP), UP)
        self.assertLess(m.determinant(), 0)
        self.assertEqual(m.inverse(), m)
        with self.assertRaises(ValueError):
            AffineTransform.mirror("w")

    def test_inverse_round_trip(self):
        t = AffineTransform.from_values(
            translation=[1, 2, 3], rotation=axis_rotation(0, 30), scale=[2, 2, 2])
        p = np.array([0.5, -4.0, 7.0])
        np.testing.assert_allclose(t.inverse().apply(t.apply(p)), p, atol=1e-9)
        d = np.array([1.0, 2.0, -2.0]) / 3.0
        np.testing.assert_allclose(
            t.inverse().transform_direction(t.transform_direction(d)), d, atol=1e-9)

    def test_singular_inverse_raises(self):
        with self.assertRaises(ValueError):
            AffineTransform.from_scale([1, 0, 1]).inverse()

    def test_invalid_shapes(self):
        with self.assertRaises(ValueError):
            AffineTransform(np.eye(3))
        with self.assertRaises(ValueError):
            AffineTransform.from_values(scale=[1, 2])
        with self.assertRaises(ValueError):
            AffineTransform.from_values(rotation=np.eye(4))
        with self.assertRaises(ValueError):
            AffineTransform.from_values(translation=[1, 2])

    def test_combine_order(self):
        rot = AffineTransform.rotate_y(90)
        move = AffineTransform.from_translation([10, 0, 0])
        # rotate first, then translate
        both = rot.combine(move)
        np.testing.assert_allclose(both.apply(NORTH), EAST + [10, 0, 0], atol=1e-12)
        # matmul applies the right-hand side first
        np.testing.assert_allclose((move @ rot).apply(NORTH), both.apply(NORTH), atol=1e-12)

    def test_copy_and_pickle(self):
        t = AffineTransform.rotate_y(90).combine(AffineTransform.from_translation([1, 2, 3]))
        c = copy.copy(t)
        self.assertEqual(t, c)
        self.assertIsNot(t.matrix, c.matrix)
        self.assertEqual(pickle.loads(pickle.dumps(t)), t)
        self.assertIn("matrix=", repr(t))

    def test_eq_needs_same_class(self):
        class Shifted(AffineTransform):
            pass
        self.assertNotEqual(AffineTransform.identity(), Shifted.identity())
        self.assertNotEqual(AffineTransform.identity(), Identity())
        self.assertFalse(AffineTransform.identity() == 123)
        self.assertEqual(AffineTransform.identity(), AffineTransform())

    def test_matrix_is_copied(self):
        m = np.eye(4)
        t = AffineTransform(m)
        m[0, 3] = 5.0
        np.testing.assert_allclose(t.translation, [0, 0, 0])


class TestIdentityAndCombined(unittest.TestCase):
    def test_identity(self):
        I = Identity()
        self.assertTrue(I.is_identity())
        self.assertIs(I.inverse(), I)
        np.testing.assert_array_equal(I.transform_direction([0, 0, -5]), NORTH)

    def test_identity_combine_is_skipped(self):
        r = AffineTransform.rotate_y(90)
        self.assertIs(Identity().combine(r), r)
        self.assertIs(r.combine(Identity()), r)

    def test_combined_chain(self):
        chain = CombinedTransform([AffineTransform.rotate_y(90), Identity(), AffineTransform.mirror("x")])
        np.testing.assert_allclose(chain.transform_direction(NORTH), WEST, atol=1e-12)
        inv = chain.inverse()
        self.assertIsInstance(inv, CombinedTransform)
        np.testing.assert_allclose(inv.transform_direction(WEST), NORTH, atol=1e-12)
        self.assertFalse(chain.is_identity())

    def test_combined_flattens(self):
        a = CombinedTransform([AffineTransform.rotate_y(90)])
        b = CombinedTransform([a, AffineTransform.rotate_y(90)])
        self.assertEqual(len(b.transforms), 2)
        c = b.combine(AffineTransform.mirror("z"))
        self.assertEqual(len(c.transforms), 3)
        self.assertIs(c.combine(Identity()), c)

    def test_combined_rejects_none(self):
        with self.assertRaises(ValueError):
            CombinedTransform([None])

    def test_combined_identity(self):
        self.assertTrue(CombinedTransform([Identity(), AffineTransform.identity()]).is_identity())


if __name__ == "__main__":
    unittest.main()
