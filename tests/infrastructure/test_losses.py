import unittest

import numpy as np

from keyml.domain._errors import DimensionMismatchError
from keyml.infrastructure._losses import CrossEntropy, MeanSquaredError


class TestMeanSquaredError(unittest.TestCase):
    def setUp(self):
        self.loss = MeanSquaredError()

    def test_compute(self):
        y_true = np.array([1.0, 2.0, 3.0])
        y_pred = np.array([1.0, 1.0, 5.0])
        # (0 + 1 + 4) / 3
        self.assertAlmostEqual(self.loss.compute(y_true, y_pred), 5.0 / 3.0, places=12)

    def test_compute_zero_for_perfect_prediction(self):
        y = np.array([0.5, -2.0, 7.0])
        self.assertEqual(self.loss.compute(y, y), 0.0)

    def test_gradient(self):
        y_true = np.array([1.0, 2.0, 3.0, 4.0])
        y_pred = np.array([2.0, 2.0, 1.0, 4.0])
        np.testing.assert_allclose(
            self.loss.gradient(y_true, y_pred), [0.5, 0.0, -1.0, 0.0], rtol=1e-12
        )

    def test_gradient_matches_finite_difference(self):
        rng = np.random.default_rng(0)
        y_true = rng.normal(size=5)
        y_pred = rng.normal(size=5)
        eps = 1e-6
        numeric = np.zeros(5)
        for i in range(5):
            up = y_pred.copy()
            down = y_pred.copy()
            up[i] += eps
            down[i] -= eps
            numeric[i] = (self.loss.compute(y_true, up) - self.loss.compute(y_true, down)) / (2 * eps)
        np.testing.assert_allclose(self.loss.gradient(y_true, y_pred), numeric, rtol=1e-5, atol=1e-8)

    def test_length_mismatch_raises(self):
        with self.assertRaises(DimensionMismatchError):
            self.loss.compute(np.zeros(3), np.zeros(2))
        with self.assertRaises(DimensionMismatchError):
            self.loss.gradient(np.zeros(1), np.zeros(4))

    def test_metadata(self):
        self.assertEqual(self.loss.name(), "Mean Squared Error")
        self.assertIn("MSE", self.loss.formula())
        self.assertTrue(self.loss.description())
        self.assertTrue(self.loss.gradient_formula())


class TestCrossEntropy(unittest.TestCase):
    def setUp(self):
        self.loss = CrossEntropy()

    def test_compute(self):
        y_true = np.array([1.0, 0.0])
        y_pred = np.array([0.5, 0.25])
        self.assertAlmostEqual(self.loss.compute(y_true, y_pred), np.log(2.0) / 2.0, places=12)

    def test_gradient(self):
        y_true = np.array([1.0, 0.0, 1.0])
        y_pred = np.array([0.5, 0.5, 0.25])
        np.testing.assert_allclose(
            self.loss.gradient(y_true, y_pred), [-2.0 / 3.0, 0.0, -4.0 / 3.0], rtol=1e-12
        )

    def test_zero_prediction_is_not_finite(self):
        y_true = np.array([1.0, 1.0])
        y_pred = np.array([0.0, 0.5])
        self.assertFalse(np.isfinite(self.loss.compute(y_true, y_pred)))
        self.assertFalse(np.all(np.isfinite(self.loss.gradient(y_true, y_pred))))

    def test_length_mismatch_raises(self):
        with self.assertRaises(DimensionMismatchError):
            self.loss.compute(np.ones(2), np.ones(3))

    def test_metadata(self):
        self.assertEqual(self.loss.name(), "Cross Entropy")
        self.assertIn("log", self.loss.formula())


if __name__ == "__main__":
    unittest.main()
