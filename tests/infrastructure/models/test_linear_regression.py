import unittest
import warnings

import numpy as np

from keyml.domain._errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    NotFittedError,
)
from keyml.infrastructure._dataset import Dataset
from keyml.infrastructure.models import LinearRegression


def _sum_dataset() -> Dataset:
    x = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    return Dataset(x, x.sum(axis=1))


def _fit_quietly(model: LinearRegression, ds: Dataset) -> LinearRegression:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        return model.fit(ds)


class TestLinearRegression(unittest.TestCase):
    def test_rejects_invalid_hyperparameters(self):
        for kwargs in ({"lr": 0.0}, {"epochs": 0}, {"batch_size": -1}, {"max_weight": 0.0}):
            with self.subTest(**kwargs):
                with self.assertRaises(InvalidArgumentError):
                    LinearRegression(**kwargs)

    def test_rejects_fractional_counts(self):
        for kwargs in ({"epochs": 2.9}, {"batch_size": 3.7}, {"epochs": float("nan")}):
            with self.subTest(**kwargs):
                with self.assertRaises(InvalidArgumentError):
                    LinearRegression(**kwargs)

        model = LinearRegression(epochs=3.0, batch_size=np.int64(4))
        self.assertEqual((model.epochs, model.batch_size), (3, 4))
        self.assertIsInstance(model.epochs, int)

    def test_predict_before_fit_raises(self):
        model = LinearRegression()
        with self.assertRaises(NotFittedError):
            model.predict(np.zeros((1, 2)))
        with self.assertRaises(NotFittedError):
            _ = model.weights

    def test_fit_learns_sum(self):
        model = LinearRegression(
            lr=0.1, epochs=200, batch_size=4, decay_rate=0.0, shuffle=False
        )
        self.assertIs(_fit_quietly(model, _sum_dataset()), model)

        np.testing.assert_allclose(model.weights, [1.0, 1.0], atol=0.05)
        self.assertAlmostEqual(model.bias, 0.0, delta=0.05)
        np.testing.assert_allclose(
            model.predict(np.array([[2.0, 3.0]])), [5.0], atol=0.2
        )
        self.assertEqual(len(model.history_), 200)
        self.assertLess(model.history_.losses[-1], model.history_.losses[0])

    def test_batch_size_is_capped_at_row_count(self):
        model = LinearRegression(lr=0.05, epochs=3, batch_size=64)
        model.fit(_sum_dataset())
        self.assertEqual(len(model.history_), 3)

    def test_fit_is_deterministic(self):
        a = LinearRegression(lr=0.05, epochs=20, batch_size=2).fit(_sum_dataset())
        b = LinearRegression(lr=0.05, epochs=20, batch_size=2).fit(_sum_dataset())
        np.testing.assert_array_equal(a.weights, b.weights)
        self.assertEqual(a.bias, b.bias)

    def test_update_parameters_applies_step(self):
        model = LinearRegression()
        model.initialize_parameters(2)
        model.update_parameters(np.array([1.0, -2.0, 0.5]), 0.1)
        np.testing.assert_allclose(model.weights, [-0.1, 0.2])
        self.assertAlmostEqual(model.bias, -0.05)

    def test_update_parameters_clips_to_max_weight(self):
        model = LinearRegression(max_weight=10.0)
        model.initialize_parameters(2)
        model.update_parameters(np.array([-100.0, 100.0, -100.0]), 1.0)
        np.testing.assert_array_equal(model.weights, [10.0, -10.0])
        self.assertEqual(model.bias, 10.0)

    def test_update_parameters_checks_length(self):
        model = LinearRegression()
        model.initialize_parameters(2)
        with self.assertRaises(DimensionMismatchError):
            model.update_parameters(np.zeros(2), 0.1)

    def test_update_parameters_before_init_raises(self):
        with self.assertRaises(NotFittedError):
            LinearRegression().update_parameters(np.zeros(3), 0.1)

    def test_feature_count_is_fixed_after_init(self):
        model = LinearRegression()
        model.initialize_parameters(2)
        with self.assertRaises(DimensionMismatchError):
            model.initialize_parameters(3)
        with self.assertRaises(DimensionMismatchError):
            model.predict(np.zeros((1, 3)))

    def test_metadata(self):
        model = LinearRegression()
        self.assertEqual(model.name(), "Linear Regression")
        self.assertEqual(model.formula(), "y = Xw + b")
        self.assertTrue(model.description())
        self.assertTrue(model.gradient_formula())
        self.assertEqual(repr(model), "LinearRegression(fitted=False)")


if __name__ == "__main__":
    unittest.main()
