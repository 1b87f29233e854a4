import math
import unittest

import numpy as np

from keyml.domain._errors import DimensionMismatchError
from keyml.infrastructure._metrics import (
    mean_absolute_error,
    mean_squared_error,
    root_mean_squared_error,
)


class TestRegressionMetrics(unittest.TestCase):
    def setUp(self):
        self.y_true = np.array([1.0, 2.0, 3.0, 4.0])
        self.y_pred = np.array([1.0, 3.0, 1.0, 4.0])

    def test_mean_squared_error(self):
        self.assertAlmostEqual(mean_squared_error(self.y_true, self.y_pred), 5.0 / 4.0)

    def test_root_mean_squared_error(self):
        self.assertAlmostEqual(
            root_mean_squared_error(self.y_true, self.y_pred), math.sqrt(1.25)
        )

    def test_mean_absolute_error(self):
        self.assertAlmostEqual(mean_absolute_error(self.y_true, self.y_pred), 3.0 / 4.0)

    def test_accepts_lists(self):
        self.assertEqual(mean_absolute_error([1, 2], [1, 2]), 0.0)

    def test_length_mismatch_raises(self):
        for fn in (mean_squared_error, root_mean_squared_error, mean_absolute_error):
            with self.subTest(metric=fn.__name__):
                with self.assertRaises(DimensionMismatchError):
                    fn(np.zeros(3), np.zeros(4))


if __name__ == "__main__":
    unittest.main()
