import math
import unittest

import numpy as np

from keyml.domain._errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    NotFittedError,
    UnsupportedOperationError,
)
from keyml.infrastructure._dataset import Dataset
from keyml.infrastructure.models import PCA


def _line() -> Dataset:
    x = np.array([[1.0, 2.0], [2.0, 4.0], [3.0, 6.0], [4.0, 8.0]])
    return Dataset(x, np.zeros(4))


class TestPCA(unittest.TestCase):
    def test_too_many_components_raises(self):
        with self.assertRaises(InvalidArgumentError):
            PCA(n_components=3).fit(_line())

    def test_single_row_raises(self):
        with self.assertRaises(InvalidArgumentError):
            PCA(n_components=1).fit(Dataset([[1.0, 2.0]], [0.0]))

    def test_transform_before_fit_raises(self):
        with self.assertRaises(NotFittedError):
            PCA().transform(np.zeros((1, 2)))

    def test_principal_direction(self):
        pca = PCA(n_components=2).fit(_line())
        first = pca.components[:, 0]
        np.testing.assert_allclose(np.abs(first), np.array([1.0, 2.0]) / math.sqrt(5.0), rtol=1e-10)
        np.testing.assert_allclose(pca.explained_variance[0], 25.0 / 3.0, rtol=1e-10)
        np.testing.assert_allclose(pca.explained_variance_ratio, [1.0, 0.0], atol=1e-10)

    def test_components_are_orthonormal(self):
        rng = np.random.default_rng(0)
        pca = PCA(n_components=3).fit(Dataset(rng.normal(size=(30, 3)), np.zeros(30)))
        w = pca.components
        np.testing.assert_allclose(w.T @ w, np.eye(3), atol=1e-10)
        self.assertTrue(np.all(np.diff(pca.explained_variance) <= 0.0))

    def test_transform_does_not_center(self):
        pca = PCA(n_components=1).fit(_line())
        z = pca.transform(np.array([[1.0, 2.0]]))
        self.assertEqual(z.shape, (1, 1))
        self.assertAlmostEqual(abs(float(z[0, 0])), math.sqrt(5.0), places=10)
        self.assertAlmostEqual(float(pca.predict(np.array([[1.0, 2.0]]))[0]), math.sqrt(5.0), places=10)

    def test_inverse_transform_with_all_components(self):
        x = _line().features
        pca = PCA(n_components=2).fit(_line())
        np.testing.assert_allclose(pca.inverse_transform(pca.transform(x)), x, atol=1e-10)

    def test_inverse_transform_checks_width(self):
        pca = PCA(n_components=1).fit(_line())
        with self.assertRaises(DimensionMismatchError):
            pca.inverse_transform(np.zeros((2, 2)))

    def test_update_parameters_unsupported(self):
        pca = PCA(n_components=1).fit(_line())
        with self.assertRaises(UnsupportedOperationError):
            pca.update_parameters(np.zeros(3), 0.1)


if __name__ == "__main__":
    unittest.main()
