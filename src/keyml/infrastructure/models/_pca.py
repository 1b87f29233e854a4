"""
Principal component analysis via covariance eigendecomposition.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._dataset import IDataset
from ...domain._errors import DimensionMismatchError, InvalidArgumentError
from ._models import Model, check_positive


class PCA(Model):
    """
    Principal component analysis.

    `fit` centers the training features, computes the sample covariance
    ``C = Xc^T Xc / (n - 1)`` and keeps the eigenvectors of the
    `n_components` largest eigenvalues as columns of `components`.

    Projection does not re-center its input: ``transform(X) = X @ W`` and
    ``inverse_transform(Z) = Z @ W^T``. `predict` returns the norm of every
    projected row.

    Parameters
    ----------
    n_components : int, optional
        Number of components to keep. Defaults to 2.
    """

    NAME = "PCA"
    DESCRIPTION = (
        "PCA is a dimensionality reduction technique that projects the data "
        "onto the directions of largest variance."
    )
    FORMULA = "X' = X * W"
    GRADIENT_FORMULA = "Not applicable - PCA is not a gradient-based algorithm"

    def __init__(self, n_components: int = 2) -> None:
        super().__init__()
        self.n_components = check_positive("n_components", n_components, int)
        self._components: Optional[np.ndarray] = None
        self._explained_variance: Optional[np.ndarray] = None
        self._explained_variance_ratio: Optional[np.ndarray] = None

    def fit(self, train: IDataset) -> "PCA":
        x = np.asarray(train.features, dtype=np.float64)
        if x.shape[0] < 2 or x.shape[1] == 0:
            raise InvalidArgumentError(
                "train", x.shape, "need at least 2 rows and 1 feature"
            )
        if self.n_components > x.shape[1]:
            raise InvalidArgumentError(
                "n_components",
                self.n_components,
                f"cannot exceed the number of features ({x.shape[1]})",
            )

        centered = x - x.mean(axis=0)
        cov = centered.T @ centered / (x.shape[0] - 1)

        # eigh returns ascending eigenvalues
        eigenvalues, eigenvectors = np.linalg.eigh(cov)
        order = np.argsort(eigenvalues)[::-1]
        eigenvalues = eigenvalues[order]
        eigenvectors = eigenvectors[:, order]

        self._components = eigenvectors[:, : self.n_components]
        self._explained_variance = eigenvalues[: self.n_components]
        total = float(np.sum(eigenvalues))
        self._explained_variance_ratio = (
            self._explained_variance / total
            if total > 0.0
            else np.zeros_like(self._explained_variance)
        )
        self._n_features = x.shape[1]
        return self

    @property
    def components(self) -> np.ndarray:
        self._require_fitted("components")
        return self._components.copy()

    @property
    def explained_variance(self) -> np.ndarray:
        self._require_fitted("explained_variance")
        return self._explained_variance.copy()

    @property
    def explained_variance_ratio(self) -> np.ndarray:
        self._require_fitted("explained_variance_ratio")
        return self._explained_variance_ratio.copy()

    def transform(self, x: np.ndarray) -> np.ndarray:
        arr = self._as_input(x, "transform")
        return arr @ self._components

    def inverse_transform(self, z: np.ndarray) -> np.ndarray:
        self._require_fitted("inverse_transform")
        arr = np.asarray(z, dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(1, -1)
        if arr.ndim != 2 or arr.shape[1] != self.n_components:
            raise DimensionMismatchError("projected features", self.n_components, arr.shape)
        return arr @ self._components.T

    def predict(self, x: np.ndarray) -> np.ndarray:
        return np.linalg.norm(self.transform(x), axis=1)
