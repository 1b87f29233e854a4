"""
K-nearest-neighbors regression.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._dataset import IDataset
from ...domain._errors import InvalidArgumentError
from ._models import Model, check_positive


class KNearestNeighbors(Model):
    """
    K-nearest-neighbors regressor.

    `fit` memorizes the training rows. `predict` returns, for each query
    row, the mean target of its `k` nearest training rows under Euclidean
    distance. When fewer than `k` training rows exist, all of them are used.

    Parameters
    ----------
    k : int, optional
        Number of neighbors to average. Must be positive. Defaults to 3.
    """

    NAME = "KNearestNeighbors"
    DESCRIPTION = "K-Nearest Neighbors regression model."
    FORMULA = "y = mean(y_neighbors) for k nearest neighbors"
    GRADIENT_FORMULA = "Not applicable for KNN"

    def __init__(self, k: int = 3) -> None:
        super().__init__()
        self.k = check_positive("k", k, int)
        self._x: Optional[np.ndarray] = None
        self._y: Optional[np.ndarray] = None

    def fit(self, train: IDataset) -> "KNearestNeighbors":
        if train.num_rows == 0:
            raise InvalidArgumentError("train", train.num_rows, "training data is empty")
        self._x = np.array(train.features, dtype=np.float64)
        self._y = np.array(train.targets, dtype=np.float64)
        self._n_features = train.num_features
        return self

    def kneighbors(self, x: np.ndarray) -> np.ndarray:
        """
        Return the indices of the nearest training rows for every query row.

        Returns
        -------
        np.ndarray
            Integer array of shape (num_queries, min(k, num_train)), nearest
            first. Ties keep training order.
        """
        arr = self._as_input(x, "kneighbors")
        k = min(self.k, self._x.shape[0])
        diff = arr[:, None, :] - self._x[None, :, :]
        dist = np.sqrt(np.sum(diff * diff, axis=2))
        return np.argsort(dist, axis=1, kind="stable")[:, :k]

    def predict(self, x: np.ndarray) -> np.ndarray:
        idx = self.kneighbors(x)
        return self._y[idx].mean(axis=1)
