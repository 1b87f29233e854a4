"""
K-means clustering (Lloyd's algorithm).
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._dataset import IDataset
from ...domain._errors import InvalidArgumentError
from ._models import Model, check_positive


class KMeans(Model):
    """
    K-means clustering.

    Centroids are initialized from `k` randomly drawn training rows, then the
    algorithm alternates between assigning every row to its nearest centroid
    and moving each centroid to the mean of its rows. It stops after
    `max_iters` iterations or once the centroids move less than `tol`
    (Frobenius norm). Empty clusters are left at the origin.

    Parameters
    ----------
    k : int, optional
        Number of clusters. Defaults to 3.
    max_iters : int, optional
        Maximum number of iterations. Defaults to 100.
    tol : float, optional
        Convergence threshold on the centroid shift. Defaults to 1e-6.
    seed : Optional[int], optional
        Seed of the initialization. None draws from OS entropy.

    Notes
    -----
    `predict` returns cluster indices as a float vector so the output fits
    the common `Model.predict` contract; `labels` gives the integer form.
    """

    NAME = "KMeans"
    DESCRIPTION = "KMeans is a clustering algorithm that partitions the data into k clusters."
    FORMULA = "argmin_S sum_{i=1}^k sum_{x in S_i} ||x - mu_i||^2"
    GRADIENT_FORMULA = "Not applicable - KMeans is not a gradient-based algorithm"

    def __init__(
        self,
        k: int = 3,
        max_iters: int = 100,
        tol: float = 1e-6,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__()
        self.k = check_positive("k", k, int)
        self.max_iters = check_positive("max_iters", max_iters, int)
        self.tol = float(tol)
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        self._centroids: Optional[np.ndarray] = None
        self.n_iter_ = 0

    @property
    def centroids(self) -> np.ndarray:
        self._require_fitted("centroids")
        return self._centroids.copy()

    def fit(self, train: IDataset) -> "KMeans":
        x = np.asarray(train.features, dtype=np.float64)
        if x.shape[0] == 0 or x.shape[1] == 0:
            raise InvalidArgumentError("train", x.shape, "input matrix cannot be empty")
        if x.shape[0] < self.k:
            raise InvalidArgumentError(
                "k", self.k, f"exceeds the number of samples ({x.shape[0]})"
            )

        centroids = x[self._rng.integers(0, x.shape[0], size=self.k)].copy()
        self.n_iter_ = 0
        for _ in range(self.max_iters):
            self.n_iter_ += 1
            labels = self._assign(x, centroids)
            updated = self._update(x, labels)
            if np.linalg.norm(updated - centroids) < self.tol:
                break
            centroids = updated

        self._centroids = centroids
        self._n_features = x.shape[1]
        return self

    @staticmethod
    def _assign(x: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        diff = x[:, None, :] - centroids[None, :, :]
        return np.argmin(np.sum(diff * diff, axis=2), axis=1)

    def _update(self, x: np.ndarray, labels: np.ndarray) -> np.ndarray:
        updated = np.zeros((self.k, x.shape[1]), dtype=np.float64)
        for c in range(self.k):
            members = x[labels == c]
            if members.shape[0] > 0:
                updated[c] = members.mean(axis=0)
        return updated

    def labels(self, x: np.ndarray) -> np.ndarray:
        """Return the integer index of the nearest centroid for every row."""
        arr = self._as_input(x)
        return self._assign(arr, self._centroids)

    def predict(self, x: np.ndarray) -> np.ndarray:
        return self.labels(x).astype(np.float64)

    def inertia(self, x: np.ndarray) -> float:
        """Sum of squared distances from every row to its centroid."""
        arr = self._as_input(x, "inertia")
        diff = arr - self._centroids[self._assign(arr, self._centroids)]
        return float(np.sum(diff * diff))
