"""
Linear regression trained by mini-batch gradient descent.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._dataset import IDataset
from ...domain._errors import DimensionMismatchError
from .._losses import MeanSquaredError
from .._optimizers import GradientDescent
from .._schedulers import ExponentialDecayLearningRateScheduler
from .._history import History
from ._models import Model, check_positive


class LinearRegression(Model):
    """
    Ordinary linear regression ``y = X w + b``.

    `fit` zero-initializes the parameters and delegates training to
    `GradientDescent` with a `MeanSquaredError` loss and an exponentially
    decaying learning rate.

    Parameters
    ----------
    lr : float, optional
        Initial learning rate. Defaults to 0.001.
    epochs : int, optional
        Number of training epochs. Defaults to 1000.
    batch_size : int, optional
        Mini-batch size; capped at the number of training rows.
        Defaults to 32.
    decay_rate : float, optional
        Exponential decay coefficient of the learning rate. Defaults to 0.01.
    max_weight : float, optional
        Every weight and the bias are clipped to ``[-max_weight, max_weight]``
        after each update. Defaults to 10.0.
    shuffle : bool, optional
        Reshuffle the training set every epoch. Defaults to True.
    verbose : bool, optional
        Print per-epoch loss during `fit`. Defaults to False.

    Raises
    ------
    InvalidArgumentError
        If `lr`, `epochs`, `batch_size` or `max_weight` is not positive.
    """

    NAME = "Linear Regression"
    DESCRIPTION = "A simple linear regression model."
    FORMULA = "y = Xw + b"
    GRADIENT_FORMULA = "dL/dw = -2/n * X^T(y - Xw - b), dL/db = -2/n * sum(y - Xw - b)"

    def __init__(
        self,
        lr: float = 0.001,
        epochs: int = 1000,
        batch_size: int = 32,
        *,
        decay_rate: float = 0.01,
        max_weight: float = 10.0,
        shuffle: bool = True,
        verbose: bool = False,
    ) -> None:
        super().__init__()
        self.lr = check_positive("lr", lr)
        self.epochs = check_positive("epochs", epochs, int)
        self.batch_size = check_positive("batch_size", batch_size, int)
        self.decay_rate = float(decay_rate)
        self.max_weight = check_positive("max_weight", max_weight)
        self.shuffle = bool(shuffle)
        self.verbose = bool(verbose)

        self._weights: Optional[np.ndarray] = None
        self._bias: float = 0.0
        self.history_: Optional[History] = None

    @property
    def weights(self) -> np.ndarray:
        self._require_fitted("weights")
        return self._weights.copy()

    @property
    def bias(self) -> float:
        self._require_fitted("bias")
        return self._bias

    def initialize_parameters(self, n_features: int) -> None:
        """
        Zero the weights and bias for `n_features` inputs.

        Raises
        ------
        DimensionMismatchError
            If the model was already fitted with a different feature count.
        """
        if self._n_features is not None and self._n_features != n_features:
            raise DimensionMismatchError("feature count", self._n_features, n_features)
        self._n_features = int(n_features)
        self._weights = np.zeros(n_features, dtype=np.float64)
        self._bias = 0.0

    def fit(self, train: IDataset) -> "LinearRegression":
        self.initialize_parameters(train.num_features)

        optimizer = GradientDescent(
            lr=self.lr, shuffle_batches=self.shuffle, verbose=self.verbose
        )
        scheduler = ExponentialDecayLearningRateScheduler(self.lr, self.decay_rate)
        self.history_ = optimizer.optimize(
            self,
            train,
            MeanSquaredError(),
            scheduler,
            epochs=self.epochs,
            batch_size=min(self.batch_size, max(train.num_rows, 1)),
        )
        return self

    def predict(self, x: np.ndarray) -> np.ndarray:
        arr = self._as_input(x)
        return arr @ self._weights + self._bias

    def update_parameters(self, gradients: np.ndarray, rate: float) -> None:
        n = self._require_fitted("update_parameters")
        g = np.asarray(gradients, dtype=np.float64).reshape(-1)
        if g.shape[0] != n + 1:
            raise DimensionMismatchError("combined gradient", n + 1, g.shape[0])

        self._weights = self._weights - rate * g[:n]
        self._bias = self._bias - rate * float(g[n])

        # Bounded parameters
        np.clip(self._weights, -self.max_weight, self.max_weight, out=self._weights)
        self._bias = float(np.clip(self._bias, -self.max_weight, self.max_weight))
