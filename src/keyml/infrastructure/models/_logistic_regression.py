"""
Binary logistic regression.

The model predicts ``P(y=1 | x) = sigmoid(x . w + b)``. Training runs
mini-batch gradient descent on the mean log-loss with respect to the logits,
whose gradient has the closed form ``X^T (p - y) / m`` for the weights and
``mean(p - y)`` for the bias. Every step goes through `update_parameters`,
so the model is also a valid target for `GradientDescent`.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._dataset import IDataset
from ...domain._errors import DimensionMismatchError, InvalidArgumentError
from .._history import History
from ._models import Model, check_positive


def sigmoid(z: np.ndarray) -> np.ndarray:
    z = np.clip(z, -500.0, 500.0)  # avoid overflow in exp
    return 1.0 / (1.0 + np.exp(-z))


def _log_loss(y: np.ndarray, p: np.ndarray) -> float:
    eps = 1e-12
    return float(-np.mean(y * np.log(p + eps) + (1.0 - y) * np.log(1.0 - p + eps)))


class LogisticRegression(Model):
    """
    Logistic regression for binary classification.

    Parameters
    ----------
    lr : float, optional
        Learning rate. Must be positive. Defaults to 0.01.
    epochs : int, optional
        Number of passes over the training set. Defaults to 1000.
    batch_size : int, optional
        Rows per gradient step. Defaults to 32.
    verbose : bool, optional
        Print the log-loss every 100 epochs and at the end. Defaults to False.

    Notes
    -----
    Targets are expected in {0, 1}. Batches are contiguous and taken in
    dataset order.
    """

    NAME = "Logistic Regression"
    DESCRIPTION = "Logistic Regression model for binary classification."
    FORMULA = "P(y=1|X) = 1 / (1 + exp(-z)), where z = w^T * X + b"
    GRADIENT_FORMULA = "dL/dw = (P(y=1|X) - y) * X, dL/db = P(y=1|X) - y"

    def __init__(
        self,
        lr: float = 0.01,
        epochs: int = 1000,
        batch_size: int = 32,
        *,
        verbose: bool = False,
    ) -> None:
        super().__init__()
        self.lr = lr
        self.epochs = epochs
        self.batch_size = batch_size
        self.verbose = bool(verbose)

        self._weights: Optional[np.ndarray] = None
        self._bias: float = 0.0
        self.history_: Optional[History] = None

    # ---- validated hyperparameters ----
    @property
    def lr(self) -> float:
        return self._lr

    @lr.setter
    def lr(self, value: float) -> None:
        self._lr = check_positive("lr", value)

    @property
    def epochs(self) -> int:
        return self._epochs

    @epochs.setter
    def epochs(self, value: int) -> None:
        self._epochs = check_positive("epochs", value, int)

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @batch_size.setter
    def batch_size(self, value: int) -> None:
        self._batch_size = check_positive("batch_size", value, int)

    # ---- parameters ----
    @property
    def weights(self) -> np.ndarray:
        self._require_fitted("weights")
        return self._weights.copy()

    @property
    def bias(self) -> float:
        self._require_fitted("bias")
        return self._bias

    def initialize_parameters(self, n_features: int) -> None:
        """Zero the weights and bias for `n_features` inputs."""
        if self._n_features is not None and self._n_features != n_features:
            raise DimensionMismatchError("feature count", self._n_features, n_features)
        self._n_features = int(n_features)
        self._weights = np.zeros(n_features, dtype=np.float64)
        self._bias = 0.0

    def fit(self, train: IDataset) -> "LogisticRegression":
        if train.num_rows == 0 or train.num_features == 0:
            raise InvalidArgumentError(
                "train", (train.num_rows, train.num_features), "training data is empty"
            )
        self.initialize_parameters(train.num_features)

        x = train.features
        y = train.targets
        n = train.num_rows
        hist = History()

        for epoch in range(self.epochs):
            for start in range(0, n, self.batch_size):
                x_b = x[start : start + self.batch_size]
                y_b = y[start : start + self.batch_size]

                err = self.predict(x_b) - y_b
                grad = np.append(x_b.T @ err, np.sum(err)) / x_b.shape[0]
                self.update_parameters(grad, self.lr)

            epoch_loss = _log_loss(y, self.predict(x))
            hist.append_epoch(epoch, {"loss": epoch_loss})

            if self.verbose and (epoch % 100 == 0 or epoch == self.epochs - 1):
                print(f"Epoch {epoch + 1}/{self.epochs} - loss: {epoch_loss:.6f}")

        self.history_ = hist
        return self

    def decision_function(self, x: np.ndarray) -> np.ndarray:
        """Return the logits ``x . w + b``."""
        arr = self._as_input(x)
        return arr @ self._weights + self._bias

    def predict(self, x: np.ndarray) -> np.ndarray:
        """Return ``P(y=1 | x)`` for every row."""
        return sigmoid(self.decision_function(x))

    def predict_classes(self, x: np.ndarray, threshold: float = 0.5) -> np.ndarray:
        """Return hard 0/1 labels by thresholding `predict`."""
        return (self.predict(x) >= threshold).astype(np.float64)

    def update_parameters(self, gradients: np.ndarray, rate: float) -> None:
        n = self._require_fitted("update_parameters")
        g = np.asarray(gradients, dtype=np.float64).reshape(-1)
        if g.shape[0] != n + 1:
            raise DimensionMismatchError("combined gradient", n + 1, g.shape[0])

        self._weights = self._weights - rate * g[:n]
        self._bias = self._bias - rate * float(g[n])
