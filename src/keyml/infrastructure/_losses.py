"""
Loss function primitives for KeyML.

This module implements the closed-form losses consumed by the training
engine. Each loss is a stateless value object exposing:

- `compute(y_true, y_pred)`  : scalar loss
- `gradient(y_true, y_pred)` : dLoss/dPrediction, one entry per sample

Currently implemented losses:
- MeanSquaredError : regression
- CrossEntropy     : probability targets/predictions

Design notes
------------
- Gradients are returned in prediction space and are already divided by
  the number of samples. The optimizer lifts them into parameter space via
  the batch's feature matrix.
- Classification losses operate on probability inputs and apply no epsilon
  floor. A prediction of exactly 0 produces non-finite values, which the
  optimizer detects and recovers from by skipping the batch.
"""

from __future__ import annotations

import numpy as np

from ..domain._errors import DimensionMismatchError


def _check_lengths(y_true: np.ndarray, y_pred: np.ndarray):
    """
    Coerce both operands to 1-D float arrays and require equal length.

    Raises
    ------
    DimensionMismatchError
        If the lengths differ.
    """
    t = np.asarray(y_true, dtype=np.float64).reshape(-1)
    p = np.asarray(y_pred, dtype=np.float64).reshape(-1)
    if t.shape[0] != p.shape[0]:
        raise DimensionMismatchError("y_true vs y_pred", t.shape[0], p.shape[0])
    return t, p


class MeanSquaredError:
    """
    Mean Squared Error (MSE) loss.

    Computes the scalar loss:

        MSE(y_true, y_pred) = mean((y_true - y_pred)^2)

    and the per-sample gradient:

        dMSE/dy_pred = 2 * (y_pred - y_true) / n
    """

    def compute(self, y_true: np.ndarray, y_pred: np.ndarray) -> float:
        t, p = _check_lengths(y_true, y_pred)
        diff = t - p
        return float(np.dot(diff, diff) / t.shape[0])

    def gradient(self, y_true: np.ndarray, y_pred: np.ndarray) -> np.ndarray:
        t, p = _check_lengths(y_true, y_pred)
        return 2.0 * (p - t) / t.shape[0]

    def name(self) -> str:
        return "Mean Squared Error"

    def description(self) -> str:
        return (
            "Mean Squared Error (MSE) is a common loss function for regression "
            "tasks. It measures the average squared difference between the "
            "estimated values and the actual values."
        )

    def formula(self) -> str:
        return "MSE = (1/n) * sum((y_true - y_pred)^2)"

    def gradient_formula(self) -> str:
        return "dMSE/dy_pred = (2/n) * (y_pred - y_true)"


class CrossEntropy:
    """
    Cross Entropy loss on probability predictions.

    Computes the scalar loss:

        CE(y_true, y_pred) = -mean(y_true * log(y_pred))

    and the per-sample gradient:

        dCE/dy_pred = -(y_true / y_pred) / n

    Notes
    -----
    - `y_pred` must be strictly positive. No smoothing is applied; zero
      predictions yield `inf`/`nan`, which NumPy is told not to warn about
      here because the training engine reports them itself.
    """

    def compute(self, y_true: np.ndarray, y_pred: np.ndarray) -> float:
        t, p = _check_lengths(y_true, y_pred)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(-np.sum(t * np.log(p)) / t.shape[0])

    def gradient(self, y_true: np.ndarray, y_pred: np.ndarray) -> np.ndarray:
        t, p = _check_lengths(y_true, y_pred)
        with np.errstate(divide="ignore", invalid="ignore"):
            return -(t / p) / t.shape[0]

    def name(self) -> str:
        return "Cross Entropy"

    def description(self) -> str:
        return (
            "Cross Entropy is a loss function commonly used in classification "
            "tasks. It measures the dissimilarity between the true distribution "
            "and the predicted distribution."
        )

    def formula(self) -> str:
        return "CE = -(1/n) * sum(y_true * log(y_pred))"

    def gradient_formula(self) -> str:
        return "dCE/dy_pred = -(1/n) * (y_true / y_pred)"
