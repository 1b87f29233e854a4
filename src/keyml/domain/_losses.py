"""
Domain-level loss contracts for KeyML.

A loss maps a pair of equal-length target/prediction vectors to a scalar and
exposes the per-sample gradient of that scalar with respect to the
predictions. The training engine converts the latter into parameter space
itself, so no autograd machinery is involved.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class ILoss(Protocol):
    """
    Loss interface contract.

    Required methods
    ----------------
    - `compute(y_true, y_pred)` returns the scalar loss.
    - `gradient(y_true, y_pred)` returns dLoss/dPrediction, one entry per
      sample, with the same length as the inputs.

    Both methods must be pure and must raise `DimensionMismatchError` when
    the input lengths differ.
    """

    def compute(self, y_true: np.ndarray, y_pred: np.ndarray) -> float: ...

    def gradient(self, y_true: np.ndarray, y_pred: np.ndarray) -> np.ndarray: ...

    def name(self) -> str: ...
