"""
Model interface definitions.

This module defines the domain-level contract for KeyML models using
structural subtyping via `typing.Protocol`.

Every model (regression, classification, clustering or projection) can be
fitted and asked for one prediction per input row. Only models with a dense
weight vector plus bias additionally support `update_parameters`, which is
the single hook through which the training engine mutates parameters.
Others raise `UnsupportedOperationError` there.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from ._dataset import IDataset


@runtime_checkable
class IModel(Protocol):
    """
    Domain-level model interface.

    Notes
    -----
    - `predict` must raise `NotFittedError` before the first `fit`.
    - `update_parameters` receives a combined gradient vector of length
      `num_features + 1` (weight gradients followed by the bias gradient)
      and a learning rate, and updates parameters in-place.
    - The metadata methods are documentation only.
    """

    def fit(self, train: IDataset) -> object: ...

    def predict(self, x: np.ndarray) -> np.ndarray: ...

    def update_parameters(self, gradients: np.ndarray, rate: float) -> None: ...

    def name(self) -> str: ...

    def description(self) -> str: ...

    def formula(self) -> str: ...

    def gradient_formula(self) -> str: ...
