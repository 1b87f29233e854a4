"""
High-level model utilities.

This module defines the infrastructure-level `Model` base class shared by
every KeyML model. It provides:

- metadata accessors (`name`, `description`, `formula`,
  `gradient_formula`) backed by class attributes
- input coercion and feature-count checks for `predict`
- a default `update_parameters` that raises `UnsupportedOperationError`,
  which gradient-trainable models override

Subclasses implement `fit` and `predict`. Models that are not trainable by
`GradientDescent` (trees, neighbors, clustering, projections) simply keep the
default `update_parameters`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Optional

import numpy as np

from ...domain._dataset import IDataset
from ...domain._errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    NotFittedError,
    UnsupportedOperationError,
)


class Model(ABC):
    """
    Base class for KeyML models.

    Class attributes
    ----------------
    NAME, DESCRIPTION, FORMULA, GRADIENT_FORMULA : str
        Documentation strings returned by the metadata accessors.

    Notes
    -----
    - `_n_features` is None until the first `fit`; helpers use it to detect
      unfitted models and feature-count mismatches.
    """

    NAME: ClassVar[str] = "Model"
    DESCRIPTION: ClassVar[str] = ""
    FORMULA: ClassVar[str] = ""
    GRADIENT_FORMULA: ClassVar[str] = "Not applicable"

    def __init__(self) -> None:
        self._n_features: Optional[int] = None

    # ---- contract ----
    @abstractmethod
    def fit(self, train: IDataset) -> object:
        """Fit the model to `train`."""

    @abstractmethod
    def predict(self, x: np.ndarray) -> np.ndarray:
        """Return one prediction per row of `x`."""

    def update_parameters(self, gradients: np.ndarray, rate: float) -> None:
        """
        Apply a gradient step to the model parameters.

        The base implementation raises: only models with a dense weight
        vector plus bias support gradient updates.

        Raises
        ------
        UnsupportedOperationError
            Always, unless overridden.
        """
        raise UnsupportedOperationError(type(self).__name__, "update_parameters")

    # ---- metadata ----
    def name(self) -> str:
        return self.NAME

    def description(self) -> str:
        return self.DESCRIPTION

    def formula(self) -> str:
        return self.FORMULA

    def gradient_formula(self) -> str:
        return self.GRADIENT_FORMULA

    # ---- helpers ----
    @property
    def is_fitted(self) -> bool:
        return self._n_features is not None

    def _require_fitted(self, op: str = "predict") -> int:
        if self._n_features is None:
            raise NotFittedError(type(self).__name__, op)
        return self._n_features

    def _as_input(self, x, op: str = "predict") -> np.ndarray:
        """
        Validate `x` for inference and return it as a 2-D float64 matrix.

        Raises
        ------
        NotFittedError
            If the model has not been fitted.
        DimensionMismatchError
            If `x` does not have the number of features seen during `fit`.
        """
        n_features = self._require_fitted(op)
        arr = np.asarray(x, dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(1, -1)
        if arr.ndim != 2 or arr.shape[1] != n_features:
            raise DimensionMismatchError("input features", n_features, arr.shape)
        return arr

    def __repr__(self) -> str:
        return f"{type(self).__name__}(fitted={self.is_fitted})"


def check_positive(argument: str, value, kind=float):
    """
    Coerce `value` with `kind` and require it to be strictly positive.

    Raises
    ------
    InvalidArgumentError
        If the coerced value is not > 0, or if `kind` is int and `value`
        is not a whole number.
    """
    if kind is int and not float(value).is_integer():
        raise InvalidArgumentError(argument, value, "must be a whole number")
    value = kind(value)
    if not value > 0:
        raise InvalidArgumentError(argument, value, "must be positive")
    return value
