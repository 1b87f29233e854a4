"""
Backend-agnostic contracts and errors for KeyML.

Protocols here are structural: any object with the right methods satisfies
them, and all are `runtime_checkable`.
"""

from ._dataset import IDataset
from ._errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    NotFittedError,
    NumericalInstabilityWarning,
    UnsupportedOperationError,
)
from ._losses import ILoss
from ._model import IModel
from ._optimizers import IOptimizer
from ._schedulers import ILearningRateScheduler

__all__ = [
    "IDataset",
    "DimensionMismatchError",
    "InvalidArgumentError",
    "NotFittedError",
    "NumericalInstabilityWarning",
    "UnsupportedOperationError",
    "ILoss",
    "IModel",
    "IOptimizer",
    "ILearningRateScheduler",
]
