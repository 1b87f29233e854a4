"""
Domain-level optimizer contracts for KeyML.

This module defines the `IOptimizer` protocol, which specifies the minimal
interface required for training-engine implementations (e.g., mini-batch
gradient descent).

Notes
-----
- Domain contracts only describe collaborators structurally; concrete
  NumPy implementations live in the infrastructure layer.
- Optimizers own the epoch/batch loop. Gradients with respect to the
  predictions come from the loss; the optimizer lifts them into parameter
  space and hands them to the model.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ._dataset import IDataset
from ._losses import ILoss
from ._model import IModel
from ._schedulers import ILearningRateScheduler


@runtime_checkable
class IOptimizer(Protocol):
    """
    Optimizer interface contract.

    Required methods
    ----------------
    - `optimize(...)` trains `model` on `dataset` for a fixed number of
      epochs, mutating the model's parameters in-place.
    """

    def optimize(
        self,
        model: IModel,
        dataset: IDataset,
        loss: ILoss,
        scheduler: Optional[ILearningRateScheduler] = None,
        epochs: int = 1,
        batch_size: int = 32,
    ) -> object:
        """
        Run the training loop.

        Implementations must validate their arguments before any parameter
        mutation takes place.
        """
        ...
