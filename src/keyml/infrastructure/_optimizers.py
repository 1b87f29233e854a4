"""
Optimizer primitives for KeyML.

This module provides the mini-batch stochastic gradient descent engine that
trains any model exposing `predict` and `update_parameters`.

Design notes
------------
- The optimizer owns the epoch/batch loop. The loss supplies gradients in
  prediction space; the optimizer lifts them into parameter space using the
  batch feature matrix (``X^T g`` for the weights, ``sum(g)`` for the bias).
- Parameters are only ever changed through `model.update_parameters`, which
  receives the combined vector ``[weight_grads..., bias_grad]``.
- Argument validation happens before any model call, so an invalid
  configuration never performs a partial training run.
- Non-finite predictions/gradients and invalid scheduler rates are reported
  via `NumericalInstabilityWarning` and recovered locally. Errors raised by
  the loss or the model (e.g. `DimensionMismatchError`) propagate.
- The epoch index doubles as the shuffle seed, which makes every epoch's
  row order reproducible across runs.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from ..domain._dataset import IDataset
from ..domain._errors import InvalidArgumentError, NumericalInstabilityWarning
from ..domain._losses import ILoss
from ..domain._model import IModel
from ..domain._schedulers import ILearningRateScheduler
from ._schedulers import ConstantLearningRateScheduler
from ._history import History


def _iter_batch_bounds(num_rows: int, batch_size: int) -> Iterator[Tuple[int, int]]:
    """
    Yield contiguous `[start, end)` row ranges of at most `batch_size` rows.

    The final range is truncated to the remaining row count.
    """
    for start in range(0, num_rows, batch_size):
        yield start, min(start + batch_size, num_rows)


def clip_gradients(
    weight_grad: np.ndarray, bias_grad: float, max_norm: float = 1.0
) -> Tuple[np.ndarray, float]:
    """
    Bound the weight gradient's L2 norm and the bias gradient's magnitude.

    Parameters
    ----------
    weight_grad : np.ndarray
        Gradient with respect to the weight vector.
    bias_grad : float
        Gradient with respect to the bias.
    max_norm : float, optional
        Upper bound for both ``||weight_grad||`` and ``|bias_grad|``.
        Defaults to 1.0.

    Returns
    -------
    tuple[np.ndarray, float]
        The clipped weight gradient (rescaled to norm `max_norm` when it
        exceeds it) and the bias gradient clamped to ``[-max_norm, max_norm]``.
    """
    norm = float(np.linalg.norm(weight_grad))
    if norm > max_norm:
        weight_grad = weight_grad * (max_norm / norm)
    if abs(bias_grad) > max_norm:
        bias_grad = math.copysign(max_norm, bias_grad)
    return weight_grad, float(bias_grad)


@dataclass
class GradientDescent:
    """
    Mini-batch stochastic gradient descent.

    For every epoch ``e`` the dataset is (optionally) reshuffled with seed
    ``e`` and split into contiguous batches. For each batch:

    1. ``y_pred = model.predict(X_b)``
    2. batch loss accumulated into the epoch loss, weighted by ``m / n``
    3. ``g = loss.gradient(y_b, y_pred)``; batches with non-finite
       ``y_pred`` or ``g`` are skipped
    4. ``gw = X_b^T g``, ``gb = sum(g)``, clipped to `max_grad_norm`
    5. ``model.update_parameters([gw, gb], scheduler.get_rate(e))``

    Parameters
    ----------
    lr : float, optional
        Base learning rate, used when `optimize` receives no scheduler.
        Must be positive. Defaults to 0.01.
    shuffle_batches : bool, optional
        Whether to reshuffle the dataset every epoch. Defaults to True.
    max_grad_norm : float, optional
        Clipping bound for the weight-gradient norm and bias-gradient
        magnitude. Must be positive. Defaults to 1.0.
    fallback_lr : float, optional
        Rate substituted when the scheduler returns a non-positive or
        non-finite value. Defaults to 0.001.
    verbose : bool, optional
        If True, prints one summary line per epoch. Defaults to True.

    Notes
    -----
    - There is no early stopping; training always runs `epochs` epochs.
    - Only models with a dense weight vector plus bias are valid targets.
    """

    lr: float = 0.01
    shuffle_batches: bool = True
    max_grad_norm: float = 1.0
    fallback_lr: float = 0.001
    verbose: bool = True

    def __post_init__(self) -> None:
        self.lr = float(self.lr)
        self.max_grad_norm = float(self.max_grad_norm)
        self.fallback_lr = float(self.fallback_lr)

        if not self.lr > 0.0:
            raise InvalidArgumentError("lr", self.lr, "learning rate must be positive")
        if not self.max_grad_norm > 0.0:
            raise InvalidArgumentError(
                "max_grad_norm", self.max_grad_norm, "must be positive"
            )
        if not self.fallback_lr > 0.0:
            raise InvalidArgumentError(
                "fallback_lr", self.fallback_lr, "must be positive"
            )
        if not self.shuffle_batches:
            warnings.warn(
                "shuffle_batches is False; batches keep the dataset order every "
                "epoch, which may lead to suboptimal convergence.",
                UserWarning,
                stacklevel=3,
            )

    def _validate(self, dataset: IDataset, epochs: int, batch_size: int) -> None:
        if epochs <= 0:
            raise InvalidArgumentError("epochs", epochs, "must be positive")
        if dataset.num_rows == 0 or dataset.num_features == 0:
            raise InvalidArgumentError(
                "dataset",
                (dataset.num_rows, dataset.num_features),
                "dataset is empty",
            )
        if batch_size <= 0 or batch_size > dataset.num_rows:
            raise InvalidArgumentError(
                "batch_size",
                batch_size,
                f"must be positive and at most the number of rows "
                f"({dataset.num_rows})",
            )

    def _rate_for(self, scheduler: ILearningRateScheduler, epoch: int) -> float:
        rate = float(scheduler.get_rate(epoch))
        if not math.isfinite(rate) or rate <= 0.0:
            warnings.warn(
                f"Invalid learning rate {rate!r} at epoch {epoch}; "
                f"using {self.fallback_lr} instead.",
                NumericalInstabilityWarning,
                stacklevel=3,
            )
            return self.fallback_lr
        return rate

    def optimize(
        self,
        model: IModel,
        dataset: IDataset,
        loss: ILoss,
        scheduler: Optional[ILearningRateScheduler] = None,
        epochs: int = 1,
        batch_size: int = 32,
    ) -> History:
        """
        Train `model` on `dataset` for a fixed number of epochs.

        Parameters
        ----------
        model : IModel
            Model exposing `predict` and `update_parameters`. Its parameters
            must already be initialized (e.g. zeroed by `fit`).
        dataset : IDataset
            Training data. Never mutated.
        loss : ILoss
            Loss providing `compute` and `gradient`.
        scheduler : Optional[ILearningRateScheduler], optional
            Learning-rate schedule. If None, a constant schedule at `self.lr`
            is used.
        epochs : int, optional
            Number of epochs. Must be positive. Defaults to 1.
        batch_size : int, optional
            Rows per batch, in ``[1, dataset.num_rows]``. Defaults to 32.

        Returns
        -------
        History
            Size-weighted loss of every epoch under the key ``"loss"``.

        Raises
        ------
        InvalidArgumentError
            If `epochs`, `batch_size` or the dataset shape is invalid. Raised
            before the model is touched.
        DimensionMismatchError
            Propagated from the loss when prediction and target lengths
            disagree.
        """
        self._validate(dataset, epochs, batch_size)

        if scheduler is None:
            scheduler = ConstantLearningRateScheduler(self.lr)

        num_rows = dataset.num_rows
        hist = History()

        for epoch in range(epochs):
            view = dataset.shuffle(epoch) if self.shuffle_batches else dataset
            x_all = view.features
            y_all = view.targets

            epoch_loss = 0.0
            for start, end in _iter_batch_bounds(num_rows, batch_size):
                x_b = x_all[start:end]
                y_b = y_all[start:end]

                y_pred = np.asarray(model.predict(x_b), dtype=np.float64).reshape(-1)

                batch_loss = loss.compute(y_b, y_pred)
                epoch_loss += batch_loss * (end - start) / num_rows

                pred_grad = np.asarray(loss.gradient(y_b, y_pred), dtype=np.float64)

                if not (np.all(np.isfinite(y_pred)) and np.all(np.isfinite(pred_grad))):
                    warnings.warn(
                        f"Non-finite predictions or gradients in batch "
                        f"[{start}, {end}) of epoch {epoch}; skipping batch.",
                        NumericalInstabilityWarning,
                        stacklevel=2,
                    )
                    continue

                weight_grad = x_b.T @ pred_grad
                bias_grad = float(np.sum(pred_grad))
                weight_grad, bias_grad = clip_gradients(
                    weight_grad, bias_grad, self.max_grad_norm
                )

                combined = np.append(weight_grad, bias_grad)
                rate = self._rate_for(scheduler, epoch)
                model.update_parameters(combined, rate)

            hist.append_epoch(epoch, {"loss": epoch_loss})

            if self.verbose:
                print(f"Epoch {epoch + 1}/{epochs} - loss: {epoch_loss:.6f}")

        return hist
