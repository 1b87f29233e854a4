"""
Learning-rate schedulers for KeyML.

Schedulers are frozen dataclasses mapping an epoch index to a learning
rate. They hold only construction-time hyperparameters, so one instance can
be shared by every batch and epoch of a training run.

Hyperparameters are not validated here. An invalid rate is detected by the
optimizer at use time and replaced by a fallback value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ConstantLearningRateScheduler:
    """
    Constant learning rate.

    Parameters
    ----------
    rate : float
        Learning rate returned for every epoch.
    """

    rate: float

    def get_rate(self, epoch: int) -> float:
        return float(self.rate)

    def name(self) -> str:
        return "Constant Learning Rate"

    def description(self) -> str:
        return "A constant learning rate that does not change during training."

    def formula(self) -> str:
        return "lr = constant_value"


@dataclass(frozen=True)
class ExponentialDecayLearningRateScheduler:
    """
    Exponentially decaying learning rate.

    Update rule
    -----------
        ``lr(epoch) = init_rate * exp(-decay_rate * epoch)``

    The rate is strictly decreasing in the epoch index whenever
    ``decay_rate > 0`` and ``init_rate > 0``.

    Parameters
    ----------
    init_rate : float
        Learning rate at epoch 0.
    decay_rate : float
        Exponential decay coefficient per epoch.
    """

    init_rate: float
    decay_rate: float

    def get_rate(self, epoch: int) -> float:
        return float(self.init_rate * math.exp(-self.decay_rate * epoch))

    def name(self) -> str:
        return "Exponential Decay Learning Rate"

    def description(self) -> str:
        return "A learning rate that decays exponentially over time."

    def formula(self) -> str:
        return "lr = lr_initial * e^(-decay_rate * epoch)"
