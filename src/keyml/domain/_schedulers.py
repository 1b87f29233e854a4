"""
Domain-level learning-rate scheduler contracts for KeyML.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ILearningRateScheduler(Protocol):
    """
    Learning-rate scheduler interface contract.

    A scheduler is a stateless function object mapping a zero-based epoch
    index to a learning rate. Rates are expected to be positive and finite,
    but this is a soft contract: the optimizer substitutes a fallback rate
    instead of failing.
    """

    def get_rate(self, epoch: int) -> float:
        """
        Return the learning rate for `epoch`.

        Parameters
        ----------
        epoch : int
            Zero-based epoch index.

        Returns
        -------
        float
            Learning rate for the epoch.
        """
        ...

    def name(self) -> str: ...
