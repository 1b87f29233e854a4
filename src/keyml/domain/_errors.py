"""
Training- and model-related exceptions for KeyML.

This module defines the error taxonomy shared by losses, models, datasets
and the training engine. Errors are split into two groups:

- Fatal errors (`InvalidArgumentError`, `DimensionMismatchError`,
  `NotFittedError`, `UnsupportedOperationError`) are raised and propagate
  to the caller. They signal configuration or programming mistakes.
- Recoverable numerical anomalies are reported through the
  `NumericalInstabilityWarning` category via `warnings.warn` and are never
  raised by the training engine.
"""

from __future__ import annotations

from typing import Any


class InvalidArgumentError(ValueError):
    """
    Raised when a hyperparameter or call argument is malformed.

    Examples include non-positive epochs or batch sizes, a batch size larger
    than the dataset, a non-positive learning rate at construction time, or
    an empty dataset handed to the optimizer.

    Attributes
    ----------
    argument : str
        Name of the offending argument.
    value : Any
        The rejected value.
    """

    def __init__(self, argument: str, value: Any, reason: str) -> None:
        """
        Initialize the InvalidArgumentError.

        Parameters
        ----------
        argument : str
            Name of the offending argument (e.g., "epochs").
        value : Any
            The rejected value.
        reason : str
            Human-readable constraint that was violated.
        """
        super().__init__(f"Invalid {argument}={value!r}: {reason}")
        self.argument = argument
        self.value = value


class DimensionMismatchError(ValueError):
    """
    Raised when two array operands disagree in length or shape.

    Inside a loss this indicates a bug in the collaborator that produced the
    predictions, so it is never recovered by the training engine.

    Attributes
    ----------
    expected : Any
        Expected length or shape.
    actual : Any
        Observed length or shape.
    """

    def __init__(self, what: str, expected: Any, actual: Any) -> None:
        """
        Initialize the DimensionMismatchError.

        Parameters
        ----------
        what : str
            Description of the compared operands (e.g., "y_true vs y_pred").
        expected : Any
            Expected length or shape.
        actual : Any
            Observed length or shape.
        """
        super().__init__(f"Dimension mismatch for {what}: {expected} vs {actual}.")
        self.expected = expected
        self.actual = actual


class NotFittedError(RuntimeError):
    """
    Raised when a model is used before its parameters are initialized.

    Attributes
    ----------
    model : str
        Name of the model class.
    """

    def __init__(self, model: str, op: str = "predict") -> None:
        super().__init__(
            f"{model} has not been trained yet. Call fit() before {op}()."
        )
        self.model = model
        self.op = op


class UnsupportedOperationError(NotImplementedError):
    """
    Raised when a model variant does not support the requested operation.

    The typical case is `update_parameters` on a model without learnable,
    gradient-updatable parameters (decision tree, KNN, PCA, k-means). Such
    models are valid for prediction but not valid optimizer targets.

    Attributes
    ----------
    model : str
        Name of the model class.
    op : str
        The unsupported operation.
    """

    def __init__(self, model: str, op: str) -> None:
        super().__init__(f"{model} does not support {op}().")
        self.model = model
        self.op = op


class NumericalInstabilityWarning(RuntimeWarning):
    """
    Warning category for recoverable numerical anomalies during training.

    Emitted when a batch produces non-finite predictions or gradients (the
    batch update is skipped) or when a scheduler returns an invalid learning
    rate (a fallback rate is substituted).
    """
