"""
NumPy implementations of the KeyML domain contracts.
"""

from ._dataset import Dataset
from ._csv_loader import CSVLoader, dataset_from_columns, dataset_from_loader
from ._history import History
from ._losses import CrossEntropy, MeanSquaredError
from ._metrics import mean_absolute_error, mean_squared_error, root_mean_squared_error
from ._optimizers import GradientDescent, clip_gradients
from ._schedulers import (
    ConstantLearningRateScheduler,
    ExponentialDecayLearningRateScheduler,
)
from .models import (
    PCA,
    DecisionTree,
    KMeans,
    KNearestNeighbors,
    LinearRegression,
    LogisticRegression,
    Model,
)

__all__ = [
    "Dataset",
    "CSVLoader",
    "dataset_from_columns",
    "dataset_from_loader",
    "History",
    "CrossEntropy",
    "MeanSquaredError",
    "mean_absolute_error",
    "mean_squared_error",
    "root_mean_squared_error",
    "GradientDescent",
    "clip_gradients",
    "ConstantLearningRateScheduler",
    "ExponentialDecayLearningRateScheduler",
    "PCA",
    "DecisionTree",
    "KMeans",
    "KNearestNeighbors",
    "LinearRegression",
    "LogisticRegression",
    "Model",
]
