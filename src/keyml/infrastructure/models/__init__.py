"""
KeyML model zoo.

Gradient-trainable models (weight vector plus bias, usable as
`GradientDescent` targets):

- LinearRegression
- LogisticRegression

Prediction-only models (`update_parameters` raises
`UnsupportedOperationError`):

- DecisionTree
- KNearestNeighbors
- KMeans
- PCA
"""

from ._models import Model
from ._linear_regression import LinearRegression
from ._logistic_regression import LogisticRegression
from ._decision_tree import DecisionTree, TreeNode
from ._knn import KNearestNeighbors
from ._kmeans import KMeans
from ._pca import PCA

__all__ = [
    Model.__name__,
    LinearRegression.__name__,
    LogisticRegression.__name__,
    DecisionTree.__name__,
    TreeNode.__name__,
    KNearestNeighbors.__name__,
    KMeans.__name__,
    PCA.__name__,
]
