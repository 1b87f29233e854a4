"""
Decision tree induced by greedy recursive binary splitting.

Each internal node tests ``x[feature] < threshold``; samples passing the
test go left. Candidate thresholds are the distinct values of each feature
in the node. The split maximizing the impurity decrease is kept; nodes
become leaves when they are pure, reach `max_depth`, hold fewer than
`min_samples_split` samples, or admit no split with positive gain.

Criteria
--------
- ``"gini"``    : ``1 - sum(p_i^2)``, majority-class leaves
- ``"entropy"`` : ``-sum(p_i * log2(p_i))``, majority-class leaves
- ``"mse"``     : variance of the targets, mean-valued leaves (regression)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from ...domain._dataset import IDataset
from ...domain._errors import InvalidArgumentError
from ._models import Model, check_positive


def gini_impurity(y: np.ndarray) -> float:
    if y.shape[0] == 0:
        return 0.0
    _, counts = np.unique(y, return_counts=True)
    p = counts / y.shape[0]
    return float(1.0 - np.sum(p * p))


def entropy(y: np.ndarray) -> float:
    if y.shape[0] == 0:
        return 0.0
    _, counts = np.unique(y, return_counts=True)
    p = counts / y.shape[0]
    return float(-np.sum(p * np.log2(p)))


def variance(y: np.ndarray) -> float:
    if y.shape[0] == 0:
        return 0.0
    return float(np.var(y))


def _majority(y: np.ndarray) -> float:
    values, counts = np.unique(y, return_counts=True)
    return float(values[np.argmax(counts)])


def _mean(y: np.ndarray) -> float:
    return float(np.mean(y))


_CRITERIA: Dict[str, Tuple[Callable[[np.ndarray], float], Callable[[np.ndarray], float]]] = {
    "gini": (gini_impurity, _majority),
    "entropy": (entropy, _majority),
    "mse": (variance, _mean),
}


@dataclass
class TreeNode:
    """
    A node of the decision tree.

    Leaves carry `value`; internal nodes carry `feature`, `threshold` and
    both children.
    """

    feature: Optional[int] = None
    threshold: Optional[float] = None
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None
    value: Optional[float] = None
    n_samples: int = 0

    @property
    def is_leaf(self) -> bool:
        return self.value is not None


class DecisionTree(Model):
    """
    CART-style decision tree for classification or regression.

    Parameters
    ----------
    max_depth : int, optional
        Maximum depth of the tree (root has depth 0). Defaults to 5.
    min_samples_split : int, optional
        Minimum number of samples required to split a node. Defaults to 2.
    criterion : str, optional
        One of ``"gini"``, ``"entropy"``, ``"mse"``. Defaults to ``"gini"``.

    Raises
    ------
    InvalidArgumentError
        If a hyperparameter is out of range or the criterion is unknown.
    """

    NAME = "Decision Tree"
    DESCRIPTION = (
        "A tree of axis-aligned threshold tests built by greedily choosing the "
        "split with the largest impurity decrease."
    )
    FORMULA = "gain = I(parent) - (n_l/n) * I(left) - (n_r/n) * I(right)"
    GRADIENT_FORMULA = "Not applicable - decision trees are not gradient-based"

    def __init__(
        self, max_depth: int = 5, min_samples_split: int = 2, criterion: str = "gini"
    ) -> None:
        super().__init__()
        self.max_depth = check_positive("max_depth", max_depth, int)
        self.min_samples_split = check_positive("min_samples_split", min_samples_split, int)
        if criterion not in _CRITERIA:
            available = ", ".join(sorted(_CRITERIA))
            raise InvalidArgumentError(
                "criterion", criterion, f"must be one of: {available}"
            )
        self.criterion = criterion
        self._impurity, self._leaf_value = _CRITERIA[criterion]
        self.root: Optional[TreeNode] = None

    def fit(self, train: IDataset) -> "DecisionTree":
        if train.num_rows == 0 or train.num_features == 0:
            raise InvalidArgumentError(
                "train", (train.num_rows, train.num_features), "training data is empty"
            )
        self.root = self._build(train.features, train.targets, depth=0)
        self._n_features = train.num_features
        return self

    def _best_split(self, x: np.ndarray, y: np.ndarray) -> Tuple[Optional[int], float, float]:
        n = y.shape[0]
        parent = self._impurity(y)
        best_feature: Optional[int] = None
        best_threshold = 0.0
        best_gain = 0.0

        for feature in range(x.shape[1]):
            column = x[:, feature]
            for threshold in np.unique(column):
                left = column < threshold
                n_left = int(np.sum(left))
                if n_left == 0 or n_left == n:
                    continue

                child = (n_left / n) * self._impurity(y[left]) + (
                    (n - n_left) / n
                ) * self._impurity(y[~left])
                gain = parent - child
                if gain > best_gain:
                    best_feature, best_threshold, best_gain = feature, float(threshold), gain

        return best_feature, best_threshold, best_gain

    def _build(self, x: np.ndarray, y: np.ndarray, depth: int) -> TreeNode:
        n = y.shape[0]
        leaf = TreeNode(value=self._leaf_value(y), n_samples=n)

        if depth >= self.max_depth or n < self.min_samples_split:
            return leaf
        if np.all(y == y[0]):
            return leaf

        feature, threshold, gain = self._best_split(x, y)
        if feature is None or gain <= 0.0:
            return leaf

        mask = x[:, feature] < threshold
        return TreeNode(
            feature=feature,
            threshold=threshold,
            left=self._build(x[mask], y[mask], depth + 1),
            right=self._build(x[~mask], y[~mask], depth + 1),
            n_samples=n,
        )

    def _predict_row(self, row: np.ndarray) -> float:
        node = self.root
        while not node.is_leaf:
            node = node.left if row[node.feature] < node.threshold else node.right
        return node.value

    def predict(self, x: np.ndarray) -> np.ndarray:
        arr = self._as_input(x)
        return np.array([self._predict_row(row) for row in arr], dtype=np.float64)

    def depth(self) -> int:
        """Return the depth of the fitted tree (a single leaf has depth 0)."""
        self._require_fitted("depth")

        def _depth(node: TreeNode) -> int:
            if node.is_leaf:
                return 0
            return 1 + max(_depth(node.left), _depth(node.right))

        return _depth(self.root)

    def n_leaves(self) -> int:
        """Return the number of leaves of the fitted tree."""
        self._require_fitted("n_leaves")

        def _count(node: TreeNode) -> int:
            if node.is_leaf:
                return 1
            return _count(node.left) + _count(node.right)

        return _count(self.root)
