"""
In-memory dataset container for KeyML.

`Dataset` pairs a dense feature matrix with a target vector and offers the
row-level operations the training engine and the model zoo need:

- deterministic, seeded shuffling that returns a new dataset
- contiguous row extraction (`rows`, `top_rows`, `bottom_rows`)
- train/test splitting
- CSV export

Design notes
------------
- Storage is copied on construction and marked read-only.
- All arrays are stored as float64.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from ..domain._errors import DimensionMismatchError, InvalidArgumentError


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


class Dataset:
    """
    Immutable feature matrix / target vector pair.

    Parameters
    ----------
    x : array-like
        Feature matrix of shape (num_rows, num_features). A 1-D input is
        interpreted as a single feature column.
    y : array-like
        Target vector of length num_rows.

    Raises
    ------
    DimensionMismatchError
        If `x` is not 2-D, `y` is not 1-D, or the row counts differ.
    """

    def __init__(self, x, y) -> None:
        x_arr = np.array(x, dtype=np.float64)
        y_arr = np.array(y, dtype=np.float64).reshape(-1)

        if x_arr.ndim == 1:
            x_arr = x_arr.reshape(-1, 1)
        if x_arr.ndim != 2:
            raise DimensionMismatchError("feature matrix rank", 2, x_arr.ndim)
        if x_arr.shape[0] != y_arr.shape[0]:
            raise DimensionMismatchError(
                "feature rows vs target length", x_arr.shape[0], y_arr.shape[0]
            )

        self._x = _readonly(x_arr)
        self._y = _readonly(y_arr)

    # ---- accessors ----
    @property
    def features(self) -> np.ndarray:
        """Read-only feature matrix of shape (num_rows, num_features)."""
        return self._x

    @property
    def targets(self) -> np.ndarray:
        """Read-only target vector of length num_rows."""
        return self._y

    @property
    def num_rows(self) -> int:
        return int(self._x.shape[0])

    @property
    def num_features(self) -> int:
        return int(self._x.shape[1])

    def __len__(self) -> int:
        return self.num_rows

    def __repr__(self) -> str:
        return f"Dataset(num_rows={self.num_rows}, num_features={self.num_features})"

    # ---- row operations ----
    def shuffle(self, seed: int) -> "Dataset":
        """
        Return a new dataset with rows permuted by a seeded permutation.

        Parameters
        ----------
        seed : int
            Seed of the permutation. The same seed always yields the same
            row order for a given dataset.

        Returns
        -------
        Dataset
            A new dataset; the receiver is left untouched.
        """
        perm = np.random.default_rng(seed).permutation(self.num_rows)
        return Dataset(self._x[perm], self._y[perm])

    def rows(self, start: int, stop: int) -> "Dataset":
        """
        Return the contiguous row range [start, stop).

        Raises
        ------
        InvalidArgumentError
            If the range is empty or falls outside the dataset.
        """
        if not 0 <= start < stop <= self.num_rows:
            raise InvalidArgumentError(
                "row range",
                (start, stop),
                f"must satisfy 0 <= start < stop <= {self.num_rows}",
            )
        return Dataset(self._x[start:stop], self._y[start:stop])

    def top_rows(self, n: int) -> "Dataset":
        """Return the first `n` rows."""
        return self.rows(0, n)

    def bottom_rows(self, n: int) -> "Dataset":
        """Return the last `n` rows."""
        return self.rows(self.num_rows - n, self.num_rows)

    def train_test_split(
        self, test_size: float = 0.2, seed: Optional[int] = None
    ) -> Tuple["Dataset", "Dataset"]:
        """
        Shuffle the dataset and split it into train and test parts.

        Parameters
        ----------
        test_size : float, optional
            Fraction of rows assigned to the test set, in (0, 1).
            Defaults to 0.2.
        seed : Optional[int], optional
            Shuffle seed. If None, a fresh seed is drawn from OS entropy.

        Returns
        -------
        tuple[Dataset, Dataset]
            `(train, test)` with `int(num_rows * (1 - test_size))` training
            rows and the remainder as test rows.

        Raises
        ------
        InvalidArgumentError
            If `test_size` is outside (0, 1) or either split would be empty.
        """
        if not 0.0 < test_size < 1.0:
            raise InvalidArgumentError("test_size", test_size, "must be in (0, 1)")

        if seed is None:
            seed = int(np.random.SeedSequence().entropy % (2**32))

        shuffled = self.shuffle(seed)
        n_train = int(self.num_rows * (1.0 - test_size))
        if n_train == 0 or n_train == self.num_rows:
            raise InvalidArgumentError(
                "test_size",
                test_size,
                f"yields an empty split for {self.num_rows} rows",
            )
        return shuffled.top_rows(n_train), shuffled.bottom_rows(
            self.num_rows - n_train
        )

    # ---- export ----
    def save_csv(self, path: str | Path) -> None:
        """
        Write the dataset as CSV with header `X0,...,X{k-1},y`.

        Parameters
        ----------
        path : str | Path
            Output file path. Parent directories are created if needed.
        """
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)

        header = ",".join([f"X{i}" for i in range(self.num_features)] + ["y"])
        table = np.column_stack([self._x, self._y])
        np.savetxt(p, table, delimiter=",", header=header, comments="", fmt="%.17g")
