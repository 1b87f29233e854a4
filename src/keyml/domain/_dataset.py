"""
Domain-level dataset accessor contract for KeyML.

The training engine only reads from datasets. Reordering rows is expressed
as a pure operation (`shuffle`) that returns a new dataset, so a single
dataset can safely back several training runs.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class IDataset(Protocol):
    """
    Dataset accessor interface.

    Notes
    -----
    - `features` is a 2-D matrix of shape (num_rows, num_features).
    - `targets` is a 1-D vector of length num_rows.
    - `shuffle(seed)` must be deterministic for a given seed and must not
      mutate the receiver.
    - `rows(start, stop)` extracts the contiguous row range [start, stop).
    """

    @property
    def features(self) -> np.ndarray: ...

    @property
    def targets(self) -> np.ndarray: ...

    @property
    def num_rows(self) -> int: ...

    @property
    def num_features(self) -> int: ...

    def shuffle(self, seed: int) -> "IDataset": ...

    def rows(self, start: int, stop: int) -> "IDataset": ...
