"""
CSV loading utilities for KeyML.

`CSVLoader` reads a delimited text file with `pandas.read_csv` and indexes
the header by trimmed column name. Two builders turn a loaded file into a
`Dataset`:

- `dataset_from_columns` selects named feature/target columns verbatim.
- `dataset_from_loader` uses every column, takes one as the target
  (the last by default) and standardizes features and target.

Cells are converted with ``pd.to_numeric(errors="coerce")``; rows with a
missing or non-numeric value in any used column are dropped.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ..domain._errors import InvalidArgumentError
from ._dataset import Dataset

_STD_EPS = 1e-10


class CSVLoader:
    """
    CSV reader with header-based column lookup.

    Parameters
    ----------
    filename : str | Path
        Path of the CSV file.
    delimiter : str, optional
        Field delimiter. Defaults to ``","``. Double-quoted fields may
        contain the delimiter.

    Notes
    -----
    Every cell is kept as a raw string until a dataset builder converts the
    columns it needs.
    """

    def __init__(self, filename: str | Path, delimiter: str = ",") -> None:
        self.filename = Path(filename)
        self.delimiter = delimiter
        self._frame: Optional[pd.DataFrame] = None

    def load(self) -> "CSVLoader":
        """
        Read the file and index the header.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        InvalidArgumentError
            If the file has no header row.
        """
        if not self.filename.is_file():
            raise FileNotFoundError(f"Could not open file: {self.filename}")

        try:
            frame = pd.read_csv(
                self.filename,
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                index_col=False,
                on_bad_lines="skip",
                encoding="utf-8",
            )
        except pd.errors.EmptyDataError as e:
            raise InvalidArgumentError(
                "filename", str(self.filename), "file has no header row"
            ) from e

        frame.columns = [str(name).strip() for name in frame.columns]
        self._frame = frame
        return self

    @property
    def is_loaded(self) -> bool:
        return self._frame is not None

    def _require_loaded(self) -> pd.DataFrame:
        if self._frame is None:
            raise RuntimeError("No data loaded. Call load() first.")
        return self._frame

    @property
    def frame(self) -> pd.DataFrame:
        """Loaded rows (header excluded) as a frame of raw strings."""
        return self._require_loaded()

    def column_names(self) -> List[str]:
        return list(self._require_loaded().columns)

    def column_index(self, column_name: str) -> int:
        """
        Return the index of `column_name` (surrounding whitespace ignored).

        Raises
        ------
        KeyError
            If the column does not exist.
        """
        columns = self.column_names()
        try:
            return columns.index(column_name.strip())
        except ValueError as e:
            raise KeyError(f"Column not found: {column_name!r}") from e

    def has_column(self, column_name: str) -> bool:
        return column_name.strip() in self.column_names()


def _numeric_rows(frame: pd.DataFrame, indices: Sequence[int]) -> pd.DataFrame:
    """Select columns by position, coerce them to numbers and drop bad rows."""
    selected = frame.iloc[:, list(indices)]
    selected = selected.set_axis(range(len(indices)), axis=1)
    return selected.apply(pd.to_numeric, errors="coerce").dropna()


def _standardize(frame: pd.DataFrame) -> pd.DataFrame:
    std = frame.std(ddof=0)
    varies = std > _STD_EPS
    scale = std.where(varies, 1.0)
    shift = frame.mean().where(varies, 0.0)
    return (frame - shift) / scale


def _to_dataset(numeric: pd.DataFrame) -> Dataset:
    # column 0 is the target, the rest are features
    values = numeric.to_numpy(dtype=np.float64)
    return Dataset(values[:, 1:], values[:, 0])


def dataset_from_columns(
    loader: CSVLoader, feature_columns: Sequence[str], target_column: str
) -> Dataset:
    """
    Build a dataset from named feature columns and a named target column.

    Parameters
    ----------
    loader : CSVLoader
        A loaded CSV.
    feature_columns : Sequence[str]
        Names of the feature columns, in output order.
    target_column : str
        Name of the target column.

    Returns
    -------
    Dataset
        Rows whose selected values are all numeric.

    Raises
    ------
    RuntimeError
        If the loader has not been loaded.
    KeyError
        If a column name is unknown.
    """
    feature_idx = [loader.column_index(c) for c in feature_columns]
    target_idx = loader.column_index(target_column)
    return _to_dataset(_numeric_rows(loader.frame, [target_idx] + feature_idx))


def dataset_from_loader(
    loader: CSVLoader, target_column: int = -1, *, standardize: bool = True
) -> Dataset:
    """
    Build a dataset using every column, one of which is the target.

    Parameters
    ----------
    loader : CSVLoader
        A loaded CSV.
    target_column : int, optional
        Index of the target column; negative values count from the end.
        Defaults to the last column.
    standardize : bool, optional
        If True, z-score every feature column and the target. Columns whose
        standard deviation is at most 1e-10 are left unchanged.
        Defaults to True.

    Returns
    -------
    Dataset
        Rows whose values are all numeric.

    Raises
    ------
    InvalidArgumentError
        If `target_column` is outside ``[-n_columns, n_columns)``.
    """
    frame = loader.frame
    n_cols = frame.shape[1]
    if not -n_cols <= target_column < n_cols:
        raise InvalidArgumentError(
            "target_column",
            target_column,
            f"must be in [{-n_cols}, {n_cols}) for a file with {n_cols} columns",
        )

    target_idx = target_column % n_cols
    feature_idx = [j for j in range(n_cols) if j != target_idx]

    numeric = _numeric_rows(frame, [target_idx] + feature_idx)
    if standardize and len(numeric) > 0:
        numeric = _standardize(numeric)

    return _to_dataset(numeric)
