"""
Regression metrics used for reporting model quality.
"""

from __future__ import annotations

import math

import numpy as np

from ..domain._errors import DimensionMismatchError


def _pair(y_true, y_pred):
    t = np.asarray(y_true, dtype=np.float64).reshape(-1)
    p = np.asarray(y_pred, dtype=np.float64).reshape(-1)
    if t.shape[0] != p.shape[0]:
        raise DimensionMismatchError("y_true vs y_pred", t.shape[0], p.shape[0])
    return t, p


def mean_squared_error(y_true, y_pred) -> float:
    t, p = _pair(y_true, y_pred)
    return float(np.mean((p - t) ** 2))


def root_mean_squared_error(y_true, y_pred) -> float:
    return math.sqrt(mean_squared_error(y_true, y_pred))


def mean_absolute_error(y_true, y_pred) -> float:
    t, p = _pair(y_true, y_pred)
    return float(np.mean(np.abs(p - t)))
