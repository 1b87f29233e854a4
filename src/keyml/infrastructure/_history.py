"""
Per-epoch training record.

`GradientDescent.optimize` returns a `History`, and the gradient-based
models keep the one from their last `fit` as ``history_``. Each completed
epoch adds its index and its aggregated values (currently just ``"loss"``).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping


@dataclass
class History:
    """
    Epoch indices and metric series of one training run.

    Attributes
    ----------
    history : Dict[str, List[float]]
        Metric series keyed by name, one value per recorded epoch.
    epoch : List[int]
        Recorded epoch indices, in training order.
    """

    history: Dict[str, List[float]] = field(default_factory=dict)
    epoch: List[int] = field(default_factory=list)

    def append_epoch(self, epoch_idx: int, logs: Mapping[str, float]) -> None:
        self.epoch.append(int(epoch_idx))
        for name, value in logs.items():
            series = self.history.setdefault(name, [])
            series.append(float(value))

    @property
    def losses(self) -> List[float]:
        """Copy of the ``"loss"`` series; empty before the first epoch."""
        return list(self.history.get("loss", ()))

    def last(self) -> Dict[str, float]:
        """Latest value of every non-empty series."""
        return {name: series[-1] for name, series in self.history.items() if series}

    def __len__(self) -> int:
        return len(self.epoch)
