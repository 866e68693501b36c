from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Tuple
import math

import numpy as np

from .errors import InvalidInputError

if TYPE_CHECKING:
    from .ranking import DensityRanking

# Slack for weight sums that are accumulated in a different order than np.dot
# (branch and bound adds weights in density-rank order)
CAPACITY_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Item:
    """A single knapsack item. Weight must be strictly positive."""
    weight: float
    value: float


class KnapsackProblem:
    """0/1 (or fractional) knapsack instance: an immutable item catalog plus a capacity.

    Weights and values are stored as read-only float arrays so solvers can share
    the instance without copying it. An empty item set and a zero capacity are
    valid degenerate instances; every solver answers them with value 0.
    """

    def __init__(
        self,
        values: Iterable[float],
        weights: Iterable[float],
        capacity: float,
    ) -> None:
        vals = np.asarray(list(values), dtype=float)
        wts = np.asarray(list(weights), dtype=float)
        if vals.shape != wts.shape:
            raise InvalidInputError("values and weights must have matching lengths")
        if vals.ndim != 1:
            raise InvalidInputError("values and weights must be one-dimensional")
        if not np.all(np.isfinite(wts)) or np.any(wts <= 0):
            raise InvalidInputError("weights must be finite and strictly positive")
        if not np.all(np.isfinite(vals)) or np.any(vals < 0):
            raise InvalidInputError("values must be finite and non-negative")
        try:
            capacity = float(capacity)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"capacity must be a number: {capacity!r}") from exc
        if not math.isfinite(capacity) or capacity < 0:
            raise InvalidInputError("capacity must be finite and non-negative")

        vals.setflags(write=False)
        wts.setflags(write=False)
        self.values = vals
        self.weights = wts
        self.capacity = capacity
        self._ranking: Optional["DensityRanking"] = None

    @classmethod
    def from_items(cls, items: Iterable[Item], capacity: float) -> "KnapsackProblem":
        items = list(items)
        return cls([it.value for it in items], [it.weight for it in items], capacity)

    # ---- catalog views ----
    @property
    def n_items(self) -> int:
        return int(self.values.size)

    @property
    def items(self) -> Tuple[Item, ...]:
        return tuple(Item(float(w), float(v)) for w, v in zip(self.weights, self.values))

    @property
    def ranking(self) -> "DensityRanking":
        """Density ranking, computed on first use and cached (the instance is immutable)."""
        if self._ranking is None:
            from .ranking import DensityRanking
            self._ranking = DensityRanking.from_problem(self)
        return self._ranking

    def is_integral(self) -> bool:
        """True when capacity and every weight are whole numbers (DP precondition)."""
        return bool(float(self.capacity).is_integer() and np.all(np.floor(self.weights) == self.weights))

    # ---- evaluation helpers ----
    def total_weight(self, mask: Iterable) -> float:
        return float(np.dot(self.weights, self._to_vector(mask)))

    def total_value(self, mask: Iterable) -> float:
        return float(np.dot(self.values, self._to_vector(mask)))

    def is_feasible(self, mask: Iterable, eps: float = CAPACITY_TOLERANCE) -> bool:
        return self.total_weight(mask) <= self.capacity + eps

    def get_problem_info(self) -> dict:
        return {
            "dimension": self.n_items,
            "capacity": float(self.capacity),
            "integral": self.is_integral(),
            "total_weight": float(np.sum(self.weights)),
            "total_value": float(np.sum(self.values)),
        }

    def _to_vector(self, rep: Iterable) -> np.ndarray:
        arr = np.asarray(list(rep) if not isinstance(rep, np.ndarray) else rep, dtype=float)
        if arr.size != self.values.size:
            raise InvalidInputError("representation length mismatch with problem dimension")
        return np.clip(arr, 0.0, 1.0)

    def __repr__(self) -> str:
        return f"KnapsackProblem(n_items={self.n_items}, capacity={self.capacity:g})"
