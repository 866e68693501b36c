"""Density ranking of knapsack items (value per unit of weight)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

import numpy as np

if TYPE_CHECKING:
    from .problem import KnapsackProblem


@dataclass(frozen=True)
class DensityEntry:
    density: float
    original_index: int


class DensityRanking:
    """Items sorted by descending density; ties keep ascending original index.

    `order[r]` is the original index of the item at rank `r`.
    """

    def __init__(self, values: np.ndarray, weights: np.ndarray):
        density = np.asarray(values, dtype=float) / np.asarray(weights, dtype=float)
        indices = np.arange(density.size)
        # lexsort sorts by the last key first: descending density, then index
        order = np.lexsort((indices, -density))
        self.order = order
        self.densities = density[order]
        self.order.setflags(write=False)
        self.densities.setflags(write=False)

    @classmethod
    def from_problem(cls, problem: "KnapsackProblem") -> "DensityRanking":
        return cls(problem.values, problem.weights)

    def entries(self) -> List[DensityEntry]:
        return [DensityEntry(float(d), int(i)) for d, i in zip(self.densities, self.order)]

    def __len__(self) -> int:
        return int(self.order.size)
