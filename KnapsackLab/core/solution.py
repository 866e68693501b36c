from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from .problem import CAPACITY_TOLERANCE, KnapsackProblem


@dataclass
class Solution:
    """Represents the outcome of a solver run.

    `representation` is a float allocation vector in [0, 1] for the fractional
    (greedy) solver and a boolean inclusion vector for the 0-1 solvers. Both are
    indexed by the original item order.
    """
    representation: np.ndarray
    problem: KnapsackProblem
    value: float
    solver: str
    weight: Optional[float] = None
    # B&B diagnostic: number of nodes popped from the priority queue
    nodes_visited: Optional[int] = None
    # Genetic diagnostics
    generations: Optional[int] = None
    history: List[Dict[str, float]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.weight is None:
            self.weight = self.problem.total_weight(self.representation)

    @property
    def is_fractional(self) -> bool:
        return self.representation.dtype != np.bool_

    def included_indices(self) -> List[int]:
        """Original indices of the items taken (any positive fraction counts)."""
        return [int(i) for i in np.flatnonzero(self.representation)]

    def is_feasible(self, eps: float = CAPACITY_TOLERANCE) -> bool:
        return self.problem.is_feasible(self.representation, eps=eps)

    def summary(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "solver": self.solver,
            "value": float(self.value),
            "weight": float(self.weight),
            "capacity": float(self.problem.capacity),
            "items_taken": len(self.included_indices()),
        }
        if self.nodes_visited is not None:
            info["nodes_visited"] = int(self.nodes_visited)
        if self.generations is not None:
            info["generations"] = int(self.generations)
        return info

    def __eq__(self, other: object) -> bool:
        """Checks if two solutions are equal based on representation and value."""
        if not isinstance(other, Solution):
            return NotImplemented
        return bool(np.array_equal(self.representation, other.representation)) and self.value == other.value

    def __str__(self) -> str:
        return f"Solution({self.solver}, value={self.value:g}, weight={self.weight:g})"
