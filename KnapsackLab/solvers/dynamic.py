"""
Exact 0-1 knapsack by dynamic programming over integer capacities.

The table has (n + 1) x (M + 1) cells, so time and memory grow with the
capacity M and not only with the item count. Instances whose table exceeds
`max_table_cells` are rejected with ResourceLimitError instead of being
allowed to exhaust memory; use the branch-and-bound solver for those.
"""

from __future__ import annotations

import logging

import numpy as np

from ..core.errors import ResourceLimitError, TypeMismatchError
from ..core.problem import KnapsackProblem
from ..core.solution import Solution
from ..core.solver import KnapsackSolver

logger = logging.getLogger(__name__)

DEFAULT_MAX_TABLE_CELLS = 50_000_000


class DynamicProgrammingSolver(KnapsackSolver):
    """Tabulates value[i][w] for the first i items and capacity w, then walks back the choices."""
    name = "dp"
    options = ("max_table_cells",)

    def __init__(self, max_table_cells: int = DEFAULT_MAX_TABLE_CELLS, **kwargs):
        super().__init__(max_table_cells=max_table_cells, **kwargs)
        self.max_table_cells = int(max_table_cells)

    def _validate(self, problem: KnapsackProblem) -> None:
        if not problem.is_integral():
            raise TypeMismatchError(
                "dynamic programming requires integral weights and capacity "
                f"(capacity={problem.capacity:g})"
            )
        cells = (problem.n_items + 1) * (int(problem.capacity) + 1)
        if cells > self.max_table_cells:
            raise ResourceLimitError(
                f"DP table needs {cells} cells ({problem.n_items + 1} x {int(problem.capacity) + 1}), "
                f"budget is {self.max_table_cells}"
            )

    def _solve(self, problem: KnapsackProblem, **kwargs) -> Solution:
        n = problem.n_items
        capacity = int(problem.capacity)
        # fit is decided on the float weights; only items that fit are cast to int
        fits = problem.weights <= capacity
        weights = np.where(fits, problem.weights, 0.0).astype(np.int64)
        values = problem.values

        table = np.zeros((n + 1, capacity + 1), dtype=float)
        for i in range(1, n + 1):
            prev = table[i - 1]
            row = table[i]
            row[:] = prev
            if not fits[i - 1]:
                continue
            w_i = int(weights[i - 1])
            # capacities w >= w_i may take item i: max(skip, take)
            np.maximum(prev[w_i:], prev[: capacity + 1 - w_i] + values[i - 1], out=row[w_i:])

        included = np.zeros(n, dtype=bool)
        w = capacity
        for i in range(n, 0, -1):
            if not fits[i - 1] or table[i, w] == table[i - 1, w]:
                continue
            included[i - 1] = True
            w -= int(weights[i - 1])

        value = float(table[n, capacity])
        logger.debug("DP table %dx%d filled, optimum %g", n + 1, capacity + 1, value)
        return Solution(included, problem, value, self.name)


def dp_solve(problem: KnapsackProblem, max_table_cells: int = DEFAULT_MAX_TABLE_CELLS) -> Solution:
    return DynamicProgrammingSolver(max_table_cells=max_table_cells).solve(problem)
