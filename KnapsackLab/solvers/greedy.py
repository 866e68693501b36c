"""Fractional knapsack solved greedily by density. Optimal for the continuous relaxation only."""

from __future__ import annotations

import numpy as np

from ..core.problem import KnapsackProblem
from ..core.solution import Solution
from ..core.solver import KnapsackSolver


class GreedySolver(KnapsackSolver):
    """Takes whole items by descending density, then a fraction of the first one that overflows."""
    name = "greedy"
    fractional = True

    def _solve(self, problem: KnapsackProblem, **kwargs) -> Solution:
        allocation = np.zeros(problem.n_items, dtype=float)
        remaining = float(problem.capacity)
        value = 0.0

        for idx in problem.ranking.order:
            weight = float(problem.weights[idx])
            if weight <= remaining:
                allocation[idx] = 1.0
                remaining -= weight
                value += float(problem.values[idx])
                continue
            # first item that does not fit whole: take what is left of it and stop
            if remaining > 0:
                allocation[idx] = remaining / weight
                value += allocation[idx] * float(problem.values[idx])
            break
        # falling out of the loop without a break means every item fit whole

        return Solution(allocation, problem, value, self.name)


def greedy_solve(problem: KnapsackProblem) -> Solution:
    return GreedySolver().solve(problem)
