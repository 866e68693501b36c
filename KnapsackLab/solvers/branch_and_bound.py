"""
Exact 0-1 knapsack by best-first branch and bound.

Nodes are explored in order of their optimistic bound. Items are decided in
density-rank order; node `k` has decided ranks 0..k (root: k = -1). The
best-known value starts at the root's pessimistic bound and can only grow, so
as soon as the most promising open node cannot beat it the whole search stops.

Every best value recorded comes with a concrete inclusion vector: either a
terminal node's decisions or the pessimistic completion of the node whose
pessimistic bound raised it.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np

from ..core.bounds import BoundEstimator
from ..core.problem import KnapsackProblem
from ..core.solution import Solution
from ..core.solver import KnapsackSolver

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    decision_index: int
    included: np.ndarray  # bool, original item order; owned by this node
    weight: float
    value: float
    optimistic_bound: float


class BranchAndBoundSolver(KnapsackSolver):
    """Best-first branch and bound with fractional-relaxation upper bounds."""
    name = "bnb"

    def _solve(self, problem: KnapsackProblem, **kwargs) -> Solution:
        n = problem.n_items
        capacity = float(problem.capacity)
        order = problem.ranking.order
        estimator = BoundEstimator(problem)

        root = SearchNode(-1, np.zeros(n, dtype=bool), 0.0, 0.0, 0.0)
        root_est = estimator.estimate(root.decision_index, root.weight, root.value)
        root.optimistic_bound = root_est.optimistic
        best_value = root_est.pessimistic
        best_solution = self._complete(root.included, root_est.completion)

        queue: List[Tuple[float, int, int, SearchNode]] = []
        tie = itertools.count()

        def push(node: SearchNode) -> None:
            # max-heap on bound; deeper nodes first on ties, then FIFO
            heapq.heappush(queue, (-node.optimistic_bound, -node.decision_index, next(tie), node))

        push(root)
        nodes_visited = 0

        while queue:
            if -queue[0][0] <= best_value:
                break  # no open node can improve on the best
            _, _, _, node = heapq.heappop(queue)
            nodes_visited += 1

            k = node.decision_index + 1
            item = int(order[k])
            terminal = k == n - 1
            item_weight = float(problem.weights[item])

            # include item k: only if it fits; the relaxation ceiling is unchanged
            if node.weight + item_weight <= capacity:
                child = SearchNode(
                    k,
                    node.included.copy(),
                    node.weight + item_weight,
                    node.value + float(problem.values[item]),
                    node.optimistic_bound,
                )
                child.included[item] = True
                if terminal:
                    if child.value > best_value:
                        best_value, best_solution = child.value, child.included
                elif child.optimistic_bound > best_value:
                    push(child)

            # exclude item k: always valid, bounds recomputed for the new state
            est = estimator.estimate(k, node.weight, node.value)
            if terminal:
                if node.value > best_value:
                    best_value, best_solution = node.value, node.included.copy()
            elif est.optimistic > best_value:
                child = SearchNode(k, node.included.copy(), node.weight, node.value, est.optimistic)
                push(child)
                if est.pessimistic > best_value:
                    best_value = est.pessimistic
                    best_solution = self._complete(child.included, est.completion)

        logger.debug("branch and bound: %d nodes visited, %d left open, best %g",
                     nodes_visited, len(queue), best_value)
        solution = Solution(best_solution, problem, best_value, self.name, nodes_visited=nodes_visited)
        assert solution.is_feasible(), "branch and bound produced an overweight solution"
        return solution

    @staticmethod
    def _complete(included: np.ndarray, completion: Iterable[int]) -> np.ndarray:
        full = included.copy()
        completion = list(completion)
        if completion:
            full[completion] = True
        return full


def branch_and_bound_solve(problem: KnapsackProblem) -> Solution:
    return BranchAndBoundSolver().solve(problem)
