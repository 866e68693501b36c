"""
Optimistic / pessimistic value bounds for partial 0-1 knapsack decisions.

A state is described by the last decided rank `k` (-1 for "nothing decided")
together with the weight and value accumulated so far. Both bounds come out of
a single greedy walk over the ranks after `k`:

- optimistic: whole items while they fit, then the fractional part of the first
  item that does not (continuous relaxation), which is an upper bound on every completion;
- pessimistic: the same whole items, the blocking item is skipped and later
  items are still packed whenever they fit, which is a feasible integral completion.

optimistic >= pessimistic >= accumulated value holds for every state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .problem import KnapsackProblem


@dataclass(frozen=True)
class BoundEstimate:
    optimistic: float
    pessimistic: float
    # original item indices added by the pessimistic completion
    completion: Tuple[int, ...] = ()


class BoundEstimator:
    """Computes bounds over a problem's density ranking. Cost O(n - k) per call."""

    def __init__(self, problem: KnapsackProblem):
        self.problem = problem
        order = problem.ranking.order
        self._order = [int(i) for i in order]
        self._weights = [float(problem.weights[i]) for i in order]
        self._values = [float(problem.values[i]) for i in order]
        self.capacity = float(problem.capacity)

    def estimate(self, k: int, weight: float, value: float) -> BoundEstimate:
        n = len(self._order)
        room = self.capacity - weight
        optimistic = pessimistic = value
        completion = []

        r = k + 1
        while r < n and self._weights[r] <= room:
            room -= self._weights[r]
            optimistic += self._values[r]
            pessimistic += self._values[r]
            completion.append(self._order[r])
            r += 1

        if r < n:
            # item r is the first one that does not fit whole
            optimistic += (room / self._weights[r]) * self._values[r]
            r += 1
            while r < n and room > 0:
                if self._weights[r] <= room:
                    room -= self._weights[r]
                    pessimistic += self._values[r]
                    completion.append(self._order[r])
                r += 1

        return BoundEstimate(optimistic, pessimistic, tuple(completion))

    def bounds(self, k: int, weight: float, value: float) -> Tuple[float, float]:
        est = self.estimate(k, weight, value)
        return est.optimistic, est.pessimistic
