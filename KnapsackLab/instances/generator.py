from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
import math

import numpy as np

from ..core.errors import InvalidInputError
from ..core.problem import KnapsackProblem
from ..core.utils import RandomSource, ensure_rng


@dataclass
class InstanceSpec:
    """Parameters for a random knapsack instance.

    Either `capacity` is given explicitly or it is `capacity_ratio` times the
    total generated weight (controls tightness). With `integral=True` weights and
    capacity are whole numbers, as the dynamic-programming solver requires.
    """
    n_items: int
    weight_range: Tuple[float, float] = (0.0, 100.0)
    value_range: Tuple[float, float] = (0.0, 100.0)
    capacity: Optional[float] = None
    capacity_ratio: float = 0.5
    integral: bool = False
    seed: Optional[int] = None


def generate_instance(spec: InstanceSpec, rng: RandomSource = None) -> KnapsackProblem:
    """Draws a random instance. `rng` wins over `spec.seed` when both are given."""
    rng = ensure_rng(rng if rng is not None else spec.seed)
    n = int(spec.n_items)
    if n < 0:
        raise InvalidInputError("n_items must be >= 0")
    w_low, w_high = sorted(spec.weight_range)
    v_low, v_high = sorted(spec.value_range)
    if w_high <= 0 or w_low < 0:
        raise InvalidInputError(f"weight_range must be non-negative with a positive upper end: {spec.weight_range!r}")
    if v_low < 0:
        raise InvalidInputError(f"value_range must be non-negative: {spec.value_range!r}")

    if spec.integral:
        lo, hi = max(1, math.ceil(w_low)), math.floor(w_high)
        if hi < lo:
            raise InvalidInputError(f"weight_range {spec.weight_range!r} contains no positive integer")
        weights = rng.integers(lo, hi + 1, size=n).astype(float)
    else:
        # 1 - U[0, 1) lies in (0, 1], so weights stay strictly positive even when w_low == 0
        weights = w_low + (w_high - w_low) * (1.0 - rng.random(n))
    values = rng.uniform(v_low, v_high, size=n)

    if spec.capacity is not None:
        capacity = float(spec.capacity)
    else:
        capacity = float(spec.capacity_ratio) * float(np.sum(weights))
    if spec.integral:
        capacity = float(math.floor(capacity))
    return KnapsackProblem(values, weights, capacity)
