"""
Genetic algorithm for the 0-1 knapsack.

Each chromosome is a boolean gene per item. Overweight chromosomes are
repaired by clearing genes from a random cyclic offset until they fit, so every
individual is feasible and its fitness is simply its value. The population is
rebuilt every generation through quartile-biased selection (with elitism),
single-point crossover and batch bit-flip mutation. The run stops after
`max_generations` or when neither the best nor the mean fitness improved over a
trailing window of generations.

The operators are not monotonic, so the best chromosome ever seen is tracked
separately from the current population.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import asdict, dataclass, fields
from typing import Any, Deque, Dict, List, Mapping, Optional, Tuple

import numpy as np

from ..core.errors import ConfigurationError
from ..core.problem import KnapsackProblem
from ..core.solution import Solution
from ..core.solver import KnapsackSolver
from ..core.utils import RandomSource, ensure_rng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneticConfig:
    population_size: int = 100
    max_generations: int = 1000
    # generations tracked for the stagnation check
    window_size: int = 10
    mutation_probability: float = 0.05
    # upper bound on genes flipped by one mutation, as a fraction of the genome
    mutation_fraction: float = 0.01
    crossover_probability: float = 0.85
    elite_fraction: float = 0.1
    # cumulative probabilities of drawing from the 1st, 2nd and 3rd fitness quartile
    quartile_thresholds: Tuple[float, float, float] = (0.5, 0.8, 0.95)

    def validate(self) -> "GeneticConfig":
        if self.population_size <= 0:
            raise ConfigurationError("population_size must be > 0")
        if self.max_generations <= 0:
            raise ConfigurationError("max_generations must be > 0")
        if not 0 < self.window_size < self.max_generations:
            raise ConfigurationError("window_size must be > 0 and < max_generations")
        for label in ("mutation_probability", "crossover_probability", "elite_fraction"):
            value = getattr(self, label)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{label} must be in [0, 1], got {value!r}")
        if not 0.0 < self.mutation_fraction <= 1.0:
            raise ConfigurationError(f"mutation_fraction must be in (0, 1], got {self.mutation_fraction!r}")
        thresholds = tuple(self.quartile_thresholds)
        if len(thresholds) != 3:
            raise ConfigurationError("quartile_thresholds needs exactly three values")
        if any(not 0.0 <= q <= 1.0 for q in thresholds) or list(thresholds) != sorted(thresholds):
            raise ConfigurationError(f"quartile_thresholds must be ascending values in [0, 1], got {thresholds!r}")
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GeneticConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown genetic parameters: {sorted(unknown)}")
        params = dict(data)
        if "quartile_thresholds" in params:
            params["quartile_thresholds"] = tuple(params["quartile_thresholds"])
        return cls(**params).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Chromosome:
    genes: np.ndarray
    fitness: float = 0.0
    weight: float = 0.0

    def copy(self) -> "Chromosome":
        return Chromosome(self.genes.copy(), self.fitness, self.weight)


class GeneticSolver(KnapsackSolver):
    """Heuristic 0-1 solver; good solutions in bounded time, optimality not guaranteed."""
    name = "genetic"
    stochastic = True
    options = ("seed",) + tuple(f.name for f in fields(GeneticConfig))

    def __init__(self, config: Optional[GeneticConfig] = None, seed: Optional[int] = None, **overrides):
        config = config or GeneticConfig()
        if overrides:
            config = GeneticConfig.from_dict({**config.to_dict(), **overrides})
        self.config = config.validate()
        self.seed = seed
        super().__init__(seed=seed, **self.config.to_dict())

    def _solve(self, problem: KnapsackProblem, rng: RandomSource = None, **kwargs) -> Solution:
        cfg = self.config
        rng = ensure_rng(rng if rng is not None else self.seed)
        n = problem.n_items
        if n == 0:
            return Solution(np.zeros(0, dtype=bool), problem, 0.0, self.name, generations=0)

        best_window: Deque[float] = deque(maxlen=cfg.window_size)
        mean_window: Deque[float] = deque(maxlen=cfg.window_size)
        history: List[Dict[str, float]] = []
        best_genes = np.zeros(n, dtype=bool)
        best_value = -math.inf

        population = [self._evaluate(Chromosome(rng.random(n) < 0.5), problem, rng)
                      for _ in range(cfg.population_size)]
        generation = 0

        while True:
            fitness = np.array([c.fitness for c in population])
            leader = int(np.argmax(fitness))
            gen_best, gen_mean = float(fitness[leader]), float(fitness.mean())
            best_window.append(gen_best)
            mean_window.append(gen_mean)
            history.append({"generation": generation, "best_fitness": gen_best, "avg_fitness": gen_mean})
            if gen_best > best_value:
                best_value = gen_best
                best_genes = population[leader].genes.copy()

            if self._should_stop(generation, best_window, mean_window):
                break

            selected = self._select(population, rng)
            self._crossover(selected, rng)
            self._mutate(selected, rng)
            population = [self._evaluate(c, problem, rng) for c in selected]
            generation += 1

        logger.debug("genetic: stopped after %d generations, best %g", generation, best_value)
        return Solution(best_genes, problem, best_value, self.name,
                        generations=generation, history=history)

    # ---- operators ----
    def _evaluate(self, chrom: Chromosome, problem: KnapsackProblem, rng: np.random.Generator) -> Chromosome:
        """Repairs `chrom` in place (clearing genes cyclically from a random offset) and sets its fitness."""
        genes = chrom.genes
        weight = float(np.dot(problem.weights, genes))
        if weight > problem.capacity:
            n = genes.size
            offset = int(rng.integers(n))
            order = np.roll(np.arange(n), -offset)
            active = order[genes[order]]
            removed = np.cumsum(problem.weights[active])
            cut = min(int(np.searchsorted(removed, weight - problem.capacity, side="left")) + 1, active.size)
            genes[active[:cut]] = False
            weight = float(np.dot(problem.weights, genes))
            # the cumulative sum and the dot product may round differently
            while weight > problem.capacity and cut < active.size:
                genes[active[cut]] = False
                cut += 1
                weight = float(np.dot(problem.weights, genes))
        chrom.weight = weight
        chrom.fitness = float(np.dot(problem.values, genes))
        return chrom

    def _select(self, population: List[Chromosome], rng: np.random.Generator) -> List[Chromosome]:
        size = len(population)
        fitness = np.array([c.fitness for c in population])
        ranked = np.argsort(-fitness, kind="stable")
        n_elite = min(size, math.ceil(self.config.elite_fraction * size - 1e-9))
        selected = [population[i].copy() for i in ranked[:n_elite]]

        q1, q2, q3 = self.config.quartile_thresholds
        for _ in range(size - n_elite):
            r = rng.random()
            band = 0 if r <= q1 else 1 if r <= q2 else 2 if r <= q3 else 3
            pos = min(size - 1, int((band + rng.random()) * size / 4))
            selected.append(population[ranked[pos]].copy())
        return selected

    def _crossover(self, selected: List[Chromosome], rng: np.random.Generator) -> None:
        for i in range(1, len(selected), 2):
            if rng.random() >= self.config.crossover_probability:
                continue
            a, b = selected[i - 1].genes, selected[i].genes
            cut = int(rng.integers(a.size))
            head = a[:cut].copy()
            a[:cut] = b[:cut]
            b[:cut] = head

    def _mutate(self, selected: List[Chromosome], rng: np.random.Generator) -> None:
        for chrom in selected:
            if rng.random() >= self.config.mutation_probability:
                continue
            n = chrom.genes.size
            limit = max(1, math.ceil(n * self.config.mutation_fraction))
            idx = rng.integers(n, size=int(rng.integers(1, limit + 1)))
            chrom.genes[idx] = ~chrom.genes[idx]

    def _should_stop(self, generation: int, best_window: Deque[float], mean_window: Deque[float]) -> bool:
        if generation >= self.config.max_generations:
            return True
        if generation < self.config.window_size:
            return False
        # improvement = some later window entry strictly beats the oldest one
        oldest_best, oldest_mean = best_window[0], mean_window[0]
        recent = range(1, len(best_window))
        improved = any(best_window[i] > oldest_best or mean_window[i] > oldest_mean for i in recent)
        return not improved


def genetic_solve(
    problem: KnapsackProblem,
    config: Optional[GeneticConfig] = None,
    seed: Optional[int] = None,
    rng: RandomSource = None,
) -> Solution:
    return GeneticSolver(config, seed=seed).solve(problem, rng=rng)
