"""
Timed comparison runs of several solvers on one instance.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..core.errors import ResourceLimitError, TypeMismatchError
from ..core.problem import KnapsackProblem
from ..core.solution import Solution
from ..core.solver import KnapsackSolver
from ..core.utils import RandomSource, ensure_rng

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkRecord:
    solver: str
    value: float
    weight: float
    seconds: float
    repeats: int
    # mean over repeats; only differs from `value` for stochastic solvers
    mean_value: float
    nodes_visited: Optional[int] = None
    generations: Optional[int] = None
    items_taken: Optional[int] = None
    # instance label, set when several instances share one report
    instance: str = ""
    history: List[Dict[str, float]] = field(default_factory=list)

    @property
    def mean_seconds(self) -> float:
        return self.seconds / max(1, self.repeats)

    @classmethod
    def from_runs(cls, solutions: Sequence[Solution], seconds: float, instance: str = "") -> "BenchmarkRecord":
        last = solutions[-1]
        summary = last.summary()
        return cls(
            solver=summary["solver"],
            value=summary["value"],
            weight=summary["weight"],
            seconds=seconds,
            repeats=len(solutions),
            mean_value=float(np.mean([s.value for s in solutions])),
            nodes_visited=summary.get("nodes_visited"),
            generations=summary.get("generations"),
            items_taken=summary["items_taken"],
            instance=instance,
            history=list(last.history),
        )


def run_benchmark(
    problem: KnapsackProblem,
    solvers: Sequence[KnapsackSolver],
    repeats: int = 1,
    *,
    rng: RandomSource = None,
    log: Optional[logging.Logger] = None,
    label: Optional[str] = None,
) -> List[BenchmarkRecord]:
    """Runs every solver `repeats` times on `problem` and reports the last run of each.

    Stochastic solvers draw from one shared generator, so repeats explore different
    runs while the whole benchmark stays reproducible for a given seed. Solvers that
    cannot handle the instance (dp on real weights, dp over budget) are logged and skipped.
    `label` tags every record with the instance it came from.
    """
    log = log or logger
    repeats = max(1, int(repeats))
    rng = ensure_rng(rng)
    records: List[BenchmarkRecord] = []

    for solver in solvers:
        solutions: List[Solution] = []
        start = time.perf_counter()
        try:
            for _ in range(repeats):
                kwargs = {"rng": rng} if solver.stochastic else {}
                solutions.append(solver.solve(problem, **kwargs))
        except (TypeMismatchError, ResourceLimitError) as exc:
            log.warning("%s skipped: %s", solver.name, exc)
            continue
        elapsed = time.perf_counter() - start

        record = BenchmarkRecord.from_runs(solutions, elapsed, instance=label or "")
        records.append(record)
        extra = ""
        if record.nodes_visited is not None:
            extra = f", nodes visited {record.nodes_visited}"
        elif record.generations is not None:
            extra = f", generations {record.generations}, mean value {record.mean_value:.4f}"
        prefix = f"[{label}] " if label else ""
        log.info("%s%s: value %.4f, weight %.4f/%g, %.6f s per run%s",
                 prefix, record.solver, record.value, record.weight, problem.capacity, record.mean_seconds, extra)

    return records


def format_report(records: Sequence[BenchmarkRecord]) -> str:
    # the instance column only appears when records come from several instances
    width = max((len(rec.instance) for rec in records), default=0)
    if width:
        width = max(width, len("instance"))
    lead = f"{'instance':<{width}} " if width else ""
    header = lead + f"{'solver':<10} {'value':>14} {'weight':>14} {'seconds/run':>12} {'nodes':>10} {'gens':>6}"
    lines = [header, "-" * len(header)]
    for rec in records:
        nodes = "" if rec.nodes_visited is None else str(rec.nodes_visited)
        gens = "" if rec.generations is None else str(rec.generations)
        instance = f"{rec.instance:<{width}} " if width else ""
        lines.append(
            instance
            + f"{rec.solver:<10} {rec.value:>14.4f} {rec.weight:>14.4f} {rec.mean_seconds:>12.6f} {nodes:>10} {gens:>6}"
        )
    return "\n".join(lines)


def plot_convergence(history: Sequence[Dict[str, float]], save_path: Path, title: str = "Genetic convergence") -> Path:
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    generations = [h["generation"] for h in history]
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(generations, [h["best_fitness"] for h in history], linewidth=1.5, label="Best")
    ax.plot(generations, [h["avg_fitness"] for h in history], linewidth=1.0, alpha=0.8, label="Mean")
    ax.set_title(title)
    ax.set_xlabel("Generation")
    ax.set_ylabel("Fitness (total value)")
    ax.grid(True, linestyle="--", alpha=0.4)
    ax.legend()
    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    plt.close(fig)
    return save_path
