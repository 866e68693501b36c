from __future__ import annotations

import argparse
from typing import Any, Tuple

from ..core.utils import float_range_type
from ..solvers.dynamic import DEFAULT_MAX_TABLE_CELLS
from ..solvers.genetic import GeneticConfig
from ..solvers.registry import list_solvers


def _three_floats(text: str) -> Tuple[float, float, float]:
    parts = [p.strip() for p in text.replace(":", ",").split(",") if p.strip()]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected three comma-separated numbers, got {text!r}")
    try:
        q1, q2, q3 = (float(p) for p in parts)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"quartile thresholds must be numbers: {text!r}") from exc
    return (q1, q2, q3)


def add_instance_args(
    parser: Any,
    *,
    items_default: int = 50,
    seed_default: int = 42,
) -> argparse.ArgumentParser:
    parser.add_argument("--instance", "-f", type=str, action="append", default=None,
                        help="Read an instance from this file instead of generating one; repeat for several.")
    parser.add_argument("--integral", action="store_true", default=False,
                        help="Integer weights and capacity (required by the dp solver).")
    parser.add_argument("--items", "-n", type=int, default=int(items_default))
    parser.add_argument("--weight-range", type=float_range_type("weight-range"), default=(0.0, 100.0))
    parser.add_argument("--value-range", type=float_range_type("value-range"), default=(0.0, 100.0))
    parser.add_argument("--capacity", type=float, default=None,
                        help="Absolute capacity; overrides --capacity-ratio.")
    parser.add_argument("--capacity-ratio", type=float, default=0.5)
    parser.add_argument("--seed", type=int, default=int(seed_default))
    parser.add_argument("--save-instance", type=str, default=None,
                        help="Write the generated instance to this file.")
    return parser


def add_solver_args(parser: Any) -> argparse.ArgumentParser:
    parser.add_argument(
        "--solver",
        "-s",
        action="append",
        choices=list_solvers() + ["all"],
        default=None,
        help="Solver to run; repeat the flag for several (default: all).",
    )
    parser.add_argument("--repeats", "-r", type=int, default=1)
    parser.add_argument("--dp-max-cells", type=int, default=int(DEFAULT_MAX_TABLE_CELLS))
    return parser


def add_genetic_args(parser: Any, *, defaults: GeneticConfig = GeneticConfig()) -> argparse.ArgumentParser:
    parser.add_argument("--population", type=int, default=defaults.population_size)
    parser.add_argument("--generations", type=int, default=defaults.max_generations)
    parser.add_argument("--window", type=int, default=defaults.window_size)
    parser.add_argument("--mutation-prob", type=float, default=defaults.mutation_probability)
    parser.add_argument("--mutation-fraction", type=float, default=defaults.mutation_fraction)
    parser.add_argument("--crossover-prob", type=float, default=defaults.crossover_probability)
    parser.add_argument("--elite-fraction", type=float, default=defaults.elite_fraction)
    parser.add_argument("--quartiles", type=_three_floats, default=tuple(defaults.quartile_thresholds),
                        help="Cumulative selection probabilities of the top three quartiles, e.g. '0.5,0.8,0.95'.")
    return parser


def add_output_args(parser: Any) -> argparse.ArgumentParser:
    parser.add_argument("--log-dir", type=str, default=None,
                        help="Also append log lines to <log-dir>/benchmark_logs.log.")
    parser.add_argument("--plot-dir", type=str, default=None,
                        help="Save the genetic convergence plot in this directory.")
    parser.add_argument("--verbose", "-v", action="store_true", default=False)
    return parser


def genetic_config_from_args(args: argparse.Namespace) -> GeneticConfig:
    return GeneticConfig(
        population_size=args.population,
        max_generations=args.generations,
        window_size=args.window,
        mutation_probability=args.mutation_prob,
        mutation_fraction=args.mutation_fraction,
        crossover_probability=args.crossover_prob,
        elite_fraction=args.elite_fraction,
        quartile_thresholds=tuple(args.quartiles),
    ).validate()
