"""
Command-line benchmark: load one or more instances (or generate one), run the
selected solvers on each and print a comparison table.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..core.errors import KnapsackError
from ..core.problem import KnapsackProblem
from ..core.solver import KnapsackSolver
from ..core.utils import setup_logging
from ..instances import InstanceSpec, generate_instance, read_instance, write_instance
from ..solvers.registry import build_solver, list_solvers
from .cli_args import (
    add_genetic_args,
    add_instance_args,
    add_output_args,
    add_solver_args,
    genetic_config_from_args,
)
from .runner import BenchmarkRecord, format_report, plot_convergence, run_benchmark

PACKAGE_LOGGER = __package__.split(".")[0]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare greedy, dynamic-programming, branch-and-bound and genetic knapsack solvers."
    )
    add_instance_args(parser)
    add_solver_args(parser)
    add_genetic_args(parser)
    add_output_args(parser)
    return parser


def load_problems(args: argparse.Namespace) -> List[Tuple[str, KnapsackProblem]]:
    """Returns (label, problem) pairs: every --instance file, or one generated instance."""
    if args.instance:
        return [(Path(path).stem, read_instance(path, integral=args.integral)) for path in args.instance]
    spec = InstanceSpec(
        n_items=args.items,
        weight_range=tuple(args.weight_range),
        value_range=tuple(args.value_range),
        capacity=args.capacity,
        capacity_ratio=args.capacity_ratio,
        integral=args.integral,
        seed=args.seed,
    )
    return [(f"random{args.items}", generate_instance(spec))]


def build_solvers(args: argparse.Namespace) -> List[KnapsackSolver]:
    names = args.solver or ["all"]
    if "all" in names:
        names = list_solvers()
    solvers: List[KnapsackSolver] = []
    for name in dict.fromkeys(names):
        if name == "dp":
            solvers.append(build_solver(name, max_table_cells=args.dp_max_cells))
        elif name == "genetic":
            solvers.append(build_solver(name, config=genetic_config_from_args(args), seed=args.seed))
        else:
            solvers.append(build_solver(name))
    return solvers


def route_package_logs(log: logging.Logger) -> logging.Logger:
    """Sends the solver module loggers through the benchmark logger's handlers and level."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(log.level)
    for handler in log.handlers:
        if handler not in package_logger.handlers:
            package_logger.addHandler(handler)
    return package_logger


def _run_label(args: argparse.Namespace) -> str:
    if not args.instance:
        return f"random{args.items}"
    if len(args.instance) == 1:
        return Path(args.instance[0]).stem
    return f"batch{len(args.instance)}"


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log = setup_logging("benchmark", _run_label(args), log_dir=args.log_dir,
                        level=logging.DEBUG if args.verbose else logging.INFO)
    route_package_logs(log)

    try:
        problems = load_problems(args)
        solvers = build_solvers(args)
    except KnapsackError as exc:
        parser.error(str(exc))
    except OSError as exc:
        parser.error(f"cannot read instance: {exc}")

    if args.save_instance:
        if args.instance:
            log.warning("--save-instance ignored: instances were read from files")
        else:
            path = write_instance(args.save_instance, problems[0][1])
            log.info("Instance written to %s", path)

    records: List[BenchmarkRecord] = []
    for label, problem in problems:
        info = problem.get_problem_info()
        log.info("Instance %s: %d items, capacity %g, total weight %g, integral=%s",
                 label, info["dimension"], info["capacity"], info["total_weight"], info["integral"])
        instance_records = run_benchmark(problem, solvers, repeats=args.repeats, rng=args.seed,
                                         log=log, label=label if len(problems) > 1 else None)
        records.extend(instance_records)

        if args.plot_dir:
            for rec in instance_records:
                if rec.history:
                    path = plot_convergence(rec.history, Path(args.plot_dir) / f"{label}_{rec.solver}_convergence.png",
                                            title=f"Genetic convergence ({label})")
                    log.info("Convergence plot saved to %s", path)

    print(format_report(records))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
