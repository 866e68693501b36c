"""
Knapsack solver implementations.

- GreedySolver: fractional relaxation, the comparison baseline
- DynamicProgrammingSolver: exact 0-1, integer weights only
- BranchAndBoundSolver: exact 0-1, best-first search with admissible bounds
- GeneticSolver: heuristic 0-1, seedable
"""

from .greedy import GreedySolver, greedy_solve
from .dynamic import DynamicProgrammingSolver, dp_solve
from .branch_and_bound import BranchAndBoundSolver, SearchNode, branch_and_bound_solve
from .genetic import Chromosome, GeneticConfig, GeneticSolver, genetic_solve
from .registry import (
    SolverFactory,
    build_solver,
    get_solver_factory,
    list_solvers,
    register_solver,
)

# =============================================================================
# Solver list, in the order reports show them
# =============================================================================
SOLVER_CLASSES = [
    GreedySolver,
    DynamicProgrammingSolver,
    BranchAndBoundSolver,
    GeneticSolver,
]

EXACT_SOLVER_CLASSES = [
    DynamicProgrammingSolver,
    BranchAndBoundSolver,
]

__all__ = [
    "GreedySolver", "greedy_solve",
    "DynamicProgrammingSolver", "dp_solve",
    "BranchAndBoundSolver", "SearchNode", "branch_and_bound_solve",
    "GeneticSolver", "GeneticConfig", "Chromosome", "genetic_solve",
    "SolverFactory", "register_solver", "get_solver_factory", "list_solvers", "build_solver",
    "SOLVER_CLASSES", "EXACT_SOLVER_CLASSES",
]
