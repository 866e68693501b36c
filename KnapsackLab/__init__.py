"""
KnapsackLab

Four knapsack solvers (greedy fractional relaxation, dynamic programming,
best-first branch and bound, genetic algorithm) over one shared item model,
plus instance generation and a benchmark harness for comparing them.
"""

from .core import (
    InvalidInputError,
    Item,
    KnapsackError,
    KnapsackProblem,
    KnapsackSolver,
    ResourceLimitError,
    Solution,
    TypeMismatchError,
)
from .solvers import (
    BranchAndBoundSolver,
    DynamicProgrammingSolver,
    GeneticConfig,
    GeneticSolver,
    GreedySolver,
    branch_and_bound_solve,
    build_solver,
    dp_solve,
    genetic_solve,
    greedy_solve,
    list_solvers,
)

__version__ = "0.1.0"
__all__ = [
    'Item', 'KnapsackProblem', 'Solution', 'KnapsackSolver',
    'KnapsackError', 'InvalidInputError', 'TypeMismatchError', 'ResourceLimitError',
    'GreedySolver', 'DynamicProgrammingSolver', 'BranchAndBoundSolver', 'GeneticSolver', 'GeneticConfig',
    'greedy_solve', 'dp_solve', 'branch_and_bound_solve', 'genetic_solve',
    'build_solver', 'list_solvers',
    '__version__'
]
