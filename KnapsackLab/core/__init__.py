"""
Core data model and interfaces shared by every knapsack solver.
"""

from .errors import (
    ConfigurationError,
    InvalidInputError,
    KnapsackError,
    ResourceLimitError,
    TypeMismatchError,
)
from .problem import Item, KnapsackProblem
from .ranking import DensityEntry, DensityRanking
from .bounds import BoundEstimate, BoundEstimator
from .solution import Solution
from .solver import KnapsackSolver

__all__ = [
    'KnapsackError', 'InvalidInputError', 'TypeMismatchError',
    'ResourceLimitError', 'ConfigurationError',
    'Item', 'KnapsackProblem',
    'DensityEntry', 'DensityRanking',
    'BoundEstimate', 'BoundEstimator',
    'Solution', 'KnapsackSolver',
]
