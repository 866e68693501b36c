import abc
import logging
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigurationError, InvalidInputError
from .problem import KnapsackProblem
from .solution import Solution

logger = logging.getLogger(__name__)


class KnapsackSolver(abc.ABC):
    """
    Abstract base class for knapsack solvers.

    Each call to `solve` owns its working state; a solver instance only keeps
    its configuration, so one instance can be reused across problems.
    """
    # Registry name of the solver
    name: str = "solver"
    # Whether `solve` returns a fractional allocation instead of a 0-1 mask
    fractional: bool = False
    # Whether `solve` accepts an `rng` and can differ between calls
    stochastic: bool = False
    # Keyword options the constructor accepts; anything else is rejected
    options: Tuple[str, ...] = ()

    def __init__(self, **kwargs):
        unknown = sorted(set(kwargs) - set(self.options))
        if unknown:
            raise ConfigurationError(f"{type(self).__name__} does not accept {unknown}")
        self._config = kwargs

    def solve(self, problem: KnapsackProblem, **kwargs) -> Solution:
        """
        Validates the problem and runs the algorithm.

        Args:
            problem: The KnapsackProblem to solve.
            **kwargs: Per-call options forwarded to `_solve`.

        Returns:
            A Solution whose value matches its representation.
        """
        if not isinstance(problem, KnapsackProblem):
            raise InvalidInputError(f"{type(self).__name__} expects a KnapsackProblem, got {type(problem).__name__}")
        self._validate(problem)
        solution = self._solve(problem, **kwargs)
        logger.debug("%s solved %r: %s", self.name, problem, solution)
        return solution

    def _validate(self, problem: KnapsackProblem) -> None:
        """Hook for solver-specific preconditions; raise before any algorithmic work."""

    @abc.abstractmethod
    def _solve(self, problem: KnapsackProblem, **kwargs) -> Solution:
        """Runs the algorithm on an already validated problem."""
        pass

    def get_config(self) -> Dict[str, Any]:
        return dict(self._config)

    def describe(self) -> Optional[str]:
        doc = type(self).__doc__
        return doc.strip().splitlines()[0] if doc else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._config})"
