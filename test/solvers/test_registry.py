"""
Tests for the solver registry and the shared solver interface.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from KnapsackLab.core import ConfigurationError, KnapsackProblem, KnapsackSolver, Solution
from KnapsackLab.solvers import (
    EXACT_SOLVER_CLASSES,
    SOLVER_CLASSES,
    BranchAndBoundSolver,
    DynamicProgrammingSolver,
    GeneticSolver,
    GreedySolver,
    SolverFactory,
    build_solver,
    get_solver_factory,
    list_solvers,
    register_solver,
)
from KnapsackLab.solvers import registry


class _TakeNothingSolver(KnapsackSolver):
    """Returns the empty selection."""
    name = "nothing"

    def _solve(self, problem, **kwargs):
        return Solution(np.zeros(problem.n_items, dtype=bool), problem, 0.0, self.name)


@pytest.fixture
def scratch_registration():
    yield "nothing"
    registry._solver_factories.pop("nothing", None)


class TestRegistry:

    def test_builtins_registered(self):
        assert list_solvers()[:4] == ["greedy", "dp", "bnb", "genetic"]
        assert [cls.name for cls in SOLVER_CLASSES] == ["greedy", "dp", "bnb", "genetic"]
        assert EXACT_SOLVER_CLASSES == [DynamicProgrammingSolver, BranchAndBoundSolver]

    @pytest.mark.parametrize(
        "name, cls",
        [("greedy", GreedySolver), ("dp", DynamicProgrammingSolver),
         ("bnb", BranchAndBoundSolver), ("genetic", GeneticSolver)],
    )
    def test_build_by_name(self, name, cls):
        solver = build_solver(name)
        assert isinstance(solver, cls)
        assert solver.name == name
        assert get_solver_factory(name).description

    def test_overrides_reach_the_solver(self):
        assert build_solver("dp", max_table_cells=10).max_table_cells == 10
        assert build_solver("genetic", population_size=12).config.population_size == 12

    def test_unknown_solver(self):
        with pytest.raises(ConfigurationError):
            build_solver("simplex")

    def test_register_custom_solver(self, scratch_registration):
        register_solver(scratch_registration, SolverFactory(cls=_TakeNothingSolver))
        solver = build_solver(scratch_registration)
        solution = solver.solve(KnapsackProblem([1.0, 2.0], [1.0, 1.0], 5))
        assert solution.value == 0.0
        assert solver.describe() == "Returns the empty selection."

    def test_register_rejects_non_solver(self):
        with pytest.raises(ConfigurationError):
            register_solver("bad", SolverFactory(cls=dict))

    @pytest.mark.parametrize(
        "name, overrides",
        [
            ("greedy", {"typo": 1}),
            ("bnb", {"max_table_cells": 5}),
            ("dp", {"max_cells": 5}),
            ("genetic", {"population": 10}),
        ],
    )
    def test_unknown_options_rejected(self, name, overrides):
        with pytest.raises(ConfigurationError):
            build_solver(name, **overrides)

    def test_declared_options(self):
        assert GreedySolver.options == ()
        assert DynamicProgrammingSolver.options == ("max_table_cells",)
        assert {"seed", "population_size", "window_size"} <= set(GeneticSolver.options)

    def test_flags(self):
        assert GreedySolver.fractional and not GreedySolver.stochastic
        assert GeneticSolver.stochastic and not GeneticSolver.fractional
        assert not BranchAndBoundSolver.stochastic
