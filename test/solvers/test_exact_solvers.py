"""
Tests for the greedy, dynamic-programming and branch-and-bound solvers.

The exact solvers are checked against each other and against exhaustive
enumeration on small random instances.
"""

import itertools
import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from KnapsackLab.core import (
    InvalidInputError,
    Item,
    KnapsackProblem,
    ResourceLimitError,
    TypeMismatchError,
)
from KnapsackLab.instances import InstanceSpec, generate_instance
from KnapsackLab.solvers import (
    BranchAndBoundSolver,
    DynamicProgrammingSolver,
    GreedySolver,
    branch_and_bound_solve,
    build_solver,
    dp_solve,
    greedy_solve,
)


def brute_force(problem: KnapsackProblem) -> float:
    best = 0.0
    for mask in itertools.product((False, True), repeat=problem.n_items):
        if problem.total_weight(mask) <= problem.capacity:
            best = max(best, problem.total_value(mask))
    return best


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def textbook_problem():
    return KnapsackProblem.from_items(
        [Item(10, 20), Item(20, 30), Item(30, 66), Item(40, 40), Item(50, 70)],
        capacity=100,
    )


@pytest.fixture
def classic_fractional_problem():
    # values, weights, capacity of the usual fractional example: optimum 240
    return KnapsackProblem([60, 100, 120], [10, 20, 30], 50)


def _random_integral(seed: int, n: int = 12) -> KnapsackProblem:
    return generate_instance(InstanceSpec(n, weight_range=(1, 40), value_range=(0, 60),
                                          capacity_ratio=0.4, integral=True, seed=seed))


def _random_real(seed: int, n: int = 10) -> KnapsackProblem:
    return generate_instance(InstanceSpec(n, weight_range=(0.5, 30), value_range=(0, 50),
                                          capacity_ratio=0.5, seed=seed))


# =============================================================================
# Greedy (fractional relaxation)
# =============================================================================

class TestGreedySolver:

    def test_takes_fraction_of_blocking_item(self, classic_fractional_problem):
        solution = greedy_solve(classic_fractional_problem)
        assert solution.value == pytest.approx(240.0)
        np.testing.assert_allclose(solution.representation, [1.0, 1.0, 2.0 / 3.0])
        assert solution.weight == pytest.approx(50.0)
        assert solution.is_fractional

    def test_everything_fits(self):
        problem = KnapsackProblem([5, 7, 1], [2, 3, 1], 100)
        solution = greedy_solve(problem)
        assert solution.value == 13.0
        np.testing.assert_array_equal(solution.representation, [1.0, 1.0, 1.0])

    def test_zero_capacity_takes_nothing(self):
        solution = greedy_solve(KnapsackProblem([5, 7], [2, 3], 0))
        assert solution.value == 0.0
        assert not solution.representation.any()

    def test_single_heavy_item_is_split(self):
        solution = greedy_solve(KnapsackProblem([5.0], [10.0], 4.0))
        # no whole item fits; the relaxation takes 4/10 of it
        np.testing.assert_allclose(solution.representation, [0.4])
        assert solution.value == pytest.approx(2.0)

    def test_exact_fill_takes_no_fraction(self):
        # first two ranks fill the capacity exactly; the third is left out entirely
        solution = greedy_solve(KnapsackProblem([30, 20, 5], [10, 10, 10], 20))
        np.testing.assert_array_equal(solution.representation, [1.0, 1.0, 0.0])

    def test_allocation_in_unit_interval(self, textbook_problem):
        rep = greedy_solve(textbook_problem).representation
        assert np.all((rep >= 0.0) & (rep <= 1.0))
        assert np.count_nonzero((rep > 0.0) & (rep < 1.0)) <= 1

    @pytest.mark.parametrize("seed", range(6))
    def test_dominates_integral_optimum(self, seed):
        problem = _random_integral(seed)
        relaxed = greedy_solve(problem).value
        assert relaxed >= dp_solve(problem).value - 1e-9
        assert relaxed <= float(problem.values.sum()) + 1e-9

    def test_rejects_non_problem(self):
        with pytest.raises(InvalidInputError):
            GreedySolver().solve([(1, 2)])


# =============================================================================
# Dynamic programming
# =============================================================================

class TestDynamicProgrammingSolver:

    def test_textbook_optimum(self, textbook_problem):
        solution = dp_solve(textbook_problem)
        assert solution.value == 166.0
        assert solution.included_indices() == [1, 2, 4]
        assert solution.weight == 100.0
        assert not solution.is_fractional

    def test_real_weights_rejected(self):
        with pytest.raises(TypeMismatchError):
            dp_solve(KnapsackProblem([1.0, 2.0], [1.5, 2.0], 3))

    def test_real_capacity_rejected(self):
        with pytest.raises(TypeMismatchError):
            dp_solve(KnapsackProblem([1.0, 2.0], [1.0, 2.0], 3.5))

    def test_weight_beyond_int64_never_taken(self):
        # 1e19 is integral but does not fit in an int64
        problem = KnapsackProblem([5.0, 3.0], [1e19, 4.0], 10)
        solution = dp_solve(problem)
        assert solution.value == 3.0
        assert solution.included_indices() == [1]
        assert solution.weight == 4.0
        assert solution.is_feasible()

    def test_deterministic(self):
        problem = _random_integral(11, n=14)
        solver = DynamicProgrammingSolver()
        first = solver.solve(problem)
        second = solver.solve(problem)
        assert first == second
        assert first.weight == second.weight

    def test_table_budget_enforced(self, textbook_problem):
        # (5 + 1) * (100 + 1) cells
        with pytest.raises(ResourceLimitError):
            DynamicProgrammingSolver(max_table_cells=600).solve(textbook_problem)
        assert DynamicProgrammingSolver(max_table_cells=606).solve(textbook_problem).value == 166.0

    def test_zero_capacity(self):
        solution = dp_solve(KnapsackProblem([5, 7], [2, 3], 0))
        assert solution.value == 0.0
        assert solution.included_indices() == []

    def test_empty_instance(self):
        solution = dp_solve(KnapsackProblem([], [], 10))
        assert solution.value == 0.0
        assert solution.representation.size == 0

    @pytest.mark.parametrize("seed", range(6))
    def test_matches_brute_force(self, seed):
        problem = _random_integral(seed, n=10)
        solution = dp_solve(problem)
        assert solution.value == pytest.approx(brute_force(problem))
        assert solution.is_feasible()
        assert problem.total_value(solution.representation) == pytest.approx(solution.value)


# =============================================================================
# Branch and bound
# =============================================================================

class TestBranchAndBoundSolver:

    def test_textbook_optimum(self, textbook_problem):
        solution = branch_and_bound_solve(textbook_problem)
        assert solution.value == 166.0
        assert solution.included_indices() == [1, 2, 4]
        assert solution.nodes_visited > 0

    def test_zero_capacity_visits_nothing(self):
        solution = branch_and_bound_solve(KnapsackProblem([5, 7], [2, 3], 0))
        assert solution.value == 0.0
        assert solution.nodes_visited == 0
        assert solution.included_indices() == []

    def test_empty_instance(self):
        solution = branch_and_bound_solve(KnapsackProblem([], [], 3))
        assert solution.value == 0.0
        assert solution.nodes_visited == 0

    def test_single_item_heavier_than_capacity(self):
        solution = branch_and_bound_solve(KnapsackProblem([5.0], [10.0], 3.0))
        assert solution.value == 0.0
        assert not solution.representation.any()
        assert solution.nodes_visited == 1

    def test_everything_fits_is_decided_at_root(self):
        problem = KnapsackProblem([3.0, 4.0, 5.0], [1.0, 1.0, 1.0], 10.0)
        solution = branch_and_bound_solve(problem)
        assert solution.value == 12.0
        assert solution.nodes_visited == 0
        assert solution.included_indices() == [0, 1, 2]

    def test_deterministic(self, textbook_problem):
        solver = BranchAndBoundSolver()
        first = solver.solve(textbook_problem)
        second = solver.solve(textbook_problem)
        assert first == second
        assert first.nodes_visited == second.nodes_visited

    @pytest.mark.parametrize("seed", range(8))
    def test_matches_dynamic_programming(self, seed):
        problem = _random_integral(seed, n=14)
        bnb = branch_and_bound_solve(problem)
        dp = dp_solve(problem)
        assert bnb.value == pytest.approx(dp.value)
        assert bnb.is_feasible()
        assert problem.total_value(bnb.representation) == pytest.approx(bnb.value)
        assert bnb.nodes_visited <= 2 ** (problem.n_items + 1) - 1

    @pytest.mark.parametrize("seed", range(6))
    def test_real_weights_match_brute_force(self, seed):
        problem = _random_real(seed)
        solution = branch_and_bound_solve(problem)
        assert solution.value == pytest.approx(brute_force(problem))
        assert solution.weight <= problem.capacity + 1e-9

    @pytest.mark.parametrize("seed", range(4))
    def test_never_exceeds_relaxation(self, seed):
        problem = _random_real(seed, n=16)
        assert branch_and_bound_solve(problem).value <= greedy_solve(problem).value + 1e-9


# =============================================================================
# Scenarios shared by every 0-1 solver
# =============================================================================

@pytest.mark.parametrize("name", ["dp", "bnb", "genetic"])
class TestDegenerateScenarios:

    def _solver(self, name):
        if name == "genetic":
            return build_solver(name, population_size=10, max_generations=20, window_size=5, seed=0)
        return build_solver(name)

    def test_single_item_heavier_than_capacity(self, name):
        solution = self._solver(name).solve(KnapsackProblem([5.0], [10.0], 4.0))
        assert solution.value == 0.0
        assert solution.included_indices() == []

    def test_zero_capacity(self, name):
        solution = self._solver(name).solve(KnapsackProblem([5.0, 3.0, 8.0], [2.0, 1.0, 4.0], 0.0))
        assert solution.value == 0.0
        assert not solution.representation.any()
