"""
Tests for random instance generation and the plain-text instance format.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from KnapsackLab.core import InvalidInputError, KnapsackProblem, TypeMismatchError
from KnapsackLab.instances import (
    InstanceSpec,
    format_instance,
    generate_instance,
    parse_instance,
    read_instance,
    write_instance,
)


# =============================================================================
# Generator
# =============================================================================

class TestGenerator:

    def test_integral_instance(self):
        problem = generate_instance(InstanceSpec(30, weight_range=(1, 20), integral=True, seed=1))
        assert problem.n_items == 30
        assert problem.is_integral()
        assert problem.weights.min() >= 1 and problem.weights.max() <= 20

    def test_real_weights_positive_from_zero_lower_end(self):
        problem = generate_instance(InstanceSpec(200, weight_range=(0, 1), seed=2))
        assert np.all(problem.weights > 0)
        assert np.all(problem.weights <= 1)

    def test_seed_is_reproducible(self):
        spec = InstanceSpec(25, seed=42)
        a, b = generate_instance(spec), generate_instance(spec)
        np.testing.assert_array_equal(a.weights, b.weights)
        np.testing.assert_array_equal(a.values, b.values)
        assert a.capacity == b.capacity

    def test_capacity_ratio_and_explicit_capacity(self):
        ratio = generate_instance(InstanceSpec(10, capacity_ratio=0.25, seed=3))
        assert ratio.capacity == pytest.approx(0.25 * ratio.weights.sum())
        fixed = generate_instance(InstanceSpec(10, capacity=77.0, seed=3))
        assert fixed.capacity == 77.0

    def test_integral_capacity_is_floored(self):
        problem = generate_instance(InstanceSpec(5, capacity=12.9, integral=True, seed=0))
        assert problem.capacity == 12.0

    @pytest.mark.parametrize(
        "spec",
        [
            InstanceSpec(-1),
            InstanceSpec(5, weight_range=(0, 0)),
            InstanceSpec(5, value_range=(-5, 5)),
            InstanceSpec(5, weight_range=(0.2, 0.8), integral=True),
        ],
    )
    def test_bad_specs(self, spec):
        with pytest.raises(InvalidInputError):
            generate_instance(spec)


# =============================================================================
# Text format
# =============================================================================

class TestInstanceFormat:

    def test_format(self):
        text = format_instance(KnapsackProblem([20, 30.5], [10, 20], 100))
        assert text == "100 2\n10 20\n20 30.5\n"

    def test_file_round_trip(self, tmp_path):
        problem = generate_instance(InstanceSpec(15, seed=9))
        path = write_instance(tmp_path / "cases" / "real15.txt", problem)
        loaded = read_instance(path)
        np.testing.assert_array_equal(loaded.weights, problem.weights)
        np.testing.assert_array_equal(loaded.values, problem.values)
        assert loaded.capacity == problem.capacity

    def test_blank_lines_ignored(self):
        problem = parse_instance("\n50 2\n\n5 7\n3 4\n\n")
        assert problem.n_items == 2
        assert problem.capacity == 50.0

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "100\n10 20\n",               # header without count
            "100 2\n10 20\n",             # fewer rows than announced
            "100 1\n10 20 30\n",          # three columns
            "100 1\nten 20\n",            # not a number
            "100 1.5\n10 20\n",           # fractional count
            "100 1\n0 20\n",              # zero weight
        ],
    )
    def test_malformed_input(self, text):
        with pytest.raises(InvalidInputError):
            parse_instance(text)

    def test_error_names_the_line(self):
        with pytest.raises(InvalidInputError, match=r"cases.txt:3"):
            parse_instance("10 2\n1 1\n1 x\n", source="cases.txt")

    def test_integral_mismatch(self):
        with pytest.raises(TypeMismatchError):
            parse_instance("10 1\n2.5 3\n", integral=True)
        assert parse_instance("10 1\n2 3.5\n", integral=True).is_integral()

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_instance(tmp_path / "absent.txt")
