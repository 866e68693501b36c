"""
Error taxonomy shared by the knapsack solvers.

Every error derives from ValueError so callers that already guard solver
calls with `except ValueError` keep working.
"""


class KnapsackError(ValueError):
    """Base class for all KnapsackLab errors."""


class InvalidInputError(KnapsackError):
    """Raised when an item set, capacity or mask violates the domain constraints."""


class TypeMismatchError(KnapsackError):
    """Raised when an integer-only solver receives non-integral weights or capacity."""


class ResourceLimitError(KnapsackError):
    """Raised when a solver's working table would exceed the configured budget."""


class ConfigurationError(KnapsackError):
    """Raised for invalid solver parameters or unknown solver names."""
