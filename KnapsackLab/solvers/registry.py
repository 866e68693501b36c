"""
Solver registry.

Each solver registers a factory that knows its class and default keyword
arguments. Callers build solvers by name, optionally overriding parameters,
which lets the benchmark harness pick solvers from the command line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from ..core.errors import ConfigurationError
from ..core.solver import KnapsackSolver


@dataclass
class SolverFactory:
    """Describes how to instantiate a solver."""
    cls: Type[KnapsackSolver]
    default_kwargs: Dict[str, Any] = field(default_factory=dict)
    description: str = ""

    def build(self, overrides: Optional[Dict[str, Any]] = None) -> KnapsackSolver:
        params: Dict[str, Any] = dict(self.default_kwargs)
        if overrides:
            params.update(overrides)
        return self.cls(**params)


_solver_factories: Dict[str, SolverFactory] = {}
_BUILTINS_REGISTERED = False


def register_solver(name: str, factory: SolverFactory) -> None:
    """Register (or override) a solver factory."""
    if not issubclass(factory.cls, KnapsackSolver):
        raise ConfigurationError(f"{factory.cls!r} is not a KnapsackSolver")
    _solver_factories[name] = factory


def get_solver_factory(name: str) -> SolverFactory:
    _ensure_builtin_solvers()
    factory = _solver_factories.get(name)
    if factory is None:
        raise ConfigurationError(f"Solver '{name}' is not registered (known: {', '.join(list_solvers())}).")
    return factory


def list_solvers() -> List[str]:
    _ensure_builtin_solvers()
    return list(_solver_factories)


def build_solver(name: str, **overrides: Any) -> KnapsackSolver:
    return get_solver_factory(name).build(overrides)


# --- Built-in definitions -------------------------------------------------

def _ensure_builtin_solvers():
    global _BUILTINS_REGISTERED
    if _BUILTINS_REGISTERED:
        return
    _BUILTINS_REGISTERED = True
    _register_builtin_solvers()


def _register_builtin_solvers():
    from .greedy import GreedySolver
    from .dynamic import DynamicProgrammingSolver
    from .branch_and_bound import BranchAndBoundSolver
    from .genetic import GeneticSolver

    for cls in (GreedySolver, DynamicProgrammingSolver, BranchAndBoundSolver, GeneticSolver):
        _solver_factories.setdefault(cls.name, SolverFactory(cls=cls, description=cls.__doc__.strip()))
