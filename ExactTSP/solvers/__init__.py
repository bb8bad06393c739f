from __future__ import annotations

from typing import Any

from ExactTSP.solvers.base import AlgorithmResult, BaseSolver, SolverSpec
from ExactTSP.solvers.exact import BruteForceSolver, HeldKarpSolver
from ExactTSP.utils.taxonomy import AlgorithmFamily

SOLVER_SPECS: dict[str, SolverSpec] = {
    HeldKarpSolver.name: SolverSpec(
        name=HeldKarpSolver.name,
        cls=HeldKarpSolver,
        family=HeldKarpSolver.family,
        supports_directed=HeldKarpSolver.supports_directed,
    ),
    BruteForceSolver.name: SolverSpec(
        name=BruteForceSolver.name,
        cls=BruteForceSolver,
        family=BruteForceSolver.family,
        supports_directed=BruteForceSolver.supports_directed,
    ),
}

SOLVER_REGISTRY: dict[str, type[BaseSolver]] = {name: spec.cls for name, spec in SOLVER_SPECS.items()}
SOLVER_FAMILIES: dict[str, AlgorithmFamily] = {name: spec.family for name, spec in SOLVER_SPECS.items()}


def get_solver(name: str, **kwargs: Any) -> BaseSolver:
    solver_cls = SOLVER_REGISTRY.get(name)
    if solver_cls is None:
        raise KeyError(f"Unknown solver: {name}")
    return solver_cls(**kwargs)


__all__ = [
    "AlgorithmResult",
    "BaseSolver",
    "SOLVER_FAMILIES",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "AlgorithmFamily",
    "get_solver",
    "BruteForceSolver",
    "HeldKarpSolver",
]
