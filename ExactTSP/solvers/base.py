from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Type

from ExactTSP.errors import IncompleteTour
from ExactTSP.graph import WeightMatrix
from ExactTSP.trace import Observer
from ExactTSP.utils.taxonomy import AlgorithmFamily, SolveStatus


@dataclass
class AlgorithmResult:
    """Container capturing the outcome of running a TSP solver."""

    name: str
    path: List[int] | None
    cost: float | None
    elapsed: float
    status: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status == SolveStatus.COMPLETE.value


def current_time() -> float:
    return time.perf_counter()


def compute_cycle_cost(graph: WeightMatrix, cycle: Sequence[int]) -> float:
    """Compute tour cost (including return leg); every edge must exist."""
    if not cycle:
        return float("inf")
    cost = 0.0
    for i in range(len(cycle)):
        a = cycle[i]
        b = cycle[(i + 1) % len(cycle)]
        if a == b:
            continue
        if not graph.has_edge(a, b):
            raise IncompleteTour(cycle, (a, b))
        cost += graph.weight(a, b)
    return cost


def best_cycle(points: Sequence[int]) -> List[int]:
    cycle = list(points)
    if cycle and (len(cycle) == 1 or cycle[0] != cycle[-1]):
        cycle.append(cycle[0])
    return cycle


@dataclass(frozen=True)
class SolverSpec:
    """Metadata describing a solver implementation."""

    name: str
    cls: Type["BaseSolver"]
    family: AlgorithmFamily
    supports_directed: bool = True


class BaseSolver:
    """Common interface for exact TSP solvers."""

    name: str
    family: AlgorithmFamily
    supports_directed: bool = True

    def solve(self, graph: Any, source: int = 0, observer: Observer | None = None) -> AlgorithmResult:  # noqa: D401
        """Solve a TSP instance represented as a weight matrix."""
        raise NotImplementedError

    def __call__(self, graph: Any, source: int = 0, observer: Observer | None = None) -> AlgorithmResult:
        return self.solve(graph, source=source, observer=observer)

    def _result(
        self,
        status: SolveStatus,
        start_time: float,
        path: List[int] | None = None,
        cost: float | None = None,
        metadata: Dict[str, Any] | None = None,
    ) -> AlgorithmResult:
        return AlgorithmResult(
            name=self.name,
            path=path,
            cost=cost,
            elapsed=current_time() - start_time,
            status=status.value,
            metadata=metadata or {},
        )


__all__ = [
    "AlgorithmResult",
    "AlgorithmFamily",
    "BaseSolver",
    "SolveStatus",
    "SolverSpec",
    "best_cycle",
    "compute_cycle_cost",
    "current_time",
]
