from __future__ import annotations

import itertools
import logging
from typing import Any

from ExactTSP.graph import WeightMatrix
from ExactTSP.solvers.base import AlgorithmResult, BaseSolver, SolveStatus, best_cycle, current_time
from ExactTSP.trace import Observer
from ExactTSP.utils.taxonomy import AlgorithmFamily

logger = logging.getLogger(__name__)

BRUTE_FORCE_MAX_CITIES = 9


class BruteForceSolver(BaseSolver):
    """Enumerates every ordering of the non-source cities. Emits no trace events."""

    name = "brute_force"
    family = AlgorithmFamily.ENUMERATION
    supports_directed = True

    def __init__(self, max_cities: int = BRUTE_FORCE_MAX_CITIES, zero_is_edge: bool | None = None):
        if max_cities < 1:
            raise ValueError(f"max_cities must be at least 1, got {max_cities}")
        self.max_cities = max_cities
        self.zero_is_edge = zero_is_edge

    def solve(self, graph: Any, source: int = 0, observer: Observer | None = None) -> AlgorithmResult:
        start_time = current_time()
        matrix = WeightMatrix.from_array(graph, zero_is_edge=self.zero_is_edge)
        source = matrix.validate_source(source)
        n = matrix.n
        metadata: dict[str, Any] = {"num_cities": n, "source": source, "max_cities": self.max_cities}

        if n > self.max_cities:
            logger.info("Refusing %d-city instance (ceiling is %d)", n, self.max_cities)
            return self._result(SolveStatus.TOO_LARGE, start_time, metadata=metadata)
        if n == 1:
            return self._result(SolveStatus.COMPLETE, start_time, path=best_cycle([source]), cost=0.0, metadata=metadata)

        others = [city for city in range(n) if city != source]
        best_cost = float("inf")
        best_path: list[int] | None = None
        permutations = 0

        for order in itertools.permutations(others):
            permutations += 1
            cycle = [source, *order, source]
            cost = 0.0
            for a, b in zip(cycle, cycle[1:]):
                if not matrix.edges[a, b]:
                    break
                cost += float(matrix.weights[a, b])
            else:
                if cost < best_cost:
                    best_cost = cost
                    best_path = cycle

        metadata["permutations"] = permutations
        if best_path is None:
            return self._result(SolveStatus.NOT_FOUND, start_time, metadata=metadata)
        return self._result(SolveStatus.COMPLETE, start_time, path=best_path, cost=best_cost, metadata=metadata)


__all__ = ["BRUTE_FORCE_MAX_CITIES", "BruteForceSolver"]
