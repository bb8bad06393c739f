from __future__ import annotations

import logging
import time
from typing import Any, Dict

from ExactTSP.errors import InvalidGraph
from ExactTSP.graph import WeightMatrix
from ExactTSP.solvers import AlgorithmResult, BaseSolver, get_solver
from ExactTSP.trace import Observer

logger = logging.getLogger(__name__)


class ExactTSP:
    """End-to-end pipeline: problem dict -> weight matrix -> exact solver."""

    def __init__(self, solver_name: str = "held_karp", **solver_kwargs: Any):
        self.solver_name = solver_name
        self.solver_kwargs = solver_kwargs
        self.solver = get_solver(solver_name, **solver_kwargs)

    def solve(self, problem_data: Dict[str, Any], observer: Observer | None = None) -> AlgorithmResult:
        start_time = time.perf_counter()
        graph = self._to_weight_matrix(problem_data)
        source = problem_data.get("source", 0)

        result = self._solver_for(graph).solve(graph, source=source, observer=observer)
        logger.debug("%s on %d cities -> %s", self.solver_name, graph.n, result.status)

        metadata = dict(result.metadata)
        metadata.update(
            {
                "selected_solver": self.solver_name,
                "symmetric": bool(problem_data.get("symmetric", False)),
                "wallclock_total": time.perf_counter() - start_time,
            }
        )
        return AlgorithmResult(
            name=result.name,
            path=result.path,
            cost=result.cost,
            elapsed=result.elapsed,
            status=result.status,
            metadata=metadata,
        )

    def _solver_for(self, graph: WeightMatrix) -> BaseSolver:
        # the problem-level zero-weight rule wins over the one the solver was built with
        configured = self.solver_kwargs.get("zero_is_edge")
        if configured is None or bool(configured) == graph.zero_is_edge:
            return self.solver
        return get_solver(self.solver_name, **{**self.solver_kwargs, "zero_is_edge": graph.zero_is_edge})

    def _zero_is_edge(self, problem_data: Dict[str, Any], default: bool) -> bool:
        for value in (problem_data.get("zero_is_edge"), self.solver_kwargs.get("zero_is_edge")):
            if value is not None:
                return bool(value)
        return default

    def _to_weight_matrix(self, problem_data: Dict[str, Any]) -> WeightMatrix:
        if problem_data.get("distance_matrix") is not None:
            graph = WeightMatrix.from_array(
                problem_data["distance_matrix"], zero_is_edge=self._zero_is_edge(problem_data, False)
            )
        elif problem_data.get("coordinates") is not None:
            graph = WeightMatrix.from_coordinates(
                problem_data["coordinates"],
                problem_data.get("metric") or "euclidean",
                zero_is_edge=self._zero_is_edge(problem_data, True),
            )
        else:
            raise InvalidGraph("Problem data must contain either 'distance_matrix' or 'coordinates'.")

        if problem_data.get("symmetric"):
            graph = graph.symmetrized()
        return graph


__all__ = ["ExactTSP"]
