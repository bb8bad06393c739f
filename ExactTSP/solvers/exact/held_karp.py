from __future__ import annotations

import logging
from typing import Any

from ExactTSP.graph import WeightMatrix
from ExactTSP.solvers.base import AlgorithmResult, BaseSolver, SolveStatus, best_cycle, current_time
from ExactTSP.solvers.exact.memo import NO_PARENT, MemoTable
from ExactTSP.trace import Initialized, Observer, RelaxationAttempted, StateImproved, TourClosed
from ExactTSP.utils.taxonomy import AlgorithmFamily

logger = logging.getLogger(__name__)

# 2^n * n^2 relaxations stays interactive up to here.
MAX_CITIES = 7


class HeldKarpSolver(BaseSolver):
    """Exact Held–Karp dynamic programme over (visited-mask, last-city) states.

    Masks are swept in increasing numeric order, so every state is final
    before it is extended. Edges are read from the explicit adjacency of
    :class:`WeightMatrix`; by default a weight of 0 counts as "no edge".
    A prebuilt matrix keeps its own zero-weight rule unless ``zero_is_edge``
    is given explicitly.
    """

    name = "held_karp"
    family = AlgorithmFamily.EXACT
    supports_directed = True

    def __init__(self, max_cities: int = MAX_CITIES, zero_is_edge: bool | None = None):
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

        weights = matrix.weights
        edges = matrix.edges
        memo = MemoTable(n)
        source_bit = 1 << source
        full_mask = (1 << n) - 1

        memo.relax(source_bit, source, 0.0, NO_PARENT)
        if observer is not None:
            observer(Initialized(mask=source_bit, city=source, memo=memo))

        relaxations = 0
        improvements = 0
        for mask in range(source_bit, full_mask + 1):
            if not mask & source_bit:
                continue
            for last in range(n):
                if not mask & (1 << last):
                    continue
                current = memo.cost_at(mask, last)
                if current is None:
                    continue
                for next_city in range(n):
                    if mask & (1 << next_city) or not edges[last, next_city]:
                        continue
                    edge_weight = float(weights[last, next_city])
                    new_mask = mask | (1 << next_city)
                    candidate = current + edge_weight
                    existing = memo.cost_at(new_mask, next_city)
                    improved = memo.improves(new_mask, next_city, candidate)
                    relaxations += 1

                    if observer is not None:
                        observer(
                            RelaxationAttempted(
                                mask=mask,
                                last=last,
                                next_city=next_city,
                                edge_weight=edge_weight,
                                current_cost=current,
                                candidate_cost=candidate,
                                existing_cost=existing,
                                improved=improved,
                                memo=memo,
                            )
                        )
                    if not improved:
                        continue

                    memo.relax(new_mask, next_city, candidate, last)
                    improvements += 1
                    if observer is not None:
                        observer(
                            StateImproved(
                                mask=mask,
                                last=last,
                                next_city=next_city,
                                new_mask=new_mask,
                                old_cost=existing,
                                new_cost=candidate,
                                path=tuple(memo.path_to(new_mask, next_city, source)),
                                memo=memo,
                            )
                        )

        best_cost = float("inf")
        best_last = -1
        for last in range(n):
            if last == source or not edges[last, source]:
                continue
            reached = memo.cost_at(full_mask, last)
            if reached is None:
                continue
            total = reached + float(weights[last, source])
            if total < best_cost:
                best_cost = total
                best_last = last

        metadata.update({"states_reached": len(memo), "relaxations": relaxations, "improvements": improvements})
        logger.debug("Sweep over %d cities: %d relaxations, %d improvements", n, relaxations, improvements)

        if best_last == -1:
            logger.debug("No Hamiltonian cycle through city %d", source)
            if observer is not None:
                observer(TourClosed(tour=None, cost=None, memo=memo))
            return self._result(SolveStatus.NOT_FOUND, start_time, metadata=metadata)

        tour = memo.path_to(full_mask, best_last, source)
        tour.append(source)
        if observer is not None:
            observer(TourClosed(tour=tuple(tour), cost=best_cost, memo=memo))
        return self._result(SolveStatus.COMPLETE, start_time, path=tour, cost=best_cost, metadata=metadata)


__all__ = ["HeldKarpSolver", "MAX_CITIES"]
