from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

import numpy as np

NO_PARENT = -1


class MemoTable:
    """Held–Karp state table stored as flat arrays indexed by ``mask * n + last``.

    A state exists exactly when its cost is finite. Costs are only ever
    replaced by strictly smaller ones.
    """

    def __init__(self, num_cities: int):
        self.num_cities = num_cities
        size = (1 << num_cities) * num_cities
        self.cost = np.full(size, np.inf, dtype=float)
        self.parent = np.full(size, NO_PARENT, dtype=np.int64)

    def index(self, mask: int, last: int) -> int:
        return mask * self.num_cities + last

    def cost_at(self, mask: int, last: int) -> float | None:
        value = self.cost[mask * self.num_cities + last]
        if value == np.inf:
            return None
        return float(value)

    def improves(self, mask: int, last: int, cost: float) -> bool:
        """True when ``cost`` would replace the stored one; an overflowed ``inf`` never does."""
        return cost < self.cost[mask * self.num_cities + last]

    def relax(self, mask: int, last: int, cost: float, parent: int) -> bool:
        idx = self.index(mask, last)
        if self.improves(mask, last, cost):
            self.cost[idx] = cost
            self.parent[idx] = parent
            return True
        return False

    def path_to(self, mask: int, last: int, source: int) -> list[int]:
        """Walk predecessors back to the base state; returns source..last."""
        base = 1 << source
        path: list[int] = []
        while True:
            path.append(last)
            if mask == base and last == source:
                break
            prev = int(self.parent[self.index(mask, last)])
            if prev == NO_PARENT or len(path) > self.num_cities:
                raise RuntimeError(f"Broken predecessor chain at state ({mask:#b}, {last})")
            mask &= ~(1 << last)
            last = prev
        path.reverse()
        return path

    def states(self) -> Iterator[tuple[int, int, float, int]]:
        for idx in np.flatnonzero(np.isfinite(self.cost)):
            mask, last = divmod(int(idx), self.num_cities)
            yield mask, last, float(self.cost[idx]), int(self.parent[idx])

    def snapshot(self) -> Mapping[tuple[int, int], tuple[float, int]]:
        return MappingProxyType({(mask, last): (cost, parent) for mask, last, cost, parent in self.states()})

    def __len__(self) -> int:
        return int(np.count_nonzero(np.isfinite(self.cost)))

    def __repr__(self) -> str:
        return f"<MemoTable num_cities={self.num_cities} states={len(self)}>"


__all__ = ["MemoTable", "NO_PARENT"]
