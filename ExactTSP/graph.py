from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np

from ExactTSP.errors import InvalidGraph, InvalidSource, NegativeWeight

INF = float("inf")

DEFAULT_MATRIX: list[list[float]] = [
    [0, 10, 15, 20],
    [10, 0, 35, 25],
    [15, 35, 0, 30],
    [20, 25, 30, 0],
]

_INFINITY_TOKENS = {"∞", "inf", "infinity"}


def parse_cell(text: str | None) -> float:
    """Parse one grid cell; blanks, infinity tokens and junk all mean "no edge"."""
    if text is None:
        return INF
    token = str(text).strip()
    if not token or token.lower() in _INFINITY_TOKENS:
        return INF
    try:
        value = float(token)
    except ValueError:
        return INF
    return value if math.isfinite(value) else INF


@dataclass(frozen=True)
class WeightMatrix:
    """Square matrix of edge weights with an explicit adjacency mask.

    ``weights[i, j]`` is the cost of the directed edge ``i -> j`` and is ``inf``
    wherever ``edges[i, j]`` is False. Self loops are never edges.
    """

    weights: np.ndarray
    edges: np.ndarray
    zero_is_edge: bool = False

    @classmethod
    def from_array(cls, weights: Any, *, zero_is_edge: bool | None = None) -> "WeightMatrix":
        """Build a matrix; ``zero_is_edge=None`` means False for raw input and "as built" for a WeightMatrix."""
        if isinstance(weights, WeightMatrix):
            return weights.with_zero_rule(zero_is_edge)
        zero_is_edge = bool(zero_is_edge)
        try:
            raw = np.array(weights, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidGraph(f"Weight matrix must be a numeric n x n array: {exc}") from exc

        if raw.ndim != 2 or raw.shape[0] != raw.shape[1]:
            raise InvalidGraph(f"Weight matrix must be square, got shape {raw.shape}", raw.shape)
        n = raw.shape[0]
        if n == 0:
            raise InvalidGraph("Weight matrix must contain at least one city", raw.shape)

        off_diagonal = ~np.eye(n, dtype=bool)
        negative = off_diagonal & (raw < 0)
        if negative.any():
            row, column = (int(v) for v in np.argwhere(negative)[0])
            raise NegativeWeight(row, column, float(raw[row, column]))

        finite = np.isfinite(raw)
        if zero_is_edge:
            edges = finite & (raw >= 0)
        else:
            edges = finite & (raw > 0)
        edges &= off_diagonal

        clean = np.where(edges, raw, INF)
        return cls._frozen(clean, edges, zero_is_edge)

    @classmethod
    def from_cells(cls, rows: Iterable[Sequence[str | None]], *, zero_is_edge: bool | None = None) -> "WeightMatrix":
        return cls.from_array([[parse_cell(cell) for cell in row] for row in rows], zero_is_edge=zero_is_edge)

    @classmethod
    def from_coordinates(cls, coordinates: Any, metric: str = "euclidean", *, zero_is_edge: bool = True) -> "WeightMatrix":
        """Pairwise distances; coincident points are a real zero-cost edge unless ``zero_is_edge=False``."""
        coords = np.asarray(coordinates, dtype=float)
        if coords.ndim != 2:
            raise InvalidGraph(f"Coordinates must be an (n, d) array, got shape {coords.shape}", coords.shape)
        diff = coords[:, None, :] - coords[None, :, :]
        if (metric or "euclidean").lower() == "manhattan":
            dist = np.abs(diff).sum(axis=-1)
        else:
            dist = np.linalg.norm(diff, axis=-1)
        return cls.from_array(dist, zero_is_edge=zero_is_edge)

    @classmethod
    def _frozen(cls, weights: np.ndarray, edges: np.ndarray, zero_is_edge: bool) -> "WeightMatrix":
        weights.setflags(write=False)
        edges.setflags(write=False)
        return cls(weights=weights, edges=edges, zero_is_edge=zero_is_edge)

    @property
    def n(self) -> int:
        return int(self.weights.shape[0])

    def __len__(self) -> int:
        return self.n

    def has_edge(self, i: int, j: int) -> bool:
        return bool(self.edges[i, j])

    def weight(self, i: int, j: int) -> float:
        return float(self.weights[i, j])

    def validate_source(self, source: Any) -> int:
        if isinstance(source, bool) or not isinstance(source, (int, np.integer)):
            raise InvalidSource(source, self.n)
        if not 0 <= int(source) < self.n:
            raise InvalidSource(source, self.n)
        return int(source)

    def symmetrized(self) -> "WeightMatrix":
        """Undirected view: ``i -- j`` exists if either direction did, preferring the ``i -> j`` weight."""
        edges = self.edges | self.edges.T
        weights = np.where(self.edges, self.weights, self.weights.T)
        weights = np.where(edges, weights, INF)
        return self._frozen(weights, edges, self.zero_is_edge)

    def with_zero_rule(self, zero_is_edge: bool | None) -> "WeightMatrix":
        if zero_is_edge is None or bool(zero_is_edge) == self.zero_is_edge:
            return self
        if zero_is_edge:
            raise InvalidGraph("Zero-weight edges were already discarded when this matrix was built", self.weights.shape)
        edges = self.edges & (self.weights > 0)
        weights = np.where(edges, self.weights, INF)
        return self._frozen(weights, edges, False)


__all__ = ["DEFAULT_MATRIX", "INF", "WeightMatrix", "parse_cell"]
