from __future__ import annotations

from typing import Any, Sequence, TYPE_CHECKING


__all__ = (
    "ExactTSPException",
    "InvalidGraph",
    "NegativeWeight",
    "InvalidSource",
    "IncompleteTour",
)


class ExactTSPException(Exception):
    """Base class for all exceptions from this package"""
    pass


class InvalidGraph(ExactTSPException):
    """Exception raised when a weight matrix is malformed"""

    __slots__ = (
        "shape",
    )
    if TYPE_CHECKING:
        shape: Any

    def __init__(self, message: str, shape: Any = None, /) -> None:
        super().__init__(message)
        self.shape = shape


class NegativeWeight(InvalidGraph):
    """Exception raised when a weight matrix contains a negative edge weight"""

    __slots__ = (
        "row",
        "column",
        "weight",
    )
    if TYPE_CHECKING:
        row: int
        column: int
        weight: float

    def __init__(self, row: int, column: int, weight: float, /) -> None:
        super().__init__(f"Negative weight {weight!r} on edge {row} -> {column}")
        self.row = row
        self.column = column
        self.weight = weight


class InvalidSource(ExactTSPException):
    """Exception raised when the source city is not a valid index of the graph"""

    __slots__ = (
        "source",
        "num_cities",
    )
    if TYPE_CHECKING:
        source: Any
        num_cities: int

    def __init__(self, source: Any, num_cities: int, /) -> None:
        super().__init__(f"Source {source!r} is not a city index in range [0, {num_cities})")
        self.source = source
        self.num_cities = num_cities


class IncompleteTour(ExactTSPException):
    """Exception raised when pricing a tour that uses an edge absent from the graph"""

    __slots__ = (
        "tour",
        "edge",
    )
    if TYPE_CHECKING:
        tour: Sequence[int]
        edge: tuple[int, int]

    def __init__(self, tour: Sequence[int], edge: tuple[int, int], /) -> None:
        super().__init__(f"Tour {list(tour)!r} uses missing edge {edge[0]} -> {edge[1]}")
        self.tour = tour
        self.edge = edge
