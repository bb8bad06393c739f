import math

import numpy as np
import pytest

from ExactTSP import DEFAULT_MATRIX, IncompleteTour, InvalidGraph, InvalidSource, WeightMatrix, parse_cell
from ExactTSP.solvers.base import best_cycle, compute_cycle_cost


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", math.inf),
        ("   ", math.inf),
        ("∞", math.inf),
        ("inf", math.inf),
        ("Infinity", math.inf),
        ("abc", math.inf),
        (None, math.inf),
        ("12", 12.0),
        (" 3.5 ", 3.5),
        ("0", 0.0),
    ],
)
def test_parse_cell(text, expected) -> None:
    assert parse_cell(text) == expected


def test_edges_are_explicit() -> None:
    graph = WeightMatrix.from_array([[5, 0, 2], [math.inf, 0, 1], [3, 4, 0]])

    assert graph.n == 3
    assert not graph.has_edge(0, 0)
    assert not graph.has_edge(0, 1)
    assert graph.has_edge(0, 2)
    assert not graph.has_edge(1, 0)
    assert graph.weight(1, 0) == math.inf
    assert graph.weight(0, 1) == math.inf
    assert graph.weight(2, 1) == 4.0


def test_zero_is_edge() -> None:
    graph = WeightMatrix.from_array([[0, 0], [math.inf, 0]], zero_is_edge=True)

    assert graph.has_edge(0, 1)
    assert graph.weight(0, 1) == 0.0
    assert not graph.has_edge(1, 0)
    assert not graph.has_edge(0, 0)


def test_nan_is_no_edge() -> None:
    graph = WeightMatrix.from_array([[0, None], [float("nan"), 0]])

    assert not graph.edges.any()


def test_matrix_is_read_only() -> None:
    graph = WeightMatrix.from_array(DEFAULT_MATRIX)

    with pytest.raises(ValueError):
        graph.weights[0, 1] = 1.0
    with pytest.raises(ValueError):
        graph.edges[0, 1] = False


def test_from_array_passthrough() -> None:
    graph = WeightMatrix.from_array(DEFAULT_MATRIX)

    assert WeightMatrix.from_array(graph) is graph


def test_from_cells() -> None:
    graph = WeightMatrix.from_cells([["0", "7", ""], ["inf", "0", "2"], ["4", "∞", "0"]])

    assert graph.edges.tolist() == [
        [False, True, False],
        [False, False, True],
        [True, False, False],
    ]


def test_symmetrized() -> None:
    graph = WeightMatrix.from_array([[0, 5, 0], [0, 0, 7], [9, 0, 0]]).symmetrized()

    assert graph.edges.tolist() == [
        [False, True, True],
        [True, False, True],
        [True, True, False],
    ]
    assert graph.weight(1, 0) == 5.0
    assert graph.weight(0, 2) == 9.0
    assert graph.weight(2, 1) == 7.0


def test_symmetrized_prefers_forward_weight() -> None:
    graph = WeightMatrix.from_array([[0, 5], [8, 0]]).symmetrized()

    assert graph.weight(0, 1) == 5.0
    assert graph.weight(1, 0) == 8.0


def test_from_coordinates() -> None:
    euclidean = WeightMatrix.from_coordinates([[0, 0], [3, 4]])
    manhattan = WeightMatrix.from_coordinates([[0, 0], [3, 4]], metric="manhattan")

    assert euclidean.weight(0, 1) == pytest.approx(5.0)
    assert manhattan.weight(1, 0) == pytest.approx(7.0)

    with pytest.raises(InvalidGraph):
        WeightMatrix.from_coordinates([1, 2, 3])


def test_non_numeric() -> None:
    with pytest.raises(InvalidGraph):
        WeightMatrix.from_array([[0, "x"], [1, 0]])

    with pytest.raises(InvalidGraph):
        WeightMatrix.from_array([[0, 1], [1]])


def test_validate_source() -> None:
    graph = WeightMatrix.from_array(DEFAULT_MATRIX)

    assert graph.validate_source(np.int64(3)) == 3
    with pytest.raises(InvalidSource) as exception:
        graph.validate_source(1.0)
    assert exception.value.num_cities == 4


def test_cycle_helpers() -> None:
    graph = WeightMatrix.from_array(DEFAULT_MATRIX)

    assert best_cycle([0, 1, 3, 2]) == [0, 1, 3, 2, 0]
    assert best_cycle([0, 1, 3, 2, 0]) == [0, 1, 3, 2, 0]
    assert best_cycle([2]) == [2, 2]
    assert compute_cycle_cost(graph, [0, 1, 3, 2, 0]) == 80.0
    assert compute_cycle_cost(graph, [0, 0]) == 0.0

    sparse = WeightMatrix.from_array([[0, 1, 0], [1, 0, 1], [1, 1, 0]])
    with pytest.raises(IncompleteTour) as exception:
        compute_cycle_cost(sparse, [0, 2, 1, 0])
    assert exception.value.edge == (0, 2)


def test_with_zero_rule() -> None:
    kept = WeightMatrix.from_array([[0, 0, 4], [2, 0, 0], [0, 3, 0]], zero_is_edge=True)

    assert kept.with_zero_rule(None) is kept
    assert kept.with_zero_rule(True) is kept

    dropped = kept.with_zero_rule(False)
    assert not dropped.zero_is_edge
    assert dropped.edges.tolist() == [
        [False, False, True],
        [True, False, False],
        [False, True, False],
    ]
    assert dropped.weight(0, 1) == math.inf
    assert WeightMatrix.from_array(kept, zero_is_edge=False).edges.tolist() == dropped.edges.tolist()

    with pytest.raises(InvalidGraph):
        dropped.with_zero_rule(True)


def test_from_coordinates_duplicate_points() -> None:
    points = [[0, 0], [0, 0], [1, 0]]

    metric = WeightMatrix.from_coordinates(points)
    assert metric.zero_is_edge
    assert metric.has_edge(0, 1)
    assert metric.weight(1, 0) == 0.0

    strict = WeightMatrix.from_coordinates(points, zero_is_edge=False)
    assert not strict.has_edge(0, 1)
    assert strict.has_edge(0, 2)
