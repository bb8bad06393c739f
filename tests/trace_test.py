import numpy as np

from ExactTSP import (
    DEFAULT_MATRIX,
    HeldKarpSolver,
    Initialized,
    RelaxationAttempted,
    StateImproved,
    TourClosed,
    TraceRecorder,
)


def solve_traced(graph, source: int = 0, snapshots: bool = False) -> TraceRecorder:
    recorder = TraceRecorder(snapshots=snapshots)
    HeldKarpSolver().solve(graph, source=source, observer=recorder)
    return recorder


def test_first_and_last_events() -> None:
    recorder = solve_traced(DEFAULT_MATRIX)

    first, last = recorder.events[0], recorder.events[-1]
    assert isinstance(first, Initialized)
    assert (first.mask, first.city) == (0b0001, 0)
    assert isinstance(last, TourClosed)
    assert last.tour == (0, 2, 3, 1, 0)
    assert last.cost == 80.0


def test_tour_closed_without_tour() -> None:
    inf = float("inf")
    recorder = solve_traced([[0, 1, inf], [1, 0, inf], [inf, inf, 0]])

    last = recorder.events[-1]
    assert isinstance(last, TourClosed)
    assert last.tour is None
    assert last.cost is None


def test_attempts_follow_sweep_order() -> None:
    recorder = solve_traced(DEFAULT_MATRIX, source=1)
    order = [(event.mask, event.last, event.next_city) for event in recorder.attempts()]

    assert order == sorted(order)
    assert all(event.mask & 0b0010 for event in recorder.attempts())


def test_improvement_follows_its_attempt() -> None:
    recorder = solve_traced(DEFAULT_MATRIX)

    for i, event in enumerate(recorder.events):
        if isinstance(event, StateImproved):
            attempt = recorder.events[i - 1]
            assert isinstance(attempt, RelaxationAttempted)
            assert attempt.improved
            assert (attempt.mask, attempt.last, attempt.next_city) == (event.mask, event.last, event.next_city)
            assert attempt.candidate_cost == event.new_cost
        elif isinstance(event, RelaxationAttempted) and not event.improved:
            assert event.existing_cost is not None
            assert event.candidate_cost >= event.existing_cost


def test_costs_never_increase() -> None:
    rng = np.random.default_rng(3)
    graph = rng.integers(1, 20, size=(6, 6)).astype(float)
    recorder = solve_traced(graph, snapshots=True)

    best: dict = {}
    for event in recorder.events:
        for key, (cost, _) in event.memo.items():
            if key in best:
                assert cost <= best[key]
            best[key] = cost

    for event in recorder.improvements():
        assert event.old_cost is None or event.new_cost < event.old_cost


def test_snapshots_are_taken_before_update() -> None:
    recorder = solve_traced(DEFAULT_MATRIX, snapshots=True)

    attempt = recorder.attempts()[0]
    improved = recorder.improvements()[0]
    key = (improved.new_mask, improved.next_city)

    assert attempt.existing_cost is None
    assert key not in attempt.memo
    assert improved.memo[key] == (improved.new_cost, improved.last)


def test_improvement_paths() -> None:
    recorder = solve_traced(DEFAULT_MATRIX)

    for event in recorder.improvements():
        assert event.path[0] == 0
        assert event.path[-1] == event.next_city
        assert len(event.path) == bin(event.new_mask).count("1")
        assert sum(1 << city for city in event.path) == event.new_mask


def test_memo_invariants() -> None:
    recorder = solve_traced(DEFAULT_MATRIX, source=2)
    memo = recorder.events[-1].memo

    for mask, last, _, _ in memo.states():
        assert mask & 0b0100
        assert mask & (1 << last)
        path = memo.path_to(mask, last, 2)
        assert path[0] == 2
        assert len(set(path)) == len(path)
