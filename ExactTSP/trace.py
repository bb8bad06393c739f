"""Trace events emitted by the Held–Karp sweep.

Solvers accept an optional ``observer`` callable and push one event per
relaxation attempt and one per state improvement, in the exact order the
sweep evaluates them. Events hold a reference to the live memo table; use
``TraceRecorder(snapshots=True)`` to freeze its contents at each event.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, ClassVar, Iterator, List, Mapping, Tuple, Union

MemoLike = Any


@dataclass(frozen=True)
class Initialized:
    kind: ClassVar[str] = "initialized"

    mask: int
    city: int
    memo: MemoLike = field(repr=False, compare=False)


@dataclass(frozen=True)
class RelaxationAttempted:
    kind: ClassVar[str] = "relaxation_attempted"

    mask: int
    last: int
    next_city: int
    edge_weight: float
    current_cost: float
    candidate_cost: float
    existing_cost: float | None
    improved: bool
    memo: MemoLike = field(repr=False, compare=False)


@dataclass(frozen=True)
class StateImproved:
    kind: ClassVar[str] = "state_improved"

    mask: int
    last: int
    next_city: int
    new_mask: int
    old_cost: float | None
    new_cost: float
    path: Tuple[int, ...]
    memo: MemoLike = field(repr=False, compare=False)


@dataclass(frozen=True)
class TourClosed:
    kind: ClassVar[str] = "tour_closed"

    tour: Tuple[int, ...] | None
    cost: float | None
    memo: MemoLike = field(repr=False, compare=False)


TraceEvent = Union[Initialized, RelaxationAttempted, StateImproved, TourClosed]
Observer = Callable[[TraceEvent], None]


def freeze_memo(memo: MemoLike) -> Mapping[Tuple[int, int], Tuple[float, int]]:
    if hasattr(memo, "snapshot"):
        return memo.snapshot()
    return memo


class TraceRecorder:
    """Observer that keeps every event in a list."""

    def __init__(self, snapshots: bool = False):
        self.snapshots = snapshots
        self.events: List[TraceEvent] = []

    def __call__(self, event: TraceEvent) -> None:
        if self.snapshots:
            event = replace(event, memo=freeze_memo(event.memo))
        self.events.append(event)

    def of_kind(self, kind: str) -> List[TraceEvent]:
        return [event for event in self.events if event.kind == kind]

    def attempts(self) -> List[RelaxationAttempted]:
        return self.of_kind(RelaxationAttempted.kind)  # type: ignore[return-value]

    def improvements(self) -> List[StateImproved]:
        return self.of_kind(StateImproved.kind)  # type: ignore[return-value]

    def __iter__(self) -> Iterator[TraceEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)


__all__ = [
    "Initialized",
    "Observer",
    "RelaxationAttempted",
    "StateImproved",
    "TourClosed",
    "TraceEvent",
    "TraceRecorder",
    "freeze_memo",
]
