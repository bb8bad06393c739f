from __future__ import annotations

import math
from typing import Sequence


def label_for(city: int) -> str:
    """Letter label for a city index: 0 -> "A", 1 -> "B", ..."""
    return chr(ord("A") + city)


def display_cell(value: float | None) -> str:
    if value is None or not math.isfinite(value):
        return "∞"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_tour(tour: Sequence[int] | None) -> str:
    if not tour:
        return "-"
    return " → ".join(label_for(city) for city in tour)


__all__ = ["display_cell", "format_tour", "label_for"]
