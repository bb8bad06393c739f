from __future__ import annotations

from enum import Enum


class AlgorithmFamily(str, Enum):
    EXACT = "exact"
    ENUMERATION = "enumeration"


class SolveStatus(str, Enum):
    COMPLETE = "complete"
    NOT_FOUND = "not_found"
    TOO_LARGE = "too_large"


__all__ = ["AlgorithmFamily", "SolveStatus"]
