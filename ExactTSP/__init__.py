from ExactTSP.core import ExactTSP
from ExactTSP.errors import ExactTSPException, IncompleteTour, InvalidGraph, InvalidSource, NegativeWeight
from ExactTSP.graph import DEFAULT_MATRIX, INF, WeightMatrix, parse_cell
from ExactTSP.solvers import (
    AlgorithmResult,
    BaseSolver,
    BruteForceSolver,
    HeldKarpSolver,
    SOLVER_FAMILIES,
    SOLVER_REGISTRY,
    SOLVER_SPECS,
    get_solver,
)
from ExactTSP.trace import Initialized, RelaxationAttempted, StateImproved, TourClosed, TraceRecorder
from ExactTSP.utils.labels import display_cell, format_tour, label_for
from ExactTSP.utils.taxonomy import AlgorithmFamily, SolveStatus

__all__ = [
    "AlgorithmFamily",
    "AlgorithmResult",
    "BaseSolver",
    "BruteForceSolver",
    "DEFAULT_MATRIX",
    "ExactTSP",
    "ExactTSPException",
    "HeldKarpSolver",
    "INF",
    "IncompleteTour",
    "Initialized",
    "InvalidGraph",
    "InvalidSource",
    "NegativeWeight",
    "RelaxationAttempted",
    "SOLVER_FAMILIES",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "SolveStatus",
    "StateImproved",
    "TourClosed",
    "TraceRecorder",
    "WeightMatrix",
    "display_cell",
    "format_tour",
    "get_solver",
    "label_for",
    "parse_cell",
]
