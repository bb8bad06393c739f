from ExactTSP.solvers.exact.brute_force import BRUTE_FORCE_MAX_CITIES, BruteForceSolver
from ExactTSP.solvers.exact.held_karp import MAX_CITIES, HeldKarpSolver
from ExactTSP.solvers.exact.memo import MemoTable

__all__ = [
    "BRUTE_FORCE_MAX_CITIES",
    "BruteForceSolver",
    "HeldKarpSolver",
    "MAX_CITIES",
    "MemoTable",
]
