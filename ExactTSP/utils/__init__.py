from ExactTSP.utils.labels import display_cell, format_tour, label_for
from ExactTSP.utils.taxonomy import AlgorithmFamily, SolveStatus

__all__ = ["AlgorithmFamily", "SolveStatus", "display_cell", "format_tour", "label_for"]
