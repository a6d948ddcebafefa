# src/convsim_core/solvers/enums.py
from enum import Enum


class ScaleParameter(Enum):
    """
    Problem scale selected before a run. Drives step counts for both solvers and
    the wobble profile of the symmetric solver only.
    """
    SMALL = "small"
    LARGE = "large"

    @property
    def is_large(self) -> bool:
        return self is ScaleParameter.LARGE


class SolverKind(Enum):
    """The two synthetic solvers raced side by side."""
    SYMMETRIC = "symmetric"
    ASYMMETRIC = "asymmetric"


class TrajectoryStatus(Enum):
    """One-way lifecycle of a trajectory: PENDING -> RUNNING -> CONVERGED."""
    PENDING = "pending"
    RUNNING = "running"
    CONVERGED = "converged"
