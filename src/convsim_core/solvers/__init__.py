# src/convsim_core/solvers/__init__.py
from .enums import ScaleParameter, SolverKind, TrajectoryStatus
from .exceptions import InvariantViolation
from .trajectory import SolverTrajectory, TickResult, TrajectoryState

__all__ = [
    # Enums
    "ScaleParameter",
    "SolverKind",
    "TrajectoryStatus",
    # State Machine
    "SolverTrajectory",
    "TrajectoryState",
    "TickResult",
    # Exceptions
    "InvariantViolation",
]
