# src/convsim_core/simulation/results.py
"""
Formal, immutable result contracts returned by the headless facade.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

from ..geometry import Point
from ..problem import Problem
from ..solvers.enums import ScaleParameter, SolverKind


@dataclass(frozen=True)
class SolverOutcome:
    """
    How one solver finished.

    Attributes:
        kind: Which solver this is.
        final_iteration: The iteration reported at convergence.
        final_error: The residual error reported at convergence.
        path: The complete path history, ending at `Problem.optimal`.
    """
    kind: SolverKind
    final_iteration: int
    final_error: float
    path: Tuple[Point, ...]


@dataclass(frozen=True)
class RunSummary:
    """
    The result of a complete headless run.

    Attributes:
        scale: The problem scale that was run.
        problem: The randomized problem both solvers raced on.
        frames: Number of ticks the clock executed.
        outcomes: Per-solver outcome.
    """
    scale: ScaleParameter
    problem: Problem
    frames: int
    outcomes: Dict[SolverKind, SolverOutcome]
