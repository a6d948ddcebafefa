# src/convsim_core/simulation/session.py
"""
Defines `RunSession`, the aggregate of everything that lives for exactly one run:
the problem, both solver trajectories and the running flag.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterator

from ..problem import Problem
from ..solvers.enums import ScaleParameter, SolverKind
from ..solvers.trajectory import SolverTrajectory

logger = logging.getLogger(__name__)


@dataclass
class RunSession:
    """
    State of the active run. Created by `SimulationClock.start` and closed on
    reset; at most one exists per clock. The `problem` is shared read-only with
    both trajectories.
    """
    problem: Problem
    scale: ScaleParameter
    trajectories: Dict[SolverKind, SolverTrajectory]
    running: bool = True
    iteration: int = 0

    def __iter__(self) -> Iterator[SolverTrajectory]:
        # Symmetric first, then asymmetric; they never interact.
        for kind in SolverKind:
            if kind in self.trajectories:
                yield self.trajectories[kind]

    def __getitem__(self, kind: SolverKind) -> SolverTrajectory:
        return self.trajectories[kind]

    @property
    def all_converged(self) -> bool:
        return bool(self.trajectories) and all(t.is_converged for t in self.trajectories.values())

    def close(self):
        """Tears the session down: stops it and drops both trajectories and their paths."""
        self.running = False
        self.trajectories.clear()
        logger.debug("Run session closed.")
