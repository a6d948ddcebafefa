# src/convsim_core/solvers/trajectory.py
"""
Defines `SolverTrajectory`, the per-solver state machine that scripts a synthetic
convergence path and residual error, one tick at a time.

A trajectory never reads wall-clock time. Its only input is the monotonically
increasing iteration supplied by the `SimulationClock`, which makes `tick` a pure
function of (problem, scale, iteration, random draws) and testable in isolation.

Two profiles are supported:

- SYMMETRIC: an eased path from start to optimal with sinusoidal wobble that decays
  as progress approaches 1. Large problems wobble harder, and harder still after
  `WOBBLE_INSTABILITY_ITERATION`. Residual error is `1 - eased` plus jitter, floored
  at `SYMMETRIC_ERROR_FLOOR`, with a final drop to `SYMMETRIC_CONVERGED_ERROR`.
- ASYMMETRIC: a straight linear path with geometric error decay. Independent of the
  scale except for its total step count.
"""
import logging
import math
import numbers
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..constants import (
    ASYMMETRIC_CONVERGED_ERROR,
    ASYMMETRIC_ERROR_BASE,
    ASYMMETRIC_ERROR_FLOOR,
    ASYMMETRIC_ERROR_RATE_DIVISOR,
    INITIAL_ERROR,
    SYMMETRIC_CONVERGED_ERROR,
    SYMMETRIC_ERROR_FLOOR,
    SYMMETRIC_ERROR_JITTER,
    WOBBLE_INSTABILITY_ITERATION,
    WOBBLE_LARGE,
    WOBBLE_LARGE_UNSTABLE,
    WOBBLE_PERIOD_DIVISOR,
    WOBBLE_SMALL,
)
from ..geometry import Point, ease_in_out_quad, lerp
from ..problem import Problem
from .enums import ScaleParameter, SolverKind, TrajectoryStatus
from .exceptions import InvariantViolation

logger = logging.getLogger(__name__)


@dataclass
class TrajectoryState:
    """
    Mutable progress record of one solver. Only the owning `SolverTrajectory`
    mutates it; `path_history` is append-only and starts with `Problem.start`.
    """
    path_history: List[Point]
    current_error: float = INITIAL_ERROR
    iteration_count: int = 0
    status: TrajectoryStatus = TrajectoryStatus.PENDING
    final_iteration: Optional[int] = None


@dataclass(frozen=True)
class TickResult:
    """What a single tick produced for one solver."""
    kind: SolverKind
    iteration: int
    point: Point
    error: float
    status: TrajectoryStatus
    converged_now: bool = False


class SolverTrajectory:
    """Scripted, per-frame state machine for one synthetic solver."""

    def __init__(
        self,
        problem: Problem,
        total_steps: int,
        kind: SolverKind,
        scale: ScaleParameter = ScaleParameter.SMALL,
        rng: Optional[np.random.Generator] = None,
    ):
        if isinstance(total_steps, bool) or not isinstance(total_steps, numbers.Integral) or total_steps <= 0:
            raise InvariantViolation(
                details=f"Total steps must be a positive integer, got {total_steps!r}.",
                solver=kind.value,
            )
        self.problem = problem
        self.total_steps = int(total_steps)
        self.kind = kind
        self.scale = scale
        self.rng = rng if rng is not None else np.random.default_rng()
        self.state = TrajectoryState(path_history=[problem.start])
        self._last_iteration = 0
        self._last_result: Optional[TickResult] = None

    # --- Read-only views ---

    @property
    def status(self) -> TrajectoryStatus:
        return self.state.status

    @property
    def is_converged(self) -> bool:
        return self.state.status is TrajectoryStatus.CONVERGED

    @property
    def path(self) -> Tuple[Point, ...]:
        """Snapshot of the path history, safe to hand to renderers."""
        return tuple(self.state.path_history)

    @property
    def last_result(self) -> Optional[TickResult]:
        return self._last_result

    def wobble_amplitude(self, iteration: int) -> float:
        """Noise amplitude of the symmetric path before progress decay is applied."""
        if not self.scale.is_large:
            return WOBBLE_SMALL
        if iteration > WOBBLE_INSTABILITY_ITERATION:
            return WOBBLE_LARGE_UNSTABLE
        return WOBBLE_LARGE

    # --- State machine ---

    def tick(self, iteration: int) -> TickResult:
        """
        Advances the trajectory to `iteration`.

        Once converged this is a no-op that returns the last result. Otherwise
        `iteration` must be an integer strictly greater than any previously seen.

        Raises:
            InvariantViolation: If `iteration` is non-positive or not increasing.
        """
        if self.is_converged:
            return self._last_result

        if isinstance(iteration, bool) or not isinstance(iteration, numbers.Integral):
            raise InvariantViolation(
                details=f"Iteration must be an integer, got {type(iteration).__name__}.",
                solver=self.kind.value,
            )
        if iteration <= self._last_iteration:
            raise InvariantViolation(
                details=(f"Iteration {iteration} does not advance past {self._last_iteration}. "
                         "Ticks must be strictly increasing and start at 1."),
                solver=self.kind.value,
                iteration=int(iteration),
            )
        iteration = int(iteration)
        self._last_iteration = iteration
        self.state.status = TrajectoryStatus.RUNNING

        if self.kind is SolverKind.SYMMETRIC:
            result = self._tick_symmetric(iteration)
        else:
            result = self._tick_asymmetric(iteration)

        self._last_result = result
        return result

    def _tick_symmetric(self, iteration: int) -> TickResult:
        if iteration >= self.total_steps:
            return self._converge(iteration, final_iteration=iteration, final_error=SYMMETRIC_CONVERGED_ERROR)

        progress = iteration / self.total_steps
        eased = ease_in_out_quad(progress)
        base = lerp(self.problem.start, self.problem.optimal, eased)

        # Noise decays linearly with progress, so it vanishes at the optimum.
        amplitude = self.wobble_amplitude(iteration) * (1.0 - progress)
        phase = iteration / WOBBLE_PERIOD_DIVISOR
        point = base.offset(math.sin(phase) * amplitude, math.cos(phase) * amplitude)

        jitter = float(self.rng.uniform(0.0, SYMMETRIC_ERROR_JITTER))
        error = max(SYMMETRIC_ERROR_FLOOR, (1.0 - eased) + jitter)
        return self._advance(iteration, point, error)

    def _tick_asymmetric(self, iteration: int) -> TickResult:
        if iteration > self.total_steps:
            # Reported as converged after `total_steps`, one tick before this one.
            return self._converge(iteration, final_iteration=self.total_steps, final_error=ASYMMETRIC_CONVERGED_ERROR)

        t = iteration / self.total_steps
        point = lerp(self.problem.start, self.problem.optimal, t)
        error = max(ASYMMETRIC_ERROR_FLOOR, ASYMMETRIC_ERROR_BASE ** (iteration / ASYMMETRIC_ERROR_RATE_DIVISOR))
        return self._advance(iteration, point, error)

    def _advance(self, iteration: int, point: Point, error: float) -> TickResult:
        self.state.path_history.append(point)
        self.state.current_error = error
        self.state.iteration_count = iteration
        return TickResult(
            kind=self.kind,
            iteration=iteration,
            point=point,
            error=error,
            status=TrajectoryStatus.RUNNING,
        )

    def _converge(self, iteration: int, final_iteration: int, final_error: float) -> TickResult:
        optimal = self.problem.optimal
        self.state.path_history.append(optimal)
        self.state.current_error = final_error
        self.state.iteration_count = final_iteration
        self.state.final_iteration = final_iteration
        self.state.status = TrajectoryStatus.CONVERGED
        logger.debug(f"{self.kind.value} trajectory converged on tick {iteration} (reported iteration {final_iteration}).")
        return TickResult(
            kind=self.kind,
            iteration=iteration,
            point=optimal,
            error=final_error,
            status=TrajectoryStatus.CONVERGED,
            converged_now=True,
        )
