# src/convsim_core/simulation/clock.py
"""
Defines the `SimulationClock`, the per-frame loop that races the two synthetic
solvers against each other.

The clock owns the active `RunSession`. On every host frame it advances the shared
iteration by one, ticks the symmetric trajectory and then the asymmetric one,
decides whether another frame is needed, and only then notifies the sink. It never
blocks: each frame does a bounded amount of work and hands control back to the
host scheduler.
"""
import logging
from functools import partial
from typing import Callable, List, Optional, Union

import numpy as np

from ..constants import (
    ASYMMETRIC_STEPS_LARGE,
    ASYMMETRIC_STEPS_SMALL,
    CONDITION_NUMBER_LARGE,
    CONDITION_NUMBER_SMALL,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    ERROR_SAMPLE_DECIMATION,
    SYMMETRIC_LOG_INTERVAL,
    SYMMETRIC_STEPS_LARGE,
    SYMMETRIC_STEPS_SMALL,
)
from ..problem import Problem, ProblemGenerator
from ..solvers.enums import ScaleParameter, SolverKind
from ..solvers.exceptions import InvariantViolation
from ..solvers.trajectory import SolverTrajectory, TickResult
from ..sparsity import generate_sparsity_pattern
from .config import RunConfig, parse_scale
from .scheduler import FrameScheduler
from .session import RunSession
from .sinks import NullSink, SinkStatus, UpdateSink

logger = logging.getLogger(__name__)

SCALE_DESCRIPTIONS = {
    ScaleParameter.SMALL: "Simulating a local logistics problem (N=100). Both methods work, but Asymmetric is still faster.",
    ScaleParameter.LARGE: "Simulating a massive logistics network (N=10,000). Matrix condition number explodes, causing the Symmetric solver to struggle.",
}

_SCALE_BANNERS = {
    ScaleParameter.SMALL: "Problem Scale: Small (N=100)",
    ScaleParameter.LARGE: "Problem Scale: Large (N=10,000)",
}

_CONVERGED_MESSAGES = {
    SolverKind.SYMMETRIC: "Converged.",
    SolverKind.ASYMMETRIC: "Converged. Machine precision.",
}


def total_steps_for(kind: SolverKind, scale: ScaleParameter) -> int:
    """Step budget of each solver. Fixed synthetic tuning, not derived from the problem."""
    if kind is SolverKind.SYMMETRIC:
        return SYMMETRIC_STEPS_LARGE if scale.is_large else SYMMETRIC_STEPS_SMALL
    return ASYMMETRIC_STEPS_LARGE if scale.is_large else ASYMMETRIC_STEPS_SMALL


class SimulationClock:
    """
    Drives both solver trajectories from host-provided animation frames.

    Args:
        scheduler: The host frame scheduler the clock yields to between ticks.
        sink: Receiver of path, error, status and console events.
        rng: Source of all randomness (problem, sparsity patterns, symmetric jitter).
             An unseeded generator is used when omitted.
        width: Canvas width handed to the problem generator.
        height: Canvas height handed to the problem generator.
        default_scale: Scale used by `run()` when none is given.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        sink: Optional[UpdateSink] = None,
        rng: Optional[np.random.Generator] = None,
        width: float = DEFAULT_CANVAS_WIDTH,
        height: float = DEFAULT_CANVAS_HEIGHT,
        default_scale: Union[str, ScaleParameter] = ScaleParameter.SMALL,
    ):
        self.scheduler = scheduler
        self.sink = sink if sink is not None else NullSink()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.width = width
        self.height = height
        self.default_scale = parse_scale(default_scale)
        self.problem_generator = ProblemGenerator(self.rng)
        self.last_frame_ms: Optional[float] = None
        self._session: Optional[RunSession] = None
        self._running = False
        self._pending_handle: Optional[int] = None
        # Bumped on every stop; frames requested under an older value are stale.
        self._generation = 0

    @classmethod
    def from_config(
        cls,
        config: RunConfig,
        scheduler: FrameScheduler,
        sink: Optional[UpdateSink] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "SimulationClock":
        """Builds a clock from a validated `RunConfig`, seeding the generator from it."""
        if rng is None:
            rng = np.random.default_rng(config.seed)
        return cls(
            scheduler,
            sink=sink,
            rng=rng,
            width=config.width,
            height=config.height,
            default_scale=config.scale,
        )

    # --- Read-only views ---

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def session(self) -> Optional[RunSession]:
        return self._session

    @property
    def problem(self) -> Optional[Problem]:
        return self._session.problem if self._session is not None else None

    @property
    def iteration(self) -> int:
        return self._session.iteration if self._session is not None else 0

    # --- Commands ---

    def select_scale(self, scale: Union[str, ScaleParameter]) -> str:
        """Changes the default scale. Resets any run in progress and returns the scale's description."""
        new_scale = parse_scale(scale)
        self.reset()
        self.default_scale = new_scale
        return SCALE_DESCRIPTIONS[new_scale]

    def run(self, scale: Union[str, ScaleParameter, None] = None) -> bool:
        """Start command. Uses the default scale when none is given."""
        return self.start(self.default_scale if scale is None else scale)

    def start(self, scale: Union[str, ScaleParameter]) -> bool:
        """
        Starts a new run with a freshly generated problem.

        Returns False, changing nothing, if a run is already in progress.

        Raises:
            ConfigurationError: If `scale` is not a recognized scale. Nothing is started.
        """
        scale = parse_scale(scale)
        if self._running:
            logger.debug("Start requested while a run is active; ignoring.")
            return False

        problem = self.problem_generator.generate(self.width, self.height)
        trajectories = {
            kind: SolverTrajectory(problem, total_steps_for(kind, scale), kind, scale=scale, rng=self.rng)
            for kind in SolverKind
        }
        patterns = {
            kind: generate_sparsity_pattern(self.width, self.height, kind, self.rng)
            for kind in SolverKind
        }
        self._session = RunSession(problem=problem, scale=scale, trajectories=trajectories)
        self._running = True
        self._pending_handle = self._request_frame()
        logger.info(f"--- Starting {scale.value} run on a {self.width}x{self.height} canvas ---")

        events: List[Callable[[], None]] = []
        for kind in SolverKind:
            events.append(partial(self.sink.on_status_change, kind, SinkStatus.RUNNING))
            events.append(partial(self.sink.on_sparsity_pattern, kind, patterns[kind]))
        events.append(partial(self.sink.on_log, SolverKind.SYMMETRIC, _SCALE_BANNERS[scale]))
        events.append(partial(self.sink.on_log, SolverKind.SYMMETRIC, "Starting interior point method..."))
        events.append(partial(self.sink.on_log, SolverKind.ASYMMETRIC, "Initializing asymmetric solver..."))
        for trajectory in self._session:
            events.append(partial(self.sink.on_path_update, trajectory.kind, trajectory.path))
        self._dispatch(events)
        return True

    def stop(self):
        """
        Stops the loop. The pending frame is cancelled, and a frame that fires
        anyway carries a stale generation and does nothing, even if a new run
        has started since. Trajectories keep their last state until the next start.
        """
        was_running = self._running
        self._running = False
        self._generation += 1
        if self._session is not None:
            self._session.running = False
        if self._pending_handle is not None:
            self.scheduler.cancel_frame(self._pending_handle)
            self._pending_handle = None
        if was_running:
            logger.info(f"Run stopped at iteration {self.iteration}.")

    def reset(self):
        """Reset command: stops the loop, discards the session and reports both solvers as waiting."""
        self.stop()
        if self._session is not None:
            self._session.close()
            self._session = None
        self.last_frame_ms = None
        logger.info("Simulation reset.")

        events: List[Callable[[], None]] = []
        for kind in SolverKind:
            events.append(partial(self.sink.on_path_update, kind, ()))
            events.append(partial(self.sink.on_status_change, kind, SinkStatus.WAITING))
            events.append(partial(self.sink.on_log, kind, "Reset."))
        self._dispatch(events)

    # --- Frame loop ---

    def _request_frame(self) -> int:
        return self.scheduler.request_frame(partial(self._on_frame, self._generation))

    def _on_frame(self, generation: int, timestamp_ms: float):
        if generation != self._generation or not self._running:
            logger.debug("Frame fired after the run was stopped; ignoring.")
            return
        self._pending_handle = None

        session = self._session
        if session is None:
            self._abort()
            raise InvariantViolation(details="A frame fired on a running clock with no active problem.")

        self.last_frame_ms = timestamp_ms
        session.iteration += 1
        iteration = session.iteration

        events: List[Callable[[], None]] = []
        try:
            for trajectory in session:
                if trajectory.is_converged:
                    continue
                result = trajectory.tick(iteration)
                events.extend(self._events_for(trajectory, result))
        except InvariantViolation as e:
            logger.error(f"Aborting run: {e}")
            self._abort()
            raise

        if session.all_converged:
            self._running = False
            session.running = False
            logger.info(f"Both solvers converged after {iteration} frames.")
        else:
            self._pending_handle = self._request_frame()

        self._dispatch(events)

    def _events_for(self, trajectory: SolverTrajectory, result: TickResult) -> List[Callable[[], None]]:
        kind = trajectory.kind
        iteration = result.iteration
        events: List[Callable[[], None]] = [partial(self.sink.on_path_update, kind, trajectory.path)]

        if result.converged_now:
            events.append(partial(
                self.sink.on_status_change, kind, SinkStatus.CONVERGED,
                trajectory.state.final_iteration, result.error,
            ))
            events.append(partial(self.sink.on_log, kind, _CONVERGED_MESSAGES[kind]))
            return events

        if iteration % ERROR_SAMPLE_DECIMATION == 0:
            events.append(partial(self.sink.on_error_sample, kind, iteration, result.error))

        if kind is SolverKind.SYMMETRIC:
            if iteration % SYMMETRIC_LOG_INTERVAL == 0:
                cond = CONDITION_NUMBER_LARGE if trajectory.scale.is_large else CONDITION_NUMBER_SMALL
                events.append(partial(self.sink.on_log, kind, f"Update... cond(H) = {cond:.1e}"))
        else:
            events.append(partial(self.sink.on_log, kind, f"Step {iteration}: Residual {result.error:.2e}"))
        return events

    def _abort(self):
        self.stop()
        logger.error(f"Run aborted at iteration {self.iteration}.")

    @staticmethod
    def _dispatch(events: List[Callable[[], None]]):
        for notify in events:
            notify()
