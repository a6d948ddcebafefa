# src/convsim_core/simulation/execution.py
"""
Provides the headless entry point for running a complete comparison.

`run_headless` is a thin facade: it wires a `SimulationClock` to a
`ManualFrameScheduler`, steps frames until both solvers have converged, and packages
the outcome as a `RunSummary`. Every known, diagnosable failure is surfaced as a
single `SimulationRunError` carrying the diagnostic report.
"""
import logging
from typing import Optional, Union

import numpy as np

from ..constants import DEFAULT_MAX_FRAMES
from ..errors import DiagnosableError, SimulationRunError, format_diagnostic_report
from ..solvers.enums import ScaleParameter
from .clock import SimulationClock
from .config import RunConfig, parse_scale
from .results import RunSummary, SolverOutcome
from .scheduler import ManualFrameScheduler
from .sinks import UpdateSink

logger = logging.getLogger(__name__)


def run_headless(
    scale: Union[str, ScaleParameter, None] = None,
    config: Optional[RunConfig] = None,
    sink: Optional[UpdateSink] = None,
    rng: Optional[np.random.Generator] = None,
    max_frames: int = DEFAULT_MAX_FRAMES,
) -> RunSummary:
    """
    Runs both synthetic solvers to convergence without a display.

    Args:
        scale: 'small' or 'large'. Overrides `config.scale` when both are given.
        config: Canvas size, seed and frame rate. Defaults to `RunConfig()`.
        sink: Optional receiver of every engine event, e.g. a `RecordingSink`.
        rng: Optional generator; when omitted one is seeded from `config.seed`.
        max_frames: Upper bound on the number of frames stepped.

    Returns:
        A `RunSummary` with the problem, frame count and per-solver outcomes.

    Raises:
        SimulationRunError: If the configuration is invalid, an engine invariant is
                            broken, or the run does not finish within `max_frames`.
    """
    config = config if config is not None else RunConfig()
    try:
        run_scale = parse_scale(scale) if scale is not None else config.scale
        scheduler = ManualFrameScheduler(config.frame_rate_hz)
        clock = SimulationClock.from_config(config, scheduler, sink=sink, rng=rng)

        clock.run(run_scale)
        frames = scheduler.run_until_idle(max_frames)
        session = clock.session

        if clock.is_running or not session.all_converged:
            clock.stop()
            raise SimulationRunError(format_diagnostic_report(
                error_type="Run Did Not Finish",
                details=f"The solvers had not both converged after {frames} frames (iteration {clock.iteration}).",
                suggestion="Increase 'max_frames'. A large-scale run needs at least 400 frames.",
                context={'iteration': clock.iteration}
            ))

        outcomes = {
            trajectory.kind: SolverOutcome(
                kind=trajectory.kind,
                final_iteration=trajectory.state.final_iteration,
                final_error=trajectory.state.current_error,
                path=trajectory.path,
            )
            for trajectory in session
        }
        logger.info(f"Headless {run_scale.value} run finished after {frames} frames.")
        return RunSummary(scale=run_scale, problem=session.problem, frames=frames, outcomes=outcomes)

    except SimulationRunError:
        raise

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during the run: {e}")
        raise SimulationRunError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during the run: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Run Error Occurred ({type(e).__name__})",
            details=f"The engine encountered an unexpected internal error: {e}",
            suggestion="This may be a bug, or a failure inside a custom sink. Review the traceback.",
            context={}
        )
        raise SimulationRunError(report) from e
