# src/convsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("ConvSim Core package initialized.")

from .units import ureg, Quantity
from .geometry import Point, ease_in_out_quad, lerp, interpolate, random_point
from .problem import Constraint, Problem, ProblemGenerator
from .sparsity import SparsityPattern, generate_sparsity_pattern
from .solvers import (
    ScaleParameter, SolverKind, TrajectoryStatus,
    SolverTrajectory, TrajectoryState, TickResult, InvariantViolation,
)
from .simulation import (
    ConfigurationError, RunConfig, parse_scale, parse_run_config, load_run_config,
    FrameScheduler, ManualFrameScheduler, AsyncioFrameScheduler,
    UpdateSink, SinkStatus, NullSink, RecordingSink, LoggingSink, CompositeSink,
    RunSession, SimulationClock, SCALE_DESCRIPTIONS, RunSummary, SolverOutcome, run_headless,
)
from .errors import ConvSimError, SimulationRunError, DiagnosableError

__all__ = [
    # Units
    "ureg", "Quantity",
    # Geometry
    "Point", "ease_in_out_quad", "lerp", "interpolate", "random_point",
    # Problem
    "Constraint", "Problem", "ProblemGenerator",
    "SparsityPattern", "generate_sparsity_pattern",
    # Solvers
    "ScaleParameter", "SolverKind", "TrajectoryStatus",
    "SolverTrajectory", "TrajectoryState", "TickResult",
    # Simulation
    "RunConfig", "parse_scale", "parse_run_config", "load_run_config",
    "FrameScheduler", "ManualFrameScheduler", "AsyncioFrameScheduler",
    "UpdateSink", "SinkStatus", "NullSink", "RecordingSink", "LoggingSink", "CompositeSink",
    "RunSession", "SimulationClock", "SCALE_DESCRIPTIONS", "RunSummary", "SolverOutcome", "run_headless",
    # Errors
    "ConvSimError", "SimulationRunError", "DiagnosableError",
    "ConfigurationError", "InvariantViolation",
]
