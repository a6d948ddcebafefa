# src/convsim_core/simulation/__init__.py
from .exceptions import ConfigurationError
from .config import RunConfig, parse_scale, parse_frame_rate, parse_run_config, load_run_config
from .scheduler import FrameScheduler, ManualFrameScheduler, AsyncioFrameScheduler
from .sinks import UpdateSink, SinkStatus, NullSink, RecordingSink, LoggingSink, CompositeSink
from .session import RunSession
from .clock import SimulationClock, SCALE_DESCRIPTIONS, total_steps_for
from .results import RunSummary, SolverOutcome
from .execution import run_headless

__all__ = [
    # Exceptions
    "ConfigurationError",
    # Configuration
    "RunConfig",
    "parse_scale",
    "parse_frame_rate",
    "parse_run_config",
    "load_run_config",
    # Host Scheduling
    "FrameScheduler",
    "ManualFrameScheduler",
    "AsyncioFrameScheduler",
    # Sinks
    "UpdateSink",
    "SinkStatus",
    "NullSink",
    "RecordingSink",
    "LoggingSink",
    "CompositeSink",
    # Engine
    "RunSession",
    "SimulationClock",
    "SCALE_DESCRIPTIONS",
    "total_steps_for",
    # Results
    "RunSummary",
    "SolverOutcome",
    "run_headless",
]
