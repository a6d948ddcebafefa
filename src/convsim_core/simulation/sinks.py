# src/convsim_core/simulation/sinks.py
"""
Defines the `UpdateSink` contract through which the engine reports progress, and
the stock sinks shipped with the core.

Renderers implement `UpdateSink`. Everything passed to a sink (points, paths,
patterns) is an immutable snapshot; sinks must treat it as read-only. The engine
finishes its own state updates before calling any sink, so a sink that raises
cannot leave the engine half-updated.
"""
import logging
from enum import Enum
from typing import Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from ..geometry import Point
from ..solvers.enums import SolverKind
from ..sparsity import SparsityPattern

logger = logging.getLogger(__name__)


class SinkStatus(Enum):
    """Status as shown to the user for each solver."""
    WAITING = "waiting"
    RUNNING = "running"
    CONVERGED = "converged"


@runtime_checkable
class UpdateSink(Protocol):
    """Receiver of engine events. Calls are fire-and-forget."""

    def on_path_update(self, kind: SolverKind, path: Tuple[Point, ...]) -> None:
        """Full path history of `kind` after the latest tick (empty after a reset)."""
        ...

    def on_error_sample(self, kind: SolverKind, iteration: int, error: float) -> None:
        """A decimated residual-error sample, at most one every fifth tick."""
        ...

    def on_status_change(
        self,
        kind: SolverKind,
        status: SinkStatus,
        final_iteration: Optional[int] = None,
        final_error: Optional[float] = None,
    ) -> None:
        """Status transition. Final iteration and error accompany CONVERGED."""
        ...

    def on_log(self, kind: SolverKind, message: str) -> None:
        """A human-readable console line."""
        ...

    def on_sparsity_pattern(self, kind: SolverKind, pattern: SparsityPattern) -> None:
        """The sparsity illustration for `kind`, sent once at the start of a run."""
        ...


class NullSink:
    """An `UpdateSink` that ignores everything. Subclass it to handle a subset of events."""

    def on_path_update(self, kind: SolverKind, path: Tuple[Point, ...]) -> None:
        pass

    def on_error_sample(self, kind: SolverKind, iteration: int, error: float) -> None:
        pass

    def on_status_change(self, kind: SolverKind, status: SinkStatus,
                         final_iteration: Optional[int] = None, final_error: Optional[float] = None) -> None:
        pass

    def on_log(self, kind: SolverKind, message: str) -> None:
        pass

    def on_sparsity_pattern(self, kind: SolverKind, pattern: SparsityPattern) -> None:
        pass


class RecordingSink(NullSink):
    """
    Keeps everything the engine reports in memory, organised the way the panels of
    the comparison view present it: an error chart series, the latest path, a
    console, the status badge and the final results row per solver.

    A RUNNING status starts a fresh chart; a WAITING status clears the chart, the
    console and the results, like the reset button.
    """

    def __init__(self):
        self.error_series: Dict[SolverKind, List[Tuple[int, float]]] = {}
        self.paths: Dict[SolverKind, Tuple[Point, ...]] = {}
        self.path_update_counts: Dict[SolverKind, int] = {}
        self.console: Dict[SolverKind, List[str]] = {}
        self.status_history: Dict[SolverKind, List[SinkStatus]] = {}
        self.results: Dict[SolverKind, Tuple[int, float]] = {}
        self.patterns: Dict[SolverKind, SparsityPattern] = {}
        self.clear()

    def clear(self):
        for kind in SolverKind:
            self.error_series[kind] = []
            self.paths[kind] = ()
            self.path_update_counts[kind] = 0
            self.console[kind] = []
            self.status_history[kind] = []
        self.results.clear()
        self.patterns.clear()

    def status(self, kind: SolverKind) -> Optional[SinkStatus]:
        history = self.status_history[kind]
        return history[-1] if history else None

    def on_path_update(self, kind: SolverKind, path: Tuple[Point, ...]) -> None:
        self.paths[kind] = path
        self.path_update_counts[kind] += 1

    def on_error_sample(self, kind: SolverKind, iteration: int, error: float) -> None:
        self.error_series[kind].append((iteration, error))

    def on_status_change(self, kind: SolverKind, status: SinkStatus,
                         final_iteration: Optional[int] = None, final_error: Optional[float] = None) -> None:
        self.status_history[kind].append(status)
        if status is SinkStatus.RUNNING:
            self.error_series[kind] = []
        elif status is SinkStatus.WAITING:
            self.error_series[kind] = []
            self.console[kind] = []
            self.results.pop(kind, None)
            self.patterns.pop(kind, None)
        elif status is SinkStatus.CONVERGED:
            self.results[kind] = (final_iteration, final_error)

    def on_log(self, kind: SolverKind, message: str) -> None:
        self.console[kind].append(f"> {message}")

    def on_sparsity_pattern(self, kind: SolverKind, pattern: SparsityPattern) -> None:
        self.patterns[kind] = pattern


class LoggingSink(NullSink):
    """Forwards console lines and status changes to a standard logger."""

    def __init__(self, target: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.target = target if target is not None else logger
        self.level = level

    def on_error_sample(self, kind: SolverKind, iteration: int, error: float) -> None:
        self.target.debug(f"[{kind.value}] iter {iteration}: residual {error:.3e}")

    def on_status_change(self, kind: SolverKind, status: SinkStatus,
                         final_iteration: Optional[int] = None, final_error: Optional[float] = None) -> None:
        if status is SinkStatus.CONVERGED:
            self.target.log(self.level, f"[{kind.value}] {status.name} after {final_iteration} iterations (gap {final_error:g})")
        else:
            self.target.log(self.level, f"[{kind.value}] {status.name}")

    def on_log(self, kind: SolverKind, message: str) -> None:
        self.target.log(self.level, f"[{kind.value}] {message}")


class CompositeSink:
    """Fans every event out to several sinks, in order."""

    def __init__(self, sinks: Sequence[UpdateSink]):
        self.sinks = list(sinks)

    def on_path_update(self, kind, path):
        for sink in self.sinks:
            sink.on_path_update(kind, path)

    def on_error_sample(self, kind, iteration, error):
        for sink in self.sinks:
            sink.on_error_sample(kind, iteration, error)

    def on_status_change(self, kind, status, final_iteration=None, final_error=None):
        for sink in self.sinks:
            sink.on_status_change(kind, status, final_iteration, final_error)

    def on_log(self, kind, message):
        for sink in self.sinks:
            sink.on_log(kind, message)

    def on_sparsity_pattern(self, kind, pattern):
        for sink in self.sinks:
            sink.on_sparsity_pattern(kind, pattern)
