# src/convsim_core/solvers/exceptions.py
"""
Defines the diagnosable exceptions raised when the synthetic solvers are driven
incorrectly. These are programming errors, not recoverable conditions: the clock
aborts the run when one is raised.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class InvariantViolation(DiagnosableError):
    """
    Raised when an engine invariant is broken, e.g. a trajectory ticked with a
    non-increasing iteration or a frame firing without an active problem.
    """
    details: str
    solver: Optional[str] = None
    iteration: Optional[int] = None

    def __str__(self):
        where = f" ({self.solver})" if self.solver else ""
        return f"Invariant violated{where}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Engine Invariant Violation",
            details=self.details,
            suggestion="This is a bug in the code driving the engine. Iterations must be supplied by a single clock, strictly increasing from 1, and only while a run session is active.",
            context={'solver': self.solver, 'iteration': self.iteration}
        )
