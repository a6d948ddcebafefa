# src/convsim_core/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class ConvSimError(Exception):
    """Base class for all custom, user-facing errors in ConvSim Core."""
    pass

class SimulationRunError(ConvSimError):
    """
    Raised by the headless facade when a run fails for any reason, from an invalid
    configuration to a broken engine invariant. The message is a pre-formatted,
    user-friendly diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Concrete base class for all internal exceptions that are diagnosable.

    It is a valid `Exception` for use in `except` clauses, and declares
    `get_diagnostic_report` abstract so that every subclass is expected to provide
    its own report.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Formats the final multi-line report string so that all user-facing
    diagnostics share one look.

    Args:
        error_type: The high-level category of the error (e.g., "Invalid Scale").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: Contextual information (solver kind, iteration, user input, source file).

    Returns:
        A formatted report string ready for display.
    """
    lines = [
        "\n",
        "=============== ConvSim Core: Actionable Diagnostic Report ===============",
        f"Error Type:     {error_type}",
    ]
    if solver := context.get('solver'):
        lines.append(f"Solver:         {solver}")
    if (iteration := context.get('iteration')) is not None:
        lines.append(f"Iteration:      {iteration}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("==========================================================================")
    return "\n".join(lines)
