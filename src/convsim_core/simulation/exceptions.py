# src/convsim_core/simulation/exceptions.py
"""
Defines the diagnosable exceptions for run configuration.

A `ConfigurationError` is always raised synchronously, before the clock touches
any state, so a rejected `run()` leaves the engine exactly as it was.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class ConfigurationError(DiagnosableError):
    """Raised for an unrecognized scale value or an invalid run configuration."""
    details: str
    user_input: Any = None
    source_file: Optional[Path] = None

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Run Configuration",
            details=self.details,
            suggestion="The scale must be 'small' or 'large'. Canvas sizes are numbers, 'seed' is an integer and 'frame_rate' is a frequency such as '60 Hz'.",
            context={
                'user_input': None if self.user_input is None else str(self.user_input),
                'source_file': self.source_file,
            }
        )
