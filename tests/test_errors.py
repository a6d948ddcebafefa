# tests/test_errors.py
import pytest

from convsim_core.errors import Diagnosable, DiagnosableError, format_diagnostic_report
from convsim_core.simulation.exceptions import ConfigurationError
from convsim_core.solvers.exceptions import InvariantViolation
from convsim_core.units import frame_interval_ms


def test_report_layout():
    report = format_diagnostic_report(
        error_type="Engine Invariant Violation",
        details="line one\nline two",
        suggestion="Fix it.",
        context={'solver': 'symmetric', 'iteration': 0, 'user_input': None},
    )
    assert "Error Type:     Engine Invariant Violation" in report
    assert "Solver:         symmetric" in report
    assert "Iteration:      0" in report
    assert "User Input" not in report
    assert "  line one\n  line two" in report
    assert "Suggestion:\n  Fix it." in report


def test_diagnosable_errors_are_catchable_and_diagnosable():
    for error in (InvariantViolation(details="boom", solver="asymmetric", iteration=4),
                  ConfigurationError(details="bad scale", user_input="medium")):
        assert isinstance(error, DiagnosableError)
        assert isinstance(error, Diagnosable)
        with pytest.raises(DiagnosableError):
            raise error


def test_invariant_violation_message():
    error = InvariantViolation(details="went backwards", solver="symmetric")
    assert str(error) == "Invariant violated (symmetric): went backwards"


@pytest.mark.parametrize("rate, interval", [(60.0, 1000.0 / 60.0), (50.0, 20.0), (1000.0, 1.0)])
def test_frame_interval(rate, interval):
    assert frame_interval_ms(rate) == pytest.approx(interval)
