# --- src/convsim_core/units.py ---
import pint
import logging

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")

# --- Canonical dimensionality for frame-rate checks ---
FREQUENCY_DIMENSIONALITY = ureg.parse_expression('Hz').dimensionality


def frame_interval_ms(frame_rate_hz: float) -> float:
    """Returns the wall-clock length of one animation frame in milliseconds."""
    period = (1.0 / Quantity(frame_rate_hz, 'Hz')).to('ms')
    return float(period.magnitude)
