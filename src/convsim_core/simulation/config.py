# src/convsim_core/simulation/config.py
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cerberus
import pint
import yaml

from ..constants import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, DEFAULT_FRAME_RATE_HZ
from ..solvers.enums import ScaleParameter
from ..units import ureg, FREQUENCY_DIMENSIONALITY
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_RUN_CONFIG_SCHEMA = {
    "scale": {"type": "string", "required": False, "empty": False, "default": "small"},
    "width": {"type": "number", "required": False, "min": 0, "default": DEFAULT_CANVAS_WIDTH},
    "height": {"type": "number", "required": False, "min": 0, "default": DEFAULT_CANVAS_HEIGHT},
    "seed": {"type": "integer", "required": False, "nullable": True, "min": 0, "default": None},
    "frame_rate": {"type": ["string", "number"], "required": False, "default": DEFAULT_FRAME_RATE_HZ},
}


@dataclass(frozen=True)
class RunConfig:
    """Validated settings for one run of the comparison."""
    scale: ScaleParameter = ScaleParameter.SMALL
    width: float = DEFAULT_CANVAS_WIDTH
    height: float = DEFAULT_CANVAS_HEIGHT
    seed: Optional[int] = None
    frame_rate_hz: float = DEFAULT_FRAME_RATE_HZ


def parse_scale(value: Union[str, ScaleParameter]) -> ScaleParameter:
    """
    Maps an external scale selection onto `ScaleParameter`.

    Raises:
        ConfigurationError: For anything other than 'small' or 'large'.
    """
    if isinstance(value, ScaleParameter):
        return value
    if isinstance(value, str):
        try:
            return ScaleParameter(value.strip().lower())
        except ValueError:
            pass
    raise ConfigurationError(
        details=f"Unrecognized problem scale {value!r}. Expected one of: {[s.value for s in ScaleParameter]}.",
        user_input=value,
    )


def parse_frame_rate(raw: Union[str, float, int]) -> float:
    """Parses a frame rate such as '60 Hz' or a bare number of Hz into a float in Hz."""
    try:
        if isinstance(raw, str):
            qty = ureg.Quantity(raw)
            if qty.dimensionless:
                rate_hz = float(qty.magnitude)
            elif qty.dimensionality != FREQUENCY_DIMENSIONALITY:
                raise pint.DimensionalityError(qty.units, ureg.Hz)
            else:
                rate_hz = float(qty.to('Hz').magnitude)
        else:
            rate_hz = float(raw)
    except (ValueError, TypeError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigurationError(details=f"Failed to parse frame rate: {e}", user_input=raw) from e

    if not math.isfinite(rate_hz) or rate_hz <= 0:
        raise ConfigurationError(details=f"Frame rate must be a positive finite number, got {rate_hz} Hz.", user_input=raw)
    return rate_hz


def parse_run_config(raw_config: Optional[Dict[str, Any]], source_file: Optional[Path] = None) -> RunConfig:
    """
    Validates a raw configuration mapping and converts it into a `RunConfig`.
    Missing keys take their defaults.
    """
    if raw_config is not None and not isinstance(raw_config, dict):
        raise ConfigurationError(
            details=f"Run configuration must be a mapping, got {type(raw_config).__name__}.",
            source_file=source_file,
        )
    validator = cerberus.Validator(_RUN_CONFIG_SCHEMA)
    if not validator.validate(raw_config or {}):
        raise ConfigurationError(
            details=f"Run configuration failed schema validation: {validator.errors}",
            source_file=source_file,
        )
    doc = validator.document

    config = RunConfig(
        scale=parse_scale(doc.get("scale", ScaleParameter.SMALL)),
        width=float(doc.get("width", DEFAULT_CANVAS_WIDTH)),
        height=float(doc.get("height", DEFAULT_CANVAS_HEIGHT)),
        seed=doc.get("seed"),
        frame_rate_hz=parse_frame_rate(doc.get("frame_rate", DEFAULT_FRAME_RATE_HZ)),
    )
    logger.debug(f"Parsed run configuration: {config}")
    return config


def load_run_config(path: Union[str, Path]) -> RunConfig:
    """Reads and validates a YAML run configuration file."""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(details=f"Could not read run configuration: {e}", source_file=path) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(details=f"Invalid YAML in run configuration: {e}", source_file=path) from e

    logger.info(f"Loaded run configuration from '{path}'.")
    return parse_run_config(raw, source_file=path)
