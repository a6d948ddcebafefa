# --- src/convsim_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Synthetic Solver Tuning ---
# Hardcoded tuning values with no physical derivation. They shape the scripted
# trajectories only; no numerical linear algebra is performed anywhere.

#: Total steps of the symmetric (interior point) trajectory per scale.
SYMMETRIC_STEPS_SMALL: int = 50
SYMMETRIC_STEPS_LARGE: int = 400

#: Total steps of the asymmetric trajectory per scale.
ASYMMETRIC_STEPS_SMALL: int = 20
ASYMMETRIC_STEPS_LARGE: int = 40

#: Wobble amplitude (canvas units) of the symmetric trajectory.
WOBBLE_SMALL: float = 10.0
WOBBLE_LARGE: float = 50.0
WOBBLE_LARGE_UNSTABLE: float = 80.0
#: Iteration after which large-scale wobble switches to the unstable amplitude.
WOBBLE_INSTABILITY_ITERATION: int = 100
#: Divisor applied to the iteration inside sin/cos of the wobble.
WOBBLE_PERIOD_DIVISOR: float = 5.0

#: Stall rate of the symmetric solver on large problems. Declared, never applied.
STALL_RATE_LARGE: float = 0.8
STALL_RATE_SMALL: float = 0.0

# --- Synthetic Residual Errors ---
INITIAL_ERROR: float = 1.0
SYMMETRIC_ERROR_FLOOR: float = 1.0e-4
SYMMETRIC_ERROR_JITTER: float = 0.1
SYMMETRIC_CONVERGED_ERROR: float = 1.0e-5
ASYMMETRIC_ERROR_BASE: float = 0.1
ASYMMETRIC_ERROR_RATE_DIVISOR: float = 1.5
ASYMMETRIC_ERROR_FLOOR: float = 1.0e-10
ASYMMETRIC_CONVERGED_ERROR: float = 1.0e-10

#: Displayed condition number of the Hessian in symmetric progress logs.
CONDITION_NUMBER_SMALL: float = 1.0e4
CONDITION_NUMBER_LARGE: float = 1.0e12

# --- Emission Cadence ---
#: Error-curve samples are emitted on every Nth tick only.
ERROR_SAMPLE_DECIMATION: int = 5
#: Symmetric progress log lines are emitted on every Nth iteration.
SYMMETRIC_LOG_INTERVAL: int = 20

# --- Problem Layout ---
START_FRACTION = (0.2, 0.8)
OPTIMAL_FRACTION = (0.8, 0.2)
NUM_CONSTRAINTS: int = 5

# --- Sparsity Illustration ---
SPARSITY_CELL_SIZE: float = 3.0
SPARSITY_NUM_ENTRIES: int = 300
SPARSITY_NUM_PERTURBATIONS: int = 150
SPARSITY_PERTURBATION_SPAN: float = 0.8
SPARSITY_PERTURBATION_OFFSET: float = 5.0

# --- Host Defaults ---
DEFAULT_CANVAS_WIDTH: float = 500.0
DEFAULT_CANVAS_HEIGHT: float = 500.0
DEFAULT_FRAME_RATE_HZ: float = 60.0
DEFAULT_MAX_FRAMES: int = 10_000
