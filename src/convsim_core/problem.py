# src/convsim_core/problem.py
"""
Defines the randomized 2D optimization `Problem` and the generator that builds
one per run.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .constants import NUM_CONSTRAINTS, OPTIMAL_FRACTION, START_FRACTION
from .geometry import Point, random_point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Constraint:
    """A decorative constraint segment drawn between two canvas points."""
    p1: Point
    p2: Point


@dataclass(frozen=True)
class Problem:
    """
    The immutable problem instance for a single run.

    It is owned by the `SimulationClock` and shared read-only with both solver
    trajectories. `start` and `optimal` are fixed fractions of the canvas; only the
    constraint set is random.
    """
    start: Point
    optimal: Point
    constraints: Tuple[Constraint, ...]
    width: float
    height: float


class ProblemGenerator:
    """Builds a fresh `Problem` for the given canvas bounds."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def generate(self, width: float, height: float) -> Problem:
        start = Point(width * START_FRACTION[0], height * START_FRACTION[1])
        optimal = Point(width * OPTIMAL_FRACTION[0], height * OPTIMAL_FRACTION[1])
        constraints = tuple(
            Constraint(
                p1=random_point(width, height, self.rng),
                p2=random_point(width, height, self.rng),
            )
            for _ in range(NUM_CONSTRAINTS)
        )
        logger.debug(f"Generated problem on {width}x{height} canvas with {len(constraints)} constraints.")
        return Problem(
            start=start,
            optimal=optimal,
            constraints=constraints,
            width=width,
            height=height,
        )
