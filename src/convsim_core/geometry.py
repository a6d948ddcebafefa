# src/convsim_core/geometry.py
"""
Pure geometry and timing helpers shared by the problem generator and the
synthetic solver trajectories.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Point:
    """An immutable 2D canvas coordinate."""
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple:
        return (self.x, self.y)


def ease_in_out_quad(t: float) -> float:
    """
    Quadratic ease-in-out on [0, 1].

    Continuous and monotonic, 0 at t=0, 1 at t=1 and 0.5 at the midpoint, with a
    continuous derivative across t=0.5.
    """
    if t < 0.5:
        return 2.0 * t * t
    return -1.0 + (4.0 - 2.0 * t) * t


def lerp(p1: Point, p2: Point, t: float) -> Point:
    """Linear interpolation from `p1` (t=0) to `p2` (t=1)."""
    return Point(
        x=p1.x + (p2.x - p1.x) * t,
        y=p1.y + (p2.y - p1.y) * t,
    )


# Alias kept for callers that think in terms of path interpolation.
interpolate = lerp


def random_point(width: float, height: float, rng: np.random.Generator) -> Point:
    """A point drawn uniformly from [0, width) x [0, height)."""
    return Point(x=float(rng.random() * width), y=float(rng.random() * height))
