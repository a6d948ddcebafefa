# src/convsim_core/sparsity.py
"""
Synthetic matrix-sparsity illustrations shown next to each solver.

Nothing here is a real matrix. A pattern is a set of canvas cells: a diagonal
band, random upper-triangle entries, their mirror images for the symmetric solver,
and lower-triangle perturbations that break symmetry for the asymmetric solver.
"""
import logging
from dataclasses import dataclass

import numpy as np

from .constants import (
    SPARSITY_CELL_SIZE,
    SPARSITY_NUM_ENTRIES,
    SPARSITY_NUM_PERTURBATIONS,
    SPARSITY_PERTURBATION_OFFSET,
    SPARSITY_PERTURBATION_SPAN,
)
from .solvers.enums import SolverKind

logger = logging.getLogger(__name__)

_EMPTY = np.empty((0, 2), dtype=float)


@dataclass(frozen=True, eq=False)
class SparsityPattern:
    """
    Cell coordinates of a sparsity illustration. Every array has shape (n, 2)
    holding (x, y) canvas positions.
    """
    kind: SolverKind
    width: float
    height: float
    diagonal: np.ndarray
    entries: np.ndarray
    mirrored: np.ndarray
    perturbations: np.ndarray

    @property
    def is_symmetric(self) -> bool:
        return self.kind is SolverKind.SYMMETRIC

    @property
    def num_cells(self) -> int:
        return len(self.diagonal) + len(self.entries) + len(self.mirrored) + len(self.perturbations)


def generate_sparsity_pattern(
    width: float,
    height: float,
    kind: SolverKind,
    rng: np.random.Generator,
) -> SparsityPattern:
    """Builds the illustration for one solver on a width x height strip."""
    if width <= 0 or height <= 0:
        logger.debug(f"Degenerate sparsity canvas {width}x{height}; returning an empty pattern.")
        return SparsityPattern(kind, width, height, _EMPTY, _EMPTY, _EMPTY, _EMPTY)

    aspect = height / width

    xs = np.arange(0.0, width, SPARSITY_CELL_SIZE)
    diagonal = np.column_stack([xs, xs * aspect])

    entry_x = rng.random(SPARSITY_NUM_ENTRIES) * width
    entry_y = rng.random(SPARSITY_NUM_ENTRIES) * (entry_x * aspect)
    entries = np.column_stack([entry_x, entry_y])

    if kind is SolverKind.SYMMETRIC:
        mirrored = np.column_stack([entry_y / aspect, entry_x * aspect])
        perturbations = _EMPTY
    else:
        mirrored = _EMPTY
        pert_x = rng.random(SPARSITY_NUM_PERTURBATIONS) * width * SPARSITY_PERTURBATION_SPAN
        min_y = pert_x * aspect + SPARSITY_PERTURBATION_OFFSET
        pert_y = min_y + rng.random(SPARSITY_NUM_PERTURBATIONS) * (height - min_y)
        # Candidates whose lower bound already sits off the canvas are dropped.
        keep = pert_y < height
        perturbations = np.column_stack([pert_x[keep], pert_y[keep]])

    return SparsityPattern(
        kind=kind,
        width=width,
        height=height,
        diagonal=diagonal,
        entries=entries,
        mirrored=mirrored,
        perturbations=perturbations,
    )
