# tests/test_sparsity.py
import numpy as np
import pytest

from convsim_core.solvers import SolverKind
from convsim_core.sparsity import generate_sparsity_pattern


@pytest.fixture
def rng():
    return np.random.default_rng(42)


def test_symmetric_pattern_mirrors_every_entry(rng):
    pattern = generate_sparsity_pattern(300.0, 60.0, SolverKind.SYMMETRIC, rng)
    assert pattern.is_symmetric
    assert pattern.entries.shape == (300, 2)
    assert pattern.mirrored.shape == (300, 2)
    assert pattern.perturbations.shape == (0, 2)

    aspect = 60.0 / 300.0
    np.testing.assert_allclose(pattern.mirrored[:, 0], pattern.entries[:, 1] / aspect)
    np.testing.assert_allclose(pattern.mirrored[:, 1], pattern.entries[:, 0] * aspect)


def test_entries_lie_in_upper_triangle(rng):
    pattern = generate_sparsity_pattern(300.0, 60.0, SolverKind.SYMMETRIC, rng)
    x, y = pattern.entries[:, 0], pattern.entries[:, 1]
    assert np.all(y <= x * (60.0 / 300.0))


def test_diagonal_band(rng):
    pattern = generate_sparsity_pattern(30.0, 15.0, SolverKind.ASYMMETRIC, rng)
    np.testing.assert_allclose(pattern.diagonal[:, 0], np.arange(0.0, 30.0, 3.0))
    np.testing.assert_allclose(pattern.diagonal[:, 1], pattern.diagonal[:, 0] * 0.5)


def test_asymmetric_perturbations_sit_below_diagonal(rng):
    pattern = generate_sparsity_pattern(300.0, 60.0, SolverKind.ASYMMETRIC, rng)
    assert not pattern.is_symmetric
    assert pattern.mirrored.shape == (0, 2)
    assert 0 < len(pattern.perturbations) <= 150
    x, y = pattern.perturbations[:, 0], pattern.perturbations[:, 1]
    assert np.all(x < 300.0 * 0.8)
    assert np.all(y >= x * 0.2 + 5.0)
    assert np.all(y < 60.0)


def test_degenerate_canvas_gives_empty_pattern(rng):
    pattern = generate_sparsity_pattern(0.0, 60.0, SolverKind.SYMMETRIC, rng)
    assert pattern.num_cells == 0


def test_patterns_compare_by_identity_and_hash(rng):
    pattern = generate_sparsity_pattern(300.0, 60.0, SolverKind.SYMMETRIC, rng)
    other = generate_sparsity_pattern(300.0, 60.0, SolverKind.SYMMETRIC, rng)
    assert pattern == pattern
    assert pattern != other
    assert len({pattern, other}) == 2
