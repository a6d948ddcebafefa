# tests/test_geometry.py
import pytest
import numpy as np

from convsim_core.geometry import Point, ease_in_out_quad, lerp, interpolate, random_point


class TestEaseInOutQuad:

    @pytest.mark.parametrize("t, expected", [(0.0, 0.0), (0.5, 0.5), (1.0, 1.0), (0.25, 0.125), (0.75, 0.875)])
    def test_known_values(self, t, expected):
        assert ease_in_out_quad(t) == pytest.approx(expected)

    def test_continuous_across_midpoint(self):
        eps = 1e-9
        assert ease_in_out_quad(0.5 - eps) == pytest.approx(ease_in_out_quad(0.5 + eps), abs=1e-8)

    def test_derivative_continuous_across_midpoint(self):
        h = 1e-6
        left = (ease_in_out_quad(0.5) - ease_in_out_quad(0.5 - h)) / h
        right = (ease_in_out_quad(0.5 + h) - ease_in_out_quad(0.5)) / h
        assert left == pytest.approx(right, rel=1e-4)

    def test_monotonic_on_unit_interval(self):
        values = [ease_in_out_quad(t) for t in np.linspace(0.0, 1.0, 201)]
        assert all(b >= a for a, b in zip(values, values[1:]))


class TestLerp:

    def test_endpoints_and_midpoint(self):
        p1, p2 = Point(0.0, 10.0), Point(100.0, -10.0)
        assert lerp(p1, p2, 0.0) == p1
        assert lerp(p1, p2, 1.0) == p2
        assert lerp(p1, p2, 0.5) == Point(50.0, 0.0)

    def test_interpolate_is_lerp(self):
        assert interpolate is lerp

    def test_point_is_immutable(self):
        p = Point(1.0, 2.0)
        with pytest.raises(AttributeError):
            p.x = 5.0
        assert p.offset(1.0, -1.0) == Point(2.0, 1.0)
        assert p == Point(1.0, 2.0)


def test_random_point_within_bounds():
    rng = np.random.default_rng(0)
    for _ in range(200):
        p = random_point(40.0, 30.0, rng)
        assert 0.0 <= p.x < 40.0
        assert 0.0 <= p.y < 30.0
