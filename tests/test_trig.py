"""
Tests for the oblique spherical triangle solver.
"""

import math

import pytest

from icosa_truncation.models import SphericalTriangle
from icosa_truncation.trig import acot, asin_clamp, solve_bcC


def _law_of_cosines_a(st: SphericalTriangle) -> float:
    """cos a - (cos b cos c + sin b sin c cos A)"""
    return math.cos(st.a) - (
        math.cos(st.b) * math.cos(st.c) + math.sin(st.b) * math.sin(st.c) * math.cos(st.A)
    )


def _law_of_cosines_c(st: SphericalTriangle) -> float:
    """cos c - (cos a cos b + sin a sin b cos C)"""
    return math.cos(st.c) - (
        math.cos(st.a) * math.cos(st.b) + math.sin(st.a) * math.sin(st.b) * math.cos(st.C)
    )


def _solve_degrees(b, c, C):
    return solve_bcC(math.radians(b), math.radians(c), math.radians(C))


# =============================================================================
# Helper Tests
# =============================================================================

class TestHelpers:
    """Test clamped inverse functions."""

    def test_asin_clamp_inside(self):
        assert asin_clamp(0.5) == pytest.approx(math.pi / 6)

    def test_asin_clamp_above(self):
        """Rounding past 1 still gives pi/2."""
        assert asin_clamp(1.0000001) == pytest.approx(math.pi / 2)

    def test_asin_clamp_below(self):
        assert asin_clamp(-1.5) == pytest.approx(-math.pi / 2)

    def test_acot(self):
        """acot(1) is 45 degrees, acot(0) is 90."""
        assert acot(1.0) == pytest.approx(math.pi / 4)
        assert acot(0.0) == pytest.approx(math.pi / 2)
        assert acot(-1.0) == pytest.approx(-math.pi / 4)


# =============================================================================
# General Case Tests
# =============================================================================

class TestGeneralCase:
    """Test the single-solution branch (b <= c or C obtuse)."""

    @pytest.mark.parametrize('b, c, C', [
        (63.434948822922, 100.812316, 144.0),
        (63.434948822922, 90.0, 144.0),
        (40.0, 60.0, 70.0),
        (30.0, 45.0, 100.0),
    ])
    def test_laws_hold(self, b, c, C):
        """Solved triangle satisfies the laws of cosines and sines."""
        st = _solve_degrees(b, c, C)
        assert _law_of_cosines_a(st) == pytest.approx(0.0, abs=1e-9)
        assert _law_of_cosines_c(st) == pytest.approx(0.0, abs=1e-9)

        ratio = math.sin(st.c) / math.sin(st.C)
        assert math.sin(st.a) / math.sin(st.A) == pytest.approx(ratio, rel=1e-9)
        assert math.sin(st.b) / math.sin(st.B) == pytest.approx(ratio, rel=1e-9)

    def test_inputs_kept(self):
        """Given values are stored unchanged."""
        st = _solve_degrees(40.0, 60.0, 70.0)
        assert st.b == pytest.approx(math.radians(40.0))
        assert st.c == pytest.approx(math.radians(60.0))
        assert st.C == pytest.approx(math.radians(70.0))

    def test_angles_positive(self):
        st = _solve_degrees(63.434948822922, 90.0, 144.0)
        assert 0 < st.A < math.pi
        assert 0 < st.B < math.pi
        assert 0 < st.a < math.pi


# =============================================================================
# Ambiguous Case Tests
# =============================================================================

class TestAmbiguousCase:
    """Test the two-candidate branch (b > c and C acute)."""

    def test_acute_candidate(self):
        """First candidate for B is kept when it gives a positive A."""
        st = _solve_degrees(60.0, 50.0, 45.0)
        assert math.degrees(st.B) == pytest.approx(53.07, abs=0.01)
        assert math.degrees(st.A) == pytest.approx(112.9, abs=0.1)
        assert math.degrees(st.a) == pytest.approx(86.37, abs=0.01)
        assert _law_of_cosines_a(st) == pytest.approx(0.0, abs=1e-9)
        assert _law_of_cosines_c(st) == pytest.approx(0.0, abs=1e-9)

    def test_supplementary_candidate(self):
        """Negative A switches to the supplement of B."""
        st = _solve_degrees(120.0, 80.0, 60.0)
        assert st.B > math.pi / 2
        assert st.A > 0
        assert _law_of_cosines_a(st) == pytest.approx(0.0, abs=1e-9)
        assert _law_of_cosines_c(st) == pytest.approx(0.0, abs=1e-9)
