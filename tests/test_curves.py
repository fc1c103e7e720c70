"""Tests for the curve library."""

import pytest

from herd.curves import LIBRARY, CurveType, Keyframe, KeyframeCurve, get_curve, sample


class TestLibraryCurves:
    """Test predefined curves."""

    @pytest.mark.parametrize("curve_type", list(LIBRARY))
    def test_endpoints(self, curve_type):
        """Library curves start at 0 and end at 1."""
        assert sample(curve_type, 0.0) == pytest.approx(0.0, abs=1e-9)
        assert sample(curve_type, 1.0) == pytest.approx(1.0, abs=1e-9)

    @pytest.mark.parametrize("curve_type", list(LIBRARY))
    def test_monotonic(self, curve_type):
        """Library curves never decrease."""
        values = [sample(curve_type, i / 50) for i in range(51)]
        assert all(b >= a - 1e-12 for a, b in zip(values, values[1:]))

    def test_ease_shapes(self):
        """Ease in starts slow and ease out starts fast."""
        assert sample(CurveType.EASE_IN, 0.5) == pytest.approx(0.3125)
        assert sample(CurveType.EASE_OUT, 0.5) == pytest.approx(0.6875)
        assert sample(CurveType.EASE_IN_OUT, 0.5) == pytest.approx(0.5)

    def test_lookup_by_value(self):
        """Curves can be selected by their string value."""
        assert sample("cubic_in", 0.5) == pytest.approx(0.125)


class TestSample:
    """Test clamped sampling."""

    def test_input_clamped(self):
        assert sample(CurveType.LINEAR, 1.5) == 1.0
        assert sample(CurveType.LINEAR, -1.0) == 0.0

    def test_output_clamped(self):
        """Curves that overshoot are clamped."""
        assert sample(lambda t: 2.0, 0.5) == 1.0
        assert sample(lambda t: -1.0, 0.5) == 0.0

    def test_callable(self):
        assert sample(lambda t: t * t, 0.5) == pytest.approx(0.25)

    def test_custom_without_curve_is_linear(self):
        """CUSTOM with nothing assigned behaves as linear."""
        assert get_curve(CurveType.CUSTOM)(0.3) == pytest.approx(0.3)

    def test_custom_curve(self):
        curve = lambda t: 1.0 - t  # noqa: E731
        assert get_curve(CurveType.CUSTOM, curve) is curve


class TestKeyframeCurve:
    """Test Hermite keyframe curves."""

    def test_linear(self):
        """Unit tangents on a unit line reproduce a straight line."""
        curve = KeyframeCurve.linear()
        for t in (0.0, 0.25, 0.5, 0.9, 1.0):
            assert curve(t) == pytest.approx(t)

    def test_flat_tangents(self):
        """Zero tangents give a smoothstep between keys."""
        curve = KeyframeCurve((Keyframe(0.0, 0.0), Keyframe(1.0, 1.0)))
        assert curve(0.5) == pytest.approx(0.5)
        assert curve(0.25) == pytest.approx(0.15625)

    def test_keys_sorted(self):
        """Keyframes are ordered by time."""
        curve = KeyframeCurve((Keyframe(1.0, 1.0), Keyframe(0.0, 0.0), Keyframe(0.5, 0.2)))
        assert [k.time for k in curve.keyframes] == [0.0, 0.5, 1.0]
        assert curve(0.5) == pytest.approx(0.2)

    def test_outside_keys_hold(self):
        """Times outside the keys hold the end values."""
        curve = KeyframeCurve((Keyframe(0.2, 0.3), Keyframe(0.8, 0.7)))
        assert curve(0.0) == 0.3
        assert curve(1.0) == 0.7

    def test_needs_keyframes(self):
        with pytest.raises(ValueError):
            KeyframeCurve(())
