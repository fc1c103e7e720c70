"""Tests for the converter."""

import pytest

from herd.converter import BoolRangeMapping, derive, project
from herd.curves import CurveType
from herd.datum import Datum
from herd.enums import RelationshipStatus
from herd.exceptions import InvalidBoundsError
from spatial.entities import UP
from spatial.rotation import from_axis_angle


class TestProjection:
    """Test numeric projection of datums."""

    def test_float(self):
        assert project(Datum.of_float(2.5)) == 2.5

    def test_bool(self):
        """Booleans project to 1 or 0."""
        assert project(Datum.of_bool(True)) == 1.0
        assert project(Datum.of_bool(False)) == 0.0

    def test_vector_magnitude(self):
        """Vectors project to their length."""
        assert project(Datum.of_vector((3, 4, 0))) == pytest.approx(5.0)

    def test_rotation_angle(self):
        """Rotations project to their angle in degrees."""
        assert project(Datum.of_rotation(from_axis_angle(UP, 60))) == pytest.approx(60.0)


class TestDerive:
    """Test normalization and boundary flags."""

    def test_in_range(self):
        """A value inside the bounds normalizes linearly."""
        result = derive(Datum.of_float(3.0), 0.0, 5.0)
        assert result.normalized == pytest.approx(0.6)
        assert result.as_axis == pytest.approx(0.2)
        assert result.in_range and not result.over and not result.under

    def test_over_is_clamped(self):
        """Values above maximum clamp to 1 but the axis value does not."""
        result = derive(Datum.of_float(7.0), 0.0, 5.0)
        assert result.over
        assert result.normalized == 1.0
        assert result.as_axis == pytest.approx(1.8)

    def test_under_is_clamped(self):
        """Values below minimum clamp to 0."""
        result = derive(Datum.of_float(-5.0), 0.0, 5.0)
        assert result.under
        assert result.normalized == 0.0
        assert result.as_axis == pytest.approx(-3.0)

    @pytest.mark.parametrize("raw", [0.0, 5.0])
    def test_bounds_are_inclusive(self, raw):
        """Exactly hitting a bound is still in range."""
        assert derive(Datum.of_float(raw), 0.0, 5.0).in_range

    @pytest.mark.parametrize("raw", [-100.0, -0.01, 0.0, 2.5, 4.99, 5.0, 5.01, 1e9])
    def test_exactly_one_flag(self, raw):
        """Exactly one boundary flag is set and normalized stays in [0, 1]."""
        result = derive(Datum.of_float(raw), 0.0, 5.0)
        assert [result.over, result.under, result.in_range].count(True) == 1
        assert 0.0 <= result.normalized <= 1.0

    @pytest.mark.parametrize("minimum,maximum", [(5.0, 5.0), (5.0, 1.0)])
    def test_invalid_bounds(self, minimum, maximum):
        """Empty or inverted ranges are rejected."""
        with pytest.raises(InvalidBoundsError):
            derive(Datum.of_float(1.0), minimum, maximum)


class TestBoolMapping:
    """Test boolean status mapping."""

    def test_default_mapping(self):
        """True is in range and false is under regardless of bounds."""
        assert derive(Datum.of_bool(True), 5.0, 10.0).in_range
        assert derive(Datum.of_bool(False), 5.0, 10.0).under

    def test_declared_mapping(self):
        """A declared mapping decides the flags."""
        mapping = BoolRangeMapping(when_false=RelationshipStatus.OVER)
        result = derive(Datum.of_bool(False), 0.0, 1.0, mapping)
        assert result.over and not result.under

    def test_mapping_to_none_rejected(self):
        with pytest.raises(ValueError):
            BoolRangeMapping(when_true=RelationshipStatus.NONE)


class TestResultHelpers:
    """Test mappings from the normalized value."""

    @pytest.fixture
    def result(self):
        return derive(Datum.of_float(3.0), 0.0, 5.0)

    def test_inverted(self, result):
        assert result.inverted() == pytest.approx(0.4)

    def test_float_range(self, result):
        """Normalized maps linearly into a new range."""
        assert result.to_float_range(10.0, 20.0) == pytest.approx(16.0)

    def test_int_range(self, result):
        """Integers are picked from equal-width buckets."""
        assert result.to_int_range(0, 10) == 6
        assert derive(Datum.of_float(5.0), 0.0, 5.0).to_int_range(0, 10) == 10

    def test_index_and_label(self, result):
        """Labels are picked by bucket."""
        assert result.to_index(4) == 2
        assert result.to_label(["low", "mid", "high"]) == "mid"
        assert derive(Datum.of_float(9.0), 0.0, 5.0).to_index(4) == 3

    def test_index_needs_positive_count(self, result):
        with pytest.raises(ValueError):
            result.to_index(0)

    def test_enum(self, result):
        """Enum members are picked in declaration order."""
        assert result.to_enum(RelationshipStatus) == RelationshipStatus.OVER

    def test_curve(self, result):
        """Curves shape the normalized value."""
        assert result.to_curve(CurveType.LINEAR) == pytest.approx(0.6)
        assert result.to_curve(CurveType.QUADRATIC_IN) == pytest.approx(0.36)
