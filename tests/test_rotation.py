"""Tests for quaternion helpers."""

import math

import pytest

from spatial.entities import FORWARD, UP, ZERO
from spatial.rotation import (
    IDENTITY,
    from_axis_angle,
    look_rotation,
    normalize_rotation,
    rotation_angle,
)


class TestRotation:
    """Test rotation construction and measurement."""

    def test_identity_has_zero_angle(self):
        """Identity is no rotation at all."""
        assert rotation_angle(IDENTITY) == pytest.approx(0.0)

    def test_axis_angle_round_trip(self):
        """A rotation built from an angle reports that angle."""
        assert rotation_angle(from_axis_angle(UP, 45.0)) == pytest.approx(45.0)

    def test_angle_is_shortest_arc(self):
        """Angles past 180 degrees report the shorter way round."""
        assert rotation_angle(from_axis_angle(UP, 270.0)) == pytest.approx(90.0)

    def test_normalize_degenerate(self):
        """A zero quaternion normalizes to identity."""
        assert normalize_rotation((0.0, 0.0, 0.0, 0.0)) == IDENTITY


class TestLookRotation:
    """Test look rotation."""

    def test_forward_is_identity(self):
        """Facing +Z with +Y up needs no rotation."""
        assert look_rotation(FORWARD) == pytest.approx(IDENTITY)

    def test_facing_right(self):
        """Facing +X is a quarter turn around Y."""
        half = math.sqrt(0.5)
        assert look_rotation((1.0, 0.0, 0.0)) == pytest.approx((0.0, half, 0.0, half))

    def test_facing_behind(self):
        """Facing -Z is a half turn."""
        assert rotation_angle(look_rotation((0.0, 0.0, -1.0))) == pytest.approx(180.0)

    def test_zero_forward(self):
        """A degenerate direction gives identity."""
        assert look_rotation(ZERO) == IDENTITY

    def test_up_parallel_to_forward(self):
        """Looking straight up still produces a unit rotation."""
        rotation = look_rotation(UP, UP)
        assert sum(c * c for c in rotation) == pytest.approx(1.0)
        assert rotation != IDENTITY
