# spatial/__init__.py

"""Spatial layer - vectors, rotations, and the directory of tracked entities."""

from .directory import AuxiliaryProxy, HerdDirectory, LiveHandle, MemberReference
from .entities import (
    Position,
    Vector3,
    calculate_distance_3d,
    normalize_vector,
    validate_position,
)
from .rotation import IDENTITY, Rotation, from_axis_angle, look_rotation, rotation_angle

__all__ = [
    "HerdDirectory",
    "LiveHandle",
    "MemberReference",
    "AuxiliaryProxy",
    "Position",
    "Vector3",
    "Rotation",
    "IDENTITY",
    "validate_position",
    "calculate_distance_3d",
    "normalize_vector",
    "from_axis_angle",
    "look_rotation",
    "rotation_angle",
]
