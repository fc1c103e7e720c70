# spatial/entities.py

"""Vector utilities for the spatial layer."""

import math
from typing import Any, Iterable


# Type aliases for positions and free vectors
Position = tuple[float, float, float]
Vector3 = tuple[float, float, float]

ZERO: Vector3 = (0.0, 0.0, 0.0)
UP: Vector3 = (0.0, 1.0, 0.0)
RIGHT: Vector3 = (1.0, 0.0, 0.0)
FORWARD: Vector3 = (0.0, 0.0, 1.0)

# Vectors shorter than this are treated as zero when normalizing
EPSILON = 1e-5


def validate_position(position: Any) -> Position:
    """Validate and normalize position to (x, y, z) tuple.

    Args:
        position: Position data (list, tuple, or dict with x/y/z keys)

    Returns:
        Normalized (x, y, z) tuple

    Raises:
        ValueError: If position format is invalid
    """
    if isinstance(position, (list, tuple)):
        if len(position) == 2:
            return (float(position[0]), float(position[1]), 0.0)
        elif len(position) == 3:
            return (float(position[0]), float(position[1]), float(position[2]))
        else:
            raise ValueError(f"Position must have 2 or 3 coordinates, got {len(position)}")
    elif isinstance(position, dict):
        x = position.get("x", position.get("X"))
        y = position.get("y", position.get("Y"))
        z = position.get("z", position.get("Z", 0.0))
        if x is None or y is None:
            raise ValueError("Position dict must have 'x' and 'y' keys")
        return (float(x), float(y), float(z))
    else:
        raise ValueError(f"Invalid position type: {type(position)}")


def add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def subtract(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(vector: Vector3, factor: float) -> Vector3:
    return (vector[0] * factor, vector[1] * factor, vector[2] * factor)


def dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def magnitude(vector: Vector3) -> float:
    return (vector[0] ** 2 + vector[1] ** 2 + vector[2] ** 2) ** 0.5


def is_zero(vector: Vector3) -> bool:
    return magnitude(vector) <= EPSILON


def calculate_distance_3d(pos1: Position, pos2: Position) -> float:
    """Calculate 3D Euclidean distance between two positions.

    Args:
        pos1: First position (x, y, z)
        pos2: Second position (x, y, z)

    Returns:
        3D distance in same units as positions
    """
    dx = pos2[0] - pos1[0]
    dy = pos2[1] - pos1[1]
    dz = pos2[2] - pos1[2]
    return (dx * dx + dy * dy + dz * dz) ** 0.5


def normalize_vector(vector: Vector3) -> Vector3:
    """Normalize a 3D vector to unit length.

    Args:
        vector: (x, y, z) vector

    Returns:
        Normalized (x, y, z) vector, or the zero vector for degenerate input
    """
    length = magnitude(vector)
    if length <= EPSILON:
        return ZERO
    return (vector[0] / length, vector[1] / length, vector[2] / length)


def centroid(positions: Iterable[Position]) -> Position:
    """Average of a set of positions; the origin for an empty set."""
    total = ZERO
    count = 0
    for position in positions:
        total = add(total, position)
        count += 1
    if count == 0:
        return ZERO
    return scale(total, 1.0 / count)


def angle_between(a: Vector3, b: Vector3) -> float:
    """Unsigned angle between two vectors in degrees (0 for degenerate input)."""
    denominator = magnitude(a) * magnitude(b)
    if denominator <= EPSILON * EPSILON:
        return 0.0
    cosine = max(-1.0, min(1.0, dot(a, b) / denominator))
    return math.degrees(math.acos(cosine))


def signed_angle(source: Vector3, target: Vector3, axis: Vector3) -> float:
    """Angle from source to target in degrees, signed by rotation around axis."""
    unsigned = angle_between(source, target)
    sign = 1.0 if dot(axis, cross(source, target)) >= 0.0 else -1.0
    return unsigned * sign


def bounds_size(positions: Iterable[Position]) -> Vector3:
    """Extent of the axis-aligned box that encloses every position."""
    points = list(positions)
    if not points:
        return ZERO
    return (
        max(p[0] for p in points) - min(p[0] for p in points),
        max(p[1] for p in points) - min(p[1] for p in points),
        max(p[2] for p in points) - min(p[2] for p in points),
    )
