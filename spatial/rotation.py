# spatial/rotation.py

"""Quaternion helpers for orientation metrics.

Rotations are stored as (x, y, z, w) tuples.
"""

import math

from .entities import RIGHT, UP, Vector3, cross, is_zero, normalize_vector

Rotation = tuple[float, float, float, float]

IDENTITY: Rotation = (0.0, 0.0, 0.0, 1.0)


def normalize_rotation(rotation: Rotation) -> Rotation:
    """Scale a quaternion to unit length; degenerate input becomes identity."""
    length = math.sqrt(sum(c * c for c in rotation))
    if length == 0.0:
        return IDENTITY
    return (
        rotation[0] / length,
        rotation[1] / length,
        rotation[2] / length,
        rotation[3] / length,
    )


def from_axis_angle(axis: Vector3, degrees: float) -> Rotation:
    """Build a rotation of `degrees` around `axis`."""
    unit = normalize_vector(axis)
    if is_zero(unit):
        return IDENTITY
    half = math.radians(degrees) / 2.0
    s = math.sin(half)
    return (unit[0] * s, unit[1] * s, unit[2] * s, math.cos(half))


def rotation_angle(rotation: Rotation) -> float:
    """Angle in degrees (0..180) of the rotation away from identity."""
    w = abs(normalize_rotation(rotation)[3])
    return math.degrees(2.0 * math.acos(min(1.0, w)))


def look_rotation(forward: Vector3, up: Vector3 = UP) -> Rotation:
    """Rotation whose local +Z faces `forward` with local +Y as close to `up` as possible.

    Args:
        forward: Direction to face
        up: Preferred up direction

    Returns:
        Unit quaternion, identity when forward is degenerate
    """
    f = normalize_vector(forward)
    if is_zero(f):
        return IDENTITY

    r = normalize_vector(cross(up, f))
    if is_zero(r):
        # up is parallel to forward, fall back to a stable reference
        r = normalize_vector(cross(UP, f))
        if is_zero(r):
            r = normalize_vector(cross(RIGHT, f))
    u = cross(f, r)

    # Basis matrix columns are right, up, forward
    m00, m01, m02 = r[0], u[0], f[0]
    m10, m11, m12 = r[1], u[1], f[1]
    m20, m21, m22 = r[2], u[2], f[2]

    trace = m00 + m11 + m22
    if trace > 0.0:
        s = math.sqrt(trace + 1.0) * 2.0
        quaternion = ((m21 - m12) / s, (m02 - m20) / s, (m10 - m01) / s, 0.25 * s)
    elif m00 > m11 and m00 > m22:
        s = math.sqrt(1.0 + m00 - m11 - m22) * 2.0
        quaternion = (0.25 * s, (m01 + m10) / s, (m02 + m20) / s, (m21 - m12) / s)
    elif m11 > m22:
        s = math.sqrt(1.0 + m11 - m00 - m22) * 2.0
        quaternion = ((m01 + m10) / s, 0.25 * s, (m12 + m21) / s, (m02 - m20) / s)
    else:
        s = math.sqrt(1.0 + m22 - m00 - m11) * 2.0
        quaternion = ((m02 + m20) / s, (m12 + m21) / s, 0.25 * s, (m10 - m01) / s)

    return normalize_rotation(quaternion)
