# herd/converter.py

"""Normalization, boundary flags, and curve shaping over a Datum."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, TypeVar

from spatial.entities import magnitude
from spatial.rotation import rotation_angle

from .curves import Curve, CurveType, sample
from .datum import Datum
from .enums import RelationshipStatus, ValueType
from .exceptions import InvalidBoundsError

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class BoolRangeMapping:
    """Status a boolean measurement reports for each of its two values."""

    when_true: RelationshipStatus = RelationshipStatus.IN_RANGE
    when_false: RelationshipStatus = RelationshipStatus.UNDER

    def __post_init__(self):
        for status in (self.when_true, self.when_false):
            if status == RelationshipStatus.NONE:
                raise ValueError("Boolean range mappings must map onto Under, Over or InRange")


@dataclass(frozen=True)
class ConverterResult:
    """Derived view of one Datum against a [minimum, maximum] range."""

    raw: float
    normalized: float
    over: bool
    under: bool
    in_range: bool
    as_axis: float
    minimum: float
    maximum: float

    def to_curve(self, curve: CurveType | str | Curve) -> float:
        return sample(curve, self.normalized)

    def inverted(self) -> float:
        return 1.0 - self.normalized

    def to_float_range(self, low: float, high: float) -> float:
        return low + (high - low) * self.normalized

    def to_int_range(self, low: int, high: int) -> int:
        """Spread normalized evenly over the integers low..high inclusive."""
        return min(high, math.floor(low + (high + 1 - low) * self.normalized))

    def to_index(self, count: int) -> int:
        if count <= 0:
            raise ValueError("count must be positive")
        return min(count - 1, max(0, math.floor(self.normalized * count)))

    def to_label(self, labels: Sequence[str]) -> str:
        return labels[self.to_index(len(labels))]

    def to_enum(self, enum_type: type[E]) -> E:
        members = list(enum_type)
        return members[self.to_index(len(members))]


def project(datum: Datum) -> float:
    """Numeric projection of a Datum used for normalization."""
    if datum.value_type == ValueType.FLOAT:
        return datum.value
    if datum.value_type == ValueType.BOOL:
        return 1.0 if datum.value else 0.0
    if datum.value_type == ValueType.VECTOR3:
        return magnitude(datum.value)
    if datum.value_type == ValueType.QUATERNION:
        return rotation_angle(datum.value)
    raise TypeError(f"Unsupported datum type: {datum.value_type}")


def derive(
    datum: Datum,
    minimum: float,
    maximum: float,
    bool_mapping: Optional[BoolRangeMapping] = None,
) -> ConverterResult:
    """Derive normalized value, boundary flags and axis value for a Datum.

    Args:
        datum: Measurement to convert
        minimum: Lower bound of the range
        maximum: Upper bound of the range, strictly greater than minimum
        bool_mapping: Status mapping declared by the metric for Bool datums

    Returns:
        ConverterResult with exactly one of over/under/in_range set

    Raises:
        InvalidBoundsError: If minimum >= maximum
    """
    if not minimum < maximum:
        raise InvalidBoundsError(f"minimum ({minimum}) must be below maximum ({maximum})")

    raw = project(datum)
    span = maximum - minimum
    normalized = min(1.0, max(0.0, (raw - minimum) / span))
    as_axis = (raw - minimum) / span * 2.0 - 1.0

    if datum.value_type == ValueType.BOOL and bool_mapping is not None:
        status = bool_mapping.when_true if datum.value else bool_mapping.when_false
        over = status == RelationshipStatus.OVER
        under = status == RelationshipStatus.UNDER
    else:
        over = raw > maximum
        under = raw < minimum

    return ConverterResult(
        raw=raw,
        normalized=normalized,
        over=over,
        under=under,
        in_range=not over and not under,
        as_axis=as_axis,
        minimum=minimum,
        maximum=maximum,
    )
