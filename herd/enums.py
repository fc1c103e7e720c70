# herd/enums.py

"""Enumerations shared by the relationship core."""

from enum import Enum


class ValueType(str, Enum):
    """Type tag carried by a Datum."""

    FLOAT = "float"
    BOOL = "bool"
    VECTOR3 = "vector3"
    QUATERNION = "quaternion"


class Family(str, Enum):
    """Arity class of a relationship."""

    SINGLE = "single"
    COUPLE = "couple"
    THROUPLE = "throuple"
    GROUP = "group"


class SingleMetric(str, Enum):
    POSITION = "single.position"  # source position > Vector3
    ROTATION = "single.rotation"  # source rotation > Quaternion
    MOVEMENT = "single.movement"  # velocity > Vector3
    TRIGGER = "single.trigger"  # proxy trigger > Bool


class CoupleMetric(str, Enum):
    POSITION = "couple.position"  # midpoint > Vector3
    ROTATION = "couple.rotation"  # follower to leader facing > Quaternion
    DISTANCE = "couple.distance"  # leader to follower > Float
    MOVEMENT = "couple.movement"  # mean velocity > Vector3
    DIFFERENCE = "couple.difference"  # follower minus leader > Vector3
    TRIGGER = "couple.trigger"  # proxy trigger > Bool


class ThroupleMetric(str, Enum):
    POSITION = "throuple.position"  # centroid > Vector3
    ROTATION = "throuple.rotation"  # triangle facing > Quaternion
    DISTANCE = "throuple.distance"  # three sides > Vector3
    ANGLE = "throuple.angle"  # corner angles > Vector3
    DENSITY = "throuple.density"  # distance from centroid > Float
    MOVEMENT = "throuple.movement"  # mean velocity > Vector3
    TRIGGER = "throuple.trigger"  # proxy trigger > Bool
    ROTATION_AROUND_AXIS = "throuple.rotation_around_axis"  # signed twist > Float
    SIZE = "throuple.size"  # bounding extent > Vector3


class GroupMetric(str, Enum):
    POSITION = "group.position"  # centroid > Vector3
    ROTATION = "group.rotation"  # heading of mean velocity > Quaternion
    DENSITY = "group.density"  # distance from centroid > Float
    SIZE = "group.size"  # bounding extent > Vector3
    MOVEMENT = "group.movement"  # mean velocity > Vector3
    TRIGGER = "group.trigger"  # proxy trigger > Bool
    ROTATION_AROUND_AXIS = "group.rotation_around_axis"  # signed heading > Float


class RelationshipStatus(str, Enum):
    """Classified range state of a relationship."""

    NONE = "none"
    UNDER = "under"
    OVER = "over"
    IN_RANGE = "in_range"


# Metric setting enums


class DistanceOptions(str, Enum):
    """Which throuple side(s) a distance measures."""

    COMBINED_AS_VECTOR3 = "combined_as_vector3"
    LEADER_TO_FOLLOWER = "leader_to_follower"
    FOLLOWER_TO_THIRD = "follower_to_third"
    THIRD_TO_LEADER = "third_to_leader"
    TOTAL_VALUE = "total_value"


class SingleAxis(str, Enum):
    X = "x"
    Y = "y"
    Z = "z"

    @property
    def axis_index(self) -> int:
        return "xyz".index(self.value)


class DistanceUnit(str, Enum):
    METERS = "meters"
    CENTIMETERS = "centimeters"
    INCHES = "inches"
    FEET = "feet"

    @property
    def scale(self) -> float:
        """Multiplier from meters into this unit."""
        return _UNIT_SCALES[self]


_UNIT_SCALES = {
    DistanceUnit.METERS: 1.0,
    DistanceUnit.CENTIMETERS: 100.0,
    DistanceUnit.INCHES: 39.3701,
    DistanceUnit.FEET: 3.28084,
}


class AxisSelection(str, Enum):
    UP = "up"
    FORWARD = "forward"
    RIGHT = "right"
    OBJECT_TO_CENTER = "object_to_center"
    CUSTOM = "custom"


class AxisSelectionThrouple(str, Enum):
    CENTER_THROUGH_LEADER = "center_through_leader"
    CENTER_THROUGH_THIRD = "center_through_third"
    CENTER_THROUGH_FOLLOWER = "center_through_follower"


class DensityMethod(str, Enum):
    AVERAGE_FROM_CENTER = "average_from_center"
    TOTAL_FROM_CENTER = "total_from_center"


class SizeMethod(str, Enum):
    USE_HEIGHT_WIDTH_DEPTH = "use_height_width_depth"
    RADIUS_FROM_CENTER = "radius_from_center"
