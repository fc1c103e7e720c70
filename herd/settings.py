# herd/settings.py

"""Metric settings and the policy applied when a relationship changes metric."""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Optional

from spatial.directory import AuxiliaryProxy, MemberReference
from spatial.entities import ZERO, Vector3, validate_position

from .enums import (
    AxisSelection,
    AxisSelectionThrouple,
    CoupleMetric,
    DensityMethod,
    DistanceOptions,
    DistanceUnit,
    GroupMetric,
    SingleAxis,
    SingleMetric,
    SizeMethod,
    ThroupleMetric,
)


@dataclass(frozen=True)
class RelationSettings:
    """Flat, metric-agnostic settings record.

    Every metric reads only the fields relevant to it; see relevant_fields().
    """

    proxy: Optional[AuxiliaryProxy] = None

    # Distance
    distance_options: DistanceOptions = DistanceOptions.COMBINED_AS_VECTOR3
    distance_unit: DistanceUnit = DistanceUnit.METERS

    # Reference object
    relative_to_object: bool = False
    object_to_reference: Optional[MemberReference] = None

    # Value shape
    use_gaze_from_proxy: bool = False
    magnitude_only: bool = False
    direction_only: bool = False
    relative_to_members: bool = False
    use_single_axis: bool = False
    single_axis: SingleAxis = SingleAxis.Y

    # Axes
    axis_selection: AxisSelection = AxisSelection.UP
    invert: bool = False
    axis_selection_throuple: AxisSelectionThrouple = AxisSelectionThrouple.CENTER_THROUGH_LEADER
    reference_vector: Vector3 = ZERO
    rotation_axis: Vector3 = ZERO

    # Aggregates
    density_method: DensityMethod = DensityMethod.AVERAGE_FROM_CENTER
    size_method: SizeMethod = SizeMethod.USE_HEIGHT_WIDTH_DEPTH

    threshold: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "reference_vector", validate_position(self.reference_vector))
        object.__setattr__(self, "rotation_axis", validate_position(self.rotation_axis))
        object.__setattr__(self, "threshold", float(self.threshold))

    @property
    def is_bool(self) -> bool:
        """Gaze-capable metrics report a Bool instead of their usual shape."""
        return self.use_gaze_from_proxy

    def is_float_for(self, mode) -> bool:
        """Whether a vector-shaped metric collapses to a Float.

        Only the fields the metric reads take part; the rest stay inert.
        """
        relevant = self.relevant_fields(mode)
        collapses = (
            ("use_single_axis", self.use_single_axis),
            ("magnitude_only", self.magnitude_only),
            ("relative_to_members", self.relative_to_members),
            ("distance_options", self.distance_options != DistanceOptions.COMBINED_AS_VECTOR3),
            ("size_method", self.size_method == SizeMethod.RADIUS_FROM_CENTER),
        )
        return any(active for name, active in collapses if name in relevant)

    def replace(self, **changes: Any) -> "RelationSettings":
        return replace(self, **changes)

    def relevant_fields(self, mode) -> tuple[str, ...]:
        """Names of the fields read by a Mode (or a bare metric)."""
        metric = getattr(mode, "metric", mode)
        return RELEVANT_FIELDS.get(metric, ())

    def to_dict(self) -> dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, (AuxiliaryProxy, MemberReference)):
                value = value.name
            result[f.name] = value
        return result


def on_metric_changed(
    current: RelationSettings, proxy: Optional[AuxiliaryProxy] = None
) -> RelationSettings:
    """Settings to use after a relationship switches to a new metric.

    Every field returns to its default except the auxiliary proxy, which is
    taken from `proxy` when given and otherwise kept from `current`.
    """
    return RelationSettings(proxy=proxy if proxy is not None else current.proxy)


_AXIS = ("use_single_axis", "single_axis", "magnitude_only")
_GAZE = ("use_gaze_from_proxy", "proxy", "threshold")
_MOVEMENT = (
    "relative_to_object",
    "object_to_reference",
    "direction_only",
    "magnitude_only",
    "use_single_axis",
    "single_axis",
)
_SIZE = ("size_method",) + _AXIS
_TRIGGER = ("proxy",)

RELEVANT_FIELDS: dict[Enum, tuple[str, ...]] = {
    SingleMetric.POSITION: _AXIS,
    SingleMetric.ROTATION: _GAZE,
    SingleMetric.MOVEMENT: _MOVEMENT,
    SingleMetric.TRIGGER: _TRIGGER,
    CoupleMetric.POSITION: _AXIS,
    CoupleMetric.ROTATION: (
        "axis_selection",
        "invert",
        "rotation_axis",
        "object_to_reference",
    )
    + _GAZE,
    CoupleMetric.DISTANCE: ("distance_unit",),
    CoupleMetric.MOVEMENT: _MOVEMENT + ("relative_to_members",),
    CoupleMetric.DIFFERENCE: _AXIS,
    CoupleMetric.TRIGGER: _TRIGGER,
    ThroupleMetric.POSITION: _AXIS,
    ThroupleMetric.ROTATION: ("axis_selection_throuple", "invert") + _GAZE,
    ThroupleMetric.DISTANCE: ("distance_options", "distance_unit"),
    ThroupleMetric.ANGLE: _AXIS,
    ThroupleMetric.DENSITY: ("density_method", "distance_unit"),
    ThroupleMetric.MOVEMENT: _MOVEMENT + ("relative_to_members",),
    ThroupleMetric.TRIGGER: _TRIGGER,
    ThroupleMetric.ROTATION_AROUND_AXIS: (
        "axis_selection",
        "invert",
        "axis_selection_throuple",
        "rotation_axis",
        "object_to_reference",
    ),
    ThroupleMetric.SIZE: _SIZE,
    GroupMetric.POSITION: _AXIS,
    GroupMetric.ROTATION: ("invert",) + _GAZE,
    GroupMetric.DENSITY: ("density_method", "distance_unit"),
    GroupMetric.SIZE: _SIZE,
    GroupMetric.MOVEMENT: _MOVEMENT + ("relative_to_members",),
    GroupMetric.TRIGGER: _TRIGGER,
    GroupMetric.ROTATION_AROUND_AXIS: (
        "axis_selection",
        "invert",
        "rotation_axis",
        "object_to_reference",
    ),
}


SETTING_DESCRIPTIONS: dict[str, str] = {
    "invert": "Flip the direction or sign of the result.",
    "use_single_axis": "Only return the value from one axis (X, Y, or Z).",
    "single_axis": "Choose which axis to use when isolating a value.",
    "reference_vector": "Use this vector as a reference direction for comparison.",
    "rotation_axis": "The axis used when measuring angles or rotations.",
    "threshold": "The minimum gaze confidence required for a true result.",
    "relative_to_object": "Measure relative to another tracked member.",
    "object_to_reference": "The member used as a reference for relative comparisons.",
    "relative_to_members": "Measure how members are moving toward or away from each other.",
    "magnitude_only": "Only return the size of the value, without direction.",
    "direction_only": "Only return the direction of movement, not the speed.",
    "distance_options": "Choose which pair of members to measure distance between.",
    "distance_unit": "Select the unit to use (meters, feet, etc.).",
    "axis_selection": "Choose how to define the 'up' direction or comparison axis.",
    "axis_selection_throuple": "Select how to define the axis based on the triangle's layout.",
    "density_method": "Choose how to calculate how tightly packed the members are.",
    "size_method": "Select how to measure size (bounding box or radius).",
    "proxy": "Used to detect triggers or gaze-based events.",
    "use_gaze_from_proxy": "Turn on to report whether the proxy is looking at a valid target.",
}
