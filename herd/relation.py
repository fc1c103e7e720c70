# herd/relation.py

"""Relation resolver.

Turns a (mode, member references, settings) request into one Datum by pulling
the live state of every member through the directory at call time.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, NamedTuple, Optional

from spatial.directory import HerdDirectory, LiveHandle, MemberReference
from spatial.entities import (
    FORWARD,
    RIGHT,
    UP,
    Vector3,
    add,
    angle_between,
    bounds_size,
    calculate_distance_3d,
    centroid,
    cross,
    dot,
    is_zero,
    magnitude,
    normalize_vector,
    scale,
    signed_angle,
    subtract,
)
from spatial.rotation import IDENTITY, look_rotation

from .datum import Datum
from .enums import (
    AxisSelection,
    AxisSelectionThrouple,
    CoupleMetric,
    DensityMethod,
    DistanceOptions,
    GroupMetric,
    SingleMetric,
    SizeMethod,
    ThroupleMetric,
    ValueType,
)
from .family import Mode
from .logging import get_logger
from .settings import RelationSettings

logger = get_logger(__name__)


@dataclass(frozen=True)
class Relation:
    """Everything needed to evaluate one metric."""

    mode: Mode
    references: tuple[MemberReference, ...] = ()
    settings: RelationSettings = field(default_factory=RelationSettings)
    directory: Optional[HerdDirectory] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "references", tuple(self.references))

    def resolve(self, reference: MemberReference) -> Optional[LiveHandle]:
        if self.directory is not None:
            return self.directory.try_resolve(reference)
        return reference.live

    def with_settings(self, settings: RelationSettings) -> "Relation":
        return Relation(self.mode, self.references, settings, self.directory)


class _Context(NamedTuple):
    handles: list[LiveHandle]
    settings: RelationSettings
    relation: Relation

    def reference_handle(self) -> Optional[LiveHandle]:
        reference = self.settings.object_to_reference
        if reference is None:
            return None
        return self.relation.resolve(reference)

    @property
    def positions(self) -> list[Vector3]:
        return [h.position for h in self.handles]

    @property
    def is_float(self) -> bool:
        return self.settings.is_float_for(self.relation.mode)


# Value shape helpers


def _vector_shape(settings: RelationSettings, metric) -> ValueType:
    return ValueType.FLOAT if settings.is_float_for(metric) else ValueType.VECTOR3


def _rotation_shape(settings: RelationSettings, metric) -> ValueType:
    return ValueType.BOOL if settings.is_bool else ValueType.QUATERNION


def _float_shape(settings: RelationSettings, metric) -> ValueType:
    return ValueType.FLOAT


def _bool_shape(settings: RelationSettings, metric) -> ValueType:
    return ValueType.BOOL


def _reduce(vector: Vector3, settings: RelationSettings) -> float:
    """Collapse a vector to its selected axis, or its magnitude."""
    if settings.use_single_axis:
        return vector[settings.single_axis.axis_index]
    return magnitude(vector)


def _vector_or_reduced(vector: Vector3, ctx: _Context):
    return _reduce(vector, ctx.settings) if ctx.is_float else vector


def _gazing(settings: RelationSettings) -> bool:
    proxy = settings.proxy
    if proxy is None or not settings.use_gaze_from_proxy:
        return False
    return proxy.is_gazing and proxy.gaze_confidence >= settings.threshold


def _triggered(ctx: _Context) -> bool:
    proxy = ctx.settings.proxy
    return proxy is not None and proxy.is_triggered


def _mean_velocity(ctx: _Context) -> Vector3:
    """Average member velocity with the reference object's motion removed."""
    settings = ctx.settings
    average = centroid(h.velocity for h in ctx.handles)
    if settings.relative_to_object:
        reference = ctx.reference_handle()
        if reference is not None:
            average = subtract(average, reference.velocity)
    if settings.direction_only:
        return normalize_vector(average)
    return average


def _movement_float(ctx: _Context, velocity: Vector3) -> float:
    if ctx.settings.magnitude_only:
        return magnitude(velocity)
    return _reduce(velocity, ctx.settings)


def _approach_speed(ctx: _Context) -> float:
    """Mean velocity component of each member toward the shared centroid."""
    center = centroid(ctx.positions)
    speeds = [
        dot(h.velocity, normalize_vector(subtract(center, h.position))) for h in ctx.handles
    ]
    return sum(speeds) / len(speeds) if speeds else 0.0


def _axis_reference(ctx: _Context, center: Vector3) -> Vector3:
    """Reference direction picked by axis_selection; RIGHT when unavailable."""
    selection = ctx.settings.axis_selection
    if selection == AxisSelection.UP:
        return UP
    if selection == AxisSelection.FORWARD:
        return FORWARD
    if selection == AxisSelection.CUSTOM:
        return normalize_vector(ctx.settings.rotation_axis)
    if selection == AxisSelection.OBJECT_TO_CENTER:
        reference = ctx.reference_handle()
        if reference is not None:
            return normalize_vector(subtract(center, reference.position))
    return RIGHT


def _density(ctx: _Context) -> float:
    center = centroid(ctx.positions)
    total = sum(calculate_distance_3d(center, p) for p in ctx.positions)
    if ctx.settings.density_method == DensityMethod.AVERAGE_FROM_CENTER:
        total /= len(ctx.handles)
    return total * ctx.settings.distance_unit.scale


def _size(ctx: _Context):
    positions = ctx.positions
    if ctx.settings.size_method == SizeMethod.RADIUS_FROM_CENTER:
        center = centroid(positions)
        return max(calculate_distance_3d(center, p) for p in positions)
    return _vector_or_reduced(bounds_size(positions), ctx)


def _centroid_position(ctx: _Context):
    return _vector_or_reduced(centroid(ctx.positions), ctx)


def _rotation_or_gaze(orientation: Callable[[_Context], Any]) -> Callable[[_Context], Any]:
    def routine(ctx: _Context):
        if ctx.settings.is_bool:
            return _gazing(ctx.settings)
        return orientation(ctx)

    return routine


def _mean_movement(ctx: _Context):
    if ctx.is_float:
        if ctx.settings.relative_to_members:
            return _approach_speed(ctx)
        return _movement_float(ctx, _mean_velocity(ctx))
    return _mean_velocity(ctx)


# Single


def _single_position(ctx: _Context):
    return _vector_or_reduced(ctx.handles[0].position, ctx)


def _single_rotation(ctx: _Context):
    return ctx.handles[0].rotation


def _single_movement(ctx: _Context):
    velocity = _mean_velocity(ctx)
    if ctx.is_float:
        return _movement_float(ctx, velocity)
    return velocity


# Couple


def _couple_rotation(ctx: _Context):
    leader, follower = ctx.positions
    settings = ctx.settings

    forward = normalize_vector(subtract(leader, follower))
    if is_zero(forward):
        forward = FORWARD

    up = UP
    if settings.axis_selection == AxisSelection.RIGHT:
        up = RIGHT
    elif settings.axis_selection == AxisSelection.FORWARD:
        up = FORWARD
    elif settings.axis_selection == AxisSelection.OBJECT_TO_CENTER:
        reference = ctx.reference_handle()
        if reference is not None:
            up = normalize_vector(subtract(centroid(ctx.positions), reference.position))
    elif settings.axis_selection == AxisSelection.CUSTOM:
        up = settings.rotation_axis
    if is_zero(up):
        up = UP

    if settings.invert:
        forward = scale(forward, -1.0)
    return look_rotation(forward, up)


def _couple_distance(ctx: _Context):
    leader, follower = ctx.positions
    return calculate_distance_3d(leader, follower) * ctx.settings.distance_unit.scale


def _couple_movement(ctx: _Context):
    if ctx.is_float and ctx.settings.relative_to_members:
        a, b = ctx.handles
        separation = normalize_vector(subtract(b.position, a.position))
        return dot(subtract(b.velocity, a.velocity), separation)
    return _mean_movement(ctx)


def _couple_difference(ctx: _Context):
    leader, follower = ctx.positions
    return _vector_or_reduced(subtract(follower, leader), ctx)


# Throuple


# (apex, side start, side end) member indexes per selection
_THROUPLE_AXES = {
    AxisSelectionThrouple.CENTER_THROUGH_LEADER: (0, 1, 2),
    AxisSelectionThrouple.CENTER_THROUGH_THIRD: (2, 1, 0),
    AxisSelectionThrouple.CENTER_THROUGH_FOLLOWER: (1, 2, 0),
}


def _throuple_frame(ctx: _Context) -> tuple[Vector3, Vector3]:
    """Forward from the opposite side's midpoint through the apex, right along that side."""
    apex, start, end = (
        ctx.positions[i] for i in _THROUPLE_AXES[ctx.settings.axis_selection_throuple]
    )
    midpoint = scale(add(start, end), 0.5)
    forward = normalize_vector(subtract(apex, midpoint))
    right = normalize_vector(subtract(end, start))
    if ctx.settings.invert:
        right = scale(right, -1.0)
    return forward, right


def _throuple_rotation(ctx: _Context):
    forward, right = _throuple_frame(ctx)
    up = normalize_vector(cross(forward, right))
    if is_zero(up):
        up = UP
    return look_rotation(forward, up)


def _throuple_sides(ctx: _Context) -> Vector3:
    a, b, c = ctx.positions
    factor = ctx.settings.distance_unit.scale
    return (
        calculate_distance_3d(a, b) * factor,
        calculate_distance_3d(b, c) * factor,
        calculate_distance_3d(c, a) * factor,
    )


def _throuple_distance(ctx: _Context):
    sides = _throuple_sides(ctx)
    if not ctx.is_float:
        return sides
    option = ctx.settings.distance_options
    if option == DistanceOptions.FOLLOWER_TO_THIRD:
        return sides[1]
    if option == DistanceOptions.THIRD_TO_LEADER:
        return sides[2]
    if option == DistanceOptions.TOTAL_VALUE:
        return sum(sides) / 3.0
    return sides[0]


def _throuple_angle(ctx: _Context):
    a, b, c = ctx.positions
    corners = (
        angle_between(subtract(b, a), subtract(c, a)),
        angle_between(subtract(c, b), subtract(a, b)),
        angle_between(subtract(a, c), subtract(b, c)),
    )
    if not ctx.is_float:
        return corners
    if ctx.settings.use_single_axis:
        return corners[ctx.settings.single_axis.axis_index]
    return sum(corners) / 3.0


def _throuple_rotation_around_axis(ctx: _Context):
    forward, right = _throuple_frame(ctx)
    if is_zero(forward) or is_zero(right):
        return 0.0
    reference = _axis_reference(ctx, centroid(ctx.positions))
    return signed_angle(reference, right, forward)


# Group


def _group_rotation(ctx: _Context):
    heading = centroid(h.velocity for h in ctx.handles)
    if is_zero(heading):
        return IDENTITY
    if ctx.settings.invert:
        heading = scale(heading, -1.0)
    return look_rotation(normalize_vector(heading), UP)


def _group_movement(ctx: _Context):
    if ctx.is_float and ctx.settings.relative_to_members and len(ctx.handles) < 2:
        return 0.0
    return _mean_movement(ctx)


def _group_rotation_around_axis(ctx: _Context):
    heading = centroid(h.velocity for h in ctx.handles)
    if is_zero(heading):
        return 0.0
    if ctx.settings.invert:
        heading = scale(heading, -1.0)
    axis = ctx.settings.rotation_axis
    if is_zero(axis):
        axis = UP
    reference = _axis_reference(ctx, centroid(ctx.positions))
    return signed_angle(reference, normalize_vector(heading), axis)


class _Routine(NamedTuple):
    shape: Callable[[RelationSettings, Any], ValueType]
    compute: Callable[[_Context], Any]


ROUTINES: dict[Any, _Routine] = {
    SingleMetric.POSITION: _Routine(_vector_shape, _single_position),
    SingleMetric.ROTATION: _Routine(_rotation_shape, _rotation_or_gaze(_single_rotation)),
    SingleMetric.MOVEMENT: _Routine(_vector_shape, _single_movement),
    SingleMetric.TRIGGER: _Routine(_bool_shape, _triggered),
    CoupleMetric.POSITION: _Routine(_vector_shape, _centroid_position),
    CoupleMetric.ROTATION: _Routine(_rotation_shape, _rotation_or_gaze(_couple_rotation)),
    CoupleMetric.DISTANCE: _Routine(_float_shape, _couple_distance),
    CoupleMetric.MOVEMENT: _Routine(_vector_shape, _couple_movement),
    CoupleMetric.DIFFERENCE: _Routine(_vector_shape, _couple_difference),
    CoupleMetric.TRIGGER: _Routine(_bool_shape, _triggered),
    ThroupleMetric.POSITION: _Routine(_vector_shape, _centroid_position),
    ThroupleMetric.ROTATION: _Routine(_rotation_shape, _rotation_or_gaze(_throuple_rotation)),
    ThroupleMetric.DISTANCE: _Routine(_vector_shape, _throuple_distance),
    ThroupleMetric.ANGLE: _Routine(_vector_shape, _throuple_angle),
    ThroupleMetric.DENSITY: _Routine(_float_shape, _density),
    ThroupleMetric.MOVEMENT: _Routine(_vector_shape, _mean_movement),
    ThroupleMetric.TRIGGER: _Routine(_bool_shape, _triggered),
    ThroupleMetric.ROTATION_AROUND_AXIS: _Routine(_float_shape, _throuple_rotation_around_axis),
    ThroupleMetric.SIZE: _Routine(_vector_shape, _size),
    GroupMetric.POSITION: _Routine(_vector_shape, _centroid_position),
    GroupMetric.ROTATION: _Routine(_rotation_shape, _rotation_or_gaze(_group_rotation)),
    GroupMetric.DENSITY: _Routine(_float_shape, _density),
    GroupMetric.SIZE: _Routine(_vector_shape, _size),
    GroupMetric.MOVEMENT: _Routine(_vector_shape, _group_movement),
    GroupMetric.TRIGGER: _Routine(_bool_shape, _triggered),
    GroupMetric.ROTATION_AROUND_AXIS: _Routine(_float_shape, _group_rotation_around_axis),
}


def output_type(mode: Mode, settings: RelationSettings) -> ValueType:
    """Value type a mode produces under the given settings."""
    return ROUTINES[mode.metric].shape(settings, mode.metric)


def _resolve_members(relation: Relation) -> Optional[list[LiveHandle]]:
    mode = relation.mode
    references = relation.references

    if not mode.accepts(len(references)):
        logger.debug(
            "relation.arity_mismatch",
            mode=str(mode),
            expected=mode.arity if mode.arity is not None else "1+",
            actual=len(references),
        )
        return None

    handles = [relation.resolve(reference) for reference in references]
    missing = [ref.name for ref, handle in zip(references, handles) if handle is None]

    if mode.arity is None:
        resolved = [h for h in handles if h is not None]
        if not resolved:
            logger.debug("relation.member_unresolved", mode=str(mode), members=missing)
            return None
        if missing:
            logger.debug("relation.members_skipped", mode=str(mode), members=missing)
        return resolved

    if missing:
        logger.debug("relation.member_unresolved", mode=str(mode), members=missing)
        return None
    return handles


def evaluate(relation: Relation) -> Datum:
    """Evaluate a relation into a Datum.

    Args:
        relation: Mode, ordered member references and settings to evaluate

    Returns:
        The measured Datum, or the neutral Datum of the routine's output type
        when the members cannot be resolved
    """
    routine = ROUTINES[relation.mode.metric]
    value_type = routine.shape(relation.settings, relation.mode.metric)

    handles = _resolve_members(relation)
    if handles is None:
        return Datum.neutral(value_type)

    value = routine.compute(_Context(handles, relation.settings, relation))
    return Datum(value_type, value)
