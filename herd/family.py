# herd/family.py

"""Family/metric sum type.

A relationship's active metric lives in exactly one Mode variant. Each variant
carries its own family's metric enum and arity, so a family can never hold a
metric from another family's set.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union

from .converter import BoolRangeMapping
from .enums import (
    CoupleMetric,
    Family,
    GroupMetric,
    RelationshipStatus,
    SingleMetric,
    ThroupleMetric,
)
from .exceptions import MetricFamilyMismatch

Metric = Union[SingleMetric, CoupleMetric, ThroupleMetric, GroupMetric]


@dataclass(frozen=True)
class Mode:
    """Active (family, metric) pair of a relationship."""

    family: ClassVar[Family]
    metric_type: ClassVar[type[Enum]]
    arity: ClassVar[Optional[int]]  # None means any count of one or more
    roles: ClassVar[tuple[str, ...]] = ()

    metric: Enum

    def __post_init__(self):
        metric = self.metric
        if not isinstance(metric, self.metric_type):
            try:
                metric = self.metric_type(metric)
            except ValueError:
                raise MetricFamilyMismatch(metric, self.family) from None
            object.__setattr__(self, "metric", metric)

    def accepts(self, member_count: int) -> bool:
        """Whether a member count satisfies this family's arity."""
        if self.arity is None:
            return member_count >= 1
        return member_count == self.arity

    def role_for(self, index: int) -> str:
        """Role name of the member at a position; index 0 is always the primary."""
        if index < len(self.roles):
            return self.roles[index]
        return f"Member {index + 1}"

    def role_pairs(self, names: list[str]) -> list[tuple[str, str]]:
        return [(name, self.role_for(i)) for i, name in enumerate(names)]

    @property
    def description(self) -> str:
        return METRIC_DESCRIPTIONS.get(self.metric, "No description is available for this metric.")

    @property
    def bool_mapping(self) -> Optional[BoolRangeMapping]:
        return BOOL_RANGE_MAPPINGS.get(self.metric)

    def __str__(self) -> str:
        return f"{self.family.value}:{self.metric.name.lower()}"


@dataclass(frozen=True)
class SingleMode(Mode):
    family: ClassVar[Family] = Family.SINGLE
    metric_type: ClassVar[type[Enum]] = SingleMetric
    arity: ClassVar[Optional[int]] = 1
    roles: ClassVar[tuple[str, ...]] = ("Subject",)

    metric: SingleMetric = SingleMetric.POSITION


@dataclass(frozen=True)
class CoupleMode(Mode):
    family: ClassVar[Family] = Family.COUPLE
    metric_type: ClassVar[type[Enum]] = CoupleMetric
    arity: ClassVar[Optional[int]] = 2
    roles: ClassVar[tuple[str, ...]] = ("Leader", "Follower")

    metric: CoupleMetric = CoupleMetric.POSITION


@dataclass(frozen=True)
class ThroupleMode(Mode):
    family: ClassVar[Family] = Family.THROUPLE
    metric_type: ClassVar[type[Enum]] = ThroupleMetric
    arity: ClassVar[Optional[int]] = 3
    roles: ClassVar[tuple[str, ...]] = ("Leader", "Follower", "Third")

    metric: ThroupleMetric = ThroupleMetric.POSITION


@dataclass(frozen=True)
class GroupMode(Mode):
    family: ClassVar[Family] = Family.GROUP
    metric_type: ClassVar[type[Enum]] = GroupMetric
    arity: ClassVar[Optional[int]] = None

    metric: GroupMetric = GroupMetric.POSITION


MODES: dict[Family, type[Mode]] = {
    Family.SINGLE: SingleMode,
    Family.COUPLE: CoupleMode,
    Family.THROUPLE: ThroupleMode,
    Family.GROUP: GroupMode,
}


def mode_for(family: Family | str, metric: Optional[Enum | str] = None) -> Mode:
    """Build the Mode variant for a family.

    Args:
        family: Family to build
        metric: Metric from that family's set; the family default when omitted

    Raises:
        MetricFamilyMismatch: If the metric belongs to another family
    """
    mode_type = MODES[Family(family)]
    if metric is None:
        return mode_type()
    return mode_type(metric=metric)


def family_of(metric: Enum) -> Optional[Family]:
    """Family whose metric set contains `metric`."""
    for family, mode_type in MODES.items():
        if isinstance(metric, mode_type.metric_type):
            return family
    return None


def metric_slots(mode: Mode) -> dict[Family, Optional[Enum]]:
    """Per-family metric storage with every inactive family left empty."""
    return {family: (mode.metric if family == mode.family else None) for family in MODES}


# A Bool datum reports its status through the mapping its metric declares
_TRIGGERED = BoolRangeMapping(
    when_true=RelationshipStatus.IN_RANGE, when_false=RelationshipStatus.UNDER
)
_GAZING = BoolRangeMapping(
    when_true=RelationshipStatus.IN_RANGE, when_false=RelationshipStatus.OVER
)

BOOL_RANGE_MAPPINGS: dict[Enum, BoolRangeMapping] = {
    SingleMetric.TRIGGER: _TRIGGERED,
    CoupleMetric.TRIGGER: _TRIGGERED,
    ThroupleMetric.TRIGGER: _TRIGGERED,
    GroupMetric.TRIGGER: _TRIGGERED,
    SingleMetric.ROTATION: _GAZING,
    CoupleMetric.ROTATION: _GAZING,
    ThroupleMetric.ROTATION: _GAZING,
    GroupMetric.ROTATION: _GAZING,
}


METRIC_DESCRIPTIONS: dict[Enum, str] = {
    SingleMetric.POSITION: "World position of the member, optionally reduced to one axis.",
    SingleMetric.ROTATION: "Orientation of the member, or whether its proxy is gazing at a target.",
    SingleMetric.MOVEMENT: "Velocity of the member as a vector, a single axis, or a speed.",
    SingleMetric.TRIGGER: "True while the member's trigger proxy is active.",
    CoupleMetric.POSITION: "Midpoint between leader and follower.",
    CoupleMetric.ROTATION: "Facing from the follower toward the leader.",
    CoupleMetric.DISTANCE: "Distance between leader and follower in the chosen unit.",
    CoupleMetric.MOVEMENT: "Shared velocity of the pair, or how fast they close on each other.",
    CoupleMetric.DIFFERENCE: "Offset from the leader to the follower.",
    CoupleMetric.TRIGGER: "True while the pair's trigger proxy is active.",
    ThroupleMetric.POSITION: "Centroid of the three members.",
    ThroupleMetric.ROTATION: "Facing of the triangle through the chosen member.",
    ThroupleMetric.DISTANCE: "Side lengths of the triangle, or one selected side.",
    ThroupleMetric.ANGLE: "Corner angles at leader (x), follower (y) and third (z).",
    ThroupleMetric.DENSITY: "How tightly the three cluster around their centroid.",
    ThroupleMetric.MOVEMENT: "Mean velocity of the three, or motion toward their centroid.",
    ThroupleMetric.TRIGGER: "True while the throuple's trigger proxy is active.",
    ThroupleMetric.ROTATION_AROUND_AXIS: "Signed twist of the triangle around its facing.",
    ThroupleMetric.SIZE: "Bounding extent of the three, or their radius from the centroid.",
    GroupMetric.POSITION: "Centroid of the group.",
    GroupMetric.ROTATION: "Heading of the group's mean velocity.",
    GroupMetric.DENSITY: "How tightly the group clusters around its centroid.",
    GroupMetric.SIZE: "Bounding extent of the group, or its radius from the centroid.",
    GroupMetric.MOVEMENT: "Mean velocity of the group, or motion toward its centroid.",
    GroupMetric.TRIGGER: "True while the group's trigger proxy is active.",
    GroupMetric.ROTATION_AROUND_AXIS: "Signed heading of the group's motion around an axis.",
}
