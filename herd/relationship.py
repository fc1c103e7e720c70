# herd/relationship.py

"""Relationship cache controller.

A Relationship owns its configuration and a two-tier cache. Structural fields
(identity, settings, member references, roles, relation) are rebuilt only
after invalidation; dynamic fields (datum, converter output, status) are
recomputed on every read.
"""

import math
from dataclasses import replace
from enum import Enum
from typing import Any, Iterable, Optional
from uuid import uuid4

from spatial.directory import HerdDirectory, MemberReference

from .config import config
from .converter import derive
from .curves import Curve, CurveType, get_curve
from .datum import Datum
from .enums import Family, RelationshipStatus
from .event_handlers import EventHandler, EventHandlerRegistry
from .events import Event, RelationshipEventType
from .exceptions import InvalidBoundsError, MetricFamilyMismatch
from .family import MODES, Mode, family_of, metric_slots, mode_for
from .logging import get_logger
from .relation import Relation, evaluate, output_type
from .settings import RelationSettings, on_metric_changed
from .snapshot import RelationshipPatch, RelationshipSnapshot
from .status import classify


class CacheState(str, Enum):
    """Structural cache state of a relationship."""

    INVALID = "invalid"
    VALID = "valid"


class Relationship:
    """Measures one metric over an ordered set of tracked members.

    Every structural change goes through _mutate(), which runs the settings
    policy, invalidates the structural cache and fires relationship.updated.
    """

    def __init__(
        self,
        family: Family | str = Family.SINGLE,
        metric: Optional[Enum | str] = None,
        members: Iterable[str] = (),
        directory: Optional[HerdDirectory] = None,
        settings: Optional[RelationSettings] = None,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        curve: CurveType | str | Curve | None = None,
        identity: Optional[str] = None,
        description: str = "",
        fail_fast: bool = False,
    ):
        self.logger = get_logger(f"{__name__}.Relationship")
        self._handlers = EventHandlerRegistry()
        self.fail_fast = fail_fast

        self._identity = identity or str(uuid4())
        self._description = description
        self._mode = mode_for(family, metric)
        self._observed_mode = self._mode
        self._settings = settings if settings is not None else RelationSettings()
        self._member_names = list(members)
        self._directory = directory

        self._epsilon = config.bounds_epsilon
        self._minimum, self._maximum = self._coerce_bounds(
            config.default_minimum if minimum is None else float(minimum),
            config.default_maximum if maximum is None else float(maximum),
            authority="minimum",
        )
        self._curve_type, self._custom_curve = self._split_curve(
            curve if curve is not None else config.default_curve
        )

        self._state = CacheState.INVALID
        self._status = RelationshipStatus.NONE
        self._structure = RelationshipSnapshot.empty()
        self._snapshot = RelationshipSnapshot.empty()

    # Configuration

    @property
    def id(self) -> str:
        return self._identity

    @id.setter
    def id(self, value: str) -> None:
        self._mutate("identity", identity=value)

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str) -> None:
        self._mutate("description", description=value)

    @property
    def mode(self) -> Mode:
        return self._mode

    @mode.setter
    def mode(self, value: Mode) -> None:
        self._mutate("mode", mode=value)

    @property
    def family(self) -> Family:
        return self._mode.family

    @family.setter
    def family(self, value: Family | str) -> None:
        family = Family(value)
        if family == self.family:
            return
        self._mutate("family", mode=mode_for(family))

    @property
    def metric(self) -> Enum:
        return self._mode.metric

    @metric.setter
    def metric(self, value: Enum | str) -> None:
        self._mutate("metric", mode=self._realign(value))

    @property
    def metric_slots(self) -> dict[Family, Optional[Enum]]:
        return metric_slots(self._mode)

    @property
    def settings(self) -> RelationSettings:
        return self._settings

    @settings.setter
    def settings(self, value: RelationSettings) -> None:
        self._mutate("settings", settings=value)

    def configure(self, **changes: Any) -> None:
        """Replace individual settings fields, e.g. configure(distance_unit=DistanceUnit.METERS)."""
        self._mutate("settings", settings=self._settings.replace(**changes))

    @property
    def minimum(self) -> float:
        return self._minimum

    @minimum.setter
    def minimum(self, value: float) -> None:
        minimum, maximum = self._coerce_bounds(float(value), self._maximum, authority="minimum")
        self._mutate("bounds", minimum=minimum, maximum=maximum)

    @property
    def maximum(self) -> float:
        return self._maximum

    @maximum.setter
    def maximum(self, value: float) -> None:
        minimum, maximum = self._coerce_bounds(self._minimum, float(value), authority="maximum")
        self._mutate("bounds", minimum=minimum, maximum=maximum)

    def set_bounds(self, minimum: float, maximum: float) -> None:
        """Set both bounds at once; the minimum wins when they conflict."""
        minimum, maximum = self._coerce_bounds(float(minimum), float(maximum), authority="minimum")
        self._mutate("bounds", minimum=minimum, maximum=maximum)

    @property
    def curve(self) -> CurveType:
        return self._curve_type

    @curve.setter
    def curve(self, value: CurveType | str | Curve) -> None:
        curve_type, custom_curve = self._split_curve(value)
        self._mutate("curve", curve_type=curve_type, custom_curve=custom_curve)

    @property
    def custom_curve(self) -> Optional[Curve]:
        return self._custom_curve

    @property
    def members(self) -> list[str]:
        return list(self._member_names)

    @members.setter
    def members(self, names: Iterable[str]) -> None:
        self._mutate("members", member_names=list(names))

    @property
    def directory(self) -> Optional[HerdDirectory]:
        return self._directory

    @directory.setter
    def directory(self, value: Optional[HerdDirectory]) -> None:
        self._mutate("directory", directory=value)

    @property
    def status(self) -> RelationshipStatus:
        return self._status

    @property
    def cache_state(self) -> CacheState:
        return self._state

    @property
    def snapshot(self) -> RelationshipSnapshot:
        """Snapshot produced by the most recent read(), without re-evaluating."""
        return self._snapshot

    # Events

    def on(self, event_type: RelationshipEventType | str, handler: EventHandler) -> None:
        self._handlers.on(event_type, handler)

    def off(self, event_type: RelationshipEventType | str, handler: EventHandler) -> bool:
        return self._handlers.off(event_type, handler)

    def on_all(self, handler: EventHandler) -> None:
        self._handlers.on_all(handler)

    def _emit(self, event_type: RelationshipEventType, **data: Any) -> None:
        self._handlers.dispatch(Event.create(event_type, self._identity, **data), self.fail_fast)

    # Cache

    def invalidate(self) -> None:
        """Mark the structural cache stale; the next read() rebuilds it."""
        self._state = CacheState.INVALID
        # Each configuration epoch reports its first real status once
        self._status = RelationshipStatus.NONE

    def read(self) -> RelationshipSnapshot:
        """Evaluate the relationship and return a fresh snapshot.

        Rebuilds the structural fields first when the cache is invalid, then
        recomputes the datum, converter output and status, firing
        relationship.datum_updated and any status transition event.
        """
        if self._state == CacheState.INVALID:
            self._rebuild()
        self._snapshot = self._refresh()
        return self._snapshot

    def describe(self) -> RelationshipSnapshot:
        """Structural snapshot without evaluating; rebuilds it when invalid."""
        if self._state == CacheState.INVALID:
            self._rebuild()
        return self._structure

    def apply(self, patch: RelationshipPatch | dict, strict: Optional[bool] = None) -> None:
        """Bulk-write bounds, curve, metric, settings and members.

        A metric from another family is skipped and logged, or with strict
        enabled raises MetricFamilyMismatch before anything is written.

        Raises:
            MetricFamilyMismatch: If strict and the patch metric is foreign
            pydantic.ValidationError: If a dict patch fails validation
        """
        if not isinstance(patch, RelationshipPatch):
            patch = RelationshipPatch.model_validate(patch)
        strict = config.strict_patches if strict is None else strict

        changes: dict[str, Any] = {}

        if patch.metric is not None:
            if isinstance(patch.metric, self._mode.metric_type):
                changes["mode"] = mode_for(self.family, patch.metric)
            elif strict:
                raise MetricFamilyMismatch(patch.metric, self.family)
            else:
                self.logger.warning(
                    "relationship.patch_metric_rejected",
                    relationship_id=self._identity,
                    family=self.family.value,
                    metric=patch.metric.value,
                )

        if patch.settings is not None:
            changes["settings"] = patch.settings

        if patch.curve_type is not None or patch.custom_curve is not None:
            curve_type = patch.curve_type
            if curve_type is None:
                curve_type = CurveType.CUSTOM
            changes["curve_type"] = curve_type
            changes["custom_curve"] = patch.custom_curve

        if patch.minimum is not None or patch.maximum is not None:
            authority = "minimum" if patch.minimum is not None else "maximum"
            changes["minimum"], changes["maximum"] = self._coerce_bounds(
                patch.minimum if patch.minimum is not None else self._minimum,
                patch.maximum if patch.maximum is not None else self._maximum,
                authority=authority,
            )

        if patch.members is not None:
            changes["member_names"] = list(patch.members)

        self._mutate("apply", **changes)

    # Internals

    def _mutate(self, reason: str, **changes: Any) -> None:
        """Single entry point for structural changes."""
        for name, value in changes.items():
            setattr(self, f"_{name}", value)

        if self._mode != self._observed_mode:
            if "settings" not in changes:
                self._settings = on_metric_changed(self._settings)
            self.logger.info(
                "relationship.metric_changed",
                relationship_id=self._identity,
                previous=str(self._observed_mode),
                current=str(self._mode),
                settings_reset="settings" not in changes,
            )
            self._observed_mode = self._mode

        self.invalidate()
        self._emit(RelationshipEventType.UPDATED, reason=reason)

    def _realign(self, metric: Enum | str) -> Mode:
        """Mode for a metric, switching family when the metric belongs to another one."""
        if isinstance(metric, str) and not isinstance(metric, Enum):
            for mode_type in MODES.values():
                try:
                    metric = mode_type.metric_type(metric)
                    break
                except ValueError:
                    continue
            else:
                raise MetricFamilyMismatch(metric, self.family)

        family = family_of(metric)
        if family is None:
            raise MetricFamilyMismatch(metric, self.family)
        if family != self.family:
            self.logger.warning(
                "relationship.family_realigned",
                relationship_id=self._identity,
                previous=self.family.value,
                current=family.value,
                metric=metric.value,
            )
        return mode_for(family, metric)

    def _coerce_bounds(self, minimum: float, maximum: float, authority: str) -> tuple[float, float]:
        """Keep minimum < maximum by moving the bound that was not just set.

        Raises:
            InvalidBoundsError: If either bound is infinite or NaN
        """
        if not (math.isfinite(minimum) and math.isfinite(maximum)):
            raise InvalidBoundsError(f"bounds must be finite, got [{minimum}, {maximum}]")
        if minimum < maximum:
            return minimum, maximum
        if authority == "minimum":
            adjusted = minimum + self._epsilon
            if adjusted <= minimum:
                adjusted = math.nextafter(minimum, math.inf)
            return minimum, adjusted
        adjusted = maximum - self._epsilon
        if adjusted >= maximum:
            adjusted = math.nextafter(maximum, -math.inf)
        return adjusted, maximum

    @staticmethod
    def _split_curve(curve: CurveType | str | Curve) -> tuple[CurveType, Optional[Curve]]:
        if isinstance(curve, (CurveType, str)):
            return CurveType(curve), None
        return CurveType.CUSTOM, curve

    def _resolve(self, name: str) -> MemberReference:
        if self._directory is not None:
            reference = self._directory.resolve(name)
            if reference is not None:
                return reference
        return MemberReference(name=name)

    def _rebuild(self) -> None:
        references = tuple(self._resolve(name) for name in self._member_names)
        relation = Relation(self._mode, references, self._settings, self._directory)

        self._structure = RelationshipSnapshot(
            id=self._identity,
            description=self._description,
            family=self.family,
            metric=self.metric,
            metric_name=str(self._mode),
            metric_description=self._mode.description,
            settings=self._settings,
            members=tuple(self._mode.role_pairs(self._member_names)),
            references=references,
            minimum=self._minimum,
            maximum=self._maximum,
            curve_type=self._curve_type,
            custom_curve=self._custom_curve,
            relation=relation,
        )
        self._state = CacheState.VALID

        unresolved = [ref.name for ref in references if not ref.is_valid]
        self.logger.debug(
            "relationship.rebuilt",
            relationship_id=self._identity,
            mode=str(self._mode),
            members=self._member_names,
            unresolved=unresolved,
        )
        self._warn_unusable(references, unresolved)

    def _warn_unusable(self, references: tuple[MemberReference, ...], unresolved: list[str]) -> None:
        """Warn once per rebuild; evaluation itself logs these at debug on every read."""
        if not references:
            return
        if not self._mode.accepts(len(references)):
            self.logger.warning(
                "relationship.arity_mismatch",
                relationship_id=self._identity,
                mode=str(self._mode),
                expected=self._mode.arity if self._mode.arity is not None else "1+",
                actual=len(references),
            )
        elif unresolved:
            self.logger.warning(
                "relationship.members_unresolved",
                relationship_id=self._identity,
                mode=str(self._mode),
                members=unresolved,
            )

    def _refresh(self) -> RelationshipSnapshot:
        structure = self._structure

        if not structure.references:
            # Nothing configured yet: a neutral reading with no status
            datum = Datum.neutral(output_type(self._mode, self._settings))
            return replace(structure, datum=datum, value_type=datum.value_type)

        datum = evaluate(structure.relation)
        converter = derive(datum, self._minimum, self._maximum, self._mode.bool_mapping)
        curved = converter.to_curve(get_curve(self._curve_type, self._custom_curve))

        previous = self._status
        status, transition = classify(previous, converter)
        self._status = status

        snapshot = replace(
            structure,
            datum=datum,
            value_type=datum.value_type,
            converter=converter,
            raw=converter.raw,
            normalized=converter.normalized,
            curved=curved,
            over=converter.over,
            under=converter.under,
            in_range=converter.in_range,
            as_axis=converter.as_axis,
            status=status,
        )

        self._emit(RelationshipEventType.DATUM_UPDATED, datum=datum)
        if transition is not None:
            self.logger.info(
                "relationship.status_changed",
                relationship_id=self._identity,
                previous=previous.value,
                status=status.value,
                raw=converter.raw,
            )
            self._emit(transition, status=status.value, previous=previous.value)
        return snapshot

    def __repr__(self) -> str:
        return (
            f"Relationship(id={self._identity!r}, mode={self._mode}, "
            f"members={self._member_names!r}, state={self._state.value})"
        )
