# herd/preview.py

"""Side-effect free evaluation of a snapshot with overrides.

Previews never change a relationship's status or fire its events.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from spatial.entities import ZERO
from spatial.rotation import IDENTITY

from .converter import derive
from .curves import Curve, CurveType, get_curve
from .datum import Datum
from .enums import Family, ValueType
from .family import mode_for
from .relation import Relation, evaluate
from .relationship import Relationship
from .settings import RelationSettings
from .snapshot import RelationshipSnapshot


@dataclass(frozen=True)
class PreviewResult:
    """Converter outputs of one preview evaluation."""

    datum: Datum = field(default_factory=lambda: Datum.neutral(ValueType.FLOAT))
    raw: float = 0.0
    normalized: float = 0.0
    curved: float = 0.0
    over: bool = False
    under: bool = False
    in_range: bool = False
    as_axis: float = 0.0

    @classmethod
    def empty(cls) -> "PreviewResult":
        return cls()


def preview(
    snapshot: RelationshipSnapshot,
    metric: Optional[Enum | str] = None,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    settings: Optional[RelationSettings] = None,
    curve: CurveType | str | Curve | None = None,
) -> PreviewResult:
    """Re-evaluate a snapshot's members with optional overrides.

    Args:
        snapshot: Snapshot from Relationship.read()
        metric: Metric from the snapshot's family to evaluate instead
        minimum: Lower bound override
        maximum: Upper bound override
        settings: Settings override
        curve: Curve override; defaults to the snapshot's curve

    Returns:
        PreviewResult, empty when the snapshot was never built

    Raises:
        MetricFamilyMismatch: If metric belongs to another family
        InvalidBoundsError: If the effective minimum is not below the maximum
    """
    relation = snapshot.relation
    if relation is None:
        return PreviewResult.empty()

    mode = relation.mode if metric is None else mode_for(relation.mode.family, metric)
    relation = Relation(
        mode,
        relation.references,
        settings if settings is not None else relation.settings,
        relation.directory,
    )

    datum = evaluate(relation)
    converter = derive(
        datum,
        snapshot.minimum if minimum is None else minimum,
        snapshot.maximum if maximum is None else maximum,
        mode.bool_mapping,
    )
    if curve is None:
        shaping = get_curve(snapshot.curve_type, snapshot.custom_curve)
    elif isinstance(curve, (CurveType, str)):
        shaping = get_curve(curve)
    else:
        shaping = curve

    return PreviewResult(
        datum=datum,
        raw=converter.raw,
        normalized=converter.normalized,
        curved=converter.to_curve(shaping),
        over=converter.over,
        under=converter.under,
        in_range=converter.in_range,
        as_axis=converter.as_axis,
    )


def _preview_raw(relationship: Relationship, metric_name: str, fallback):
    structure = relationship.describe()
    if not structure.references:
        return fallback
    mode = mode_for(relationship.family, f"{relationship.family.value}.{metric_name}")
    relation = Relation(mode, structure.references, RelationSettings(), relationship.directory)
    return evaluate(relation).value


def preview_position(relationship: Relationship):
    """Position the relationship's family reports for its members (centroid, midpoint, ...)."""
    return _preview_raw(relationship, "position", ZERO)


def preview_rotation(relationship: Relationship):
    """Orientation the relationship's family reports for its members."""
    return _preview_raw(relationship, "rotation", IDENTITY)


class SecondaryMetric:
    """Second output derived from an existing relationship.

    Reuses the relationship's members and configuration, overriding the
    metric per family, the bounds, the curve and the settings as requested.
    """

    def __init__(
        self,
        relationship: Optional[Relationship] = None,
        metrics: Optional[dict[Family, Enum]] = None,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        curve: CurveType | str | Curve | None = None,
        settings: Optional[RelationSettings] = None,
    ):
        self.relationship = relationship
        self.metrics = dict(metrics or {})
        self.minimum = minimum
        self.maximum = maximum
        self.curve = curve
        self.settings = settings
        self._output = PreviewResult.empty()

    def metric_for(self, family: Family) -> Optional[Enum]:
        return self.metrics.get(family)

    @property
    def output(self) -> PreviewResult:
        """Result of the last refresh()."""
        return self._output

    @property
    def live_output(self) -> PreviewResult:
        return self.refresh()

    def refresh(self) -> PreviewResult:
        if self.relationship is None:
            self._output = PreviewResult.empty()
            return self._output

        snapshot = self.relationship.describe()
        self._output = preview(
            snapshot,
            metric=self.metric_for(self.relationship.family),
            minimum=self.minimum,
            maximum=self.maximum,
            settings=self.settings,
            curve=self.curve,
        )
        return self._output

    def revert(self) -> None:
        """Drop every override and follow the relationship again."""
        self.metrics.clear()
        self.minimum = None
        self.maximum = None
        self.curve = None
        self.settings = None
        self._output = PreviewResult.empty()
