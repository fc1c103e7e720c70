# herd/snapshot.py

"""Read model returned by Relationship.read() and the patch accepted by apply()."""

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import BaseModel, field_validator

from spatial.directory import MemberReference

from .converter import ConverterResult
from .curves import CurveType
from .datum import Datum
from .enums import (
    CoupleMetric,
    Family,
    GroupMetric,
    RelationshipStatus,
    SingleMetric,
    ThroupleMetric,
    ValueType,
)
from .family import Metric
from .relation import Relation
from .settings import RelationSettings


@dataclass(frozen=True)
class RelationshipSnapshot:
    """Immutable view of a relationship after one evaluation.

    Structural fields describe the configuration; dynamic fields hold the
    latest measurement and everything derived from it.
    """

    # Structure
    id: str = ""
    description: str = ""
    family: Optional[Family] = None
    metric: Optional[Metric] = None
    metric_name: str = ""
    metric_description: str = ""
    settings: RelationSettings = field(default_factory=RelationSettings)
    members: tuple[tuple[str, str], ...] = ()  # (name, role)
    references: tuple[MemberReference, ...] = ()
    minimum: float = 0.0
    maximum: float = 1.0
    curve_type: CurveType = CurveType.LINEAR
    custom_curve: Optional[Any] = field(default=None, compare=False)
    relation: Optional[Relation] = None

    # Measurement
    datum: Datum = field(default_factory=lambda: Datum.neutral(ValueType.FLOAT))
    value_type: ValueType = ValueType.FLOAT
    converter: Optional[ConverterResult] = None
    raw: float = 0.0
    normalized: float = 0.0
    curved: float = 0.0
    over: bool = False
    under: bool = False
    in_range: bool = False
    as_axis: float = 0.0
    status: RelationshipStatus = RelationshipStatus.NONE

    @classmethod
    def empty(cls) -> "RelationshipSnapshot":
        """Snapshot of a relationship that has never been configured."""
        return cls()

    @property
    def member_names(self) -> list[str]:
        return [name for name, _ in self.members]

    @property
    def roles(self) -> list[str]:
        return [role for _, role in self.members]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "family": self.family.value if self.family else None,
            "metric": self.metric.value if self.metric else None,
            "metric_name": self.metric_name,
            "members": [list(pair) for pair in self.members],
            "settings": self.settings.to_dict(),
            "minimum": self.minimum,
            "maximum": self.maximum,
            "curve_type": self.curve_type.value,
            "datum": self.datum.to_dict(),
            "raw": self.raw,
            "normalized": self.normalized,
            "curved": self.curved,
            "over": self.over,
            "under": self.under,
            "in_range": self.in_range,
            "as_axis": self.as_axis,
            "status": self.status.value,
        }


class RelationshipPatch(BaseModel):
    """Bulk update applied to a relationship in one step.

    Omitted fields are left unchanged.
    """

    minimum: Optional[float] = None
    maximum: Optional[float] = None
    curve_type: Optional[CurveType] = None
    custom_curve: Optional[Any] = None
    metric: Optional[Union[SingleMetric, CoupleMetric, ThroupleMetric, GroupMetric]] = None
    settings: Optional[Any] = None
    members: Optional[list[str]] = None

    @field_validator("minimum", "maximum")
    @classmethod
    def _finite_bound(cls, value):
        if value is not None and not math.isfinite(value):
            raise ValueError("bounds must be finite")
        return value

    @field_validator("custom_curve")
    @classmethod
    def _callable_curve(cls, value):
        if value is not None and not callable(value):
            raise ValueError("custom_curve must be callable")
        return value

    @field_validator("settings")
    @classmethod
    def _settings_record(cls, value):
        if value is not None and not isinstance(value, RelationSettings):
            raise ValueError("settings must be a RelationSettings instance")
        return value

    @field_validator("members")
    @classmethod
    def _member_names(cls, value):
        if value is None:
            return value
        names = [name.strip() for name in value]
        if any(not name for name in names):
            raise ValueError("member names must be non-empty")
        return names
