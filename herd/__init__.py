"""Relationship evaluation core."""

from .converter import BoolRangeMapping, ConverterResult, derive
from .curves import CurveType, Keyframe, KeyframeCurve, get_curve, sample
from .datum import Datum
from .enums import (
    AxisSelection,
    AxisSelectionThrouple,
    CoupleMetric,
    DensityMethod,
    DistanceOptions,
    DistanceUnit,
    Family,
    GroupMetric,
    RelationshipStatus,
    SingleAxis,
    SingleMetric,
    SizeMethod,
    ThroupleMetric,
    ValueType,
)
from .event_handlers import EventHandler, EventHandlerRegistry
from .events import Event, EventValidationError, EventValidator, RelationshipEventType
from .exceptions import (
    ConfigurationException,
    EventHandlerException,
    HandlerExecutionError,
    HerdException,
    InvalidBoundsError,
    MetricFamilyMismatch,
)
from .family import CoupleMode, GroupMode, Mode, SingleMode, ThroupleMode, mode_for
from .preview import PreviewResult, SecondaryMetric, preview, preview_position, preview_rotation
from .relation import Relation, evaluate
from .relationship import CacheState, Relationship
from .settings import RelationSettings, on_metric_changed
from .snapshot import RelationshipPatch, RelationshipSnapshot
from .status import classify

__all__ = [
    # Core classes
    "Relationship",
    "RelationshipSnapshot",
    "RelationshipPatch",
    "CacheState",
    "Relation",
    "RelationSettings",
    "Datum",
    "ConverterResult",
    "BoolRangeMapping",
    "Mode",
    "SingleMode",
    "CoupleMode",
    "ThroupleMode",
    "GroupMode",
    "PreviewResult",
    "SecondaryMetric",
    "Keyframe",
    "KeyframeCurve",
    "Event",
    "EventValidator",
    "EventHandler",
    "EventHandlerRegistry",
    # Operations
    "evaluate",
    "derive",
    "classify",
    "on_metric_changed",
    "mode_for",
    "sample",
    "get_curve",
    "preview",
    "preview_position",
    "preview_rotation",
    # Enums
    "Family",
    "SingleMetric",
    "CoupleMetric",
    "ThroupleMetric",
    "GroupMetric",
    "ValueType",
    "RelationshipStatus",
    "RelationshipEventType",
    "CurveType",
    "DistanceOptions",
    "DistanceUnit",
    "SingleAxis",
    "AxisSelection",
    "AxisSelectionThrouple",
    "DensityMethod",
    "SizeMethod",
    # Exceptions
    "HerdException",
    "ConfigurationException",
    "MetricFamilyMismatch",
    "InvalidBoundsError",
    "EventHandlerException",
    "HandlerExecutionError",
    "EventValidationError",
]
