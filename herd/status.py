# herd/status.py

"""Status classification with change detection."""

from typing import Optional

from .converter import ConverterResult
from .enums import RelationshipStatus
from .events import RelationshipEventType

STATUS_EVENTS: dict[RelationshipStatus, RelationshipEventType] = {
    RelationshipStatus.UNDER: RelationshipEventType.STATUS_UNDER,
    RelationshipStatus.OVER: RelationshipEventType.STATUS_OVER,
    RelationshipStatus.IN_RANGE: RelationshipEventType.STATUS_IN_RANGE,
}


def candidate(over: bool, under: bool, in_range: bool) -> RelationshipStatus:
    """Status implied by a set of boundary flags; NONE unless exactly one is set."""
    if under and not over and not in_range:
        return RelationshipStatus.UNDER
    if over and not under and not in_range:
        return RelationshipStatus.OVER
    if in_range and not over and not under:
        return RelationshipStatus.IN_RANGE
    return RelationshipStatus.NONE


def classify(
    previous: RelationshipStatus, flags: ConverterResult
) -> tuple[RelationshipStatus, Optional[RelationshipEventType]]:
    """Classify converter flags against the previously recorded status.

    Args:
        previous: Status recorded by the last evaluation
        flags: Converter output carrying over/under/in_range

    Returns:
        The new status, and the event to fire when it differs from previous
    """
    status = candidate(flags.over, flags.under, flags.in_range)
    if status == previous or status == RelationshipStatus.NONE:
        return status, None
    return status, STATUS_EVENTS[status]
