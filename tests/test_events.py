"""Tests for relationship events."""

from datetime import datetime
from uuid import UUID

import pytest

from herd.datum import Datum
from herd.events import Event, EventValidationError, EventValidator, RelationshipEventType


def test_event_creation():
    """Events get an id and a timestamp."""
    event = Event.create(RelationshipEventType.UPDATED, "pair", reason="bounds")

    assert isinstance(event.event_id, UUID)
    assert isinstance(event.created_at, datetime)
    assert event.relationship_id == "pair"
    assert event.data == {"reason": "bounds"}


def test_event_type_values():
    assert RelationshipEventType.UPDATED.value == "relationship.updated"
    assert RelationshipEventType.STATUS_IN_RANGE.value == "status.in_range"


def test_string_event_type_coerced():
    """Known event names become enum members; unknown names stay strings."""
    assert Event("status.over").event_type is RelationshipEventType.STATUS_OVER

    custom = Event("custom.thing")
    assert custom.event_type == "custom.thing"
    assert custom.type_name == "custom.thing"


def test_event_serialization():
    """Datums in event data are serialized."""
    event = Event.create(RelationshipEventType.DATUM_UPDATED, "pair", datum=Datum.of_float(3.0))

    result = event.to_dict()

    assert result["event_type"] == "relationship.datum_updated"
    assert result["event_id"] == str(event.event_id)
    assert result["data"] == {"datum": {"type": "float", "value": 3.0}}


def test_events_hash_by_id():
    event = Event.create(RelationshipEventType.UPDATED, "pair", reason="apply")
    assert len({event, event}) == 1


class TestEventValidator:
    """Test event schema validation."""

    def test_valid_status_event(self):
        event = Event.create(RelationshipEventType.STATUS_UNDER, "pair", status="under", previous="none")
        EventValidator.validate(event)
        assert EventValidator.is_valid(event)

    def test_missing_field(self):
        """Required fields must be present."""
        event = Event.create(RelationshipEventType.STATUS_UNDER, "pair", status="under")
        with pytest.raises(EventValidationError, match="previous"):
            EventValidator.validate(event)

    def test_wrong_type(self):
        """Field types are checked."""
        event = Event.create(RelationshipEventType.UPDATED, "pair", reason=3)
        assert not EventValidator.is_valid(event)

    def test_unknown_event_type_skipped(self):
        assert EventValidator.is_valid(Event("custom.thing"))
