# herd/events.py

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4


class EventValidationError(Exception):
    """Raised when event validation fails."""

    pass


class RelationshipEventType(str, Enum):
    """Events a relationship publishes to its handlers."""

    UPDATED = "relationship.updated"
    DATUM_UPDATED = "relationship.datum_updated"
    STATUS_UNDER = "status.under"
    STATUS_OVER = "status.over"
    STATUS_IN_RANGE = "status.in_range"


@dataclass(frozen=True)
class Event:
    """Immutable notification raised by a relationship."""

    event_type: RelationshipEventType | str
    relationship_id: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    event_id: UUID = field(default_factory=uuid4)
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if isinstance(self.event_type, str):
            try:
                object.__setattr__(self, "event_type", RelationshipEventType(self.event_type))
            except ValueError:
                # Keep as string if not a known event type
                pass

        if self.created_at is None:
            object.__setattr__(self, "created_at", datetime.now(timezone.utc))

    def __hash__(self) -> int:
        return hash(self.event_id)

    @property
    def type_name(self) -> str:
        if isinstance(self.event_type, RelationshipEventType):
            return self.event_type.value
        return self.event_type

    @classmethod
    def create(
        cls,
        event_type: RelationshipEventType | str,
        relationship_id: str,
        **data: Any,
    ) -> "Event":
        """Factory method for creating events."""
        return cls(event_type=event_type, relationship_id=relationship_id, data=data)

    def to_dict(self) -> dict[str, Any]:
        data = {
            key: (value.to_dict() if hasattr(value, "to_dict") else value)
            for key, value in self.data.items()
        }
        return {
            "event_id": str(self.event_id),
            "event_type": self.type_name,
            "relationship_id": self.relationship_id,
            "data": data,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class EventValidator:
    """Lightweight validator for event data."""

    SCHEMAS: dict[str, dict[str, Any]] = {
        RelationshipEventType.UPDATED: {
            "required": ["reason"],
            "types": {"reason": str},
        },
        RelationshipEventType.DATUM_UPDATED: {
            "required": ["datum"],
            "types": {},
        },
        RelationshipEventType.STATUS_UNDER: {
            "required": ["status", "previous"],
            "types": {"status": str, "previous": str},
        },
        RelationshipEventType.STATUS_OVER: {
            "required": ["status", "previous"],
            "types": {"status": str, "previous": str},
        },
        RelationshipEventType.STATUS_IN_RANGE: {
            "required": ["status", "previous"],
            "types": {"status": str, "previous": str},
        },
    }

    @classmethod
    def validate(cls, event: Event) -> None:
        """Validate event data against schema.

        Raises:
            EventValidationError: If validation fails
        """
        event_type = event.event_type
        if not isinstance(event_type, RelationshipEventType):
            # Unknown event type - skip validation
            return

        schema = cls.SCHEMAS.get(event_type)
        if not schema:
            return

        for field_name in schema.get("required", []):
            if field_name not in event.data:
                raise EventValidationError(
                    f"Event {event_type.value} missing required field: {field_name}"
                )

        for field_name, expected_type in schema.get("types", {}).items():
            if field_name in event.data:
                value = event.data[field_name]
                if not isinstance(value, expected_type):
                    raise EventValidationError(
                        f"Event {event_type.value} field '{field_name}' has wrong type: "
                        f"expected {expected_type}, got {type(value)}"
                    )

    @classmethod
    def is_valid(cls, event: Event) -> bool:
        try:
            cls.validate(event)
            return True
        except EventValidationError:
            return False
