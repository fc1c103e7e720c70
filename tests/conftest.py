"""Pytest configuration and shared fixtures."""

import pytest
import structlog

from herd.enums import CoupleMetric, DistanceUnit, Family
from herd.relationship import Relationship
from herd.settings import RelationSettings
from spatial.directory import AuxiliaryProxy, HerdDirectory, LiveHandle, MemberReference


class EventRecorder:
    """Collects events dispatched by a relationship."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def of_type(self, event_type):
        key = event_type.value if hasattr(event_type, "value") else event_type
        return [e for e in self.events if e.type_name == key]

    def clear(self):
        self.events.clear()


@pytest.fixture
def directory():
    """Directory with three members laid out as a 3-4-5 triangle."""
    herd = HerdDirectory()
    herd.register(LiveHandle("A", position=(0.0, 0.0, 0.0)))
    herd.register(LiveHandle("B", position=(3.0, 0.0, 0.0)))
    herd.register(LiveHandle("C", position=(0.0, 4.0, 0.0)))
    return herd


@pytest.fixture
def refs(directory):
    """Build member references by name; unknown names give unresolvable references."""

    def build(*names):
        return tuple(directory.resolve(name) or MemberReference(name) for name in names)

    return build


@pytest.fixture
def meters():
    return RelationSettings(distance_unit=DistanceUnit.METERS)


@pytest.fixture
def proxy():
    return AuxiliaryProxy(name="hand")


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def couple_distance(directory, meters, recorder):
    """Couple distance between A and B in meters with bounds [0, 5]."""
    relationship = Relationship(
        family=Family.COUPLE,
        metric=CoupleMetric.DISTANCE,
        members=["A", "B"],
        directory=directory,
        settings=meters,
        minimum=0.0,
        maximum=5.0,
        identity="pair",
    )
    relationship.on_all(recorder)
    return relationship


@pytest.fixture
def log_output():
    """Capture structured log entries emitted during a test."""
    with structlog.testing.capture_logs() as logs:
        yield logs
