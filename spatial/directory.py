# spatial/directory.py

"""Directory of tracked entities.

Resolves human-readable names to member references and member references to
live spatial handles. The directory owns every live handle; references only
hold them weakly.
"""

import weakref
from dataclasses import dataclass, field
from typing import Optional

import structlog

from .entities import ZERO, Position, Vector3, validate_position
from .rotation import IDENTITY, Rotation


@dataclass(eq=False)
class LiveHandle:
    """Current transform of one tracked entity."""

    name: str
    position: Position = ZERO
    rotation: Rotation = IDENTITY
    velocity: Vector3 = ZERO
    active: bool = True

    def __post_init__(self):
        self.position = validate_position(self.position)
        self.velocity = validate_position(self.velocity)


@dataclass(eq=False)
class AuxiliaryProxy:
    """Trigger and gaze state published by a proxy collider."""

    name: str = "proxy"
    is_triggered: bool = False
    gaze_target: Optional[str] = None
    gaze_confidence: float = 0.0

    @property
    def is_gazing(self) -> bool:
        return self.gaze_target is not None


@dataclass(frozen=True)
class MemberReference:
    """Stable handle to one tracked entity.

    Compares by name only, so references survive the live handle being
    replaced or going away.
    """

    name: str
    handle: Optional[weakref.ref] = field(default=None, compare=False, repr=False)

    @classmethod
    def to(cls, handle: LiveHandle) -> "MemberReference":
        return cls(name=handle.name, handle=weakref.ref(handle))

    @property
    def live(self) -> Optional[LiveHandle]:
        """The referenced handle if it still exists and is active."""
        if self.handle is None:
            return None
        target = self.handle()
        if target is None or not target.active:
            return None
        return target

    @property
    def is_valid(self) -> bool:
        return self.live is not None


class HerdDirectory:
    """In-memory name directory for live handles."""

    def __init__(self):
        self._handles: dict[str, LiveHandle] = {}
        self.logger = structlog.get_logger(f"{__name__}.HerdDirectory")

    def register(self, handle: LiveHandle) -> MemberReference:
        """Add or replace the handle stored under its name.

        Args:
            handle: Live handle to track

        Returns:
            A reference to the registered handle
        """
        if not handle.name or not handle.name.strip():
            raise ValueError("Live handles must have a non-empty name")

        self._handles[handle.name] = handle
        self.logger.debug("member.registered", name=handle.name, position=handle.position)
        return MemberReference.to(handle)

    def unregister(self, name: str) -> bool:
        """Stop tracking a handle.

        Returns:
            True if a handle was removed, False if the name was unknown
        """
        if name not in self._handles:
            return False

        del self._handles[name]
        self.logger.debug("member.unregistered", name=name)
        return True

    def resolve(self, name: str) -> Optional[MemberReference]:
        """Resolve a display name into a member reference."""
        handle = self._handles.get(name)
        if handle is None:
            return None
        return MemberReference.to(handle)

    def try_resolve(self, reference: MemberReference) -> Optional[LiveHandle]:
        """Resolve a reference into its current live handle.

        The handle must still be the one registered under the reference's
        name and must be active.
        """
        handle = reference.live
        if handle is None or self._handles.get(reference.name) is not handle:
            return None
        return handle

    def get(self, name: str) -> Optional[LiveHandle]:
        return self._handles.get(name)

    def names(self) -> list[str]:
        return list(self._handles)

    def __contains__(self, name: str) -> bool:
        return name in self._handles

    def __len__(self) -> int:
        return len(self._handles)
