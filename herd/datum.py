# herd/datum.py

"""Type-tagged raw measurement values."""

from dataclasses import dataclass
from typing import Any, Union

from spatial.entities import ZERO, Vector3
from spatial.rotation import IDENTITY, Rotation

from .enums import ValueType

DatumValue = Union[float, bool, Vector3, Rotation]


@dataclass(frozen=True)
class Datum:
    """Immutable value produced by one metric evaluation."""

    value_type: ValueType
    value: DatumValue

    def __post_init__(self):
        # Normalize payloads so equal measurements compare equal
        if self.value_type == ValueType.FLOAT:
            object.__setattr__(self, "value", float(self.value))
        elif self.value_type == ValueType.BOOL:
            object.__setattr__(self, "value", bool(self.value))
        elif self.value_type == ValueType.VECTOR3:
            if len(self.value) != 3:
                raise ValueError(f"Vector3 datum needs 3 components, got {len(self.value)}")
            object.__setattr__(self, "value", tuple(float(c) for c in self.value))
        elif self.value_type == ValueType.QUATERNION:
            if len(self.value) != 4:
                raise ValueError(f"Quaternion datum needs 4 components, got {len(self.value)}")
            object.__setattr__(self, "value", tuple(float(c) for c in self.value))

    @classmethod
    def of_float(cls, value: float) -> "Datum":
        return cls(ValueType.FLOAT, value)

    @classmethod
    def of_bool(cls, value: bool) -> "Datum":
        return cls(ValueType.BOOL, value)

    @classmethod
    def of_vector(cls, value: Vector3) -> "Datum":
        return cls(ValueType.VECTOR3, value)

    @classmethod
    def of_rotation(cls, value: Rotation) -> "Datum":
        return cls(ValueType.QUATERNION, value)

    @classmethod
    def neutral(cls, value_type: ValueType) -> "Datum":
        """Zero, false, zero vector or identity rotation for a value type."""
        return cls(value_type, _NEUTRAL_VALUES[value_type])

    @classmethod
    def from_value(cls, value: Any) -> "Datum":
        """Tag a plain Python value by its shape.

        Raises:
            TypeError: If the value has no Datum representation
        """
        if isinstance(value, bool):
            return cls.of_bool(value)
        if isinstance(value, (int, float)):
            return cls.of_float(value)
        if isinstance(value, (tuple, list)) and len(value) == 3:
            return cls.of_vector(tuple(value))
        if isinstance(value, (tuple, list)) and len(value) == 4:
            return cls.of_rotation(tuple(value))
        raise TypeError(f"Unsupported datum value: {value!r}")

    @property
    def is_neutral(self) -> bool:
        return self.value == _NEUTRAL_VALUES[self.value_type]

    def to_dict(self) -> dict[str, Any]:
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {"type": self.value_type.value, "value": value}


_NEUTRAL_VALUES = {
    ValueType.FLOAT: 0.0,
    ValueType.BOOL: False,
    ValueType.VECTOR3: ZERO,
    ValueType.QUATERNION: IDENTITY,
}
