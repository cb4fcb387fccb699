"""Entities, their properties and null-safe property accessors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .vector import Vector

_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1


class PropertyNotFoundError(KeyError):
    """Raised when an entity lacks a required property."""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class PropertyValue:
    """The decoded value of an entity property.

    Older demos fill the typed fields; newer demos store the value in ``raw``
    and set ``s2``.
    """

    vector_val: Vector = field(default_factory=Vector)
    int_val: int = 0
    float_val: float = 0.0
    string_val: str = ""
    raw: Any = None
    s2: bool = False

    def as_int(self) -> int:
        """Return the value as an integer."""
        if isinstance(self.raw, bool) or _is_number(self.raw):
            return int(self.raw)
        return self.int_val

    def as_float(self) -> float:
        """Return the value as a float."""
        if _is_number(self.raw):
            return float(self.raw)
        return self.float_val

    def as_string(self) -> str:
        """Return the value as a string."""
        if isinstance(self.raw, str):
            return self.raw
        return self.string_val

    def bool_val(self) -> bool:
        """Return the value as a boolean."""
        if isinstance(self.raw, bool):
            return self.raw
        if _is_number(self.raw):
            return self.raw != 0
        return self.int_val != 0

    def s2_uint64(self) -> int:
        """Return the value as an unsigned 64-bit integer."""
        if isinstance(self.raw, bool) or _is_number(self.raw):
            return int(self.raw) & _MASK64
        return self.int_val & _MASK64

    def s2_uint32(self) -> int:
        """Return the value as an unsigned 32-bit integer."""
        return self.s2_uint64() & _MASK32

    def handle(self) -> int:
        """Return the value as an entity handle."""
        if _is_number(self.raw):
            return int(self.raw) & _MASK64
        return self.int_val & _MASK64

    def r3_vec(self) -> Vector:
        """Return the value as a 3D vector."""
        if isinstance(self.raw, Vector):
            return self.raw
        if isinstance(self.raw, (list, tuple)) and len(self.raw) == 3:
            return Vector(*(float(c) for c in self.raw))
        return self.vector_val


@dataclass
class Property:
    """A named property of an entity."""

    name: str
    _value: PropertyValue

    def value(self) -> PropertyValue:
        """Return the current value of the property."""
        return self._value


@dataclass
class Entity:
    """A game entity with an id, a position and named properties."""

    entity_id: int
    origin: Vector = field(default_factory=Vector)
    properties: Dict[str, PropertyValue] = field(default_factory=dict)

    def id(self) -> int:
        """Return the entity id."""
        return self.entity_id

    def position(self) -> Vector:
        """Return the entity's position in world coordinates."""
        return self.origin

    def property(self, name: str) -> Optional[Property]:
        """Return the named property, or None if the entity has none."""
        value = self.properties.get(name)
        if value is None:
            return None
        return Property(name, value)

    def property_value(self, name: str) -> Optional[PropertyValue]:
        """Return the named property's value, or None if it does not exist."""
        return self.properties.get(name)

    def property_value_must(self, name: str) -> PropertyValue:
        """Return the named property's value, raising if it does not exist."""
        try:
            return self.properties[name]
        except KeyError:
            raise PropertyNotFoundError(
                f"property {name!r} not found on entity {self.entity_id}"
            ) from None


def get_int(entity: Optional[Entity], name: str) -> int:
    """Return an int property, or 0 if ``entity`` is None."""
    if entity is None:
        return 0
    return entity.property_value_must(name).as_int()


def get_uint64(entity: Optional[Entity], name: str) -> int:
    """Return an unsigned 64-bit property, or 0 if ``entity`` is None."""
    if entity is None:
        return 0
    return entity.property_value_must(name).s2_uint64()


def get_float(entity: Optional[Entity], name: str) -> float:
    """Return a float property, or 0.0 if ``entity`` is None."""
    if entity is None:
        return 0.0
    return entity.property_value_must(name).as_float()


def get_string(entity: Optional[Entity], name: str) -> str:
    """Return a string property, or "" if ``entity`` is None."""
    if entity is None:
        return ""
    return entity.property_value_must(name).as_string()


def get_bool(entity: Optional[Entity], name: str) -> bool:
    """Return a bool property, or False if ``entity`` is None."""
    if entity is None:
        return False
    return entity.property_value_must(name).bool_val()