"""Team and minimap-colour identifiers."""

from __future__ import annotations

from enum import IntEnum


class Team(IntEnum):
    """Which team a player is on."""

    UNASSIGNED = 0
    SPECTATORS = 1
    TERRORISTS = 2
    COUNTER_TERRORISTS = 3


class Color(IntEnum):
    """A player's colour on the minimap."""

    Grey = -1
    Yellow = 0
    Purple = 1
    Green = 2
    Blue = 3
    Orange = 4

    @classmethod
    def _missing_(cls, value: object) -> Color | None:
        if not isinstance(value, int) or isinstance(value, bool):
            return None
        member = int.__new__(cls, value)
        member._name_ = None
        member._value_ = value
        return member

    def __str__(self) -> str:
        return self._name_ or "Unknown-Color"