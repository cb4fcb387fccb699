"""Hostages and their states."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

from .constants import INVALID_ENTITY_HANDLE_SOURCE2
from .entity import Entity, get_int, get_uint64
from .vector import Vector

_MASK64 = (1 << 64) - 1


class HostageState(IntEnum):
    """What is currently happening to a hostage."""

    IDLE = 0
    BEING_UNTIED = 1
    GETTING_PICKED_UP = 2
    BEING_CARRIED = 3
    FOLLOWING_PLAYER = 4
    GETTING_DROPPED = 5
    RESCUED = 6
    DEAD = 7


@dataclass(eq=False)
class Hostage:
    """A hostage entity."""

    demo_info_provider: Any
    entity: Optional[Entity] = None

    def position(self) -> Vector:
        """Return the hostage's position, or the origin without an entity."""
        if self.entity is None:
            return Vector()
        return self.entity.position()

    def state(self) -> HostageState:
        """Return the hostage's current state."""
        return HostageState(get_int(self.entity, "m_nHostageState"))

    def health(self) -> int:
        """Return the hostage's health points."""
        return get_int(self.entity, "m_iHealth")

    def leader(self) -> Optional[Any]:
        """Return the player the hostage follows, or None."""
        provider = self.demo_info_provider
        if provider.is_source2():
            handle = get_uint64(self.entity, "m_leader")
            if handle != INVALID_ENTITY_HANDLE_SOURCE2:
                return provider.find_player_by_pawn_handle(handle)
            return provider.find_player_by_pawn_handle(
                get_uint64(self.entity, "m_hHostageGrabber")
            )
        return provider.find_player_by_handle(get_int(self.entity, "m_leader") & _MASK64)