"""Demo header, grenade projectiles, the bomb and per-team state."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, List, Optional

from .entity import Entity, get_int, get_string, get_uint64
from .teams import Team
from .vector import Vector


@dataclass
class DemoHeader:
    """Information from a demo's header."""

    filestamp: str = ""
    protocol: int = 0
    network_protocol: int = 0
    server_name: str = ""
    client_name: str = ""
    map_name: str = ""
    game_directory: str = ""
    playback_time: timedelta = field(default_factory=timedelta)
    playback_ticks: int = 0
    playback_frames: int = 0
    signon_length: int = 0

    def frame_rate(self) -> float:
        """Return recorded frames per second; 0 for a corrupt header."""
        seconds = self.playback_time.total_seconds()
        if seconds == 0:
            return 0.0
        return self.playback_frames / seconds

    def frame_time(self) -> timedelta:
        """Return the duration of one frame; zero for a corrupt header."""
        if self.playback_frames == 0:
            return timedelta(0)
        return self.playback_time // self.playback_frames


@dataclass(frozen=True)
class TrajectoryEntry:
    """A grenade's location at a point in time."""

    position: Vector
    frame_id: int
    time: timedelta


@dataclass(eq=False)
class GrenadeProjectile:
    """A thrown grenade, tracked from the throw until it detonates."""

    entity: Optional[Entity] = None
    weapon_instance: Optional[Any] = None
    thrower: Optional[Any] = None
    owner: Optional[Any] = None
    trajectory: List[Vector] = field(default_factory=list)
    trajectory2: List[TrajectoryEntry] = field(default_factory=list)
    _unique_id: int = field(
        default_factory=lambda: random.getrandbits(63), init=False, repr=False
    )

    def position(self) -> Vector:
        """Return the projectile's current world position."""
        return self.entity.position()

    def velocity(self) -> Vector:
        """Return the projectile's velocity."""
        return self.entity.property_value_must("m_vecVelocity").vector_val

    def unique_id(self) -> int:
        """Return a random id that tells apart projectiles sharing an entity id."""
        return self._unique_id


@dataclass(eq=False)
class Bomb:
    """The bomb's last ground position and the player carrying it, if any."""

    last_on_ground_position: Vector = field(default_factory=Vector)
    carrier: Optional[Any] = None

    def position(self) -> Vector:
        """Return the carrier's position, or the last ground position."""
        if self.carrier is not None:
            return self.carrier.position()
        return self.last_on_ground_position


class TeamState:
    """A team's id, score, clan name, flag and members."""

    def __init__(
        self,
        team: Team,
        members_callback: Optional[Callable[[Team], List[Any]]],
        demo_info_provider: Any,
        entity: Optional[Entity] = None,
    ) -> None:
        self._team = team
        self._members_callback = members_callback
        self._demo_info_provider = demo_info_provider
        self.entity = entity
        self.opponent: Optional[TeamState] = None

    def _is_source2(self) -> bool:
        return bool(self._demo_info_provider.is_source2())

    def team(self) -> Team:
        """Return the side this state describes."""
        return self._team

    def id(self) -> int:
        """Return the team id, which stays the same after switching sides."""
        if self._is_source2():
            return get_uint64(self.entity, "m_iTeamNum")
        return get_int(self.entity, "m_iTeamNum")

    def score(self) -> int:
        """Return the team's current score."""
        prop = "m_iScore" if self._is_source2() else "m_scoreTotal"
        return get_int(self.entity, prop)

    def clan_name(self) -> str:
        """Return the team name."""
        return get_string(self.entity, "m_szClanTeamname")

    def flag(self) -> str:
        """Return the flag code; its case varies between demos."""
        return get_string(self.entity, "m_szTeamFlagImage")

    def members(self) -> List[Any]:
        """Return the players on the team."""
        return self._members_callback(self._team)

    def current_equipment_value(self) -> int:
        """Return the summed current equipment value of all members."""
        return sum(p.equipment_value_current() for p in self.members())

    def round_start_equipment_value(self) -> int:
        """Return the summed round-start equipment value of all members."""
        return sum(p.equipment_value_round_start() for p in self.members())

    def freeze_time_end_equipment_value(self) -> int:
        """Return the summed freeze-time-end equipment value of all members."""
        return sum(p.equipment_value_freeze_time_end() for p in self.members())

    def money_spent_this_round(self) -> int:
        """Return the money spent by the team in the current round."""
        return sum(p.money_spent_this_round() for p in self.members())

    def money_spent_total(self) -> int:
        """Return the money spent by the team during the whole game."""
        return sum(p.money_spent_total() for p in self.members())