"""Players and the demo-state interface they query for derived data."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Optional, Protocol

from .constants import (
    ENTITY_HANDLE_INDEX_MASK,
    ENTITY_HANDLE_INDEX_MASK_SOURCE2,
    INVALID_ENTITY_HANDLE,
    INVALID_ENTITY_HANDLE_SOURCE2,
)
from .entity import Entity, Property, get_bool, get_float, get_int, get_string, get_uint64
from .equipment import Equipment
from .flags import NotSupportedByDemoError, PlayerFlags
from .scoreboard import ScoreboardMixin
from .steamid import convert_steam_id_64_to_32
from .teams import Team
from .vector import Vector

_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1
# Newer demos don't network velocity; it is derived from positions at this rate.
_SOURCE2_VELOCITY_TICK_RATE = 64.0


class DemoInfoProvider(Protocol):
    """Demo state a player needs to answer queries about itself."""

    def ingame_tick(self) -> int:
        """Return the current in-game tick."""
        ...

    def tick_rate(self) -> float:
        """Return the in-game tick rate."""
        ...

    def find_player_by_handle(self, handle: int) -> Optional[Player]:
        """Return the player with the given controller handle."""
        ...

    def find_player_by_pawn_handle(self, handle: int) -> Optional[Player]:
        """Return the player with the given pawn handle."""
        ...

    def player_resource_entity(self) -> Optional[Entity]:
        """Return the player resource entity, if it exists yet."""
        ...

    def find_weapon_by_entity_id(self, entity_id: int) -> Optional[Equipment]:
        """Return the weapon with the given entity id."""
        ...

    def find_entity_by_handle(self, handle: int) -> Optional[Entity]:
        """Return the entity with the given handle."""
        ...

    def is_source2(self) -> bool:
        """Return True if the demo was recorded by the newer engine."""
        ...


@dataclass(eq=False)
class Player(ScoreboardMixin):
    """A player and its game-relevant state.

    ``entity`` may be None between death and re-spawn; ``entity_id`` usually
    matches the entity's id but may differ in that period.
    """

    demo_info_provider: Any
    steam_id64: int = 0
    last_alive_position: Vector = field(default_factory=Vector)
    user_id: int = 0
    name: str = ""
    inventory: Dict[int, Equipment] = field(default_factory=dict)
    ammo_left: List[int] = field(default_factory=lambda: [0] * 32)
    entity_id: int = 0
    entity: Optional[Entity] = None
    flash_duration: float = 0.0
    flash_tick: int = 0
    team_state: Optional[Any] = None
    team: Team = Team.UNASSIGNED
    is_bot: bool = False
    is_connected: bool = False
    is_defusing: bool = False
    is_planting: bool = False
    is_reloading: bool = False
    is_unknown: bool = False
    previous_frame_position: Vector = field(default_factory=Vector)

    def player_pawn_entity(self) -> Optional[Entity]:
        """Return the pawn entity controlled by this player, if any."""
        if self.entity is None:
            return None
        pawn = self.entity.property_value("m_hPawn")
        if pawn is None or pawn.handle() == INVALID_ENTITY_HANDLE_SOURCE2:
            return None
        player_pawn = self.entity.property_value("m_hPlayerPawn")
        if player_pawn is None:
            return None
        return self.demo_info_provider.find_entity_by_handle(player_pawn.handle())

    def _pawn_must(self) -> Entity:
        pawn = self.player_pawn_entity()
        if pawn is None:
            raise NotSupportedByDemoError("player has no pawn entity")
        return pawn

    def get_team(self) -> Team:
        """Return the team read from the player's pawn."""
        return Team(self._pawn_must().property_value_must("m_iTeamNum").s2_uint64())

    def get_flash_duration(self) -> float:
        """Return the flash duration read from the player's pawn."""
        return self._pawn_must().property_value_must("m_flFlashDuration").as_float()

    def __str__(self) -> str:
        return self.name

    def steam_id32(self) -> int:
        """Return the 32-bit variant of the player's Steam-ID."""
        return convert_steam_id_64_to_32(self.steam_id64)

    def is_alive(self) -> bool:
        """Return True if the player is alive."""
        if self.health() > 0:
            return True
        if self._is_source2():
            pawn = self.player_pawn_entity()
            if pawn is not None:
                return pawn.property_value_must("m_lifeState").s2_uint64() == 0
            return get_bool(self.entity, "m_bPawnIsAlive")
        return get_int(self.entity, "m_lifeState") == 0

    def is_blinded(self) -> bool:
        """Return True if the player is currently flashed."""
        return self.flash_duration_time_remaining() > timedelta(0)

    def is_airborne(self) -> bool:
        """Return True if the player is jumping or falling."""
        if self._is_source2():
            handle = get_uint64(self.player_pawn_entity(), "m_hGroundEntity")
            return handle == INVALID_ENTITY_HANDLE_SOURCE2
        if self.entity is None:
            return False
        prop = self.entity.property("m_hGroundEntity")
        return prop.value().int_val == INVALID_ENTITY_HANDLE

    def _flash_duration_time_full(self) -> timedelta:
        return timedelta(seconds=self.flash_duration)

    def flash_duration_time(self) -> timedelta:
        """Return the full blinding duration, or zero if not blinded."""
        if not self.is_blinded():
            return timedelta(0)
        return self._flash_duration_time_full()

    def flash_duration_time_remaining(self) -> timedelta:
        """Return the remaining blinding duration, or zero if not blinded."""
        tick_rate = self.demo_info_provider.tick_rate()
        if tick_rate == 0:
            return self._flash_duration_time_full()
        since = (self.demo_info_provider.ingame_tick() - self.flash_tick) / tick_rate
        remaining = self._flash_duration_time_full() - timedelta(seconds=since)
        return max(remaining, timedelta(0))

    def _active_weapon_id(self) -> int:
        if self._is_source2():
            pawn = self.player_pawn_entity()
            if pawn is None:
                return 0
            handle = pawn.property_value_must(
                "m_pWeaponServices.m_hActiveWeapon"
            ).s2_uint64()
            return handle & ENTITY_HANDLE_INDEX_MASK_SOURCE2
        return get_int(self.entity, "m_hActiveWeapon") & ENTITY_HANDLE_INDEX_MASK

    def active_weapon(self) -> Optional[Equipment]:
        """Return the currently equipped weapon, if any."""
        return self.demo_info_provider.find_weapon_by_entity_id(self._active_weapon_id())

    def weapons(self) -> List[Equipment]:
        """Return all weapons in the player's possession."""
        return list(self.inventory.values())

    def is_spotted_by(self, other: Player) -> bool:
        """Return True if ``other`` has spotted this player (not line of sight)."""
        if self.entity is None:
            return False
        bit = (other.entity_id - 1) & _MASK64
        source2 = self._is_source2()
        if bit < 32:
            suffix = "0000" if source2 else "000"
        else:
            bit -= 32
            suffix = "0001" if source2 else "001"
        holder = self.player_pawn_entity() if source2 else self.entity
        mask: Optional[Property] = holder.property("m_bSpottedByMask." + suffix)
        value = mask.value().s2_uint64() if source2 else mask.value().int_val
        return bit < 64 and ((value >> bit) & 1) != 0

    def has_spotted(self, other: Player) -> bool:
        """Return True if this player has spotted ``other``."""
        return other.is_spotted_by(self)

    def _pawn_or_entity_bool(self, prop: str) -> bool:
        if self._is_source2():
            return get_bool(self.player_pawn_entity(), prop)
        return get_bool(self.entity, prop)

    def is_in_bomb_zone(self) -> bool:
        """Return True if the player is in the bomb zone."""
        return self._pawn_or_entity_bool("m_bInBombZone")

    def is_in_buy_zone(self) -> bool:
        """Return True if the player is in the buy zone."""
        return self._pawn_or_entity_bool("m_bInBuyZone")

    def is_walking(self) -> bool:
        """Return True if the player is walking (sneaking)."""
        return self._pawn_or_entity_bool("m_bIsWalking")

    def is_scoped(self) -> bool:
        """Return True if the player is scoped in."""
        return self._pawn_or_entity_bool("m_bIsScoped")

    def is_ducking(self) -> bool:
        """Return True if the player is fully crouching."""
        flags = self.flags()
        if self._is_source2():
            return flags.ducking()
        return flags.ducking() and flags.ducking_key_pressed()

    def _duck_state(self) -> Optional[tuple]:
        pawn = self.player_pawn_entity()
        if pawn is None:
            return None
        amount = pawn.property_value_must("m_pMovementServices.m_flDuckAmount").as_float()
        wants = pawn.property_value_must("m_pMovementServices.m_bDesiresDuck").bool_val()
        return amount, wants

    def is_ducking_in_progress(self) -> bool:
        """Return True if the player is going from standing to crouched."""
        flags = self.flags()
        if self._is_source2():
            state = self._duck_state()
            if state is None:
                return False
            amount, wants = state
            return not flags.ducking() and wants and amount > 0
        return not flags.ducking() and flags.ducking_key_pressed()

    def is_un_ducking_in_progress(self) -> bool:
        """Return True if the player is going from crouched to standing."""
        flags = self.flags()
        if self._is_source2():
            state = self._duck_state()
            if state is None:
                return False
            amount, wants = state
            return not flags.ducking() and not wants and amount > 0
        return flags.ducking() and not flags.ducking_key_pressed()

    def is_standing(self) -> bool:
        """Return True if the player is fully upright."""
        flags = self.flags()
        return not flags.ducking() and not flags.ducking_key_pressed()

    def has_defuse_kit(self) -> bool:
        """Return True if the player carries a defuse kit."""
        if self._is_source2():
            return get_bool(self.player_pawn_entity(), "m_pItemServices.m_bHasDefuser")
        return get_bool(self.entity, "m_bHasDefuser")

    def has_helmet(self) -> bool:
        """Return True if the player wears head armor."""
        if self._is_source2():
            return get_bool(self.player_pawn_entity(), "m_pItemServices.m_bHasHelmet")
        return get_bool(self.entity, "m_bHasHelmet")

    def is_controlling_bot(self) -> bool:
        """Return True if the player is controlling a bot."""
        if self._is_source2():
            return get_bool(self.entity, "m_bControllingBot")
        return get_bool(self.entity, "m_bIsControllingBot")

    def controlled_bot(self) -> Optional[Player]:
        """Return the bot the player controls, or None."""
        if self.entity is None:
            return None
        if self._is_source2():
            handle = self.entity.property(
                "m_hOriginalControllerOfCurrentPawn"
            ).value().s2_uint64()
            return self.demo_info_provider.find_player_by_handle(handle)
        bot = self.entity.property("m_iControlledBotEntIndex").value().as_int()
        return self.demo_info_provider.find_player_by_handle(bot & _MASK64)

    def health(self) -> int:
        """Return the player's health points."""
        if self._is_source2():
            return get_int(self.player_pawn_entity(), "m_iHealth")
        return get_int(self.entity, "m_iHealth")

    def armor(self) -> int:
        """Return the player's armor points."""
        if self._is_source2():
            return get_int(self.player_pawn_entity(), "m_ArmorValue")
        return get_int(self.entity, "m_ArmorValue")

    def view_direction_x(self) -> float:
        """Return the yaw in degrees, 0 to 360."""
        if self._is_source2():
            pawn = self.player_pawn_entity()
            if pawn is None:
                return 0.0
            return pawn.property_value_must("m_angEyeAngles").r3_vec().y
        return get_float(self.entity, "m_angEyeAngles[1]")

    def view_direction_y(self) -> float:
        """Return the pitch in degrees, 270 to 90 (270 = -90)."""
        if self._is_source2():
            pawn = self.player_pawn_entity()
            if pawn is None:
                return 0.0
            return pawn.property_value_must("m_angEyeAngles").r3_vec().x
        return get_float(self.entity, "m_angEyeAngles[0]")

    def position(self) -> Vector:
        """Return the world position at the player's feet."""
        if self._is_source2():
            pawn = self.player_pawn_entity()
            return pawn.position() if pawn is not None else Vector()
        if self.entity is None:
            return Vector()
        return self.entity.position()

    def position_eyes(self) -> Vector:
        """Return the position with Z at eye height.

        Raises NotSupportedByDemoError for newer demos.
        """
        if self._is_source2():
            raise NotSupportedByDemoError(
                "position_eyes() is not supported for Source 2 demos"
            )
        if self.entity is None:
            return Vector()
        offset = self.entity.property_value_must("localdata.m_vecViewOffset[2]").as_float()
        return self.position() + Vector(0.0, 0.0, offset)

    def velocity(self) -> Vector:
        """Return the player's velocity."""
        if self._is_source2():
            diff = self.position() - self.previous_frame_position
            return diff.scaled(_SOURCE2_VELOCITY_TICK_RATE)
        if self.entity is None:
            return Vector()
        x, y, z = (
            self.entity.property_value_must(f"localdata.m_vecVelocity[{i}]").float_val
            for i in range(3)
        )
        return Vector(float(x), float(y), float(z))

    def flags(self) -> PlayerFlags:
        """Return the flags currently set on ``m_fFlags``."""
        if self._is_source2():
            raw = get_uint64(self.player_pawn_entity(), "m_fFlags")
        else:
            raw = get_int(self.entity, "m_fFlags")
        return PlayerFlags(raw & _MASK32)

    def last_place_name(self) -> str:
        """Return the name of the player's last known place."""
        if self._is_source2():
            return get_string(self.player_pawn_entity(), "m_szLastPlaceName")
        return get_string(self.entity, "m_szLastPlaceName")

    def is_grabbing_hostage(self) -> bool:
        """Return True if the player is grabbing a hostage."""
        return self._pawn_or_entity_bool("m_bIsGrabbingHostage")