"""Weapons and other equipment, their types, classes and name mappings."""

from __future__ import annotations

import random
import secrets
import threading
import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional

from .entity import Entity, PropertyValue


class EquipmentClass(IntEnum):
    """Broad category of a piece of equipment (pistol, SMG, rifle etc.)."""

    UNKNOWN = 0
    PISTOLS = 1
    SMG = 2
    HEAVY = 3
    RIFLE = 4
    EQUIPMENT = 5
    GRENADE = 6


class EquipmentType(IntEnum):
    """The kind of weapon or item; ``(type + 99) // 100`` is its class."""

    UNKNOWN = 0

    # Pistols
    P2000 = 1
    GLOCK = 2
    P250 = 3
    DEAGLE = 4
    FIVE_SEVEN = 5
    DUAL_BERETTAS = 6
    TEC9 = 7
    CZ = 8
    USP = 9
    REVOLVER = 10

    # SMGs
    MP7 = 101
    MP9 = 102
    BIZON = 103
    MAC10 = 104
    UMP = 105
    P90 = 106
    MP5 = 107

    # Heavy
    SAWED_OFF = 201
    NOVA = 202
    MAG7 = 203
    SWAG7 = 203
    XM1014 = 204
    M249 = 205
    NEGEV = 206

    # Rifles
    GALIL = 301
    FAMAS = 302
    AK47 = 303
    M4A4 = 304
    M4A1 = 305
    SCOUT = 306
    SSG08 = 306
    SG556 = 307
    SG553 = 307
    AUG = 308
    AWP = 309
    SCAR20 = 310
    G3SG1 = 311

    # Equipment
    ZEUS = 401
    KEVLAR = 402
    HELMET = 403
    BOMB = 404
    KNIFE = 405
    DEFUSE_KIT = 406
    WORLD = 407
    ZONE_REPULSOR = 408
    SHIELD = 409
    HEAVY_ASSAULT_SUIT = 410
    NIGHT_VISION = 411
    HEALTH_SHOT = 412
    TACTICAL_AWARENESS_GRENADE = 413
    FISTS = 414
    BREACH_CHARGE = 415
    TABLET = 416
    AXE = 417
    HAMMER = 418
    WRENCH = 419
    SNOWBALL = 420
    BUMP_MINE = 421

    # Grenades
    DECOY = 501
    MOLOTOV = 502
    INCENDIARY = 503
    FLASH = 504
    SMOKE = 505
    HE = 506

    def equipment_class(self) -> EquipmentClass:
        """Return the class of the equipment, e.g. pistol, SMG or heavy."""
        return EquipmentClass((int(self) + 99) // 100)

    def __str__(self) -> str:
        return _TYPE_NAMES.get(self, "")


class ZoomLevel(IntEnum):
    """How far a player is zoomed in with a scoped weapon."""

    NONE = 0
    HALF = 1
    FULL = 2

    @classmethod
    def _missing_(cls, value: object) -> Optional[ZoomLevel]:
        if not isinstance(value, int) or isinstance(value, bool):
            return None
        member = int.__new__(cls, value)
        member._name_ = None
        member._value_ = value
        return member


_ET = EquipmentType

# Order matters: the first name that is a prefix or suffix wins.
_NAME_TO_TYPE: Dict[str, EquipmentType] = {
    "ak47": _ET.AK47,
    "aug": _ET.AUG,
    "awp": _ET.AWP,
    "bizon": _ET.BIZON,
    "c4": _ET.BOMB,
    "planted_c4": _ET.BOMB,
    "deagle": _ET.DEAGLE,
    "decoy": _ET.DECOY,
    "decoygrenade": _ET.DECOY,
    "decoyprojectile": _ET.DECOY,
    "decoy_projectile": _ET.DECOY,
    "elite": _ET.DUAL_BERETTAS,
    "famas": _ET.FAMAS,
    "fiveseven": _ET.FIVE_SEVEN,
    "flashbang": _ET.FLASH,
    "g3sg1": _ET.G3SG1,
    "galil": _ET.GALIL,
    "galilar": _ET.GALIL,
    "glock": _ET.GLOCK,
    "hegrenade": _ET.HE,
    "hkp2000": _ET.P2000,
    "incgrenade": _ET.INCENDIARY,
    "incendiarygrenade": _ET.INCENDIARY,
    "m249": _ET.M249,
    "m4a1": _ET.M4A4,
    "mac10": _ET.MAC10,
    "mag7": _ET.SWAG7,
    "molotov": _ET.MOLOTOV,
    "molotovgrenade": _ET.MOLOTOV,
    "molotovprojectile": _ET.MOLOTOV,
    "molotov_projectile": _ET.MOLOTOV,
    "mp7": _ET.MP7,
    "mp5sd": _ET.MP5,
    "mp9": _ET.MP9,
    "negev": _ET.NEGEV,
    "nova": _ET.NOVA,
    "p250": _ET.P250,
    "p90": _ET.P90,
    "sawedoff": _ET.SAWED_OFF,
    "scar20": _ET.SCAR20,
    "sg556": _ET.SG556,
    "smokegrenade": _ET.SMOKE,
    "smokegrenadeprojectile": _ET.SMOKE,
    "smokegrenade_projectile": _ET.SMOKE,
    "ssg08": _ET.SCOUT,
    "taser": _ET.ZEUS,
    "tec9": _ET.TEC9,
    "ump45": _ET.UMP,
    "xm1014": _ET.XM1014,
    "m4a1_silencer": _ET.M4A1,
    "m4a1_silencer_off": _ET.M4A1,
    "cz75a": _ET.CZ,
    "usp": _ET.USP,
    "usp_silencer": _ET.USP,
    "usp_silencer_off": _ET.USP,
    "world": _ET.WORLD,
    "inferno": _ET.INCENDIARY,
    "revolver": _ET.REVOLVER,
    "vest": _ET.KEVLAR,
    "vesthelm": _ET.HELMET,
    "defuser": _ET.DEFUSE_KIT,
    # These don't exist or used to crash the game with the give command
    "scar17": _ET.UNKNOWN,
    "sensorgrenade": _ET.UNKNOWN,
    "mp5navy": _ET.UNKNOWN,
    "p228": _ET.UNKNOWN,
    "scout": _ET.UNKNOWN,
    "sg550": _ET.UNKNOWN,
    "sg552": _ET.UNKNOWN,
    "tmp": _ET.UNKNOWN,
    "worldspawn": _ET.WORLD,
}

_TYPE_NAMES: Dict[EquipmentType, str] = {
    _ET.AK47: "AK-47",
    _ET.AUG: "AUG",
    _ET.AWP: "AWP",
    _ET.BIZON: "PP-Bizon",
    _ET.BOMB: "C4",
    _ET.DEAGLE: "Desert Eagle",
    _ET.DECOY: "Decoy Grenade",
    _ET.DUAL_BERETTAS: "Dual Berettas",
    _ET.FAMAS: "FAMAS",
    _ET.FIVE_SEVEN: "Five-SeveN",
    _ET.FLASH: "Flashbang",
    _ET.G3SG1: "G3SG1",
    _ET.GALIL: "Galil AR",
    _ET.GLOCK: "Glock-18",
    _ET.HE: "HE Grenade",
    _ET.P2000: "P2000",
    _ET.INCENDIARY: "Incendiary Grenade",
    _ET.M249: "M249",
    _ET.M4A4: "M4A4",
    _ET.MAC10: "MAC-10",
    _ET.SWAG7: "MAG-7",
    _ET.MOLOTOV: "Molotov",
    _ET.MP7: "MP7",
    _ET.MP5: "MP5-SD",
    _ET.MP9: "MP9",
    _ET.NEGEV: "Negev",
    _ET.NOVA: "Nova",
    _ET.P250: "P250",
    _ET.P90: "P90",
    _ET.SAWED_OFF: "Sawed-Off",
    _ET.SCAR20: "SCAR-20",
    _ET.SG553: "SG 553",
    _ET.SMOKE: "Smoke Grenade",
    _ET.SCOUT: "SSG 08",
    _ET.ZEUS: "Zeus x27",
    _ET.TEC9: "Tec-9",
    _ET.UMP: "UMP-45",
    _ET.XM1014: "XM1014",
    _ET.M4A1: "M4A1",
    _ET.CZ: "CZ75 Auto",
    _ET.USP: "USP-S",
    _ET.WORLD: "World",
    _ET.REVOLVER: "R8 Revolver",
    _ET.KEVLAR: "Kevlar Vest",
    _ET.HELMET: "Kevlar + Helmet",
    _ET.DEFUSE_KIT: "Defuse Kit",
    _ET.KNIFE: "Knife",
    _ET.UNKNOWN: "UNKNOWN",
}

_WEAPON_PREFIX = "weapon_"


def map_equipment(eq_name: str) -> EquipmentType:
    """Map a weapon or item name to its type; unknown names give UNKNOWN."""
    if eq_name.startswith(_WEAPON_PREFIX):
        eq_name = eq_name[len(_WEAPON_PREFIX):]

    if "knife" in eq_name or "bayonet" in eq_name:
        return EquipmentType.KNIFE
    if eq_name.startswith("m4a1_silencer"):
        return EquipmentType.M4A1
    if eq_name.startswith("vesthelm"):
        return EquipmentType.HELMET

    return next(
        (
            wep
            for name, wep in _NAME_TO_TYPE.items()
            if eq_name.startswith(name) or eq_name.endswith(name)
        ),
        EquipmentType.UNKNOWN,
    )


_EQUIPMENT_TO_ALTERNATIVE: Dict[EquipmentType, EquipmentType] = {
    _ET.P2000: _ET.USP,
    _ET.P250: _ET.CZ,  # old demos, where the CZ replaced the P250
    _ET.FIVE_SEVEN: _ET.CZ,
    _ET.TEC9: _ET.CZ,
    _ET.DEAGLE: _ET.REVOLVER,
    _ET.MP7: _ET.MP5,
    _ET.M4A4: _ET.M4A1,
}


def equipment_alternative(eq: EquipmentType) -> EquipmentType:
    """Return the alternatively equippable weapon, or UNKNOWN if there is none.

    Works one way only (default to alternative).
    """
    return _EQUIPMENT_TO_ALTERNATIVE.get(eq, EquipmentType.UNKNOWN)


# Item definition indexes, as listed in the game's items_game.txt.
EQUIPMENT_INDEX_MAPPING: Dict[int, EquipmentType] = {
    1: _ET.DEAGLE,
    2: _ET.DUAL_BERETTAS,
    3: _ET.FIVE_SEVEN,
    4: _ET.GLOCK,
    7: _ET.AK47,
    8: _ET.AUG,
    9: _ET.AWP,
    10: _ET.FAMAS,
    11: _ET.G3SG1,
    13: _ET.GALIL,
    14: _ET.M249,
    16: _ET.M4A4,
    17: _ET.MAC10,
    19: _ET.P90,
    20: _ET.ZONE_REPULSOR,
    23: _ET.MP5,
    24: _ET.UMP,
    25: _ET.XM1014,
    26: _ET.BIZON,
    27: _ET.MAG7,
    28: _ET.NEGEV,
    29: _ET.SAWED_OFF,
    30: _ET.TEC9,
    31: _ET.ZEUS,
    32: _ET.P2000,
    33: _ET.MP7,
    34: _ET.MP9,
    35: _ET.NOVA,
    36: _ET.P250,
    37: _ET.SHIELD,
    38: _ET.SCAR20,
    39: _ET.SG556,
    40: _ET.SSG08,
    41: _ET.KNIFE,
    42: _ET.KNIFE,
    43: _ET.FLASH,
    44: _ET.HE,
    45: _ET.SMOKE,
    46: _ET.MOLOTOV,
    47: _ET.DECOY,
    48: _ET.INCENDIARY,
    49: _ET.BOMB,
    50: _ET.KEVLAR,
    51: _ET.HELMET,
    52: _ET.HEAVY_ASSAULT_SUIT,
    54: _ET.NIGHT_VISION,
    55: _ET.DEFUSE_KIT,
    56: _ET.DEFUSE_KIT,
    57: _ET.HEALTH_SHOT,
    59: _ET.KNIFE,
    60: _ET.M4A1,
    61: _ET.USP,
    63: _ET.CZ,
    64: _ET.REVOLVER,
    68: _ET.TACTICAL_AWARENESS_GRENADE,
    69: _ET.FISTS,
    70: _ET.BREACH_CHARGE,
    72: _ET.TABLET,
    74: _ET.FISTS,
    75: _ET.AXE,
    76: _ET.HAMMER,
    78: _ET.WRENCH,
    80: _ET.KNIFE,
    81: _ET.BOMB,
    82: _ET.DECOY,
    83: _ET.HE,
    84: _ET.SNOWBALL,
    85: _ET.BUMP_MINE,
    500: _ET.KNIFE,
    503: _ET.KNIFE,
    505: _ET.KNIFE,
    506: _ET.KNIFE,
    507: _ET.KNIFE,
    508: _ET.KNIFE,
    509: _ET.KNIFE,
    512: _ET.KNIFE,
    514: _ET.KNIFE,
    515: _ET.KNIFE,
    516: _ET.KNIFE,
    517: _ET.KNIFE,
    518: _ET.KNIFE,
    519: _ET.KNIFE,
    520: _ET.KNIFE,
    521: _ET.KNIFE,
    522: _ET.KNIFE,
    523: _ET.KNIFE,
    525: _ET.KNIFE,
}


_CROCKFORD = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
_RANDOM_BITS = 80
_ulid_lock = threading.Lock()
_ulid_last_ms = -1
_ulid_last_rand = 0


def _make_ulid() -> str:
    """Return a new lexicographically sortable, monotonic 26-character ULID."""
    global _ulid_last_ms, _ulid_last_rand
    with _ulid_lock:
        ms = time.time_ns() // 1_000_000
        if ms <= _ulid_last_ms:
            ms = _ulid_last_ms
            rand = _ulid_last_rand + 1
            if rand >= 1 << _RANDOM_BITS:
                ms += 1
                rand = secrets.randbits(_RANDOM_BITS)
        else:
            rand = secrets.randbits(_RANDOM_BITS)
        _ulid_last_ms, _ulid_last_rand = ms, rand
    value = ((ms & ((1 << 48) - 1)) << _RANDOM_BITS) | rand
    chars = [_CROCKFORD[(value >> (5 * i)) & 31] for i in range(26)]
    return "".join(reversed(chars))


@dataclass(eq=False)
class Equipment:
    """A weapon or piece of equipment, possibly carried by a player.

    ``owner`` is the player carrying it (not necessarily the buyer).
    ``original_string`` holds the model path used to tell alternative weapons
    apart in older demos.
    """

    type: EquipmentType
    entity: Optional[Entity] = None
    owner: Optional[Any] = None
    original_string: str = ""
    _unique_id: int = field(
        default_factory=lambda: random.getrandbits(63), init=False, repr=False
    )
    _unique_id2: str = field(default_factory=_make_ulid, init=False, repr=False)

    def __str__(self) -> str:
        return str(self.type)

    def equipment_class(self) -> EquipmentClass:
        """Return the class of the equipment."""
        return self.type.equipment_class()

    def unique_id(self) -> int:
        """Return a random 63-bit id; collisions are possible, prefer unique_id2."""
        return self._unique_id

    def unique_id2(self) -> str:
        """Return a unique, sortable id for this equipment instance."""
        return self._unique_id2

    def ammo_in_magazine(self) -> int:
        """Return the ammo left in the magazine.

        Grenades and equipment always give 1, a missing entity 0 and a
        missing clip property -1.
        """
        if self.equipment_class() in (EquipmentClass.GRENADE, EquipmentClass.EQUIPMENT):
            return 1
        if self.entity is None:
            return 0
        val = self.entity.property_value("m_iClip1")
        if val is None:
            return -1
        if val.s2:
            return val.s2_uint32()
        # m_iClip1 is the number of bullets plus one in older demos
        return val.as_int() - 1

    def ammo_type(self) -> int:
        """Return the weapon's ammo type; 0 if unavailable."""
        if self.entity is None:
            return 0
        value = self.entity.property_value("LocalWeaponData.m_iPrimaryAmmoType")
        if value is None:
            return 0
        return value.as_int()

    def zoom_level(self) -> ZoomLevel:
        """Return how far the player has zoomed in with this weapon."""
        if self.entity is None:
            return ZoomLevel.NONE
        value = self.entity.property_value("m_zoomLevel")
        if value is None:
            return ZoomLevel.NONE
        return ZoomLevel(value.as_int())

    def ammo_reserve(self) -> int:
        """Return the ammo available for reloading.

        For grenades this is the owner's remaining ammo of the grenade's
        ammo type minus the one in the 'magazine'.
        """
        if self.entity is None:
            return 0

        s2_prop = self.entity.property("m_pReserveAmmo.0000")
        if s2_prop is not None:
            return s2_prop.value().as_int()

        if self.equipment_class() is EquipmentClass.GRENADE:
            if self.owner is not None:
                return self.owner.ammo_left[self.ammo_type()] - 1
            return 0

        val = self.entity.property_value("m_iPrimaryReserveAmmoCount")
        return val.int_val if val is not None else 0

    def recoil_index(self) -> float:
        """Return the weapon's recoil index; 0 if unavailable."""
        if self.entity is None:
            return 0.0
        val = self.entity.property_value("m_flRecoilIndex") or PropertyValue()
        return val.as_float()

    def silenced(self) -> bool:
        """Return True if the weapon's silencer is on."""
        if self.entity is None:
            return False
        return self.entity.property_value_must("m_bSilencerOn").bool_val()