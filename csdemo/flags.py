"""Player movement flags, player info records and data-availability errors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag


class PlayerFlags(IntFlag):
    """The bits of a player's ``m_fFlags`` value.

    Fully ducked: ducking() and ducking_key_pressed().
    Unducking in progress: ducking() and not ducking_key_pressed().
    Fully unducked: neither.
    Ducking in progress: not ducking() and ducking_key_pressed().
    """

    ON_GROUND = 1 << 0
    DUCKING = 1 << 1
    ANIM_DUCKING = 1 << 2

    def get(self, flag: int) -> bool:
        """Return True if any bit of ``flag`` is set."""
        return (int(self) & int(flag)) != 0

    def on_ground(self) -> bool:
        """Return True if the player is touching the ground."""
        return self.get(PlayerFlags.ON_GROUND)

    def ducking(self) -> bool:
        """Return True if the player is or was fully crouched."""
        return self.get(PlayerFlags.DUCKING)

    def ducking_key_pressed(self) -> bool:
        """Return True if the player is holding the crouch key."""
        return self.get(PlayerFlags.ANIM_DUCKING)


@dataclass
class PlayerInfo:
    """Information about a player such as name and SteamID.

    Most fields other than ``xuid``, ``name``, ``is_fake_player`` and
    ``is_hltv`` are not available in newer demos.
    """

    version: int = 0
    xuid: int = 0
    name: str = ""
    user_id: int = 0
    guid: str = ""
    friends_id: int = 0
    friends_name: str = ""
    custom_files0: int = 0
    custom_files1: int = 0
    custom_files2: int = 0
    custom_files3: int = 0
    files_downloaded: int = 0
    is_fake_player: bool = False
    is_hltv: bool = False


class DataNotAvailableError(LookupError):
    """Some data is not available yet; reading it later during parsing may work."""


class NotSupportedByDemoError(LookupError):
    """The data is not supported by the demo, possibly because it is too old."""