"""Conversions between Steam-ID formats."""

from __future__ import annotations

import re

_STEAM_ID64_INDIVIDUAL_IDENTIFIER = 0x0110000100000000
_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1
_DIGITS = re.compile(r"[0-9]+")


def _parse_uint32(text: str) -> int:
    if not _DIGITS.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    value = int(text)
    if value > _MASK32:
        raise ValueError(f"value {text!r} out of range")
    return value


def convert_steam_id_txt_to_32(steam_id: str) -> int:
    """Convert a textual Steam-ID (STEAM_0:Y:Z or [U:1:Z]) to its 32-bit form.

    Raises ValueError if the text is not well formed.
    """
    if steam_id.endswith("]"):
        steam_id = steam_id[:-1]
    parts = steam_id.split(":")
    if len(parts) != 3:
        raise ValueError(f"SteamID '{steam_id}' not well formed")
    y = _parse_uint32(parts[1])
    z = _parse_uint32(parts[2])
    return ((z << 1) + y) & _MASK32


def convert_steam_id_32_to_64(steam_id32: int) -> int:
    """Convert a 32-bit Steam-ID to its 64-bit form."""
    return (_STEAM_ID64_INDIVIDUAL_IDENTIFIER + steam_id32) & _MASK64


def convert_steam_id_64_to_32(steam_id64: int) -> int:
    """Convert a 64-bit Steam-ID to its 32-bit form."""
    return (steam_id64 - _STEAM_ID64_INDIVIDUAL_IDENTIFIER) & _MASK32