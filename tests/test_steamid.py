import pytest

from csdemo.steamid import (
    convert_steam_id_32_to_64,
    convert_steam_id_64_to_32,
    convert_steam_id_txt_to_32,
)


def test_convert_steam_id_txt_to_32():
    assert convert_steam_id_txt_to_32("STEAM_0:1:26343269") == 52686539


@pytest.mark.parametrize(
    "steam_id", ["STEAM_0:1:a", "STEAM_0:b:21643603", "STEAM_0:b", "STEAM_0:-1:5"]
)
def test_convert_steam_id_txt_to_32_error(steam_id):
    with pytest.raises(ValueError):
        convert_steam_id_txt_to_32(steam_id)


def test_source2_format_matches_legacy_format():
    assert convert_steam_id_txt_to_32("[U:1:26343269]") == convert_steam_id_txt_to_32(
        "STEAM_0:1:26343269"
    )


def test_convert_steam_id_32_to_64():
    assert convert_steam_id_32_to_64(52686539) == 76561198012952267


def test_convert_steam_id_64_to_32():
    assert convert_steam_id_64_to_32(76561198012952267) == 52686539


@pytest.mark.parametrize("steam_id32", [0, 1, 52686539, 2**32 - 1])
def test_round_trip(steam_id32):
    assert convert_steam_id_64_to_32(convert_steam_id_32_to_64(steam_id32)) == steam_id32