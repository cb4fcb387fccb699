import io
import json
from unittest import mock

import pytest
from PIL import Image

from csdemo.mapmeta import (
    MapMetadata,
    get_map_metadata,
    get_map_radar,
    parse_map_metadata,
)

CACHE_DOC = json.dumps(
    {"de_cache": {"pos_x": "-2000", "pos_y": "3250", "scale": "5.5"}}
)


def test_parse_map_metadata():
    assert parse_map_metadata(CACHE_DOC, "de_cache") == MapMetadata(
        pos_x=-2000, pos_y=3250, scale=5.5
    )


def test_parse_map_metadata_numbers_and_mapping():
    doc = {"de_cache": {"pos_x": -2000, "pos_y": 3250, "scale": 5.5}}
    assert parse_map_metadata(doc, "de_cache") == parse_map_metadata(CACHE_DOC, "de_cache")


def test_parse_map_metadata_missing_entry():
    with pytest.raises(KeyError):
        parse_map_metadata(CACHE_DOC, "de_nuke")


def test_translate_origin_maps_to_zero():
    meta = MapMetadata(pos_x=-2000, pos_y=3250, scale=5.5)
    assert meta.translate(-2000, 3250) == (0, 0)


def test_translate_scale_is_scaled_translate():
    meta = MapMetadata(pos_x=-2000, pos_y=3250, scale=5.5)
    tx, ty = meta.translate(100.0, -400.0)
    assert meta.translate_scale(100.0, -400.0) == (tx / 5.5, ty / 5.5)


def test_get_map_metadata(monkeypatch):
    monkeypatch.setenv("CSDEMO_RADAR_BASE_URL", "http://localhost/overviews")
    with mock.patch(
        "urllib.request.urlopen", return_value=io.BytesIO(CACHE_DOC.encode())
    ) as urlopen:
        meta = get_map_metadata("de_cache", 1901448379)
    assert meta == MapMetadata(pos_x=-2000, pos_y=3250, scale=5.5)
    assert urlopen.call_args[0][0] == "http://localhost/overviews/de_cache/1901448379/info.json"


def test_get_map_radar(monkeypatch):
    monkeypatch.setenv("CSDEMO_RADAR_BASE_URL", "http://localhost/overviews")
    buf = io.BytesIO()
    Image.new("RGB", (8, 6), (10, 20, 30)).save(buf, format="PNG")
    with mock.patch("urllib.request.urlopen", return_value=io.BytesIO(buf.getvalue())):
        img = get_map_radar("de_cache", 1901448379)
    assert img.size == (8, 6)
    assert img.getpixel((0, 0)) == (10, 20, 30)


def test_get_map_metadata_without_server(monkeypatch):
    monkeypatch.delenv("CSDEMO_RADAR_BASE_URL", raising=False)
    with pytest.raises(RuntimeError):
        get_map_metadata("de_cache", 1)