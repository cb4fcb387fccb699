"""Map overview metadata for translating world to radar-image coordinates."""

from __future__ import annotations

import io
import json
import os
import urllib.request
from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

from PIL import Image

BASE_URL_ENV = "CSDEMO_RADAR_BASE_URL"


@dataclass(frozen=True)
class MapMetadata:
    """Offset and scale of a map's radar overview image."""

    pos_x: float
    pos_y: float
    scale: float

    def translate(self, x: float, y: float) -> Tuple[float, float]:
        """Translate world coordinates to coordinates relative to the overview's origin."""
        return x - self.pos_x, self.pos_y - y

    def translate_scale(self, x: float, y: float) -> Tuple[float, float]:
        """Translate and scale world coordinates to radar-image pixel coordinates."""
        tx, ty = self.translate(x, y)
        return tx / self.scale, ty / self.scale


def parse_map_metadata(
    data: Union[str, bytes, Mapping[str, Any]], name: str
) -> MapMetadata:
    """Extract the entry for map ``name`` from an info.json document.

    Raises KeyError if the document holds no entry for the map.
    """
    doc = json.loads(data) if isinstance(data, (str, bytes, bytearray)) else data
    try:
        entry = doc[name]
    except KeyError:
        raise KeyError(f"failed to get map info.json entry for {name!r}") from None
    return MapMetadata(
        pos_x=float(entry["pos_x"]),
        pos_y=float(entry["pos_y"]),
        scale=float(entry["scale"]),
    )


def _overview_url(name: str, crc: int, filename: str) -> str:
    base = os.environ.get(BASE_URL_ENV, "").rstrip("/")
    if not base:
        raise RuntimeError(f"no radar overview server configured; set {BASE_URL_ENV}")
    return f"{base}/{name}/{crc}/{filename}"


def _fetch(url: str) -> bytes:
    with urllib.request.urlopen(url) as response:
        return response.read()


def get_map_metadata(name: str, crc: int) -> MapMetadata:
    """Download and parse the metadata of a map version."""
    return parse_map_metadata(_fetch(_overview_url(name, crc, "info.json")), name)


def get_map_radar(name: str, crc: int) -> Image.Image:
    """Download the radar overview image of a map version."""
    img = Image.open(io.BytesIO(_fetch(_overview_url(name, crc, "radar.png"))))
    img.load()
    return img