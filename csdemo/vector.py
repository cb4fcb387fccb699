"""Small immutable 2D and 3D vector types used for world coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Vector:
    """A point or direction in 3D world space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def scaled(self, factor: float) -> Vector:
        """Return this vector multiplied component-wise by ``factor``."""
        return Vector(self.x * factor, self.y * factor, self.z * factor)


@dataclass(frozen=True)
class Point:
    """A point in 2D space."""

    x: float = 0.0
    y: float = 0.0


def bounding_center(points: Iterable[Point]) -> Point:
    """Return the center of the axis-aligned bounding box of ``points``.

    An empty collection yields the origin.
    """
    pts = list(points)
    if not pts:
        return Point()
    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    return Point((min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2)