"""Infernos (fire areas) and the geometry of their fires."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial import ConvexHull

from .entity import Entity
from .vector import Point, Vector, bounding_center

_MASK64 = (1 << 64) - 1


@dataclass(frozen=True)
class Fire:
    """One fire of an inferno."""

    position: Vector
    is_burning: bool = False


@dataclass
class ConvexHull3D:
    """Vertices of a 3D convex hull and its triangular faces.

    Each face holds three indices into ``vertices``. Degenerate (flat,
    linear or single-point) input yields no faces.
    """

    vertices: List[Vector] = field(default_factory=list)
    faces: List[Tuple[int, int, int]] = field(default_factory=list)


def _cross(o: Sequence[float], a: Sequence[float], b: Sequence[float]) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def _hull_2d_indices(points: Sequence[Tuple[float, float]]) -> List[int]:
    """Return indices of the 2D convex hull corners, without collinear points."""
    first_index = {}
    for i, p in enumerate(points):
        first_index.setdefault((float(p[0]), float(p[1])), i)
    unique = sorted(first_index)
    if len(unique) < 3:
        return [first_index[p] for p in unique]

    def half(seq: Iterable[Tuple[float, float]]) -> List[Tuple[float, float]]:
        chain: List[Tuple[float, float]] = []
        for p in seq:
            while len(chain) >= 2 and _cross(chain[-2], chain[-1], p) <= 0:
                chain.pop()
            chain.append(p)
        return chain

    lower = half(unique)
    upper = half(reversed(unique))
    return [first_index[p] for p in lower[:-1] + upper[:-1]]


def _clockwise_cmp(center: Point):
    def less(a: Point, b: Point) -> bool:
        ax, ay = a.x - center.x, a.y - center.y
        bx, by = b.x - center.x, b.y - center.y
        if ax >= 0 and bx < 0:
            return True
        if ax < 0 and bx >= 0:
            return False
        if ax == 0 and bx == 0:
            if ay >= 0 or by >= 0:
                return a.y > b.y
            return b.y > a.y
        det = ax * by - bx * ay
        if det < 0:
            return True
        if det > 0:
            return False
        # same ray from the center: the farther point comes first
        return ax * ax + ay * ay > bx * bx + by * by

    def cmp(a: Point, b: Point) -> int:
        if less(a, b):
            return -1
        if less(b, a):
            return 1
        return 0

    return cmp


def sort_points_clockwise(points: Iterable[Point]) -> List[Point]:
    """Return the points sorted clockwise around their bounding-box center."""
    pts = list(points)
    return sorted(pts, key=cmp_to_key(_clockwise_cmp(bounding_center(pts))))


def _convex_hull_3d(points: Sequence[Vector]) -> ConvexHull3D:
    if not points:
        return ConvexHull3D()
    arr = np.unique(np.array([(p.x, p.y, p.z) for p in points], dtype=float), axis=0)
    centered = arr - arr.mean(axis=0)
    rank = int(np.linalg.matrix_rank(centered)) if len(arr) > 1 else 0

    if rank == 3:
        hull = ConvexHull(arr)
        order = [int(i) for i in hull.vertices]
        position = {idx: n for n, idx in enumerate(order)}
        faces = [tuple(position[int(i)] for i in simplex) for simplex in hull.simplices]
        return ConvexHull3D([Vector(*map(float, arr[i])) for i in order], faces)

    if rank == 0:
        indices = [0]
    else:
        _, _, vt = np.linalg.svd(centered)
        if rank == 1:
            proj = centered @ vt[0]
            indices = [int(np.argmin(proj)), int(np.argmax(proj))]
        else:
            coords = centered @ vt[:2].T
            indices = _hull_2d_indices([(float(x), float(y)) for x, y in coords])
    return ConvexHull3D([Vector(*map(float, arr[i])) for i in indices])


class Fires:
    """A collection of fires with hull helpers."""

    def __init__(self, fires: Iterable[Fire] = ()) -> None:
        self._fires: List[Fire] = list(fires)

    def __iter__(self) -> Iterator[Fire]:
        return iter(self._fires)

    def __len__(self) -> int:
        return len(self._fires)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fires):
            return NotImplemented
        return self._fires == other._fires

    def __repr__(self) -> str:
        return f"Fires({self._fires!r})"

    def active(self) -> Fires:
        """Return only the fires that are still burning."""
        return Fires(f for f in self._fires if f.is_burning)

    def as_list(self) -> List[Fire]:
        """Return the fires as a list."""
        return list(self._fires)

    def convex_hull_2d(self) -> List[Point]:
        """Return the corners of the 2D convex hull, sorted clockwise."""
        coords = [(f.position.x, f.position.y) for f in self._fires]
        corners = [Point(*coords[i]) for i in _hull_2d_indices(coords)]
        return sort_points_clockwise(corners)

    def convex_hull_3d(self) -> ConvexHull3D:
        """Return the 3D convex hull of all fires."""
        return _convex_hull_3d([f.position for f in self._fires])


class Inferno:
    """A fire area, including fires that have already gone out."""

    def __init__(
        self,
        demo_info_provider: Any,
        entity: Entity,
        thrower: Optional[Any] = None,
    ) -> None:
        self.entity = entity
        self._demo_info_provider = demo_info_provider
        self._thrower = thrower
        self._unique_id = random.getrandbits(63)

    def unique_id(self) -> int:
        """Return a random id that tells apart infernos sharing an entity id."""
        return self._unique_id

    def thrower(self) -> Optional[Any]:
        """Return the player who threw the grenade; None if unknown."""
        if self._thrower is not None:
            return self._thrower
        handle = self.entity.property("m_hOwnerEntity").value()
        provider = self._demo_info_provider
        if provider.is_source2():
            return provider.find_player_by_pawn_handle(handle.handle())
        return provider.find_player_by_handle(handle.as_int() & _MASK64)

    def fires(self) -> Fires:
        """Return all fires, burning and extinguished."""
        entity = self.entity
        origin = entity.position()
        count = entity.property_value_must("m_fireCount").as_int()
        width = 4 if self._demo_info_provider.is_source2() else 3

        def make(i: int) -> Fire:
            suffix = f"{i:0{width}d}"
            burning = entity.property_value_must("m_bFireIsBurning." + suffix).bool_val()
            prop = entity.property("m_firePositions." + suffix)
            if prop is not None:
                return Fire(prop.value().r3_vec(), burning)
            dx, dy, dz = (
                float(entity.property_value_must(f"m_fire{axis}Delta.{suffix}").as_int())
                for axis in "XYZ"
            )
            return Fire(origin + Vector(dx, dy, dz), burning)

        return Fires(make(i) for i in range(count))