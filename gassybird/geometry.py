"""Vectors, rectangles, convex polygons, sprites and random helpers."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Sequence, Union

MAX_POLYGON_VERTICES = 8
_LINEAR_SLOP = 0.005
_WELD_DISTANCE_SQ = (0.5 * _LINEAR_SLOP) ** 2


@dataclass(frozen=True)
class Vec2:
    """A two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def cross(self, other: Vec2) -> float:
        return self.x * other.y - self.y * other.x

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def __iter__(self):
        yield self.x
        yield self.y


PointLike = Union[Vec2, Sequence[float]]


def _as_vec(point: PointLike) -> Vec2:
    if isinstance(point, Vec2):
        return point
    x, y = point
    return Vec2(float(x), float(y))


@dataclass(frozen=True)
class IntRect:
    """An integer rectangle given by its top-left corner and size."""

    left: int
    top: int
    width: int
    height: int


@dataclass(frozen=True)
class Polygon:
    """A convex polygon whose vertices run counter-clockwise."""

    vertices: tuple[Vec2, ...]

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> Polygon:
        """Build the convex hull of the given points, in counter-clockwise order."""
        raw = [_as_vec(p) for p in points]
        if len(raw) > MAX_POLYGON_VERTICES:
            raise ValueError(f"a polygon has at most {MAX_POLYGON_VERTICES} vertices")

        unique: list[Vec2] = []
        for v in raw:
            if all((v - q).length_squared() >= _WELD_DISTANCE_SQ for q in unique):
                unique.append(v)
        if len(unique) < 3:
            raise ValueError("a polygon needs at least 3 distinct vertices")

        # start from the rightmost point, lowest on ties
        start = max(range(len(unique)), key=lambda k: (unique[k].x, -unique[k].y))

        hull: list[int] = []
        current = start
        while True:
            if len(hull) >= len(unique):
                raise ValueError("could not build a convex hull from the points")
            hull.append(current)
            candidate = 0
            for j in range(1, len(unique)):
                if candidate == current:
                    candidate = j
                    continue
                r = unique[candidate] - unique[current]
                v = unique[j] - unique[current]
                c = r.cross(v)
                if c < 0.0 or (c == 0.0 and v.length_squared() > r.length_squared()):
                    candidate = j
            current = candidate
            if current == start:
                break

        if len(hull) < 3:
            raise ValueError("the points are collinear")
        return cls(tuple(unique[k] for k in hull))

    def validate(self) -> bool:
        """Return True if the polygon is convex with counter-clockwise vertices."""
        count = len(self.vertices)
        if count < 3:
            return False
        for i, p in enumerate(self.vertices):
            following = (i + 1) % count
            edge = self.vertices[following] - p
            for j, other in enumerate(self.vertices):
                if j in (i, following):
                    continue
                if edge.cross(other - p) < 0.0:
                    return False
        return True


@dataclass
class Sprite:
    """The drawing state of a textured sprite."""

    texture: object = None
    texture_rect: IntRect = field(default_factory=lambda: IntRect(0, 0, 0, 0))
    origin: Vec2 = field(default_factory=Vec2)
    scale: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))
    position: Vec2 = field(default_factory=Vec2)

    def scale_by(self, fx: float, fy: float) -> None:
        """Multiply the current scale by the given factors."""
        self.scale = Vec2(self.scale.x * fx, self.scale.y * fy)


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random._inst  # shared module generator


def random_int(low: int, high: int, rng: random.Random | None = None) -> int:
    """Uniform integer in [low, high]."""
    return _rng(rng).randint(low, high)


def random_float(low: float, high: float, rng: random.Random | None = None) -> float:
    """Uniform float between low and high."""
    return _rng(rng).uniform(low, high)


def random_bool(rng: random.Random | None = None) -> bool:
    """A fair coin flip."""
    return random_int(0, 1, rng) == 0


def translate_polygon(polygon: Polygon, translation: Vec2) -> Polygon:
    """Return the polygon moved by the translation."""
    return Polygon(tuple(v + translation for v in polygon.vertices))


def scale_polygon(polygon: Polygon, scale: Vec2) -> Polygon:
    """Return the polygon scaled per axis, keeping counter-clockwise order."""
    scaled = tuple(Vec2(v.x * scale.x, v.y * scale.y) for v in polygon.vertices)
    if scale.x * scale.y < 0.0:
        result = Polygon.from_points(scaled)
    else:
        result = Polygon(scaled)
    if not result.validate():
        raise ValueError("scaling produced an invalid polygon")
    return result


def fit_polygon_to_sprite(polygon: Polygon, sprite: Sprite, meters_per_pixel: float) -> Polygon:
    """Map a polygon in normalised coordinates onto a sprite, in meters."""
    rect = sprite.texture_rect
    moved = translate_polygon(
        polygon,
        Vec2(
            -(sprite.origin.x / rect.width - 0.5),
            sprite.origin.y / rect.height - 0.5,
        ),
    )
    return scale_polygon(
        moved,
        Vec2(
            rect.width * sprite.scale.x * meters_per_pixel,
            rect.height * sprite.scale.y * meters_per_pixel,
        ),
    )