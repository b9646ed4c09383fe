"""Named game resources: textures, sprites, fonts and hitbox polygons."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, TypeVar

from gassybird.geometry import IntRect, PointLike, Polygon, Sprite

DEFAULT_DATA_DIR = Path("..") / "data"


@dataclass(frozen=True)
class Texture:
    """An image file used as a texture."""

    path: Path


@dataclass(frozen=True)
class Font:
    """A font file."""

    path: Path


class Resource:
    """Base class of everything stored in a ResourceCache."""


@dataclass(frozen=True)
class TextureResource(Resource):
    """Holds a texture."""

    texture: Texture


@dataclass(frozen=True)
class SpriteResource(Resource):
    """A sprite with its animation frames and the scale it is drawn at.

    A sprite that is not animated has exactly one texture rectangle.
    """

    sprite: Sprite
    texture_rects: tuple[IntRect, ...]
    scale_factor: float


@dataclass(frozen=True)
class FontResource(Resource):
    """Holds a font."""

    font: Font


@dataclass(frozen=True)
class PolygonResource(Resource):
    """Holds a convex hitbox polygon in normalised coordinates."""

    polygon: Polygon


R = TypeVar("R", bound=Resource)


def _octagon() -> list[tuple[float, float]]:
    return [
        (0.5 * math.cos(k * 0.25 * math.pi), 0.5 * math.sin(k * 0.25 * math.pi))
        for k in range(8)
    ]


def _lifeguard(px: float, py: float) -> tuple[float, float]:
    # pixel coordinates in the 109x56 lifeguard texture to normalised coordinates
    return ((px + 0.5) / 109.0 - 0.5, (py + 0.5) / -56.0 + 0.5)


class ResourceCache:
    """Stores resources by identifier.

    ``native_width`` is the horizontal resolution the game is drawn at; the
    beach background is scaled to span it.
    """

    def __init__(self, native_width: float, data_dir: Path | str = DEFAULT_DATA_DIR) -> None:
        self.native_width = float(native_width)
        self.data_dir = Path(data_dir)
        self._resources: dict[str, Resource] = {}
        self.loaded = False

    def __contains__(self, resource_id: object) -> bool:
        return resource_id in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self):
        return iter(self._resources)

    def get(self, resource_id: str, kind: type[R]) -> R:
        """Return the resource with the given id, which must be of the given kind."""
        try:
            resource = self._resources[resource_id]
        except KeyError:
            raise KeyError(f"no resource named {resource_id!r}") from None
        if not isinstance(resource, kind):
            raise TypeError(
                f"resource {resource_id!r} is a {type(resource).__name__}, "
                f"not a {kind.__name__}"
            )
        return resource

    def _store(self, resource_id: str, resource: Resource) -> None:
        if resource_id in self._resources:
            raise ValueError(f"a resource named {resource_id!r} already exists")
        self._resources[resource_id] = resource

    def load_texture(self, resource_id: str, filename: Path | str) -> TextureResource:
        """Register a texture read from the given file."""
        resource = TextureResource(Texture(Path(filename)))
        self._store(resource_id, resource)
        return resource

    def load_sprite(
        self,
        resource_id: str,
        texture: TextureResource,
        texture_rects: Iterable[IntRect],
        scale_factor: float,
    ) -> SpriteResource:
        """Register a sprite showing the first of its texture rectangles."""
        rects = tuple(texture_rects)
        if not rects:
            raise ValueError("a sprite needs at least one texture rectangle")
        sprite = Sprite(texture=texture.texture, texture_rect=rects[0])
        resource = SpriteResource(sprite, rects, float(scale_factor))
        self._store(resource_id, resource)
        return resource

    def load_font(self, resource_id: str, filename: Path | str) -> FontResource:
        """Register a font read from the given file."""
        resource = FontResource(Font(Path(filename)))
        self._store(resource_id, resource)
        return resource

    def load_polygon(self, resource_id: str, vertices: Sequence[PointLike]) -> PolygonResource:
        """Register a convex polygon built from at least three vertices."""
        if len(vertices) < 3:
            raise ValueError("a polygon needs at least 3 vertices")
        polygon = Polygon.from_points(vertices)
        if not polygon.validate():
            raise ValueError(f"polygon {resource_id!r} is not convex")
        resource = PolygonResource(polygon)
        self._store(resource_id, resource)
        return resource

    def load(self) -> None:
        """Register every resource the game uses."""
        self.loaded = True
        self._load_textures()
        self._load_sprites()
        self.load_font("ARCADE_FONT", self.data_dir / "ARCADECLASSIC.ttf")
        self.load_font("JOYSTIX_FONT", self.data_dir / "joystix.monospace.ttf")
        self._load_polygons()

    def _load_textures(self) -> None:
        textures = {
            "BIRD_TEXTURE": "bird_texture.png",
            "TITLE_LOGO_TEXTURE": "GBLogoWarpedNoFill.png",
            "BEACH_BACKGROUND_TEXTURE": "beach-background-redone.png",
            "CIRCLE_INDICATOR_TEXTURE": "circle-indicator.png",
            "STREETLIGHT_TEXTURE": "streetlight_texture.png",
            "GROUND_TEXTURE": "simple-sand2.png",
            "NPC_MALE_TEXTURE": "NPC_man.png",
            "NPC_FEMALE_TEXTURE": "NPC_woman.png",
            "TREE_TEXTURE": "tree_texture.png",
            "CLOUD_TEXTURE": "cloud_texture.png",
            "POOP_TEXTURE": "poop_texture.png",
            "POOP_SPLATTER_TEXTURE": "poop_splatter_texture.png",
            "ROCK_TEXTURE": "rock.png",
            "LIFEGUARD_TEXTURE": "lifeguard.png",
            "DOCKS_TEXTURE": "docks.png",
            "UMBRELLA_STATIC_TEXTURE": "umbrella_static_texture.png",
        }
        for resource_id, filename in textures.items():
            self.load_texture(resource_id, self.data_dir / filename)

    def _sprite(self, resource_id: str, texture_id: str, rects, scale_factor: float) -> None:
        texture = self.get(texture_id, TextureResource)
        self.load_sprite(resource_id, texture, [IntRect(*r) for r in rects], scale_factor)

    def _load_sprites(self) -> None:
        # bird frames: row 0 standing/dead, row 1 flying mouth closed, row 2 mouth open
        bird_rects = [(x, y, 16, 16) for y in (0, 16, 32) for x in (0, 16, 32, 48, 64)]
        self._sprite("BIRD_SPRITE", "BIRD_TEXTURE", bird_rects, 50.0 / 16)
        self._sprite(
            "BEACH_BACKGROUND_SPRITE",
            "BEACH_BACKGROUND_TEXTURE",
            [(0, 0, 200, 100)],
            self.native_width / 200.0,
        )
        self._sprite("TITLE_LOGO_SPRITE", "TITLE_LOGO_TEXTURE", [(0, 0, 216, 176)], 2.0)
        self._sprite(
            "CIRCLE_INDICATOR_SPRITE",
            "CIRCLE_INDICATOR_TEXTURE",
            [(0, 0, 8, 8), (8, 0, 8, 8)],  # filled, empty
            4.0,
        )
        self._sprite("GROUND_SPRITE", "GROUND_TEXTURE", [(0, 0, 194, 32)], 2.0)
        # a transparent section of the bird texture
        self._sprite("BIG_GROUND_SPRITE", "BIRD_TEXTURE", [(1, 1, 1, 1)], 1.0)
        self._sprite(
            "STREETLIGHT_SPRITE",
            "STREETLIGHT_TEXTURE",
            [(0, 16, 26, 7), (9, 9, 8, 7), (9, 0, 40, 9)],  # base, shaft, top
            3.5,
        )
        self._sprite("POOP_SPRITE", "POOP_TEXTURE", [(0, 0, 31, 41)], 0.5)
        self._sprite("SPLATTER_SPRITE", "POOP_SPLATTER_TEXTURE", [(2, 12, 43, 9)], 0.75)
        # idle frames 0-3, walk frames 4-9, throw frames 10-15
        npc_rects = [(x, y, 32, 48) for y in (0, 48, 96, 144) for x in (0, 32, 64, 96)]
        self._sprite("NPC_MALE_SPRITE", "NPC_MALE_TEXTURE", npc_rects, 3.5)
        self.load_sprite(
            "NPC_FEMALE_SPRITE",
            self.get("NPC_FEMALE_TEXTURE", TextureResource),
            self.get("NPC_MALE_SPRITE", SpriteResource).texture_rects,
            3.5,
        )
        self._sprite(
            "TREE_SPRITE",
            "TREE_TEXTURE",
            [(38, 65, 25, 9), (46, 49, 19, 12), (3, 13, 72, 31)],
            4.0,
        )
        self._sprite("CLOUD_SPRITE", "CLOUD_TEXTURE", [(3, 4, 27, 14)], 4.0)
        self._sprite("LIFEGUARD_SPRITE", "LIFEGUARD_TEXTURE", [(0, 0, 109, 56)], 2.0)
        self._sprite(
            "DOCKS_SPRITE",
            "DOCKS_TEXTURE",
            [
                (4, 6, 47, 20),
                (58, 6, 44, 20),
                (119, 6, 51, 20),
                (4, 30, 47, 16),
                (58, 30, 44, 16),
                (119, 30, 48, 16),
            ],
            2.0,
        )
        self._sprite("ROCK_SPRITE", "ROCK_TEXTURE", [(0, 0, 10, 10)], 2.0)
        self._sprite("UMBRELLA_SPRITE", "UMBRELLA_STATIC_TEXTURE", [(1, 1, 59, 65)], 2.0)

    def _load_polygons(self) -> None:
        polygons: dict[str, list[tuple[float, float]]] = {
            "FULL_HITBOX": [(0.5, 0.5), (-0.5, 0.5), (-0.5, -0.5), (0.5, -0.5)],
            "OCTAGON_HITBOX": _octagon(),
            "SLANTED_HITBOX": [(0.5, 0.5), (0.1, -0.5), (-0.5, -0.5), (-0.1, 0.5)],
            "CLOUD_HITBOX": [
                (0.26, 0.26), (0.06, 0.23), (-0.28, -0.01), (-0.45, -0.5), (0.45, -0.5),
            ],
            "LIFEGUARD_RAMP_HITBOX": [
                _lifeguard(106, 57), _lifeguard(59, 36), _lifeguard(59, 39), _lifeguard(100, 57),
            ],
            "LIFEGUARD_PLATFORM_HITBOX": [
                _lifeguard(59, 36), _lifeguard(6, 36), _lifeguard(6, 39), _lifeguard(59, 39),
            ],
            "LIFEGUARD_BUILDING_HITBOX": [
                _lifeguard(50, 0), _lifeguard(6, 0), _lifeguard(6, 36), _lifeguard(41, 36),
            ],
            "TREETOP_HITBOX": [
                (0.28, 0.40), (-0.25, 0.5), (-0.5, 0.25), (-0.5, -0.25),
                (-0.25, -0.5), (0.40, -0.5), (0.5, 0.0),
            ],
            "UMBRELLA_HITBOX": [
                (0.36, 0.3), (0.0, 0.43), (-0.36, 0.3), (-0.5, 0.13), (0.5, 0.13),
            ],
            "BIRD_HITBOX": [
                (7.5 / 16, 0.5 / 16), (4.5 / 16, 3.5 / 16), (1.5 / 16, 3.5 / 16),
                (-7.5 / 16, -0.5 / 16), (-7.5 / 16, -1.5 / 16),
                (-4.5 / 16, -3.5 / 16), (1.5 / 16, -3.5 / 16),
            ],
            "SPLATTER_HITBOX": [
                (0.4, 0.5), (-0.4, 0.5), (-0.5, 0.0), (-0.4, -0.5), (0.4, -0.5), (0.5, 0.0),
            ],
            "NPC_HITBOX_BODY": [
                (5.5 / 32, -23.5 / 48), (5.5 / 32, 3.5 / 48), (3.5 / 32, 7.5 / 48),
                (-3.5 / 32, 7.5 / 48), (-5.5 / 32, 3.5 / 48), (-5.5 / 32, -23.5 / 48),
            ],
            "STREETLIGHT_BASE_HITBOX": [
                (4.5 / 26, 3.0 / 7), (-4.5 / 26, 3.0 / 7),
                (-12.5 / 26, -3.0 / 7), (12.5 / 26, -3.0 / 7),
            ],
            "STREETLIGHT_TOP_HITBOX_1": [
                (-12.5 / 40, 4.0 / 9), (-17.5 / 40, 4.0 / 9), (-19.5 / 40, 2.0 / 9),
                (-19.5 / 40, -4.0 / 9), (-12.5 / 40, -4.0 / 9),
            ],
            "STREETLIGHT_TOP_HITBOX_2": [
                (17.5 / 40, 0.0 / 9), (5.5 / 40, 4.0 / 9), (-12.5 / 40, 4.0 / 9),
                (-12.5 / 40, -1.0 / 9), (3.5 / 40, -1.0 / 9),
            ],
            "STREETLIGHT_TOP_HITBOX_3": [
                (17.5 / 40, 0.0 / 9), (3.5 / 40, -1.0 / 9), (3.5 / 40, -4.0 / 9),
                (19.5 / 40, -4.0 / 9), (19.5 / 40, -2.0 / 9),
            ],
        }
        for resource_id, vertices in polygons.items():
            self.load_polygon(resource_id, vertices)