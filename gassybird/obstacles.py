"""Obstacles: textured, multi-part physical actors, and a factory that builds them."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from typing import Iterable

from gassybird.actors import ActorType, BodyDef, BodyType, FixtureDef, PhysicalActor
from gassybird.geometry import IntRect, Polygon, Vec2, scale_polygon, translate_polygon
from gassybird.resources import PolygonResource, ResourceCache, SpriteResource

# Collision filtering: the bird and rocks do not collide with the NPC ground,
# and poop splatter does not collide with the bird.
BIRD_CATEGORY_BIT = 0x2
ROCK_CATEGORY_BIT = 0x4
SPLATTER_CATEGORY_BIT = 0x8

WHITE = (255, 255, 255, 255)


@dataclass(frozen=True)
class Vertex:
    """A corner of a textured quad."""

    position: Vec2
    color: tuple[int, int, int, int] = WHITE
    tex_coords: Vec2 = Vec2()


class Obstacle(PhysicalActor):
    """Something in the world that does not move on its own.

    An obstacle is made of components, each a textured quad with a set of
    hitbox polygons. ``scale`` is either one factor or a per-axis Vec2.
    """

    def __init__(
        self,
        actor_type: ActorType,
        texture,
        scale: float | Vec2,
        meters_per_pixel: float,
    ) -> None:
        super().__init__(actor_type)
        self.texture = texture
        self.scale = scale if isinstance(scale, Vec2) else Vec2(float(scale), float(scale))
        self.meters_per_pixel = meters_per_pixel
        self._vertices: list[Vertex] = []

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        return tuple(self._vertices)

    def add_component(
        self,
        texture_rect: IntRect,
        fixture_def: FixtureDef,
        polygons: Iterable[Polygon],
        translation: Vec2,
    ) -> None:
        """Add a quad showing texture_rect and its hitboxes.

        The hitbox polygons are in normalised coordinates; the quad and the
        hitboxes are both moved by translation, given in texture pixels.
        """
        r = texture_rect
        corners = [
            (Vec2(0.0, 0.0), Vec2(r.left, r.top)),
            (Vec2(r.width, 0.0), Vec2(r.left + r.width, r.top)),
            (Vec2(r.width, r.height), Vec2(r.left + r.width, r.top + r.height)),
            (Vec2(0.0, r.height), Vec2(r.left, r.top + r.height)),
        ]
        for position, tex in corners:
            moved = position + translation
            self._vertices.append(
                Vertex(Vec2(moved.x * self.scale.x, moved.y * self.scale.y), WHITE, tex)
            )

        normalized_translation = Vec2(
            0.5 + translation.x / r.width,
            -(0.5 + translation.y / r.height),
        )
        meters_scale = Vec2(
            r.width * self.scale.x * self.meters_per_pixel,
            r.height * self.scale.y * self.meters_per_pixel,
        )
        for polygon in polygons:
            shaped = scale_polygon(translate_polygon(polygon, normalized_translation), meters_scale)
            self.add_shape(shaped)
            self.add_fixture_def(fixture_def)

    def draw(self, target) -> None:
        """Draw every quad with the obstacle's texture."""
        target.draw(self.vertices, texture=self.texture)


class ObstacleFactory:
    """Builds the obstacles of the game from the resources in a cache."""

    def __init__(self, cache: ResourceCache, meters_per_pixel: float) -> None:
        self.cache = cache
        self.meters_per_pixel = meters_per_pixel

    @property
    def pixels_per_meter(self) -> float:
        return 1.0 / self.meters_per_pixel

    def _sprite(self, resource_id: str) -> SpriteResource:
        return self.cache.get(resource_id, SpriteResource)

    def _polygon(self, resource_id: str) -> Polygon:
        return self.cache.get(resource_id, PolygonResource).polygon

    def _obstacle(self, actor_type: ActorType, sprite: SpriteResource, scale) -> Obstacle:
        return Obstacle(actor_type, sprite.sprite.texture, scale, self.meters_per_pixel)

    @staticmethod
    def _facing_scale(sprite: SpriteResource, face_left: bool) -> Vec2:
        return Vec2((-1.0 if face_left else 1.0) * sprite.scale_factor, sprite.scale_factor)

    def _num_shafts(self, height_meters, sprite, base, shaft, top) -> int:
        count = int(
            (height_meters * self.pixels_per_meter / sprite.scale_factor - base.height - top.height)
            / shaft.height
        )
        return max(count, 1)

    def make_streetlight(self, height_meters: float, face_left: bool) -> Obstacle:
        """A streetlight roughly height_meters tall."""
        sprite = self._sprite("STREETLIGHT_SPRITE")
        light = self._obstacle(
            ActorType.GENERIC_OBSTACLE, sprite, self._facing_scale(sprite, face_left)
        )
        base, shaft, top = sprite.texture_rects[:3]
        fixture = FixtureDef(density=1.0, friction=0.3)

        base_origin = Vec2(base.width / 2.0, base.height)
        light.add_component(base, fixture, [self._polygon("STREETLIGHT_BASE_HITBOX")], -base_origin)

        shaft_x, shaft_y = shaft.width / 2.0, base_origin.y
        for _ in range(self._num_shafts(height_meters, sprite, base, shaft, top)):
            shaft_y += shaft.height
            light.add_component(
                shaft, fixture, [self._polygon("FULL_HITBOX")], -Vec2(shaft_x, shaft_y)
            )

        top_origin = Vec2(shaft_x, top.height + shaft_y)
        light.add_component(
            top,
            fixture,
            [self._polygon(f"STREETLIGHT_TOP_HITBOX_{k}") for k in (1, 2, 3)],
            -top_origin,
        )
        light.body_def = BodyDef(type=BodyType.KINEMATIC)
        return light

    def make_ground(self, width_meters: float) -> Obstacle:
        """A ground piece width_meters wide, with its origin at the top right."""
        sprite = self._sprite("GROUND_SPRITE")
        rect = sprite.texture_rects[0]
        scale = width_meters / (rect.width * self.meters_per_pixel)
        ground = self._obstacle(ActorType.GROUND, sprite, scale)
        fixture = FixtureDef(density=1.0, friction=0.5)
        # slightly shorter hitbox, since these pieces lie below the NPC ground
        hitbox = scale_polygon(self._polygon("FULL_HITBOX"), Vec2(1.0, 0.975))
        ground.add_component(rect, fixture, [hitbox], -Vec2(rect.width, 0.0))
        ground.body_def = BodyDef(type=BodyType.KINEMATIC)
        return ground

    def make_npc_ground(self, width_meters: float) -> Obstacle:
        """The invisible ground NPCs walk on; the bird, rocks and splatter pass through it."""
        sprite = self._sprite("BIG_GROUND_SPRITE")
        rect = sprite.texture_rects[0]
        scale = width_meters / (rect.width * self.meters_per_pixel)
        ground = self._obstacle(ActorType.GROUND, sprite, scale)
        fixture = FixtureDef(friction=0.0)
        fixture.filter.mask_bits &= ~(
            BIRD_CATEGORY_BIT | ROCK_CATEGORY_BIT | SPLATTER_CATEGORY_BIT
        )
        ground.add_component(
            rect, fixture, [self._polygon("FULL_HITBOX")], -Vec2(rect.width / 2.0, 0.0)
        )
        ground.body_def = BodyDef(type=BodyType.STATIC)
        return ground

    def make_poop(self, y_velocity: float) -> Obstacle:
        """A falling poop with the given vertical velocity."""
        sprite = self._sprite("POOP_SPRITE")
        poop = self._obstacle(ActorType.POOP, sprite, sprite.scale_factor)
        fixture = FixtureDef(density=1.0, friction=1.0)
        rect = sprite.texture_rects[0]
        poop.add_component(
            rect,
            fixture,
            [self._polygon("OCTAGON_HITBOX")],
            -Vec2(rect.width / 2.0, rect.height / 2.0),
        )
        poop.body_def = BodyDef(
            type=BodyType.DYNAMIC,
            bullet=True,
            angle=math.pi / 4.0,
            linear_velocity=Vec2(0.0, y_velocity),
        )
        return poop

    def make_poop_splatter(self) -> Obstacle:
        """The splatter a poop leaves behind, with its origin at the bottom middle."""
        sprite = self._sprite("SPLATTER_SPRITE")
        rect = sprite.texture_rects[0]
        splatter = self._obstacle(ActorType.GENERIC_OBSTACLE, sprite, sprite.scale_factor)
        fixture = FixtureDef(density=1.0, friction=1.0)
        fixture.filter.category_bits = SPLATTER_CATEGORY_BIT
        splatter.add_component(
            rect,
            fixture,
            [self._polygon("SPLATTER_HITBOX")],
            -Vec2(rect.width / 2.0, rect.height),
        )
        splatter.body_def = BodyDef(type=BodyType.DYNAMIC)
        return splatter

    def make_tree(self, height_meters: float, face_left: bool) -> Obstacle:
        """A slanted palm tree roughly height_meters tall."""
        sprite = self._sprite("TREE_SPRITE")
        tree = self._obstacle(
            ActorType.GENERIC_OBSTACLE, sprite, self._facing_scale(sprite, face_left)
        )
        base, shaft, top = sprite.texture_rects[:3]
        fixture = FixtureDef()

        base_origin = Vec2(base.width, base.height)
        tree.add_component(base, fixture, [self._polygon("STREETLIGHT_BASE_HITBOX")], -base_origin)

        body_x, body_y = base_origin.x, base_origin.y
        for _ in range(self._num_shafts(height_meters, sprite, base, shaft, top)):
            body_y += shaft.height - 0.1  # overlap slightly so there are no gaps
            body_x -= 8
            tree.add_component(
                shaft, fixture, [self._polygon("SLANTED_HITBOX")], -Vec2(body_x, body_y)
            )

        top_origin = Vec2(body_x + 7, body_y + top.height - 3)
        tree.add_component(top, fixture, [self._polygon("TREETOP_HITBOX")], -top_origin)
        tree.body_def = BodyDef(type=BodyType.KINEMATIC)
        return tree

    def make_cloud(self) -> Obstacle:
        """A cloud centred on its origin."""
        sprite = self._sprite("CLOUD_SPRITE")
        cloud = self._obstacle(ActorType.GENERIC_OBSTACLE, sprite, sprite.scale_factor)
        rect = sprite.texture_rects[0]
        cloud.add_component(
            rect,
            FixtureDef(),
            [self._polygon("CLOUD_HITBOX")],
            -Vec2(rect.width / 2.0, rect.height / 2.0),
        )
        cloud.body_def = BodyDef(type=BodyType.KINEMATIC)
        return cloud

    def make_docks(self, num_cols: int, num_rows: int) -> Obstacle:
        """Docks num_cols wide and num_rows of supports tall, with one slab hitbox."""
        sprite = self._sprite("DOCKS_SPRITE")
        docks = self._obstacle(ActorType.GENERIC_OBSTACLE, sprite, sprite.scale_factor)
        left_top, middle_top, right_top, left_bottom, middle_bottom, right_bottom = (
            sprite.texture_rects[:6]
        )
        fixture = FixtureDef()

        width = float(left_bottom.width)
        height = float(left_bottom.height)
        for _ in range(num_rows):
            docks.add_component(left_bottom, fixture, [], Vec2(width / 2.0, -height))
            height += left_bottom.height - 0.1  # overlap slightly so there are no gaps
        docks.add_component(left_top, fixture, [], Vec2(width / 2.0, -height))

        width += middle_bottom.width / 2.0
        height = float(middle_bottom.height)
        for _ in range(1, num_cols - 1):
            for _ in range(num_rows):
                docks.add_component(middle_bottom, fixture, [], Vec2(width, -height))
                height += middle_bottom.height - 0.1
            docks.add_component(middle_top, fixture, [], Vec2(width, -height))
            width += middle_bottom.width
            height = float(middle_bottom.height)

        for _ in range(num_rows):
            docks.add_component(right_bottom, fixture, [], Vec2(width, -height))
            height += right_bottom.height - 0.1
        docks.add_component(right_top, fixture, [], Vec2(width, -height))

        factor = sprite.scale_factor * self.meters_per_pixel
        middle_cols = 0 if num_cols <= 2 else num_cols - 2
        hitbox = translate_polygon(self._polygon("FULL_HITBOX"), Vec2(0.5, -0.5))
        hitbox = scale_polygon(
            hitbox,
            Vec2(
                factor
                * (left_bottom.width + middle_cols * middle_bottom.width + right_bottom.width),
                factor * left_top.height * 0.15,
            ),
        )
        hitbox = translate_polygon(
            hitbox,
            Vec2(
                factor * left_bottom.width / 2.0,
                factor * (middle_bottom.height * num_rows - 1.0),
            ),
        )
        docks.add_shape(hitbox)
        docks.add_fixture_def(fixture)
        docks.body_def = BodyDef(type=BodyType.KINEMATIC)
        return docks

    def make_lifeguard(self, face_left: bool) -> Obstacle:
        """A lifeguard tower with a ramp, a platform and a building."""
        sprite = self._sprite("LIFEGUARD_SPRITE")
        tower = self._obstacle(
            ActorType.GENERIC_OBSTACLE, sprite, self._facing_scale(sprite, face_left)
        )
        rect = sprite.texture_rects[0]
        tower.add_component(
            rect,
            FixtureDef(),
            [
                self._polygon("LIFEGUARD_RAMP_HITBOX"),
                self._polygon("LIFEGUARD_PLATFORM_HITBOX"),
                self._polygon("LIFEGUARD_BUILDING_HITBOX"),
            ],
            -Vec2(rect.width / 2.0, rect.height),
        )
        tower.body_def = BodyDef(type=BodyType.KINEMATIC)
        return tower

    def make_rock(self) -> Obstacle:
        """A thrown rock; it passes through the NPC ground."""
        sprite = self._sprite("ROCK_SPRITE")
        rock = self._obstacle(ActorType.PROJECTILE, sprite, sprite.scale_factor)
        fixture = FixtureDef(density=1.0, friction=1.0, restitution=0.3)
        fixture.filter.category_bits = ROCK_CATEGORY_BIT
        hitbox = scale_polygon(self._polygon("OCTAGON_HITBOX"), Vec2(0.8, 0.8))
        rect = sprite.texture_rects[0]
        rock.add_component(rect, fixture, [hitbox], -Vec2(rect.width / 2.0, rect.height / 2.0))
        rock.body_def = BodyDef(type=BodyType.DYNAMIC, bullet=True)
        return rock

    def make_umbrella(self, angle: float) -> Obstacle:
        """A beach umbrella tilted by angle radians."""
        sprite = self._sprite("UMBRELLA_SPRITE")
        umbrella = self._obstacle(ActorType.GENERIC_OBSTACLE, sprite, sprite.scale_factor)
        rect = sprite.texture_rects[0]
        umbrella.add_component(
            rect,
            FixtureDef(),
            [self._polygon("UMBRELLA_HITBOX")],
            -Vec2(rect.width / 2.0, rect.height),
        )
        umbrella.body_def = BodyDef(type=BodyType.KINEMATIC, angle=angle)
        return umbrella