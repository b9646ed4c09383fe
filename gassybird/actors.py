"""Actors, activities and the physical description of actors."""

from __future__ import annotations

import copy
import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from gassybird.geometry import Vec2


class Actor:
    """Something in the game that updates its own state and can draw itself."""

    # seconds of game time this actor has been updated for
    elapsed: float = 0.0

    def update(self, time_delta: float) -> None:
        """Advance the actor's own state by time_delta seconds."""
        self.elapsed += time_delta

    def draw(self, target) -> None:
        """Draw each of the actor's drawable parts onto the target."""
        for part in self._drawables():
            target.draw(part)

    def _drawables(self) -> tuple:
        """Parts that make up the actor's image; a bare actor has none."""
        return ()


class Activity(ABC):
    """One screen of the game."""

    active: bool = False

    def activate(self) -> None:
        """Called when the activity becomes current."""
        self.active = True

    def deactivate(self) -> None:
        """Called when the activity stops being current."""
        self.active = False

    @abstractmethod
    def update(self, time_delta: float) -> None:
        """Advance the activity by time_delta seconds."""

    @abstractmethod
    def draw(self, target) -> None:
        """Draw the screen onto the target."""


class ActorType(enum.Enum):
    PLAYABLE_BIRD = enum.auto()
    NPC = enum.auto()
    POOP = enum.auto()
    GROUND = enum.auto()
    GENERIC_OBSTACLE = enum.auto()
    PROJECTILE = enum.auto()


class BodyType(enum.Enum):
    STATIC = enum.auto()
    KINEMATIC = enum.auto()
    DYNAMIC = enum.auto()


@dataclass
class Filter:
    """Collision filtering bits."""

    category_bits: int = 0x0001
    mask_bits: int = 0xFFFF
    group_index: int = 0


@dataclass
class BodyDef:
    """Description of a physical body."""

    type: BodyType = BodyType.STATIC
    position: Vec2 = field(default_factory=Vec2)
    angle: float = 0.0
    linear_velocity: Vec2 = field(default_factory=Vec2)
    angular_velocity: float = 0.0
    linear_damping: float = 0.0
    angular_damping: float = 0.0
    allow_sleep: bool = True
    awake: bool = True
    fixed_rotation: bool = False
    bullet: bool = False
    enabled: bool = True
    gravity_scale: float = 1.0


@dataclass
class FixtureDef:
    """Material and filtering of a shape attached to a body."""

    friction: float = 0.2
    restitution: float = 0.0
    restitution_threshold: float = 1.0
    density: float = 0.0
    is_sensor: bool = False
    filter: Filter = field(default_factory=Filter)


class PhysicalActor(Actor):
    """An actor that can exist in the physics world.

    Shapes and fixture definitions pair up by position and should be added
    in matching numbers.
    """

    def __init__(self, actor_type: ActorType) -> None:
        self.actor_type = actor_type
        self.body_def = BodyDef()
        self._shapes: list = []
        self._fixture_defs: list[FixtureDef] = []

    @property
    def shapes(self) -> tuple:
        return tuple(self._shapes)

    @property
    def fixture_defs(self) -> tuple[FixtureDef, ...]:
        return tuple(self._fixture_defs)

    @property
    def type_name(self) -> str:
        return self.actor_type.name

    def add_shape(self, shape) -> None:
        """Store a copy of the shape."""
        self._shapes.append(copy.deepcopy(shape))

    def add_fixture_def(self, fixture_def: FixtureDef) -> None:
        """Store a copy of the fixture definition."""
        self._fixture_defs.append(copy.deepcopy(fixture_def))