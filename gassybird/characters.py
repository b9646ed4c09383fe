"""The non-playable beachgoers, the playable bird and the view that drives the NPCs."""

from __future__ import annotations

import copy
import enum
import random
from typing import Iterable, Protocol

from gassybird.actors import ActorType, BodyDef, BodyType, FixtureDef, PhysicalActor
from gassybird.geometry import (
    IntRect,
    Sprite,
    Vec2,
    fit_polygon_to_sprite,
    random_bool,
    random_float,
    random_int,
)
from gassybird.obstacles import BIRD_CATEGORY_BIT, SPLATTER_CATEGORY_BIT
from gassybird.resources import PolygonResource, ResourceCache, SpriteResource


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class NpcKind(enum.Enum):
    MALE = enum.auto()
    FEMALE = enum.auto()


class NpcAction(enum.Enum):
    IDLE = enum.auto()
    WALK = enum.auto()
    START_THROW = enum.auto()
    FINISH_THROW = enum.auto()


class NpcState(enum.Enum):
    IDLE = enum.auto()
    PREPARING = enum.auto()
    WALKING = enum.auto()
    STARTING_THROW = enum.auto()
    FINISHING_THROW = enum.auto()


_IDLE_FRAME_DURATION = 0.2
_IDLE_START_FRAME = 0
_NUM_IDLE_FRAMES = 4

_WALK_FRAME_DURATION = 0.15
_WALK_START_FRAME = 4
_NUM_WALK_FRAMES = 6

_THROW_FRAME_DURATION = 0.1
_START_THROW_START_FRAME = 10
_NUM_START_THROW_FRAMES = 3
_FINISH_THROW_START_FRAME = 13
_NUM_FINISH_THROW_FRAMES = 3


class Npc(PhysicalActor):
    """A beachgoer who idles, walks around and throws things at the bird.

    Actions are scheduled with ``do_action``; a scheduled action starts once
    its delay has passed and lasts for its duration.
    """

    def __init__(
        self,
        kind: NpcKind,
        cache: ResourceCache,
        meters_per_pixel: float,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(ActorType.NPC)
        self.kind = kind
        self._rng = rng
        self.state = NpcState.IDLE

        self._frame_duration = 1.0
        self._start_frame = 0
        self._num_frames = 1
        self.current_frame = 0
        self._frame_timer = 0.0

        self.is_facing_left = False
        self.is_ready_to_finish_throwing = False
        self._action_time_remaining = 0.0
        self._prepare_time_remaining = 0.0
        self.next_action = NpcAction.IDLE
        self._next_action_duration = 0.0

        sprite_id = "NPC_MALE_SPRITE" if kind is NpcKind.MALE else "NPC_FEMALE_SPRITE"
        resource = cache.get(sprite_id, SpriteResource)
        self.sprite: Sprite = copy.copy(resource.sprite)
        self.texture_rects: tuple[IntRect, ...] = resource.texture_rects

        first = self.texture_rects[0]
        self.sprite.origin = Vec2(first.width / 2.0, float(first.height))
        self.sprite.scale_by(resource.scale_factor, resource.scale_factor)
        self.set_facing_left(True)

        # fixed rotation keeps the NPC upright
        self.body_def = BodyDef(type=BodyType.DYNAMIC, fixed_rotation=True)
        body = cache.get("NPC_HITBOX_BODY", PolygonResource).polygon
        self.add_shape(fit_polygon_to_sprite(body, self.sprite, meters_per_pixel))
        self.add_fixture_def(FixtureDef(density=1.0, friction=1.0))

        self._to_idle()
        self.is_visible = False

    @property
    def is_idle(self) -> bool:
        return self.state is NpcState.IDLE

    @property
    def is_walking(self) -> bool:
        return self.state is NpcState.WALKING

    @property
    def is_throwing(self) -> bool:
        return self.state in (NpcState.STARTING_THROW, NpcState.FINISHING_THROW)

    def update(self, time_delta: float) -> None:
        """Advance the animation and the action timers."""
        self.sprite.texture_rect = self.texture_rects[self.current_frame]

        # loop the animation unless the NPC is winding up a throw
        self._frame_timer += time_delta
        self.current_frame = int(self._start_frame + self._frame_timer / self._frame_duration)
        end_frame = self._start_frame + self._num_frames - 1
        if self.current_frame > end_frame:
            if self.state is NpcState.STARTING_THROW:
                self.current_frame = end_frame
            else:
                self.current_frame = (
                    self._start_frame
                    + (self.current_frame - self._start_frame) % self._num_frames
                )

        self._action_time_remaining -= time_delta
        if self._action_time_remaining <= 0.0 and self.state not in (
            NpcState.IDLE,
            NpcState.PREPARING,
        ):
            self._action_time_remaining = 0.0
            if self.state is NpcState.STARTING_THROW:
                self.is_ready_to_finish_throwing = True
            else:
                self._to_idle()

        self._prepare_time_remaining -= time_delta
        if self._prepare_time_remaining <= 0.0 and self.next_action is not NpcAction.IDLE:
            self._prepare_time_remaining = 0.0
            if self.next_action is NpcAction.WALK:
                self.walk(self._next_action_duration)
            elif self.next_action is NpcAction.START_THROW:
                self.start_throwing(self._next_action_duration)
            self.next_action = NpcAction.IDLE
            self._next_action_duration = 0.0
        elif self._prepare_time_remaining > 0.0 and self.state is NpcState.IDLE:
            self.state = NpcState.PREPARING

    def draw(self, target) -> None:
        """Draw the NPC's sprite."""
        target.draw(self.sprite)

    def do_action(self, action: NpcAction, delay: float, duration: float) -> None:
        """Schedule an action; finishing a throw happens immediately."""
        if action is NpcAction.FINISH_THROW:
            self.finish_throwing()
        else:
            self.next_action = action
            self._prepare_time_remaining = delay
            self._next_action_duration = duration

    def set_facing_left(self, face_left: bool) -> None:
        """Turn the NPC to face left or right."""
        if face_left != self.is_facing_left:
            self.sprite.scale_by(-1.0, 1.0)
            self.is_facing_left = face_left

    def stop_walking(self) -> None:
        """Return a walking NPC to idle.

        A pending walk keeps its action, so it starts on the next update.
        """
        if self.is_walking:
            self._to_idle()
            if self.next_action is NpcAction.WALK:
                self._prepare_time_remaining = 0.0

    def walk(self, duration: float) -> None:
        """Walk for duration seconds, unless the NPC is throwing."""
        if not self.is_throwing:
            self._set_animation(
                NpcState.WALKING, _WALK_FRAME_DURATION, _WALK_START_FRAME, _NUM_WALK_FRAMES
            )
            self._action_time_remaining = duration

    def start_throwing(self, duration: float) -> None:
        """Wind up a throw held for duration seconds."""
        self._set_animation(
            NpcState.STARTING_THROW,
            _THROW_FRAME_DURATION,
            _START_THROW_START_FRAME,
            _NUM_START_THROW_FRAMES,
        )
        self._action_time_remaining = duration

    def finish_throwing(self) -> None:
        """Play the release of a throw."""
        self._set_animation(
            NpcState.FINISHING_THROW,
            _THROW_FRAME_DURATION,
            _FINISH_THROW_START_FRAME,
            _NUM_FINISH_THROW_FRAMES,
        )
        self._action_time_remaining = self._num_frames * self._frame_duration

    def _set_animation(
        self, state: NpcState, frame_duration: float, start_frame: int, num_frames: int
    ) -> None:
        self.state = state
        self.is_ready_to_finish_throwing = False
        self._frame_duration = frame_duration
        self._start_frame = start_frame
        self._num_frames = num_frames
        self.current_frame = start_frame
        self._frame_timer = 0.0

    def _to_idle(self) -> None:
        self._set_animation(
            NpcState.IDLE, _IDLE_FRAME_DURATION, _IDLE_START_FRAME, _NUM_IDLE_FRAMES
        )
        self.current_frame = random_int(
            self._start_frame, self._start_frame + self._num_frames - 1, self._rng
        )


def make_male(
    cache: ResourceCache, meters_per_pixel: float, rng: random.Random | None = None
) -> Npc:
    """A male beachgoer."""
    return Npc(NpcKind.MALE, cache, meters_per_pixel, rng)


def make_female(
    cache: ResourceCache, meters_per_pixel: float, rng: random.Random | None = None
) -> Npc:
    """A female beachgoer."""
    return Npc(NpcKind.FEMALE, cache, meters_per_pixel, rng)


_FLYING_CLOSED_START_FRAME = 5
_FLYING_OPEN_START_FRAME = 10
FLYING_FRAMES = (0, 1, 2, 3, 4, 2)
_FLYING_FRAME_DURATION = 0.04


class PlayableBird(PhysicalActor):
    """The bird the player flies, with its wing-flapping animation."""

    def __init__(self, cache: ResourceCache, meters_per_pixel: float) -> None:
        super().__init__(ActorType.PLAYABLE_BIRD)
        self.current_flying_frame = 0
        self._frame_timer = 0.0
        self.is_flying = False
        self.is_pooping = False
        self.is_dead = False

        resource = cache.get("BIRD_SPRITE", SpriteResource)
        self.sprite: Sprite = copy.copy(resource.sprite)
        self.texture_rects: tuple[IntRect, ...] = resource.texture_rects

        width = float(self.texture_rects[0].width)
        self.sprite.origin = Vec2(width / 2.0, width / 2.0)
        self.sprite.scale_by(resource.scale_factor, resource.scale_factor)

        self.body_def = BodyDef(type=BodyType.DYNAMIC)
        hitbox = cache.get("BIRD_HITBOX", PolygonResource).polygon
        self.add_shape(fit_polygon_to_sprite(hitbox, self.sprite, meters_per_pixel))

        fixture = FixtureDef(density=1.0, friction=0.5, restitution=0.2)
        fixture.filter.category_bits = BIRD_CATEGORY_BIT
        fixture.filter.mask_bits &= ~SPLATTER_CATEGORY_BIT
        self.add_fixture_def(fixture)

    def update(self, time_delta: float) -> None:
        """Flap the wings while flying and show the current frame."""
        if self.is_flying:
            self._frame_timer += time_delta
            if self._frame_timer >= _FLYING_FRAME_DURATION:
                self.current_flying_frame = (self.current_flying_frame + 1) % len(FLYING_FRAMES)
                self._frame_timer = 0.0

        if not self.is_dead:
            start = _FLYING_OPEN_START_FRAME if self.is_pooping else _FLYING_CLOSED_START_FRAME
            frame = start + FLYING_FRAMES[self.current_flying_frame]
            self.sprite.texture_rect = self.texture_rects[frame]

    def draw(self, target) -> None:
        """Draw the bird's sprite."""
        target.draw(self.sprite)

    def start_flying(self) -> None:
        # wings slightly raised, so the first flap looks natural
        self.current_flying_frame = FLYING_FRAMES[3]
        self._frame_timer = 0.0
        self.is_flying = True
        self.is_dead = False

    def stop_flying(self) -> None:
        # wings tucked in while falling
        self.current_flying_frame = FLYING_FRAMES[2]
        self.is_flying = False

    def start_pooping(self) -> None:
        self.is_pooping = True
        self.is_dead = False

    def stop_pooping(self) -> None:
        self.is_pooping = False

    def die(self) -> None:
        self.sprite.texture_rect = self.texture_rects[0]
        self.is_dead = True


class NpcLogic(Protocol):
    """What the NPC view needs from the game logic."""

    difficulty: float

    @property
    def npcs(self) -> Iterable[Npc]: ...

    def request_npc_action(
        self, npc: Npc, action: NpcAction, delay: float, duration: float
    ) -> None: ...


_EASY_THROW_CHANCE = 0.35
_HARD_THROW_CHANCE = 0.65
_EASY_THROW_DURATION = 0.8
_HARD_THROW_DURATION = 0.5


class NpcView:
    """Makes NPCs walk around and throw at the bird, more often as difficulty rises."""

    def __init__(self, logic: NpcLogic, rng: random.Random | None = None) -> None:
        self.logic = logic
        self._rng = rng

    def update(self, time_delta: float) -> None:
        """Choose the next action of every NPC that needs one."""
        difficulty = self.logic.difficulty
        for npc in list(self.logic.npcs):
            if npc.is_throwing:
                if npc.is_ready_to_finish_throwing:
                    self.logic.request_npc_action(npc, NpcAction.FINISH_THROW, 0.0, 0.0)
            elif npc.is_idle:
                throw_chance = _clamp(
                    _lerp(_EASY_THROW_CHANCE, _HARD_THROW_CHANCE, difficulty),
                    _EASY_THROW_CHANCE,
                    _HARD_THROW_CHANCE,
                )
                should_throw = (
                    npc.is_visible and random_float(0.0, 1.0, self._rng) <= throw_chance
                )
                if should_throw:
                    throw_duration = _clamp(
                        _lerp(_EASY_THROW_DURATION, _HARD_THROW_DURATION, difficulty),
                        _HARD_THROW_DURATION,
                        _EASY_THROW_DURATION,
                    )
                    self.logic.request_npc_action(
                        npc, NpcAction.START_THROW, 0.0, throw_duration
                    )
                else:
                    walk_delay = random_float(0.15, 1.0, self._rng)
                    walk_duration = 0.95 + random_float(-0.25, 0.25, self._rng)
                    npc.set_facing_left(random_bool(self._rng))
                    self.logic.request_npc_action(npc, NpcAction.WALK, walk_delay, walk_duration)