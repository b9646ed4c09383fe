import random

import pytest

from gassybird.actors import BodyType
from gassybird.characters import (
    FLYING_FRAMES,
    Npc,
    NpcAction,
    NpcKind,
    NpcState,
    NpcView,
    PlayableBird,
    make_female,
    make_male,
)
from gassybird.obstacles import BIRD_CATEGORY_BIT, SPLATTER_CATEGORY_BIT
from gassybird.resources import ResourceCache

MPP = 0.02


@pytest.fixture
def cache():
    c = ResourceCache(native_width=800, data_dir="data")
    c.load()
    return c


@pytest.fixture
def npc(cache):
    return make_male(cache, MPP, random.Random(1))


class LowRandom(random.Random):
    """Always picks the lowest value of a range."""

    def uniform(self, a, b):
        return a

    def randint(self, a, b):
        return a


class FakeLogic:
    def __init__(self, npcs, difficulty=0.0):
        self.npcs = npcs
        self.difficulty = difficulty
        self.requests = []

    def request_npc_action(self, npc, action, delay, duration):
        self.requests.append((npc, action, delay, duration))


def test_new_npc_starts_idle_facing_left_and_hidden(npc):
    assert npc.kind is NpcKind.MALE
    assert npc.state is NpcState.IDLE
    assert npc.is_facing_left
    assert npc.sprite.scale.x == pytest.approx(-3.5)
    assert npc.sprite.scale.y == pytest.approx(3.5)
    assert npc.is_visible is False
    assert 0 <= npc.current_frame <= 3


def test_npc_physics_description(npc):
    assert npc.body_def.type is BodyType.DYNAMIC
    assert npc.body_def.fixed_rotation
    assert len(npc.shapes) == len(npc.fixture_defs) == 1
    assert npc.fixture_defs[0].friction == pytest.approx(1.0)
    assert npc.shapes[0].validate()


def test_female_uses_female_kind(cache):
    female = make_female(cache, MPP, random.Random(2))
    assert female.kind is NpcKind.FEMALE
    assert female.texture_rects == cache.get("NPC_MALE_SPRITE", type(cache.get("NPC_MALE_SPRITE", object))).texture_rects


def test_delayed_walk_prepares_then_walks(npc):
    npc.do_action(NpcAction.WALK, 0.5, 2.0)
    npc.update(0.1)
    assert npc.state is NpcState.PREPARING
    npc.update(0.5)
    assert npc.state is NpcState.WALKING
    assert npc.current_frame == 4
    assert npc.next_action is NpcAction.IDLE


def test_walk_ends_in_idle(npc):
    npc.walk(0.3)
    npc.update(0.1)
    assert npc.is_walking
    npc.update(0.25)
    assert npc.is_idle


def test_walk_animation_stays_within_walk_frames(npc):
    npc.walk(100.0)
    for _ in range(40):
        npc.update(0.07)
        assert 4 <= npc.current_frame <= 9


def test_update_shows_current_frame(npc):
    npc.walk(1.0)
    npc.update(0.0)
    assert npc.sprite.texture_rect == npc.texture_rects[4]


def test_start_throw_holds_last_frame_and_becomes_ready(npc):
    npc.start_throwing(0.5)
    npc.update(1.0)
    assert npc.state is NpcState.STARTING_THROW
    assert npc.current_frame == 12
    assert npc.is_ready_to_finish_throwing
    assert npc.is_throwing


def test_finish_throw_returns_to_idle(npc):
    npc.do_action(NpcAction.FINISH_THROW, 5.0, 5.0)
    assert npc.state is NpcState.FINISHING_THROW
    assert npc.current_frame == 13
    npc.update(0.31)
    assert npc.is_idle


def test_walk_is_ignored_while_throwing(npc):
    npc.start_throwing(1.0)
    npc.walk(1.0)
    assert npc.state is NpcState.STARTING_THROW


def test_scheduled_throw_starts_after_delay(npc):
    npc.do_action(NpcAction.START_THROW, 0.0, 0.6)
    npc.update(0.01)
    assert npc.state is NpcState.STARTING_THROW
    assert not npc.is_ready_to_finish_throwing


def test_set_facing_left_flips_scale(npc):
    npc.set_facing_left(False)
    assert not npc.is_facing_left
    assert npc.sprite.scale.x > 0
    npc.set_facing_left(False)
    assert npc.sprite.scale.x > 0
    npc.set_facing_left(True)
    assert npc.sprite.scale.x < 0


def test_stop_walking_returns_to_idle(npc):
    npc.walk(5.0)
    npc.stop_walking()
    assert npc.is_idle
    assert 0 <= npc.current_frame <= 3


def test_stop_walking_does_nothing_when_not_walking(npc):
    npc.start_throwing(1.0)
    npc.stop_walking()
    assert npc.state is NpcState.STARTING_THROW


def test_npc_draw_draws_sprite(npc):
    drawn = []

    class Target:
        def draw(self, item, **kwargs):
            drawn.append(item)

    npc.draw(Target())
    assert drawn == [npc.sprite]


def test_bird_setup(cache):
    bird = PlayableBird(cache, MPP)
    assert bird.sprite.origin.x == pytest.approx(8.0)
    assert bird.sprite.origin.y == pytest.approx(8.0)
    assert bird.sprite.scale.x == pytest.approx(50.0 / 16)
    assert bird.body_def.type is BodyType.DYNAMIC
    fixture = bird.fixture_defs[0]
    assert fixture.filter.category_bits == BIRD_CATEGORY_BIT
    assert fixture.filter.mask_bits & SPLATTER_CATEGORY_BIT == 0
    assert fixture.restitution == pytest.approx(0.2)
    assert bird.shapes[0].validate()


def test_bird_frames_follow_pooping(cache):
    bird = PlayableBird(cache, MPP)
    bird.update(0.01)
    assert bird.sprite.texture_rect == bird.texture_rects[5]
    bird.start_pooping()
    bird.update(0.01)
    assert bird.sprite.texture_rect == bird.texture_rects[10]
    bird.stop_pooping()
    bird.update(0.01)
    assert bird.sprite.texture_rect == bird.texture_rects[5]


def test_bird_flapping_advances_frames(cache):
    bird = PlayableBird(cache, MPP)
    bird.start_flying()
    assert bird.current_flying_frame == FLYING_FRAMES[3]
    bird.update(0.05)
    assert bird.current_flying_frame == FLYING_FRAMES[3] + 1
    assert bird.sprite.texture_rect == bird.texture_rects[5 + FLYING_FRAMES[4]]
    bird.stop_flying()
    assert bird.current_flying_frame == FLYING_FRAMES[2]
    bird.update(1.0)
    assert bird.current_flying_frame == FLYING_FRAMES[2]


def test_bird_flapping_wraps(cache):
    bird = PlayableBird(cache, MPP)
    bird.start_flying()
    for _ in range(len(FLYING_FRAMES)):
        bird.update(0.05)
    assert bird.current_flying_frame == FLYING_FRAMES[3]


def test_dead_bird_keeps_dead_frame(cache):
    bird = PlayableBird(cache, MPP)
    bird.die()
    bird.update(0.01)
    assert bird.is_dead
    assert bird.sprite.texture_rect == bird.texture_rects[0]
    bird.start_flying()
    assert not bird.is_dead
    bird.update(0.0)
    assert bird.sprite.texture_rect != bird.texture_rects[0]


def test_view_makes_hidden_npc_walk(npc):
    logic = FakeLogic([npc], difficulty=1.0)
    NpcView(logic, random.Random(3)).update(0.016)
    assert len(logic.requests) == 1
    target, action, delay, duration = logic.requests[0]
    assert target is npc
    assert action is NpcAction.WALK
    assert 0.15 <= delay <= 1.0
    assert 0.7 <= duration <= 1.2


def test_view_makes_visible_npc_throw_at_max_difficulty(npc):
    npc.is_visible = True
    logic = FakeLogic([npc], difficulty=1.0)
    NpcView(logic, LowRandom()).update(0.016)
    assert logic.requests == [(npc, NpcAction.START_THROW, 0.0, pytest.approx(0.5))]


def test_view_throw_duration_is_clamped(npc):
    npc.is_visible = True
    logic = FakeLogic([npc], difficulty=5.0)
    NpcView(logic, LowRandom()).update(0.016)
    assert logic.requests[0][3] == pytest.approx(0.5)


def test_view_finishes_ready_throw(npc):
    npc.start_throwing(0.1)
    npc.update(0.2)
    logic = FakeLogic([npc])
    NpcView(logic, random.Random(4)).update(0.016)
    assert logic.requests == [(npc, NpcAction.FINISH_THROW, 0.0, 0.0)]


def test_view_leaves_busy_npcs_alone(npc):
    npc.start_throwing(5.0)
    logic = FakeLogic([npc])
    NpcView(logic, random.Random(5)).update(0.016)
    assert logic.requests == []
    npc.walk(0.0)
    npc.finish_throwing()
    npc.update(0.0)
    logic2 = FakeLogic([npc])
    NpcView(logic2, random.Random(5)).update(0.016)
    assert logic2.requests == []


def test_npc_constructor_matches_factory(cache):
    direct = Npc(NpcKind.MALE, cache, MPP, random.Random(9))
    built = make_male(cache, MPP, random.Random(9))
    assert direct.current_frame == built.current_frame
    assert direct.shapes == built.shapes