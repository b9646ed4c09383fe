import pytest

from gassybird.actors import (
    Activity,
    Actor,
    ActorType,
    BodyDef,
    BodyType,
    FixtureDef,
    PhysicalActor,
)
from gassybird.geometry import Polygon


class _Screen(Activity):
    def __init__(self):
        self.elapsed = 0.0
        self.drawn = []

    def update(self, time_delta):
        self.elapsed += time_delta

    def draw(self, target):
        self.drawn.append(target)


def test_activity_requires_update_and_draw():
    with pytest.raises(TypeError):
        Activity()


def test_activity_subclass_missing_draw_cannot_be_created():
    class _NoDraw(Activity):
        def update(self, time_delta):
            pass

    with pytest.raises(TypeError):
        _NoDraw()
    assert set(Activity.__abstractmethods__) == {"update", "draw"}
    assert Activity.activate(_Screen()) is None


def test_activity_default_activation_hooks_return_nothing():
    screen = _Screen()
    assert Activity.activate(screen) is None
    screen.update(0.25)
    screen.update(0.25)
    screen.draw("target")
    assert Activity.deactivate(screen) is None
    assert screen.elapsed == pytest.approx(0.5)
    assert screen.drawn == ["target"]


def test_actor_defaults_do_nothing():
    actor = Actor()
    assert actor.update(1.0) is None
    assert actor.draw(object()) is None


def test_fixture_def_defaults():
    fixture = FixtureDef()
    assert fixture.friction == pytest.approx(0.2)
    assert fixture.density == 0.0
    assert fixture.filter.category_bits == 0x0001
    assert fixture.filter.mask_bits == 0xFFFF


def test_fixture_mask_clearing():
    fixture = FixtureDef()
    fixture.filter.mask_bits &= ~0x8
    assert fixture.filter.mask_bits & 0x8 == 0
    assert fixture.filter.mask_bits & 0x2 == 0x2


def test_physical_actor_type_and_name():
    actor = PhysicalActor(ActorType.PROJECTILE)
    assert actor.actor_type is ActorType.PROJECTILE
    assert actor.type_name == "PROJECTILE"
    assert actor.body_def.type is BodyType.STATIC


def test_physical_actor_stores_copies():
    actor = PhysicalActor(ActorType.GENERIC_OBSTACLE)
    fixture = FixtureDef(density=1.0)
    shape = Polygon.from_points([(0.5, 0.5), (-0.5, 0.5), (-0.5, -0.5)])
    actor.add_shape(shape)
    actor.add_fixture_def(fixture)
    fixture.density = 5.0
    assert actor.fixture_defs[0].density == 1.0
    assert actor.shapes[0] == shape
    assert len(actor.shapes) == len(actor.fixture_defs) == 1


def test_body_def_can_be_replaced():
    actor = PhysicalActor(ActorType.POOP)
    actor.body_def = BodyDef(type=BodyType.DYNAMIC, bullet=True)
    assert actor.body_def.type is BodyType.DYNAMIC
    assert actor.body_def.bullet is True
    assert actor.body_def.fixed_rotation is False