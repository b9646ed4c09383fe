# gassybird

The model behind a side-scrolling arcade game. A bird flies over a beach and
dodges streetlights, trees, clouds and docks. It drops on the people walking
below, and they throw rocks back at it.

## Modules

- `gassybird.geometry` holds the geometry types and helpers.
  - The types are `Vec2`, `IntRect`, the convex `Polygon` and a small `Sprite`.
    `Polygon.from_points` builds a counter-clockwise hull, and `Polygon.validate` checks convexity.
  - The polygon helpers are `translate_polygon`, `scale_polygon` and `fit_polygon_to_sprite`.
  - The random helpers are `random_int`, `random_float` and `random_bool`. Each takes an optional `random.Random`.
- `gassybird.events` holds `Event` and `EventMessenger`.
  - An event's type is its class.
  - Listeners are plain callables. A duplicate registration is ignored.
  - `trigger_event` calls the listeners at once.
  - `queue_event` stores a copy of the event. `trigger_queued_events` then triggers the queued events in order. Any event queued while that runs waits for the next call.
- `gassybird.actors` holds the actor base classes and physics descriptions.
  - `Actor` and the abstract `Activity` are the base classes.
  - `PhysicalActor` carries an `ActorType`, a `BodyDef`, shapes and `FixtureDef`s. Each `FixtureDef` has a collision `Filter`.
- `gassybird.resources` holds `ResourceCache`.
  - `ResourceCache.load()` registers every texture, sprite, font and hitbox polygon the game uses.
  - `get(resource_id, kind)` returns a resource. It raises `KeyError` for an unknown id and `TypeError` for the wrong kind.
  - Loading a duplicate id raises `ValueError`.
- `gassybird.obstacles` holds `Obstacle`, `Vertex` and `ObstacleFactory`.
  - The factory builds streetlights, ground pieces, the NPC ground, poop, splatter, trees, clouds, docks, lifeguard towers, rocks and umbrellas. It builds them from a loaded cache.
  - The module also defines the collision category bits `BIRD_CATEGORY_BIT`, `ROCK_CATEGORY_BIT` and `SPLATTER_CATEGORY_BIT`.
- `gassybird.characters` holds the characters and the NPC view.
  - `Npc` is an animated beachgoer. Its states are idle, preparing, walking and throwing.
  - `PlayableBird` is the bird, with its wing-flapping animation.
  - `make_male` and `make_female` build NPCs.
  - `NpcView` picks each idle NPC's next action. The game logic must give it a `difficulty`, an `npcs` iterable and a `request_npc_action` method.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

The first example sends an event through the messenger:

```python
from gassybird.events import Event, EventMessenger

class Ping(Event):
    pass

messenger = EventMessenger()
seen = []
messenger.add_listener(Ping, seen.append)
messenger.queue_event(Ping())
messenger.trigger_queued_events()
assert len(seen) == 1
```

The second example loads the resources and steps an NPC's animation. It also builds an obstacle:

```python
import random

from gassybird.characters import make_male
from gassybird.obstacles import ObstacleFactory
from gassybird.resources import ResourceCache

cache = ResourceCache(native_width=800)
cache.load()

npc = make_male(cache, 1 / 50, random.Random(0))
npc.walk(1.0)
npc.update(0.2)

streetlight = ObstacleFactory(cache, 1 / 50).make_streetlight(4.0, face_left=False)
print(len(streetlight.shapes), streetlight.body_def.type)
```

## What the package does not do

The package has no rendering, no physics simulation and no window. It has no game loop, and it has no command to start a game.

- **Drawing.** The `draw` methods only call `target.draw(...)` on an object you supply.
- **Textures and fonts.** These resources record file paths under `data_dir`, which defaults to `../data`. Nothing reads the files.
- **Physics.** Body and fixture definitions describe what a physics engine would need. Nothing here steps a world.
- **Game logic.** Scoring, spawning and collision handling are not included. `NpcView` expects another object to supply the logic.