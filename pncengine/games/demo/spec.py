"""
The Lighthouse - Game description

Hand-authored. The description defines:
- Locations (beach, lantern room) and their hotspots
- Items (matchbox, brass key, oil can)
- Events gated on who holds which item

The custom consequence "light_lamp" and the matchbox/oil can interaction
are bound in code below.
"""

from __future__ import annotations

from ...engine_core.builder import build_game
from ...engine_core.state import Game
from ...spec_schema.game_description import (
    ConsequenceDescription,
    EventDescription,
    GameDescription,
    ItemDescription,
    LocationDescription,
    PrerequisiteDescription,
)

# Location ids
BEACH = 1
LANTERN_ROOM = 2

# Item ids
MATCHBOX = 1
BRASS_KEY = 5
OIL_CAN = 7

PLAYER = 0


def create_demo_description() -> GameDescription:
    """Create The Lighthouse game description."""
    return GameDescription(
        title="The Lighthouse",
        player_start_location=BEACH,
        player_initial_items=[
            ItemDescription(
                id=MATCHBOX,
                description="matchbox",
                image_path="images/items/matchbox.png",
                swidth=32, sheight=32, width=32, height=32,
                interactions=[OIL_CAN],
            ),
        ],
        locations=[_define_beach(), _define_lantern_room()],
        initial_message="The tide is out. A lighthouse stands dark against the sky.",
    )


def _define_beach() -> LocationDescription:
    return LocationDescription(
        id=BEACH,
        description="A pebbly beach below the lighthouse",
        image_path="images/beach.png",
        items=[
            ItemDescription(
                id=BRASS_KEY,
                description="brass key",
                image_path="images/items/key.png",
                sx=32, swidth=32, sheight=32,
                x=100, y=200, width=40, height=30,
            ),
        ],
        events=[
            EventDescription(
                description="Pick up the brass key",
                shape="rect",
                coords=[100, 200, 140, 230],
                prerequisites=[PrerequisiteDescription(kind="item", item_id=BRASS_KEY, location_id=BEACH)],
                consequences=[
                    ConsequenceDescription(kind="item", item_id=BRASS_KEY, location_id=PLAYER),
                    ConsequenceDescription(kind="message", text="You pick up a brass key."),
                    ConsequenceDescription(kind="audio", src="audio/pickup.ogg"),
                ],
            ),
            EventDescription(
                description="Unlock the lighthouse door",
                shape="rect",
                coords=[300, 50, 380, 300],
                prerequisites=[PrerequisiteDescription(kind="item", item_id=BRASS_KEY, location_id=PLAYER)],
                consequences=[
                    ConsequenceDescription(kind="audio", src="audio/door.ogg"),
                    ConsequenceDescription(kind="location", target_location_id=LANTERN_ROOM),
                    ConsequenceDescription(kind="message", text="The door creaks open and you climb the stairs."),
                ],
            ),
            EventDescription(
                description="Try the locked door",
                shape="rect",
                coords=[300, 50, 380, 300],
                prerequisites=[PrerequisiteDescription(kind="noitem", item_id=BRASS_KEY, location_id=PLAYER)],
                consequences=[ConsequenceDescription(kind="message", text="The door is locked.")],
            ),
            EventDescription(
                description="Look around the beach",
                shape="default",
                consequences=[ConsequenceDescription(kind="message", text="Waves wash over the pebbles.")],
            ),
        ],
    )


def _define_lantern_room() -> LocationDescription:
    return LocationDescription(
        id=LANTERN_ROOM,
        description="The lantern room at the top of the lighthouse",
        image_path="images/lantern_room.png",
        items=[
            ItemDescription(
                id=OIL_CAN,
                description="oil can",
                image_path="images/items/oilcan.png",
                sx=64, swidth=32, sheight=32,
                x=185, y=135, width=30, height=30,
            ),
        ],
        events=[
            EventDescription(
                description="Take the oil can",
                shape="circle",
                coords=[200, 150, 20],
                prerequisites=[PrerequisiteDescription(kind="item", item_id=OIL_CAN, location_id=LANTERN_ROOM)],
                consequences=[
                    ConsequenceDescription(kind="item", item_id=OIL_CAN, location_id=PLAYER),
                    ConsequenceDescription(kind="message", text="You take the oil can."),
                ],
            ),
            EventDescription(
                description="Light the lamp",
                shape="poly",
                coords=[400, 100, 460, 100, 460, 180, 400, 180],
                prerequisites=[
                    PrerequisiteDescription(kind="item", item_id=OIL_CAN, location_id=PLAYER),
                    PrerequisiteDescription(kind="item", item_id=MATCHBOX, location_id=PLAYER),
                ],
                consequences=[
                    ConsequenceDescription(kind="custom", name="light_lamp"),
                    ConsequenceDescription(kind="message", text="The lamp blazes to life. Ships will find their way home."),
                ],
            ),
            EventDescription(
                description="Go down the stairs",
                shape="rect",
                coords=[0, 350, 80, 400],
                consequences=[ConsequenceDescription(kind="location", target_location_id=BEACH)],
            ),
            EventDescription(
                description="Listen",
                shape="default",
                consequences=[ConsequenceDescription(kind="message", text="You hear the sea far below.")],
            ),
        ],
    )


def _light_lamp(game: Game) -> bool:
    # The oil is used up
    game.player_inventory.remove(OIL_CAN)
    return True


def _matches_on_oil(game: Game):
    game.post_message("Striking a match next to the oil can is a terrible idea.")


DEMO_CUSTOM_EFFECTS = {"light_lamp": _light_lamp}

DEMO_INTERACTIONS = {(MATCHBOX, OIL_CAN): _matches_on_oil}


def create_demo_game(strict_content: bool = True) -> Game:
    """Build a fresh game of The Lighthouse."""
    return build_game(
        create_demo_description(),
        custom_effects=DEMO_CUSTOM_EFFECTS,
        interactions=DEMO_INTERACTIONS,
        strict_content=strict_content,
    )
