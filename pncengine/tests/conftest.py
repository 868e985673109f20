"""
Pytest fixtures for engine tests.
"""

import pytest

from ..engine_core.effect_resolver import Consequence, Prerequisite
from ..engine_core.event import Event, HitRegion
from ..engine_core.persistence import SaveStore
from ..engine_core.state import Game, Inventory, Item, Location
from ..games.demo import create_demo_description, create_demo_game
from ..spec_schema import GameDescription


@pytest.fixture
def demo_description() -> GameDescription:
    """The built-in game's description."""
    return create_demo_description()


@pytest.fixture
def demo_game() -> Game:
    """A fresh game of the built-in adventure, with its code bound."""
    game = create_demo_game()
    game.take_messages()
    return game


@pytest.fixture
def key_room_game() -> Game:
    """
    Two locations. Location 1 holds item 5 behind a rect hotspot, a door
    gated on holding item 5, and a default event.
    """
    pickup = Event(
        description="Pick up the key",
        consequences=(Consequence.transfer_item(5, 1, 0),),
        hit_region=HitRegion.rect(0, 0, 10, 10),
    )
    door = Event(
        description="Open the door",
        prerequisites=(Prerequisite.has_item(5),),
        consequences=(Consequence.move_player(2), Consequence.message("The door opens.")),
        hit_region=HitRegion.rect(50, 50, 60, 60),
    )
    fallback = Event(
        description="Look around",
        consequences=(Consequence.message("Nothing here."),),
    )
    hall = Location(
        id=1,
        description="Hall",
        inventory=Inventory.of([Item(id=5, description="key")], owner="location 1"),
        events=(pickup, door, fallback),
    )
    garden = Location(id=2, description="Garden", inventory=Inventory(owner="location 2"))
    return Game(
        locations={1: hall, 2: garden},
        player_inventory=Inventory(owner="player"),
        player_location=1,
    )


@pytest.fixture
def tool_game() -> Game:
    """Player holds a hammer (1), a nail (2) and a rope (3); the nail reacts to the hammer."""
    hammer = Item(id=1, description="hammer")
    nail = Item(id=2, description="nail")
    rope = Item(id=3, description="rope", interactions={1: None})
    nail.bind_interaction(1, lambda game: game.post_message("Bang!"))
    return Game(
        locations={1: Location(id=1, description="Workshop")},
        player_inventory=Inventory.of([hammer, nail, rope], owner="player"),
    )


@pytest.fixture
def save_store(tmp_path) -> SaveStore:
    """A save store in a temporary directory."""
    return SaveStore(save_dir=tmp_path / "saves")


def all_item_ids(game: Game) -> list[int]:
    """Every item id across the player and every location, duplicates kept."""
    ids = list(game.player_inventory.item_ids())
    for location in game.locations.values():
        ids.extend(location.inventory.item_ids())
    return ids
