"""
Game Builder - Creates a Game from a GameDescription.

This is the second stage of loading: the description is already parsed
(and ideally validated); here it is mapped onto engine objects in one pass.
No Game exists until every location, item and event is built.

Code for custom consequences and item interactions is supplied here by key:
- custom_effects: consequence key -> effect(game)
- interactions: (item_id, active_item_id) -> effect(game)

A custom consequence's key is its content name, or
"{location_id}:{event_index}:{consequence_index}" when it has none.
"""

from __future__ import annotations
import logging
from typing import Mapping

from ..exceptions import ContentAuthoringError
from ..spec_schema.game_description import (
    PLAYER_LOCATION_ID,
    ConsequenceDescription,
    ConsequenceKind,
    EventDescription,
    GameDescription,
    ItemDescription,
    PrerequisiteDescription,
    PrerequisiteKind,
)
from .effect_resolver import Consequence, CustomEffect, Prerequisite
from .event import Event, HitRegion
from .state import Game, Inventory, InteractionEffect, Item, Location, SpriteRect

logger = logging.getLogger(__name__)


def build_game(
    description: GameDescription,
    custom_effects: Mapping[str, CustomEffect] | None = None,
    interactions: Mapping[tuple[int, int], InteractionEffect] | None = None,
    strict_content: bool = True,
) -> Game:
    """
    Build a playable Game.

    Args:
        description: Parsed game description
        custom_effects: Code for custom consequences, by key
        interactions: Code for item interactions, by (item_id, active_item_id)
        strict_content: Raise on unbound interactions (authoring mode)

    Returns:
        A Game at the description's start location

    Raises:
        UnrecognizedShapeError: an event has an unknown hit-region shape
        ContentAuthoringError: an unknown prerequisite or consequence kind
        UnknownLocationError: the start location does not exist
    """
    interactions = interactions or {}
    seen_items: set[int] = set()

    def make_items(item_descs: list[ItemDescription], owner: str) -> list[Item]:
        items = []
        for item_desc in item_descs:
            if item_desc.id in seen_items:
                logger.warning(
                    "Item %s already has an owner; ignoring the copy in %s", item_desc.id, owner
                )
                continue
            seen_items.add(item_desc.id)
            items.append(_build_item(item_desc, interactions))
        return items

    player_inventory = Inventory.of(
        make_items(description.player_initial_items, "the player"), owner="player"
    )

    locations: dict[int, Location] = {}
    for location_desc in description.locations:
        if location_desc.id in locations:
            raise ContentAuthoringError(f"Duplicate location id {location_desc.id}")
        owner = f"location {location_desc.id}"
        locations[location_desc.id] = Location(
            id=location_desc.id,
            description=location_desc.description,
            image_path=location_desc.image_path,
            inventory=Inventory.of(make_items(location_desc.items, owner), owner=owner),
            events=tuple(
                _build_event(event_desc, location_desc.id, index)
                for index, event_desc in enumerate(location_desc.events)
            ),
        )

    # Interactions supplied for pairs the content never declared
    for (item_id, active_id), effect in interactions.items():
        item = _find_item(player_inventory, locations, item_id)
        if item is None:
            logger.warning("Interaction bound for unknown item %s", item_id)
        elif active_id not in item.interactions:
            item.bind_interaction(active_id, effect)

    game = Game(
        locations=locations,
        player_inventory=player_inventory,
        player_location=description.player_start_location,
        title=description.title,
        custom_effects=dict(custom_effects or {}),
        strict_content=strict_content,
    )
    if description.initial_message:
        game.post_message(description.initial_message)

    logger.info(
        "Built game '%s': %d locations, %d items",
        game.title, len(locations), len(seen_items),
    )
    return game


def custom_effect_key(location_id: int, event_index: int, consequence_index: int) -> str:
    """Key of an unnamed custom consequence."""
    return f"{location_id}:{event_index}:{consequence_index}"


def _find_item(player_inventory: Inventory, locations: dict[int, Location], item_id: int) -> Item | None:
    item = player_inventory.get_item(item_id)
    if item is not None:
        return item
    for location in locations.values():
        item = location.inventory.get_item(item_id)
        if item is not None:
            return item
    return None


def _build_item(
    desc: ItemDescription, interactions: Mapping[tuple[int, int], InteractionEffect]
) -> Item:
    return Item(
        id=desc.id,
        description=desc.description,
        image_path=desc.image_path,
        sprite=SpriteRect(
            sx=desc.sx, sy=desc.sy, swidth=desc.swidth, sheight=desc.sheight,
            x=desc.x, y=desc.y, width=desc.width, height=desc.height,
        ),
        interactions={
            other_id: interactions.get((desc.id, other_id))
            for other_id in desc.interactions
        },
    )


def _build_event(desc: EventDescription, location_id: int, event_index: int) -> Event:
    return Event(
        description=desc.description,
        prerequisites=tuple(_build_prerequisite(p) for p in desc.prerequisites),
        consequences=tuple(
            _build_consequence(c, location_id, event_index, i)
            for i, c in enumerate(desc.consequences)
        ),
        hit_region=HitRegion.from_shape(desc.shape, desc.coords, desc.description),
    )


def _build_prerequisite(desc: PrerequisiteDescription) -> Prerequisite:
    try:
        kind = PrerequisiteKind(desc.kind)
    except ValueError:
        raise ContentAuthoringError(f"Unknown prerequisite kind '{desc.kind}'") from None
    return Prerequisite(kind=kind, item_id=desc.item_id, location_id=desc.location_id)


def _build_consequence(
    desc: ConsequenceDescription, location_id: int, event_index: int, index: int
) -> Consequence:
    try:
        kind = ConsequenceKind(desc.kind)
    except ValueError:
        raise ContentAuthoringError(f"Unknown consequence kind '{desc.kind}'") from None

    if kind == ConsequenceKind.ITEM:
        if desc.item_id is None:
            raise ContentAuthoringError(f"Item consequence at location {location_id} has no item id")
        # Direction comes from the event's own location
        if not desc.location_id:
            return Consequence.transfer_item(desc.item_id, location_id, PLAYER_LOCATION_ID)
        return Consequence.transfer_item(desc.item_id, PLAYER_LOCATION_ID, location_id)

    if kind == ConsequenceKind.LOCATION:
        if desc.target_location_id is None:
            raise ContentAuthoringError(
                f"Location consequence at location {location_id} has no target"
            )
        return Consequence.move_player(desc.target_location_id)

    if kind == ConsequenceKind.MESSAGE:
        return Consequence.message(desc.text or "")

    if kind == ConsequenceKind.AUDIO:
        return Consequence.audio(desc.src or "")

    return Consequence.custom(desc.name or custom_effect_key(location_id, event_index, index))
