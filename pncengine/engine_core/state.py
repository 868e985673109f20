"""
Game State - Locations, inventories, items and the root Game aggregate.

Design principles:
- Single owner: an item id lives in exactly one Inventory at a time
- Transfers, never copies: moving an item is get + add + remove in one step
- Deterministic: one click runs to completion before the next
- Rendering-free: image paths are opaque strings, hit tests are injected

The Game also carries the channels the UI drains once per update cycle:
messages, audio cues and the redraw flag.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, TYPE_CHECKING

from ..exceptions import UnboundInteractionError, UnknownLocationError
from ..spec_schema.game_description import PLAYER_LOCATION_ID
from .effect_resolver import AudioCue, CustomEffect
from .event import Event

if TYPE_CHECKING:
    from .geometry import HitTest, Point

logger = logging.getLogger(__name__)

# An interaction receives the game and mutates it as it likes.
InteractionEffect = Callable[["Game"], None]


@dataclass(frozen=True)
class SpriteRect:
    """Where the item graphic sits on its sprite sheet and on the location image."""
    sx: int = 0
    sy: int = 0
    swidth: int = 0
    sheight: int = 0
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


@dataclass
class Item:
    """
    An inert game object.

    interactions maps the id of another item to the code that runs when the
    player uses that item on this one. A None value is an interaction the
    content declared but nobody has bound yet.
    """
    id: int
    description: str = ""
    image_path: str = ""
    sprite: SpriteRect = field(default_factory=SpriteRect)
    interactions: dict[int, Optional[InteractionEffect]] = field(default_factory=dict)

    def bind_interaction(self, other_item_id: int, effect: InteractionEffect):
        self.interactions[other_item_id] = effect

    def interact(self, game: Game) -> bool:
        """
        Use the game's active item on this item.

        Returns False without touching anything when no item is active or the
        active item is this one. Otherwise the interaction (or a "nothing
        happened" message) runs and the active item is cleared, even if the
        interaction raises.
        """
        active_id = game.active_item
        if active_id is None or active_id == self.id:
            return False

        try:
            if active_id in self.interactions:
                effect = self.interactions[active_id]
                if effect is not None:
                    effect(game)
                elif game.strict_content:
                    raise UnboundInteractionError(self.id, active_id, self.description)
                else:
                    logger.warning(
                        "Unbound interaction between item %s and item %s", self.id, active_id
                    )
                    game.post_message(self._nothing_happened(game, active_id))
            else:
                game.post_message(self._nothing_happened(game, active_id))
        finally:
            game.active_item = None
        return True

    def _nothing_happened(self, game: Game, active_id: int) -> str:
        active = game.player_inventory.get_item(active_id)
        name = active.description if active else f"item {active_id}"
        return f"You used the {name} on the {self.description}, but nothing happened."


@dataclass
class Inventory:
    """
    Items owned by the player or by a location, keyed by item id.

    Adding a duplicate id and removing an absent id are tolerated no-ops.
    """
    items: dict[int, Item] = field(default_factory=dict)
    owner: str = ""

    @classmethod
    def of(cls, items: list[Item] | tuple[Item, ...], owner: str = "") -> Inventory:
        inventory = cls(owner=owner)
        for item in items:
            inventory.add(item)
        return inventory

    def add(self, item: Item) -> bool:
        """Insert an item. Returns False if the id was already present."""
        if item.id in self.items:
            logger.warning(
                "Attempted to add item %s to %s, but it's already there",
                item.id, self.owner or "inventory",
            )
            return False
        self.items[item.id] = item
        return True

    def remove(self, item_id: int) -> Item | None:
        """Remove and return an item; absent ids are ignored."""
        return self.items.pop(item_id, None)

    def get_item(self, item_id: int) -> Item | None:
        return self.items.get(item_id)

    def contains(self, item_id: int) -> bool:
        return item_id in self.items

    def transfer_to(self, target: Inventory, item_id: int) -> bool:
        """
        Move an item into another inventory.

        Returns False and changes nothing if the item is not here, or if the
        target already lists that id.
        """
        item = self.items.get(item_id)
        if item is None or target is self:
            return False
        if not target.add(item):
            return False
        del self.items[item_id]
        return True

    def item_ids(self) -> list[int]:
        return sorted(self.items)

    def snapshot(self) -> tuple[Item, ...]:
        """Items ordered by id, detached from the live mapping."""
        return tuple(self.items[i] for i in sorted(self.items))

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.items

    def __iter__(self) -> Iterator[Item]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class Location:
    """A node of the game graph: a background, the items here and the events here."""
    id: int
    description: str = ""
    image_path: str = ""
    inventory: Inventory = field(default_factory=Inventory)
    events: tuple[Event, ...] = ()

    def get_available_events(self, game: Game) -> list[Event]:
        """Events whose prerequisites all hold right now, in declaration order."""
        return [e for e in self.events if e.is_available(game)]


@dataclass
class ClickOutcome:
    """Result of dispatching one click at the player's location."""
    executed: list[Event] = field(default_factory=list)
    suppressed_default: bool = False
    deactivated_item: int | None = None

    @property
    def any_executed(self) -> bool:
        return bool(self.executed)


@dataclass
class Game:
    """
    The root aggregate: location graph, player inventory and UI channels.

    Invariants:
    - player_location always keys an existing Location
    - active_item, when set, keys an item in player_inventory
    """
    locations: dict[int, Location]
    player_inventory: Inventory = field(default_factory=lambda: Inventory(owner="player"))
    player_location: int = 1
    title: str = "Point and Click Game"

    active_item: int | None = None

    # Channels drained by the UI
    message_buffer: list[str] = field(default_factory=list)
    audio_cues: list[AudioCue] = field(default_factory=list)
    redraw_needed: bool = True

    # Code bound to custom consequences, by key
    custom_effects: dict[str, CustomEffect] = field(default_factory=dict)

    # Unbound interactions raise when strict; log and continue otherwise
    strict_content: bool = True

    def __post_init__(self):
        if self.player_location not in self.locations:
            raise UnknownLocationError(self.player_location)

    # =========================================================================
    # Graph and ownership
    # =========================================================================

    @property
    def current_location(self) -> Location:
        return self.locations[self.player_location]

    def get_location(self, location_id: int) -> Location:
        location = self.locations.get(location_id)
        if location is None:
            raise UnknownLocationError(location_id)
        return location

    def inventory_of(self, owner_id: int | None) -> Inventory:
        """The player's inventory for owner 0, otherwise that location's."""
        if owner_id is None or owner_id == PLAYER_LOCATION_ID:
            return self.player_inventory
        return self.get_location(owner_id).inventory

    def item_owner(self, item_id: int) -> int | None:
        """0 if the player holds the item, the location id if a location does."""
        if self.player_inventory.contains(item_id):
            return PLAYER_LOCATION_ID
        for location_id, location in self.locations.items():
            if location.inventory.contains(item_id):
                return location_id
        return None

    def find_item(self, item_id: int) -> Item | None:
        owner = self.item_owner(item_id)
        if owner is None:
            return None
        return self.inventory_of(owner).get_item(item_id)

    def move_player(self, location_id: int):
        if location_id not in self.locations:
            raise UnknownLocationError(location_id)
        self.player_location = location_id

    # =========================================================================
    # Events and clicks
    # =========================================================================

    def available_events_at(self, location_id: int) -> list[Event]:
        return self.get_location(location_id).get_available_events(self)

    def dispatch_click(self, point: Point, hit_test: HitTest) -> ClickOutcome:
        """
        Handle a click on the game canvas.

        Available events at the player location are tested in declaration
        order. Every event whose region contains the point executes; a default
        event is skipped, and testing stops, once any event has executed for
        this click. Any active item is deactivated afterwards, even when a
        consequence raises.

        The event list is a snapshot taken before the first execution.
        """
        outcome = ClickOutcome(deactivated_item=self.active_item)
        try:
            for event in self.current_location.get_available_events(self):
                if not hit_test(event.hit_region, point):
                    continue
                if event.is_default and outcome.executed:
                    outcome.suppressed_default = True
                    break
                logger.debug("Executing event '%s'", event.description)
                event.execute(self)
                outcome.executed.append(event)
        finally:
            self.deactivate_active_item()
        return outcome

    # =========================================================================
    # Active item
    # =========================================================================

    def activate_item(self, item_id: int) -> bool:
        """
        Select an item from the player inventory.

        Refused while another item is active; a second inventory click should
        go through use_item_on() instead.
        """
        if self.active_item is not None:
            logger.debug("Item %s already active; not activating %s", self.active_item, item_id)
            return False
        if not self.player_inventory.contains(item_id):
            logger.debug("Item %s is not in the player inventory", item_id)
            return False
        self.active_item = item_id
        return True

    def deactivate_active_item(self) -> bool:
        if self.active_item is None:
            return False
        self.active_item = None
        return True

    def use_item_on(self, target_item_id: int) -> bool:
        """Use the active item on another item in the player inventory."""
        target = self.player_inventory.get_item(target_item_id)
        if target is None:
            return False
        return target.interact(self)

    # =========================================================================
    # UI channels
    # =========================================================================

    def post_message(self, text: str):
        self.message_buffer.append(text)

    def emit_audio(self, cue: AudioCue):
        self.audio_cues.append(cue)

    def current_messages(self) -> list[str]:
        return list(self.message_buffer)

    def take_messages(self) -> list[str]:
        """Hand off the buffered messages and clear the buffer."""
        messages, self.message_buffer = self.message_buffer, []
        return messages

    def take_audio_cues(self) -> list[AudioCue]:
        cues, self.audio_cues = self.audio_cues, []
        return cues

    def clear_redraw(self):
        self.redraw_needed = False

    def bind_custom_effect(self, key: str, effect: CustomEffect):
        self.custom_effects[key] = effect

    # =========================================================================
    # Snapshots for the renderer
    # =========================================================================

    def current_location_id(self) -> int:
        return self.player_location

    def player_inventory_snapshot(self) -> tuple[Item, ...]:
        return self.player_inventory.snapshot()

    def location_inventory_snapshot(self, location_id: int) -> tuple[Item, ...]:
        return self.get_location(location_id).inventory.snapshot()
