"""
Persistence - Saves and restores the player's progress.

The persisted state is exactly:
- player_location
- the ids of the items in the player's inventory

Everything else (locations, events, bound code) comes from the game
description when the game is rebuilt. Loading restores the player side and
takes every saved item away from whichever location still lists it, so each
item keeps a single owner.

SaveStore keeps one JSON file per save slot on local disk.
"""

from __future__ import annotations
import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..exceptions import SaveDataError
from ..spec_schema.game_description import PLAYER_LOCATION_ID
from .state import Game

logger = logging.getLogger(__name__)

SAVE_FORMAT_VERSION = 1

_SLOT_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")


@dataclass(frozen=True)
class SavedState:
    """The persisted part of a game."""
    player_location: int
    player_inventory: tuple[int, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": SAVE_FORMAT_VERSION,
            "player_location": self.player_location,
            "player_inventory": list(self.player_inventory),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SavedState:
        if not isinstance(data.get("player_inventory"), list):
            raise SaveDataError("The saved player inventory is not a list of item ids")
        try:
            return cls(
                player_location=int(data["player_location"]),
                player_inventory=tuple(sorted(int(i) for i in data["player_inventory"])),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SaveDataError(f"The saved game data is missing one or more values: {e}") from e


def save_state(game: Game) -> SavedState:
    """Capture the persisted part of a game."""
    return SavedState(
        player_location=game.player_location,
        player_inventory=tuple(game.player_inventory.item_ids()),
    )


def load_state(game: Game, saved: SavedState):
    """
    Restore a saved state into a freshly built (or running) game.

    Raises SaveDataError, leaving the game untouched, if the save refers to a
    location or item this game doesn't have.
    """
    if saved.player_location not in game.locations:
        raise SaveDataError(f"Saved location {saved.player_location} does not exist")

    owners: dict[int, int] = {}
    for item_id in saved.player_inventory:
        owner = game.item_owner(item_id)
        if owner is None:
            raise SaveDataError(f"Saved item {item_id} does not exist in this game")
        owners[item_id] = owner

    saved_ids = set(saved.player_inventory)
    for item_id in game.player_inventory.item_ids():
        if item_id not in saved_ids:
            logger.info("Discarding item %s not present in the saved inventory", item_id)
            game.player_inventory.remove(item_id)

    for item_id, owner in owners.items():
        if owner != PLAYER_LOCATION_ID:
            game.inventory_of(owner).transfer_to(game.player_inventory, item_id)

    game.player_location = saved.player_location
    game.active_item = None
    game.redraw_needed = True


class SaveStore:
    """
    File-based save slots.

    Usage:
        store = SaveStore(save_dir="~/.pncengine/saves")
        store.save("slot1", game)
        ...
        store.load("slot1", fresh_game)
    """

    def __init__(self, save_dir: str | Path | None = None):
        if save_dir is None:
            save_dir = os.getenv("PNC_SAVE_DIR") or Path.home() / ".pncengine" / "saves"
        self.save_dir = Path(save_dir).expanduser()

        # Ensure save directory exists
        self.save_dir.mkdir(parents=True, exist_ok=True)

    def save(self, slot: str, game: Game) -> SavedState:
        saved = save_state(game)
        path = self._get_path(slot)
        path.write_text(json.dumps(saved.to_dict(), indent=2), encoding="utf-8")
        logger.info("Saved slot '%s' to %s", slot, path)
        return saved

    def read(self, slot: str) -> SavedState:
        path = self._get_path(slot)
        if not path.exists():
            raise SaveDataError(f"No saved game in slot '{slot}'")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SaveDataError(f"Cannot read saved game '{slot}': {e}") from e
        if not isinstance(data, dict):
            raise SaveDataError(f"Saved game '{slot}' is not an object")
        return SavedState.from_dict(data)

    def load(self, slot: str, game: Game) -> SavedState:
        saved = self.read(slot)
        load_state(game, saved)
        logger.info("Loaded slot '%s'", slot)
        return saved

    def exists(self, slot: str) -> bool:
        return self._get_path(slot).exists()

    def delete(self, slot: str) -> bool:
        path = self._get_path(slot)
        if not path.exists():
            return False
        path.unlink()
        return True

    def list_slots(self) -> list[str]:
        return sorted(p.stem for p in self.save_dir.glob("*.json"))

    def _get_path(self, slot: str) -> Path:
        if not _SLOT_PATTERN.match(slot):
            raise SaveDataError(f"Invalid save slot name '{slot}'")
        return self.save_dir / f"{slot}.json"
