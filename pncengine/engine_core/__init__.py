"""
Engine Core - Deterministic point-and-click game state.

The engine is the runtime that:
1. Builds a Game from a GameDescription
2. Tracks locations, inventories and the active item
3. Filters events by their prerequisites
4. Dispatches clicks and applies consequences
5. Saves and restores the player's progress
"""

from .state import Game, Location, Inventory, Item, SpriteRect, ClickOutcome
from .event import Event, HitRegion
from .effect_resolver import Prerequisite, Consequence, AudioCue, ExecutionReport
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action
from .builder import build_game, custom_effect_key
from .geometry import hit_test
from .persistence import SavedState, SaveStore, save_state, load_state

__all__ = [
    "Game",
    "Location",
    "Inventory",
    "Item",
    "SpriteRect",
    "ClickOutcome",
    "Event",
    "HitRegion",
    "Prerequisite",
    "Consequence",
    "AudioCue",
    "ExecutionReport",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
    "build_game",
    "custom_effect_key",
    "hit_test",
    "SavedState",
    "SaveStore",
    "save_state",
    "load_state",
]
