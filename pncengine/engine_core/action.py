"""
Action System - Player inputs and their results.

Actions represent what the input layer observed:
1. A click on the game canvas (with its point)
2. A click on an inventory item (activate, or use the active item on it)
3. An explicit deselection

All state changes flow through actions applied by the Reducer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of player input."""
    CLICK = "click"
    ACTIVATE_ITEM = "activate_item"
    DEACTIVATE_ITEM = "deactivate_item"
    USE_ITEM = "use_item"


@dataclass
class ActionPayload:
    """
    Parameters for an action.

    Different action types use different fields; the reducer validates.
    """
    point: tuple[float, float] | None = None
    item_id: int | None = None


@dataclass
class Action:
    """A single player input to apply to a game."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)
    action_id: str | None = None

    @classmethod
    def click(cls, x: float, y: float) -> Action:
        """Factory for a canvas click."""
        return cls(action_type=ActionType.CLICK, payload=ActionPayload(point=(x, y)))

    @classmethod
    def activate_item(cls, item_id: int) -> Action:
        return cls(action_type=ActionType.ACTIVATE_ITEM, payload=ActionPayload(item_id=item_id))

    @classmethod
    def deactivate_item(cls) -> Action:
        return cls(action_type=ActionType.DEACTIVATE_ITEM)

    @classmethod
    def use_item(cls, target_item_id: int) -> Action:
        """Factory for using the active item on target_item_id."""
        return cls(action_type=ActionType.USE_ITEM, payload=ActionPayload(item_id=target_item_id))

    @classmethod
    def inventory_click(cls, item_id: int, active_item: int | None) -> Action:
        """
        Route an inventory click the way the inventory window does.

        With nothing active the item becomes active; otherwise the active item
        is used on the clicked one.
        """
        if active_item is None:
            return cls.activate_item(item_id)
        return cls.use_item(item_id)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action did anything
    - Messages and audio cues handed off during this cycle
    - Which events executed (for clicks)
    - Whether the renderer must redraw the location
    """
    success: bool
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    messages: list[str] = field(default_factory=list)
    audio_cues: list[str] = field(default_factory=list)
    events_executed: list[str] = field(default_factory=list)
    redraw_needed: bool = False
    location_id: int | None = None
    active_item: int | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None, **kwargs: Any) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code, **kwargs)
