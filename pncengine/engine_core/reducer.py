"""
Reducer - Applies player actions to a game.

The reducer is the update cycle of the engine:
- Validates the action payload
- Dispatches to a handler by action type
- Hands off the message and audio channels into the ActionResult

Caller misuse (activating while another item is active, using an item with
nothing active) yields an unsuccessful ActionResult. Content-authoring errors
raised by consequences or interactions propagate to the caller.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from .action import Action, ActionResult, ActionType
from .geometry import HitTest, hit_test as default_hit_test
from .state import Game

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to a game.

    Stateless - all state is in the Game. The hit test decides which event
    regions contain a click.
    """
    hit_test: HitTest = default_hit_test

    def apply(self, game: Game, action: Action) -> ActionResult:
        """
        Apply an action to the game.

        Returns ActionResult with this cycle's messages, or an error.
        """
        validation_error = self._validate_action(game, action)
        if validation_error:
            result = ActionResult.failure(validation_error, error_code="INVALID_ACTION")
            return self._hand_off(game, result)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        result = handler(game, action)
        return self._hand_off(game, result)

    def _validate_action(self, game: Game, action: Action) -> str | None:
        """Returns error message if the payload is unusable, None if valid."""
        payload = action.payload
        if action.action_type == ActionType.CLICK and payload.point is None:
            return "Click action requires a point"
        if action.action_type in {ActionType.ACTIVATE_ITEM, ActionType.USE_ITEM}:
            if payload.item_id is None:
                return f"{action.action_type.value} requires an item id"
        return None

    def _get_handler(self, action_type: ActionType):
        handlers = {
            ActionType.CLICK: self._handle_click,
            ActionType.ACTIVATE_ITEM: self._handle_activate,
            ActionType.DEACTIVATE_ITEM: self._handle_deactivate,
            ActionType.USE_ITEM: self._handle_use,
        }
        return handlers.get(action_type)

    def _handle_click(self, game: Game, action: Action) -> ActionResult:
        outcome = game.dispatch_click(action.payload.point, self.hit_test)
        if outcome.suppressed_default:
            logger.debug("Default event suppressed at location %s", game.player_location)
        return ActionResult(
            success=True,
            events_executed=[e.description for e in outcome.executed],
        )

    def _handle_activate(self, game: Game, action: Action) -> ActionResult:
        item_id = action.payload.item_id
        if game.active_item is not None:
            return ActionResult.failure(
                f"Item {game.active_item} is already active",
                error_code="ITEM_ALREADY_ACTIVE",
            )
        if not game.activate_item(item_id):
            return ActionResult.failure(
                f"Item {item_id} is not in the player inventory",
                error_code="ITEM_NOT_HELD",
            )
        return ActionResult(success=True)

    def _handle_deactivate(self, game: Game, action: Action) -> ActionResult:
        game.deactivate_active_item()
        return ActionResult(success=True)

    def _handle_use(self, game: Game, action: Action) -> ActionResult:
        target_id = action.payload.item_id
        if game.active_item is None:
            return ActionResult.failure("No item is active", error_code="NO_ACTIVE_ITEM")
        if not game.player_inventory.contains(target_id):
            return ActionResult.failure(
                f"Item {target_id} is not in the player inventory",
                error_code="ITEM_NOT_HELD",
            )
        if not game.use_item_on(target_id):
            return ActionResult.failure(
                f"Item {target_id} cannot be used on itself",
                error_code="SAME_ITEM",
            )
        return ActionResult(success=True)

    def _hand_off(self, game: Game, result: ActionResult) -> ActionResult:
        """Move this cycle's channel contents into the result."""
        result.messages = game.take_messages()
        result.audio_cues = [cue.src for cue in game.take_audio_cues()]
        result.redraw_needed = game.redraw_needed
        result.location_id = game.player_location
        result.active_item = game.active_item
        return result


def apply_action(game: Game, action: Action, hit_test: HitTest = default_hit_test) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    return Reducer(hit_test=hit_test).apply(game, action)
