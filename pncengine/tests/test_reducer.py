"""
Tests for the reducer (player actions).

Tests:
- Action application
- Payload validation
- Refusals as unsuccessful results
- Channel hand-off into the result
"""

import pytest

from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.reducer import Reducer, apply_action
from ..exceptions import UnboundInteractionError
from ..games.demo import BEACH, BRASS_KEY, LANTERN_ROOM, MATCHBOX, OIL_CAN


class TestClickAction:
    """Tests for click actions."""

    def test_click_reports_events_and_messages(self, demo_game):
        result = apply_action(demo_game, Action.click(120, 215))

        assert result.success
        assert result.events_executed == ["Pick up the brass key"]
        assert result.messages == ["You pick up a brass key."]
        assert result.audio_cues == ["audio/pickup.ogg"]
        assert result.redraw_needed
        assert result.location_id == BEACH

    def test_channels_are_drained(self, demo_game):
        apply_action(demo_game, Action.click(120, 215))
        assert demo_game.current_messages() == []
        assert demo_game.take_audio_cues() == []

    def test_locked_door_then_open(self, demo_game):
        result = apply_action(demo_game, Action.click(340, 100))
        assert result.messages == ["The door is locked."]
        assert result.location_id == BEACH

        apply_action(demo_game, Action.click(120, 215))
        result = apply_action(demo_game, Action.click(340, 100))
        assert result.location_id == LANTERN_ROOM
        assert result.events_executed == ["Unlock the lighthouse door"]
        assert result.audio_cues == ["audio/door.ogg"]

    def test_click_without_point_is_invalid(self, demo_game):
        action = Action(action_type=ActionType.CLICK, payload=ActionPayload())
        result = Reducer().apply(demo_game, action)

        assert not result.success
        assert result.error_code == "INVALID_ACTION"


class TestItemActions:
    """Tests for activate / deactivate / use."""

    def test_activate(self, demo_game):
        result = apply_action(demo_game, Action.activate_item(MATCHBOX))
        assert result.success
        assert result.active_item == MATCHBOX

    def test_activate_while_active_refused(self, demo_game):
        apply_action(demo_game, Action.click(120, 215))
        apply_action(demo_game, Action.activate_item(MATCHBOX))

        result = apply_action(demo_game, Action.activate_item(BRASS_KEY))
        assert not result.success
        assert result.error_code == "ITEM_ALREADY_ACTIVE"
        assert demo_game.active_item == MATCHBOX

    def test_activate_item_not_held(self, demo_game):
        result = apply_action(demo_game, Action.activate_item(OIL_CAN))
        assert not result.success
        assert result.error_code == "ITEM_NOT_HELD"

    def test_activate_requires_item_id(self, demo_game):
        action = Action(action_type=ActionType.ACTIVATE_ITEM, payload=ActionPayload())
        result = apply_action(demo_game, action)
        assert result.error_code == "INVALID_ACTION"

    def test_deactivate_is_always_fine(self, demo_game):
        assert apply_action(demo_game, Action.deactivate_item()).success
        apply_action(demo_game, Action.activate_item(MATCHBOX))
        result = apply_action(demo_game, Action.deactivate_item())
        assert result.success
        assert result.active_item is None

    def test_use_without_active_item(self, demo_game):
        result = apply_action(demo_game, Action.use_item(MATCHBOX))
        assert result.error_code == "NO_ACTIVE_ITEM"

    def test_use_on_same_item(self, demo_game):
        apply_action(demo_game, Action.activate_item(MATCHBOX))
        result = apply_action(demo_game, Action.use_item(MATCHBOX))
        assert result.error_code == "SAME_ITEM"
        assert demo_game.active_item == MATCHBOX

    def test_use_bound_interaction(self, demo_game):
        apply_action(demo_game, Action.click(120, 215))
        apply_action(demo_game, Action.click(340, 100))
        apply_action(demo_game, Action.click(200, 150))

        apply_action(demo_game, Action.activate_item(OIL_CAN))
        result = apply_action(demo_game, Action.use_item(MATCHBOX))

        assert result.success
        assert result.messages == ["Striking a match next to the oil can is a terrible idea."]
        assert result.active_item is None

    def test_use_with_nothing_happening(self, demo_game):
        apply_action(demo_game, Action.click(120, 215))
        apply_action(demo_game, Action.activate_item(MATCHBOX))
        result = apply_action(demo_game, Action.use_item(BRASS_KEY))

        assert result.messages == ["You used the matchbox on the brass key, but nothing happened."]

    def test_content_errors_propagate(self, tool_game):
        apply_action(tool_game, Action.activate_item(1))
        with pytest.raises(UnboundInteractionError):
            apply_action(tool_game, Action.use_item(3))


class TestInventoryClick:
    """Tests for routing an inventory click."""

    def test_nothing_active_activates(self):
        action = Action.inventory_click(4, active_item=None)
        assert action.action_type == ActionType.ACTIVATE_ITEM
        assert action.payload.item_id == 4

    def test_something_active_uses(self):
        action = Action.inventory_click(4, active_item=2)
        assert action.action_type == ActionType.USE_ITEM
        assert action.payload.item_id == 4
