"""
Integration tests - play the built-in game from start to finish.
"""

from ..engine_core.action import Action
from ..engine_core.reducer import Reducer
from ..games.demo import BEACH, BRASS_KEY, LANTERN_ROOM, MATCHBOX, OIL_CAN, create_demo_game
from .conftest import all_item_ids


class TestLighthouse:
    """A full play-through through the reducer."""

    def test_full_playthrough(self):
        game = create_demo_game()
        reducer = Reducer()
        assert game.take_messages() == ["The tide is out. A lighthouse stands dark against the sky."]

        steps = [
            (Action.click(340, 100), ["The door is locked."], BEACH),
            (Action.click(10, 10), ["Waves wash over the pebbles."], BEACH),
            (Action.click(120, 215), ["You pick up a brass key."], BEACH),
            (Action.click(340, 100), ["The door creaks open and you climb the stairs."], LANTERN_ROOM),
            (Action.click(200, 150), ["You take the oil can."], LANTERN_ROOM),
            (
                Action.click(430, 140),
                ["The lamp blazes to life. Ships will find their way home."],
                LANTERN_ROOM,
            ),
        ]
        for action, messages, location in steps:
            result = reducer.apply(game, action)
            assert result.success
            assert result.messages == messages
            assert result.location_id == location
            ids = all_item_ids(game)
            assert len(ids) == len(set(ids))

        # The oil was used up lighting the lamp
        assert game.player_inventory.item_ids() == [MATCHBOX, BRASS_KEY]
        assert OIL_CAN not in all_item_ids(game)
        assert "Light the lamp" not in [e.description for e in game.available_events_at(LANTERN_ROOM)]

        result = reducer.apply(game, Action.click(430, 140))
        assert result.messages == ["You hear the sea far below."]

        result = reducer.apply(game, Action.click(40, 375))
        assert result.location_id == BEACH
        assert result.redraw_needed
