"""
Tests for saving and loading progress.

Tests:
- save_state / load_state round trip
- Single-owner invariant after a load
- Rejected saves leave the game untouched
- SaveStore slots on disk
"""

import json

import pytest

from ..engine_core.geometry import hit_test
from ..engine_core.persistence import SavedState, load_state, save_state
from ..exceptions import SaveDataError
from ..games.demo import BEACH, BRASS_KEY, LANTERN_ROOM, MATCHBOX, OIL_CAN, create_demo_game
from .conftest import all_item_ids


def play_to_lantern_room(game):
    for point in [(120, 215), (340, 100), (200, 150)]:
        game.dispatch_click(point, hit_test)
    return game


class TestSaveLoad:
    """Tests for the save/load contract."""

    def test_save_captures_player_side(self, demo_game):
        play_to_lantern_room(demo_game)
        saved = save_state(demo_game)

        assert saved.player_location == LANTERN_ROOM
        assert saved.player_inventory == (MATCHBOX, BRASS_KEY, OIL_CAN)

    def test_round_trip_into_fresh_game(self, demo_game):
        saved = save_state(play_to_lantern_room(demo_game))

        fresh = create_demo_game()
        load_state(fresh, saved)

        assert fresh.player_location == LANTERN_ROOM
        assert fresh.player_inventory.item_ids() == [MATCHBOX, BRASS_KEY, OIL_CAN]
        assert not fresh.locations[BEACH].inventory.contains(BRASS_KEY)
        assert not fresh.locations[LANTERN_ROOM].inventory.contains(OIL_CAN)
        ids = all_item_ids(fresh)
        assert len(ids) == len(set(ids))

    def test_load_discards_unsaved_items(self, demo_game):
        saved = save_state(demo_game)
        play_to_lantern_room(demo_game)

        load_state(demo_game, saved)
        assert demo_game.player_location == BEACH
        assert demo_game.player_inventory.item_ids() == [MATCHBOX]

    def test_load_clears_active_item_and_redraws(self, demo_game):
        saved = save_state(demo_game)
        demo_game.activate_item(MATCHBOX)
        demo_game.clear_redraw()

        load_state(demo_game, saved)
        assert demo_game.active_item is None
        assert demo_game.redraw_needed

    def test_unknown_location_leaves_game_untouched(self, demo_game):
        with pytest.raises(SaveDataError):
            load_state(demo_game, SavedState(player_location=99, player_inventory=(MATCHBOX,)))
        assert demo_game.player_location == BEACH

    def test_unknown_item_leaves_game_untouched(self, demo_game):
        with pytest.raises(SaveDataError):
            load_state(demo_game, SavedState(player_location=LANTERN_ROOM, player_inventory=(404,)))
        assert demo_game.player_location == BEACH
        assert demo_game.player_inventory.item_ids() == [MATCHBOX]

    def test_saved_state_dict(self):
        saved = SavedState(player_location=2, player_inventory=(1, 5))
        data = saved.to_dict()
        assert data == {"version": 1, "player_location": 2, "player_inventory": [1, 5]}
        assert SavedState.from_dict(data) == saved

    @pytest.mark.parametrize("data", [
        {"player_inventory": [1]},
        {"player_location": 1},
        {"player_location": "here", "player_inventory": []},
        {"player_location": 1, "player_inventory": None},
    ])
    def test_saved_state_missing_values(self, data):
        with pytest.raises(SaveDataError):
            SavedState.from_dict(data)

    @pytest.mark.parametrize("inventory", ["57", {"5": 1}, 5])
    def test_saved_inventory_must_be_a_list(self, inventory):
        """A string is not split into digits."""
        with pytest.raises(SaveDataError, match="not a list"):
            SavedState.from_dict({"player_location": 1, "player_inventory": inventory})


class TestSaveStore:
    """Tests for file-based save slots."""

    def test_save_and_load_slot(self, save_store, demo_game):
        play_to_lantern_room(demo_game)
        save_store.save("slot1", demo_game)

        assert save_store.exists("slot1")
        assert save_store.list_slots() == ["slot1"]

        fresh = create_demo_game()
        save_store.load("slot1", fresh)
        assert fresh.player_location == LANTERN_ROOM

    def test_file_format(self, save_store, demo_game):
        save_store.save("a", demo_game)
        data = json.loads((save_store.save_dir / "a.json").read_text(encoding="utf-8"))
        assert data["player_location"] == BEACH
        assert data["player_inventory"] == [MATCHBOX]

    def test_missing_slot(self, save_store, demo_game):
        with pytest.raises(SaveDataError):
            save_store.load("empty", demo_game)

    def test_corrupt_slot(self, save_store, demo_game):
        (save_store.save_dir / "bad.json").write_text("{oops", encoding="utf-8")
        with pytest.raises(SaveDataError):
            save_store.read("bad")

    def test_invalid_slot_name(self, save_store, demo_game):
        with pytest.raises(SaveDataError):
            save_store.save("../escape", demo_game)

    def test_delete(self, save_store, demo_game):
        save_store.save("gone", demo_game)
        assert save_store.delete("gone")
        assert not save_store.delete("gone")
        assert save_store.list_slots() == []

    def test_save_dir_from_environment(self, tmp_path, monkeypatch):
        from ..engine_core.persistence import SaveStore

        monkeypatch.setenv("PNC_SAVE_DIR", str(tmp_path / "env_saves"))
        store = SaveStore()
        assert store.save_dir == tmp_path / "env_saves"
        assert store.save_dir.is_dir()
