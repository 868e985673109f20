"""
Tests for the command-line interface.
"""

import json

import pytest

from ..cli import PlayLoop, main
from ..engine_core.persistence import SaveStore
from ..games.demo import DEMO_CUSTOM_EFFECTS, DEMO_INTERACTIONS, LANTERN_ROOM
from ..session import SessionManager


@pytest.fixture
def play_loop(tmp_path, demo_description):
    manager = SessionManager()
    session = manager.create_session(
        demo_description, custom_effects=DEMO_CUSTOM_EFFECTS, interactions=DEMO_INTERACTIONS
    )
    output = []
    loop = PlayLoop(manager, session, SaveStore(save_dir=tmp_path), write=output.append)
    return loop, output


class TestValidateCommand:
    """Tests for `pncengine validate`."""

    def test_valid_file(self, tmp_path, demo_description, capsys):
        path = tmp_path / "demo.json"
        path.write_text(json.dumps(demo_description.to_dict()), encoding="utf-8")

        assert main(["validate", str(path)]) == 0
        out = capsys.readouterr().out
        assert "The Lighthouse" in out
        assert "OK" in out

    def test_invalid_file(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"locations": []}), encoding="utf-8")

        assert main(["validate", str(path)]) == 1
        assert "At least one location is required" in capsys.readouterr().out

    def test_unreadable_file(self, tmp_path, capsys):
        assert main(["validate", str(tmp_path / "missing.xml")]) == 1
        assert "Error" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1


class TestPlayLoop:
    """Tests for the text front end."""

    def test_click_and_inventory(self, play_loop):
        loop, output = play_loop
        loop.handle("click 120 215")
        assert "You pick up a brass key." in output
        assert "[audio: audio/pickup.ogg]" in output

        output.clear()
        loop.handle("inv")
        assert output == ["   1: matchbox", "   5: brass key"]

    def test_select_twice_uses_item(self, play_loop):
        loop, output = play_loop
        loop.handle("click 120 215")
        loop.handle("select 1")
        assert loop.game.active_item == 1

        output.clear()
        loop.handle("select 5")
        assert output == ["You used the matchbox on the brass key, but nothing happened."]
        assert loop.game.active_item is None

    def test_save_and_load(self, play_loop):
        loop, output = play_loop
        loop.handle("click 120 215")
        loop.handle("click 340 100")
        loop.handle("save top")
        loop.handle("click 200 150")

        loop.handle("load top")
        assert loop.game.player_location == LANTERN_ROOM
        assert loop.game.player_inventory.item_ids() == [1, 5]
        assert "Loaded slot 'top'." in output

    def test_load_missing_slot(self, play_loop):
        loop, output = play_loop
        loop.handle("load nothing")
        assert any(line.startswith("Cannot use that save") for line in output)

    def test_bad_numbers(self, play_loop):
        loop, output = play_loop
        loop.handle("click here there")
        assert output[-1] == "Coordinates and item ids must be numbers."

    def test_refused_action_is_reported(self, play_loop):
        loop, output = play_loop
        loop.handle("look")
        loop.handle("use 1")
        assert output[-1] == "(No item is active)"

    def test_quit(self, play_loop):
        loop, _ = play_loop
        assert not loop.handle("quit")
        assert loop.handle("")

    def test_run_until_eof(self, play_loop):
        loop, output = play_loop
        lines = iter(["look", "click 0 0"])

        def read(prompt):
            try:
                return next(lines)
            except StopIteration:
                raise EOFError

        loop.read = read
        loop.run()
        assert output[0] == "The Lighthouse"
        assert "Waves wash over the pebbles." in output
