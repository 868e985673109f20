"""
Tests for session management.
"""

import threading

import pytest

from ..engine_core.action import Action
from ..engine_core.reducer import Reducer
from ..exceptions import DescriptionValidationError
from ..games.demo import DEMO_CUSTOM_EFFECTS, DEMO_INTERACTIONS, MATCHBOX
from ..session import SessionManager, SessionState
from ..spec_schema import GameDescription, LocationDescription


@pytest.fixture
def manager():
    return SessionManager()


@pytest.fixture
def session(manager, demo_description):
    return manager.create_session(
        demo_description,
        custom_effects=DEMO_CUSTOM_EFFECTS,
        interactions=DEMO_INTERACTIONS,
        metadata={"game_type": "demo"},
    )


class TestSessionLifecycle:
    """Tests for creating, finding and ending sessions."""

    def test_create_session(self, manager, session):
        assert session.session_id
        assert session.state == SessionState.ACTIVE
        assert session.game.title == "The Lighthouse"
        assert session.metadata == {"game_type": "demo"}
        assert manager.get_session(session.session_id) is session

    def test_invalid_description_rejected(self, manager):
        with pytest.raises(DescriptionValidationError):
            manager.create_session(GameDescription())
        assert manager.list_active_sessions() == []

    def test_end_session(self, manager, session):
        assert manager.end_session(session.session_id)
        assert session.state == SessionState.ENDED
        assert manager.get_session(session.session_id) is None
        assert not manager.end_session(session.session_id)

    def test_list_active_sessions(self, manager, session, demo_description):
        other = manager.create_session(demo_description)
        assert set(manager.list_active_sessions()) == {session.session_id, other.session_id}

    def test_cleanup_stale_sessions(self, manager, session):
        session.last_active_at -= 7200
        assert manager.cleanup_stale_sessions(max_age_seconds=3600) == 1
        assert session.state == SessionState.ABANDONED
        assert manager.list_active_sessions() == []

    def test_strictness_passed_to_games(self):
        manager = SessionManager(strict_content=False)
        session = manager.create_session(
            GameDescription(locations=[LocationDescription(id=1)])
        )
        assert not session.game.strict_content


class TestRunningActions:
    """Tests for running actions on a session's game."""

    def test_run_touches_session(self, manager, session):
        session.last_active_at = 0.0
        result = manager.run(session, lambda game: Reducer().apply(game, Action.activate_item(MATCHBOX)))
        assert result.success
        assert session.last_active_at > 0

    def test_run_holds_the_session_lock(self, manager, session):
        seen = []
        manager.run(session, lambda game: seen.append(session.lock.locked()))
        assert seen == [True]
        assert not session.lock.locked()

    def test_concurrent_runs_do_not_interleave(self, manager, session):
        inside = []
        overlaps = []

        def operation(game):
            if inside:
                overlaps.append(True)
            inside.append(1)
            game.post_message("tick")
            inside.pop()

        threads = [
            threading.Thread(target=manager.run, args=(session, operation)) for _ in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert overlaps == []
        assert session.game.current_messages().count("tick") == 8

    def test_rebuild_game(self, manager, session):
        session.game.move_player(2)
        fresh = manager.rebuild_game(session)
        assert fresh is not session.game
        assert fresh.player_location == 1
        assert "light_lamp" in fresh.custom_effects
