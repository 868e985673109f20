"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. A client starts a session from a built-in game or an inline description
2. The description is validated and built into a fresh Game
3. During play, every action on the session runs under the session's lock
4. Progress can be written to a save slot and restored into the same session
5. The session ends when the client deletes it or it goes stale

Sessions live in memory only. The only thing written to disk is a save slot,
and that is the save/load contract's business, not the session's.
"""

from __future__ import annotations
import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping

from ..engine_core.builder import build_game
from ..engine_core.effect_resolver import CustomEffect
from ..engine_core.state import Game, InteractionEffect
from ..spec_schema import GameDescription, require_valid

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Accepting actions
    ENDED = "ended"  # Ended by the client
    ABANDONED = "abandoned"  # Cleaned up after going stale


@dataclass
class Session:
    """
    One play-through of one game.

    Holds the Game and the description it was built from, so the game can be
    rebuilt (e.g. before loading a save) without asking the client again.
    """
    session_id: str
    game: Game
    description: GameDescription
    created_at: float

    state: SessionState = SessionState.ACTIVE
    last_active_at: float = 0.0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    # Code bound to the description, kept to rebuild the game
    custom_effects: dict[str, CustomEffect] = field(default_factory=dict, repr=False)
    interactions: dict[tuple[int, int], InteractionEffect] = field(default_factory=dict, repr=False)

    # Session metadata (e.g. which built-in game it came from)
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state == SessionState.ACTIVE

    def touch(self):
        self.last_active_at = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Validate and build a Game per session
    - Track active sessions
    - Run actions one at a time per session
    - Clean up ended and stale sessions
    """

    def __init__(self, strict_content: bool = True):
        self.strict_content = strict_content
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        description: GameDescription,
        custom_effects: Mapping[str, CustomEffect] | None = None,
        interactions: Mapping[tuple[int, int], InteractionEffect] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            description: Game description to play
            custom_effects: Code for the description's custom consequences
            interactions: Code for the description's item interactions
            metadata: Free-form session metadata

        Returns:
            New Session with a freshly built Game

        Raises:
            DescriptionValidationError: the description has errors
            ContentAuthoringError: the description cannot be built
        """
        require_valid(description)
        game = build_game(
            description,
            custom_effects=custom_effects,
            interactions=interactions,
            strict_content=self.strict_content,
        )

        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            game=game,
            description=description,
            created_at=now,
            last_active_at=now,
            custom_effects=dict(custom_effects or {}),
            interactions=dict(interactions or {}),
            metadata=dict(metadata or {}),
        )
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info("Created session %s for '%s'", session.session_id, game.title)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def run(self, session: Session, operation: Callable[[Game], Any]) -> Any:
        """
        Run an operation on the session's game, one at a time.

        Two requests for the same session never interleave inside the engine.
        """
        with session.lock:
            session.touch()
            return operation(session.game)

    def rebuild_game(self, session: Session) -> Game:
        """Build a fresh Game from the session's description and bound code."""
        return build_game(
            session.description,
            custom_effects=session.custom_effects,
            interactions=session.interactions,
            strict_content=self.strict_content,
        )

    def end_session(self, session_id: str, reason: str = "ended") -> bool:
        """
        End a session and drop it from memory.

        Returns False if there was no such session.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.state = SessionState.ENDED if reason == "ended" else SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions that have had no action for longer than max_age.

        Called periodically to free memory. Returns the number removed.
        """
        current_time = time.time()
        stale = [
            session_id for session_id, session in list(self._sessions.items())
            if current_time - session.last_active_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return len(stale)
