"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Manages sessions
3. Saves and loads progress
4. Formats responses for a rendering client

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Lookups and refusals come back as ErrorResponse; nothing here raises for
a bad request.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    ClickRequest,
    SaveRequest,
    # Responses
    ActionResponse,
    EndSessionResponse,
    ErrorResponse,
    EventListResponse,
    SaveResponse,
    SessionResponse,
    # Shared
    EventInfo,
    GameView,
    HitRegionInfo,
    ItemInfo,
    SpriteInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from ..engine_core.action import Action, ActionResult
from ..engine_core.persistence import SaveStore
from ..engine_core.reducer import Reducer
from ..engine_core.state import Game, Item
from ..exceptions import (
    ContentAuthoringError,
    ContentLoadError,
    DescriptionValidationError,
    SaveDataError,
    UnknownLocationError,
)
from ..games.demo import DEMO_CUSTOM_EFFECTS, DEMO_INTERACTIONS, create_demo_description
from ..session import Session, SessionManager
from ..spec_schema import parse_dict

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service for rendering clients.

    Usage:
        service = APIService()

        # Create session
        session_response = service.create_session(CreateSessionRequest())

        # Click on the canvas
        action_response = service.click(session_id, ClickRequest(x=120, y=210))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    save_store: SaveStore = field(default_factory=SaveStore)
    reducer: Reducer = field(default_factory=Reducer)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        """
        Create a new game session.

        An inline description has no code bound to it, so any custom
        consequences or interactions it declares stay unbound.
        """
        try:
            if request.description is not None:
                description = parse_dict(request.description)
                session = self.session_manager.create_session(
                    description, metadata={"game_type": "inline"}
                )
            elif request.game_type == "demo":
                session = self.session_manager.create_session(
                    create_demo_description(),
                    custom_effects=DEMO_CUSTOM_EFFECTS,
                    interactions=DEMO_INTERACTIONS,
                    metadata={"game_type": "demo"},
                )
            else:
                return ErrorResponse(
                    error=f"Unknown game type: {request.game_type}",
                    error_code=ErrorCode.INVALID_DESCRIPTION,
                )
        except DescriptionValidationError as e:
            return ErrorResponse(
                error="Game description failed validation",
                error_code=ErrorCode.INVALID_DESCRIPTION,
                details={"errors": e.errors},
            )
        except (ContentLoadError, ContentAuthoringError, UnknownLocationError) as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_DESCRIPTION)

        messages = session.game.take_messages()
        return self._session_to_response(session, messages=messages)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self.session_manager.run(
            session, lambda game: self._session_to_response(session)
        )

    def end_session(self, session_id: str) -> EndSessionResponse:
        success = self.session_manager.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def list_events(self, session_id: str) -> EventListResponse | ErrorResponse:
        """Events available at the player's location right now."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        def describe(game: Game) -> EventListResponse:
            return EventListResponse(
                session_id=session_id,
                location_id=game.player_location,
                events=[
                    EventInfo(
                        description=event.description,
                        hit_region=HitRegionInfo(
                            shape=event.hit_region.shape.value,
                            coords=list(event.hit_region.coords),
                        ),
                    )
                    for event in game.available_events_at(game.player_location)
                ],
            )

        return self.session_manager.run(session, describe)

    # =========================================================================
    # Actions
    # =========================================================================

    def click(self, session_id: str, request: ClickRequest) -> ActionResponse | ErrorResponse:
        return self._apply(session_id, Action.click(request.x, request.y))

    def activate_item(self, session_id: str, item_id: int) -> ActionResponse | ErrorResponse:
        return self._apply(session_id, Action.activate_item(item_id))

    def deactivate_item(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self._apply(session_id, Action.deactivate_item())

    def use_item(self, session_id: str, item_id: int) -> ActionResponse | ErrorResponse:
        """Use the active item on item_id."""
        return self._apply(session_id, Action.use_item(item_id))

    def _apply(self, session_id: str, action: Action) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        def apply(game: Game) -> ActionResponse | ErrorResponse:
            try:
                result = self.reducer.apply(game, action)
            except (ContentAuthoringError, UnknownLocationError) as e:
                logger.error("Content error in session %s: %s", session_id, e)
                game.take_messages()
                game.take_audio_cues()
                return ErrorResponse(
                    error=str(e),
                    error_code=ErrorCode.CONTENT_ERROR,
                    details={"exception": type(e).__name__},
                )
            if not result.success:
                return ErrorResponse(
                    error=result.error or "Action refused",
                    error_code=ErrorCode.INVALID_ACTION,
                    details={"reason": result.error_code},
                )
            response = self._result_to_response(session_id, game, result)
            game.clear_redraw()
            return response

        return self.session_manager.run(session, apply)

    # =========================================================================
    # Save / load
    # =========================================================================

    def save(self, session_id: str, request: SaveRequest) -> SaveResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        saved = self.session_manager.run(
            session, lambda game: self.save_store.save(request.slot, game)
        )
        return SaveResponse(
            session_id=session_id,
            slot=request.slot,
            player_location=saved.player_location,
            player_inventory=list(saved.player_inventory),
        )

    def load(self, session_id: str, request: SaveRequest) -> SaveResponse | ErrorResponse:
        """
        Restore a save slot into the session.

        The save is applied to a freshly built game, so location inventories
        start from the description; the session's game is only replaced once
        the load succeeds.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        def load(game: Game) -> SaveResponse:
            fresh = self.session_manager.rebuild_game(session)
            fresh.take_messages()
            saved = self.save_store.load(request.slot, fresh)
            session.game = fresh
            return SaveResponse(
                session_id=session_id,
                slot=request.slot,
                player_location=saved.player_location,
                player_inventory=list(saved.player_inventory),
                view=self._build_view(fresh),
            )

        try:
            return self.session_manager.run(session, load)
        except SaveDataError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.SAVE_NOT_FOUND,
                details={"slot": request.slot},
            )

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _session_not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error="Session not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": session_id},
        )

    def _session_to_response(
        self, session: Session, messages: list[str] | None = None
    ) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            game_title=session.game.title,
            created_at=session.created_at,
            view=self._build_view(session.game),
            messages=messages or [],
        )

    def _result_to_response(
        self, session_id: str, game: Game, result: ActionResult
    ) -> ActionResponse:
        return ActionResponse(
            session_id=session_id,
            success=result.success,
            messages=result.messages,
            audio_cues=result.audio_cues,
            events_executed=result.events_executed,
            redraw_needed=result.redraw_needed,
            view=self._build_view(game),
        )

    def _build_view(self, game: Game) -> GameView:
        location = game.current_location
        return GameView(
            title=game.title,
            location_id=location.id,
            location_description=location.description,
            location_image=location.image_path,
            location_items=[_item_info(i) for i in game.location_inventory_snapshot(location.id)],
            player_items=[_item_info(i) for i in game.player_inventory_snapshot()],
            active_item=game.active_item,
            messages=game.current_messages(),
            redraw_needed=game.redraw_needed,
        )


def _item_info(item: Item) -> ItemInfo:
    return ItemInfo(
        id=item.id,
        description=item.description,
        image_path=item.image_path,
        sprite=SpriteInfo.model_validate(item.sprite),
    )
