"""
FastAPI Application - REST API for rendering clients.

Endpoints:
    GET    /api/v1/health                               Health check
    POST   /api/v1/sessions                             Create game session
    GET    /api/v1/sessions                             List active sessions
    GET    /api/v1/sessions/{id}                        Get session and current view
    DELETE /api/v1/sessions/{id}                        End session
    GET    /api/v1/sessions/{id}/events                 Events available at the player location
    POST   /api/v1/sessions/{id}/click                  Click on the canvas
    POST   /api/v1/sessions/{id}/items/{item}/activate  Select an inventory item
    POST   /api/v1/sessions/{id}/items/deactivate       Clear the selection
    POST   /api/v1/sessions/{id}/items/{item}/use       Use the selected item on another
    POST   /api/v1/sessions/{id}/save                   Save progress to a slot
    POST   /api/v1/sessions/{id}/load                   Restore progress from a slot

Action responses carry the messages and audio cues produced by that action,
the events that ran, and the view to draw next. A refused action is an
INVALID_ACTION error; content that raises while running is a CONTENT_ERROR.

While the app runs, a background task ends sessions that have been idle for
longer than PNC_SESSION_MAX_AGE seconds, checking every
PNC_SESSION_CLEANUP_INTERVAL seconds.
"""

from contextlib import asynccontextmanager
from typing import Union
import asyncio
import contextlib
import logging
import os

from .. import __version__

logger = logging.getLogger(__name__)

# Environment configuration
PNC_ENV = os.getenv("PNC_ENV", "development")
PNC_SAVE_DIR = os.getenv("PNC_SAVE_DIR", None)
PNC_STRICT_CONTENT = os.getenv("PNC_STRICT_CONTENT", "true").lower() not in {"0", "false", "no"}
PNC_SESSION_MAX_AGE = int(os.getenv("PNC_SESSION_MAX_AGE", "3600"))
PNC_SESSION_CLEANUP_INTERVAL = float(os.getenv("PNC_SESSION_CLEANUP_INTERVAL", "300"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

_STATUS_CODES = {
    "SESSION_NOT_FOUND": 404,
    "INVALID_DESCRIPTION": 400,
    "CONTENT_ERROR": 500,
    "SAVE_NOT_FOUND": 404,
    "INVALID_ACTION": 409,
}


async def cleanup_sessions_periodically(session_manager, interval: float, max_age_seconds: int):
    """End idle sessions every `interval` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        removed = session_manager.cleanup_stale_sessions(max_age_seconds)
        if removed:
            logger.info("Ended %d idle session(s)", removed)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        ClickRequest,
        SaveRequest,
        # Response models
        ActionResponse,
        EndSessionResponse,
        ErrorResponse,
        EventListResponse,
        HealthResponse,
        SaveResponse,
        SessionListResponse,
        SessionResponse,
    )
    from ..engine_core.persistence import SaveStore
    from ..session import SessionManager

    # Service instance
    api_service = service or APIService(
        session_manager=SessionManager(strict_content=PNC_STRICT_CONTENT),
        save_store=SaveStore(save_dir=PNC_SAVE_DIR),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.cleanup_task = asyncio.create_task(
            cleanup_sessions_periodically(
                api_service.session_manager,
                interval=PNC_SESSION_CLEANUP_INTERVAL,
                max_age_seconds=PNC_SESSION_MAX_AGE,
            )
        )
        yield
        app.state.cleanup_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await app.state.cleanup_task

    app = FastAPI(
        lifespan=lifespan,
        title="Point and Click Engine API",
        description="""
Point-and-click adventure engine. A client draws the view it is given, sends
clicks and inventory selections, and plays back the messages and audio cues
each action returns.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist or has ended |
| `INVALID_DESCRIPTION` | Game description is malformed or fails validation |
| `CONTENT_ERROR` | Game content raised while running |
| `SAVE_NOT_FOUND` | Save slot is empty or unusable |
| `INVALID_ACTION` | The engine refused the action |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def respond(response):
        """Pass a response model through, or turn an ErrorResponse into JSON."""
        if isinstance(response, ErrorResponse):
            return JSONResponse(
                status_code=_STATUS_CODES.get(response.error_code.value, 400),
                content=response.model_dump(mode="json"),
            )
        return response

    errors = {
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid game description"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        request: CreateSessionRequest = CreateSessionRequest(),
    ) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session.

        Use `game_type=demo` for the built-in game, or send a full game
        description as `description`.
        """
        return respond(api_service.create_session(request))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses=errors,
        tags=["Sessions"],
        summary="Get session and current view",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a game session and release resources."""
        return api_service.end_session(session_id)

    @app.get(
        "/api/v1/sessions/{session_id}/events",
        response_model=EventListResponse,
        responses=errors,
        tags=["Sessions"],
        summary="Events available at the player location",
    )
    async def list_events(session_id: str) -> Union[EventListResponse, JSONResponse]:
        return respond(api_service.list_events(session_id))

    # =========================================================================
    # Action Endpoints
    # =========================================================================

    action_errors = {
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Action refused"},
        500: {"model": ErrorResponse, "description": "Game content error"},
    }

    @app.post(
        "/api/v1/sessions/{session_id}/click",
        response_model=ActionResponse,
        responses=action_errors,
        tags=["Actions"],
        summary="Click on the game canvas",
    )
    async def click(session_id: str, request: ClickRequest) -> Union[ActionResponse, JSONResponse]:
        """
        Run every available event whose region contains the point.

        The location's default event only runs when nothing else did. Any
        selected item is cleared afterwards.
        """
        return respond(api_service.click(session_id, request))

    # Declared before the {item_id} routes so "deactivate" is not read as an id
    @app.post(
        "/api/v1/sessions/{session_id}/items/deactivate",
        response_model=ActionResponse,
        responses=action_errors,
        tags=["Actions"],
        summary="Clear the selected item",
    )
    async def deactivate_item(session_id: str) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.deactivate_item(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/items/{item_id}/activate",
        response_model=ActionResponse,
        responses=action_errors,
        tags=["Actions"],
        summary="Select an inventory item",
    )
    async def activate_item(session_id: str, item_id: int) -> Union[ActionResponse, JSONResponse]:
        """Refused while another item is selected."""
        return respond(api_service.activate_item(session_id, item_id))

    @app.post(
        "/api/v1/sessions/{session_id}/items/{item_id}/use",
        response_model=ActionResponse,
        responses=action_errors,
        tags=["Actions"],
        summary="Use the selected item on another inventory item",
    )
    async def use_item(session_id: str, item_id: int) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.use_item(session_id, item_id))

    # =========================================================================
    # Save / Load
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/save",
        response_model=SaveResponse,
        responses=errors,
        tags=["Saves"],
        summary="Save progress to a slot",
    )
    async def save(session_id: str, request: SaveRequest) -> Union[SaveResponse, JSONResponse]:
        return respond(api_service.save(session_id, request))

    @app.post(
        "/api/v1/sessions/{session_id}/load",
        response_model=SaveResponse,
        responses=errors,
        tags=["Saves"],
        summary="Restore progress from a slot",
    )
    async def load(session_id: str, request: SaveRequest) -> Union[SaveResponse, JSONResponse]:
        """Restores the player's location and inventory into a fresh game."""
        return respond(api_service.load(session_id, request))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="pncengine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Point and Click Engine API",
            "version": __version__,
            "environment": PNC_ENV,
            "docs": "/api/docs",
            "health": "/api/v1/health",
        }

    return app
