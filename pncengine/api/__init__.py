"""
API Module - HTTP interface for rendering clients.

Exposes the engine via a REST API. A client:
1. Creates a session from a built-in game or its own description
2. Draws the view it is given
3. Sends clicks and inventory selections
4. Plays back the messages and audio cues each action returns
5. Saves and loads progress by slot

All game state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    ClickRequest,
    SaveRequest,
    # Responses
    ActionResponse,
    SessionResponse,
    EventListResponse,
    SaveResponse,
    ErrorResponse,
    # Shared
    GameView,
    ItemInfo,
    EventInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "ClickRequest",
    "SaveRequest",
    # Responses
    "ActionResponse",
    "SessionResponse",
    "EventListResponse",
    "SaveResponse",
    "ErrorResponse",
    # Shared
    "GameView",
    "ItemInfo",
    "EventInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
