"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a rendering client and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_DESCRIPTION: Inline game description is malformed or fails validation
- CONTENT_ERROR: The game content raised while executing (unbound code, etc.)
- SAVE_NOT_FOUND: No save in the requested slot, or the save is unusable
- INVALID_ACTION: The action was refused by the engine
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    ENDED = "ended"
    ABANDONED = "abandoned"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_DESCRIPTION = "INVALID_DESCRIPTION"
    CONTENT_ERROR = "CONTENT_ERROR"
    SAVE_NOT_FOUND = "SAVE_NOT_FOUND"
    INVALID_ACTION = "INVALID_ACTION"


# =============================================================================
# Shared Models
# =============================================================================

class SpriteInfo(BaseModel):
    """Where an item's sprite comes from and where it is drawn."""
    sx: int = 0
    sy: int = 0
    swidth: int = 0
    sheight: int = 0
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    model_config = {"from_attributes": True}


class ItemInfo(BaseModel):
    """Item information for display."""
    id: int
    description: str
    image_path: str = ""
    sprite: SpriteInfo = Field(default_factory=SpriteInfo)

    model_config = {"from_attributes": True}


class HitRegionInfo(BaseModel):
    """Clickable region of an event."""
    shape: str = Field(description="rect, circle, poly or default")
    coords: list[float] = Field(default_factory=list)


class EventInfo(BaseModel):
    """An event available at the player's location."""
    description: str
    hit_region: HitRegionInfo


class GameView(BaseModel):
    """Everything a renderer needs to draw the current frame."""
    title: str
    location_id: int
    location_description: str
    location_image: str = ""
    location_items: list[ItemInfo] = Field(default_factory=list)
    player_items: list[ItemInfo] = Field(default_factory=list)
    active_item: Optional[int] = None
    messages: list[str] = Field(default_factory=list, description="Pending, not yet handed off")
    redraw_needed: bool = False


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    game_type: str = Field("demo", description="Built-in game type")
    description: Optional[dict[str, Any]] = Field(
        None, description="Inline game description; overrides game_type"
    )


class ClickRequest(BaseModel):
    """A click on the game canvas."""
    x: float
    y: float


class SaveRequest(BaseModel):
    """Save slot to write or read."""
    slot: str = Field("default", pattern=r"^[A-Za-z0-9_\-]+$")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    game_title: str
    created_at: float = 0.0
    view: Optional[GameView] = None
    messages: list[str] = Field(default_factory=list)
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Outcome of one player action."""
    session_id: str
    success: bool
    messages: list[str] = Field(default_factory=list)
    audio_cues: list[str] = Field(default_factory=list)
    events_executed: list[str] = Field(default_factory=list)
    redraw_needed: bool = False
    view: GameView
    api_version: str = "v1"


class EventListResponse(BaseModel):
    """Events currently available at the player's location."""
    session_id: str
    location_id: int
    events: list[EventInfo] = Field(default_factory=list)


class SaveResponse(BaseModel):
    """Response after saving or loading a slot."""
    session_id: str
    slot: str
    player_location: int
    player_inventory: list[int] = Field(default_factory=list)
    view: Optional[GameView] = None


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
