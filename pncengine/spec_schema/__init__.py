"""Game description schema - source-independent content definitions."""

from .game_description import (
    GameDescription,
    LocationDescription,
    ItemDescription,
    EventDescription,
    PrerequisiteDescription,
    ConsequenceDescription,
    ShapeKind,
    PrerequisiteKind,
    ConsequenceKind,
    PLAYER_LOCATION_ID,
)
from .loader import load_description, load_json, load_xml, parse_dict, parse_json, parse_xml
from .validation import validate_description, require_valid, ValidationResult

__all__ = [
    "GameDescription",
    "LocationDescription",
    "ItemDescription",
    "EventDescription",
    "PrerequisiteDescription",
    "ConsequenceDescription",
    "ShapeKind",
    "PrerequisiteKind",
    "ConsequenceKind",
    "PLAYER_LOCATION_ID",
    "load_description",
    "load_json",
    "load_xml",
    "parse_dict",
    "parse_json",
    "parse_xml",
    "validate_description",
    "require_valid",
    "ValidationResult",
]
