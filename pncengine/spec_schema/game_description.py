"""
Game Description - The resolved, source-independent shape of a game.

A GameDescription is what a content loader produces and what the engine
builder consumes. It carries plain values only:
- No callables (custom consequences and interactions are bound later by key)
- No rendering handles (image paths are opaque strings)
- No live references between objects (ids everywhere)

Dict form uses snake_case keys; camelCase keys from hand-written JSON are
accepted too.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


DEFAULT_TITLE = "Point and Click Game"
DEFAULT_START_LOCATION = 1

# Location id 0 in prerequisites and consequences means "the player".
PLAYER_LOCATION_ID = 0


class ShapeKind(Enum):
    """Hit-region shapes, named after the HTML area element's shapes."""
    RECT = "rect"
    CIRCLE = "circle"
    POLY = "poly"
    DEFAULT = "default"  # Matches any point; location-wide fallback


COORD_RULES = {
    ShapeKind.RECT: "4 coordinates (x1,y1,x2,y2)",
    ShapeKind.CIRCLE: "3 coordinates (x,y,radius)",
    ShapeKind.POLY: "an even number of at least 6 coordinates",
    ShapeKind.DEFAULT: "no coordinates",
}


def coords_fit_shape(kind: ShapeKind, coords) -> bool:
    """True if the coordinate list has the layout the shape needs."""
    n = len(coords)
    if kind == ShapeKind.RECT:
        return n == 4
    if kind == ShapeKind.CIRCLE:
        return n == 3 and coords[2] >= 0
    if kind == ShapeKind.POLY:
        return n >= 6 and n % 2 == 0
    return n == 0


class PrerequisiteKind(Enum):
    """Prerequisite tests against item ownership."""
    ITEM = "item"  # The owner must hold the item
    NO_ITEM = "noitem"  # The owner must not hold the item


class ConsequenceKind(Enum):
    """Consequence effects applied when an event executes."""
    ITEM = "item"
    LOCATION = "location"
    MESSAGE = "message"
    AUDIO = "audio"
    CUSTOM = "custom"


def _get(data: dict[str, Any], key: str, alias: str | None = None, default: Any = None) -> Any:
    if key in data:
        return data[key]
    if alias and alias in data:
        return data[alias]
    return default


def _opt_int(value: Any) -> int | None:
    return None if value is None else int(value)


@dataclass
class ItemDescription:
    """
    A static item definition.

    The eight sprite integers locate the item graphic on a sprite sheet
    (sx, sy, swidth, sheight) and on the location image (x, y, width, height).
    """
    id: int
    description: str = ""
    image_path: str = ""
    sx: int = 0
    sy: int = 0
    swidth: int = 0
    sheight: int = 0
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    # Ids of items this item reacts to; code is bound at build time
    interactions: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ItemDescription:
        return cls(
            id=int(data["id"]),
            description=_get(data, "description", default=""),
            image_path=_get(data, "image_path", "imageRef", ""),
            sx=int(_get(data, "sx", default=0)),
            sy=int(_get(data, "sy", default=0)),
            swidth=int(_get(data, "swidth", default=0)),
            sheight=int(_get(data, "sheight", default=0)),
            x=int(_get(data, "x", default=0)),
            y=int(_get(data, "y", default=0)),
            width=int(_get(data, "width", default=0)),
            height=int(_get(data, "height", default=0)),
            interactions=[int(i) for i in _get(data, "interactions", default=[])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "image_path": self.image_path,
            "sx": self.sx,
            "sy": self.sy,
            "swidth": self.swidth,
            "sheight": self.sheight,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "interactions": list(self.interactions),
        }


@dataclass
class PrerequisiteDescription:
    """
    A prerequisite on item ownership.

    location_id 0 tests the player's inventory; any other value tests
    that location's inventory.
    """
    kind: str
    item_id: int
    location_id: int = PLAYER_LOCATION_ID

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PrerequisiteDescription:
        return cls(
            kind=data["kind"],
            item_id=int(_get(data, "item_id", "itemId")),
            location_id=int(_get(data, "location_id", "locationId", PLAYER_LOCATION_ID)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "item_id": self.item_id, "location_id": self.location_id}


@dataclass
class ConsequenceDescription:
    """
    A consequence as written by content authors.

    Interpretation depends on kind:
    - item: item_id moves between the player and the event's location;
      location_id 0 means "to the player", anything else "from the player"
    - location: the player moves to target_location_id
    - message: text is appended to the message channel
    - audio: src is emitted as an audio cue
    - custom: code bound under name (or a positional key) runs
    """
    kind: str
    item_id: int | None = None
    location_id: int | None = None
    target_location_id: int | None = None
    text: str | None = None
    src: str | None = None
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConsequenceDescription:
        return cls(
            kind=data["kind"],
            item_id=_opt_int(_get(data, "item_id", "itemId")),
            location_id=_opt_int(_get(data, "location_id", "locationId")),
            target_location_id=_opt_int(_get(data, "target_location_id", "targetLocationId")),
            text=_get(data, "text"),
            src=_get(data, "src"),
            name=_get(data, "name"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind}
        for key in ("item_id", "location_id", "target_location_id", "text", "src", "name"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass
class EventDescription:
    """An event at a location: where to click, when it's allowed, what happens."""
    description: str = ""
    shape: str = ShapeKind.DEFAULT.value
    coords: list[float] = field(default_factory=list)
    prerequisites: list[PrerequisiteDescription] = field(default_factory=list)
    consequences: list[ConsequenceDescription] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventDescription:
        coords = _get(data, "coords", default=None) or []
        if isinstance(coords, str):
            coords = [c for c in coords.split(",") if c.strip()]
        return cls(
            description=_get(data, "description", default=""),
            shape=_get(data, "shape", default=ShapeKind.DEFAULT.value),
            coords=[float(c) for c in coords],
            prerequisites=[
                PrerequisiteDescription.from_dict(p)
                for p in _get(data, "prerequisites", default=[])
            ],
            consequences=[
                ConsequenceDescription.from_dict(c)
                for c in _get(data, "consequences", default=[])
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "description": self.description,
            "shape": self.shape,
            "prerequisites": [p.to_dict() for p in self.prerequisites],
            "consequences": [c.to_dict() for c in self.consequences],
        }
        if self.coords:
            data["coords"] = list(self.coords)
        return data


@dataclass
class LocationDescription:
    """A node of the location graph."""
    id: int
    description: str = ""
    image_path: str = ""
    items: list[ItemDescription] = field(default_factory=list)
    events: list[EventDescription] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LocationDescription:
        return cls(
            id=int(data["id"]),
            description=_get(data, "description", default=""),
            image_path=_get(data, "image_path", "imageRef", ""),
            items=[ItemDescription.from_dict(i) for i in _get(data, "items", default=[])],
            events=[EventDescription.from_dict(e) for e in _get(data, "events", default=[])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "image_path": self.image_path,
            "items": [i.to_dict() for i in self.items],
            "events": [e.to_dict() for e in self.events],
        }


@dataclass
class GameDescription:
    """
    Complete description of a game.

    This is the only input the engine builder needs.
    """
    title: str = DEFAULT_TITLE
    player_start_location: int = DEFAULT_START_LOCATION
    player_initial_items: list[ItemDescription] = field(default_factory=list)
    locations: list[LocationDescription] = field(default_factory=list)
    initial_message: str = ""

    def get_location(self, location_id: int) -> LocationDescription | None:
        for location in self.locations:
            if location.id == location_id:
                return location
        return None

    def all_items(self) -> list[ItemDescription]:
        """Every item declared anywhere, player items first."""
        items = list(self.player_initial_items)
        for location in self.locations:
            items.extend(location.items)
        return items

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameDescription:
        return cls(
            title=_get(data, "title", default=None) or DEFAULT_TITLE,
            player_start_location=int(
                _get(data, "player_start_location", "playerStartLocation", DEFAULT_START_LOCATION)
            ),
            player_initial_items=[
                ItemDescription.from_dict(i)
                for i in _get(data, "player_initial_items", "playerInitialItems", [])
            ],
            locations=[LocationDescription.from_dict(loc) for loc in _get(data, "locations", default=[])],
            initial_message=_get(data, "initial_message", "initialMessage", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "player_start_location": self.player_start_location,
            "player_initial_items": [i.to_dict() for i in self.player_initial_items],
            "locations": [loc.to_dict() for loc in self.locations],
            "initial_message": self.initial_message,
        }
