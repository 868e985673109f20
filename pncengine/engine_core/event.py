"""
Events - Prerequisite-gated, consequence-producing player actions.

An Event is built once from the game description and never changes.
It stores:
- prerequisites: all must hold for the event to be available
- consequences: applied in order when the event executes
- hit_region: which shape and numbers the input layer should test

The geometry test itself belongs to the input layer (see geometry.py for
the reference implementation).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..exceptions import ContentAuthoringError, UnrecognizedShapeError
from ..spec_schema.game_description import COORD_RULES, ShapeKind, coords_fit_shape
from .effect_resolver import (
    Consequence,
    ExecutionReport,
    Prerequisite,
    apply_consequences,
    check_prerequisite,
)

if TYPE_CHECKING:
    from .state import Game


@dataclass(frozen=True)
class HitRegion:
    """
    Where the player must click to trigger an event.

    Coordinates mirror the HTML area element:
    - RECT: x1, y1, x2, y2 (two corners, any order)
    - CIRCLE: x, y, radius
    - POLY: x1, y1, x2, y2, ... (closed implicitly)
    - DEFAULT: none; matches every point
    """
    shape: ShapeKind
    coords: tuple[float, ...] = ()

    @classmethod
    def from_shape(cls, shape: str, coords=(), description: str = "") -> HitRegion:
        """Build a region from content values, rejecting unknown shapes and bad coordinates."""
        try:
            kind = ShapeKind(shape)
        except ValueError:
            raise UnrecognizedShapeError(shape, description) from None
        if kind == ShapeKind.DEFAULT:
            return cls.always()
        coords = tuple(float(c) for c in coords)
        if not coords_fit_shape(kind, coords):
            raise ContentAuthoringError(
                f"Area type '{kind.value}' for event \"{description}\" requires "
                f"{COORD_RULES[kind]}, got {len(coords)}"
            )
        return cls(shape=kind, coords=coords)

    @classmethod
    def always(cls) -> HitRegion:
        return cls(shape=ShapeKind.DEFAULT)

    @classmethod
    def rect(cls, x1: float, y1: float, x2: float, y2: float) -> HitRegion:
        return cls(shape=ShapeKind.RECT, coords=(x1, y1, x2, y2))

    @classmethod
    def circle(cls, x: float, y: float, radius: float) -> HitRegion:
        return cls(shape=ShapeKind.CIRCLE, coords=(x, y, radius))

    @classmethod
    def polygon(cls, *points: tuple[float, float]) -> HitRegion:
        return cls(shape=ShapeKind.POLY, coords=tuple(c for p in points for c in p))

    @property
    def is_default(self) -> bool:
        return self.shape == ShapeKind.DEFAULT

    @property
    def origin(self) -> tuple[float, float]:
        """Top-left corner of a rect."""
        x1, y1, x2, y2 = self.coords[:4]
        return min(x1, x2), min(y1, y2)

    @property
    def extent(self) -> tuple[float, float]:
        """Width and height of a rect."""
        x1, y1, x2, y2 = self.coords[:4]
        return abs(x2 - x1), abs(y2 - y1)

    @property
    def center(self) -> tuple[float, float]:
        return self.coords[0], self.coords[1]

    @property
    def radius(self) -> float:
        return self.coords[2]

    @property
    def vertices(self) -> list[tuple[float, float]]:
        """Polygon vertices; a trailing odd coordinate is ignored."""
        c = self.coords
        return [(c[i], c[i + 1]) for i in range(0, len(c) - 1, 2)]


@dataclass(frozen=True)
class Event:
    """
    A player-triggered action tied to a hit region at a location.

    Callers must check is_available() before execute(); execute() does not
    re-check.
    """
    description: str
    prerequisites: tuple[Prerequisite, ...] = ()
    consequences: tuple[Consequence, ...] = ()
    hit_region: HitRegion = HitRegion(shape=ShapeKind.DEFAULT)

    @property
    def is_default(self) -> bool:
        """Default events are location-wide fallbacks."""
        return self.hit_region.is_default

    def is_available(self, game: Game) -> bool:
        """True if every prerequisite holds, checked in declaration order."""
        return all(check_prerequisite(p, game) for p in self.prerequisites)

    def execute(self, game: Game) -> ExecutionReport:
        """Apply every consequence in declaration order."""
        return apply_consequences(self.consequences, game)
