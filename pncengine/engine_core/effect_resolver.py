"""
Effect Resolver - Evaluates prerequisites and applies consequences.

Prerequisites and consequences are small immutable records. They carry
ids by value and are interpreted here by one evaluator each, so an event
never holds live references into the game:
- check_prerequisite(prereq, game) is pure
- apply_consequence(consequence, game) mutates the game and reports
  whether visible state (location image, item placement) changed

Consequence kinds know whether they alter the display; the resolver
never infers it from the state afterwards.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TYPE_CHECKING

from ..exceptions import UnboundConsequenceError
from ..spec_schema.game_description import (
    PLAYER_LOCATION_ID,
    ConsequenceKind,
    PrerequisiteKind,
)

if TYPE_CHECKING:
    from .state import Game

logger = logging.getLogger(__name__)

# A custom consequence receives the game; returning True marks the display dirty.
CustomEffect = Callable[["Game"], Optional[bool]]


@dataclass(frozen=True)
class AudioCue:
    """A request for the UI to play a sound effect."""
    src: str


@dataclass(frozen=True)
class Prerequisite:
    """
    Item-ownership test.

    location_id 0 means the player's inventory.
    """
    kind: PrerequisiteKind
    item_id: int
    location_id: int = PLAYER_LOCATION_ID

    @classmethod
    def has_item(cls, item_id: int, location_id: int = PLAYER_LOCATION_ID) -> Prerequisite:
        return cls(kind=PrerequisiteKind.ITEM, item_id=item_id, location_id=location_id)

    @classmethod
    def lacks_item(cls, item_id: int, location_id: int = PLAYER_LOCATION_ID) -> Prerequisite:
        return cls(kind=PrerequisiteKind.NO_ITEM, item_id=item_id, location_id=location_id)


@dataclass(frozen=True)
class Consequence:
    """
    A single effect of an event.

    Field use depends on kind:
    - ITEM: item_id moves from source_location_id to target_location_id
      (0 is the player)
    - LOCATION: the player moves to target_location_id
    - MESSAGE: text is appended to the message channel
    - AUDIO: src is emitted as an AudioCue
    - CUSTOM: the effect bound under key runs
    """
    kind: ConsequenceKind
    item_id: int | None = None
    source_location_id: int | None = None
    target_location_id: int | None = None
    text: str | None = None
    src: str | None = None
    key: str | None = None

    @classmethod
    def transfer_item(cls, item_id: int, source_location_id: int, target_location_id: int) -> Consequence:
        return cls(
            kind=ConsequenceKind.ITEM,
            item_id=item_id,
            source_location_id=source_location_id,
            target_location_id=target_location_id,
        )

    @classmethod
    def move_player(cls, target_location_id: int) -> Consequence:
        return cls(kind=ConsequenceKind.LOCATION, target_location_id=target_location_id)

    @classmethod
    def message(cls, text: str) -> Consequence:
        return cls(kind=ConsequenceKind.MESSAGE, text=text)

    @classmethod
    def audio(cls, src: str) -> Consequence:
        return cls(kind=ConsequenceKind.AUDIO, src=src)

    @classmethod
    def custom(cls, key: str) -> Consequence:
        return cls(kind=ConsequenceKind.CUSTOM, key=key)


@dataclass
class ExecutionReport:
    """What an event execution did."""
    applied: list[ConsequenceKind] = field(default_factory=list)
    redraw_needed: bool = False


def check_prerequisite(prereq: Prerequisite, game: Game) -> bool:
    """Evaluate a prerequisite against the current game state. No side effects."""
    holds = game.inventory_of(prereq.location_id).contains(prereq.item_id)
    if prereq.kind == PrerequisiteKind.ITEM:
        return holds
    return not holds


def apply_consequence(consequence: Consequence, game: Game) -> bool:
    """
    Apply one consequence to the game.

    Returns True if visible state changed and the location must be redrawn.
    """
    kind = consequence.kind

    if kind == ConsequenceKind.ITEM:
        source = game.inventory_of(consequence.source_location_id)
        target = game.inventory_of(consequence.target_location_id)
        moved = source.transfer_to(target, consequence.item_id)
        if not moved:
            logger.debug(
                "Item %s not at %s; transfer skipped",
                consequence.item_id, consequence.source_location_id,
            )
        return moved

    if kind == ConsequenceKind.LOCATION:
        game.move_player(consequence.target_location_id)
        return True

    if kind == ConsequenceKind.MESSAGE:
        game.post_message(consequence.text or "")
        return False

    if kind == ConsequenceKind.AUDIO:
        game.emit_audio(AudioCue(src=consequence.src or ""))
        return False

    if kind == ConsequenceKind.CUSTOM:
        effect = game.custom_effects.get(consequence.key)
        if effect is None:
            raise UnboundConsequenceError(consequence.key or "")
        return bool(effect(game))

    raise ValueError(f"Unhandled consequence kind: {kind}")


def apply_consequences(consequences: tuple[Consequence, ...], game: Game) -> ExecutionReport:
    """
    Apply consequences in declaration order.

    There is no rollback: if a consequence raises, the earlier ones have
    already taken effect.
    """
    report = ExecutionReport()
    for consequence in consequences:
        if apply_consequence(consequence, game):
            report.redraw_needed = True
            game.redraw_needed = True
        report.applied.append(consequence.kind)
    return report
