"""
Description Validation - Checks a GameDescription before it is built.

Validates that:
1. Required fields are present (locations, start location)
2. References are valid (location ids, item ids)
3. Hit regions are well-formed (known shape, right number of coordinates)
4. Invariants hold (each item id has exactly one owner)

Errors make the description unplayable. Warnings flag content that still
needs code bound to it (custom consequences, item interactions).
"""

from __future__ import annotations
from dataclasses import dataclass

from ..exceptions import DescriptionValidationError
from .game_description import (
    COORD_RULES,
    PLAYER_LOCATION_ID,
    ConsequenceDescription,
    ConsequenceKind,
    EventDescription,
    GameDescription,
    PrerequisiteDescription,
    PrerequisiteKind,
    ShapeKind,
    coords_fit_shape,
)


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_description(description: GameDescription) -> ValidationResult:
    """
    Validate a complete game description.

    Returns ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not description.locations:
        errors.append("At least one location is required")

    # Collect valid IDs for reference checking
    location_ids: set[int] = set()
    for location in description.locations:
        if location.id in location_ids:
            errors.append(f"Duplicate location id {location.id}")
        if location.id == PLAYER_LOCATION_ID:
            errors.append("Location id 0 is reserved for the player")
        location_ids.add(location.id)

    if description.locations and description.player_start_location not in location_ids:
        errors.append(
            f"Player start location {description.player_start_location} does not exist"
        )

    item_ids = _check_item_owners(description, errors)

    for item in description.all_items():
        for other_id in item.interactions:
            if other_id not in item_ids:
                errors.append(
                    f"Item {item.id} declares an interaction with unknown item {other_id}"
                )
            else:
                warnings.append(
                    f"Item {item.id} interaction with item {other_id} must be bound before use"
                )

    for location in description.locations:
        if not location.events:
            warnings.append(f"Location {location.id} has no events")
        for index, event in enumerate(location.events):
            prefix = f"Location {location.id}, event {index} ('{event.description}')"
            errors.extend(f"{prefix}: {e}" for e in _validate_hit_region(event))
            for prereq in event.prerequisites:
                errors.extend(
                    f"{prefix}: {e}"
                    for e in _validate_prerequisite(prereq, location_ids, item_ids)
                )
            for consequence in event.consequences:
                errors.extend(
                    f"{prefix}: {e}"
                    for e in _validate_consequence(consequence, location_ids, item_ids)
                )
                if consequence.kind == ConsequenceKind.CUSTOM.value:
                    warnings.append(f"{prefix}: custom consequence must be bound before use")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def require_valid(description: GameDescription) -> ValidationResult:
    """Validate and raise DescriptionValidationError if there are errors."""
    result = validate_description(description)
    if not result.valid:
        raise DescriptionValidationError(result.errors)
    return result


def _check_item_owners(description: GameDescription, errors: list[str]) -> set[int]:
    """Each item id may be declared by exactly one owner."""
    owners: dict[int, str] = {}

    def claim(item_id: int, owner: str):
        if item_id in owners:
            errors.append(
                f"Item {item_id} is declared by both {owners[item_id]} and {owner}"
            )
        else:
            owners[item_id] = owner

    for item in description.player_initial_items:
        claim(item.id, "the player")
    for location in description.locations:
        for item in location.items:
            claim(item.id, f"location {location.id}")

    return set(owners)


def _validate_hit_region(event: EventDescription) -> list[str]:
    """Validate shape and coordinate count."""
    try:
        kind = ShapeKind(event.shape)
    except ValueError:
        return [f"Unrecognized shape '{event.shape}'"]

    if not coords_fit_shape(kind, event.coords):
        return [f"Shape '{kind.value}' requires {COORD_RULES[kind]}, got {len(event.coords)}"]
    return []


def _validate_prerequisite(
    prereq: PrerequisiteDescription, location_ids: set[int], item_ids: set[int]
) -> list[str]:
    errors = []
    kinds = {k.value for k in PrerequisiteKind}
    if prereq.kind not in kinds:
        errors.append(f"Unknown prerequisite kind '{prereq.kind}'")
    if prereq.location_id != PLAYER_LOCATION_ID and prereq.location_id not in location_ids:
        errors.append(f"Prerequisite references unknown location {prereq.location_id}")
    if prereq.item_id not in item_ids:
        errors.append(f"Prerequisite references unknown item {prereq.item_id}")
    return errors


def _validate_consequence(
    consequence: ConsequenceDescription, location_ids: set[int], item_ids: set[int]
) -> list[str]:
    errors = []
    kind = consequence.kind

    if kind == ConsequenceKind.ITEM.value:
        if consequence.item_id is None:
            errors.append("Item consequence has no item id")
        elif consequence.item_id not in item_ids:
            errors.append(f"Item consequence references unknown item {consequence.item_id}")
    elif kind == ConsequenceKind.LOCATION.value:
        if consequence.target_location_id not in location_ids:
            errors.append(
                f"Location consequence references unknown location {consequence.target_location_id}"
            )
    elif kind == ConsequenceKind.MESSAGE.value:
        if consequence.text is None:
            errors.append("Message consequence has no text")
    elif kind == ConsequenceKind.AUDIO.value:
        if not consequence.src:
            errors.append("Audio consequence has no src")
    elif kind != ConsequenceKind.CUSTOM.value:
        errors.append(f"Unknown consequence kind '{kind}'")

    return errors
