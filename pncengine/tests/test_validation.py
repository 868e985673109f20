"""
Tests for game description validation.

Tests:
- Valid descriptions pass
- Reference and region errors are caught
- Warnings for content that still needs code
"""

import pytest

from ..exceptions import DescriptionValidationError
from ..spec_schema import (
    ConsequenceDescription,
    EventDescription,
    GameDescription,
    ItemDescription,
    LocationDescription,
    PrerequisiteDescription,
    require_valid,
    validate_description,
)


def description_with_event(event: EventDescription, **kwargs) -> GameDescription:
    return GameDescription(
        locations=[
            LocationDescription(id=1, items=[ItemDescription(id=5)], events=[event]),
            LocationDescription(id=2, events=[EventDescription(description="look")]),
        ],
        **kwargs,
    )


class TestValidDescriptions:
    """Tests for descriptions that should pass."""

    def test_demo_is_valid(self, demo_description):
        result = validate_description(demo_description)
        assert result.valid, result.errors
        assert result.errors == []

    def test_demo_warns_about_bound_code(self, demo_description):
        warnings = validate_description(demo_description).warnings
        assert any("custom consequence" in w for w in warnings)
        assert any("interaction" in w for w in warnings)

    def test_require_valid_returns_result(self, demo_description):
        assert require_valid(demo_description).valid


class TestStructureErrors:
    """Tests for graph-level problems."""

    def test_no_locations(self):
        result = validate_description(GameDescription())
        assert not result.valid
        assert "At least one location is required" in result.errors

    def test_duplicate_location(self):
        description = GameDescription(locations=[LocationDescription(id=1), LocationDescription(id=1)])
        assert "Duplicate location id 1" in validate_description(description).errors

    def test_location_zero_reserved(self):
        description = GameDescription(
            player_start_location=0, locations=[LocationDescription(id=0)]
        )
        errors = validate_description(description).errors
        assert any("reserved" in e for e in errors)

    def test_missing_start_location(self):
        description = GameDescription(player_start_location=7, locations=[LocationDescription(id=1)])
        assert any("start location 7" in e for e in validate_description(description).errors)

    def test_item_with_two_owners(self):
        description = GameDescription(
            player_initial_items=[ItemDescription(id=5)],
            locations=[LocationDescription(id=1, items=[ItemDescription(id=5)])],
        )
        errors = validate_description(description).errors
        assert any("Item 5 is declared by both" in e for e in errors)

    def test_interaction_with_unknown_item(self):
        description = GameDescription(
            player_initial_items=[ItemDescription(id=1, interactions=[99])],
            locations=[LocationDescription(id=1)],
        )
        errors = validate_description(description).errors
        assert any("unknown item 99" in e for e in errors)

    def test_location_without_events_is_a_warning(self):
        result = validate_description(GameDescription(locations=[LocationDescription(id=1)]))
        assert result.valid
        assert "Location 1 has no events" in result.warnings


class TestEventErrors:
    """Tests for per-event problems."""

    @pytest.mark.parametrize("shape,coords", [
        ("rect", [0, 0, 10]),
        ("circle", [0, 0]),
        ("circle", [0, 0, -1]),
        ("poly", [0, 0, 1, 1]),
        ("poly", [0, 0, 1, 1, 2]),
        ("default", [1, 2]),
    ])
    def test_bad_coordinates(self, shape, coords):
        event = EventDescription(description="bad", shape=shape, coords=coords)
        result = validate_description(description_with_event(event))
        assert not result.valid
        assert any(f"Shape '{shape}' requires" in e for e in result.errors)

    def test_unknown_shape(self):
        event = EventDescription(description="bad", shape="star", coords=[1])
        errors = validate_description(description_with_event(event)).errors
        assert any("Unrecognized shape 'star'" in e for e in errors)

    def test_prerequisite_references(self):
        event = EventDescription(
            description="gated",
            prerequisites=[
                PrerequisiteDescription(kind="item", item_id=42),
                PrerequisiteDescription(kind="item", item_id=5, location_id=9),
                PrerequisiteDescription(kind="maybe", item_id=5),
            ],
        )
        errors = validate_description(description_with_event(event)).errors
        assert any("unknown item 42" in e for e in errors)
        assert any("unknown location 9" in e for e in errors)
        assert any("Unknown prerequisite kind 'maybe'" in e for e in errors)

    def test_consequence_references(self):
        event = EventDescription(
            description="broken",
            consequences=[
                ConsequenceDescription(kind="item", item_id=42),
                ConsequenceDescription(kind="item"),
                ConsequenceDescription(kind="location", target_location_id=9),
                ConsequenceDescription(kind="message"),
                ConsequenceDescription(kind="audio", src=""),
                ConsequenceDescription(kind="explode"),
            ],
        )
        errors = validate_description(description_with_event(event)).errors
        assert any("unknown item 42" in e for e in errors)
        assert any("has no item id" in e for e in errors)
        assert any("unknown location 9" in e for e in errors)
        assert any("Message consequence has no text" in e for e in errors)
        assert any("Audio consequence has no src" in e for e in errors)
        assert any("Unknown consequence kind 'explode'" in e for e in errors)

    def test_errors_name_the_event(self):
        event = EventDescription(description="the broken one", shape="rect", coords=[])
        errors = validate_description(description_with_event(event)).errors
        assert errors[0].startswith("Location 1, event 0 ('the broken one')")

    def test_require_valid_raises_with_errors(self):
        event = EventDescription(description="bad", shape="rect")
        with pytest.raises(DescriptionValidationError) as exc_info:
            require_valid(description_with_event(event))
        assert len(exc_info.value.errors) == 1
