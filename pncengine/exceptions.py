"""Exception hierarchy for the engine.

Content-authoring errors mean the game description is incomplete and are
raised immediately. Benign redundancy (duplicate adds, absent removes) is
never raised; see engine_core.state.
"""


class PncEngineError(Exception):
    """Base exception for the engine."""


class ContentAuthoringError(PncEngineError):
    """Raised when game content is incomplete or malformed at runtime."""


class UnrecognizedShapeError(ContentAuthoringError):
    """Raised when an event declares a hit-region shape the engine doesn't know."""

    def __init__(self, shape: str, description: str = ""):
        self.shape = shape
        self.description = description
        super().__init__(f"Unrecognized area type '{shape}' for event \"{description}\"")


class UnboundConsequenceError(ContentAuthoringError):
    """Raised when a custom consequence runs before any effect was bound to it."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Undefined custom consequence '{key}'")


class UnboundInteractionError(ContentAuthoringError):
    """Raised when a declared item interaction runs without bound code."""

    def __init__(self, item_id: int, active_item_id: int, description: str = ""):
        self.item_id = item_id
        self.active_item_id = active_item_id
        super().__init__(
            f"Undefined interaction for {description or item_id} with item {active_item_id}"
        )


class UnknownLocationError(PncEngineError):
    """Raised when a location id is not part of the game graph."""

    def __init__(self, location_id: int):
        self.location_id = location_id
        super().__init__(f"Location {location_id} not found")


class ContentLoadError(PncEngineError):
    """Raised when a game description document cannot be parsed."""


class DescriptionValidationError(PncEngineError):
    """Raised when a game description fails validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Game description validation failed with {len(errors)} error(s)")


class SaveDataError(PncEngineError):
    """Raised when saved game data is missing values or doesn't match the game."""
