"""
Content Loader - Reads game description documents.

Two encodings are supported:
- XML in the pncgame.xsd layout (Game/Location/Event/Item elements)
- JSON in the GameDescription dict layout

Both produce a GameDescription; nothing here builds engine objects.

XML layout:

    <Game>
      <Title>...</Title>
      <PlayerStart>1</PlayerStart>
      <PlayerInventory><Item id="3">...</Item></PlayerInventory>
      <Location id="1">
        <Description>...</Description>
        <Image>images/hall.png</Image>
        <Item id="5" sx="0" ... ><Description/><Image/><Interaction>3</Interaction></Item>
        <Event shape="rect" coords="0,0,10,10">
          <Description>...</Description>
          <Prerequisite type="item" itemid="5">0</Prerequisite>
          <Consequence type="item" itemid="5">0</Consequence>
          <Consequence type="location">2</Consequence>
          <Consequence type="message">You found a key.</Consequence>
          <Consequence type="audio">audio/click.ogg</Consequence>
          <Consequence type="custom" name="open_chest"/>
        </Event>
      </Location>
    </Game>

Missing numeric attributes and values read as 0.
"""

from __future__ import annotations
import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from ..exceptions import ContentLoadError
from .game_description import (
    DEFAULT_START_LOCATION,
    DEFAULT_TITLE,
    ConsequenceDescription,
    ConsequenceKind,
    EventDescription,
    GameDescription,
    ItemDescription,
    LocationDescription,
    PrerequisiteDescription,
    ShapeKind,
)

logger = logging.getLogger(__name__)

_SPRITE_ATTRS = ("sx", "sy", "swidth", "sheight", "x", "y", "width", "height")


def load_description(path: str | Path) -> GameDescription:
    """Load a description file, choosing the parser by file suffix."""
    path = Path(path)
    if not path.exists():
        raise ContentLoadError(f"Game description not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".xml":
        return load_xml(path)
    if suffix == ".json":
        return load_json(path)
    raise ContentLoadError(f"Unsupported description format '{suffix}' for {path}")


def load_json(path: str | Path) -> GameDescription:
    """Load a JSON description file."""
    logger.debug("Loading JSON game description from %s", path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ContentLoadError(f"Cannot read {path}: {e}") from e
    return parse_json(text)


def parse_json(text: str) -> GameDescription:
    """Parse a JSON document into a GameDescription."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ContentLoadError(f"Invalid JSON: {e}") from e
    return parse_dict(data)


def parse_dict(data: Any) -> GameDescription:
    """Convert an already-decoded dict into a GameDescription."""
    if not isinstance(data, dict):
        raise ContentLoadError("Game description must be an object")
    try:
        return GameDescription.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ContentLoadError(f"Malformed game description: {e}") from e


def load_xml(path: str | Path) -> GameDescription:
    """Load an XML description file."""
    logger.debug("Loading XML game description from %s", path)
    try:
        root = ET.parse(path).getroot()
    except (ET.ParseError, OSError) as e:
        raise ContentLoadError(f"Cannot parse {path}: {e}") from e
    return _from_xml_root(root)


def parse_xml(text: str) -> GameDescription:
    """Parse an XML document string into a GameDescription."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ContentLoadError(f"Invalid XML: {e}") from e
    return _from_xml_root(root)


# =============================================================================
# XML helpers
# =============================================================================

def _text(element: ET.Element | None) -> str:
    if element is None or element.text is None:
        return ""
    return element.text.strip()


def _number(value: str | None) -> int:
    # Empty and missing values read as zero
    if value is None or not value.strip():
        return 0
    try:
        return int(float(value))
    except ValueError as e:
        raise ContentLoadError(f"Expected a number, got '{value}'") from e


def _from_xml_root(root: ET.Element) -> GameDescription:
    try:
        title = _text(root.find(".//Title")) or DEFAULT_TITLE

        start_element = root.find(".//PlayerStart")
        start = _number(_text(start_element)) if start_element is not None else DEFAULT_START_LOCATION

        player_items = []
        inventory_element = root.find(".//PlayerInventory")
        if inventory_element is not None:
            player_items = [_item_from_xml(el) for el in inventory_element.findall("Item")]

        locations = [_location_from_xml(el) for el in root.iter("Location")]

        return GameDescription(
            title=title,
            player_start_location=start,
            player_initial_items=player_items,
            locations=locations,
            initial_message=_text(root.find(".//InitialMessage")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ContentLoadError(f"Malformed game description: {e}") from e


def _location_from_xml(element: ET.Element) -> LocationDescription:
    location_id = _number(element.get("id"))
    logger.debug("Parsing location %s", location_id)
    return LocationDescription(
        id=location_id,
        description=_text(element.find("Description")),
        image_path=_text(element.find("Image")),
        items=[_item_from_xml(el) for el in element.findall("Item")],
        events=[_event_from_xml(el) for el in element.findall("Event")],
    )


def _item_from_xml(element: ET.Element) -> ItemDescription:
    sprite = {name: _number(element.get(name)) for name in _SPRITE_ATTRS}
    return ItemDescription(
        id=_number(element.get("id")),
        description=_text(element.find("Description")),
        image_path=_text(element.find("Image")),
        interactions=[_number(_text(el)) for el in element.findall("Interaction")],
        **sprite,
    )


def _event_from_xml(element: ET.Element) -> EventDescription:
    shape = element.get("shape") or ShapeKind.DEFAULT.value
    raw_coords = element.get("coords") or ""
    try:
        coords = [float(c) for c in raw_coords.split(",") if c.strip()]
    except ValueError as e:
        raise ContentLoadError(f"Invalid coords '{raw_coords}'") from e

    prerequisites = [
        PrerequisiteDescription(
            kind=el.get("type", ""),
            item_id=_number(el.get("itemid")),
            location_id=_number(_text(el)),
        )
        for el in element.findall("Prerequisite")
    ]
    consequences = [_consequence_from_xml(el) for el in element.findall("Consequence")]

    return EventDescription(
        description=_text(element.find("Description")),
        shape=shape,
        coords=coords,
        prerequisites=prerequisites,
        consequences=consequences,
    )


def _consequence_from_xml(element: ET.Element) -> ConsequenceDescription:
    kind = element.get("type", "")
    value = _text(element)

    if kind == ConsequenceKind.ITEM.value:
        return ConsequenceDescription(
            kind=kind, item_id=_number(element.get("itemid")), location_id=_number(value)
        )
    if kind == ConsequenceKind.LOCATION.value:
        return ConsequenceDescription(kind=kind, target_location_id=_number(value))
    if kind == ConsequenceKind.MESSAGE.value:
        return ConsequenceDescription(kind=kind, text=value)
    if kind == ConsequenceKind.AUDIO.value:
        return ConsequenceDescription(kind=kind, src=value)
    if kind == ConsequenceKind.CUSTOM.value:
        return ConsequenceDescription(kind=kind, name=element.get("name"))

    # Left for validation to report
    logger.warning("Unknown consequence type '%s'", kind)
    return ConsequenceDescription(kind=kind)
