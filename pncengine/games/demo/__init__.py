"""
The Lighthouse - A small built-in adventure.

Two locations connected by a locked door. The player finds a key on the
beach, climbs to the lantern room and lights the lamp with an oil can.
It exercises every consequence kind and every hit-region shape, and is the
default game of the CLI and the HTTP API.
"""

from .spec import (
    create_demo_description,
    create_demo_game,
    DEMO_CUSTOM_EFFECTS,
    DEMO_INTERACTIONS,
    BEACH,
    LANTERN_ROOM,
    MATCHBOX,
    BRASS_KEY,
    OIL_CAN,
)

__all__ = [
    "create_demo_description",
    "create_demo_game",
    "DEMO_CUSTOM_EFFECTS",
    "DEMO_INTERACTIONS",
    "BEACH",
    "LANTERN_ROOM",
    "MATCHBOX",
    "BRASS_KEY",
    "OIL_CAN",
]
