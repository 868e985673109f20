"""
pncengine - Point-and-Click Adventure Engine

A deterministic game-logic core for narrative point-and-click adventures.
The engine loads a game description (locations, items, events) and provides:
- Location graph and inventory ownership rules
- Prerequisite-gated events with ordered consequences
- Click dispatch with default-event suppression
- Active-item selection and item-on-item interactions
- Save/load of the player's progress

Rendering, audio playback and input hit-testing belong to the UI layer;
the core only receives resolved hit-test results.
"""

__version__ = "0.1.0"
