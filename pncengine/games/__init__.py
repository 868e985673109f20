"""
Games module - Built-in game content.

Each game has its own subpackage with:
- A hand-authored GameDescription
- The code bound to its custom consequences and item interactions
"""
