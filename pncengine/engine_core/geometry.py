"""
Geometry - Reference hit-testing for event regions.

The engine core only stores hit regions; deciding whether a click lands in
one is the input layer's job. This module is the default collaborator used
by the CLI, the HTTP API and tests. A browser or canvas front end may pass
its own hit_test instead.

Boundaries count as inside, matching a canvas path test closely enough for
authored hotspots.
"""

from __future__ import annotations
from typing import Callable

from ..spec_schema.game_description import ShapeKind
from .event import HitRegion

Point = tuple[float, float]
HitTest = Callable[[HitRegion, Point], bool]


def hit_test(region: HitRegion, point: Point) -> bool:
    """Return True if the point lies inside the region."""
    if region.shape == ShapeKind.DEFAULT:
        return True
    if region.shape == ShapeKind.RECT:
        return point_in_rect(region, point)
    if region.shape == ShapeKind.CIRCLE:
        return point_in_circle(region, point)
    if region.shape == ShapeKind.POLY:
        return point_in_polygon(region.vertices, point)
    return False


def point_in_rect(region: HitRegion, point: Point) -> bool:
    (ox, oy), (w, h) = region.origin, region.extent
    x, y = point
    return ox <= x <= ox + w and oy <= y <= oy + h


def point_in_circle(region: HitRegion, point: Point) -> bool:
    cx, cy = region.center
    dx, dy = point[0] - cx, point[1] - cy
    return dx * dx + dy * dy <= region.radius * region.radius


def point_in_polygon(vertices: list[Point], point: Point) -> bool:
    """
    Nonzero winding test, the default fill rule of a canvas path.

    Points on an edge count as inside.
    """
    if len(vertices) < 3:
        return False

    x, y = point
    winding = 0
    n = len(vertices)
    for i in range(n):
        x1, y1 = vertices[i]
        x2, y2 = vertices[(i + 1) % n]

        cross = (x2 - x1) * (y - y1) - (x - x1) * (y2 - y1)
        if cross == 0 and min(x1, x2) <= x <= max(x1, x2) and min(y1, y2) <= y <= max(y1, y2):
            return True

        if y1 <= y:
            if y2 > y and cross > 0:
                winding += 1
        elif y2 <= y and cross < 0:
            winding -= 1

    return winding != 0
