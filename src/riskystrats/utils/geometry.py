"""
Plane geometry helpers for the riskystrats map.

This module implements the handful of planar operations the engine needs:
- Euclidean and rounded distances between points
- Orientation of an ordered point triple
- Segment intersection (used to keep generated edges from crossing)

The intersection test is the classic orientation / on-segment predicate
pair: two segments intersect when each one straddles the line through the
other, or when a collinear endpoint lies on the other segment.

Any object exposing float ``x`` and ``y`` attributes can be passed in,
which lets the map generator test candidate positions before they become
nodes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol


class HasPosition(Protocol):
    """Anything with planar coordinates."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Point:
    """
    An immutable point in the plane.

    Example:
        >>> distance(Point(0, 0), Point(3, 4))
        5.0
    """

    x: float
    y: float


class Orientation(IntEnum):
    """Turn direction of an ordered triple of points."""

    COLLINEAR = 0
    CLOCKWISE = 1
    COUNTERCLOCKWISE = 2


def distance(p: HasPosition, q: HasPosition) -> float:
    """Return the Euclidean distance between two points."""
    return math.hypot(p.x - q.x, p.y - q.y)


def int_distance(p: HasPosition, q: HasPosition) -> int:
    """
    Return the distance between two points rounded to the nearest integer.

    Halves round up (``floor(d + 0.5)``) rather than to even, so edge lengths
    measured in ticks do not depend on banker's rounding.

    Example:
        >>> int_distance(Point(0, 0), Point(8.5, 0))
        9
    """
    return math.floor(distance(p, q) + 0.5)


def orientation(p: HasPosition, q: HasPosition, r: HasPosition) -> Orientation:
    """
    Classify the turn made by travelling p -> q -> r.

    Uses the sign of the cross product of (q - p) and (r - q).

    Example:
        >>> orientation(Point(0, 0), Point(1, 1), Point(2, 2))
        <Orientation.COLLINEAR: 0>
    """
    value = (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)
    if value > 0:
        return Orientation.CLOCKWISE
    if value < 0:
        return Orientation.COUNTERCLOCKWISE
    return Orientation.COLLINEAR


def on_segment(p: HasPosition, q: HasPosition, r: HasPosition) -> bool:
    """
    Check whether q lies within the bounding box of segment p-r.

    Only meaningful when p, q and r are already known to be collinear.
    """
    return (
        min(p.x, r.x) <= q.x <= max(p.x, r.x)
        and min(p.y, r.y) <= q.y <= max(p.y, r.y)
    )


def segments_intersect(
    p1: HasPosition, q1: HasPosition, p2: HasPosition, q2: HasPosition
) -> bool:
    """
    Determine whether segment p1-q1 intersects segment p2-q2.

    Touching endpoints and collinear overlaps count as intersections.

    Example:
        >>> segments_intersect(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
        True
        >>> segments_intersect(Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1))
        False
    """
    o1 = orientation(p1, q1, p2)
    o2 = orientation(p1, q1, q2)
    o3 = orientation(p2, q2, p1)
    o4 = orientation(p2, q2, q1)

    if o1 != o2 and o3 != o4:
        return True

    # Collinear special cases
    if o1 == Orientation.COLLINEAR and on_segment(p1, p2, q1):
        return True
    if o2 == Orientation.COLLINEAR and on_segment(p1, q2, q1):
        return True
    if o3 == Orientation.COLLINEAR and on_segment(p2, p1, q2):
        return True
    return o4 == Orientation.COLLINEAR and on_segment(p2, q1, q2)
