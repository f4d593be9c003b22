"""
Geometry primitives for the native schematic model.

This module provides basic geometric types used throughout the importer:
- Point: 2D integer point in mils with arithmetic operations
- Rectangle: Axis-aligned bounding box that can be merged
- Layer: schematic drawing layer
- segment_hit / nearest_line_point / convert_arc_center helpers
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


@dataclass(frozen=True)
class Point:
    """2D point in mils (Y grows downward)."""

    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def scaled(self, factor: int) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


ORIGIN = Point(0, 0)


@dataclass
class Rectangle:
    """Axis-aligned bounding box."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def from_points(cls, *points: Point) -> "Rectangle":
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def around(cls, center: Point, radius: int) -> "Rectangle":
        return cls(center.x - radius, center.y - radius, center.x + radius, center.y + radius)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point((self.min_x + self.max_x) // 2, (self.min_y + self.max_y) // 2)

    def contains(self, p: Point) -> bool:
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def merge(self, other: "Rectangle") -> "Rectangle":
        """Return the smallest rectangle holding both."""
        return Rectangle(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def expand(self, margin: int) -> "Rectangle":
        """Return expanded rectangle."""
        return Rectangle(
            self.min_x - margin, self.min_y - margin, self.max_x + margin, self.max_y + margin
        )


def merge_boxes(boxes: Iterable[Rectangle]) -> Optional[Rectangle]:
    """Merge a sequence of boxes; None when the sequence is empty."""
    result = None
    for box in boxes:
        result = box if result is None else result.merge(box)
    return result


class Layer(Enum):
    """Schematic layers. These only decide how a line is drawn and connected."""

    WIRE = "wire"
    BUS = "bus"
    NOTES = "notes"


def midpoint(start: Point, end: Point) -> Point:
    """Integer midpoint of a segment."""
    return Point((start.x + end.x) // 2, (start.y + end.y) // 2)


def segment_hit(point: Point, start: Point, end: Point, tolerance: int = 0) -> bool:
    """Test whether ``point`` lies on the segment ``start``-``end``.

    With a zero tolerance the test is exact: the point must be collinear
    with the segment and inside its extent.
    """
    if tolerance <= 0:
        cross = (end.x - start.x) * (point.y - start.y) - (end.y - start.y) * (point.x - start.x)
        if cross != 0:
            return False
        return (
            min(start.x, end.x) <= point.x <= max(start.x, end.x)
            and min(start.y, end.y) <= point.y <= max(start.y, end.y)
        )

    return distance_to_segment(point, start, end) <= tolerance


def distance_to_segment(point: Point, start: Point, end: Point) -> float:
    """Shortest distance from a point to a segment."""
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return point.distance_to(start)

    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(point.x - (start.x + t * dx), point.y - (start.y + t * dy))


def nearest_line_point(point: Point, lines: Iterable[tuple[Point, Point]]) -> Optional[Point]:
    """Closest start, middle or end point among a set of segments.

    Only those three points per segment are candidates. Ties keep the
    first candidate found.
    """
    nearest = None
    best = math.inf
    for start, end in lines:
        for candidate in (start, midpoint(start, end), end):
            d = point.distance_to(candidate)
            if d < best:
                best = d
                nearest = candidate
    return nearest


def convert_arc_center(start: tuple[float, float], end: tuple[float, float], angle: float):
    """Centre of the arc through ``start`` and ``end`` sweeping ``angle`` degrees.

    Coordinates are Y-down; a positive angle is counterclockwise as seen on
    the page.

    Returns:
        (x, y) float tuple
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    mid_x = (start[0] + end[0]) / 2
    mid_y = (start[1] + end[1]) / 2

    dlen = math.hypot(dx, dy)
    dist = dlen / (2 * math.tan(math.radians(angle) / 2))

    return (mid_x + dist * (dy / dlen), mid_y - dist * (dx / dlen))


__all__ = [
    "Point",
    "ORIGIN",
    "Rectangle",
    "merge_boxes",
    "Layer",
    "midpoint",
    "segment_hit",
    "distance_to_segment",
    "nearest_line_point",
    "convert_arc_center",
]
