# PathGraph - Planar Path Arithmetic Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Closed bezier paths: the input and output type of the path graph.

A :class:`BezierPath` is a start point followed by ``(cp1, cp2, end)``
triples, one per cubic segment. Straight lines are stored as cubics with
their control points at 1/3 and 2/3 of the line so that the curve parameter
moves evenly along them.

Paths can also be built from, and turned back into, PostScript-style
path elements (moveto/lineto/curveto/closepath).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .error import PathFormatError
from .geometry import Bounds, Curve, Point

# ---------------------------------------------------------------------------
# Path elements
# ---------------------------------------------------------------------------

@dataclass
class MoveTo:
    x: float
    y: float

@dataclass
class LineTo:
    x: float
    y: float

@dataclass
class CurveTo:
    x1: float; y1: float
    x2: float; y2: float
    x3: float; y3: float

@dataclass
class ClosePath:
    pass


PathElement = MoveTo | LineTo | CurveTo | ClosePath
Segment = tuple[Point, Point, Point]


def _line_segment(start: Point, end: Point) -> Segment:
    line = Curve.line(start, end)
    return (line.cp1, line.cp2, end)


def _arc_to_cubics(center: Point, radius: float, start_angle: float, end_angle: float) -> list[Segment]:
    """Cubic approximation of an arc of at most 90 degrees."""
    angle = end_angle - start_angle
    alpha = 4.0 * math.tan(angle / 4.0) / 3.0

    cos0, sin0 = math.cos(start_angle), math.sin(start_angle)
    cos1, sin1 = math.cos(end_angle), math.sin(end_angle)

    cp1 = Point(center.x + radius * (cos0 - alpha * sin0), center.y + radius * (sin0 + alpha * cos0))
    cp2 = Point(center.x + radius * (cos1 + alpha * sin1), center.y + radius * (sin1 - alpha * cos1))
    end = Point(center.x + radius * cos1, center.y + radius * sin1)
    return [(cp1, cp2, end)]


@dataclass
class BezierPath:
    """A closed path made of cubic bezier segments."""
    start: Point
    segments: list[Segment] = field(default_factory=list)

    @classmethod
    def from_points(cls, start: Point, points) -> BezierPath:
        return cls(start, list(points))

    @classmethod
    def from_polygon(cls, points, close: bool = True) -> BezierPath:
        """Straight-edged path through the given ``(x, y)`` tuples or Points."""
        pts = [p if isinstance(p, Point) else Point.from_tuple(p) for p in points]
        if not pts:
            raise PathFormatError("polygon needs at least one point")
        segments = []
        for prev, cur in zip(pts, pts[1:]):
            segments.append(_line_segment(prev, cur))
        if close and len(pts) > 1:
            segments.append(_line_segment(pts[-1], pts[0]))
        return cls(pts[0], segments)

    @classmethod
    def circle(cls, center: Point, radius: float) -> BezierPath:
        """Circle as four quarter arcs, counter-clockwise from angle 0."""
        segments = []
        for i in range(4):
            a0 = i * math.pi / 2.0
            segments.extend(_arc_to_cubics(center, radius, a0, a0 + math.pi / 2.0))
        # Make the path end exactly where it started
        cp1, cp2, _ = segments[-1]
        start = Point(center.x + radius, center.y)
        segments[-1] = (cp1, cp2, start)
        return cls(start, segments)

    @classmethod
    def from_elements(cls, elements) -> BezierPath:
        """Build a path from a single subpath of path elements."""
        elements = list(elements)
        if not elements or not isinstance(elements[0], MoveTo):
            raise PathFormatError("path must start with a moveto")

        start = Point(elements[0].x, elements[0].y)
        current = start
        segments = []
        for elem in elements[1:]:
            if isinstance(elem, LineTo):
                end = Point(elem.x, elem.y)
                segments.append(_line_segment(current, end))
                current = end
            elif isinstance(elem, CurveTo):
                end = Point(elem.x3, elem.y3)
                segments.append((Point(elem.x1, elem.y1), Point(elem.x2, elem.y2), end))
                current = end
            elif isinstance(elem, ClosePath):
                # Closing is implicit for graph paths
                break
            elif isinstance(elem, MoveTo):
                raise PathFormatError("only a single subpath is supported")
            else:
                raise PathFormatError(f"unknown path element: {elem!r}")
        return cls(start, segments)

    def start_point(self) -> Point:
        return self.start

    def points(self):
        return iter(self.segments)

    def curves(self):
        """Each segment as a :class:`Curve`."""
        current = self.start
        for cp1, cp2, end in self.segments:
            yield Curve(current, cp1, cp2, end)
            current = end

    def to_elements(self) -> list[PathElement]:
        result: list[PathElement] = [MoveTo(self.start.x, self.start.y)]
        for curve in self.curves():
            if curve.is_linear():
                result.append(LineTo(curve.end.x, curve.end.y))
            else:
                result.append(CurveTo(curve.cp1.x, curve.cp1.y,
                                      curve.cp2.x, curve.cp2.y,
                                      curve.end.x, curve.end.y))
        result.append(ClosePath())
        return result

    def reversed(self) -> BezierPath:
        """The same outline traversed the other way round."""
        if not self.segments:
            return BezierPath(self.start, [])
        ends = [self.start] + [end for _, _, end in self.segments]
        segments = []
        for i in range(len(self.segments) - 1, -1, -1):
            cp1, cp2, _ = self.segments[i]
            segments.append((cp2, cp1, ends[i]))
        return BezierPath(ends[-1], segments)

    def bounding_box(self) -> Bounds:
        pts = [self.start]
        for cp1, cp2, end in self.segments:
            pts.extend((cp1, cp2, end))
        return Bounds.from_points(pts)
