# PathGraph - Planar Path Arithmetic Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Geometric primitives used by the path graph.

Points, axis-aligned bounds and cubic Bezier curves. Curves are evaluated and
split with de Casteljau's algorithm so subdivision stays exact: both halves
of a split curve are themselves cubic Beziers.

Anything exposing ``start_point()``, ``control_points()`` and ``end_point()``
can be turned into a :class:`Curve` with :meth:`Curve.from_curve`; graph
edges use this to take part in intersection tests without copying.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import LINEAR_TOLERANCE, MAX_REFINE_STEPS


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, s: float) -> Point:
        return Point(self.x * s, self.y * s)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def dot(self, other: Point) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Point) -> float:
        return self.x * other.y - self.y * other.x

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_near_to(self, other: Point, max_distance: float) -> bool:
        return self.distance_to(other) <= max_distance

    @classmethod
    def from_tuple(cls, t) -> Point:
        return cls(float(t[0]), float(t[1]))


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_points(cls, points) -> Bounds:
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def size(self) -> float:
        """Length of the diagonal."""
        return math.hypot(self.width, self.height)

    def overlaps(self, other: Bounds, tolerance: float = 0.0) -> bool:
        """True if the boxes share any point, including touching edges.

        With a tolerance, boxes up to that far apart on each axis count too.
        """
        return (self.min_x <= other.max_x + tolerance and other.min_x <= self.max_x + tolerance
                and self.min_y <= other.max_y + tolerance and other.min_y <= self.max_y + tolerance)


# ---------------------------------------------------------------------------
# De Casteljau splitting
# ---------------------------------------------------------------------------

def _lerp(a: Point, b: Point, t: float) -> Point:
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def split_cubic(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> tuple[tuple[Point, Point, Point, Point], tuple[Point, Point, Point, Point]]:
    """Split cubic Bézier at parameter t. Returns (left_cps, right_cps) each as 4 Points."""
    q0 = _lerp(p0, p1, t)
    q1 = _lerp(p1, p2, t)
    q2 = _lerp(p2, p3, t)
    r0 = _lerp(q0, q1, t)
    r1 = _lerp(q1, q2, t)
    s = _lerp(r0, r1, t)
    return (p0, q0, r0, s), (s, r1, q2, p3)


@dataclass(frozen=True)
class Curve:
    """A cubic Bezier curve."""
    start: Point
    cp1: Point
    cp2: Point
    end: Point

    @classmethod
    def from_curve(cls, curve) -> Curve:
        """Copy any curve-like object (start_point/control_points/end_point)."""
        if isinstance(curve, Curve):
            return curve
        cp1, cp2 = curve.control_points()
        return cls(curve.start_point(), cp1, cp2, curve.end_point())

    @classmethod
    def line(cls, start: Point, end: Point) -> Curve:
        """A straight line with evenly spaced control points (linear in t)."""
        return cls(start, _lerp(start, end, 1.0 / 3.0), _lerp(start, end, 2.0 / 3.0), end)

    def start_point(self) -> Point:
        return self.start

    def end_point(self) -> Point:
        return self.end

    def control_points(self) -> tuple[Point, Point]:
        return (self.cp1, self.cp2)

    def points(self) -> tuple[Point, Point, Point, Point]:
        return (self.start, self.cp1, self.cp2, self.end)

    def point_at_pos(self, t: float) -> Point:
        mt = 1.0 - t
        a = mt * mt * mt
        b = 3.0 * mt * mt * t
        c = 3.0 * mt * t * t
        d = t * t * t
        return Point(
            a * self.start.x + b * self.cp1.x + c * self.cp2.x + d * self.end.x,
            a * self.start.y + b * self.cp1.y + c * self.cp2.y + d * self.end.y,
        )

    def tangent_at_pos(self, t: float) -> Point:
        """First derivative of the curve at t."""
        mt = 1.0 - t
        d1 = self.cp1 - self.start
        d2 = self.cp2 - self.cp1
        d3 = self.end - self.cp2
        return d1 * (3.0 * mt * mt) + d2 * (6.0 * mt * t) + d3 * (3.0 * t * t)

    def subdivide(self, t: float) -> tuple[Curve, Curve]:
        left, right = split_cubic(self.start, self.cp1, self.cp2, self.end, t)
        return Curve(*left), Curve(*right)

    def section(self, t0: float, t1: float) -> Curve:
        """The part of this curve between t0 and t1."""
        if t1 < 1.0:
            curve = self.subdivide(t1)[0]
        else:
            curve = self
        if t0 <= 0.0:
            return curve
        if t1 <= 0.0:
            return Curve(self.start, self.start, self.start, self.start)
        return curve.subdivide(t0 / t1)[1]

    def pos_for_point(self, point: Point, t: float) -> float:
        """Parameter of the point on the curve nearest to ``point``, searching from t.

        Gauss-Newton steps on the distance, clamped to [0, 1]. The starting
        value comes back unchanged if no step gets closer.
        """
        best_t = t
        best_distance = self.point_at_pos(t).distance_to(point)
        for _ in range(MAX_REFINE_STEPS):
            tangent = self.tangent_at_pos(t)
            len_sq = tangent.dot(tangent)
            if len_sq < 1e-24:
                break
            t = min(1.0, max(0.0, t - (self.point_at_pos(t) - point).dot(tangent) / len_sq))
            distance = self.point_at_pos(t).distance_to(point)
            if distance < best_distance:
                best_t, best_distance = t, distance
            if distance < 1e-14:
                break
        return best_t

    def fast_bounding_box(self) -> Bounds:
        """Bounds of the control polygon (always contains the curve)."""
        return Bounds.from_points(self.points())

    def is_linear(self, tolerance: float = LINEAR_TOLERANCE) -> bool:
        """True for a straight line whose parameter moves evenly along it."""
        return (self.cp1.is_near_to(_lerp(self.start, self.end, 1.0 / 3.0), tolerance)
                and self.cp2.is_near_to(_lerp(self.start, self.end, 2.0 / 3.0), tolerance))
